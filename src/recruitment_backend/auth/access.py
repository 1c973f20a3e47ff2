"""Role-tagged principals and the authorization checks built on them.

A verified caller is represented by one of two principal variants. Code
that behaves differently per role asks the principal instead of comparing
role strings.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Optional
from uuid import UUID

from recruitment_backend.core.error_handling import AuthenticationError, ForbiddenError
from recruitment_backend.core.logging import error_logger
from recruitment_backend.models.account import Account, Role
from recruitment_backend.models.job_posting import PostingStatus


@dataclass(frozen=True)
class Principal(ABC):
    """Verified caller identity."""

    role: ClassVar[Role]

    account_id: UUID
    email: str
    account: Account = field(repr=False, compare=False)

    @abstractmethod
    def visible_posting_status(self, requested: Optional[PostingStatus]) -> Optional[PostingStatus]:
        """Posting status filter this caller may list with."""
        raise NotImplementedError

    @abstractmethod
    def can_view_posting_status(self, status: str) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class HRPrincipal(Principal):
    """Recruiter: manages postings, reviews applications, runs interviews."""

    role: ClassVar[Role] = Role.HR

    def visible_posting_status(self, requested: Optional[PostingStatus]) -> Optional[PostingStatus]:
        return requested or PostingStatus.OPEN

    def can_view_posting_status(self, status: str) -> bool:
        return True


@dataclass(frozen=True)
class CandidatePrincipal(Principal):
    """Job seeker: discovers open postings and manages own applications."""

    role: ClassVar[Role] = Role.CANDIDATE

    def visible_posting_status(self, requested: Optional[PostingStatus]) -> Optional[PostingStatus]:
        return PostingStatus.OPEN

    def can_view_posting_status(self, status: str) -> bool:
        return status == PostingStatus.OPEN.value


_VARIANTS = {
    Role.HR.value: HRPrincipal,
    Role.CANDIDATE.value: CandidatePrincipal,
}


def principal_for(account: Account) -> Principal:
    """Wrap an account in the principal variant matching its role."""
    variant = _VARIANTS.get(Role(account.role).value)
    return variant(account_id=account.id, email=account.email, account=account)


def require_authenticated(principal: Optional[Principal]) -> Principal:
    """Fail with Unauthenticated when no verified identity is attached."""
    if principal is None:
        raise AuthenticationError("Not authenticated")
    return principal


def require_role(principal: Optional[Principal], *roles: Role) -> Principal:
    """Fail with Forbidden unless the caller has one of ``roles``."""
    principal = require_authenticated(principal)
    if principal.role not in roles:
        allowed = ", ".join(role.value for role in roles)
        error_logger.log_access_denied(
            "role",
            account_id=str(principal.account_id),
            role=principal.role.value,
            allowed=allowed
        )
        raise ForbiddenError(f"This action requires role: {allowed}")
    return principal


def ensure_owner(principal: Principal, owner_ids: Iterable[UUID], message: str) -> None:
    """Fail with Forbidden unless the caller is one of ``owner_ids``."""
    if principal.account_id not in set(owner_ids):
        error_logger.log_access_denied(
            "ownership",
            account_id=str(principal.account_id),
            role=principal.role.value,
            message=message
        )
        raise ForbiddenError(message)
