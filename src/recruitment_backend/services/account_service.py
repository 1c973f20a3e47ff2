"""Account registration, login and profile management."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal, require_authenticated
from recruitment_backend.auth.utils import authenticate_account, get_password_hash, issue_token
from recruitment_backend.core.config import settings
from recruitment_backend.core.error_handling import AuthenticationError, ConflictError, NotFoundError
from recruitment_backend.models.account import Account
from recruitment_backend.repositories.account import AccountRepository
from recruitment_backend.schemas.account import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    AuthResponse,
    LoginRequest,
)
from recruitment_backend.schemas.common import clamp_limit

logger = structlog.get_logger(__name__)


class AccountService:
    """Service for account operations."""

    def __init__(self):
        self.repository = AccountRepository()

    def _auth_response(self, account: Account) -> AuthResponse:
        token = issue_token(account)
        return AuthResponse(
            access_token=token.access_token,
            token_type=token.token_type,
            expires_in=token.expires_in,
            account=AccountResponse.model_validate(account)
        )

    def register(self, db: Session, data: AccountCreate) -> AuthResponse:
        """Create an account and sign it in.

        Raises:
            ConflictError: If a live account already uses the email
        """
        if self.repository.get_by_email(db, data.email) is not None:
            raise ConflictError(AccountRepository.conflict_message)

        account = self.repository.create(
            db,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            role=data.role.value,
            phone=data.phone,
            skills=data.skills,
            company=data.company,
            position=data.position
        )

        logger.info("Account registered", account_id=str(account.id), role=account.role)
        return self._auth_response(account)

    def login(self, db: Session, data: LoginRequest) -> AuthResponse:
        account = authenticate_account(db, data.email, data.password)
        if account is None:
            raise AuthenticationError("Invalid email or password")
        return self._auth_response(account)

    def get(self, db: Session, principal: Principal, account_id: UUID) -> Account:
        require_authenticated(principal)
        account = self.repository.get_by_id(db, account_id)
        if account is None:
            raise NotFoundError("User")
        return account

    def list_all(
        self,
        db: Session,
        principal: Principal,
        role: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Account], int, int]:
        """Accounts filtered by role and name/email search.

        Returns:
            Tuple of (accounts, total, clamped limit)
        """
        require_authenticated(principal)
        limit = clamp_limit(limit, settings.max_user_page_size)
        accounts, total = self.repository.search(db, role=role, search=search, limit=limit, offset=max(offset, 0))
        return accounts, total, limit

    def update_profile(self, db: Session, principal: Principal, data: AccountUpdate) -> Account:
        principal = require_authenticated(principal)
        account = self.repository.get_by_id(db, principal.account_id)
        if account is None:
            raise NotFoundError("User")
        return self.repository.update(db, account, **data.model_dump(exclude_unset=True))

    def delete(self, db: Session, principal: Principal) -> None:
        """Soft-delete the caller's account; its email becomes free again."""
        principal = require_authenticated(principal)
        account = self.repository.get_by_id(db, principal.account_id)
        if account is None:
            raise NotFoundError("User")
        self.repository.soft_delete(db, account)
        logger.info("Account deleted", account_id=str(account.id))
