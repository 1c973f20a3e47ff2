"""Job posting service."""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal, ensure_owner, require_authenticated, require_role
from recruitment_backend.core.config import settings
from recruitment_backend.core.error_handling import NotFoundError
from recruitment_backend.models.account import Role
from recruitment_backend.models.job_posting import JobPosting, PostingStatus, PostingType
from recruitment_backend.repositories.job_posting import JobPostingRepository
from recruitment_backend.schemas.common import clamp_limit
from recruitment_backend.schemas.job_posting import JobPostingCreate, JobPostingResponse, JobPostingUpdate

logger = structlog.get_logger(__name__)


class JobPostingService:
    """Service for job posting operations."""

    def __init__(self):
        self.repository = JobPostingRepository()

    def create(self, db: Session, principal: Principal, data: JobPostingCreate) -> JobPosting:
        principal = require_role(principal, Role.HR)
        posting = self.repository.create(
            db,
            title=data.title,
            description=data.description,
            requirements=data.requirements,
            salary_min=data.salary.min,
            salary_max=data.salary.max,
            salary_currency=data.salary.currency,
            location=data.location,
            type=data.type.value,
            status=data.status.value,
            department=data.department,
            created_by_id=principal.account_id
        )
        logger.info("Job posting created", job_posting_id=str(posting.id), status=posting.status)
        return posting

    def get(self, db: Session, principal: Principal, posting_id: UUID) -> JobPosting:
        """Posting by id; candidates only see OPEN postings."""
        principal = require_authenticated(principal)
        posting = self.repository.get_by_id(db, posting_id)
        if posting is None or not principal.can_view_posting_status(posting.status):
            raise NotFoundError("Job posting")
        return posting

    def list_all(
        self,
        db: Session,
        principal: Principal,
        page: int = 1,
        limit: int = 10,
        status: Optional[PostingStatus] = None,
        type: Optional[PostingType] = None,
        department: Optional[str] = None,
        search: Optional[str] = None
    ) -> Tuple[List[JobPosting], int, int]:
        """Filtered postings; the status filter depends on the caller's role.

        Returns:
            Tuple of (postings, total, clamped limit)
        """
        principal = require_authenticated(principal)
        limit = clamp_limit(limit, settings.max_page_size)
        status = principal.visible_posting_status(status)
        items, total = self.repository.search(
            db, page, limit,
            status=status.value if status else None,
            type=type.value if type else None,
            department=department,
            search=search
        )
        return items, total, limit

    def list_mine(
        self,
        db: Session,
        principal: Principal,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[JobPosting], int, int]:
        """Every posting the calling HR account created, any status."""
        principal = require_role(principal, Role.HR)
        limit = clamp_limit(limit, settings.max_page_size)
        items, total = self.repository.search(db, page, limit, created_by_id=principal.account_id)
        return items, total, limit

    def update(self, db: Session, principal: Principal, posting_id: UUID, data: JobPostingUpdate) -> JobPosting:
        principal = require_role(principal, Role.HR)
        posting = self._get(db, posting_id)
        ensure_owner(principal, [posting.created_by_id], "You can only update your own job postings")

        fields = data.model_dump(exclude_unset=True, exclude={"salary", "type", "status"})
        if data.salary is not None:
            fields.update(
                salary_min=data.salary.min,
                salary_max=data.salary.max,
                salary_currency=data.salary.currency
            )
        if data.type is not None:
            fields["type"] = data.type.value
        if data.status is not None:
            fields["status"] = data.status.value

        return self.repository.update(db, posting, **fields)

    def delete(self, db: Session, principal: Principal, posting_id: UUID) -> None:
        principal = require_role(principal, Role.HR)
        posting = self._get(db, posting_id)
        ensure_owner(principal, [posting.created_by_id], "You can only delete your own job postings")
        self.repository.soft_delete(db, posting)
        logger.info("Job posting deleted", job_posting_id=str(posting_id))

    def to_responses(self, db: Session, postings: List[JobPosting]) -> List[JobPostingResponse]:
        """Attach live application counts to each posting."""
        counts: Dict[UUID, int] = self.repository.application_counts(db, [p.id for p in postings])
        return [JobPostingResponse.from_model(p, counts.get(p.id, 0)) for p in postings]

    def to_response(self, db: Session, posting: JobPosting) -> JobPostingResponse:
        return self.to_responses(db, [posting])[0]

    def _get(self, db: Session, posting_id: UUID) -> JobPosting:
        posting = self.repository.get_by_id(db, posting_id)
        if posting is None:
            raise NotFoundError("Job posting")
        return posting
