"""Application repository for database operations."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from recruitment_backend.models.application import Application
from .base import BaseRepository


class ApplicationRepository(BaseRepository[Application]):
    """Repository for Application model operations."""

    conflict_message = "You have already applied to this job posting"

    def __init__(self):
        super().__init__(Application)

    def get_for_pair(self, db: Session, job_posting_id: UUID, candidate_id: UUID) -> Optional[Application]:
        """The live application for a (posting, candidate) pair, if any."""
        return self.query(db).filter(
            Application.job_posting_id == job_posting_id,
            Application.candidate_id == candidate_id
        ).first()

    def search(
        self,
        db: Session,
        page: int,
        limit: int,
        job_posting_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        status: Optional[str] = None
    ) -> Tuple[List[Application], int]:
        """Filtered, paginated applications, most recently applied first."""
        query = self._apply_filters(
            self.query(db),
            {"job_posting_id": job_posting_id, "candidate_id": candidate_id, "status": status}
        )
        return self.paginate(query, page, limit, order_by=Application.applied_at.desc())

    def count_for_postings(self, db: Session, posting_ids: List[UUID], status: Optional[str] = None) -> int:
        if not posting_ids:
            return 0
        query = self.query(db).filter(Application.job_posting_id.in_(posting_ids))
        return self._apply_filters(query, {"status": status}).count()
