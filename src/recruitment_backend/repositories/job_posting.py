"""Job posting repository for database operations."""

from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from recruitment_backend.models.application import Application
from recruitment_backend.models.job_posting import JobPosting
from .base import BaseRepository


class JobPostingRepository(BaseRepository[JobPosting]):
    """Repository for JobPosting model operations."""

    def __init__(self):
        super().__init__(JobPosting)

    def search(
        self,
        db: Session,
        page: int,
        limit: int,
        status: Optional[str] = None,
        type: Optional[str] = None,
        department: Optional[str] = None,
        search: Optional[str] = None,
        created_by_id: Optional[UUID] = None
    ) -> Tuple[List[JobPosting], int]:
        """Filtered, paginated posting list, newest first.

        ``search`` matches title, description and department.
        """
        query = self._apply_filters(
            self.query(db),
            {"status": status, "type": type, "department": department, "created_by_id": created_by_id}
        )

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    JobPosting.title.ilike(pattern),
                    JobPosting.description.ilike(pattern),
                    JobPosting.department.ilike(pattern),
                )
            )

        return self.paginate(query, page, limit)

    def application_counts(self, db: Session, posting_ids: List[UUID]) -> Dict[UUID, int]:
        """Live application count for each posting id."""
        if not posting_ids:
            return {}
        rows = (
            db.query(Application.job_posting_id, func.count(Application.id))
            .filter(
                Application.job_posting_id.in_(posting_ids),
                Application.is_deleted.is_(False),
            )
            .group_by(Application.job_posting_id)
            .all()
        )
        counts = {posting_id: 0 for posting_id in posting_ids}
        counts.update({posting_id: count for posting_id, count in rows})
        return counts
