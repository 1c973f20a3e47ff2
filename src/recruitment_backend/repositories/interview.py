"""Interview repository for database operations."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from recruitment_backend.models.application import Application
from recruitment_backend.models.interview import Interview, InterviewStatus, interview_interviewers
from .base import BaseRepository


class InterviewRepository(BaseRepository[Interview]):
    """Repository for Interview model operations."""

    def __init__(self):
        super().__init__(Interview)

    def list_for_application(self, db: Session, application_id: UUID) -> List[Interview]:
        """Live interviews of one application, earliest first."""
        return (
            self.query(db)
            .filter(Interview.application_id == application_id)
            .order_by(Interview.scheduled_at.asc())
            .all()
        )

    def list_filtered(self, db: Session, application_id: Optional[UUID] = None) -> List[Interview]:
        query = self._apply_filters(self.query(db), {"application_id": application_id})
        return query.order_by(Interview.scheduled_at.asc()).all()

    def list_for_interviewer(
        self,
        db: Session,
        account_id: UUID,
        status: Optional[str] = InterviewStatus.SCHEDULED.value,
        after: Optional[datetime] = None
    ) -> List[Interview]:
        """Interviews where ``account_id`` is on the panel."""
        query = (
            self.query(db)
            .join(interview_interviewers, interview_interviewers.c.interview_id == Interview.id)
            .filter(interview_interviewers.c.account_id == account_id)
        )
        query = self._apply_filters(query, {"status": status})
        if after is not None:
            query = query.filter(Interview.scheduled_at >= after)
        return query.order_by(Interview.scheduled_at.asc()).all()

    def list_for_candidate(
        self,
        db: Session,
        candidate_id: UUID,
        status: Optional[str] = None,
        after: Optional[datetime] = None
    ) -> List[Interview]:
        """Interviews attached to the candidate's live applications."""
        query = (
            self.query(db)
            .join(Application, Application.id == Interview.application_id)
            .filter(
                Application.candidate_id == candidate_id,
                Application.is_deleted.is_(False),
            )
        )
        query = self._apply_filters(query, {"status": status})
        if after is not None:
            query = query.filter(Interview.scheduled_at >= after)
        return query.order_by(Interview.scheduled_at.asc()).all()
