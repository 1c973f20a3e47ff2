"""Feedback repository for database operations."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from recruitment_backend.models.feedback import Feedback
from .base import BaseRepository


class FeedbackRepository(BaseRepository[Feedback]):
    """Repository for Feedback model operations."""

    conflict_message = "You have already submitted feedback for this interview"

    def __init__(self):
        super().__init__(Feedback)

    def list_for_interview(self, db: Session, interview_id: UUID) -> List[Feedback]:
        return (
            self.query(db)
            .filter(Feedback.interview_id == interview_id)
            .order_by(Feedback.created_at.asc())
            .all()
        )

    def get_for_author(self, db: Session, interview_id: UUID, author_id: UUID) -> Optional[Feedback]:
        return self.query(db).filter(
            Feedback.interview_id == interview_id,
            Feedback.author_id == author_id
        ).first()

    def rating_stats(self, db: Session, interview_id: UUID):
        """Return (average overall rating or None, number of feedback rows)."""
        return (
            db.query(func.avg(Feedback.rating), func.count(Feedback.id))
            .filter(Feedback.interview_id == interview_id, Feedback.is_deleted.is_(False))
            .one()
        )
