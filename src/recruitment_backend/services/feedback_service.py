"""Interview feedback service."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal, ensure_owner, require_role
from recruitment_backend.core.error_handling import ConflictError, NotFoundError
from recruitment_backend.models.account import Role
from recruitment_backend.models.feedback import Feedback
from recruitment_backend.repositories.feedback import FeedbackRepository
from recruitment_backend.repositories.interview import InterviewRepository
from recruitment_backend.schemas.feedback import FeedbackCreate, FeedbackSummary, FeedbackUpdate

logger = structlog.get_logger(__name__)


class FeedbackService:
    """Feedback is HR-only; each interviewer may leave one live entry per interview."""

    def __init__(self):
        self.repository = FeedbackRepository()
        self.interviews = InterviewRepository()

    def submit(self, db: Session, principal: Principal, data: FeedbackCreate) -> Feedback:
        """Record the caller's feedback for an interview.

        Raises:
            NotFoundError: If the interview does not exist
            ForbiddenError: If the caller is not on the interview panel
            ConflictError: If the caller already left feedback for it
        """
        principal = require_role(principal, Role.HR)

        interview = self.interviews.get_by_id(db, data.interview_id)
        if interview is None:
            raise NotFoundError("Interview")

        ensure_owner(
            principal,
            interview.interviewer_ids,
            "Only interviewers can submit feedback for this interview"
        )

        if self.repository.get_for_author(db, interview.id, principal.account_id) is not None:
            raise ConflictError(FeedbackRepository.conflict_message)

        fields = data.model_dump(exclude={"interview_id"})
        fields["recommendation"] = data.recommendation.value
        feedback = self.repository.create(
            db,
            interview_id=interview.id,
            author_id=principal.account_id,
            **fields
        )

        logger.info(
            "Feedback submitted",
            feedback_id=str(feedback.id),
            interview_id=str(interview.id),
            author_id=str(principal.account_id),
            recommendation=feedback.recommendation
        )
        return feedback

    def list_for_interview(self, db: Session, principal: Principal, interview_id: UUID) -> List[Feedback]:
        require_role(principal, Role.HR)
        return self.repository.list_for_interview(db, interview_id)

    def get(self, db: Session, principal: Principal, feedback_id: UUID) -> Feedback:
        require_role(principal, Role.HR)
        return self._get(db, feedback_id)

    def update(self, db: Session, principal: Principal, feedback_id: UUID, data: FeedbackUpdate) -> Feedback:
        principal = require_role(principal, Role.HR)
        feedback = self._get(db, feedback_id)
        ensure_owner(principal, [feedback.author_id], "You can only update your own feedback")

        fields = data.model_dump(exclude_unset=True)
        if data.recommendation is not None:
            fields["recommendation"] = data.recommendation.value
        return self.repository.update(db, feedback, **fields)

    def delete(self, db: Session, principal: Principal, feedback_id: UUID) -> None:
        principal = require_role(principal, Role.HR)
        feedback = self._get(db, feedback_id)
        ensure_owner(principal, [feedback.author_id], "You can only delete your own feedback")
        self.repository.soft_delete(db, feedback)

    def summary(self, db: Session, principal: Principal, interview_id: UUID) -> FeedbackSummary:
        """Average overall rating, rounded to one decimal; 0 without feedback."""
        require_role(principal, Role.HR)
        average, count = self.repository.rating_stats(db, interview_id)
        return FeedbackSummary(
            interview_id=interview_id,
            average_rating=round(float(average), 1) if average is not None else 0.0,
            count=count
        )

    def _get(self, db: Session, feedback_id: UUID) -> Feedback:
        feedback = self.repository.get_by_id(db, feedback_id)
        if feedback is None:
            raise NotFoundError("Feedback")
        return feedback
