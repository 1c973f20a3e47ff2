"""Notification model."""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Boolean, Column, ForeignKey, String
from sqlalchemy.orm import relationship

from recruitment_backend.core.base import Base, SoftDeleteMixin, TimestampMixin
from recruitment_backend.core.custom_types import GUID


class NotificationType(str, Enum):
    APPLICATION_RECEIVED = "APPLICATION_RECEIVED"
    APPLICATION_STATUS_UPDATED = "APPLICATION_STATUS_UPDATED"
    INTERVIEW_SCHEDULED = "INTERVIEW_SCHEDULED"
    INTERVIEW_REMINDER = "INTERVIEW_REMINDER"
    FEEDBACK_RECEIVED = "FEEDBACK_RECEIVED"


class Notification(TimestampMixin, SoftDeleteMixin, Base):
    """Recipient-addressed message created as a side effect of a transition."""

    __tablename__ = "notifications"

    id = Column(GUID(), primary_key=True, default=uuid4)
    recipient_id = Column(GUID(), ForeignKey("accounts.id"), nullable=False, index=True)
    type = Column(String(40), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(String(500), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False, index=True)
    related_application_id = Column(GUID(), ForeignKey("applications.id"), nullable=True)
    related_job_posting_id = Column(GUID(), ForeignKey("job_postings.id"), nullable=True)
    related_interview_id = Column(GUID(), ForeignKey("interviews.id"), nullable=True)

    recipient = relationship("Account")

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, recipient_id={self.recipient_id}, type={self.type})>"
