"""Interview model and its interviewer association."""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from recruitment_backend.core.base import Base, SoftDeleteMixin, TimestampMixin
from recruitment_backend.core.custom_types import GUID


class InterviewType(str, Enum):
    PHONE = "PHONE"
    VIDEO = "VIDEO"
    ONSITE = "ONSITE"


class InterviewStatus(str, Enum):
    """SCHEDULED is initial; COMPLETED and CANCELLED are terminal."""
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


interview_interviewers = Table(
    "interview_interviewers",
    Base.metadata,
    Column("interview_id", GUID(), ForeignKey("interviews.id"), primary_key=True),
    Column("account_id", GUID(), ForeignKey("accounts.id"), primary_key=True),
)


class Interview(TimestampMixin, SoftDeleteMixin, Base):
    """A scheduled meeting tied to one application."""

    __tablename__ = "interviews"

    id = Column(GUID(), primary_key=True, default=uuid4)
    application_id = Column(GUID(), ForeignKey("applications.id"), nullable=False, index=True)
    scheduled_at = Column(DateTime, nullable=False, index=True)
    duration = Column(Integer, nullable=False, default=60)
    type = Column(String(20), nullable=False)
    location = Column(String(500), nullable=False, default="")
    status = Column(String(20), nullable=False, default=InterviewStatus.SCHEDULED.value, index=True)
    notes = Column(Text, nullable=False, default="")

    # Relationships
    application = relationship("Application", back_populates="interviews")
    interviewers = relationship("Account", secondary=interview_interviewers, lazy="selectin")
    feedback = relationship("Feedback", back_populates="interview")

    def __repr__(self) -> str:
        return f"<Interview(id={self.id}, application_id={self.application_id}, status={self.status})>"

    @property
    def interviewer_ids(self):
        return [account.id for account in self.interviewers]

    @property
    def is_terminal(self) -> bool:
        return self.status in (InterviewStatus.COMPLETED.value, InterviewStatus.CANCELLED.value)
