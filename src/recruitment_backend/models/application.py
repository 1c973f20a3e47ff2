"""Application model linking candidates to job postings."""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import relationship

from recruitment_backend.core.base import Base, SoftDeleteMixin, TimestampMixin, utcnow
from recruitment_backend.core.custom_types import GUID


class ApplicationStatus(str, Enum):
    """Application pipeline statuses."""
    PENDING = "PENDING"
    REVIEWING = "REVIEWING"
    INTERVIEW = "INTERVIEW"
    OFFERED = "OFFERED"
    REJECTED = "REJECTED"
    ACCEPTED = "ACCEPTED"


class Application(TimestampMixin, SoftDeleteMixin, Base):
    """A candidate's submission against a job posting."""

    __tablename__ = "applications"
    __table_args__ = (
        Index(
            "uq_applications_posting_candidate_active",
            "job_posting_id",
            "candidate_id",
            unique=True,
            sqlite_where=text("NOT is_deleted"),
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    job_posting_id = Column(GUID(), ForeignKey("job_postings.id"), nullable=False, index=True)
    candidate_id = Column(GUID(), ForeignKey("accounts.id"), nullable=False, index=True)
    status = Column(String(20), default=ApplicationStatus.PENDING.value, nullable=False, index=True)
    cover_letter = Column(Text, nullable=False, default="")
    resume = Column(String(500), nullable=False)
    notes = Column(Text, nullable=False, default="")
    applied_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    job_posting = relationship("JobPosting", back_populates="applications")
    candidate = relationship("Account", back_populates="applications")
    interviews = relationship("Interview", back_populates="application")

    def __repr__(self) -> str:
        return (
            f"<Application(id={self.id}, candidate_id={self.candidate_id}, "
            f"job_posting_id={self.job_posting_id}, status={self.status})>"
        )
