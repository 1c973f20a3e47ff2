"""Interview feedback model."""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from recruitment_backend.core.base import Base, SoftDeleteMixin, TimestampMixin
from recruitment_backend.core.custom_types import GUID


class Recommendation(str, Enum):
    HIRE = "HIRE"
    NO_HIRE = "NO_HIRE"
    MAYBE = "MAYBE"


class Feedback(TimestampMixin, SoftDeleteMixin, Base):
    """An interviewer's structured rating of an interview, one per author."""

    __tablename__ = "feedback"
    __table_args__ = (
        Index(
            "uq_feedback_interview_author_active",
            "interview_id",
            "author_id",
            unique=True,
            sqlite_where=text("NOT is_deleted"),
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    interview_id = Column(GUID(), ForeignKey("interviews.id"), nullable=False, index=True)
    author_id = Column(GUID(), ForeignKey("accounts.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    technical_skills = Column(Integer, nullable=False)
    communication = Column(Integer, nullable=False)
    culture_fit = Column(Integer, nullable=False)
    comments = Column(Text, nullable=False)
    recommendation = Column(String(20), nullable=False)

    # Relationships
    interview = relationship("Interview", back_populates="feedback")
    author = relationship("Account")

    def __repr__(self) -> str:
        return f"<Feedback(id={self.id}, interview_id={self.interview_id}, author_id={self.author_id})>"
