"""Job posting model."""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from recruitment_backend.core.base import Base, SoftDeleteMixin, TimestampMixin
from recruitment_backend.core.custom_types import GUID, StringList


class PostingStatus(str, Enum):
    """Visibility gate; only OPEN postings are discoverable by candidates."""
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    DRAFT = "DRAFT"


class PostingType(str, Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    REMOTE = "REMOTE"


class JobPosting(TimestampMixin, SoftDeleteMixin, Base):
    """A vacancy created by exactly one HR account."""

    __tablename__ = "job_postings"

    id = Column(GUID(), primary_key=True, default=uuid4)
    title = Column(String(200), nullable=False, index=True)
    description = Column(Text, nullable=False)
    requirements = Column(StringList(), nullable=False, default=list)
    salary_min = Column(Float, nullable=False)
    salary_max = Column(Float, nullable=False)
    salary_currency = Column(String(3), nullable=False, default="USD")
    location = Column(String(200), nullable=False)
    type = Column(String(20), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=PostingStatus.DRAFT.value, index=True)
    department = Column(String(100), nullable=False)
    created_by_id = Column(GUID(), ForeignKey("accounts.id"), nullable=False, index=True)

    # Relationships
    creator = relationship("Account", back_populates="job_postings")
    applications = relationship("Application", back_populates="job_posting")

    def __repr__(self) -> str:
        return f"<JobPosting(id={self.id}, title='{self.title}', status={self.status})>"

    @property
    def is_open(self) -> bool:
        return self.status == PostingStatus.OPEN.value and not self.is_deleted
