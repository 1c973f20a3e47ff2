"""Account model for HR managers and candidates."""

from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, Index, String, text
from sqlalchemy.orm import relationship

from recruitment_backend.core.base import Base, SoftDeleteMixin, TimestampMixin
from recruitment_backend.core.custom_types import GUID, StringList


class Role(str, Enum):
    """Account role tag."""
    HR = "HR"
    CANDIDATE = "CANDIDATE"


class Account(TimestampMixin, SoftDeleteMixin, Base):
    """Identity with a role tag; HR accounts own postings, candidates own applications."""

    __tablename__ = "accounts"
    __table_args__ = (
        Index(
            "uq_accounts_email_active",
            "email",
            unique=True,
            sqlite_where=text("NOT is_deleted"),
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    email = Column(String(255), nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    role = Column(String(20), nullable=False, index=True)
    phone = Column(String(50), nullable=False, default="")
    avatar = Column(String(500), nullable=False, default="")
    skills = Column(StringList(), nullable=False, default=list)
    company = Column(String(255), nullable=False, default="")
    position = Column(String(255), nullable=False, default="")

    # Relationships
    job_postings = relationship("JobPosting", back_populates="creator")
    applications = relationship("Application", back_populates="candidate")

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email='{self.email}', role={self.role})>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
