"""Pydantic schemas for job postings."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from recruitment_backend.models.job_posting import JobPosting, PostingStatus, PostingType


class Salary(BaseModel):
    """Salary band; max may equal min but never be below it."""

    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def check_range(self) -> "Salary":
        if self.max < self.min:
            raise ValueError("Maximum salary must be greater than or equal to minimum salary")
        return self


def _check_requirements(v: List[str]) -> List[str]:
    cleaned = [item.strip() for item in v if item and item.strip()]
    if not cleaned:
        raise ValueError("At least one requirement is needed")
    return cleaned


class JobPostingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=10000)
    requirements: List[str] = Field(..., min_length=1)
    salary: Salary
    location: str = Field(..., min_length=1, max_length=200)
    type: PostingType
    department: str = Field(..., min_length=1, max_length=100)

    @field_validator("requirements")
    @classmethod
    def validate_requirements(cls, v: List[str]) -> List[str]:
        return _check_requirements(v)


class JobPostingCreate(JobPostingBase):
    """Schema for creating a job posting."""

    status: PostingStatus = PostingStatus.DRAFT


class JobPostingUpdate(BaseModel):
    """Schema for updating a job posting; a salary must be given whole."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=10000)
    requirements: Optional[List[str]] = Field(None, min_length=1)
    salary: Optional[Salary] = None
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[PostingType] = None
    status: Optional[PostingStatus] = None
    department: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("requirements")
    @classmethod
    def validate_requirements(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return _check_requirements(v)


class JobPostingResponse(JobPostingBase):
    """Schema for job posting response."""

    id: UUID
    status: PostingStatus
    created_by_id: UUID
    application_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, posting: JobPosting, application_count: int = 0) -> "JobPostingResponse":
        return cls(
            id=posting.id,
            title=posting.title,
            description=posting.description,
            requirements=posting.requirements,
            salary=Salary(
                min=posting.salary_min,
                max=posting.salary_max,
                currency=posting.salary_currency,
            ),
            location=posting.location,
            type=posting.type,
            status=posting.status,
            department=posting.department,
            created_by_id=posting.created_by_id,
            application_count=application_count,
            created_at=posting.created_at,
            updated_at=posting.updated_at,
        )
