"""Pydantic schemas for applications."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from recruitment_backend.models.application import ApplicationStatus
from .interview import InterviewResponse


class ApplicationCreate(BaseModel):
    """Schema for applying to a job posting."""

    job_posting_id: UUID
    cover_letter: str = Field(default="", max_length=5000)
    resume: str = Field(..., min_length=1, max_length=500, description="Resume file reference")


class ApplicationUpdate(BaseModel):
    """Schema for HR updates to an application."""

    status: Optional[ApplicationStatus] = None
    notes: Optional[str] = Field(None, max_length=2000)


class ApplicationResponse(BaseModel):
    """Schema for application response."""

    id: UUID
    job_posting_id: UUID
    candidate_id: UUID
    status: ApplicationStatus
    cover_letter: str
    resume: str
    notes: str
    applied_at: datetime
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationDetail(ApplicationResponse):
    """Application with its live interviews, earliest first."""

    interviews: List[InterviewResponse] = Field(default_factory=list)
