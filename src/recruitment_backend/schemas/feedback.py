"""Pydantic schemas for interview feedback."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from recruitment_backend.models.feedback import Recommendation


class FeedbackCreate(BaseModel):
    interview_id: UUID
    rating: int = Field(..., ge=1, le=5)
    technical_skills: int = Field(..., ge=1, le=5)
    communication: int = Field(..., ge=1, le=5)
    culture_fit: int = Field(..., ge=1, le=5)
    comments: str = Field(..., min_length=10, max_length=5000)
    recommendation: Recommendation


class FeedbackUpdate(BaseModel):
    rating: Optional[int] = Field(None, ge=1, le=5)
    technical_skills: Optional[int] = Field(None, ge=1, le=5)
    communication: Optional[int] = Field(None, ge=1, le=5)
    culture_fit: Optional[int] = Field(None, ge=1, le=5)
    comments: Optional[str] = Field(None, min_length=10, max_length=5000)
    recommendation: Optional[Recommendation] = None


class FeedbackResponse(BaseModel):
    id: UUID
    interview_id: UUID
    author_id: UUID
    rating: int
    technical_skills: int
    communication: int
    culture_fit: int
    comments: str
    recommendation: Recommendation
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FeedbackSummary(BaseModel):
    """Average overall rating for one interview."""

    interview_id: UUID
    average_rating: float
    count: int
