"""Pydantic schemas for interviews."""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from recruitment_backend.models.interview import InterviewStatus, InterviewType


def _naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class InterviewCreate(BaseModel):
    """Schema for scheduling an interview."""

    application_id: UUID
    scheduled_at: datetime
    duration: int = Field(default=60, ge=15, le=480, description="Minutes")
    type: InterviewType
    location: str = Field(default="", max_length=500)
    interviewer_ids: List[UUID] = Field(..., min_length=1)
    notes: str = Field(default="", max_length=2000)

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, v):
        return _naive_utc(v)


class InterviewUpdate(BaseModel):
    """Schema for updating an interview; only provided fields change."""

    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(None, ge=15, le=480)
    type: Optional[InterviewType] = None
    location: Optional[str] = Field(None, max_length=500)
    status: Optional[InterviewStatus] = None
    interviewer_ids: Optional[List[UUID]] = Field(None, min_length=1)
    notes: Optional[str] = Field(None, max_length=2000)

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, v):
        return _naive_utc(v)


class InterviewResponse(BaseModel):
    """Schema for interview response."""

    id: UUID
    application_id: UUID
    scheduled_at: datetime
    duration: int
    type: InterviewType
    location: str
    status: InterviewStatus
    interviewer_ids: List[UUID]
    notes: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
