"""Pydantic schemas for notifications."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from recruitment_backend.models.notification import NotificationType


class NotificationResponse(BaseModel):
    id: UUID
    recipient_id: UUID
    type: NotificationType
    title: str
    message: str
    is_read: bool
    related_application_id: Optional[UUID] = None
    related_job_posting_id: Optional[UUID] = None
    related_interview_id: Optional[UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationCount(BaseModel):
    total: int
    unread: int


class MarkAllReadResponse(BaseModel):
    modified: int
