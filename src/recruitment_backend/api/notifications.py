"""Notification API endpoints; every route is scoped to the caller."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal
from recruitment_backend.core.database import get_db
from recruitment_backend.core.config import settings
from recruitment_backend.schemas.common import MessageResponse, Page, build_page, clamp_limit
from recruitment_backend.schemas.notification import (
    MarkAllReadResponse,
    NotificationCount,
    NotificationResponse,
)
from recruitment_backend.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=Page[NotificationResponse])
async def list_notifications(
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Caller's notifications, newest first."""
    items, total = NotificationService().list_for(
        db, principal, limit=limit, offset=offset, unread_only=unread_only
    )
    limit = clamp_limit(limit, settings.max_page_size)
    return build_page(
        [NotificationResponse.model_validate(n) for n in items],
        total,
        offset // limit + 1,
        limit
    )


@router.get("/count", response_model=NotificationCount)
async def notification_count(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return NotificationService().counts(db, principal)


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return MarkAllReadResponse(modified=NotificationService().mark_all_read(db, principal))


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return NotificationService().mark_read(db, principal, notification_id)


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    NotificationService().delete(db, principal, notification_id)
    return MessageResponse(message="Notification deleted")
