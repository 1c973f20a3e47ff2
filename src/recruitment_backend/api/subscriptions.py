"""Server-Sent Events endpoints for real-time subscriptions.

Each endpoint subscribes to one bus topic, optionally narrowed to a single
posting, candidate or application. The caller's identity comes from the
``token`` query parameter, read once when the connection opens.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
import structlog

from recruitment_backend.auth.access import Principal, ensure_owner
from recruitment_backend.auth.dependencies import get_event_bus, get_subscription_principal
from recruitment_backend.core.event_bus import EventBus, Topic
from recruitment_backend.core.sse_manager import SSEManager
from recruitment_backend.core.subscriptions import scoped_stream

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])

sse_manager = SSEManager()


def _open(request: Request, bus: EventBus, topic: Topic, scope: Optional[UUID], principal: Principal):
    stream = scoped_stream(bus, topic, scope)
    logger.info(
        "Subscription opened",
        topic=topic.value,
        scope=str(scope) if scope else None,
        account_id=str(principal.account_id)
    )
    return sse_manager.create_event_stream(request, stream, topic, principal.account_id)


@router.get("/application-created")
async def application_created(
    request: Request,
    posting_id: Optional[UUID] = Query(None),
    principal: Principal = Depends(get_subscription_principal),
    bus: EventBus = Depends(get_event_bus)
):
    """New applications, optionally for one posting."""
    return _open(request, bus, Topic.APPLICATION_CREATED, posting_id, principal)


@router.get("/application-status-changed")
async def application_status_changed(
    request: Request,
    candidate_id: Optional[UUID] = Query(None),
    principal: Principal = Depends(get_subscription_principal),
    bus: EventBus = Depends(get_event_bus)
):
    """Application status changes, optionally for one candidate."""
    return _open(request, bus, Topic.APPLICATION_STATUS_CHANGED, candidate_id, principal)


@router.get("/interview-scheduled")
async def interview_scheduled(
    request: Request,
    application_id: Optional[UUID] = Query(None),
    principal: Principal = Depends(get_subscription_principal),
    bus: EventBus = Depends(get_event_bus)
):
    """Scheduled interviews, optionally for one application."""
    return _open(request, bus, Topic.INTERVIEW_SCHEDULED, application_id, principal)


@router.get("/notifications")
async def notification_received(
    request: Request,
    recipient_id: UUID = Query(...),
    principal: Principal = Depends(get_subscription_principal),
    bus: EventBus = Depends(get_event_bus)
):
    """The caller's own notifications; ``recipient_id`` must be the caller."""
    ensure_owner(principal, [recipient_id], "You can only subscribe to your own notifications")
    return _open(request, bus, Topic.NOTIFICATION_RECEIVED, recipient_id, principal)
