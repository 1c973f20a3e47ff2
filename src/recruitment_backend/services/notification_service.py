"""Notification creation and recipient-scoped notification management."""

from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal, ensure_owner
from recruitment_backend.core.config import settings
from recruitment_backend.core.error_handling import NotFoundError
from recruitment_backend.core.event_publisher import EventPublisher
from recruitment_backend.models.notification import Notification, NotificationType
from recruitment_backend.repositories.notification import NotificationRepository
from recruitment_backend.schemas.common import clamp_limit, to_payload
from recruitment_backend.schemas.notification import NotificationCount, NotificationResponse
from .fsm_service import FSMService

logger = structlog.get_logger(__name__)


def format_interview_time(moment: datetime) -> str:
    """Render a timestamp like ``Mon, Nov 2, 02:00 PM``."""
    return f"{moment:%a, %b} {moment.day}, {moment:%I:%M %p}"


def application_received_message(candidate_name: str, posting_title: str) -> str:
    return f"{candidate_name} applied for {posting_title}"


def status_updated_message(posting_title: Optional[str], status: str) -> str:
    return f'Your application for {posting_title or "the position"} is now "{FSMService.label_for(status)}"'


def interview_scheduled_message(posting_title: Optional[str], scheduled_at: datetime) -> str:
    return f"Interview for {posting_title or 'your application'} scheduled for {format_interview_time(scheduled_at)}"


class NotificationService:
    """Creates notifications as side effects and serves them to recipients.

    Notifications are never created by a client request; ``notify`` is
    called by the services that own a status transition.
    """

    def __init__(self, publisher: Optional[EventPublisher] = None):
        self.repository = NotificationRepository()
        self.publisher = publisher

    async def notify(
        self,
        db: Session,
        recipient_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        related_application_id: Optional[UUID] = None,
        related_job_posting_id: Optional[UUID] = None,
        related_interview_id: Optional[UUID] = None
    ) -> Notification:
        """Persist a notification, then publish it to the recipient's stream.

        Args:
            db: Database session
            recipient_id: Account the notification is addressed to
            type: Notification type tag
            title: Short title
            message: Human-readable message
            related_application_id: Optional back-reference
            related_job_posting_id: Optional back-reference
            related_interview_id: Optional back-reference

        Returns:
            Created notification
        """
        notification = self.repository.create(
            db,
            recipient_id=recipient_id,
            type=NotificationType(type).value,
            title=title[:200],
            message=message[:500],
            related_application_id=related_application_id,
            related_job_posting_id=related_job_posting_id,
            related_interview_id=related_interview_id
        )

        logger.info(
            "Notification created",
            notification_id=str(notification.id),
            recipient_id=str(recipient_id),
            notification_type=notification.type
        )

        if self.publisher is not None:
            await self.publisher.publish_notification_received(
                to_payload(NotificationResponse, notification)
            )
        return notification

    def list_for(
        self,
        db: Session,
        principal: Principal,
        limit: int = 20,
        offset: int = 0,
        unread_only: bool = False
    ) -> Tuple[List[Notification], int]:
        """Caller's notifications, newest first, at most ``max_page_size``."""
        return self.repository.list_for_recipient(
            db,
            principal.account_id,
            limit=clamp_limit(limit, settings.max_page_size),
            offset=max(offset, 0),
            unread_only=unread_only
        )

    def counts(self, db: Session, principal: Principal) -> NotificationCount:
        return NotificationCount(
            total=self.repository.count_for_recipient(db, principal.account_id),
            unread=self.repository.count_for_recipient(db, principal.account_id, unread_only=True)
        )

    def _get_own(self, db: Session, principal: Principal, notification_id: UUID) -> Notification:
        notification = self.repository.get_by_id(db, notification_id)
        if notification is None:
            raise NotFoundError("Notification")
        ensure_owner(principal, [notification.recipient_id], "You can only manage your own notifications")
        return notification

    def mark_read(self, db: Session, principal: Principal, notification_id: UUID) -> Notification:
        notification = self._get_own(db, principal, notification_id)
        if notification.is_read:
            return notification
        return self.repository.update(db, notification, is_read=True)

    def mark_all_read(self, db: Session, principal: Principal) -> int:
        """Mark every unread notification of the caller as read.

        Returns:
            Number of notifications modified
        """
        modified = self.repository.mark_all_read(db, principal.account_id)
        logger.info("Notifications marked read", account_id=str(principal.account_id), modified=modified)
        return modified

    def delete(self, db: Session, principal: Principal, notification_id: UUID) -> None:
        notification = self._get_own(db, principal, notification_id)
        self.repository.soft_delete(db, notification)
