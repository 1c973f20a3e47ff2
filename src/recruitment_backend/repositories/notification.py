"""Notification repository for database operations."""

from typing import List, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from recruitment_backend.core.base import utcnow
from recruitment_backend.models.notification import Notification
from .base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for Notification model operations."""

    def __init__(self):
        super().__init__(Notification)

    def list_for_recipient(
        self,
        db: Session,
        recipient_id: UUID,
        limit: int,
        offset: int = 0,
        unread_only: bool = False
    ) -> Tuple[List[Notification], int]:
        """Recipient's notifications, newest first."""
        query = self.query(db).filter(Notification.recipient_id == recipient_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))

        total = query.count()
        items = (
            query.order_by(Notification.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def count_for_recipient(self, db: Session, recipient_id: UUID, unread_only: bool = False) -> int:
        query = self.query(db).filter(Notification.recipient_id == recipient_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.count()

    def mark_all_read(self, db: Session, recipient_id: UUID) -> int:
        """Mark every unread notification of the recipient as read.

        Returns:
            Number of notifications modified
        """
        modified = (
            self.query(db)
            .filter(
                Notification.recipient_id == recipient_id,
                Notification.is_read.is_(False),
            )
            .update(
                {Notification.is_read: True, Notification.updated_at: utcnow()},
                synchronize_session="fetch"
            )
        )
        self._commit(db, "mark_all_read")
        return modified
