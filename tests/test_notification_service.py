"""Tests for notification creation and recipient-scoped management."""

from datetime import datetime, timedelta

import pytest

from recruitment_backend.core.error_handling import ForbiddenError, NotFoundError
from recruitment_backend.core.event_bus import Topic
from recruitment_backend.models import NotificationType
from recruitment_backend.repositories import NotificationRepository
from recruitment_backend.services.notification_service import (
    NotificationService,
    format_interview_time,
    interview_scheduled_message,
    status_updated_message,
)
from tests.helpers import collect


async def notify(service, db, recipient, title="Heads up"):
    return await service.notify(
        db,
        recipient_id=recipient.account_id,
        type=NotificationType.APPLICATION_RECEIVED,
        title=title,
        message=f"{title} for you"
    )


class TestMessages:

    def test_interview_time_format(self):
        assert format_interview_time(datetime(2026, 11, 2, 14, 0)) == "Mon, Nov 2, 02:00 PM"
        assert format_interview_time(datetime(2026, 1, 15, 9, 5)) == "Thu, Jan 15, 09:05 AM"

    def test_status_message_uses_label(self):
        assert status_updated_message("Data Analyst", "OFFERED") == 'Your application for Data Analyst is now "Offer Extended"'
        assert status_updated_message(None, "REJECTED") == 'Your application for the position is now "Not Selected"'

    def test_interview_message(self):
        message = interview_scheduled_message("QA Lead", datetime(2026, 11, 2, 14, 0))
        assert message == "Interview for QA Lead scheduled for Mon, Nov 2, 02:00 PM"


class TestNotify:

    async def test_notify_persists_then_publishes(self, db, bus, publisher, candidate):
        stream = bus.subscribe(Topic.NOTIFICATION_RECEIVED)

        notification = await notify(NotificationService(publisher), db, candidate)

        assert notification.is_read is False
        events = await collect(stream)
        assert len(events) == 1
        assert events[0]["id"] == str(notification.id)
        assert events[0]["recipient_id"] == str(candidate.account_id)
        assert events[0]["is_read"] is False

    async def test_notify_without_publisher_only_persists(self, db, candidate):
        await notify(NotificationService(), db, candidate)

        assert NotificationRepository().count_for_recipient(db, candidate.account_id) == 1


class TestRecipientScope:

    async def test_list_is_newest_first(self, db, candidate):
        service = NotificationService()
        older = await notify(service, db, candidate, "First")
        newer = await notify(service, db, candidate, "Second")
        older.created_at = newer.created_at - timedelta(minutes=5)
        db.commit()

        items, total = service.list_for(db, candidate)

        assert total == 2
        assert [n.id for n in items] == [newer.id, older.id]

    async def test_mark_all_read_reports_modified_count(self, db, hr, candidate):
        service = NotificationService()
        first = await notify(service, db, candidate)
        await notify(service, db, candidate)
        await notify(service, db, hr)
        service.mark_read(db, candidate, first.id)

        assert service.mark_all_read(db, candidate) == 1
        assert service.mark_all_read(db, candidate) == 0
        assert service.counts(db, candidate).unread == 0
        assert service.counts(db, hr).unread == 1

    async def test_other_recipients_are_forbidden(self, db, hr, candidate):
        service = NotificationService()
        notification = await notify(service, db, candidate)

        with pytest.raises(ForbiddenError):
            service.mark_read(db, hr, notification.id)
        with pytest.raises(ForbiddenError):
            service.delete(db, hr, notification.id)

    async def test_deleted_notification_disappears(self, db, candidate):
        service = NotificationService()
        notification = await notify(service, db, candidate)

        service.delete(db, candidate, notification.id)

        assert service.counts(db, candidate).total == 0
        with pytest.raises(NotFoundError):
            service.mark_read(db, candidate, notification.id)
