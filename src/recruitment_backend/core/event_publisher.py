"""Event publisher for real-time notifications."""

from typing import Any, Dict

import structlog

from .event_bus import EventBus, Topic

logger = structlog.get_logger(__name__)


class EventPublisher:
    """Publishes domain events to the event bus.

    Payloads are JSON-ready dictionaries (the serialized entity) so the
    same object can be filtered in-process and written to an SSE stream.
    """

    def __init__(self, bus: EventBus):
        self.bus = bus

    async def publish_application_created(self, application: Dict[str, Any]) -> int:
        """Publish application created event.

        Args:
            application: Serialized application

        Returns:
            Number of subscribers reached
        """
        delivered = await self.bus.publish(Topic.APPLICATION_CREATED, application)

        logger.info(
            "Application created event published",
            application_id=application.get("id"),
            job_posting_id=application.get("job_posting_id"),
            subscribers=delivered
        )
        return delivered

    async def publish_application_status_changed(
        self,
        application: Dict[str, Any],
        old_status: str
    ) -> int:
        """Publish application status change event.

        Args:
            application: Serialized application carrying the new status
            old_status: Status before the change

        Returns:
            Number of subscribers reached
        """
        payload = dict(application)
        payload["previous_status"] = old_status

        delivered = await self.bus.publish(Topic.APPLICATION_STATUS_CHANGED, payload)

        logger.info(
            "Application status change event published",
            application_id=application.get("id"),
            old_status=old_status,
            new_status=application.get("status"),
            subscribers=delivered
        )
        return delivered

    async def publish_interview_scheduled(self, interview: Dict[str, Any]) -> int:
        """Publish interview scheduled event."""
        delivered = await self.bus.publish(Topic.INTERVIEW_SCHEDULED, interview)

        logger.info(
            "Interview scheduled event published",
            interview_id=interview.get("id"),
            application_id=interview.get("application_id"),
            subscribers=delivered
        )
        return delivered

    async def publish_notification_received(self, notification: Dict[str, Any]) -> int:
        """Publish a freshly persisted notification to its recipient's stream."""
        delivered = await self.bus.publish(Topic.NOTIFICATION_RECEIVED, notification)

        logger.info(
            "Notification event published",
            notification_id=notification.get("id"),
            recipient_id=notification.get("recipient_id"),
            notification_type=notification.get("type"),
            subscribers=delivered
        )
        return delivered
