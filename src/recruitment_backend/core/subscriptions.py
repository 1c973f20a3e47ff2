"""Per-connection narrowing of topic streams."""

from typing import Any, Dict, Optional, Union
from uuid import UUID

import structlog

from .event_bus import EventBus, FilteredStream, Subscription, Topic
from .error_handling import ValidationError

logger = structlog.get_logger(__name__)


# Payload field compared against the subscriber's scoping argument
SCOPE_FIELDS: Dict[Topic, str] = {
    Topic.APPLICATION_CREATED: "job_posting_id",
    Topic.APPLICATION_STATUS_CHANGED: "candidate_id",
    Topic.INTERVIEW_SCHEDULED: "application_id",
    Topic.NOTIFICATION_RECEIVED: "recipient_id",
}

# Topics that refuse to stream without a scope
SCOPE_REQUIRED = {Topic.NOTIFICATION_RECEIVED}


def matches_scope(payload: Any, field: str, scope: str) -> bool:
    """Compare one payload field with the scope, as strings."""
    if isinstance(payload, dict):
        value = payload.get(field)
    else:
        value = getattr(payload, field, None)
    return value is not None and str(value) == scope


def scoped_stream(
    bus: EventBus,
    topic: Topic,
    scope: Optional[UUID] = None
) -> Union[Subscription, FilteredStream]:
    """Subscribe to ``topic`` and keep only events matching ``scope``.

    Without a scope every event on the topic is delivered. The bus
    registration is made before this function returns.

    Raises:
        ValidationError: If the topic requires a scope and none was given
    """
    topic = Topic(topic)
    if scope is None and topic in SCOPE_REQUIRED:
        raise ValidationError(f"A {SCOPE_FIELDS[topic]} is required for {topic.value}")

    subscription = bus.subscribe(topic)
    if scope is None:
        return subscription

    field = SCOPE_FIELDS[topic]
    scope_value = str(scope)

    logger.debug("Scoped subscription opened", topic=topic.value, field=field, scope=scope_value)
    return FilteredStream(subscription, lambda payload: matches_scope(payload, field, scope_value))
