"""In-process publish/subscribe bus for real-time events.

The bus is a plain object created once per process (see ``main.lifespan``)
and handed to every component that publishes or subscribes. Delivery is
at-most-once: a subscriber only sees events published while it is
registered, and nothing is buffered for subscribers that connect later.
Events on a topic reach each subscriber in publish order.
"""

import asyncio
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, Optional, Set

import structlog

logger = structlog.get_logger(__name__)


class Topic(str, Enum):
    """Named event channels."""
    APPLICATION_CREATED = "application-created"
    APPLICATION_STATUS_CHANGED = "application-status-changed"
    INTERVIEW_SCHEDULED = "interview-scheduled"
    NOTIFICATION_RECEIVED = "notification-received"


class BusClosedError(RuntimeError):
    """Raised when subscribing to a bus that has been shut down."""


_CLOSED = object()


class Subscription:
    """A registered consumer of one topic.

    Registration happens on construction, so events published after
    ``EventBus.subscribe`` returns are guaranteed to be queued even if the
    consumer has not started iterating yet. Closing the subscription
    removes the registration.
    """

    def __init__(self, bus: "EventBus", topic: Topic, queue: asyncio.Queue):
        self.bus = bus
        self.topic = topic
        self._queue = queue
        self.closed = False

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Any:
        if self.closed:
            raise StopAsyncIteration

        item = await self._queue.get()
        if item is _CLOSED:
            await self.aclose()
            raise StopAsyncIteration
        return item

    def _offer(self, payload: Any) -> bool:
        try:
            self._queue.put_nowait(payload)
            return True
        except asyncio.QueueFull:
            logger.warning(
                "Subscriber queue full, event dropped",
                topic=self.topic.value
            )
            return False

    def _end(self) -> None:
        # Wake a pending consumer; the oldest event gives way when full
        try:
            self._queue.put_nowait(_CLOSED)
        except asyncio.QueueFull:
            self._queue.get_nowait()
            self._queue.put_nowait(_CLOSED)

    async def aclose(self) -> None:
        """Release the registration on the bus."""
        if self.closed:
            return
        self.closed = True
        self.bus._unregister(self)
        self._end()

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class EventBus:
    """Topic-keyed fan-out of event payloads to live subscribers."""

    def __init__(self, queue_size: int = 0):
        self.queue_size = queue_size
        self._subscribers: Dict[Topic, Set[Subscription]] = defaultdict(set)
        self.closed = False
        self.metrics = {
            "events_published": 0,
            "events_delivered": 0,
        }

    def subscribe(self, topic: Topic) -> Subscription:
        """Register a new subscriber on ``topic``."""
        if self.closed:
            raise BusClosedError("Event bus is closed")

        subscription = Subscription(self, Topic(topic), asyncio.Queue(maxsize=self.queue_size))
        self._subscribers[subscription.topic].add(subscription)

        logger.debug(
            "Subscriber registered",
            topic=subscription.topic.value,
            subscribers=len(self._subscribers[subscription.topic])
        )
        return subscription

    async def publish(self, topic: Topic, payload: Any) -> int:
        """Deliver ``payload`` to every current subscriber of ``topic``.

        Returns:
            Number of subscribers the event was queued for
        """
        topic = Topic(topic)
        delivered = 0

        for subscription in list(self._subscribers.get(topic, ())):
            if subscription._offer(payload):
                delivered += 1

        self.metrics["events_published"] += 1
        self.metrics["events_delivered"] += delivered

        logger.info(
            "Event published",
            topic=topic.value,
            subscribers=delivered
        )
        return delivered

    def subscriber_count(self, topic: Optional[Topic] = None) -> int:
        """Number of live registrations, for one topic or overall."""
        if topic is not None:
            return len(self._subscribers.get(Topic(topic), ()))
        return sum(len(subs) for subs in self._subscribers.values())

    def _unregister(self, subscription: Subscription) -> None:
        subscribers = self._subscribers.get(subscription.topic)
        if subscribers is not None:
            subscribers.discard(subscription)
        logger.debug(
            "Subscriber released",
            topic=subscription.topic.value,
            subscribers=len(subscribers or ())
        )

    async def close(self) -> None:
        """End every open subscription and refuse new ones."""
        if self.closed:
            return
        self.closed = True

        for subscriptions in self._subscribers.values():
            for subscription in list(subscriptions):
                subscription._end()

        logger.info("Event bus closed", metrics=self.metrics)


class FilteredStream:
    """Items of a subscription accepted by ``predicate``.

    Owns the subscription: closing the stream releases the bus
    registration whether or not iteration has started.
    """

    def __init__(self, subscription: Subscription, predicate: Callable[[Any], bool]):
        self.subscription = subscription
        self.predicate = predicate

    def __aiter__(self) -> "FilteredStream":
        return self

    async def __anext__(self) -> Any:
        while True:
            item = await self.subscription.__anext__()
            if self.predicate(item):
                return item

    async def aclose(self) -> None:
        await self.subscription.aclose()
