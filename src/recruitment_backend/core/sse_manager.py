"""Server-Sent Events streaming on top of the in-process event bus."""

import asyncio
import json
import time
from typing import Any, AsyncGenerator, AsyncIterator, Dict, Optional
from uuid import UUID, uuid4

import structlog
from fastapi import Request
from fastapi.responses import StreamingResponse

from .config import settings
from .event_bus import Topic

logger = structlog.get_logger(__name__)


class SSEEvent:
    """Represents a single Server-Sent Event."""

    def __init__(
        self,
        topic: Topic,
        data: Dict[str, Any],
        sequence: int,
        connection_id: str
    ):
        self.topic = Topic(topic)
        self.data = data
        self.sequence = sequence
        self.event_id = f"{connection_id}:{sequence}"
        self.timestamp = time.time()

    def to_sse_format(self) -> str:
        """Convert event to SSE format string."""
        lines = [
            f"id: {self.event_id}",
            f"event: {self.topic.value}",
            f"data: {json.dumps(self.data, default=str)}",
            "",  # Empty line to end the event
        ]

        return "\n".join(lines) + "\n"


class SSEConnection:
    """Represents an active SSE connection."""

    def __init__(self, connection_id: str, topic: Topic, account_id: UUID):
        self.connection_id = connection_id
        self.topic = topic
        self.account_id = account_id
        self.connected_at = time.time()
        self.events_sent = 0


class SSEManager:
    """Turns filtered topic streams into long-lived SSE responses."""

    def __init__(self, heartbeat_interval: Optional[float] = None):
        self.heartbeat_interval = heartbeat_interval or settings.sse_heartbeat_seconds
        self.active_connections: Dict[str, SSEConnection] = {}

    async def event_generator(
        self,
        request: Request,
        stream: AsyncIterator[Dict[str, Any]],
        connection: SSEConnection
    ) -> AsyncGenerator[str, None]:
        """Pull events from ``stream`` until the client goes away.

        A keep-alive comment is written whenever no event arrives within the
        heartbeat interval. On exit the pending pull is cancelled and the
        stream closed, which releases the bus registration.
        """
        pending: Optional[asyncio.Future] = None
        try:
            yield f": connected {connection.connection_id}\n\n"

            while True:
                if pending is None:
                    pending = asyncio.ensure_future(stream.__anext__())

                done, _ = await asyncio.wait({pending}, timeout=self.heartbeat_interval)

                if await request.is_disconnected():
                    break

                if not done:
                    yield ": keep-alive\n\n"
                    continue

                try:
                    payload = pending.result()
                except StopAsyncIteration:
                    break
                finally:
                    pending = None

                connection.events_sent += 1
                yield SSEEvent(
                    topic=connection.topic,
                    data=payload,
                    sequence=connection.events_sent,
                    connection_id=connection.connection_id
                ).to_sse_format()

        except asyncio.CancelledError:
            logger.info("SSE connection cancelled", connection_id=connection.connection_id)
            raise
        finally:
            if pending is not None and not pending.done():
                pending.cancel()
                try:
                    await pending
                except (asyncio.CancelledError, StopAsyncIteration):
                    pass
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
            self.active_connections.pop(connection.connection_id, None)

            logger.info(
                "SSE connection closed",
                connection_id=connection.connection_id,
                topic=connection.topic.value,
                events_sent=connection.events_sent
            )

    def create_event_stream(
        self,
        request: Request,
        stream: AsyncIterator[Dict[str, Any]],
        topic: Topic,
        account_id: UUID
    ) -> StreamingResponse:
        """Create an SSE response that relays ``stream`` to the client.

        Args:
            request: Incoming request, polled for disconnection
            stream: Filtered topic stream, already registered on the bus
            topic: Topic the stream belongs to
            account_id: Subscriber identity, for connection tracking

        Returns:
            StreamingResponse with the SSE stream
        """
        connection = SSEConnection(
            connection_id=uuid4().hex,
            topic=Topic(topic),
            account_id=account_id
        )
        self.active_connections[connection.connection_id] = connection

        logger.info(
            "SSE connection established",
            connection_id=connection.connection_id,
            topic=connection.topic.value,
            account_id=str(account_id)
        )

        return StreamingResponse(
            self.event_generator(request, stream, connection),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no"
            }
        )
