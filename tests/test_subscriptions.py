"""Tests for per-connection subscription filtering."""

import asyncio
from uuid import uuid4

import pytest

from recruitment_backend.core.error_handling import ValidationError
from recruitment_backend.core.event_bus import EventBus, Topic
from recruitment_backend.core.subscriptions import SCOPE_FIELDS, matches_scope, scoped_stream


def test_every_topic_has_a_scope_field():
    assert set(SCOPE_FIELDS) == set(Topic)


def test_matches_scope_compares_as_strings():
    recipient = uuid4()
    assert matches_scope({"recipient_id": recipient}, "recipient_id", str(recipient))
    assert matches_scope({"recipient_id": str(recipient)}, "recipient_id", str(recipient))
    assert not matches_scope({"recipient_id": None}, "recipient_id", str(recipient))
    assert not matches_scope({}, "recipient_id", str(recipient))


async def test_notification_goes_only_to_matching_recipient():
    bus = EventBus()
    alice, bob = uuid4(), uuid4()
    alice_stream = scoped_stream(bus, Topic.NOTIFICATION_RECEIVED, alice)
    bob_stream = scoped_stream(bus, Topic.NOTIFICATION_RECEIVED, bob)

    await bus.publish(Topic.NOTIFICATION_RECEIVED, {"recipient_id": str(alice), "title": "for alice"})

    assert (await asyncio.wait_for(alice_stream.__anext__(), 1))["title"] == "for alice"
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(bob_stream.__anext__(), 0.05)

    await alice_stream.aclose()
    await bob_stream.aclose()
    assert bus.subscriber_count() == 0


async def test_unscoped_stream_receives_everything():
    bus = EventBus()
    stream = scoped_stream(bus, Topic.APPLICATION_CREATED)

    await bus.publish(Topic.APPLICATION_CREATED, {"job_posting_id": "a"})
    await bus.publish(Topic.APPLICATION_CREATED, {"job_posting_id": "b"})
    await bus.close()

    assert [e["job_posting_id"] async for e in stream] == ["a", "b"]


async def test_posting_scope_filters_application_created():
    bus = EventBus()
    posting = uuid4()
    stream = scoped_stream(bus, Topic.APPLICATION_CREATED, posting)

    await bus.publish(Topic.APPLICATION_CREATED, {"job_posting_id": str(uuid4())})
    await bus.publish(Topic.APPLICATION_CREATED, {"job_posting_id": str(posting), "id": "mine"})
    await bus.close()

    assert [e["id"] async for e in stream] == ["mine"]


def test_notification_stream_requires_scope():
    bus = EventBus()
    with pytest.raises(ValidationError):
        scoped_stream(bus, Topic.NOTIFICATION_RECEIVED)
    assert bus.subscriber_count() == 0


async def test_registration_happens_before_iteration():
    bus = EventBus()
    candidate = uuid4()
    stream = scoped_stream(bus, Topic.APPLICATION_STATUS_CHANGED, candidate)

    # Published before the consumer starts pulling
    await bus.publish(Topic.APPLICATION_STATUS_CHANGED, {"candidate_id": str(candidate), "status": "OFFERED"})

    assert (await asyncio.wait_for(stream.__anext__(), 1))["status"] == "OFFERED"
    await stream.aclose()


async def test_closing_unread_scoped_stream_releases_registration():
    bus = EventBus()
    stream = scoped_stream(bus, Topic.NOTIFICATION_RECEIVED, uuid4())
    assert bus.subscriber_count(Topic.NOTIFICATION_RECEIVED) == 1

    await stream.aclose()

    assert bus.subscriber_count() == 0
