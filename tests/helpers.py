"""Shared async helpers for tests."""

import asyncio

TEST_PASSWORD = "secret-pass"


async def collect(subscription, timeout: float = 0.05):
    """Drain whatever a subscription currently holds."""
    items = []
    while True:
        try:
            items.append(await asyncio.wait_for(subscription.__anext__(), timeout))
        except (asyncio.TimeoutError, StopAsyncIteration):
            return items


class FakeRequest:
    """Stand-in for a Starlette request that can be told to disconnect."""

    def __init__(self):
        self.disconnected = False

    async def is_disconnected(self) -> bool:
        return self.disconnected
