"""Fetcher test doubles."""

import asyncio
from typing import Optional

from lightning_nodes.connectors.base import RankingsFetcher
from lightning_nodes.errors import FetchError
from lightning_nodes.models.raw import RemoteNode


class StaticFetcher(RankingsFetcher):
    """Always returns the same payload."""

    source_id = "static"

    def __init__(self, payload: list[dict]):
        self.payload = payload
        self.calls = 0

    async def fetch_rankings(self) -> list[RemoteNode]:
        self.calls += 1
        return [RemoteNode.model_validate(p) for p in self.payload]


class FailingFetcher(RankingsFetcher):
    """Always raises; FetchError unless another exception is given."""

    source_id = "failing"

    def __init__(self, exc: Optional[Exception] = None):
        self.exc = exc or FetchError("simulated error")
        self.calls = 0

    async def fetch_rankings(self) -> list[RemoteNode]:
        self.calls += 1
        raise self.exc


class GatedFetcher(StaticFetcher):
    """Blocks inside fetch_rankings until `release` is set."""

    source_id = "gated"

    def __init__(self, payload: list[dict]):
        super().__init__(payload)
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def fetch_rankings(self) -> list[RemoteNode]:
        self.started.set()
        await self.release.wait()
        return await super().fetch_rankings()


async def wait_until(predicate, timeout: float = 5.0) -> None:
    """Poll `predicate` until true; fail the test after `timeout` seconds."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.01)
