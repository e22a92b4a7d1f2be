"""Sync cycle (fetch → normalize → replace) and the poller that repeats it."""

import asyncio
import enum
import logging
from typing import Optional

from lightning_nodes.connectors.base import RankingsFetcher
from lightning_nodes.errors import CycleError, FetchError, StorageError
from lightning_nodes.models.node import normalize_node
from lightning_nodes.store.base import NodeStore

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECS = 60.0


async def run_cycle(fetcher: RankingsFetcher, store: NodeStore) -> int:
    """
    Fetch the ranking, normalize every entry and replace the stored snapshot.
    Returns the number of nodes stored. Raises CycleError; never retries.
    """
    try:
        remote = await fetcher.fetch_rankings()
    except FetchError as e:
        raise CycleError(f"Fetch failed: {e}") from e

    nodes = [normalize_node(r) for r in remote]

    try:
        await asyncio.to_thread(store.replace_all, nodes)
    except StorageError as e:
        raise CycleError(f"Store replace failed: {e}") from e
    return len(nodes)


class PollerState(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class Poller:
    """
    Runs a sync cycle immediately, then once per interval, until `stop_event` is set.
    The stop signal is observed before each cycle and during the wait; a cycle already
    in flight always runs to completion.
    """

    def __init__(
        self,
        fetcher: RankingsFetcher,
        store: NodeStore,
        *,
        interval: float = DEFAULT_POLL_INTERVAL_SECS,
        stop_event: Optional[asyncio.Event] = None,
    ):
        if interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {interval}")
        self._fetcher = fetcher
        self._store = store
        self.interval = interval
        self.stop_event = stop_event or asyncio.Event()
        self.state = PollerState.RUNNING
        self.cycles_run = 0
        self.last_error: Optional[BaseException] = None

    def stop(self) -> None:
        """Request a stop. Takes effect between cycles."""
        self.stop_event.set()

    async def _run_once(self) -> None:
        self.cycles_run += 1
        try:
            count = await run_cycle(self._fetcher, self._store)
        except CycleError as e:
            self.last_error = e
            logger.error("Sync cycle %d failed: %s", self.cycles_run, e)
        except Exception as e:
            self.last_error = e
            logger.exception("Sync cycle %d crashed", self.cycles_run)
        else:
            self.last_error = None
            logger.debug("Finished sync cycle %d: %d nodes", self.cycles_run, count)

    async def _wait_interval(self) -> bool:
        """Sleep for one interval; return True if the stop signal arrived meanwhile."""
        try:
            await asyncio.wait_for(self.stop_event.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            return False
        return True

    async def run(self) -> None:
        """Loop until stopped. Never raises for a failed cycle."""
        logger.info("Poller started (interval %ss)", self.interval)
        while not self.stop_event.is_set():
            await self._run_once()
            if await self._wait_interval():
                break
        self.state = PollerState.STOPPED
        logger.info("Poller stopped after %d cycle(s)", self.cycles_run)
