"""Service orchestration: store setup, background poller and HTTP server, coordinated shutdown."""

import asyncio
import logging
import signal
import socket
from typing import Optional

import uvicorn

from lightning_nodes.config import Settings
from lightning_nodes.connectors.base import RankingsFetcher
from lightning_nodes.connectors.mempool import MempoolConnector
from lightning_nodes.errors import ConfigError, StartupError, StorageError
from lightning_nodes.server import create_app
from lightning_nodes.store.base import NodeStore
from lightning_nodes.store.sqlite_store import SqliteNodeStore
from lightning_nodes.sync import Poller

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind (but do not listen on) a TCP socket; raises OSError if the address is taken."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def _install_signal_handlers(shutdown: asyncio.Event) -> list[signal.Signals]:
    loop = asyncio.get_running_loop()

    def _request_stop(sig: signal.Signals) -> None:
        if not shutdown.is_set():
            logger.info("Shutdown signal received (%s)", sig.name)
        shutdown.set()

    installed = []
    for sig in HANDLED_SIGNALS:
        try:
            loop.add_signal_handler(sig, _request_stop, sig)
        except (NotImplementedError, RuntimeError, ValueError):
            # Not on the main thread, or a platform without loop signal support
            continue
        installed.append(sig)
    return installed


def _remove_signal_handlers(installed: list[signal.Signals]) -> None:
    loop = asyncio.get_running_loop()
    for sig in installed:
        loop.remove_signal_handler(sig)


def open_store(settings: Settings) -> NodeStore:
    try:
        return SqliteNodeStore.from_url(settings.database_url)
    except (ConfigError, StorageError) as e:
        raise StartupError(f"Failed to initialize node store: {e}") from e


async def run_service(
    settings: Settings,
    *,
    store: Optional[NodeStore] = None,
    fetcher: Optional[RankingsFetcher] = None,
    shutdown: Optional[asyncio.Event] = None,
    sock: Optional[socket.socket] = None,
) -> Poller:
    """
    Run the poller and the HTTP server until SIGINT/SIGTERM (or `shutdown`) or until the
    server exits on its own. Then stop the poller, wait for it and return it.
    Raises StartupError if the store cannot be opened or the address cannot be bound.
    """
    owns_store = store is None
    if store is None:
        store = open_store(settings)
    fetcher = fetcher or MempoolConnector(timeout=settings.fetch_timeout_secs)
    shutdown = shutdown or asyncio.Event()
    stop_event = asyncio.Event()

    poller = Poller(
        fetcher,
        store,
        interval=settings.poll_interval_secs,
        stop_event=stop_event,
    )
    poller_task = asyncio.create_task(poller.run(), name="poller")
    server: Optional[uvicorn.Server] = None
    server_task: Optional[asyncio.Task] = None

    try:
        if sock is None:
            try:
                sock = bind_socket(settings.host, settings.port)
            except OSError as e:
                raise StartupError(f"Failed to bind {settings.host}:{settings.port}: {e}") from e

        config = uvicorn.Config(create_app(store), log_config=None, lifespan="off", access_log=True)
        server = uvicorn.Server(config)
        server_task = asyncio.create_task(server.serve(sockets=[sock]), name="http-server")
        host, port = sock.getsockname()[:2]
        logger.info("Server running on http://%s:%s", host, port)

        installed = _install_signal_handlers(shutdown)
        shutdown_task = asyncio.create_task(shutdown.wait(), name="shutdown-wait")
        try:
            await asyncio.wait({server_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            _remove_signal_handlers(installed)
            shutdown_task.cancel()

        if server_task.done() and not shutdown.is_set() and not server.should_exit:
            logger.error("Server terminated unexpectedly: %r", server_task.exception())
    finally:
        stop_event.set()
        if server is not None:
            # No drain deadline: in-flight requests may be dropped
            server.should_exit = True
            server.force_exit = True
        await poller_task
        if server_task is not None:
            try:
                await server_task
            except Exception:
                logger.exception("Server shutdown failed")
        if sock is not None:
            sock.close()
        await fetcher.aclose()
        if owns_store and isinstance(store, SqliteNodeStore):
            store.close()

    logger.info("Shutdown complete")
    return poller
