"""Main CLI entry point."""

import argparse
import asyncio
import json
import logging

from lightning_nodes.config import Settings
from lightning_nodes.errors import ConfigError, CycleError, StartupError, StorageError
from lightning_nodes.log import configure_logging

logger = logging.getLogger("lightning_nodes.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lightning-nodes",
        description="Mirror the Lightning node connectivity ranking into a local store and serve it",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("serve", help="Run the poller and the HTTP server (default)")
    subparsers.add_parser("sync", help="Run one sync cycle against the configured store and exit")
    subparsers.add_parser("list", help="Print the stored nodes as JSON")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigError as e:
        configure_logging(args.log_level)
        logger.critical("Failed to load configuration: %s", e)
        raise SystemExit(1)

    configure_logging(args.log_level or settings.log_level)

    command = args.command or "serve"
    if command == "serve":
        _run_serve(settings)
    elif command == "sync":
        _run_sync(settings)
    elif command == "list":
        _run_list(settings)


def _run_serve(settings: Settings) -> None:
    """Run serve command."""
    from lightning_nodes.startup import run_service

    try:
        asyncio.run(run_service(settings))
    except StartupError as e:
        logger.critical("Startup failed: %s", e)
        raise SystemExit(1)


def _run_sync(settings: Settings) -> None:
    """Run a single cycle. Exits 1 if it fails."""
    from lightning_nodes.connectors import MempoolConnector
    from lightning_nodes.startup import open_store
    from lightning_nodes.sync import run_cycle

    async def _once() -> int:
        connector = MempoolConnector(timeout=settings.fetch_timeout_secs)
        try:
            return await run_cycle(connector, store)
        finally:
            await connector.aclose()

    try:
        store = open_store(settings)
        count = asyncio.run(_once())
    except (StartupError, CycleError) as e:
        logger.error("Sync failed: %s", e)
        raise SystemExit(1)
    print(f"Stored {count} nodes")


def _run_list(settings: Settings) -> None:
    """Run list command."""
    from lightning_nodes.startup import open_store

    try:
        nodes = open_store(settings).list_all()
    except (StartupError, StorageError) as e:
        logger.error("Failed to read store: %s", e)
        raise SystemExit(1)
    print(json.dumps([n.model_dump() for n in nodes], indent=2))


if __name__ == "__main__":
    main()
