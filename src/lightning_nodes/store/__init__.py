"""Snapshot storage for nodes."""

from lightning_nodes.store.base import NodeStore
from lightning_nodes.store.memory_store import InMemoryNodeStore
from lightning_nodes.store.sqlite_store import SqliteNodeStore

__all__ = ["InMemoryNodeStore", "NodeStore", "SqliteNodeStore"]
