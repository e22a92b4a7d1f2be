"""In-memory NodeStore, used as a test double."""

import threading
from typing import Optional, Sequence

from lightning_nodes.errors import StorageError
from lightning_nodes.models.node import Node
from lightning_nodes.store.base import NodeStore


class InMemoryNodeStore(NodeStore):
    """Dict-backed store. Set `fail_with` to make every operation raise StorageError."""

    def __init__(self, nodes: Sequence[Node] = (), fail_with: Optional[str] = None):
        self._lock = threading.Lock()
        self._nodes: dict[str, Node] = {n.public_key: n for n in nodes}
        self.fail_with = fail_with
        self.replace_calls = 0

    def _check(self) -> None:
        if self.fail_with is not None:
            raise StorageError(self.fail_with)

    def list_all(self) -> list[Node]:
        with self._lock:
            self._check()
            return list(self._nodes.values())

    def replace_all(self, nodes: Sequence[Node]) -> None:
        with self._lock:
            self.replace_calls += 1
            self._check()
            fresh: dict[str, Node] = {}
            for node in nodes:
                if node.public_key in fresh:
                    raise StorageError(f"Duplicate public key: {node.public_key}")
                fresh[node.public_key] = node
            self._nodes = fresh
