"""Abstract contract for the node snapshot store."""

from abc import ABC, abstractmethod
from typing import Sequence

from lightning_nodes.models.node import Node


class NodeStore(ABC):
    """
    Durable keyed table of the current node snapshot.
    Implementations serialize writers and give readers either the old or the new snapshot.
    """

    @abstractmethod
    def list_all(self) -> list[Node]:
        """
        Return every stored node, in no particular order.
        Raises StorageError when the store is unreachable or its table is missing.
        """
        pass

    @abstractmethod
    def replace_all(self, nodes: Sequence[Node]) -> None:
        """
        Delete every stored node and insert the given ones as one unit of work.
        Raises StorageError; after a failure the contents are unknown.
        """
        pass
