"""Data models for remote and locally stored nodes."""

from lightning_nodes.models.node import FirstSeen, Node, format_capacity, format_first_seen, normalize_node
from lightning_nodes.models.raw import RemoteNode

__all__ = [
    "FirstSeen",
    "Node",
    "RemoteNode",
    "format_capacity",
    "format_first_seen",
    "normalize_node",
]
