"""Data models and identifiers used by the graph package."""

from .schema import Edge, Node, node_id

__all__ = [
    "Edge",
    "Node",
    "node_id",
]
