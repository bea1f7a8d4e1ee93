"""Core graph management APIs."""

from .backend import GraphBackend, NetworkXBackend
from .manager import LinkGraph

__all__ = [
    "GraphBackend",
    "LinkGraph",
    "NetworkXBackend",
]
