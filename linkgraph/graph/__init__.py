"""Public graph API surface."""

from linkgraph.graph.core import GraphBackend, LinkGraph, NetworkXBackend
from linkgraph.graph.models import Edge, Node, node_id

__all__ = [
    "Edge",
    "GraphBackend",
    "LinkGraph",
    "NetworkXBackend",
    "Node",
    "node_id",
]
