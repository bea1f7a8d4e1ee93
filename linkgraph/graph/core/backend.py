"""Graph backend abstraction layer.

Wraps NetworkX for easy backend replacement in the future.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

import networkx as nx

logger = logging.getLogger("linkgraph.graph.core.backend")


class GraphBackend(ABC):
    """Abstract graph backend protocol.

    This defines the interface that the link graph needs from its storage.
    Node identifiers are the primary keys; edges are keyed multi-edges so
    duplicate links between the same pair of documents are kept apart.
    """

    @abstractmethod
    def add_node(self, node_id: str, **attributes: Any) -> None:
        """Add node to graph, merging attributes into an existing node."""
        pass

    @abstractmethod
    def replace_node_attrs(self, node_id: str, attributes: Dict[str, Any]) -> None:
        """Replace every attribute of an existing node."""
        pass

    @abstractmethod
    def remove_node(self, node_id: str) -> None:
        """Remove node and every edge touching it."""
        pass

    @abstractmethod
    def add_edge(self, source: str, target: str, **attributes: Any) -> int:
        """Add edge to graph."""
        pass

    @abstractmethod
    def remove_edge(self, source: str, target: str, key: int) -> None:
        """Remove a single keyed edge."""
        pass

    @abstractmethod
    def has_node(self, node_id: str) -> bool:
        """Check if node exists."""
        pass

    @abstractmethod
    def get_node_data(self, node_id: str) -> Optional[Dict[str, Any]]:
        """Get node attributes."""
        pass

    @abstractmethod
    def get_edge_data(self, source: str, target: str, key: int) -> Optional[Dict[str, Any]]:
        """Get attributes of a single keyed edge."""
        pass

    @abstractmethod
    def nodes(self, data: bool = False) -> Iterable:
        """Iterate over nodes."""
        pass

    @abstractmethod
    def edges(self, data: bool = False, keys: bool = False) -> Iterable:
        """Iterate over edges."""
        pass

    @abstractmethod
    def out_edges(self, node_id: str) -> List[Tuple[str, str, int]]:
        """List outgoing ``(source, target, key)`` triples of a node."""
        pass

    @abstractmethod
    def in_edges(self, node_id: str) -> List[Tuple[str, str, int]]:
        """List incoming ``(source, target, key)`` triples of a node."""
        pass

    @abstractmethod
    def node_count(self) -> int:
        """Get number of nodes."""
        pass

    @abstractmethod
    def edge_count(self) -> int:
        """Get number of edges."""
        pass

    @abstractmethod
    def degree(self, node_id: str) -> int:
        """Get total degree (in + out) of node."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear all nodes and edges."""
        pass


class NetworkXBackend(GraphBackend):
    """NetworkX-based in-memory graph backend.

    This is the default implementation used by ``LinkGraph``.
    """

    def __init__(self) -> None:
        """Initialize backend with NetworkX MultiDiGraph."""
        self._graph = nx.MultiDiGraph()
        logger.debug("NetworkXBackend initialized")

    def add_node(self, node_id: str, **attributes: Any) -> None:
        self._graph.add_node(node_id, **attributes)

    def replace_node_attrs(self, node_id: str, attributes: Dict[str, Any]) -> None:
        attrs = self._graph.nodes[node_id]
        attrs.clear()
        attrs.update(attributes)

    def remove_node(self, node_id: str) -> None:
        self._graph.remove_node(node_id)

    def add_edge(self, source: str, target: str, **attributes: Any) -> int:
        return self._graph.add_edge(source, target, **attributes)

    def remove_edge(self, source: str, target: str, key: int) -> None:
        self._graph.remove_edge(source, target, key=key)

    def has_node(self, node_id: str) -> bool:
        return self._graph.has_node(node_id)

    def get_node_data(self, node_id: str) -> Optional[Dict[str, Any]]:
        return self._graph.nodes.get(node_id)

    def get_edge_data(self, source: str, target: str, key: int) -> Optional[Dict[str, Any]]:
        return self._graph.get_edge_data(source, target, key)

    def nodes(self, data: bool = False) -> Iterable:
        return self._graph.nodes(data=data)

    def edges(self, data: bool = False, keys: bool = False) -> Iterable:
        return self._graph.edges(data=data, keys=keys)

    def out_edges(self, node_id: str) -> List[Tuple[str, str, int]]:
        if not self._graph.has_node(node_id):
            return []
        return list(self._graph.out_edges(node_id, keys=True))

    def in_edges(self, node_id: str) -> List[Tuple[str, str, int]]:
        if not self._graph.has_node(node_id):
            return []
        return list(self._graph.in_edges(node_id, keys=True))

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def degree(self, node_id: str) -> int:
        return self._graph.degree(node_id)

    def clear(self) -> None:
        self._graph.clear()
        logger.debug("Graph backend cleared")
