"""Link graph shared by every document-processing task of a workspace.

``LinkGraph`` owns the nodes and edges derived from parsed documents. Each
document contributes exactly one node (while it has a title) and its own
outgoing edges; ``apply_document`` replaces that contribution wholesale so the
graph always reflects the latest parse of every document.
"""

import itertools
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

import networkx as nx

from ..models.schema import Edge, Node, node_id
from .backend import GraphBackend, NetworkXBackend

logger = logging.getLogger("linkgraph.graph.core.manager")


class LinkGraph:
    """Directed graph of links between workspace documents.

    Nodes are keyed by id (a pure function of the document path) in the
    backend. Edges may point at documents without a node; such endpoints are
    stored as provisional backend nodes that carry only the target path and
    are never exposed through ``nodes``.

    The graph takes no locks: it is mutated from asyncio tasks sharing one
    thread, and no mutation sequence contains a suspension point.
    """

    def __init__(
        self,
        graph_id: Optional[str] = None,
        backend: Optional[GraphBackend] = None,
    ) -> None:
        """Initialize link graph.

        Args:
            graph_id: Optional graph identifier.
            backend: Optional graph backend. Defaults to NetworkXBackend.
        """
        self.graph_id = graph_id or "default"
        self._backend: GraphBackend = backend or NetworkXBackend()
        # Global insertion counter; edges are reported in this order.
        self._edge_seq = itertools.count()
        # Ids of titled nodes in the order they gained their title.
        self._titled: Dict[str, None] = {}

        logger.debug("LinkGraph initialized with ID: %s", self.graph_id)

    @property
    def backend(self) -> GraphBackend:
        """Return the underlying graph backend."""
        return self._backend

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> List[Node]:
        """Document nodes, each appended when its document gained a title."""
        return [
            self._to_node(nid, self._backend.get_node_data(nid) or {})
            for nid in self._titled
        ]

    @property
    def edges(self) -> List[Edge]:
        """All edges in the order they were added."""
        return self._ordered_edges(self._backend.edges(data=True))

    def node_count(self) -> int:
        """Number of document nodes (provisional endpoints excluded)."""
        return len(self._titled)

    def edge_count(self) -> int:
        return self._backend.edge_count()

    def get_node(self, path: str) -> Optional[Node]:
        """Return the node of the document at ``path``, if it has one."""
        nid = node_id(path)
        data = self._backend.get_node_data(nid)
        if data is None or data.get("provisional"):
            return None
        return self._to_node(nid, data)

    def has_node(self, path: str) -> bool:
        return self.get_node(path) is not None

    def outgoing(self, path: str) -> List[Edge]:
        """Edges recorded for the links of the document at ``path``."""
        nid = node_id(path)
        return self._ordered_edges(
            (s, t, self._edge_data(s, t, k)) for s, t, k in self._backend.out_edges(nid)
        )

    def incoming(self, path: str) -> List[Edge]:
        """Edges from other documents pointing at ``path``."""
        nid = node_id(path)
        return self._ordered_edges(
            (s, t, self._edge_data(s, t, k)) for s, t, k in self._backend.in_edges(nid)
        )

    def dangling_edges(self) -> List[Edge]:
        """Edges whose target currently has no document node."""
        provisional = {
            nid for nid, data in self._backend.nodes(data=True) if data.get("provisional")
        }
        return [edge for edge in self.edges if edge.target in provisional]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def upsert_node(self, path: str, label: str) -> Node:
        """Create the node for ``path`` or replace its label.

        A document without a node, including one only known as a link target,
        is appended after every existing node.
        """
        node = Node.for_document(path, label)
        if self._backend.has_node(node.id):
            self._backend.replace_node_attrs(node.id, node.to_backend_attrs())
        else:
            self._backend.add_node(node.id, **node.to_backend_attrs())

        if node.id in self._titled:
            logger.debug("Updated node: %s (%s)", path, label)
        else:
            self._titled[node.id] = None
            logger.debug("Added node: %s (%s)", path, label)
        return node

    def remove_node(self, path: str) -> bool:
        """Remove the node for ``path``.

        Edges are left untouched: when other documents still link here the
        node is demoted to a provisional endpoint instead of disappearing.

        Returns:
            bool: True if a document node existed.
        """
        nid = node_id(path)
        if nid not in self._titled:
            return False

        del self._titled[nid]
        self._backend.replace_node_attrs(nid, {"path": path, "provisional": True})
        self._prune_if_isolated(nid)
        logger.debug("Removed node: %s", path)
        return True

    def replace_edges(self, path: str, targets: Sequence[str]) -> List[Edge]:
        """Replace every outgoing edge of ``path`` with edges to ``targets``.

        Args:
            path: Canonical path of the linking document.
            targets: Canonical paths of the link targets, in link order.

        Returns:
            List[Edge]: The edges added.
        """
        source = node_id(path)
        stale = self._backend.out_edges(source)
        touched = {source}
        for s, t, key in stale:
            self._backend.remove_edge(s, t, key)
            touched.add(t)

        added: List[Edge] = []
        if targets:
            self._ensure_endpoint(source, path)
        for target_path in targets:
            target = node_id(target_path)
            self._ensure_endpoint(target, target_path)
            self._backend.add_edge(source, target, seq=next(self._edge_seq))
            added.append(Edge(source=source, target=target))

        for nid in touched:
            self._prune_if_isolated(nid)

        logger.debug(
            "Replaced edges of %s: removed %d, added %d", path, len(stale), len(added)
        )
        return added

    def apply_document(
        self, path: str, title: Optional[str], targets: Sequence[str]
    ) -> None:
        """Make the graph reflect the current content of one document.

        Args:
            path: Canonical path of the document.
            title: Extracted title, or None when the document has none.
            targets: Canonical paths of the document's links, in order.
        """
        if title is None:
            self.remove_node(path)
        else:
            self.upsert_node(path, title)
        self.replace_edges(path, targets)

    def remove_document(self, path: str) -> bool:
        """Forget a deleted document: its node and its outgoing edges.

        Edges from other documents to ``path`` remain as dangling edges.

        Returns:
            bool: True if a document node existed.
        """
        removed = self.remove_node(path)
        self.replace_edges(path, [])
        return removed

    def clear(self) -> None:
        """Drop every node and edge and restart edge numbering."""
        self._backend.clear()
        self._titled.clear()
        self._edge_seq = itertools.count()

    def to_networkx(self) -> nx.MultiDiGraph:
        """Return a detached ``MultiDiGraph`` copy for rendering or analysis.

        Document nodes come first in ``nodes`` order, followed by provisional
        endpoints, which keep their ``provisional`` flag. Edges are inserted
        in graph order.
        """
        graph = nx.MultiDiGraph(graph_id=self.graph_id)
        for nid in self._titled:
            graph.add_node(nid, **dict(self._backend.get_node_data(nid) or {}))
        for nid, data in self._backend.nodes(data=True):
            if nid not in self._titled:
                graph.add_node(nid, **dict(data))
        for edge_source, edge_target, data in sorted(
            self._backend.edges(data=True), key=lambda item: item[2]["seq"]
        ):
            graph.add_edge(edge_source, edge_target, **dict(data))
        return graph

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_endpoint(self, nid: str, path: str) -> None:
        if not self._backend.has_node(nid):
            self._backend.add_node(nid, path=path, provisional=True)

    def _prune_if_isolated(self, nid: str) -> None:
        data = self._backend.get_node_data(nid)
        if data is not None and data.get("provisional") and self._backend.degree(nid) == 0:
            self._backend.remove_node(nid)

    def _edge_data(self, source: str, target: str, key: int) -> Dict[str, Any]:
        return self._backend.get_edge_data(source, target, key) or {}

    @staticmethod
    def _ordered_edges(triples: Iterable) -> List[Edge]:
        ordered = sorted(triples, key=lambda item: item[2]["seq"])
        return [Edge(source=source, target=target) for source, target, _ in ordered]

    @staticmethod
    def _to_node(nid: str, data: Dict[str, Any]) -> Node:
        return Node(id=nid, path=data["path"], label=data["label"])

    def __repr__(self) -> str:
        return (
            f"LinkGraph(graph_id={self.graph_id!r}, nodes={self.node_count()}, "
            f"edges={self.edge_count()})"
        )
