"""JSON export of link graphs for rendering collaborators."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import networkx as nx

from linkgraph.graph import LinkGraph

logger = logging.getLogger("linkgraph.export.json")


def graph_to_dict(graph: LinkGraph) -> Dict[str, Any]:
    """Convert a link graph into node-link data.

    Provisional endpoints of dangling edges are included and keep their
    ``provisional`` flag so renderers can draw or hide them.
    """
    return nx.readwrite.json_graph.node_link_data(graph.to_networkx(), edges="edges")


def export_json(graph: LinkGraph, output_path: Path) -> None:
    """Export graph to JSON format.

    Args:
        graph: Link graph to export.
        output_path: Output file path.
    """
    logger.info("Exporting graph to JSON: %s", output_path)

    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = graph_to_dict(graph)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(
        "JSON export completed: %d nodes, %d edges",
        graph.node_count(),
        graph.edge_count(),
    )
