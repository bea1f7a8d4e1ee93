"""Tests for node-link JSON export."""

from __future__ import annotations

import json
from pathlib import Path

from linkgraph.export.json import export_json, graph_to_dict
from linkgraph.graph import LinkGraph, node_id


def _graph() -> LinkGraph:
    graph = LinkGraph(graph_id="/ws")
    graph.apply_document("/ws/a.md", "Alpha", ["/ws/b.md", "/ws/c.md"])
    graph.apply_document("/ws/b.md", "Beta", ["/ws/a.md"])
    return graph


def test_graph_to_dict_includes_provisional_endpoints() -> None:
    """Dangling targets are exported with their provisional flag."""
    data = graph_to_dict(_graph())

    nodes = {node["id"]: node for node in data["nodes"]}
    assert nodes[node_id("/ws/a.md")]["label"] == "Alpha"
    assert nodes[node_id("/ws/b.md")]["provisional"] is False
    assert nodes[node_id("/ws/c.md")]["provisional"] is True
    assert nodes[node_id("/ws/c.md")]["path"] == "/ws/c.md"
    assert data["directed"] is True
    assert data["multigraph"] is True


def test_graph_to_dict_keeps_edge_order() -> None:
    """Edges appear in the order the links were recorded."""
    data = graph_to_dict(_graph())

    pairs = [(edge["source"], edge["target"]) for edge in data["edges"]]
    assert pairs == [
        (node_id("/ws/a.md"), node_id("/ws/b.md")),
        (node_id("/ws/a.md"), node_id("/ws/c.md")),
        (node_id("/ws/b.md"), node_id("/ws/a.md")),
    ]


def test_export_json_creates_parent_directories(tmp_path: Path) -> None:
    """The output file is written as indented UTF-8 JSON."""
    output = tmp_path / "nested" / "graph.json"

    export_json(_graph(), output)

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["graph"] == {"graph_id": "/ws"}
    assert len(data["nodes"]) == 3
    assert len(data["edges"]) == 3
