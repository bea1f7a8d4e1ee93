"""Tests for linkgraph CLI entrypoints."""

from __future__ import annotations

import io
import json
import logging
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from rich.console import Console

import linkgraph.main as main
from linkgraph.cli.resolve import resolve_command
from linkgraph.cli.scan import scan_command
from linkgraph.graph import node_id


def _console() -> Console:
    return Console(file=io.StringIO(), width=400, color_system=None)


def _workspace(tmp_path: Path) -> Path:
    root = tmp_path / "notes"
    (root / "sub").mkdir(parents=True)
    (root / "a.md").write_text("# Alpha\n\n[[b]] [missing](missing.md)\n", encoding="utf-8")
    (root / "sub" / "b.md").write_text("id: bee\n# Beta\n[home](/a.md)\n", encoding="utf-8")
    return root


def test_main_dispatches_scan_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Verify that `main` parses args and dispatches scan_command."""
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)

    captured: dict[str, object] = {}

    def fake_scan_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "scan_command", fake_scan_command)

    argv = ["linkgraph", "scan", str(tmp_path), "-o", str(tmp_path / "graph.json"), "-k"]
    monkeypatch.setattr(sys, "argv", argv)

    exit_code = main.main()

    assert exit_code == 0
    parsed = captured["args"]
    assert parsed.root == str(tmp_path)
    assert parsed.output == str(tmp_path / "graph.json")
    assert parsed.keep_going is True
    assert parsed.config is None


def test_main_dispatches_resolve_command(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """The resolve subcommand requires --from and forwards the link."""
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)

    captured: dict[str, object] = {}

    def fake_resolve_command(args) -> int:
        captured["args"] = args
        return 0

    monkeypatch.setattr(main, "resolve_command", fake_resolve_command)
    monkeypatch.setattr(sys, "argv", ["linkgraph", "resolve", str(tmp_path), "bee", "--from", "a.md"])

    assert main.main() == 0
    parsed = captured["args"]
    assert parsed.link == "bee"
    assert parsed.referrer == "a.md"


def test_main_without_command_prints_help(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """No subcommand prints usage and fails."""
    monkeypatch.setattr(main, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(sys, "argv", ["linkgraph"])

    assert main.main() == 1
    assert "Document Link Graph Builder" in capsys.readouterr().out


def test_scan_command_builds_and_exports(tmp_path: Path) -> None:
    """Scanning a workspace prints a summary and writes node-link JSON."""
    root = _workspace(tmp_path)
    output = tmp_path / "out" / "graph.json"
    console = _console()
    args = SimpleNamespace(root=str(root), output=str(output), config=None, keep_going=False)

    exit_code = scan_command(args, console=console)

    assert exit_code == 0
    text = console.file.getvalue()
    assert "Documents" in text
    assert "Dangling edges" in text

    data = json.loads(output.read_text(encoding="utf-8"))
    labels = sorted(node["label"] for node in data["nodes"] if not node["provisional"])
    assert labels == ["Alpha", "Beta"]
    assert len(data["edges"]) == 3
    assert data["graph"]["graph_id"] == str(root.resolve())


def test_scan_command_uses_workspace_config_file(tmp_path: Path) -> None:
    """A .linkgraph.toml at the root is picked up automatically."""
    root = _workspace(tmp_path)
    (root / ".linkgraph.toml").write_text('exclude = ["sub/"]\n', encoding="utf-8")
    output = tmp_path / "graph.json"
    args = SimpleNamespace(root=str(root), output=str(output), config=None, keep_going=False)

    assert scan_command(args, console=_console()) == 0

    data = json.loads(output.read_text(encoding="utf-8"))
    assert [node["label"] for node in data["nodes"] if not node["provisional"]] == ["Alpha"]


def test_scan_command_rejects_bad_config(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Invalid configuration fails with exit code 1."""
    root = _workspace(tmp_path)
    args = SimpleNamespace(
        root=str(root), output=None, config="title_max_length = -3", keep_going=False
    )

    with caplog.at_level(logging.ERROR, logger="linkgraph.cli.scan"):
        assert scan_command(args, console=_console()) == 1

    assert "Scan failed" in caplog.text


def test_scan_command_missing_root(tmp_path: Path) -> None:
    args = SimpleNamespace(root=str(tmp_path / "nope"), output=None, config=None, keep_going=False)

    assert scan_command(args, console=_console()) == 1


def test_resolve_command_prints_target(tmp_path: Path) -> None:
    """Declared ids resolve to the declaring document."""
    root = _workspace(tmp_path)
    console = _console()
    args = SimpleNamespace(root=str(root), link="bee", referrer="a.md", config=None)

    assert resolve_command(args, console=console) == 0

    target = str(root.resolve() / "sub" / "b.md")
    lines = console.file.getvalue().splitlines()
    assert lines == [f"bee -> {target}", f"node id: {node_id(target)}"]


def test_resolve_command_falls_back_to_path_joining(tmp_path: Path) -> None:
    """Links that are not aliases are joined with the referrer directory."""
    root = _workspace(tmp_path)
    console = _console()
    args = SimpleNamespace(root=str(root), link="../c.md", referrer="sub/b.md", config=None)

    assert resolve_command(args, console=console) == 0

    target = str(root.resolve() / "c.md")
    assert console.file.getvalue().splitlines()[0] == f"../c.md -> {target}"
