"""Tests for document discovery and the concurrent directory walk."""

import asyncio
from pathlib import Path
from typing import List

import pytest

from linkgraph.config import WorkspaceConfig
from linkgraph.graph import LinkGraph
from linkgraph.runtime.walker import FileFailure, find_documents, is_hidden, walk


def _touch(path: Path, text: str = "# Doc\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_find_documents_matches_configured_types(tmp_path: Path) -> None:
    """Only files with configured extensions are found, in sorted order."""
    _touch(tmp_path / "b.md")
    _touch(tmp_path / "a.md")
    _touch(tmp_path / "notes" / "c.md")
    _touch(tmp_path / "image.png", "binary")
    _touch(tmp_path / "page.markdown")

    found = find_documents(tmp_path, WorkspaceConfig())

    root = tmp_path.resolve()
    assert found == [root / "a.md", root / "b.md", root / "notes" / "c.md"]

    both = find_documents(tmp_path, WorkspaceConfig(file_types=["md", ".markdown"]))
    assert root / "page.markdown" in both


def test_find_documents_honors_exclude_and_gitignore(tmp_path: Path) -> None:
    """Excluded globs, .gitignore entries and VCS folders are skipped."""
    _touch(tmp_path / "keep.md")
    _touch(tmp_path / "drafts" / "wip.md")
    _touch(tmp_path / "build" / "out.md")
    _touch(tmp_path / ".git" / "notes.md")
    _touch(tmp_path / "scratch.md")
    (tmp_path / ".gitignore").write_text("# generated\nbuild/\n", encoding="utf-8")

    config = WorkspaceConfig(exclude=["drafts/", "scratch.md"])
    found = [path.relative_to(tmp_path.resolve()).as_posix() for path in find_documents(tmp_path, config)]

    assert found == ["keep.md"]

    config = WorkspaceConfig(exclude=["drafts/", "scratch.md"], respect_gitignore=False)
    found = [path.relative_to(tmp_path.resolve()).as_posix() for path in find_documents(tmp_path, config)]

    assert found == ["build/out.md", "keep.md"]


def test_is_hidden_checks_file_name_only() -> None:
    """Hidden means the base name starts with a dot."""
    assert is_hidden("/ws/.draft.md")
    assert not is_hidden("/ws/.hidden-dir/visible.md")


def test_walk_skips_hidden_files() -> None:
    """Callbacks never run for dot files."""
    seen: List[str] = []

    async def callback(graph: LinkGraph, path: str) -> None:
        seen.append(path)

    failures = asyncio.run(walk(LinkGraph(), ["/ws/a.md", "/ws/.b.md"], callback))

    assert seen == ["/ws/a.md"]
    assert failures == []


def test_walk_starts_every_callback_before_any_finishes() -> None:
    """All callbacks are in flight at the same time."""
    paths = [f"/ws/doc{i}.md" for i in range(5)]
    started: List[str] = []
    everyone_started = asyncio.Event()

    async def callback(graph: LinkGraph, path: str) -> None:
        started.append(path)
        if len(started) == len(paths):
            everyone_started.set()
        await asyncio.wait_for(everyone_started.wait(), timeout=1)

    asyncio.run(walk(LinkGraph(), paths, callback))

    assert sorted(started) == sorted(paths)


def test_walk_propagates_first_failure_after_all_settle() -> None:
    """Without isolation the first failure raises, but every callback ran."""
    finished: List[str] = []

    async def callback(graph: LinkGraph, path: str) -> None:
        await asyncio.sleep(0)
        if path.endswith("bad.md"):
            raise ValueError(path)
        finished.append(path)

    with pytest.raises(ValueError, match="bad.md"):
        asyncio.run(walk(LinkGraph(), ["/ws/a.md", "/ws/bad.md", "/ws/c.md"], callback))

    assert sorted(finished) == ["/ws/a.md", "/ws/c.md"]


def test_walk_isolates_failures_when_requested() -> None:
    """In isolation mode failures are returned instead of raised."""

    async def callback(graph: LinkGraph, path: str) -> None:
        if path.endswith("bad.md"):
            raise ValueError("broken")

    failures = asyncio.run(
        walk(LinkGraph(), ["/ws/a.md", "/ws/bad.md"], callback, isolate_failures=True)
    )

    assert len(failures) == 1
    assert isinstance(failures[0], FileFailure)
    assert failures[0].path == "/ws/bad.md"
    assert str(failures[0]) == "/ws/bad.md: broken"
