"""Directory walking: find workspace documents and process them concurrently."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Iterable, List, Union

from linkgraph.config import WorkspaceConfig
from linkgraph.graph import LinkGraph
from linkgraph.utils.scanner import load_gitignore_patterns, scan_files

logger = logging.getLogger("linkgraph.runtime.walker")

FileCallback = Callable[[LinkGraph, str], Awaitable[None]]


@dataclass(frozen=True)
class FileFailure:
    """A per-file callback that raised while failures were isolated."""

    path: str
    error: BaseException

    def __str__(self) -> str:
        return f"{self.path}: {self.error}"


def is_hidden(path: Union[str, Path]) -> bool:
    """Whether the file name starts with the hidden-file marker."""
    return Path(path).name.startswith(".")


def find_documents(root: Union[str, Path], config: WorkspaceConfig) -> List[Path]:
    """List document files under ``root`` honoring the exclude configuration."""
    root_path = Path(root).resolve()
    ignore = list(config.exclude)
    if config.respect_gitignore:
        ignore.extend(load_gitignore_patterns(root_path))

    files = list(scan_files(root_path, config.file_patterns(), ignore_patterns=ignore))
    logger.debug("Found %d candidate documents under %s", len(files), root_path)
    return files


async def walk(
    graph: LinkGraph,
    files: Iterable[Union[str, Path]],
    callback: FileCallback,
    isolate_failures: bool = False,
) -> List[FileFailure]:
    """Run ``callback(graph, path)`` for every non-hidden file concurrently.

    Every callback is scheduled before any of them is awaited, and the walk
    returns once all of them have settled.

    Args:
        graph: Graph handed to each callback.
        files: Candidate file paths.
        callback: Async per-file operation.
        isolate_failures: When False the first failure is re-raised after the
            other callbacks finish; when True failures are logged and returned.

    Returns:
        List[FileFailure]: Failures collected in isolation mode (empty otherwise).
    """
    paths = [str(path) for path in files if not is_hidden(path)]
    results = await asyncio.gather(
        *(callback(graph, path) for path in paths), return_exceptions=True
    )

    failures = [
        FileFailure(path=path, error=result)
        for path, result in zip(paths, results)
        if isinstance(result, BaseException)
    ]

    if failures and not isolate_failures:
        raise failures[0].error

    for failure in failures:
        logger.warning("Skipping %s", failure)

    logger.debug("Walked %d files (%d failed)", len(paths), len(failures))
    return failures
