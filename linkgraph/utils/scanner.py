"""File scanner using scandir and generator pattern."""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Generator, List, Optional

logger = logging.getLogger("linkgraph.utils.scanner")

ALWAYS_IGNORED = [".git", ".svn", ".hg", "__pycache__"]


def load_gitignore_patterns(root_path: Path) -> List[str]:
    """Load patterns from .gitignore in the root path."""
    gitignore = root_path / ".gitignore"
    patterns = []
    if gitignore.exists():
        try:
            with open(gitignore, "r", encoding="utf-8") as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith(("#", "!")):
                        patterns.append(line)
        except OSError as exc:
            logger.warning("Failed to read .gitignore at %s: %s", gitignore, exc)
    return patterns


def _is_ignored(path: Path, is_dir: bool, root_path: Path, ignore_patterns: List[str]) -> bool:
    """Check if path matches any ignore pattern.

    This is a simplified implementation of gitignore logic.
    It checks the relative path against glob patterns.
    """
    str_path = path.relative_to(root_path).as_posix()

    for pattern in ignore_patterns:
        if pattern.endswith("/"):
            # Directory-only patterns (e.g. dist/)
            if not is_dir:
                continue
            pattern = pattern.rstrip("/")

        pattern = pattern.lstrip("/")
        if (
            fnmatch.fnmatch(str_path, pattern)
            or fnmatch.fnmatch(path.name, pattern)
            or fnmatch.fnmatch(str_path, f"**/{pattern}")
        ):
            return True

    return False


def scan_files(
    root_path: Path,
    patterns: List[str],
    ignore_patterns: Optional[List[str]] = None,
    recursive: bool = True,
) -> Generator[Path, None, None]:
    """Scan files matching patterns, respecting ignores.

    Args:
        root_path: Root directory to scan.
        patterns: List of glob patterns to include (e.g. ['*.md']).
        ignore_patterns: List of glob patterns to ignore.
        recursive: Whether to scan recursively.

    Yields:
        Path objects for matching files, in sorted depth-first order.
    """
    root_path = root_path.resolve()
    ignores = (ignore_patterns or []) + ALWAYS_IGNORED

    stack = [root_path]

    while stack:
        current_dir = stack.pop()

        try:
            # Sort for deterministic order
            entries = sorted(os.scandir(current_dir), key=lambda e: e.name)
        except PermissionError:
            logger.debug("Permission denied, skipping %s", current_dir)
            continue

        dirs = []
        files = []

        for entry in entries:
            path = Path(entry.path)
            is_dir = entry.is_dir()

            if _is_ignored(path, is_dir, root_path, ignores):
                continue

            if is_dir:
                if recursive:
                    dirs.append(path)
            else:
                files.append(path)

        # Add dirs to stack (reversed to maintain order when popping)
        stack.extend(reversed(dirs))

        for file_path in files:
            if any(fnmatch.fnmatch(file_path.name, pattern) for pattern in patterns):
                yield file_path
