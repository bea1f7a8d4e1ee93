"""Alias table mapping document identifiers to canonical paths."""

import logging
import os
import re
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger("linkgraph.resolve.identity")

# A single ``id: <token>`` line anywhere in the raw text.
FILE_ID_PATTERN = re.compile(r"^id:[ \t]*(\S+)[ \t]*\r?$", re.MULTILINE)


def find_file_id(content: str) -> Optional[str]:
    """Return the explicit identifier declared in ``content``, if any.

    The first marker line wins; content without a marker declares no id.
    """
    match = FILE_ID_PATTERN.search(content)
    return match.group(1) if match else None


class IdentityResolver:
    """Resolve aliases (declared ids and file names) to canonical paths.

    One resolver belongs to one workspace session. It only ever grows while
    documents are learned: re-learning a document adds or overwrites aliases
    (last writer wins) but never removes the ones it declared before.

    Example:
        >>> resolver = IdentityResolver()
        >>> resolver.learn("/docs/note-one.md", "id: note1\\n# Note")
        ['note1', 'note-one.md', 'note-one']
        >>> resolver.resolve_alias("note1")
        ['/docs/note-one.md']
        >>> resolver.resolve_alias("unknown")
        ['unknown']
    """

    def __init__(self) -> None:
        self._aliases: Dict[str, str] = {}

    def resolve_alias(self, alias: str) -> List[str]:
        """Return the candidate paths for ``alias``.

        Unknown aliases resolve to themselves so the caller can interpret
        them as literal paths.
        """
        path = self._aliases.get(alias)
        if path is None:
            return [alias]
        return [path]

    def lookup(self, alias: str) -> Optional[str]:
        return self._aliases.get(alias)

    def register(self, alias: str, path: str) -> None:
        if not alias:
            return
        previous = self._aliases.get(alias)
        if previous is not None and previous != path:
            logger.debug("Alias %r moved from %s to %s", alias, previous, path)
        self._aliases[alias] = path

    def learn(self, path: str, content: str) -> List[str]:
        """Register every alias of the document at ``path``.

        Aliases are the explicit identifier (when declared) and the file name
        with and without its extension.

        Args:
            path: Canonical path of the document.
            content: Raw document text.

        Returns:
            List[str]: The aliases registered, in registration order.
        """
        file_name = os.path.basename(path)
        stem = os.path.splitext(file_name)[0]

        aliases: List[str] = []
        file_id = find_file_id(content)
        if file_id is not None:
            aliases.append(file_id)
        aliases.extend([file_name, stem])

        registered = []
        for alias in aliases:
            if alias and alias not in registered:
                self.register(alias, path)
                registered.append(alias)

        logger.debug("Learned %d aliases for %s", len(registered), path)
        return registered

    def forget(self, path: str) -> int:
        """Drop every alias pointing at ``path``.

        Returns:
            int: Number of aliases removed.
        """
        stale = [alias for alias, target in self._aliases.items() if target == path]
        for alias in stale:
            del self._aliases[alias]
        if stale:
            logger.debug("Forgot %d aliases for %s", len(stale), path)
        return len(stale)

    def aliases_for(self, path: str) -> List[str]:
        return [alias for alias, target in self._aliases.items() if target == path]

    def __contains__(self, alias: object) -> bool:
        return alias in self._aliases

    def __iter__(self) -> Iterator[str]:
        return iter(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)
