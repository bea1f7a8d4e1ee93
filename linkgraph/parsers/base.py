"""Document parser interface.

A parser turns raw document text into the two facts the link graph needs:
the document title and its outgoing links. Alias lookup and front-matter
handling are configured into concrete parsers as strategies rather than
registered at runtime.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

# Maps a wiki-link page name to candidate paths; the first candidate wins.
# Unknown names map to themselves.
PageResolver = Callable[[str], List[str]]


@dataclass(frozen=True)
class DocumentLink:
    """One outgoing link of a document.

    Attributes:
        target: Link target as written, or the page resolver's candidate.
        resolved: True when ``target`` already is a canonical path and must
            not be joined with the referring document or workspace root.
    """

    target: str
    resolved: bool = False


@dataclass(frozen=True)
class ParsedDocument:
    """Title and outgoing links of one document.

    Attributes:
        title: First top-level heading, or None when the document has none.
        links: Links in document order; empty when title is None.
    """

    title: Optional[str]
    links: List[DocumentLink] = field(default_factory=list)

    @property
    def has_title(self) -> bool:
        return self.title is not None


class DocumentParser(ABC):
    """Capability interface for document parsers."""

    @abstractmethod
    def parse(self, text: str) -> ParsedDocument:
        """Extract the title and links of ``text``."""
        pass
