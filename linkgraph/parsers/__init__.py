"""Document parsers."""

from linkgraph.parsers.base import (
    DocumentLink,
    DocumentParser,
    PageResolver,
    ParsedDocument,
)
from linkgraph.parsers.markdown import MarkdownDocumentParser

__all__ = [
    "DocumentLink",
    "DocumentParser",
    "MarkdownDocumentParser",
    "PageResolver",
    "ParsedDocument",
]
