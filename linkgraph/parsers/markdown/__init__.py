"""Markdown support: parser, wiki-link plugin and token extraction."""

from .extract import find_links, find_title
from .parser import MarkdownDocumentParser
from .wikilinks import WIKILINK_TOKEN, wikilinks_plugin

__all__ = [
    "MarkdownDocumentParser",
    "WIKILINK_TOKEN",
    "find_links",
    "find_title",
    "wikilinks_plugin",
]
