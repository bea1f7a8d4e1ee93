"""Markdown document parser built on markdown-it-py."""

import logging
from typing import List, Optional

from markdown_it import MarkdownIt
from markdown_it.token import Token
from mdit_py_plugins.front_matter import front_matter_plugin

from linkgraph.parsers.base import DocumentParser, PageResolver, ParsedDocument

from .extract import find_links, find_title
from .wikilinks import wikilinks_plugin

logger = logging.getLogger("linkgraph.parsers.markdown.parser")


class MarkdownDocumentParser(DocumentParser):
    """CommonMark parser with wiki links and a leading front-matter block.

    Front matter is recognised so that it is not mistaken for document
    content, but its fields are not interpreted.
    """

    def __init__(
        self,
        page_resolver: Optional[PageResolver] = None,
        title_max_length: int = 0,
        alias_divider: str = "|",
    ) -> None:
        """Initialize parser.

        Args:
            page_resolver: Alias lookup used for wiki-link targets.
            title_max_length: Titles longer than this are abbreviated (0 disables).
            alias_divider: Separator between wiki-link page and label.
        """
        self.title_max_length = title_max_length
        self._md = (
            MarkdownIt("commonmark")
            .use(front_matter_plugin)
            .use(wikilinks_plugin, page_resolver=page_resolver, alias_divider=alias_divider)
        )

    def parse_tokens(self, text: str) -> List[Token]:
        """Return the raw markdown-it token stream of ``text``."""
        return self._md.parse(text)

    def parse(self, text: str) -> ParsedDocument:
        tokens = self.parse_tokens(text)
        title = find_title(tokens, self.title_max_length)
        if title is None:
            return ParsedDocument(title=None, links=[])
        links = find_links(tokens)
        logger.debug("Parsed document %r with %d links", title, len(links))
        return ParsedDocument(title=title, links=links)

    def render(self, text: str) -> str:
        return self._md.render(text)
