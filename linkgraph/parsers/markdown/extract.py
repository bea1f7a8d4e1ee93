"""Pure title and link extraction over a markdown-it token stream."""

from typing import Iterator, List, Optional, Sequence

from markdown_it.token import Token

from linkgraph.parsers.base import DocumentLink

from .wikilinks import WIKILINK_TOKEN


def _heading_text(inline: Token) -> str:
    # Only the first piece of text counts, so "# Hello *world*" yields "Hello"
    # and "# **Bold** rest" yields "Bold".
    for child in inline.children or []:
        text = child.content.strip()
        if text:
            return text
    return inline.content.strip()


def find_title(tokens: Sequence[Token], max_length: int = 0) -> Optional[str]:
    """Return the first top-level ``h1`` heading of the document.

    Headings nested in block quotes or lists do not count. When
    ``max_length`` is positive, longer titles are cut and suffixed with
    ``"..."``.
    """
    for idx, token in enumerate(tokens):
        if token.type != "heading_open" or token.tag != "h1" or token.level != 0:
            continue
        if idx + 1 >= len(tokens) or tokens[idx + 1].type != "inline":
            continue

        title = _heading_text(tokens[idx + 1])
        if not title:
            continue
        if max_length > 0 and len(title) > max_length:
            title = title[:max_length] + "..."
        return title
    return None


def _walk(tokens: Sequence[Token]) -> Iterator[Token]:
    for token in tokens:
        yield token
        if token.children:
            yield from _walk(token.children)


def find_links(tokens: Sequence[Token]) -> List[DocumentLink]:
    """Return every link (markdown and wiki links) in document order.

    Wiki links whose page was found by the page resolver carry the resolved
    path and are flagged so they are not joined as paths again.
    """
    links: List[DocumentLink] = []
    for token in _walk(tokens):
        if token.type == "link_open":
            href = token.attrGet("href")
            if href:
                links.append(DocumentLink(str(href)))
        elif token.type == WIKILINK_TOKEN:
            href = token.attrGet("href")
            if href:
                resolved = bool(token.meta.get("resolved"))
                links.append(DocumentLink(str(href), resolved=resolved))
    return links
