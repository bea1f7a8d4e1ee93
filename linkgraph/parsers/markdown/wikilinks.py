"""markdown-it plugin for ``[[wiki-style]]`` internal links.

``[[page]]`` and ``[[page|label]]`` become ``wikilink`` inline tokens whose
``href`` is the first candidate returned by the configured page resolver.
When that candidate differs from the page name the token is marked
``meta["resolved"]``.
"""

from typing import List, Optional, Sequence

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token

from linkgraph.parsers.base import PageResolver

WIKILINK_TOKEN = "wikilink"


def _identity_resolver(name: str) -> List[str]:
    return [name]


def wikilinks_plugin(
    md: MarkdownIt,
    page_resolver: Optional[PageResolver] = None,
    alias_divider: str = "|",
) -> None:
    """Register the wiki-link inline rule and its HTML renderer.

    Args:
        md: Parser instance to extend.
        page_resolver: Maps a page name to candidate targets.
        alias_divider: Separator between page name and display label.
    """
    resolver = page_resolver or _identity_resolver

    def wikilink_rule(state: StateInline, silent: bool) -> bool:
        start = state.pos
        if state.src[start : start + 2] != "[[":
            return False

        end = state.src.find("]]", start + 2)
        if end == -1 or end + 2 > state.posMax:
            return False

        inner = state.src[start + 2 : end]
        if "[" in inner or "\n" in inner:
            return False

        page, _, label = inner.partition(alias_divider)
        page = page.strip()
        if not page:
            return False

        if not silent:
            candidates = resolver(page)
            href = candidates[0] if candidates else page
            token = state.push(WIKILINK_TOKEN, "a", 0)
            token.attrs = {"href": href}
            token.content = label.strip() or page
            token.markup = "[["
            token.meta = {
                "page": page,
                "candidates": list(candidates),
                "resolved": href != page,
            }

        state.pos = end + 2
        return True

    md.inline.ruler.before("link", WIKILINK_TOKEN, wikilink_rule)
    md.add_render_rule(WIKILINK_TOKEN, _render_wikilink)


def _render_wikilink(self, tokens: Sequence[Token], idx: int, options, env) -> str:
    token = tokens[idx]
    href = escapeHtml(str(token.attrGet("href") or ""))
    return f'<a href="{href}" class="wikilink">{escapeHtml(token.content)}</a>'
