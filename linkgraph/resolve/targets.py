"""Resolve raw link text to the canonical path of the linked document."""

import logging
import os
import re
from types import ModuleType
from urllib.parse import unquote

from .identity import IdentityResolver

logger = logging.getLogger("linkgraph.resolve.targets")

# Escapes of ";/?:@&=+$,#" stay encoded when decoding a link.
_RESERVED_ESCAPE = re.compile(r"%(2[346BCF]|3[ABDF]|40)", re.IGNORECASE)


def decode_link(raw_link: str) -> str:
    """Percent-decode a link, keeping escaped URI delimiters intact.

    Examples:
        >>> decode_link("my%20note.md")
        'my note.md'
        >>> decode_link("a%2Fb.md")
        'a%2Fb.md'
    """
    return unquote(_RESERVED_ESCAPE.sub(r"%25\1", raw_link))


def resolve_link_target(
    raw_link: str,
    referrer_path: str,
    workspace_root: str,
    pathmod: ModuleType = os.path,
) -> str:
    """Compute the canonical path a link points to by path joining.

    Link forms, checked in order:

    - ``/images/x.png``: relative to the workspace root.
    - ``../other.md``: relative to the directory of the referring document.
    - anything already absolute for the platform: normalized as-is.

    Args:
        raw_link: Link target as written in the document (URI-encoded).
        referrer_path: Canonical path of the document containing the link.
        workspace_root: Workspace root directory; empty means filesystem root.
        pathmod: Path flavour (``posixpath`` or ``ntpath``).

    Returns:
        str: Normalized path of the link target.

    Examples:
        >>> import posixpath
        >>> resolve_link_target("/images/x.png", "/ws/sub/doc.md", "/ws", posixpath)
        '/ws/images/x.png'
        >>> resolve_link_target("../b.md", "/ws/sub/doc.md", "/ws", posixpath)
        '/ws/b.md'
    """
    link = decode_link(raw_link)

    if link.startswith("/"):
        root = workspace_root or pathmod.sep
        target = pathmod.normpath(pathmod.join(root, link.lstrip("/")))
        # Backslash platforms lose the leading separator when normalizing.
        if pathmod.sep == "\\" and not target.startswith("\\"):
            target = "\\" + target
        return target

    if not pathmod.isabs(link):
        parent = pathmod.dirname(referrer_path)
        return pathmod.normpath(f"{parent}{pathmod.sep}{link}")

    return pathmod.normpath(link)


class LinkTargetResolver:
    """Resolve links by alias first and by path joining second.

    A link whose decoded text is a known alias resolves to the aliased
    document; any other link is joined against the referring document or the
    workspace root. Links the parser already resolved (wiki links found in
    the alias table) are only normalized.
    """

    def __init__(
        self,
        workspace_root: str,
        identities: IdentityResolver,
        pathmod: ModuleType = os.path,
    ) -> None:
        self.workspace_root = workspace_root
        self.identities = identities
        self.pathmod = pathmod

    def resolve(self, raw_link: str, referrer_path: str, resolved: bool = False) -> str:
        """Return the canonical path of ``raw_link`` found in ``referrer_path``.

        Args:
            raw_link: Link target as written in the document.
            referrer_path: Canonical path of the document containing the link.
            resolved: ``raw_link`` already is a canonical path.
        """
        if resolved:
            return self.pathmod.normpath(raw_link)

        aliased = self.identities.lookup(decode_link(raw_link))
        if aliased is not None:
            return aliased

        target = resolve_link_target(
            raw_link, referrer_path, self.workspace_root, self.pathmod
        )
        logger.debug("Resolved %r from %s by path: %s", raw_link, referrer_path, target)
        return target
