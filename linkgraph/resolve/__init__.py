"""Identity and link-target resolution."""

from .identity import FILE_ID_PATTERN, IdentityResolver, find_file_id
from .targets import LinkTargetResolver, decode_link, resolve_link_target

__all__ = [
    "FILE_ID_PATTERN",
    "IdentityResolver",
    "LinkTargetResolver",
    "decode_link",
    "find_file_id",
    "resolve_link_target",
]
