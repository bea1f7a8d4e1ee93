"""Exception hierarchy for linkgraph.

Only genuine failures are modelled here. Missing titles, unknown aliases and
absent identifier markers are normal states of a workspace and never raise.
"""

from pathlib import Path
from typing import Union


class LinkGraphError(Exception):
    """Base class for all linkgraph errors."""

    pass


class DocumentReadError(LinkGraphError, OSError):
    """A document could not be read from disk.

    Raised from the read step of a per-file callback. It is not caught by the
    core, so by default it fails the whole directory walk.
    """

    def __init__(self, path: Union[str, Path], reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read document {self.path}: {reason}")


class ConfigurationError(LinkGraphError, ValueError):
    """Workspace configuration is malformed or invalid."""

    pass
