"""Configuration schema and validation for linkgraph."""

from .schema import WorkspaceConfig

__all__ = [
    "WorkspaceConfig",
]
