"""Canonical graph schema models.

``Node`` and ``Edge`` are the public, immutable views of the link graph.
All code handing graph state to other components should go through these
models instead of assembling ad-hoc dictionaries.
"""

from __future__ import annotations

import hashlib
from typing import Annotated, Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


def node_id(path: str) -> str:
    """Derive the stable node identifier for a canonical document path.

    The identifier is a pure function of the path, so two documents can only
    share an id when they share a path.
    """
    return hashlib.md5(path.encode("utf-8")).hexdigest()


class Node(BaseModel):
    """A titled document in the link graph."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: Annotated[str, Field(..., description="Node identifier derived from path")]
    path: Annotated[str, Field(..., description="Canonical path of the source document")]
    label: Annotated[str, Field(..., description="Title extracted from the document")]

    @field_validator("path")
    @classmethod
    def _check_path_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("Node path must be a non-empty string")
        return value

    @classmethod
    def for_document(cls, path: str, label: str) -> "Node":
        """Build the node for ``path`` with its id derived from the path."""
        return cls(id=node_id(path), path=path, label=label)

    def to_backend_attrs(self) -> Dict[str, Any]:
        """Convert this node into a backend attribute mapping."""
        return {"path": self.path, "label": self.label, "provisional": False}


class Edge(BaseModel):
    """A directed link from one document to another, by node id.

    The target does not have to exist as a node: links to documents that were
    not parsed yet (or no longer have a title) are kept as dangling edges.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: Annotated[str, Field(..., description="Node id of the linking document")]
    target: Annotated[str, Field(..., description="Node id of the linked document")]
