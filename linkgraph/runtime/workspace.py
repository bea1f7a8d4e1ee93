"""Workspace session: identity learning, document parsing and graph updates.

A ``Workspace`` owns everything one scan needs besides the graph itself:
the configuration, the identity table, the link-target resolver and the
document parser. Graphs are passed in explicitly so callers decide whether a
graph outlives the session.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from linkgraph.config import WorkspaceConfig
from linkgraph.errors import DocumentReadError
from linkgraph.graph import LinkGraph
from linkgraph.parsers import DocumentParser, MarkdownDocumentParser
from linkgraph.resolve import IdentityResolver, LinkTargetResolver

from .walker import FileCallback, FileFailure, find_documents, walk

logger = logging.getLogger("linkgraph.runtime.workspace")


def canonical_path(path: Union[str, Path]) -> str:
    """Normalize a document path the way graph nodes store it."""
    return os.path.normpath(os.fspath(path))


async def read_document(path: str) -> str:
    """Read a document as UTF-8 text without blocking the event loop.

    Raises:
        DocumentReadError: If the file cannot be read.
    """
    try:
        data = await asyncio.to_thread(Path(path).read_bytes)
    except OSError as exc:
        raise DocumentReadError(path, exc.strerror or str(exc)) from exc
    return data.decode("utf-8", errors="replace")


class Workspace:
    """Link-graph session over one workspace root.

    Example:
        >>> workspace = Workspace("/notes")
        >>> graph = asyncio.run(workspace.build())
    """

    def __init__(
        self,
        root: Union[str, Path],
        config: Optional[WorkspaceConfig] = None,
        parser: Optional[DocumentParser] = None,
    ) -> None:
        """Initialize workspace session.

        Args:
            root: Workspace root directory.
            config: Workspace configuration. Defaults to WorkspaceConfig().
            parser: Document parser. Defaults to a markdown parser wired to
                this session's identity table.
        """
        self.root = canonical_path(Path(root).resolve())
        self.config = config or WorkspaceConfig.default()
        self.identities = IdentityResolver()
        self.targets = LinkTargetResolver(self.root, self.identities)
        self.parser: DocumentParser = parser or MarkdownDocumentParser(
            page_resolver=self.identities.resolve_alias,
            title_max_length=self.config.title_max_length,
            alias_divider=self.config.alias_divider,
        )
        self.failures: List[FileFailure] = []
        logger.debug("Workspace initialized at %s", self.root)

    async def learn_file_id(self, graph: LinkGraph, path: Union[str, Path]) -> None:
        """Register the aliases of one document. Does not touch ``graph``."""
        file_path = canonical_path(path)
        content = await read_document(file_path)
        self.identities.learn(file_path, content)

    async def parse_file(self, graph: LinkGraph, path: Union[str, Path]) -> None:
        """Parse one document and apply its title and links to ``graph``."""
        file_path = canonical_path(path)
        content = await read_document(file_path)

        document = self.parser.parse(content)
        targets = [
            self.targets.resolve(link.target, file_path, resolved=link.resolved)
            for link in document.links
        ]
        graph.apply_document(file_path, document.title, targets)

        logger.debug(
            "Parsed %s: title=%r, %d links", file_path, document.title, len(targets)
        )

    def remove_file(self, graph: LinkGraph, path: Union[str, Path]) -> bool:
        """Forget a deleted document: graph node, outgoing edges and aliases."""
        file_path = canonical_path(path)
        self.identities.forget(file_path)
        return graph.remove_document(file_path)

    def find_files(self) -> List[Path]:
        return find_documents(self.root, self.config)

    async def parse_directory(
        self, graph: LinkGraph, callback: FileCallback
    ) -> List[FileFailure]:
        """Run ``callback`` over every document of the workspace concurrently."""
        return await walk(
            graph,
            self.find_files(),
            callback,
            isolate_failures=self.config.isolate_failures,
        )

    async def build(self, graph: Optional[LinkGraph] = None) -> LinkGraph:
        """Learn every identity, then parse every document into ``graph``.

        Identities are learned in a full pass first so links to ids declared
        by documents later in scan order resolve.
        """
        graph = graph if graph is not None else LinkGraph(graph_id=self.root)

        self.failures = []
        self.failures.extend(await self.parse_directory(graph, self.learn_file_id))
        logger.info("Learned %d aliases under %s", len(self.identities), self.root)

        self.failures.extend(await self.parse_directory(graph, self.parse_file))
        logger.info(
            "Built graph for %s: %d documents, %d edges",
            self.root,
            graph.node_count(),
            graph.edge_count(),
        )
        return graph
