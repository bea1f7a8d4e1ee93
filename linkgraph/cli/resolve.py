"""Resolve command: show where a link written in a document points."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from linkgraph.cli.scan import load_command_config
from linkgraph.errors import LinkGraphError
from linkgraph.graph import LinkGraph, node_id
from linkgraph.runtime.workspace import Workspace, canonical_path

logger = logging.getLogger("linkgraph.cli.resolve")


def resolve_command(args, console: Optional[Console] = None) -> int:
    """Execute resolve command.

    Learns the identities of the workspace, then resolves ``args.link`` as if
    it was written in the document ``args.referrer``.

    Returns:
        int: Exit code.
    """
    console = console or Console()
    root = Path(args.root).expanduser()
    if not root.is_dir():
        logger.error("Workspace root is not a directory: %s", root)
        return 1

    try:
        config = load_command_config(root, getattr(args, "config", None))
        workspace = Workspace(root, config=config)
        asyncio.run(workspace.parse_directory(LinkGraph(), workspace.learn_file_id))
    except LinkGraphError as e:
        logger.error("Resolve failed: %s", e)
        return 1

    referrer = Path(args.referrer)
    if not referrer.is_absolute():
        referrer = Path(workspace.root) / referrer
    target = workspace.targets.resolve(args.link, canonical_path(referrer))

    console.print(f"{args.link} -> {target}", markup=False, highlight=False)
    console.print(f"node id: {node_id(target)}", markup=False, highlight=False)
    return 0
