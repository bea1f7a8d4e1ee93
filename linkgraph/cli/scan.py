"""Scan command implementation."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from linkgraph.config import WorkspaceConfig
from linkgraph.errors import LinkGraphError
from linkgraph.export.json import export_json
from linkgraph.graph import LinkGraph
from linkgraph.runtime.config_loader import find_config_file, load_workspace_config
from linkgraph.runtime.workspace import Workspace

logger = logging.getLogger("linkgraph.cli.scan")


def load_command_config(root: Path, config_arg: Optional[str]) -> WorkspaceConfig:
    """Load the config named on the command line, else the workspace default."""
    source = config_arg if config_arg else find_config_file(root)
    return load_workspace_config(source)


def _summary_table(workspace: Workspace, graph: LinkGraph, elapsed: float) -> Table:
    table = Table(title=f"Link graph: {workspace.root}", show_header=False)
    table.add_column("metric", style="bold")
    table.add_column("value", justify="right")
    table.add_row("Documents", str(graph.node_count()))
    table.add_row("Edges", str(graph.edge_count()))
    table.add_row("Dangling edges", str(len(graph.dangling_edges())))
    table.add_row("Aliases", str(len(workspace.identities)))
    table.add_row("Failed files", str(len(workspace.failures)))
    table.add_row("Elapsed", f"{elapsed:.2f}s")
    return table


def scan_command(args, console: Optional[Console] = None) -> int:
    """Execute scan command.

    Args:
        args: Parsed command-line arguments.
        console: Rich console for the summary (defaults to stdout).

    Returns:
        int: Exit code.
    """
    console = console or Console()
    root = Path(args.root).expanduser()
    if not root.is_dir():
        logger.error("Workspace root is not a directory: %s", root)
        return 1

    start_time = time.time()
    try:
        config = load_command_config(root, getattr(args, "config", None))
        if getattr(args, "keep_going", False):
            config = config.model_copy(update={"isolate_failures": True})

        workspace = Workspace(root, config=config)
        graph = asyncio.run(workspace.build())

        output = getattr(args, "output", None)
        if output:
            export_json(graph, Path(output))
    except (LinkGraphError, OSError) as e:
        logger.error("Scan failed: %s", e)
        return 1

    console.print(_summary_table(workspace, graph, time.time() - start_time))
    for failure in workspace.failures:
        console.print(f"[yellow]skipped[/yellow] {escape(str(failure))}")
    return 0
