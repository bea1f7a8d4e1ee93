"""Main CLI entry point for linkgraph.

Provides commands: scan, resolve
"""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from linkgraph.cli.resolve import resolve_command
from linkgraph.cli.scan import scan_command

logger = logging.getLogger("linkgraph.cli")


def setup_logging(verbose: bool = False, console: Optional[Console] = None) -> None:
    """Setup logging configuration with Rich integration.

    Args:
        verbose: Enable verbose logging.
        console: Rich Console instance for coordinated output (optional).
    """
    if verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        log_time_format="[%H:%M:%S]",
    )

    logging.basicConfig(
        level=level,
        format="[%(name)s] %(message)s",
        handlers=[handler],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        description="Linkgraph - Document Link Graph Builder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Scan command
    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a workspace and build its document link graph",
    )
    scan_parser.add_argument(
        "root",
        help="Workspace root directory",
    )
    scan_parser.add_argument(
        "-o",
        "--output",
        help="Write the graph as node-link JSON to this file",
    )
    scan_parser.add_argument(
        "-c",
        "--config",
        help=(
            "Workspace configuration: a path to a TOML/JSON file or an inline "
            "TOML/JSON string. Defaults to <root>/.linkgraph.toml when present."
        ),
    )
    scan_parser.add_argument(
        "-k",
        "--keep-going",
        action="store_true",
        help="Skip files that fail to read instead of aborting the scan",
    )

    # Resolve command
    resolve_parser = subparsers.add_parser(
        "resolve",
        help="Show the document a link resolves to",
    )
    resolve_parser.add_argument(
        "root",
        help="Workspace root directory",
    )
    resolve_parser.add_argument(
        "link",
        help="Link text as written in the document",
    )
    resolve_parser.add_argument(
        "-f",
        "--from",
        dest="referrer",
        required=True,
        help="Document containing the link (absolute or relative to root)",
    )
    resolve_parser.add_argument(
        "-c",
        "--config",
        help="Workspace configuration (see scan --config)",
    )

    return parser


def main() -> int:
    """Main CLI entry point.

    Returns:
        int: Exit code.
    """
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.command == "scan":
        return scan_command(args)
    elif args.command == "resolve":
        return resolve_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
