"""CLI entry points for the action."""

import sys
import argparse
from typing import List, Optional

from ..config import get_input
from ..errors import ActionError
from ..utils.logging import get_logger
from .scan import create_scan_parser, run_scan, default_args
from .download import create_download_parser, run_download
from .cache import create_cache_parser, run_cache

logger = get_logger(__name__)

DOWNLOAD_ENTRYPOINT = "download-govulners"


def create_main_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="govulners-action",
        description="Scan images, directories and SBOMs with govulners in CI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan       Install govulners and scan a target (default)
  download   Install govulners and publish its path as the 'cmd' output
  cache      List or clear cached govulners installs

Without a command the action entrypoint runs: 'download' when the run input
(INPUT_RUN) is download-govulners, 'scan' otherwise.

Examples:
  govulners-action scan --image alpine:3.18 --severity-cutoff high
  govulners-action download --govulners-version v0.65.1
  govulners-action cache --clear
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    create_scan_parser(subparsers)
    create_download_parser(subparsers)
    create_cache_parser(subparsers)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_main_parser()
    args = parser.parse_args(argv)

    command_handlers = {
        "scan": run_scan,
        "download": run_download,
        "cache": run_cache,
    }

    if not args.command:
        # Invoked as the action entrypoint
        handler = run_download if get_input("run") == DOWNLOAD_ENTRYPOINT else run_scan
        args = default_args()
    else:
        handler = command_handlers[args.command]

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n\nOperation cancelled by user", file=sys.stderr)
        return 130
    except ActionError as e:
        logger.error(str(e))
        return 1


__all__ = ["main", "create_main_parser"]
