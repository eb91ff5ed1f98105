"""CLI for installing govulners without scanning.

Equivalent to the download-govulners entrypoint of the action.
"""

import argparse
from typing import Any

from ..config import TOOL_NAME
from ..core.action import ScanAction
from ..utils.logging import get_logger
from ..utils.workflow import set_output
from .scan import add_common_arguments, configure_logging, load_inputs

logger = get_logger(__name__)


def create_download_parser(subparsers: Any) -> argparse.ArgumentParser:
    """Create the download subparser."""
    parser = subparsers.add_parser(
        "download",
        help="Install govulners and print its path",
        description="""
Install a govulners version into the tool cache (or reuse a cached one), add
it to PATH for later steps and publish its path as the 'cmd' output.
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--govulners-version",
        dest="govulners_version",
        help="govulners version to install",
    )
    add_common_arguments(parser)
    return parser


def run_download(args: argparse.Namespace) -> int:
    """
    Install govulners.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    debug = configure_logging(args)
    inputs = load_inputs(args)

    action = ScanAction.create(cache_dir=args.cache_dir, debug=debug)
    tool = action.install(inputs.govulners_version)

    logger.info(f"Downloaded {TOOL_NAME.capitalize()} to: {tool.executable_path}")
    set_output("cmd", tool.executable_path)
    return 0
