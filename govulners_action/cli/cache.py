"""CLI for inspecting and clearing the tool cache."""

import argparse
from typing import Any

from ..config import TOOL_NAME
from ..core.cache import ToolCache
from .scan import configure_logging


def format_bytes(b: int) -> str:
    """Format bytes to human readable."""
    if b >= 1073741824:
        return f"{b / 1073741824:.2f} GB"
    elif b >= 1048576:
        return f"{b / 1048576:.2f} MB"
    elif b >= 1024:
        return f"{b / 1024:.2f} KB"
    return f"{b} B"


def create_cache_parser(subparsers: Any) -> argparse.ArgumentParser:
    """Create the cache subparser."""
    parser = subparsers.add_parser(
        "cache",
        help="List or clear cached govulners installs",
    )
    parser.add_argument(
        "--cache-dir",
        help="Tool cache directory (default: $RUNNER_TOOL_CACHE or ~/.cache/govulners-action/tool-cache)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove every cached govulners version",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def run_cache(args: argparse.Namespace) -> int:
    """
    List or clear cached installs.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    configure_logging(args)
    cache = ToolCache(args.cache_dir)

    if args.clear:
        cache.clear(TOOL_NAME)
        return 0

    tools = cache.list_tools(TOOL_NAME)
    print(f"📦 Tool cache: {cache.cache_dir}")
    if not tools:
        print(f"  No cached {TOOL_NAME} versions")
        return 0

    for tool in tools:
        print(f"  {tool.name} {tool.version} ({tool.arch}) {format_bytes(tool.size_bytes)}  {tool.path}")
    return 0
