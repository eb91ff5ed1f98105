"""CLI for scanning a single target.

Equivalent to the default entrypoint of the action.
"""

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import ActionInputs, TOOL_NAME
from ..core.action import ScanAction
from ..core.inputs import build_request
from ..utils.logging import setup_logging, get_logger, LogLevel
from ..utils.workflow import is_debug, is_github_actions, set_output

logger = get_logger(__name__)

# CLI flags that override action inputs (dest == ActionInputs field)
INPUT_ARGS = (
    "image",
    "path",
    "sbom",
    "fail_build",
    "output_format",
    "severity_cutoff",
    "only_fixed",
    "add_cpes_if_none",
    "registry_username",
    "govulners_version",
)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every command."""
    parser.add_argument(
        "--cache-dir",
        help="Tool cache directory (default: $RUNNER_TOOL_CACHE or ~/.cache/govulners-action/tool-cache)",
    )
    parser.add_argument(
        "--action-file",
        help="action.yml to read input defaults from (default: $GITHUB_ACTION_PATH/action.yml)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging and scanner diagnostics",
    )


def configure_logging(args: argparse.Namespace) -> bool:
    """Set up logging for a command and return whether debug mode is on."""
    debug = bool(getattr(args, "verbose", False)) or is_debug()
    setup_logging(
        LogLevel.VERBOSE if debug else LogLevel.INFO,
        workflow_commands=is_github_actions(),
    )
    return debug


def load_inputs(args: argparse.Namespace) -> ActionInputs:
    """Merge CLI flags over ``INPUT_*`` variables and action defaults."""
    overrides: Dict[str, Optional[str]] = {
        name: getattr(args, name, None) for name in INPUT_ARGS
    }
    metadata_path = Path(args.action_file) if getattr(args, "action_file", None) else None
    return ActionInputs.from_env(overrides=overrides, metadata_path=metadata_path)


def create_scan_parser(subparsers: Any) -> argparse.ArgumentParser:
    """Create the scan subparser."""
    parser = subparsers.add_parser(
        "scan",
        help="Scan an image, directory or SBOM",
        description="""
Install govulners (reusing the tool cache), scan one target and write the
report. Every option falls back to the matching INPUT_* variable set by the
Actions runner, then to the defaults in action.yml.
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan the current directory, fail on medium or worse (defaults)
  govulners-action scan

  # Scan an image and write a JSON report
  govulners-action scan --image alpine:3.18 --output-format json

  # Scan an SBOM, only warn on high or critical findings
  govulners-action scan --sbom bom.json --severity-cutoff high --fail-build false
""",
    )

    source = parser.add_argument_group("source (mutually exclusive)")
    source.add_argument("--image", help="Container image to scan")
    source.add_argument("--path", help="Directory to scan (default: .)")
    source.add_argument("--sbom", help="SBOM file to scan")

    parser.add_argument(
        "--fail-build",
        dest="fail_build",
        help="Fail when the severity cutoff is reached (default: true)",
    )
    parser.add_argument(
        "--output-format",
        dest="output_format",
        help="Report format: sarif, json or table (default: sarif)",
    )
    parser.add_argument(
        "--severity-cutoff",
        dest="severity_cutoff",
        help="Minimum severity that fails the scan: negligible, low, medium, "
             "high or critical; empty to disable (default: medium)",
    )
    parser.add_argument(
        "--only-fixed",
        dest="only_fixed",
        help="Only report vulnerabilities that have a fix (default: false)",
    )
    parser.add_argument(
        "--add-cpes-if-none",
        dest="add_cpes_if_none",
        help="Generate CPEs for packages that have none (default: false)",
    )
    parser.add_argument(
        "--registry-username",
        dest="registry_username",
        help="Registry username; the password is read from INPUT_REGISTRY-PASSWORD",
    )
    parser.add_argument(
        "--govulners-version",
        dest="govulners_version",
        help="govulners version to install",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory for report files (default: .)",
    )
    add_common_arguments(parser)

    return parser


def run_scan(args: argparse.Namespace) -> int:
    """
    Run a scan.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code: 1 if the build is marked failed, else 0
    """
    debug = configure_logging(args)

    # Validation happens before anything is downloaded
    inputs = load_inputs(args)
    request = build_request(inputs)

    action = ScanAction.create(
        cache_dir=args.cache_dir,
        output_dir=getattr(args, "output_dir", None) or ".",
        debug=debug,
    )
    result = action.run(request, inputs.govulners_version)

    for key, value in result.outputs.items():
        set_output(key, value)

    if result.status.failed:
        logger.error(result.status.message)
        return 1

    logger.success(f"{TOOL_NAME} scan of {request.source} completed")
    return 0


def default_args(**values: Any) -> argparse.Namespace:
    """Namespace for running without a sub-command (action entrypoint)."""
    namespace = argparse.Namespace(
        cache_dir=None,
        action_file=None,
        verbose=False,
        output_dir=".",
    )
    for name in INPUT_ARGS:
        setattr(namespace, name, None)
    for name, value in values.items():
        setattr(namespace, name, value)
    return namespace
