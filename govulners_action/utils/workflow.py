"""GitHub Actions runner integration: step outputs, PATH and debug detection."""

import os
import uuid
from typing import Mapping, MutableMapping, Optional

from .logging import get_logger

logger = get_logger(__name__)


def is_github_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check if we are running inside a GitHub Actions job."""
    environ = os.environ if environ is None else environ
    return environ.get("GITHUB_ACTIONS", "").lower() == "true"


def is_debug(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check if runner or step debug logging is enabled."""
    environ = os.environ if environ is None else environ
    return (
        environ.get("RUNNER_DEBUG", "") == "1"
        or environ.get("ACTIONS_STEP_DEBUG", "").lower() == "true"
    )


def _append_file_command(path: str, text: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)


def set_output(
    name: str,
    value: str,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Publish a step output.

    Writes to the ``$GITHUB_OUTPUT`` file when the runner provides one,
    otherwise the output is only logged.

    Args:
        name: Output name
        value: Output value
        environ: Environment to read the file location from
    """
    environ = os.environ if environ is None else environ
    output_file = environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.info(f"Output {name}={value}")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    _append_file_command(output_file, f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
    logger.debug(f"Set output {name}={value}")


def add_path(
    directory: str,
    environ: Optional[MutableMapping[str, str]] = None,
) -> None:
    """
    Make a directory discoverable to this process and later steps.

    Prepends to ``PATH`` in ``environ`` and appends to the ``$GITHUB_PATH``
    file when present.

    Args:
        directory: Directory to add
        environ: Environment to update (defaults to ``os.environ``)
    """
    environ = os.environ if environ is None else environ
    path_file = environ.get("GITHUB_PATH")
    if path_file:
        _append_file_command(path_file, f"{directory}\n")

    current = environ.get("PATH", "")
    entries = current.split(os.pathsep) if current else []
    if directory not in entries:
        environ["PATH"] = os.pathsep.join([directory] + entries)
    logger.debug(f"Added to PATH: {directory}")
