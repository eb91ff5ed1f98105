"""Utility modules for the action."""

from .logging import (
    get_logger,
    setup_logging,
    log_group,
    LogLevel,
)
from .subprocess import run_command, stream_command, CommandResult, StreamResult
from .workflow import is_github_actions, is_debug, set_output, add_path

__all__ = [
    "get_logger",
    "setup_logging",
    "log_group",
    "LogLevel",
    "run_command",
    "stream_command",
    "CommandResult",
    "StreamResult",
    "is_github_actions",
    "is_debug",
    "set_output",
    "add_path",
]
