"""Logging utilities for the action."""

import logging
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Optional, Iterator, TextIO

ROOT_LOGGER = "govulners_action"


class LogLevel(Enum):
    """Log level enumeration."""
    NONE = "none"
    INFO = "info"
    VERBOSE = "verbose"


# Custom log level
STEP = 25  # Between INFO and WARNING

# Global state set by setup_logging
_workflow_mode = False
_stream: TextIO = sys.stderr


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors and emojis to log messages."""

    COLORS = {
        logging.DEBUG: "\033[36m",    # Cyan
        logging.INFO: "\033[0m",      # Reset
        STEP: "\033[34m",             # Blue
        logging.WARNING: "\033[33m",  # Yellow
        logging.ERROR: "\033[31m",    # Red
        logging.CRITICAL: "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    EMOJIS = {
        logging.DEBUG: "🔍",
        logging.INFO: "ℹ️ ",
        STEP: "📋",
        logging.WARNING: "⚠️ ",
        logging.ERROR: "❌",
        logging.CRITICAL: "💥",
    }

    def format(self, record: logging.LogRecord) -> str:
        emoji = self.EMOJIS.get(record.levelno, "")
        color = self.COLORS.get(record.levelno, self.RESET)
        return f"{color}{emoji} {record.getMessage()}{self.RESET}"


class PlainFormatter(logging.Formatter):
    """Plain formatter without colors (for non-terminal output)."""

    PREFIXES = {
        logging.DEBUG: "[DEBUG]",
        logging.INFO: "[INFO]",
        STEP: "[STEP]",
        logging.WARNING: "[WARN]",
        logging.ERROR: "[ERROR]",
        logging.CRITICAL: "[CRITICAL]",
    }

    def format(self, record: logging.LogRecord) -> str:
        prefix = self.PREFIXES.get(record.levelno, "[LOG]")
        return f"{prefix} {record.getMessage()}"


def escape_data(value: str) -> str:
    """Escape a message for use in a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class WorkflowCommandFormatter(logging.Formatter):
    """
    Render records as GitHub Actions workflow commands.

    Info and step records are printed as-is so that multi-line scanner
    output (table reports, stderr) stays readable in the job log.
    """

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        command = self.COMMANDS.get(record.levelno)
        message = record.getMessage()
        if command is None:
            return message
        return f"::{command}::{escape_data(message)}"


def setup_logging(
    level: LogLevel = LogLevel.INFO,
    use_colors: Optional[bool] = None,
    workflow_commands: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Set up logging configuration.

    Args:
        level: Desired log level
        use_colors: Whether to use colored output (auto-detect if None)
        workflow_commands: Render records as GitHub workflow commands
        stream: Output stream (stdout in workflow mode, stderr otherwise)
    """
    global _workflow_mode, _stream

    logging.addLevelName(STEP, "STEP")

    if level == LogLevel.NONE:
        log_level = logging.CRITICAL + 1  # Effectively disable logging
    elif level == LogLevel.VERBOSE:
        log_level = logging.DEBUG
    else:
        log_level = logging.INFO

    _workflow_mode = workflow_commands
    if stream is None:
        stream = sys.stdout if workflow_commands else sys.stderr
    _stream = stream

    if use_colors is None:
        use_colors = stream.isatty() if hasattr(stream, "isatty") else False

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)

    if workflow_commands:
        # The runner decides what to show for ::debug::, so let debug through
        root_logger.setLevel(logging.DEBUG)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(WorkflowCommandFormatter())
    elif use_colors:
        handler.setFormatter(ColoredFormatter())
    else:
        handler.setFormatter(PlainFormatter())

    root_logger.addHandler(handler)


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


@contextmanager
def log_group(title: str, logger: Optional[logging.Logger] = None) -> Iterator[None]:
    """
    Fold everything logged inside the block under a title.

    In workflow mode this becomes a collapsible ``::group::`` section,
    elsewhere the title is logged as a step.
    """
    if _workflow_mode:
        _stream.write(f"::group::{title}\n")
        _stream.flush()
        try:
            yield
        finally:
            _stream.write("::endgroup::\n")
            _stream.flush()
    else:
        (logger or get_logger()).step(title)
        yield


# Add custom log methods
def log_step(self: logging.Logger, message: str, *args, **kwargs) -> None:
    """Log a step message."""
    if self.isEnabledFor(STEP):
        self._log(STEP, message, args, **kwargs)


def log_success(self: logging.Logger, message: str, *args, **kwargs) -> None:
    """Log a success message."""
    self.info(f"✅ {message}", *args, **kwargs)


# Monkey-patch Logger class to add custom methods
logging.Logger.step = log_step
logging.Logger.success = log_success
