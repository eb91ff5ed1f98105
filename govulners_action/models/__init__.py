"""Data models for the action."""

from .scan_request import (
    Severity,
    OutputFormat,
    SourceKind,
    ScanSource,
    RegistryCredentials,
    ScanRequest,
)
from .scan_outcome import (
    ToolHandle,
    ScanOutcome,
    BuildState,
    BuildStatus,
    ActionResult,
)

__all__ = [
    "Severity",
    "OutputFormat",
    "SourceKind",
    "ScanSource",
    "RegistryCredentials",
    "ScanRequest",
    "ToolHandle",
    "ScanOutcome",
    "BuildState",
    "BuildStatus",
    "ActionResult",
]
