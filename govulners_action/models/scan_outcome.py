"""Data models for scan outcomes and build status."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any


@dataclass(frozen=True)
class ToolHandle:
    """An installed scanner executable."""
    executable_path: str
    version: str

    @property
    def directory(self) -> str:
        """Directory that holds the executable."""
        return os.path.dirname(self.executable_path)


@dataclass
class ScanOutcome:
    """Raw result of running the scanner once."""
    captured_output: bytes
    exit_code: int
    report_paths: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Captured output decoded as UTF-8."""
        return self.captured_output.decode("utf-8", errors="replace")


class BuildState(Enum):
    """Pipeline signal derived from a scan."""
    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildStatus:
    """Build state plus the message that explains it."""
    state: BuildState
    message: str = ""

    @property
    def failed(self) -> bool:
        return self.state == BuildState.FAILED

    @classmethod
    def passed(cls) -> "BuildStatus":
        return cls(BuildState.PASSED)

    @classmethod
    def warning(cls, message: str) -> "BuildStatus":
        return cls(BuildState.WARNING, message)

    @classmethod
    def failure(cls, message: str) -> "BuildStatus":
        return cls(BuildState.FAILED, message)


@dataclass
class ActionResult:
    """Result handed back to the caller of a scan run."""
    outputs: Dict[str, str]
    status: BuildStatus
    exit_code: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "outputs": dict(self.outputs),
            "status": self.status.state.value,
            "message": self.status.message,
            "scanner_exit_code": self.exit_code,
        }
