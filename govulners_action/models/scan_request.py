"""Data models for scan requests."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Severity(Enum):
    """Vulnerability severity levels accepted by ``--fail-on``."""
    NEGLIGIBLE = "negligible"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def names(cls) -> list:
        """Allowed values, lowest first."""
        return [member.value for member in cls]

    @property
    def rank(self) -> int:
        return Severity.names().index(self.value)

    def __lt__(self, other: "Severity") -> bool:
        """Compare severity levels."""
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank


class OutputFormat(Enum):
    """Report formats the scanner can emit."""
    SARIF = "sarif"
    JSON = "json"
    TABLE = "table"

    @classmethod
    def names(cls) -> list:
        return [member.value for member in cls]


class SourceKind(Enum):
    """Kinds of scan targets."""
    IMAGE = "image"
    DIRECTORY = "dir"
    SBOM = "sbom"


@dataclass(frozen=True)
class ScanSource:
    """A scan target tagged with its kind."""
    kind: SourceKind
    value: str

    @property
    def argument(self) -> str:
        """Positional argument understood by govulners."""
        if self.kind == SourceKind.IMAGE:
            return self.value
        return f"{self.kind.value}:{self.value}"

    def __str__(self) -> str:
        return self.argument


@dataclass(frozen=True)
class RegistryCredentials:
    """Registry credentials passed to the scanner through its environment."""
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ScanRequest:
    """Canonical, validated request for a single scan run."""
    source: ScanSource
    fail_build: bool = True
    output_format: OutputFormat = OutputFormat.SARIF
    severity_cutoff: Optional[Severity] = Severity.MEDIUM
    only_fixed: bool = False
    add_cpes_if_none: bool = False
    registry_credentials: Optional[RegistryCredentials] = None
    # Set when only one half of the credential pair was supplied
    registry_warning: Optional[str] = None

    def describe(self) -> dict:
        """Loggable view of the request (no secrets)."""
        return {
            "source": self.source.argument,
            "fail_build": self.fail_build,
            "severity_cutoff": self.severity_cutoff.value if self.severity_cutoff else "",
            "only_fixed": self.only_fixed,
            "add_cpes_if_none": self.add_cpes_if_none,
            "output_format": self.output_format.value,
            "registry_auth": self.registry_credentials is not None,
        }
