"""
govulners action

Runs the govulners vulnerability scanner in a CI pipeline:
- Installs and caches a pinned govulners version
- Scans a container image, directory or SBOM
- Writes SARIF or JSON reports and sets step outputs
- Fails the build when the severity cutoff is reached
"""

__version__ = "1.0.0"

from .core.action import ScanAction
from .core.inputs import build_request
from .config import ActionInputs
from .errors import ActionError, ConfigurationError, InstallationError, ExecutionError

__all__ = [
    "ScanAction",
    "build_request",
    "ActionInputs",
    "ActionError",
    "ConfigurationError",
    "InstallationError",
    "ExecutionError",
]
