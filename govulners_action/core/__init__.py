"""Core functionality for the action."""

from .cache import ToolCache
from .inputs import build_request, resolve_source
from .provisioner import ToolProvisioner
from .executor import ScanExecutor
from .interpreter import ResultInterpreter
from .action import ScanAction

__all__ = [
    "ToolCache",
    "build_request",
    "resolve_source",
    "ToolProvisioner",
    "ScanExecutor",
    "ResultInterpreter",
    "ScanAction",
]
