"""Scan orchestration: provision, execute, interpret."""

from typing import Optional

from ..config import TOOL_NAME
from ..models.scan_outcome import ActionResult, ToolHandle
from ..models.scan_request import ScanRequest
from ..utils.logging import get_logger
from .cache import ToolCache
from .executor import ScanExecutor
from .interpreter import ResultInterpreter
from .provisioner import ToolProvisioner

logger = get_logger(__name__)


class ScanAction:
    """
    One scan run, wired from its four collaborators.

    The steps run strictly in sequence; the scanner process is the only
    point where the run blocks.
    """

    def __init__(
        self,
        provisioner: ToolProvisioner,
        executor: ScanExecutor,
        interpreter: ResultInterpreter,
    ):
        self.provisioner = provisioner
        self.executor = executor
        self.interpreter = interpreter

    @classmethod
    def create(
        cls,
        cache_dir: Optional[str] = None,
        output_dir: str = ".",
        debug: bool = False,
    ) -> "ScanAction":
        """
        Build an action with default collaborators.

        Args:
            cache_dir: Tool cache root (runner tool cache if None)
            output_dir: Directory for report files
            debug: Enable scanner diagnostics and report debug logging
        """
        cache = ToolCache(cache_dir)
        cache.init()
        return cls(
            provisioner=ToolProvisioner(cache),
            executor=ScanExecutor(debug=debug),
            interpreter=ResultInterpreter(output_dir=output_dir, debug=debug),
        )

    def install(self, version: str) -> ToolHandle:
        """Install (or reuse) a scanner version."""
        logger.debug(f"Installing {TOOL_NAME} version {version}")
        return self.provisioner.ensure_installed(version)

    def run(self, request: ScanRequest, version: str) -> ActionResult:
        """
        Scan a validated request.

        Args:
            request: Validated scan request
            version: Scanner version to use

        Returns:
            ActionResult with report outputs and build status

        Raises:
            InstallationError: If the scanner cannot be installed
            ExecutionError: If the scanner cannot be started
        """
        tool = self.install(version)
        logger.debug(f"Creating options for {TOOL_NAME} analyzer")
        outcome = self.executor.execute(tool.executable_path, request)
        outputs, status = self.interpreter.interpret(outcome, request)
        return ActionResult(outputs=outputs, status=status, exit_code=outcome.exit_code)
