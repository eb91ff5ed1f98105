"""Vulnerability scanning: run govulners against a scan request."""

import os
import shlex
from typing import Optional, List, Dict, Mapping

from ..config import TOOL_NAME
from ..errors import ExecutionError
from ..models.scan_outcome import ScanOutcome
from ..models.scan_request import ScanRequest
from ..utils.logging import get_logger, log_group
from ..utils.subprocess import stream_command

logger = get_logger(__name__)

UPDATE_CHECK_ENV = "GOVULNERS_CHECK_FOR_APP_UPDATE"
REGISTRY_USERNAME_ENV = "GOVULNERS_REGISTRY_AUTH_USERNAME"
REGISTRY_PASSWORD_ENV = "GOVULNERS_REGISTRY_AUTH_PASSWORD"


class ScanExecutor:
    """Runs the scanner and captures its report."""

    def __init__(
        self,
        debug: bool = False,
        base_env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
    ):
        """
        Initialize executor.

        Args:
            debug: Ask the scanner for verbose diagnostics (``-vv``)
            base_env: Environment inherited by the scanner (``os.environ`` if None)
            cwd: Working directory for the scanner
        """
        self.debug = debug
        self.base_env = base_env
        self.cwd = cwd

    def build_args(self, request: ScanRequest) -> List[str]:
        """
        Build scanner arguments. The source is always last.

        Args:
            request: Validated scan request

        Returns:
            Argument list without the executable
        """
        args = []
        if self.debug:
            args.append("-vv")

        args.extend(["-o", request.output_format.value])

        if request.severity_cutoff is not None:
            args.extend(["--fail-on", request.severity_cutoff.value])
        if request.only_fixed:
            args.append("--only-fixed")
        if request.add_cpes_if_none:
            args.append("--add-cpes-if-none")

        args.append(request.source.argument)
        return args

    def build_env(self, request: ScanRequest) -> Dict[str, str]:
        """
        Build the scanner environment.

        Registry credentials go through the environment so they never show
        up in a process listing.

        Args:
            request: Validated scan request

        Returns:
            Environment mapping for the child process
        """
        env = dict(os.environ if self.base_env is None else self.base_env)
        env[UPDATE_CHECK_ENV] = "false"

        if request.registry_credentials is not None:
            env[REGISTRY_USERNAME_ENV] = request.registry_credentials.username
            env[REGISTRY_PASSWORD_ENV] = request.registry_credentials.password
        elif request.registry_warning:
            logger.warning(request.registry_warning)
        return env

    def execute(self, executable_path: str, request: ScanRequest) -> ScanOutcome:
        """
        Run the scanner.

        A non-zero exit status is returned as data, not raised.

        Args:
            executable_path: Path to the govulners executable
            request: Validated scan request

        Returns:
            ScanOutcome with the captured report and exit code

        Raises:
            ExecutionError: If the process cannot be started
        """
        args = self.build_args(request)
        env = self.build_env(request)
        cmd = [executable_path] + args

        with log_group(f"{TOOL_NAME} output...", logger):
            logger.info(f"Executing: {TOOL_NAME} {' '.join(shlex.quote(a) for a in args)}")
            try:
                result = stream_command(
                    cmd,
                    env=env,
                    cwd=self.cwd,
                    on_stderr_line=logger.info,
                )
            except OSError as e:
                raise ExecutionError(f"Failed to start {executable_path}: {e}") from e

        logger.debug(f"{TOOL_NAME} exited with status {result.returncode}")
        return ScanOutcome(captured_output=result.stdout, exit_code=result.returncode)
