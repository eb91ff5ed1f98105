"""Subprocess utilities."""

import subprocess
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, List, Callable, Dict
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    """Result of a command execution."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """Check if command was successful."""
        return self.returncode == 0 and not self.timed_out


@dataclass
class StreamResult:
    """Result of a streamed command: exit code plus the full raw stdout."""
    returncode: int
    stdout: bytes


def run_command(
    cmd: List[str],
    timeout: Optional[int] = None,
) -> CommandResult:
    """
    Run a command with optional timeout, capturing its output.

    Args:
        cmd: Command and arguments
        timeout: Timeout in seconds (None for no timeout)

    Returns:
        CommandResult with stdout, stderr, and return code

    Raises:
        OSError: If the command cannot be started
    """
    logger.debug(f"Running command: {cmd}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Command timed out after {timeout}s: {cmd}")
        return CommandResult(
            returncode=-1,
            stdout="",
            stderr=f"Command timed out after {timeout} seconds",
            timed_out=True,
        )
    return CommandResult(
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def stream_command(
    cmd: List[str],
    env: Optional[Dict[str, str]] = None,
    cwd: Optional[str] = None,
    on_stderr_line: Optional[Callable[[str], None]] = None,
) -> StreamResult:
    """
    Run a command, capturing stdout in full while streaming stderr.

    Stdout is read on a worker thread while stderr is consumed line by
    line on the calling thread, so a child that fills either pipe never
    blocks. Stdout is never echoed.

    Args:
        cmd: Command and arguments
        env: Environment for the child process
        cwd: Working directory
        on_stderr_line: Called with each decoded stderr line (no newline)

    Returns:
        StreamResult with the exit code and raw stdout bytes

    Raises:
        OSError: If the command cannot be started
    """
    logger.debug(f"Streaming command: {cmd}")

    process = subprocess.Popen(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env=env,
        cwd=cwd,
    )

    with ThreadPoolExecutor(max_workers=1) as executor:
        stdout_future = executor.submit(process.stdout.read)
        with process.stderr:
            for raw in iter(process.stderr.readline, b""):
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                if on_stderr_line is not None:
                    on_stderr_line(line)
        stdout = stdout_future.result()

    process.stdout.close()
    returncode = process.wait()
    logger.debug(f"Command exited with status {returncode}")
    return StreamResult(returncode=returncode, stdout=stdout)

