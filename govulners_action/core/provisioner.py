"""Scanner installation.

Equivalent to the download-govulners entrypoint of the action.
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Callable

import requests

from ..config import INSTALLER_URL, TOOL_NAME
from ..errors import InstallationError
from ..models.scan_outcome import ToolHandle
from ..utils.logging import get_logger
from ..utils.subprocess import run_command
from ..utils.workflow import add_path
from .cache import ToolCache

logger = get_logger(__name__)


class ToolProvisioner:
    """Resolve a versioned scanner executable, installing it on a cache miss."""

    def __init__(
        self,
        cache: ToolCache,
        tool_name: str = TOOL_NAME,
        installer_url: str = INSTALLER_URL,
        temp_dir: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 60,
        install_timeout: Optional[int] = 300,
        register_path: Callable[[str], None] = add_path,
    ):
        """
        Initialize provisioner.

        Args:
            cache: Tool cache to read and populate
            tool_name: Executable name
            installer_url: Location of the install script
            temp_dir: Scratch directory for downloads (``$RUNNER_TEMP`` if set)
            session: HTTP session used for the download
            timeout: HTTP timeout in seconds
            install_timeout: Seconds the installer may run (None for no limit)
            register_path: Called with the tool directory once resolved
        """
        self.cache = cache
        self.tool_name = tool_name
        self.installer_url = installer_url
        self.temp_dir = temp_dir or os.environ.get("RUNNER_TEMP") or None
        self.session = session or requests.Session()
        self.timeout = timeout
        self.install_timeout = install_timeout
        self.register_path = register_path

    def _download_installer(self, dest_dir: Path) -> Path:
        """Download the install script and mark it executable."""
        installer = dest_dir / "install.sh"
        logger.debug(f"Downloading installer from {self.installer_url}")
        try:
            response = self.session.get(self.installer_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise InstallationError(
                f"Failed to download {self.tool_name} installer from {self.installer_url}: {e}"
            ) from e

        installer.write_bytes(response.content)
        installer.chmod(installer.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return installer

    def _install(self, version: str) -> Path:
        """Run the installer for a version and cache the result."""
        logger.debug(f"Installing {self.tool_name} {version}")
        try:
            scratch = tempfile.TemporaryDirectory(prefix=f"{self.tool_name}-", dir=self.temp_dir)
        except OSError as e:
            raise InstallationError(
                f"Failed to create a scratch directory in {self.temp_dir or tempfile.gettempdir()}: {e}"
            ) from e

        # cache_file copies the binary out before the directory is removed
        with scratch as work_dir:
            return self._install_into(Path(work_dir), version)

    def _install_into(self, work_dir: Path, version: str) -> Path:
        try:
            installer = self._download_installer(work_dir)
            bin_dir = Path(f"{installer}_{self.tool_name}")
            result = run_command(
                [str(installer), "-b", str(bin_dir), version],
                timeout=self.install_timeout,
            )
        except OSError as e:
            raise InstallationError(f"Failed to run {self.tool_name} installer: {e}") from e

        if result.timed_out:
            raise InstallationError(
                f"{self.tool_name} installer timed out after {self.install_timeout}s"
            )
        if not result.success:
            detail = result.stderr.strip() or result.stdout.strip()
            raise InstallationError(
                f"{self.tool_name} installer exited with status {result.returncode}: {detail}"
            )

        executable = bin_dir / self.tool_name
        if not executable.is_file():
            raise InstallationError(
                f"{self.tool_name} installer did not produce {executable}"
            )

        try:
            return self.cache.cache_file(str(executable), self.tool_name, self.tool_name, version)
        except OSError as e:
            raise InstallationError(f"Failed to cache {self.tool_name} {version}: {e}") from e

    def ensure_installed(self, version: str) -> ToolHandle:
        """
        Make a version of the scanner available.

        Args:
            version: Scanner version (e.g. ``v0.65.1``)

        Returns:
            ToolHandle for the cached executable

        Raises:
            InstallationError: If downloading or installing fails
        """
        tool_dir = self.cache.find(self.tool_name, version)
        if tool_dir is None:
            tool_dir = self._install(version)

        self.register_path(str(tool_dir))
        executable = str(tool_dir / self.tool_name)
        logger.debug(f"Using {self.tool_name} at {executable}")
        return ToolHandle(executable_path=executable, version=version)
