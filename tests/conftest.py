# Shared pytest fixtures

import logging
import os
import stat
import sys
from pathlib import Path
from typing import Callable

import pytest

from govulners_action.models import (
    OutputFormat,
    ScanRequest,
    ScanSource,
    Severity,
    SourceKind,
)
from govulners_action.utils import logging as log_module

RUNNER_VARS = (
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "GITHUB_PATH",
    "GITHUB_ACTION_PATH",
    "RUNNER_DEBUG",
    "ACTIONS_STEP_DEBUG",
    "RUNNER_TOOL_CACHE",
    "RUNNER_TEMP",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from the runner environment and from each other's logging setup."""
    for name in list(os.environ):
        if name.startswith("INPUT_") or name in RUNNER_VARS:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    monkeypatch.setattr(log_module, "_workflow_mode", False)
    monkeypatch.setattr(log_module, "_stream", sys.stderr)

    yield

    root = logging.getLogger(log_module.ROOT_LOGGER)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def make_request() -> Callable[..., ScanRequest]:
    """Factory for ScanRequest with overridable fields."""
    def _make(**overrides) -> ScanRequest:
        values = dict(
            source=ScanSource(SourceKind.DIRECTORY, "."),
            fail_build=True,
            output_format=OutputFormat.SARIF,
            severity_cutoff=Severity.MEDIUM,
            only_fixed=False,
            add_cpes_if_none=False,
        )
        values.update(overrides)
        return ScanRequest(**values)
    return _make


def write_script(path: Path, body: str) -> Path:
    """Write an executable shell script."""
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_govulners(tmp_path) -> Callable[..., Path]:
    """
    Factory for a stand-in scanner script.

    The script prints its arguments and selected environment variables on
    stdout, a progress line on stderr, and exits with the given status.
    """
    def _make(exit_code: int = 0, name: str = "govulners") -> Path:
        bin_dir = tmp_path / "fake-bin"
        bin_dir.mkdir(exist_ok=True)
        return write_script(
            bin_dir / name,
            'echo "loading vulnerability db" >&2\n'
            'for arg in "$@"; do echo "arg=$arg"; done\n'
            'echo "update=$GOVULNERS_CHECK_FOR_APP_UPDATE"\n'
            'echo "user=$GOVULNERS_REGISTRY_AUTH_USERNAME"\n'
            'echo "pass=$GOVULNERS_REGISTRY_AUTH_PASSWORD"\n'
            f"exit {exit_code}\n",
        )
    return _make


INSTALLER_SCRIPT = (
    "#!/bin/sh\n"
    "# install.sh -b DIR VERSION\n"
    'mkdir -p "$2"\n'
    "printf '#!/bin/sh\\necho installed %s\\n' \"$3\" > \"$2/govulners\"\n"
    'chmod +x "$2/govulners"\n'
).encode()


@pytest.fixture
def installer_script() -> bytes:
    """Body of a stand-in install.sh that drops a govulners script into -b DIR."""
    return INSTALLER_SCRIPT
