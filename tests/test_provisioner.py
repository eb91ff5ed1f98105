"""Tests for scanner installation."""

from unittest.mock import MagicMock

import pytest
import requests

from govulners_action.core.cache import ToolCache
from govulners_action.core.provisioner import ToolProvisioner
from govulners_action.errors import InstallationError
from govulners_action.utils.subprocess import run_command


def make_session(content: bytes) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.raise_for_status.return_value = None
    session = MagicMock()
    session.get.return_value = response
    return session


class TestToolProvisioner:

    @pytest.fixture
    def cache(self, tmp_path):
        tool_cache = ToolCache(str(tmp_path / "cache"), arch="x64")
        tool_cache.init()
        return tool_cache

    @pytest.fixture
    def registered(self):
        return MagicMock()

    def make_provisioner(self, cache, session, registered, tmp_path):
        temp_dir = tmp_path / "tmp"
        temp_dir.mkdir(exist_ok=True)
        return ToolProvisioner(
            cache,
            temp_dir=str(temp_dir),
            session=session,
            register_path=registered,
        )

    def test_install_on_miss(self, cache, registered, installer_script, tmp_path):
        session = make_session(installer_script)
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        tool = provisioner.ensure_installed("v0.65.1")

        assert tool.version == "v0.65.1"
        assert tool.executable_path == str(cache.cache_dir / "govulners" / "0.65.1" / "x64" / "govulners")
        session.get.assert_called_once()
        assert session.get.call_args[0][0].endswith("/install.sh")
        registered.assert_called_once_with(tool.directory)

        result = run_command([tool.executable_path])
        assert result.stdout.strip() == "installed v0.65.1"

    def test_second_call_uses_cache(self, cache, registered, installer_script, tmp_path):
        session = make_session(installer_script)
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        first = provisioner.ensure_installed("v0.65.1")
        second = provisioner.ensure_installed("v0.65.1")

        assert first == second
        assert session.get.call_count == 1
        assert registered.call_count == 2

    def test_cache_shared_between_provisioners(self, cache, registered, installer_script, tmp_path):
        self.make_provisioner(cache, make_session(installer_script), registered, tmp_path).ensure_installed("v1.0.0")

        offline = MagicMock()
        offline.get.side_effect = AssertionError("no network on a cache hit")
        tool = self.make_provisioner(cache, offline, registered, tmp_path).ensure_installed("v1.0.0")
        assert tool.executable_path.endswith("govulners")

    def test_download_failure(self, cache, registered, tmp_path):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("network down")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        with pytest.raises(InstallationError) as exc:
            provisioner.ensure_installed("v0.65.1")
        assert isinstance(exc.value.__cause__, requests.ConnectionError)
        registered.assert_not_called()

    def test_http_error(self, cache, registered, tmp_path):
        session = make_session(b"")
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        with pytest.raises(InstallationError, match="404"):
            provisioner.ensure_installed("v0.65.1")

    def test_installer_failure(self, cache, registered, tmp_path):
        session = make_session(b"#!/bin/sh\necho 'unknown version' >&2\nexit 1\n")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        with pytest.raises(InstallationError, match="unknown version"):
            provisioner.ensure_installed("v0.0.0")
        assert cache.find("govulners", "v0.0.0") is None

    def test_installer_without_binary(self, cache, registered, tmp_path):
        session = make_session(b"#!/bin/sh\nexit 0\n")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        with pytest.raises(InstallationError, match="did not produce"):
            provisioner.ensure_installed("v0.65.1")

    def test_installer_not_runnable(self, cache, registered, tmp_path):
        # No shebang: exec fails with ENOEXEC
        session = make_session(b"\x7fELF-not-really")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        with pytest.raises(InstallationError) as exc:
            provisioner.ensure_installed("v0.65.1")
        assert isinstance(exc.value.__cause__, OSError)

    def test_missing_temp_dir(self, cache, registered, installer_script, tmp_path):
        session = make_session(installer_script)
        provisioner = ToolProvisioner(
            cache,
            temp_dir=str(tmp_path / "missing"),
            session=session,
            register_path=registered,
        )

        with pytest.raises(InstallationError) as exc:
            provisioner.ensure_installed("v1.0.0")
        assert isinstance(exc.value.__cause__, OSError)
        session.get.assert_not_called()
        registered.assert_not_called()

    def test_installer_timeout(self, cache, registered, tmp_path):
        session = make_session(b"#!/bin/sh\nexec sleep 30\n")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)
        provisioner.install_timeout = 1

        with pytest.raises(InstallationError, match="timed out after 1s"):
            provisioner.ensure_installed("v0.65.1")
        assert cache.find("govulners", "v0.65.1") is None

    def test_scratch_removed_after_install(self, cache, registered, installer_script, tmp_path):
        provisioner = self.make_provisioner(cache, make_session(installer_script), registered, tmp_path)

        tool = provisioner.ensure_installed("v1.0.0")

        assert list((tmp_path / "tmp").iterdir()) == []
        result = run_command([tool.executable_path])
        assert result.stdout.strip() == "installed v1.0.0"

    def test_scratch_removed_after_failure(self, cache, registered, tmp_path):
        session = make_session(b"#!/bin/sh\necho 'unknown version' >&2\nexit 1\n")
        provisioner = self.make_provisioner(cache, session, registered, tmp_path)

        with pytest.raises(InstallationError):
            provisioner.ensure_installed("v0.0.0")
        assert list((tmp_path / "tmp").iterdir()) == []
