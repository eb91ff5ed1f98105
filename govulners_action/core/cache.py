"""Tool cache: installed executables keyed by (tool name, version)."""

import os
import platform
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List, Mapping

from ..utils.logging import get_logger

logger = get_logger(__name__)

ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
}


def default_arch() -> str:
    """Architecture label used in cache paths."""
    machine = platform.machine().lower()
    return ARCH_ALIASES.get(machine, machine or "unknown")


def clean_version(version: str) -> str:
    """Normalize a version for use as a cache key (``v0.65.1`` -> ``0.65.1``)."""
    version = version.strip()
    return re.sub(r"^v(?=\d)", "", version)


def default_cache_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    """Runner tool cache when available, else a per-user cache directory."""
    environ = os.environ if environ is None else environ
    return environ.get("RUNNER_TOOL_CACHE") or os.path.expanduser(
        "~/.cache/govulners-action/tool-cache"
    )


@dataclass
class CachedTool:
    """A completed cache entry."""
    name: str
    version: str
    arch: str
    path: Path
    size_bytes: int


class ToolCache:
    """
    Persistent store of installed tools.

    Entries live at ``<root>/<name>/<version>/<arch>/``. A sibling
    ``<arch>.complete`` marker is written last, so a directory without its
    marker is an interrupted install and is treated as a miss.
    """

    def __init__(self, cache_dir: Optional[str] = None, arch: Optional[str] = None):
        """
        Initialize cache.

        Args:
            cache_dir: Cache root directory
            arch: Architecture label (detected if None)
        """
        self.cache_dir = Path(cache_dir or default_cache_dir())
        self.arch = arch or default_arch()

    def init(self) -> None:
        """Initialize cache directory."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Tool cache directory: {self.cache_dir}")

    def _entry_dir(self, name: str, version: str) -> Path:
        return self.cache_dir / name / clean_version(version) / self.arch

    def _marker(self, entry_dir: Path) -> Path:
        return entry_dir.parent / f"{entry_dir.name}.complete"

    def find(self, name: str, version: str) -> Optional[Path]:
        """
        Look up a cached tool.

        Args:
            name: Tool name
            version: Tool version

        Returns:
            Directory holding the tool, or None on a miss
        """
        entry_dir = self._entry_dir(name, version)
        if entry_dir.is_dir() and self._marker(entry_dir).exists():
            logger.debug(f"Cache hit: {name} {version} at {entry_dir}")
            return entry_dir
        logger.debug(f"Cache miss: {name} {version}")
        return None

    def cache_file(
        self,
        source_file: str,
        target_file: str,
        name: str,
        version: str,
    ) -> Path:
        """
        Copy a single file into the cache.

        Concurrent writers for the same key are not serialized; the last
        one to finish wins.

        Args:
            source_file: File to copy
            target_file: File name inside the cache entry
            name: Tool name
            version: Tool version

        Returns:
            Directory of the cache entry
        """
        entry_dir = self._entry_dir(name, version)
        marker = self._marker(entry_dir)

        if marker.exists():
            marker.unlink()
        entry_dir.mkdir(parents=True, exist_ok=True)

        target = entry_dir / target_file
        shutil.copy2(source_file, target)
        target.chmod(target.stat().st_mode | 0o111)

        marker.write_text(time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()))
        logger.debug(f"Cached {name} {version} at {entry_dir}")
        return entry_dir

    def list_tools(self, name: Optional[str] = None) -> List[CachedTool]:
        """
        List completed cache entries.

        Args:
            name: Only list this tool

        Returns:
            Cached tools sorted by name and version
        """
        tools: List[CachedTool] = []
        if not self.cache_dir.exists():
            return tools

        tool_dirs = [self.cache_dir / name] if name else sorted(self.cache_dir.iterdir())
        for tool_dir in tool_dirs:
            if not tool_dir.is_dir():
                continue
            for version_dir in sorted(tool_dir.iterdir()):
                for marker in sorted(version_dir.glob("*.complete")):
                    entry_dir = version_dir / marker.name[: -len(".complete")]
                    if not entry_dir.is_dir():
                        continue
                    size = sum(p.stat().st_size for p in entry_dir.rglob("*") if p.is_file())
                    tools.append(CachedTool(
                        name=tool_dir.name,
                        version=version_dir.name,
                        arch=entry_dir.name,
                        path=entry_dir,
                        size_bytes=size,
                    ))
        return tools

    def clear(self, name: Optional[str] = None) -> None:
        """
        Remove cached tools.

        Args:
            name: Only remove this tool's entries
        """
        target = self.cache_dir / name if name else self.cache_dir
        if target.exists():
            logger.info(f"Clearing tool cache: {target}")
            shutil.rmtree(target)
            logger.success("Cache cleared")
