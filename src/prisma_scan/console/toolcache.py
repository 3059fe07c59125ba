# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Version-keyed on-disk cache for downloaded tool binaries.

Layout follows the GitHub Actions runner tool cache so a cached binary is
reused across jobs on self-hosted runners::

    <root>/<tool>/<version>/<arch>/<file>
    <root>/<tool>/<version>/<arch>.complete
"""

from __future__ import annotations

import logging
import platform
import re
import shutil
from pathlib import Path

from prisma_scan.core.exceptions import ToolCacheError

logger = logging.getLogger("prisma_scan.console.toolcache")

# Tool names and versions become path segments under the cache root
_SEGMENT_RE = re.compile(r"[\w.\-]+")

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
}


def current_arch() -> str:
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


class ToolCache:
    """Find and store tool binaries by name and version.

    Args:
        root: Cache root directory.
        arch: Architecture label; defaults to the running machine.
    """

    def __init__(self, root: Path, arch: str | None = None) -> None:
        self.root = root
        self.arch = arch or current_arch()

    def _version_dir(self, tool: str, version: str) -> Path:
        for segment in (tool, version):
            if not _SEGMENT_RE.fullmatch(segment) or segment in (".", ".."):
                raise ToolCacheError(f"Invalid tool cache key: {segment!r}")
        return self.root / tool / version

    def _marker(self, tool: str, version: str) -> Path:
        return self._version_dir(tool, version) / f"{self.arch}.complete"

    def find(self, tool: str, version: str) -> Path | None:
        """Return the cached tool directory, or ``None`` if not cached.

        An entry only counts once its ``.complete`` marker exists, so a
        copy interrupted half-way is treated as a miss.
        """
        if not version:
            return None
        tool_dir = self._version_dir(tool, version) / self.arch
        if self._marker(tool, version).is_file() and tool_dir.is_dir():
            return tool_dir
        return None

    def cache_file(self, source: Path, target_name: str, tool: str, version: str) -> Path:
        """Copy *source* into the cache and return the cached tool directory.

        Raises:
            ToolCacheError: If the key is not a plain path segment or the
                cache cannot be written.
        """
        tool_dir = self._version_dir(tool, version) / self.arch
        marker = self._marker(tool, version)
        try:
            marker.unlink(missing_ok=True)
            if tool_dir.exists():
                shutil.rmtree(tool_dir)
            tool_dir.mkdir(parents=True)

            shutil.copy2(source, tool_dir / target_name)
            marker.write_text("")
        except OSError as exc:
            raise ToolCacheError(f"Failed caching {tool} {version} in {self.root}: {exc}") from exc
        logger.info("Cached %s %s in %s", tool, version, tool_dir)
        return tool_dir
