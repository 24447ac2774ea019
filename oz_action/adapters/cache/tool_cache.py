"""
Tool cache — reuse downloaded artifacts across runs on the same runner.

Layout (compatible with the hosted runner's tool cache)::

    <root>/<tool>/<version>/<arch>/<file>
    <root>/<tool>/<version>/<arch>.complete

An entry only counts once its ``.complete`` marker exists, so a run
that died mid-copy never produces a hit.
"""

from __future__ import annotations

import http.client
import logging
import os
import platform
import shutil
import tempfile
import urllib.error
import urllib.request
import uuid
from pathlib import Path
from typing import Any

from oz_action.core.errors import DownloadError

logger = logging.getLogger(__name__)

_DEFAULT_CACHE_DIR = Path.home() / ".cache" / "oz-action" / "tool-cache"

_USER_AGENT = "oz-action"
_CHUNK_SIZE = 8192


def _default_arch() -> str:
    return platform.machine().lower()


def _temp_dir() -> Path:
    return Path(os.environ.get("RUNNER_TEMP") or tempfile.gettempdir())


class ToolCache:
    """Versioned, per-arch file cache rooted at ``RUNNER_TOOL_CACHE``."""

    def __init__(self, root: Path | None = None) -> None:
        if root is None:
            root = Path(os.environ.get("RUNNER_TOOL_CACHE") or _DEFAULT_CACHE_DIR)
        self.root = root

    def _entry(self, tool: str, version: str, arch: str | None) -> Path:
        return self.root / tool / version / (arch or _default_arch())

    def find(self, tool: str, version: str, arch: str | None = None) -> Path | None:
        """Return the cached directory for ``tool``/``version``, or None."""
        if not tool or not version:
            raise ValueError("tool and version are required")

        entry = self._entry(tool, version, arch)
        marker = entry.with_name(entry.name + ".complete")
        if entry.is_dir() and marker.is_file():
            logger.debug("Found tool in cache %s %s %s", tool, version, entry.name)
            return entry

        logger.debug("Tool not found in cache: %s %s", tool, version)
        return None

    def cache_file(
        self,
        source: Path,
        target_file: str,
        tool: str,
        version: str,
        arch: str | None = None,
    ) -> Path:
        """Copy ``source`` into the cache as ``target_file``.

        Replaces any previous (complete or partial) entry for the same key.

        Returns:
            The cache directory holding ``target_file``.
        """
        if not source.is_file():
            raise DownloadError(f"Source file not found: {source}")

        entry = self._entry(tool, version, arch)
        marker = entry.with_name(entry.name + ".complete")
        logger.debug("Caching tool %s %s %s", tool, version, entry.name)

        marker.unlink(missing_ok=True)
        if entry.exists():
            shutil.rmtree(entry)
        entry.mkdir(parents=True)

        shutil.copyfile(source, entry / target_file)
        marker.write_text("")
        return entry


def download_tool(
    url: str,
    dest: Path | None = None,
    *,
    opener: Any = None,
    timeout: int = 60,
) -> Path:
    """Stream ``url`` to ``dest`` (a fresh file under RUNNER_TEMP by default).

    No retries.  A partial file is removed before the error propagates.

    Raises:
        DownloadError: On any HTTP, network or disk failure.
    """
    dest = dest or _temp_dir() / str(uuid.uuid4())
    dest.parent.mkdir(parents=True, exist_ok=True)

    open_url = opener.open if opener is not None else urllib.request.urlopen
    req = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})

    logger.debug("Downloading %s to %s", url, dest)
    try:
        with open_url(req, timeout=timeout) as resp, open(dest, "wb") as f:
            while True:
                chunk = resp.read(_CHUNK_SIZE)
                if not chunk:
                    break
                f.write(chunk)
    except urllib.error.HTTPError as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Unexpected HTTP response: {e.code} downloading {url}") from e
    except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e

    return dest
