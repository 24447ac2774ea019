"""
Installer — put the Oz CLI on the runner.

Installs the cached ``.deb`` with dpkg, then lets apt pull in any
dependencies dpkg left unresolved.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from oz_action.adapters.cache.tool_cache import ToolCache
from oz_action.adapters.ci import workflow
from oz_action.adapters.shell.command import run_command
from oz_action.core.services.package_locator import download_oz_deb

logger = logging.getLogger(__name__)

Runner = Callable[..., Any]


def install_oz(
    channel: str,
    version: str,
    *,
    runner: Runner = run_command,
    cache: ToolCache | None = None,
    opener: Any = None,
) -> Path:
    """Download (or reuse) the package for ``channel``/``version`` and install it.

    Returns:
        Path to the installed ``.deb`` in the tool cache.
    """
    with workflow.group("Installing Oz"):
        oz_deb = download_oz_deb(channel, version, cache=cache, opener=opener)
        runner("dpkg", ["-i", str(oz_deb)], needs_sudo=True)
        runner("apt-get", ["-f", "install", "-y"], needs_sudo=True)

    logger.debug("Installed %s", oz_deb)
    return oz_deb
