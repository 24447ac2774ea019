"""Adapters — bindings for the runner, the tool cache and processes.

Public re-exports for convenient access.
"""

from oz_action.adapters.cache.tool_cache import ToolCache, download_tool
from oz_action.adapters.shell.command import run_command

__all__ = [
    "ToolCache",
    "download_tool",
    "run_command",
]
