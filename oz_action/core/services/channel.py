"""
Release channels — command names and log locations per channel.

Both mappings are closed: an unknown channel is an error, never a
best-effort guess.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from oz_action.core.errors import UnsupportedChannel


class Channel(StrEnum):
    """Release tracks the Oz CLI is published on."""

    STABLE = "stable"
    PREVIEW = "preview"


def parse_channel(channel: str) -> Channel:
    """Validate a channel name.

    Raises:
        UnsupportedChannel: If ``channel`` is not a known track.
    """
    try:
        return Channel(channel)
    except ValueError:
        raise UnsupportedChannel(channel) from None


def resolve_command(channel: str) -> str:
    """Return the CLI command installed by ``channel``'s package."""
    match channel:
        case Channel.STABLE:
            return "oz"
        case Channel.PREVIEW:
            return "oz-preview"
        case _:
            raise UnsupportedChannel(channel)


def log_file_path(channel: str, state_dir: Path) -> Path:
    """Where the CLI writes its own log for ``channel``.

    ``<state_dir>/warp-terminal/warp.log`` for stable,
    ``<state_dir>/warp-terminal-<channel>/warp_<channel>.log`` otherwise.
    """
    match channel:
        case Channel.STABLE:
            return state_dir / "warp-terminal" / "warp.log"
        case Channel.PREVIEW:
            return state_dir / f"warp-terminal-{channel}" / f"warp_{channel}.log"
        case _:
            raise UnsupportedChannel(channel)
