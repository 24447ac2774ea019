"""
Error kinds for an Oz run.

Every failure that ends a run is an ``OzActionError``.  The CLI turns
the message into the step's failure reason; nothing here is retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from oz_action.core.models.invocation import CommandResult


class OzActionError(Exception):
    """Base class for every fatal error of a run."""


class ConfigError(OzActionError):
    """Raised when action inputs are missing, unreadable or invalid."""


class MissingRequiredInput(ConfigError):
    """A required input (task source or API key) was not provided."""


class UnsupportedChannel(OzActionError):
    """The release channel is not one of the known channels."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"Unsupported channel {channel}")
        self.channel = channel


class UnsupportedPlatform(OzActionError):
    """The runner's kernel is not Linux."""

    def __init__(self, platform_name: str) -> None:
        super().__init__(
            f"Only Linux runners are supported - the current platform is {platform_name}"
        )
        self.platform = platform_name


class UnsupportedArchitecture(OzActionError):
    """The runner's CPU architecture has no published package."""

    def __init__(self, machine: str) -> None:
        super().__init__(f"Unsupported architecture {machine}")
        self.machine = machine


class RedirectExpected(OzActionError):
    """The download endpoint answered ``latest`` without a redirect."""

    def __init__(self, status: int) -> None:
        super().__init__(f"Expected redirect, got status {status}")
        self.status = status


class MissingRedirectLocation(OzActionError):
    """The download endpoint redirected without a ``location`` header."""

    def __init__(self) -> None:
        super().__init__("Redirect location header missing")


class DownloadError(OzActionError):
    """Fetching the package (network or disk) failed."""


class CommandFailed(OzActionError):
    """A subprocess could not be spawned or exited non-zero."""

    def __init__(self, message: str, result: CommandResult | None = None) -> None:
        super().__init__(message)
        self.result = result
