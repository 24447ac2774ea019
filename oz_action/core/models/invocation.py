"""
Invocation models — what the agent is asked to do, and what came back.

``InvocationOptions`` is the input of the argument builder.
``CommandResult`` is the outcome of one subprocess run; it is attached
to ``CommandFailed`` when the process exits non-zero.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class InvocationOptions(BaseModel):
    """Options for a single ``agent run``.

    Empty strings mean "not set".  Immutable once built.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str = ""
    saved_prompt: str = ""
    skill: str = ""
    model: str = ""
    name: str = ""
    mcp: str = ""                   # JSON-encoded MCP server config
    cwd: str = ""
    profile: str = ""
    output_format: str = ""
    share_recipients: tuple[str, ...] = ()
    debug: bool = False


class CommandResult(BaseModel):
    """Result of a subprocess run."""

    command: str
    args: list[str] = Field(default_factory=list)
    return_code: int = 0

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    stdout: str = ""

    @property
    def ok(self) -> bool:
        """Whether the process exited cleanly."""
        return self.return_code == 0

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.args])
