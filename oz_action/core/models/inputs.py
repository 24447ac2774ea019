"""
Action inputs — the declarative configuration of one run.

Loaded by ``oz_action.core.config.loader`` from the runner's
``INPUT_*`` variables (and optionally a YAML file for local runs).
Input names match the keys declared in ``action.yml``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from oz_action.core.models.invocation import InvocationOptions


class ActionInputs(BaseModel):
    """Every input the action accepts."""

    oz_channel: str = "stable"
    oz_version: str = "latest"

    prompt: str = ""
    saved_prompt: str = ""
    skill: str = ""

    model: str = ""
    name: str = ""
    mcp: str = ""
    cwd: str = ""
    profile: str = ""
    output_format: str = ""
    share: list[str] = Field(default_factory=list)

    warp_api_key: str = ""
    debug: bool = False

    @field_validator("share", mode="before")
    @classmethod
    def _split_share(cls, value: object) -> object:
        # YAML files may give a block string instead of a list
        if isinstance(value, str):
            return [line.strip() for line in value.splitlines() if line.strip()]
        return value

    @property
    def has_task(self) -> bool:
        """Whether a prompt, saved prompt or skill tells the agent what to do."""
        return bool(self.prompt or self.saved_prompt or self.skill)

    def to_options(self) -> InvocationOptions:
        """Project the inputs onto the argument builder's options."""
        return InvocationOptions(
            prompt=self.prompt,
            saved_prompt=self.saved_prompt,
            skill=self.skill,
            model=self.model,
            name=self.name,
            mcp=self.mcp,
            cwd=self.cwd,
            profile=self.profile,
            output_format=self.output_format,
            share_recipients=tuple(self.share),
            debug=self.debug,
        )
