"""
Agent run — the whole CI step, start to finish.

    validate inputs → resolve command → install → build args → run

Input validation happens before any network or process activity.  If
the agent fails, its own log file is dumped to the job log before the
original error is re-raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from oz_action.adapters.cache.tool_cache import ToolCache
from oz_action.adapters.ci import workflow
from oz_action.adapters.shell.command import run_command
from oz_action.core.errors import CommandFailed, MissingRequiredInput
from oz_action.core.models.inputs import ActionInputs
from oz_action.core.models.invocation import CommandResult
from oz_action.core.services.arguments import build_args
from oz_action.core.services.channel import log_file_path, resolve_command
from oz_action.core.services.installer import install_oz

logger = logging.getLogger(__name__)

OUTPUT_NAME = "agent_output"
API_KEY_ENV = "WARP_API_KEY"

Runner = Callable[..., Any]


def validate_inputs(inputs: ActionInputs) -> None:
    """Fail fast on inputs the agent cannot run without."""
    if not inputs.has_task:
        raise MissingRequiredInput(
            "Either `prompt`, `saved_prompt`, or `skill` must be provided"
        )
    if not inputs.warp_api_key:
        raise MissingRequiredInput("`warp_api_key` must be provided.")


def run_agent(
    inputs: ActionInputs,
    *,
    state_dir: Path,
    runner: Runner = run_command,
    cache: ToolCache | None = None,
    opener: Any = None,
    install: bool = True,
) -> CommandResult:
    """Install the Oz CLI and run the agent described by ``inputs``.

    Args:
        inputs: Validated action inputs.
        state_dir: Base of the CLI's state directory (for its log file).
        runner: Process runner, ``run_command`` unless testing.
        cache: Tool cache for the package download.
        opener: urllib opener for resolving ``latest``.
        install: Skip installation when the CLI is already present.

    Returns:
        The agent's ``CommandResult``; its stdout is also published as
        the ``agent_output`` step output.
    """
    validate_inputs(inputs)
    command = resolve_command(inputs.oz_channel)

    if install:
        install_oz(
            inputs.oz_channel,
            inputs.oz_version,
            runner=runner,
            cache=cache,
            opener=opener,
        )

    args = build_args(inputs.to_options())

    try:
        result = runner(command, args, env_overrides={API_KEY_ENV: inputs.warp_api_key})
    except CommandFailed:
        dump_log_file(inputs.oz_channel, state_dir)
        raise

    workflow.set_output(OUTPUT_NAME, result.stdout)
    return result


def dump_log_file(channel: str, state_dir: Path) -> None:
    """Print the CLI's log file, if there is one, for troubleshooting.

    Never raises for I/O problems: a missing or unreadable log only
    produces a warning, so the agent's own failure stays the reason.
    """
    log_path = log_file_path(channel, state_dir)

    try:
        found = log_path.exists()
    except OSError as e:
        logger.warning("Failed to read warp.log: %s", e)
        return

    if not found:
        logger.warning("warp.log not found at %s", log_path)
        return

    with workflow.group("Warp Logs"):
        try:
            contents = log_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read warp.log: %s", e)
            return
        logger.info(contents)
