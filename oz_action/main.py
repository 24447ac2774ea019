"""
Oz Action — CLI entrypoint.

Usage:
    oz-action run                  # the CI step (reads INPUT_* variables)
    oz-action --inputs oz.yml run  # local run with inputs from a file
    oz-action agent args
    oz-action package locate --version latest
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from oz_action import __version__
from oz_action.adapters.ci import workflow
from oz_action.core.observability.logging_config import setup_logging


def fail(message: str) -> None:
    """Report a fatal error the way the current environment expects, then exit 1."""
    if workflow.in_actions():
        workflow.set_failed(message)
    else:
        click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="oz-action")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--inputs",
    "-i",
    "inputs_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML file with action inputs (runner INPUT_* variables take precedence).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    inputs_path: str | None,
) -> None:
    """Oz Action — install the Oz CLI and run an agent from CI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["inputs_path"] = Path(inputs_path) if inputs_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug or workflow.is_debug():
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("OZ_ACTION_LOG_LEVEL", "INFO")

    setup_logging(
        level=level,
        log_file=os.environ.get("OZ_ACTION_LOG_FILE"),
        log_file_level=os.environ.get("OZ_ACTION_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
        workflow_commands=workflow.in_actions(),
    )


@cli.command()
@click.option(
    "--skip-install",
    is_flag=True,
    help="Use the Oz CLI already on PATH instead of installing it.",
)
@click.pass_context
def run(ctx: click.Context, skip_install: bool) -> None:
    """Install the Oz CLI and run the agent described by the inputs."""
    from oz_action.core.config.loader import load_inputs, state_dir
    from oz_action.core.errors import OzActionError
    from oz_action.core.services.agent import run_agent

    try:
        inputs = load_inputs(inputs_file=ctx.obj.get("inputs_path"))
        if ctx.obj.get("debug"):
            inputs = inputs.model_copy(update={"debug": True})
        run_agent(inputs, state_dir=state_dir(), install=not skip_install)
    except (OzActionError, OSError) as e:
        fail(str(e))


@cli.command()
@click.option("--channel", default="stable", show_default=True, help="Release channel.")
def logs(channel: str) -> None:
    """Print the Oz CLI's own log file for CHANNEL."""
    from oz_action.core.config.loader import state_dir
    from oz_action.core.errors import OzActionError
    from oz_action.core.services.agent import dump_log_file

    try:
        dump_log_file(channel, state_dir())
    except OzActionError as e:
        fail(str(e))


# ── Register sub-command groups from oz_action/ui/cli/ ────────────

from oz_action.ui.cli.agent import agent
from oz_action.ui.cli.package import package

cli.add_command(agent)
cli.add_command(package)


if __name__ == "__main__":
    cli()
