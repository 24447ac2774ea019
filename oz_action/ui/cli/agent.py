"""
CLI commands for inspecting an agent invocation without running it.

Thin wrappers over ``oz_action.core.services.channel`` and
``oz_action.core.services.arguments``.
"""

from __future__ import annotations

import json
import shlex
import sys

import click


@click.group()
def agent() -> None:
    """Agent — preview the command and arguments a run would use."""


@agent.command("command")
@click.argument("channel")
def command(channel: str) -> None:
    """Print the CLI command installed by CHANNEL."""
    from oz_action.core.errors import UnsupportedChannel
    from oz_action.core.services.channel import resolve_command

    try:
        click.echo(resolve_command(channel))
    except UnsupportedChannel as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


@agent.command("args")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def args(ctx: click.Context, as_json: bool) -> None:
    """Print the `agent run` arguments built from the inputs."""
    from oz_action.core.config.loader import load_inputs
    from oz_action.core.errors import ConfigError
    from oz_action.core.services.arguments import build_args

    try:
        inputs = load_inputs(inputs_file=ctx.obj.get("inputs_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    argv = build_args(inputs.to_options())

    if as_json:
        click.echo(json.dumps(argv, indent=2))
        return

    click.echo(shlex.join(argv))
