"""
CLI commands for the Oz package — resolve, download, install.

Thin wrappers over ``oz_action.core.services.package_locator`` and
``oz_action.core.services.installer``.
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

_channel_option = click.option(
    "--channel", default="stable", show_default=True, help="Release channel."
)
_version_option = click.option(
    "--version",
    "version",
    default="latest",
    show_default=True,
    help="Package version, or 'latest'.",
)


def _abort(message: str) -> NoReturn:
    click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)


@click.group()
def package() -> None:
    """Package — locate, download and install the Oz CLI."""


@package.command()
@_channel_option
@_version_option
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def locate(channel: str, version: str, as_json: bool) -> None:
    """Resolve the download URL and version for this runner."""
    from oz_action.core.errors import OzActionError
    from oz_action.core.services.channel import parse_channel
    from oz_action.core.services.package_locator import locate_package

    try:
        parse_channel(channel)
        ref = locate_package(channel, version)
    except (OzActionError, OSError) as e:
        _abort(str(e))

    if as_json:
        click.echo(json.dumps(ref.model_dump(), indent=2))
        return

    click.secho(f"📦 oz ({ref.channel})", fg="cyan", bold=True)
    click.echo(f"   Version:   {ref.version}")
    click.echo(f"   Arch:      {ref.arch} / {ref.deb_arch}")
    click.echo(f"   URL:       {ref.url}")
    click.echo(f"   Cache key: {ref.cache_key}")


@package.command()
@_channel_option
@_version_option
def download(channel: str, version: str) -> None:
    """Download the package into the tool cache and print its path."""
    from oz_action.core.errors import OzActionError
    from oz_action.core.services.channel import parse_channel
    from oz_action.core.services.package_locator import download_oz_deb

    try:
        parse_channel(channel)
        path = download_oz_deb(channel, version)
    except (OzActionError, OSError) as e:
        _abort(str(e))

    click.echo(str(path))


@package.command()
@_channel_option
@_version_option
def install(channel: str, version: str) -> None:
    """Download and install the Oz CLI (uses sudo unless root)."""
    from oz_action.core.errors import OzActionError
    from oz_action.core.services.channel import parse_channel, resolve_command
    from oz_action.core.services.installer import install_oz

    try:
        parse_channel(channel)
        install_oz(channel, version)
    except (OzActionError, OSError) as e:
        _abort(str(e))

    click.secho(f"✅ Installed {resolve_command(channel)}", fg="green")
