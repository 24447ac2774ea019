"""
GitHub Actions runner protocol — inputs, outputs and workflow commands.

The runner hands inputs to the step as ``INPUT_<NAME>`` environment
variables and reads results back from files and from ``::command::``
lines printed on stdout:

    ::group::Installing Oz          collapsible log section
    ::endgroup::
    ::warning::message              annotation
    ::error::message                annotation + failure reason
    ::debug::message                shown only when RUNNER_DEBUG=1

Outputs go to the file named by ``GITHUB_OUTPUT`` using the heredoc
form so multi-line values survive.

Nothing here knows about Oz.  Services log through ``logging``;
``WorkflowCommandHandler`` turns those records into commands.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

from oz_action.core.errors import ConfigError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


# ── Escaping ────────────────────────────────────────────────────


def escape_data(value: str) -> str:
    """Escape a command's message part."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a command property value (``name=...``)."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(command: str, message: str = "", **properties: str) -> str:
    """Render one ``::command prop=v::message`` line."""
    line = f"::{command}"
    props = [f"{k}={escape_property(v)}" for k, v in properties.items() if v]
    if props:
        line += " " + ",".join(props)
    return f"{line}::{escape_data(message)}"


def issue_command(command: str, message: str = "", **properties: str) -> None:
    sys.stdout.write(format_command(command, message, **properties) + os.linesep)
    sys.stdout.flush()


# ── Environment ─────────────────────────────────────────────────


def in_actions(env: Mapping[str, str] | None = None) -> bool:
    """Whether we are running inside a GitHub Actions job."""
    env = os.environ if env is None else env
    return env.get("GITHUB_ACTIONS", "").lower() == "true"


def is_debug(env: Mapping[str, str] | None = None) -> bool:
    """Whether step debug logging is enabled on the runner."""
    env = os.environ if env is None else env
    return env.get("RUNNER_DEBUG", "") == "1"


# ── Inputs ──────────────────────────────────────────────────────


def _input_key(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(
    name: str,
    *,
    required: bool = False,
    env: Mapping[str, str] | None = None,
) -> str:
    """Read one action input, stripped of surrounding whitespace.

    Raises:
        ConfigError: If ``required`` and the input is empty.
    """
    env = os.environ if env is None else env
    value = env.get(_input_key(name), "")
    if required and not value:
        raise ConfigError(f"Input required and not supplied: {name}")
    return value.strip()


def get_multiline_input(
    name: str,
    *,
    required: bool = False,
    env: Mapping[str, str] | None = None,
) -> list[str]:
    """Read an input as a list of its non-empty lines."""
    raw = get_input(name, required=required, env=env)
    return [line.strip() for line in raw.splitlines() if line.strip()]


def get_boolean_input(
    name: str,
    *,
    required: bool = False,
    env: Mapping[str, str] | None = None,
) -> bool:
    """Read an input as a YAML 1.2 core-schema boolean.

    Raises:
        ConfigError: If the value is not one of the accepted spellings.
    """
    value = get_input(name, required=required, env=env)
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


# ── Outputs ─────────────────────────────────────────────────────


def set_output(
    name: str,
    value: str,
    *,
    env: Mapping[str, str] | None = None,
) -> None:
    """Publish a step output.

    Appends to the ``GITHUB_OUTPUT`` file when the runner provides one,
    otherwise falls back to the legacy ``set-output`` command so local
    runs still show the value.
    """
    env = os.environ if env is None else env
    output_file = env.get("GITHUB_OUTPUT", "")
    if not output_file:
        issue_command("set-output", value, name=name)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: value should not contain the delimiter {delimiter}")

    with open(Path(output_file), "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}{os.linesep}{value}{os.linesep}{delimiter}{os.linesep}")
    logger.debug("Set output %s (%d chars)", name, len(value))


def set_failed(message: str) -> None:
    """Report the run's failure reason.

    The caller is responsible for exiting non-zero.
    """
    issue_command("error", message)


# ── Groups ──────────────────────────────────────────────────────


@contextmanager
def group(name: str, *, env: Mapping[str, str] | None = None) -> Iterator[None]:
    """Wrap output in a collapsible section.

    Outside Actions the section is only announced through logging.
    """
    if not in_actions(env):
        logger.info("── %s", name)
        yield
        return

    issue_command("group", name)
    try:
        yield
    finally:
        issue_command("endgroup")


# ── Logging bridge ──────────────────────────────────────────────


class WorkflowCommandHandler(logging.Handler):
    """Render log records as workflow commands on stdout.

    DEBUG → ``::debug::``, WARNING → ``::warning::``, ERROR and above
    → ``::error::``.  INFO is printed as-is.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            if record.levelno >= logging.ERROR:
                line = format_command("error", message)
            elif record.levelno >= logging.WARNING:
                line = format_command("warning", message)
            elif record.levelno >= logging.INFO:
                line = message
            else:
                line = format_command("debug", message)
            sys.stdout.write(line + os.linesep)
            sys.stdout.flush()
        except Exception:
            self.handleError(record)
