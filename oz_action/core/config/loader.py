"""
Configuration loader — action inputs and runner paths.

This is the ONLY module that reads the process environment for
configuration.  Services receive plain values or an ``ActionInputs``
model and stay free of global state.

Inputs come from the runner's ``INPUT_*`` variables.  For local runs an
optional YAML file can supply them; a non-empty runner input always
wins over the file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from oz_action.adapters.ci import workflow
from oz_action.core.errors import ConfigError
from oz_action.core.models.inputs import ActionInputs

logger = logging.getLogger(__name__)

# Single-line string inputs, by action.yml name
_STRING_INPUTS = (
    "oz_channel",
    "oz_version",
    "prompt",
    "saved_prompt",
    "skill",
    "model",
    "name",
    "mcp",
    "cwd",
    "profile",
    "output_format",
    "warp_api_key",
)


def load_inputs_file(path: Path) -> dict[str, Any]:
    """Read a YAML mapping of input name → value.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Inputs file not found: {path}")

    logger.debug("Loading inputs from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Accept action.yml-style dashes as well
    return {str(k).replace("-", "_"): v for k, v in data.items()}


def load_inputs(
    env: Mapping[str, str] | None = None,
    inputs_file: Path | None = None,
) -> ActionInputs:
    """Collect and validate the action inputs.

    Args:
        env: Environment to read (default: ``os.environ``).
        inputs_file: Optional YAML file with defaults for local runs.

    Raises:
        ConfigError: If the file or any value is invalid.
    """
    env = os.environ if env is None else env
    data: dict[str, Any] = load_inputs_file(inputs_file) if inputs_file else {}

    for name in _STRING_INPUTS:
        value = workflow.get_input(name, env=env)
        if value:
            data[name] = value

    share = workflow.get_multiline_input("share", env=env)
    if share:
        data["share"] = share

    if workflow.is_debug(env):
        data["debug"] = True

    try:
        inputs = ActionInputs.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid action inputs: {e}") from e

    logger.debug(
        "Loaded inputs: channel=%s version=%s", inputs.oz_channel, inputs.oz_version
    )
    return inputs


def state_dir(env: Mapping[str, str] | None = None) -> Path:
    """Base directory the Oz CLI writes its state (and logs) under."""
    env = os.environ if env is None else env
    override = env.get("XDG_STATE_DIR")
    if override:
        return Path(override)
    return Path.home() / ".local" / "state"
