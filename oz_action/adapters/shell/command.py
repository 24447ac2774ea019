"""
Shell command adapter — run one process and capture its stdout.

The SINGLE PLACE where processes are spawned: the installer's
``dpkg``/``apt-get`` calls and the agent invocation both go through
``run_command``.

stdout is decoded as UTF-8 (undecodable bytes become U+FFFD) and echoed
to the job log line by line while it is captured.  stderr stays
attached to the console.  A non-zero exit is an error.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import sys
import time
from collections.abc import Mapping
from datetime import UTC, datetime

from oz_action.core.errors import CommandFailed
from oz_action.core.models.invocation import CommandResult

logger = logging.getLogger(__name__)


def _is_root() -> bool:
    return hasattr(os, "geteuid") and os.geteuid() == 0


def run_command(
    command: str,
    args: list[str] | None = None,
    *,
    env_overrides: Mapping[str, str] | None = None,
    needs_sudo: bool = False,
    echo: bool = True,
) -> CommandResult:
    """Run ``command args`` to completion.

    Args:
        command: Executable name or path.
        args: Arguments, passed through without a shell.
        env_overrides: Variables added to (or replacing) the parent
            environment for this process only.
        needs_sudo: Prefix with ``sudo`` unless already root.
        echo: Mirror captured stdout to our own stdout.

    Returns:
        The ``CommandResult`` with captured stdout.

    Raises:
        CommandFailed: If the process cannot be started or exits non-zero.
    """
    args = list(args or [])
    if needs_sudo and not _is_root():
        args = [command, *args]
        command = "sudo"

    env = os.environ.copy()
    if env_overrides:
        env.update(env_overrides)

    # Only the command line is logged, never the environment
    logger.info("[command]%s", shlex.join([command, *args]))

    started_at = datetime.now(UTC).isoformat()
    start = time.monotonic()
    captured: list[str] = []
    try:
        with subprocess.Popen(
            [command, *args],
            stdout=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            env=env,
        ) as proc:
            assert proc.stdout is not None
            for line in proc.stdout:
                captured.append(line)
                if echo:
                    sys.stdout.write(line)
                    sys.stdout.flush()
            return_code = proc.wait()
    except OSError as e:
        raise CommandFailed(f"Unable to run '{command}': {e}") from e

    result = CommandResult(
        command=command,
        args=args,
        return_code=return_code,
        started_at=started_at,
        duration_ms=int((time.monotonic() - start) * 1000),
        stdout="".join(captured),
    )

    if not result.ok:
        raise CommandFailed(
            f"The process '{command}' failed with exit code {return_code}",
            result,
        )
    return result
