"""
Argument builder — ``InvocationOptions`` → ``oz agent run`` argv.

The CLI parses flags in order, so the sequence below is part of the
contract.  Pure: no I/O, no validation of values.
"""

from __future__ import annotations

from oz_action.core.models.invocation import InvocationOptions

# (flag, option field) for the valued flags before --profile/--sandboxed
_LEADING_FLAGS: tuple[tuple[str, str], ...] = (
    ("--prompt", "prompt"),
    ("--saved-prompt", "saved_prompt"),
    ("--skill", "skill"),
    ("--model", "model"),
    ("--name", "name"),
    ("--mcp", "mcp"),
    ("--cwd", "cwd"),
)


def build_args(opts: InvocationOptions) -> list[str]:
    """Build the argument list for one agent run."""
    args = ["agent", "run"]

    for flag, field_name in _LEADING_FLAGS:
        value = getattr(opts, field_name)
        if value:
            args += [flag, value]

    # A named profile carries its own permissions; without one the
    # agent runs sandboxed.
    if opts.profile:
        args += ["--profile", opts.profile]
    else:
        args.append("--sandboxed")

    if opts.output_format:
        args += ["--output-format", opts.output_format]

    for recipient in opts.share_recipients:
        args += ["--share", recipient]

    if opts.debug:
        args.append("--debug")

    return args
