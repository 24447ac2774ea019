"""
Domain models — Pydantic types for an Oz run.

    from oz_action.core.models import ActionInputs, InvocationOptions, PackageReference
"""

from oz_action.core.models.inputs import ActionInputs
from oz_action.core.models.invocation import CommandResult, InvocationOptions
from oz_action.core.models.package import PackageReference

__all__ = [
    "ActionInputs",
    "CommandResult",
    "InvocationOptions",
    "PackageReference",
]
