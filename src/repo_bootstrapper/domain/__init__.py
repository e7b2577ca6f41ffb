"""Domain layer: value objects and errors. No I/O."""

from .models import CommandResult, ToolReport, ToolVersion, UserIdentity
from .errors import (
    BootstrapError,
    BranchGuardError,
    CommandFailedError,
    CommandNotFoundError,
    ToolVersionError,
)

__all__ = [
    "CommandResult",
    "ToolReport",
    "ToolVersion",
    "UserIdentity",
    "BootstrapError",
    "BranchGuardError",
    "CommandFailedError",
    "CommandNotFoundError",
    "ToolVersionError",
]
