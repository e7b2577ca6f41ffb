"""Domain and application errors."""

from __future__ import annotations

from typing import Sequence


class BootstrapError(Exception):
    """Base for bootstrap errors. Any of these aborts the run with exit status 1."""
    pass


class ToolVersionError(BootstrapError):
    """A required tool is missing, reports no parsable version, or is too old."""
    pass


class BranchGuardError(BootstrapError):
    """The repository is not on a bootstrap branch."""
    pass


class CommandNotFoundError(BootstrapError):
    """The executable for an external command is not on PATH."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Command not found: {executable}. Is it installed and on PATH?")
        self.executable = executable


class CommandFailedError(BootstrapError):
    """An external command exited with a nonzero status."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed (exit {returncode}): {' '.join(self.command)}"
        if stderr.strip():
            msg += f"\n  {stderr.strip()}"
        super().__init__(msg)
