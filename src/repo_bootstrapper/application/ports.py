"""Ports (abstract interfaces) used by the bootstrap stages.

Each port is a ``Protocol`` so the stages depend only on the *shape* of the
collaborator.  ``SubprocessCommandRunner`` is the real implementation; tests
substitute a fake that simulates git.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Protocol, Sequence

from repo_bootstrapper.domain import CommandResult


class CommandRunner(Protocol):
    """Run external commands (git, git-lfs, tar)."""

    def capture(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        """Run to completion and return exit code plus captured stdout/stderr."""
        ...

    def stream(
        self,
        args: Sequence[str],
        on_line: Callable[[str], None],
        cwd: Optional[Path] = None,
    ) -> int:
        """Run to completion, calling *on_line* for every stdout line; return the exit code."""
        ...

    def status(self, args: Sequence[str], cwd: Optional[Path] = None) -> int:
        """Run to completion with output inherited from this process; return the exit code."""
        ...


Prompt = Callable[[str], str]
"""Ask the operator a question on stdin and return one line of input."""
