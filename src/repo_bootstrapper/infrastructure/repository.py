"""Repository handle: the working-tree root plus the runner every stage invokes git through.

Stages never touch the process-wide working directory; every command runs
with ``cwd=repo.root``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from repo_bootstrapper.application.ports import CommandRunner
from repo_bootstrapper.domain import CommandFailedError, CommandNotFoundError, CommandResult

logger = logging.getLogger(__name__)

# `git config --get` exits 1 when the key is unset.
_CONFIG_KEY_UNSET = 1


@dataclass
class Repository:
    """A git working tree and the runner used to operate on it."""

    root: Path
    runner: CommandRunner

    @classmethod
    def discover(cls, start: Path, runner: CommandRunner) -> "Repository":
        """Resolve *start* to the enclosing repository's top level.

        Falls back to *start* itself when git cannot answer (not a repository,
        or git missing) so the version checks still get to report the problem.
        """
        start = start.expanduser().resolve()
        try:
            result = runner.capture(["git", "rev-parse", "--show-toplevel"], cwd=start)
        except CommandNotFoundError as e:
            logger.debug("Could not resolve repository root from %s: %s", start, e)
            return cls(root=start, runner=runner)
        if result.ok and result.stdout.strip():
            return cls(root=Path(result.stdout.strip()), runner=runner)
        return cls(root=start, runner=runner)

    def path(self, relative: str) -> Path:
        return self.root / relative

    # ------------------------------------------------------------------
    # Invocation helpers
    # ------------------------------------------------------------------

    def capture(self, args: Sequence[str]) -> CommandResult:
        """Run *args* and return the result without checking the exit code."""
        return self.runner.capture(args, cwd=self.root)

    def run(self, args: Sequence[str]) -> str:
        """Run *args*, raise ``CommandFailedError`` on nonzero exit, return stdout."""
        result = self.capture(args)
        if not result.ok:
            raise CommandFailedError(args, result.returncode, result.stderr)
        return result.stdout

    def run_visible(self, args: Sequence[str]) -> None:
        """Run *args* with output shown to the operator; raise on nonzero exit."""
        returncode = self.runner.status(args, cwd=self.root)
        if returncode != 0:
            raise CommandFailedError(args, returncode)

    def stream(self, args: Sequence[str], on_line: Callable[[str], None]) -> None:
        """Run *args* feeding each output line to *on_line*; raise on nonzero exit."""
        returncode = self.runner.stream(args, on_line, cwd=self.root)
        if returncode != 0:
            raise CommandFailedError(args, returncode)

    def git(self, *args: str) -> str:
        return self.run(["git", *args])

    # ------------------------------------------------------------------
    # git specifics
    # ------------------------------------------------------------------

    def config_get(self, key: str, scope: str = "global") -> Optional[str]:
        """Return the value of *key* in *scope*, or ``None`` when unset or empty."""
        args = ["git", "config", f"--{scope}", "--get", key]
        result = self.capture(args)
        if result.returncode == _CONFIG_KEY_UNSET:
            return None
        if not result.ok:
            raise CommandFailedError(args, result.returncode, result.stderr)
        return result.stdout.strip() or None

    def config_set(self, key: str, value: str, scope: str = "local") -> None:
        self.git("config", f"--{scope}", key, value)

    def current_branch(self) -> str:
        return self.git("rev-parse", "--abbrev-ref", "HEAD").strip()

    def git_common_dir(self) -> Path:
        """Directory holding objects and ``lfs/`` for this checkout.

        In a linked worktree or submodule ``.git`` is a file, so this asks git
        rather than assuming ``<root>/.git``.
        """
        common = Path(self.git("rev-parse", "--git-common-dir").strip())
        return common if common.is_absolute() else self.root / common
