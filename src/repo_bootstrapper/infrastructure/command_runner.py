"""subprocess-backed CommandRunner."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from repo_bootstrapper.domain import CommandNotFoundError, CommandResult

logger = logging.getLogger(__name__)


def _describe(args: Sequence[str], cwd: Optional[Path]) -> str:
    where = f" (in {cwd})" if cwd else ""
    return f"$ {shlex.join(args)}{where}"


class SubprocessCommandRunner:
    """Run commands with ``subprocess``. Blocks until each command exits; no timeouts."""

    def capture(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        logger.debug(_describe(args, cwd))
        try:
            p = subprocess.run(
                list(args),
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except FileNotFoundError:
            raise CommandNotFoundError(args[0]) from None
        logger.debug("exit %d", p.returncode)
        return CommandResult(returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)

    def stream(
        self,
        args: Sequence[str],
        on_line: Callable[[str], None],
        cwd: Optional[Path] = None,
    ) -> int:
        logger.debug(_describe(args, cwd))
        # stderr is folded into stdout: bsdtar writes its -v listing to stderr.
        try:
            proc = subprocess.Popen(
                list(args),
                cwd=str(cwd) if cwd else None,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                bufsize=1,
            )
        except FileNotFoundError:
            raise CommandNotFoundError(args[0]) from None
        assert proc.stdout is not None
        try:
            with proc.stdout:
                for line in proc.stdout:
                    on_line(line.rstrip("\r\n"))
        finally:
            returncode = proc.wait()
        logger.debug("exit %d", returncode)
        return returncode

    def status(self, args: Sequence[str], cwd: Optional[Path] = None) -> int:
        logger.debug(_describe(args, cwd))
        try:
            p = subprocess.run(list(args), cwd=str(cwd) if cwd else None)
        except FileNotFoundError:
            raise CommandNotFoundError(args[0]) from None
        logger.debug("exit %d", p.returncode)
        return p.returncode
