"""Pytest fixtures and helpers for repo-bootstrapper tests."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pytest
from rich.console import Console

from repo_bootstrapper.domain import CommandNotFoundError, CommandResult
from repo_bootstrapper.infrastructure.repository import Repository


class FakeGit:
    """In-memory stand-in for git, git-lfs and tar.

    Keeps a global and a local config store, the current branch, and the
    untracked-cache probe result.  Every invocation is recorded in ``calls``.
    ``failures`` maps a command prefix to the exit code it should return.
    """

    def __init__(
        self,
        root: Path,
        git_version: Optional[str] = "git version 2.39.2",
        lfs_version: Optional[str] = "git-lfs/3.4.0 (GitHub; linux amd64; go 1.21.1)",
        branch: str = "bootstrap/2024",
        global_config: Optional[Dict[str, str]] = None,
        untracked_cache: bool = True,
        tar_entries: Sequence[str] = (),
        common_dir: str = ".git",
    ) -> None:
        self.root = root
        self.git_version = git_version
        self.lfs_version = lfs_version
        self.branch = branch
        self.global_config: Dict[str, str] = dict(
            global_config
            if global_config is not None
            else {"user.name": "Ada Lovelace", "user.email": "ada@example.com"}
        )
        self.local_config: Dict[str, str] = {}
        self.untracked_cache = untracked_cache
        self.tar_entries = list(tar_entries)
        self.common_dir = common_dir
        self.failures: Dict[Tuple[str, ...], int] = {}
        self.calls: List[List[str]] = []

    # CommandRunner -----------------------------------------------------

    def capture(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        self.calls.append(list(args))
        return self._handle(list(args))

    def stream(
        self,
        args: Sequence[str],
        on_line: Callable[[str], None],
        cwd: Optional[Path] = None,
    ) -> int:
        self.calls.append(list(args))
        result = self._handle(list(args))
        for line in result.stdout.splitlines():
            on_line(line)
        return result.returncode

    def status(self, args: Sequence[str], cwd: Optional[Path] = None) -> int:
        self.calls.append(list(args))
        return self._handle(list(args)).returncode

    # helpers -------------------------------------------------------------

    def fail(self, *prefix: str, returncode: int = 1) -> None:
        self.failures[tuple(prefix)] = returncode

    def called(self, *prefix: str) -> List[List[str]]:
        """Return every recorded call starting with *prefix*."""
        n = len(prefix)
        return [c for c in self.calls if tuple(c[:n]) == prefix]

    def _handle(self, args: List[str]) -> CommandResult:
        for prefix, rc in self.failures.items():
            if tuple(args[: len(prefix)]) == prefix:
                return CommandResult(rc, "", f"fatal: {' '.join(args)} failed")

        if args[0] == "git" and self.git_version is None:
            raise CommandNotFoundError("git")

        if args == ["git", "--version"]:
            return CommandResult(0, self.git_version + "\n")
        if args == ["git", "lfs", "version"]:
            if self.lfs_version is None:
                return CommandResult(1, "", "git: 'lfs' is not a git command. See 'git --help'.")
            return CommandResult(0, self.lfs_version + "\n")

        if args[:2] == ["git", "config"]:
            store = self.global_config if args[2] == "--global" else self.local_config
            if args[3] == "--get":
                value = store.get(args[4])
                return CommandResult(0, value + "\n") if value is not None else CommandResult(1)
            store[args[3]] = args[4]
            return CommandResult(0)

        if args == ["git", "rev-parse", "--abbrev-ref", "HEAD"]:
            return CommandResult(0, self.branch + "\n")
        if args == ["git", "rev-parse", "--show-toplevel"]:
            return CommandResult(0, str(self.root) + "\n")
        if args == ["git", "rev-parse", "--git-common-dir"]:
            return CommandResult(0, self.common_dir + "\n")
        if args == ["git", "update-index", "--test-untracked-cache"]:
            return CommandResult(0 if self.untracked_cache else 1)
        if args[:3] == ["git", "checkout", "-f"]:
            self.branch = args[3]
            return CommandResult(0)

        if args[:2] == ["tar", "-tzf"]:
            return CommandResult(0, "".join(e + "\n" for e in self.tar_entries))
        if args[:2] == ["tar", "-xvzf"]:
            return CommandResult(0, "".join(f"x {e}\n" for e in self.tar_entries))

        return CommandResult(0)


@pytest.fixture
def fake_git(tmp_path) -> FakeGit:
    return FakeGit(root=tmp_path)


@pytest.fixture
def repo(tmp_path, fake_git) -> Repository:
    return Repository(root=tmp_path, runner=fake_git)


@pytest.fixture
def console() -> Console:
    """A Rich console writing to memory; read it back with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), width=120, force_terminal=False)


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Clear the load_config LRU cache and reset _env before (and after) every test."""
    from repo_bootstrapper.config import loader as config_loader
    config_loader.load_config.cache_clear()
    config_loader._env = None
    yield
    config_loader.load_config.cache_clear()
    config_loader._env = None
