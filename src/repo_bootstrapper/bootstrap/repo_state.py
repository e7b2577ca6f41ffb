"""Branch guard, destructive reset/clean, and LFS hook installation."""

from __future__ import annotations

import logging

from repo_bootstrapper.domain import BranchGuardError
from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)


def guard_branch(repo: Repository, marker: str) -> str:
    """Return the current branch, or raise ``BranchGuardError`` if it lacks *marker*."""
    branch = repo.current_branch()
    if marker not in branch:
        raise BranchGuardError(
            f"Current branch {branch!r} is not a bootstrap branch. "
            f"Check out a branch whose name contains {marker!r} (e.g. `git checkout {marker}`) "
            "and run again."
        )
    return branch


def reset_working_tree(repo: Repository) -> None:
    """Discard every local change, untracked and ignored file. Irreversible."""
    logger.info("Resetting %s to HEAD and removing untracked files", repo.root)
    repo.git("reset", "--hard", "HEAD")
    repo.git("clean", "-ffdx")


def install_lfs(repo: Repository) -> None:
    repo.git("lfs", "install", "--local")
