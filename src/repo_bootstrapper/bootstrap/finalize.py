"""Check out the default branch, populate submodules, prune the LFS cache."""

from __future__ import annotations

import logging
from typing import List, Mapping

from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)


def checkout_default_branch(repo: Repository, branch: str) -> None:
    repo.run_visible(["git", "checkout", "-f", branch])


def init_submodules(repo: Repository, submodules_file: str) -> bool:
    """Initialise submodules recursively, borrowing objects from this checkout.

    Skipped (returns ``False``) when *submodules_file* does not exist.
    """
    if not repo.path(submodules_file).is_file():
        return False
    repo.run_visible(
        ["git", "submodule", "update", "--init", "--recursive", "--reference", str(repo.root)]
    )
    return True


def prune_command(overrides: Mapping[str, str]) -> List[str]:
    args = ["git"]
    for key, value in overrides.items():
        args += ["-c", f"{key}={value}"]
    return args + ["lfs", "prune"]


def prune_lfs_objects(repo: Repository, overrides: Mapping[str, str]) -> None:
    """Remove every cached LFS object not referenced by the current checkout."""
    repo.run_visible(prune_command(overrides))
