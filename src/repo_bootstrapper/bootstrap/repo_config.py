"""Apply the fixed local repository settings."""

from __future__ import annotations

import logging
from typing import Mapping

from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)

UNTRACKED_CACHE_PROBE = ("git", "update-index", "--test-untracked-cache")


def untracked_cache_supported(repo: Repository) -> bool:
    """True when the filesystem passes git's untracked-cache self test."""
    result = repo.capture(list(UNTRACKED_CACHE_PROBE))
    logger.debug("untracked cache probe exited %d", result.returncode)
    return result.ok


def apply_settings(
    repo: Repository,
    settings: Mapping[str, str],
    untracked_cache_settings: Mapping[str, str],
) -> bool:
    """Write every setting to the local config.

    *untracked_cache_settings* are written as a group, and only if the probe
    passes.  Returns whether they were written.
    """
    for key, value in settings.items():
        repo.config_set(key, value, scope="local")

    if not untracked_cache_supported(repo):
        logger.info("Untracked cache not supported here; leaving it off.")
        return False
    for key, value in untracked_cache_settings.items():
        repo.config_set(key, value, scope="local")
    return True
