"""Tool version gate: git and git-lfs must be installed and at least the configured minimum.

Later stages rely on behaviour that only exists from these versions on
(``git clean -ffdx`` semantics, ``git lfs pull --include``, ``lfs prune``
recency settings), so any failure here is fatal and nothing is retried.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from rich.console import Console

from repo_bootstrapper.domain import CommandNotFoundError, ToolReport, ToolVersion, ToolVersionError
from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)

GIT_VERSION_CMD = ("git", "--version")
LFS_VERSION_CMD = ("git", "lfs", "version")

_UPGRADE_HINTS = {
    "git": "https://git-scm.com/downloads",
    "git-lfs": "https://git-lfs.com",
}


def installed_version(repo: Repository, tool: str, args: Sequence[str]) -> ToolVersion:
    """Run *args* and parse the first semantic version from its output.

    Raises ``ToolVersionError`` when the tool is missing, exits nonzero, or
    prints nothing that looks like ``X.Y.Z``.
    """
    hint = _UPGRADE_HINTS.get(tool, "")
    try:
        result = repo.capture(list(args))
    except CommandNotFoundError:
        raise ToolVersionError(f"{tool} is not installed or not on PATH. Install it from {hint}") from None
    if not result.ok:
        raise ToolVersionError(
            f"{tool} is not installed or not working (`{' '.join(args)}` exited {result.returncode}). "
            f"Install it from {hint}"
        )
    version = ToolVersion.parse(result.stdout) or ToolVersion.parse(result.stderr)
    if version is None:
        raise ToolVersionError(
            f"Could not determine the {tool} version from {result.stdout.strip()!r}."
        )
    logger.debug("%s version %s", tool, version)
    return version


def meets_minimum(version: ToolVersion, minimum: ToolVersion) -> bool:
    return version >= minimum


def check_versions(
    repo: Repository,
    git_minimum: ToolVersion,
    lfs_minimum: ToolVersion,
    console: Console,
) -> List[ToolReport]:
    """Verify git and git-lfs, print both versions, and return the reports."""
    reports = []
    for tool, args, minimum in (
        ("git", GIT_VERSION_CMD, git_minimum),
        ("git-lfs", LFS_VERSION_CMD, lfs_minimum),
    ):
        version = installed_version(repo, tool, args)
        if not meets_minimum(version, minimum):
            raise ToolVersionError(
                f"{tool} {version} is older than the required {minimum}. "
                f"Please upgrade {tool}: {_UPGRADE_HINTS[tool]}"
            )
        reports.append(ToolReport(tool=tool, version=version, minimum=minimum))

    for r in reports:
        console.print(f"[green]✓[/green] {r.tool} {r.version} [dim](>= {r.minimum})[/dim]")
    return reports
