"""Materialise LFS objects from a packed archive instead of fetching them one by one.

The archive is itself an LFS-tracked file.  When its pointer exists in the
working tree the stage pulls every archive matching the include pattern,
counts the entries of the primary one, and extracts it while a single
progress line tracks ``current/total``.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)


def count_archive_entries(repo: Repository, archive: str) -> int:
    listing = repo.run(["tar", "-tzf", archive])
    return sum(1 for line in listing.splitlines() if line.strip())


def materialize_assets(
    repo: Repository,
    archive: str,
    include: str,
    extract_dir: Optional[str],
    console: Console,
) -> bool:
    """Pull and extract the packed archive. Returns ``False`` (skipped) if it is absent.

    *extract_dir* is relative to the repository root; ``None`` extracts into
    the git common dir.
    """
    if not repo.path(archive).is_file():
        logger.info("No packed archive at %s; skipping asset materialisation.", archive)
        return False

    dest = repo.path(extract_dir) if extract_dir else repo.git_common_dir()
    repo.run_visible(["git", "lfs", "pull", "--include", include])

    total = count_archive_entries(repo, archive)
    dest.mkdir(parents=True, exist_ok=True)
    logger.info("Extracting %d entries from %s into %s", total, archive, dest)

    with Progress(
        TextColumn("[bold]Extracting[/bold]"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("extract", total=total)
        repo.stream(
            ["tar", "-xvzf", archive, "-C", str(dest)],
            lambda _line: progress.advance(task),
        )
    return True
