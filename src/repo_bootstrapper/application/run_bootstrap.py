"""Run the bootstrap stages in order.

The sequence:
1. Check git and git-lfs versions.
2. Ensure a global user identity (prompt for what is missing).
3. Guard the branch, reset and clean the working tree, install LFS hooks.
4. Apply local settings (untracked cache only if the filesystem supports it).
5. Pull and extract the packed LFS archive, if present.
6. Force-checkout the default branch, initialise submodules if declared,
   prune the LFS cache, report elapsed time.

Every stage raises a ``BootstrapError`` subclass on failure; nothing is rolled
back.  Re-running is safe because step 3 re-establishes a clean tree.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from rich.console import Console

from repo_bootstrapper.application.ports import Prompt
from repo_bootstrapper.bootstrap.assets import materialize_assets
from repo_bootstrapper.bootstrap.finalize import (
    checkout_default_branch,
    init_submodules,
    prune_lfs_objects,
)
from repo_bootstrapper.bootstrap.identity import ensure_identity
from repo_bootstrapper.bootstrap.repo_config import apply_settings
from repo_bootstrapper.bootstrap.repo_state import guard_branch, install_lfs, reset_working_tree
from repo_bootstrapper.bootstrap.versions import check_versions
from repo_bootstrapper.config import BootstrapConfig
from repo_bootstrapper.domain import ToolReport, UserIdentity
from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)


@dataclass
class BootstrapReport:
    """What a completed run did."""

    tools: List[ToolReport] = field(default_factory=list)
    identity: Optional[UserIdentity] = None
    start_branch: str = ""
    untracked_cache: bool = False
    assets_materialized: bool = False
    submodules_initialized: bool = False
    elapsed_s: float = 0.0


def _stage(console: Console, title: str) -> None:
    console.rule(f"[bold cyan]{title}[/bold cyan]", align="left")


def run_preflight(repo: Repository, config: BootstrapConfig, console: Console) -> BootstrapReport:
    """Version gate and branch test only. Changes nothing."""
    report = BootstrapReport()
    _stage(console, "Tool versions")
    report.tools = check_versions(repo, config.git_minimum, config.lfs_minimum, console)
    _stage(console, "Branch")
    report.start_branch = guard_branch(repo, config.branch_marker)
    console.print(f"[green]✓[/green] on bootstrap branch [bold]{report.start_branch}[/bold]")
    return report


def run_bootstrap(
    repo: Repository,
    config: BootstrapConfig,
    *,
    ask: Prompt,
    console: Console,
    clock: Callable[[], float] = time.monotonic,
) -> BootstrapReport:
    """Run the full bootstrap against *repo*. Raises ``BootstrapError`` on the first failure."""
    started = clock()
    report = BootstrapReport()

    _stage(console, "Tool versions")
    report.tools = check_versions(repo, config.git_minimum, config.lfs_minimum, console)

    _stage(console, "Identity")
    report.identity = ensure_identity(repo, ask, console)

    _stage(console, "Repository state")
    report.start_branch = guard_branch(repo, config.branch_marker)
    reset_working_tree(repo)
    install_lfs(repo)
    console.print(f"[green]✓[/green] {report.start_branch} reset and cleaned")

    _stage(console, "Configuration")
    report.untracked_cache = apply_settings(
        repo, config.local_settings, config.untracked_cache_settings
    )
    applied = len(config.local_settings) + (
        len(config.untracked_cache_settings) if report.untracked_cache else 0
    )
    console.print(f"[green]✓[/green] {applied} settings applied")
    if not report.untracked_cache:
        console.print("[dim]untracked cache not supported on this filesystem; skipped[/dim]")

    _stage(console, "LFS assets")
    report.assets_materialized = materialize_assets(
        repo, config.asset_archive, config.asset_include, config.asset_extract_dir, console
    )
    if not report.assets_materialized:
        console.print(f"[dim]{config.asset_archive} not found; skipped[/dim]")

    _stage(console, "Finalize")
    checkout_default_branch(repo, config.default_branch)
    report.submodules_initialized = init_submodules(repo, config.submodules_file)
    prune_lfs_objects(repo, config.prune_overrides)

    report.elapsed_s = max(0.0, clock() - started)
    logger.info("Bootstrap finished in %.1fs", report.elapsed_s)
    console.print(
        f"[bold green]Bootstrap complete[/bold green] in {report.elapsed_s:.1f} seconds."
    )
    return report
