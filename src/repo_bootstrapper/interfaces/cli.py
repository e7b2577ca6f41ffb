"""CLI: Typer app wired to run_bootstrap."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from repo_bootstrapper import __version__
from repo_bootstrapper.application.run_bootstrap import run_bootstrap, run_preflight
from repo_bootstrapper.config import BootstrapConfig, load_config
from repo_bootstrapper.domain import BootstrapError
from repo_bootstrapper.infrastructure.command_runner import SubprocessCommandRunner
from repo_bootstrapper.infrastructure.repository import Repository

app = typer.Typer(
    help="repo-bootstrap: one-time setup of a Git LFS repository.",
    add_completion=False,
)


def _open_repository(repo_dir: Path) -> Repository:
    return Repository.discover(repo_dir, SubprocessCommandRunner())


def _abort(e: Exception) -> NoReturn:
    Console(stderr=True).print(f"[bold red]Bootstrap aborted:[/bold red] {escape(str(e))}")
    sys.exit(1)


def _load_config() -> BootstrapConfig:
    try:
        return load_config()
    except ValueError as e:  # malformed JSON or schema violation
        _abort(e)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    repo_dir: Path = typer.Option(
        Path("."), "--repo", "-C", help="Directory inside the repository to bootstrap."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Verify tools, configure the repository, materialise LFS assets and check out the default branch.

    Must be started from a branch whose name contains the bootstrap marker.
    Uncommitted changes are discarded.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    ctx.obj = repo_dir
    if ctx.invoked_subcommand is not None:
        return

    console = Console()
    console.print(f"[dim]repo-bootstrap {__version__}[/dim]")
    config = _load_config()
    repo = _open_repository(repo_dir)
    try:
        run_bootstrap(
            repo,
            config,
            ask=lambda question: Prompt.ask(question, console=console),
            console=console,
        )
    except BootstrapError as e:
        _abort(e)


@app.command()
def check(ctx: typer.Context) -> None:
    """Check tool versions and the current branch without changing anything."""
    console = Console()
    repo = _open_repository(ctx.obj or Path("."))
    try:
        run_preflight(repo, _load_config(), console)
    except BootstrapError as e:
        _abort(e)
    console.print("[green]Ready to bootstrap.[/green]")
