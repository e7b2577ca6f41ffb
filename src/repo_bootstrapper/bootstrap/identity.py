"""Ensure a global git identity exists, prompting for whatever is missing."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

from repo_bootstrapper.application.ports import Prompt
from repo_bootstrapper.domain import UserIdentity
from repo_bootstrapper.infrastructure.repository import Repository

logger = logging.getLogger(__name__)

NAME_KEY = "user.name"
EMAIL_KEY = "user.email"


def read_identity(repo: Repository) -> UserIdentity:
    return UserIdentity(
        name=repo.config_get(NAME_KEY, scope="global"),
        email=repo.config_get(EMAIL_KEY, scope="global"),
    )


def ensure_identity(repo: Repository, ask: Prompt, console: Console) -> UserIdentity:
    """Prompt once for each unset field and persist it globally.

    Name and email are handled independently.  The current identity is echoed
    for confirmation only when both were already configured.
    """
    identity = read_identity(repo)
    if identity.complete:
        console.print(f"Using git identity [bold]{escape(f'{identity.name} <{identity.email}>')}[/bold]")
        return identity

    if not identity.name:
        identity.name = ask("Enter your full name for git commits")
        repo.config_set(NAME_KEY, identity.name, scope="global")
        logger.info("Set global %s", NAME_KEY)
    if not identity.email:
        identity.email = ask("Enter your email address for git commits")
        repo.config_set(EMAIL_KEY, identity.email, scope="global")
        logger.info("Set global %s", EMAIL_KEY)
    return identity
