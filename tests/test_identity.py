"""Tests for bootstrap/identity.py."""
from __future__ import annotations

from unittest.mock import MagicMock

from repo_bootstrapper.bootstrap.identity import ensure_identity, read_identity


def test_configured_identity_issues_no_prompt(repo, console):
    ask = MagicMock()
    identity = ensure_identity(repo, ask, console)
    ask.assert_not_called()
    assert identity.name == "Ada Lovelace"
    assert identity.email == "ada@example.com"
    assert "Ada Lovelace <ada@example.com>" in console.file.getvalue()


def test_missing_name_prompts_once_and_persists(repo, fake_git, console):
    del fake_git.global_config["user.name"]
    ask = MagicMock(return_value="Grace Hopper")
    identity = ensure_identity(repo, ask, console)
    assert ask.call_count == 1
    assert "name" in ask.call_args.args[0].lower()
    assert fake_git.global_config["user.name"] == "Grace Hopper"
    # Email untouched.
    assert fake_git.global_config["user.email"] == "ada@example.com"
    assert identity.name == "Grace Hopper"


def test_missing_email_prompts_once_independently(repo, fake_git, console):
    del fake_git.global_config["user.email"]
    ask = MagicMock(return_value="grace@example.com")
    ensure_identity(repo, ask, console)
    assert ask.call_count == 1
    assert "email" in ask.call_args.args[0].lower()
    assert fake_git.global_config["user.email"] == "grace@example.com"
    assert fake_git.global_config["user.name"] == "Ada Lovelace"


def test_both_missing_prompts_for_each(repo, fake_git, console):
    fake_git.global_config.clear()
    ask = MagicMock(side_effect=["Grace Hopper", "grace@example.com"])
    ensure_identity(repo, ask, console)
    assert ask.call_count == 2
    assert read_identity(repo).complete


def test_identity_not_echoed_when_something_was_missing(repo, fake_git, console):
    del fake_git.global_config["user.name"]
    ensure_identity(repo, MagicMock(return_value="Grace Hopper"), console)
    assert "Using git identity" not in console.file.getvalue()


def test_name_persisted_before_email_prompt(repo, fake_git, console):
    fake_git.global_config.clear()
    seen_at_email_prompt = {}

    def ask(question):
        if "email" in question.lower():
            seen_at_email_prompt.update(fake_git.global_config)
            return "grace@example.com"
        return "Grace Hopper"

    ensure_identity(repo, ask, console)
    assert seen_at_email_prompt == {"user.name": "Grace Hopper"}
