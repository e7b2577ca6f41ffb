"""Configuration schema. Defaults describe a Git LFS repository with a packed object archive."""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from repo_bootstrapper.domain import ToolVersion


class BootstrapConfig(BaseModel):
    """Everything the bootstrap stages need besides the repository handle."""

    git_min_version: str = Field("2.16.0", description="Minimum git version (major.minor.patch).")
    lfs_min_version: str = Field("2.3.4", description="Minimum git-lfs version (major.minor.patch).")
    branch_marker: str = Field(
        "bootstrap",
        description="Substring the current branch name must contain before anything is changed.",
    )
    default_branch: str = Field("main", description="Branch force-checked-out at the end of the run.")
    local_settings: Dict[str, str] = Field(
        default_factory=lambda: {
            "core.autocrlf": "false",
            "core.preloadindex": "true",
            "core.fscache": "true",
            "core.longpaths": "true",
            "gc.autoDetach": "false",
            "lfs.concurrenttransfers": "16",
            "lfs.setlockablereadonly": "false",
            "lfs.fetchrecentalways": "false",
            "lfs.fetchrecentrefsdays": "0",
            "lfs.fetchrecentcommitsdays": "0",
        },
        description="Local `git config` key/value pairs, applied in order.",
    )
    untracked_cache_settings: Dict[str, str] = Field(
        default_factory=lambda: {
            "core.untrackedCache": "true",
            "feature.manyFiles": "true",
        },
        description=(
            "Applied together, and only when `git update-index --test-untracked-cache` "
            "succeeds on this filesystem."
        ),
    )
    asset_archive: str = Field(
        "LfsPack/lfs-objects.tar.gz",
        description="Packed LFS object archive, relative to the repository root. Stage is skipped if absent.",
    )
    asset_include: str = Field(
        "LfsPack/*",
        description="`git lfs pull --include` pattern matching every archive to fetch.",
    )
    asset_extract_dir: Optional[str] = Field(
        None,
        description=(
            "Directory (relative to the repository root) the archive is extracted into. "
            "Unset means the git common dir, which also covers linked worktrees and submodules."
        ),
    )
    submodules_file: str = Field(".gitmodules", description="Submodules are initialised only if this exists.")
    prune_overrides: Dict[str, str] = Field(
        default_factory=lambda: {
            "lfs.fetchrecentrefsdays": "0",
            "lfs.fetchrecentcommitsdays": "0",
            "lfs.fetchrecentalways": "false",
            "lfs.pruneoffsetdays": "0",
        },
        description="One-off `git -c` overrides for `git lfs prune` that disable recency-based retention.",
    )

    @field_validator("git_min_version", "lfs_min_version")
    @classmethod
    def _check_version(cls, v: str) -> str:
        if ToolVersion.parse(v) is None:
            raise ValueError(f"{v!r} is not a major.minor.patch version")
        return v

    @field_validator("branch_marker", "default_branch")
    @classmethod
    def _check_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    @property
    def git_minimum(self) -> ToolVersion:
        return ToolVersion.parse(self.git_min_version)  # type: ignore[return-value]

    @property
    def lfs_minimum(self) -> ToolVersion:
        return ToolVersion.parse(self.lfs_min_version)  # type: ignore[return-value]


DEFAULT_CONFIG = BootstrapConfig()
