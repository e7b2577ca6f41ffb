"""Domain models: ToolVersion, ToolReport, UserIdentity, CommandResult. Pure data, no I/O."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


@dataclass(frozen=True, order=True)
class ToolVersion:
    """Semantic version ordered by (major, minor, patch)."""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> Optional["ToolVersion"]:
        """Return the first ``X.Y.Z`` found in *text*, or ``None``.

        Handles the usual tool banners, e.g. ``git version 2.39.2.windows.1``
        and ``git-lfs/3.4.0 (GitHub; linux amd64; go 1.21.1)``.
        """
        m = _VERSION_RE.search(text or "")
        if m is None:
            return None
        return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class ToolReport:
    """Installed version of a required tool alongside its minimum."""
    tool: str
    version: ToolVersion
    minimum: ToolVersion


@dataclass
class UserIdentity:
    """Global git identity. Either field may be unset."""
    name: Optional[str] = None
    email: Optional[str] = None

    @property
    def complete(self) -> bool:
        return bool(self.name) and bool(self.email)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external invocation; returncode 0 means success."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0
