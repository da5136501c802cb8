"""
Lockfile package data model for edition-fixer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PackageRecord:
    """A single ``[[package]]`` entry from ``Cargo.lock``.

    The same crate name may appear several times in one lockfile when
    different major versions coexist in the dependency graph; each block
    yields its own record.

    Attributes:
        name: Crate name exactly as written in the lockfile.
        version: Resolved version string.
        source: Registry or git source, ``None`` for workspace members.
    """

    name: str
    version: str
    source: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} {self.version}"
