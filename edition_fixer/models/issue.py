"""
Issue data model for edition-fixer.

An :class:`Issue` pairs a locked crate with the compatibility entry it
violates. Issues only live for the duration of one analysis run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from edition_fixer.models.package import PackageRecord
from edition_fixer.models.compatibility import CompatibilityEntry
from edition_fixer.utils.version_utils import get_downgrade_type


@dataclass(frozen=True)
class Issue:
    """A locked crate whose version is newer than the toolchain allows.

    Attributes:
        name: Crate name.
        current_version: Version currently locked in ``Cargo.lock``.
        max_compatible: Version the crate should be pinned to.
        first_incompatible: First version requiring edition 2024.
        reason: Human-readable explanation from the compatibility table.
        used_by: Ecosystem crates known to depend on this crate.
        source: Lockfile source of the offending package.
        priority: Severity label copied from the compatibility table.
    """

    name: str
    current_version: str
    max_compatible: str
    first_incompatible: str
    reason: str
    used_by: Tuple[str, ...] = field(default_factory=tuple)
    source: Optional[str] = None
    priority: Optional[str] = None

    @classmethod
    def from_package(
        cls,
        package: PackageRecord,
        entry: CompatibilityEntry,
    ) -> "Issue":
        """Create an issue for ``package`` violating ``entry``."""
        return cls(
            name=package.name,
            current_version=package.version,
            max_compatible=entry.max_compatible,
            first_incompatible=entry.first_incompatible,
            reason=entry.reason,
            used_by=entry.used_by,
            source=package.source,
            priority=entry.priority,
        )

    @property
    def change_type(self) -> str:
        """Size of the pin, e.g. ``"minor"`` for ``1.8.3 -> 1.5.0``."""
        return get_downgrade_type(self.current_version, self.max_compatible)

    def to_json(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "current_version": self.current_version,
            "max_compatible": self.max_compatible,
            "first_incompatible": self.first_incompatible,
            "reason": self.reason,
            "used_by": list(self.used_by),
            "source": self.source,
            "priority": self.priority,
        }

    def __str__(self) -> str:
        return f"{self.name} {self.current_version} (max {self.max_compatible})"
