"""
Compatibility table entry model for edition-fixer.

Entries describe, for one crate, the newest release that still builds with
a pre-2024-edition toolchain and the first release that does not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from edition_fixer.constants import DEFAULT_ISSUE_REASON


@dataclass(frozen=True)
class CompatibilityEntry:
    """Read-only compatibility data for a single crate.

    Attributes:
        max_compatible: Newest version usable with the target toolchain.
        first_incompatible: First version requiring edition 2024.
        reason: Why newer versions are incompatible.
        used_by: Ecosystem crates known to pull this crate in.
        priority: Free-form severity label (``"critical"``, ``"high"`` ...).
    """

    max_compatible: str
    first_incompatible: str
    reason: str = DEFAULT_ISSUE_REASON
    used_by: Tuple[str, ...] = field(default_factory=tuple)
    priority: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CompatibilityEntry":
        """Build an entry from a table record using the JSON key names.

        Raises:
            KeyError: ``maxCompatible`` is missing.
            TypeError: A field has the wrong type.
        """
        max_compatible = data["maxCompatible"]
        first_incompatible = data.get("firstIncompatible", "")
        used_by = data.get("usedBy") or ()

        if not isinstance(max_compatible, str) or not max_compatible:
            raise TypeError("maxCompatible must be a non-empty string")
        if not isinstance(first_incompatible, str):
            raise TypeError("firstIncompatible must be a string")
        if isinstance(used_by, str) or not all(isinstance(u, str) for u in used_by):
            raise TypeError("usedBy must be a list of strings")

        priority = data.get("priority")
        return cls(
            max_compatible=max_compatible,
            first_incompatible=first_incompatible,
            reason=data.get("reason") or DEFAULT_ISSUE_REASON,
            used_by=tuple(used_by),
            priority=str(priority) if priority is not None else None,
        )
