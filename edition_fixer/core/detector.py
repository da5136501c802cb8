"""Issue detection: join lockfile packages against the compatibility table."""

from __future__ import annotations

from typing import List, Mapping, Sequence

from edition_fixer.models import CompatibilityEntry, Issue, PackageRecord
from edition_fixer.utils import compare_versions, get_logger

logger = get_logger("core.detector")


def find_incompatible(
    packages: Sequence[PackageRecord],
    database: Mapping[str, CompatibilityEntry],
) -> List[Issue]:
    """Return an :class:`Issue` for every package newer than its table entry.

    A package produces an issue only when its name is in ``database`` and
    its version compares strictly greater than the entry's
    ``max_compatible``. Issues keep the order of ``packages``.

    Args:
        packages: Parsed lockfile records.
        database: Compatibility table keyed by exact crate name.

    Returns:
        Detected issues; empty when everything is compatible.
    """
    issues: List[Issue] = []

    for package in packages:
        entry = database.get(package.name)
        if entry is None:
            continue

        if compare_versions(package.version, entry.max_compatible) > 0:
            logger.debug(
                "%s %s is newer than %s",
                package.name,
                package.version,
                entry.max_compatible,
            )
            issues.append(Issue.from_package(package, entry))

    return issues
