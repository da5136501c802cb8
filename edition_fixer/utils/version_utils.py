"""
Version comparison utilities for edition-fixer.

Crate versions are compared with :func:`compare_versions`, a deliberately
lenient ordering over the numeric release tuple: pre-release and build
suffixes are ignored and non-numeric components count as zero, so no
version string found in a lockfile can make the comparison fail.

:func:`get_downgrade_type` is only used for display and relies on
PEP 440 parsing from ``packaging``; it reports ``"unknown"`` for anything
that parser rejects.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from packaging.version import InvalidVersion, Version, parse

_LEADING_DIGITS = re.compile(r"^\s*(\d+)")


def _release_components(version: str) -> List[int]:
    """Return the numeric components of ``version`` without its suffixes.

    ``"1.2.0-beta.1+build.5"`` becomes ``[1, 2, 0]``.
    """
    core = version.split("-", 1)[0].split("+", 1)[0]
    components: List[int] = []
    for part in core.split("."):
        match = _LEADING_DIGITS.match(part)
        components.append(int(match.group(1)) if match else 0)
    return components


def compare_versions(v1: str, v2: str) -> int:
    """Order two version strings by their numeric release components.

    Returns:
        ``1`` if ``v1 > v2``, ``-1`` if ``v1 < v2``, ``0`` if equal.

    Examples:
        >>> compare_versions("1.8.3", "1.5.0")
        1
        >>> compare_versions("1.2", "1.2.0")
        0
        >>> compare_versions("1.2.0-beta", "1.2.0")
        0
    """
    parts1 = _release_components(v1)
    parts2 = _release_components(v2)

    for index in range(max(len(parts1), len(parts2))):
        p1 = parts1[index] if index < len(parts1) else 0
        p2 = parts2[index] if index < len(parts2) else 0
        if p1 > p2:
            return 1
        if p1 < p2:
            return -1
    return 0


def get_downgrade_type(current_version: str, target_version: str) -> str:
    """Classify the pin from ``current_version`` down to ``target_version``.

    Returns:
        One of ``"major"``, ``"minor"``, ``"patch"`` (the highest release
        segment that changes), ``"same"``, ``"upgrade"`` when the target is
        newer, or ``"unknown"`` when either version is not PEP 440 parseable.

    Examples:
        >>> get_downgrade_type("1.8.3", "1.5.0")
        'minor'
        >>> get_downgrade_type("2.0.0", "1.9.9")
        'major'
    """
    try:
        current = _parse_version(current_version)
        target = _parse_version(target_version)
    except InvalidVersion:
        return "unknown"

    if target == current:
        return "same"
    if target > current:
        return "upgrade"

    current_major, current_minor, current_patch = _normalize_release(current)
    target_major, target_minor, target_patch = _normalize_release(target)

    if current_major != target_major:
        return "major"
    if current_minor != target_minor:
        return "minor"
    if current_patch != target_patch:
        return "patch"
    return "unknown"


def _parse_version(value: str) -> Version:
    parsed = parse(value)
    if not isinstance(parsed, Version):
        raise InvalidVersion(value)
    return parsed


def _normalize_release(version: Version) -> Tuple[int, int, int]:
    """Normalize a version's release segment to (major, minor, patch)."""
    release = version.release
    major = release[0] if len(release) > 0 else 0
    minor = release[1] if len(release) > 1 else 0
    patch = release[2] if len(release) > 2 else 0
    return major, minor, patch
