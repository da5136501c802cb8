"""Cargo.lock scanner.

Extracts ``name``/``version``/``source`` from every ``[[package]]`` block
without interpreting the rest of the TOML document. Only the three quoted
string keys are recognized, which makes the same scanner work for lockfile
format v3 and v4 (the ``version = 4`` header before the first block is
never looked at).

Scanning is tolerant: a block missing either ``name`` or ``version`` is
dropped without error.

Typical usage::

    from edition_fixer.core.lockfile import parse_lockfile

    packages = parse_lockfile("my-program/Cargo.lock")
    if packages is None:
        print("no lockfile yet")
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Union

from edition_fixer.models import PackageRecord
from edition_fixer.constants import PACKAGE_DELIMITER
from edition_fixer.utils import get_logger, safe_read_file

logger = get_logger("core.lockfile")

_FIELD_PATTERNS = {
    "name": re.compile(r'^name\s*=\s*"([^"]+)"'),
    "version": re.compile(r'^version\s*=\s*"([^"]+)"'),
    "source": re.compile(r'^source\s*=\s*"([^"]+)"'),
}


def _finish_block(
    fields: Optional[Dict[str, str]],
    packages: List[PackageRecord],
) -> None:
    """Emit the in-progress block if it carries both name and version."""
    if fields is None:
        return
    if "name" in fields and "version" in fields:
        packages.append(
            PackageRecord(
                name=fields["name"],
                version=fields["version"],
                source=fields.get("source"),
            )
        )
    else:
        logger.debug("Dropping incomplete package block: %s", fields or "<empty>")


def parse_lockfile_text(content: str) -> List[PackageRecord]:
    """Parse lockfile text into package records, in source order.

    Args:
        content: Full text of a ``Cargo.lock`` file.

    Returns:
        One :class:`PackageRecord` per complete package block. Empty text
        yields an empty list.

    Example::

        >>> parse_lockfile_text('[[package]]\\nname = "blake3"\\nversion = "1.8.3"\\n')
        [PackageRecord(name='blake3', version='1.8.3', source=None)]
    """
    packages: List[PackageRecord] = []
    current: Optional[Dict[str, str]] = None

    for line in content.splitlines():
        if line == PACKAGE_DELIMITER:
            _finish_block(current, packages)
            current = {}
            continue

        if current is None:
            continue

        for key, pattern in _FIELD_PATTERNS.items():
            match = pattern.match(line)
            if match:
                current[key] = match.group(1)
                break

    _finish_block(current, packages)
    return packages


def parse_lockfile(lock_path: Union[str, Path]) -> Optional[List[PackageRecord]]:
    """Read and parse a ``Cargo.lock`` file.

    Args:
        lock_path: Path to the lockfile.

    Returns:
        The parsed records, or ``None`` when no lockfile exists at
        ``lock_path``. An existing but empty lockfile returns ``[]``.

    Raises:
        FileOperationError: The file exists but cannot be read.
    """
    path = Path(lock_path)
    if not path.exists():
        logger.info("No lockfile at %s", path)
        return None

    packages = parse_lockfile_text(safe_read_file(path, errors="replace"))
    logger.info("Parsed %d package(s) from %s", len(packages), path)
    return packages
