"""Top-level project analysis.

:func:`analyze` is the single entry point that turns a project directory
into an :class:`AnalysisResult`. It never raises for project problems:
a missing manifest, a missing lockfile, or unreadable files are reported
through ``success=False`` and ``error``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Union

from edition_fixer.models import AnalysisResult, CompatibilityEntry
from edition_fixer.constants import LOCKFILE_FILE, MANIFEST_FILE
from edition_fixer.exceptions import FileOperationError
from edition_fixer.core.lockfile import parse_lockfile
from edition_fixer.core.manifest import inspect_manifest
from edition_fixer.core.detector import find_incompatible
from edition_fixer.core.remediation import (
    generate_patch_section,
    generate_update_commands,
)
from edition_fixer.utils import get_logger

logger = get_logger("core.analyzer")


def analyze(
    project_path: Union[str, Path],
    database: Mapping[str, CompatibilityEntry],
) -> AnalysisResult:
    """Analyze a Cargo project for crates requiring a newer edition.

    Steps:

    1. Require ``Cargo.toml``; without it nothing else is attempted.
    2. Inspect the manifest for ``rust-version`` and ``[patch.crates-io]``.
    3. Parse ``Cargo.lock``; a missing lockfile fails the analysis but
       keeps the manifest information.
    4. Detect issues and generate remediation commands and patch text.

    Args:
        project_path: Directory containing ``Cargo.toml``.
        database: Compatibility table, see
            :func:`edition_fixer.core.database.load_database`.

    Returns:
        The analysis outcome.
    """
    root = Path(project_path)
    absolute_root = str(root.resolve())

    if not (root / MANIFEST_FILE).is_file():
        logger.debug("No %s in %s", MANIFEST_FILE, absolute_root)
        return AnalysisResult.failure(
            f"No {MANIFEST_FILE} found in {absolute_root}",
            project_path=absolute_root,
        )

    try:
        manifest = inspect_manifest(root)
    except FileOperationError as exc:
        return AnalysisResult.failure(exc.message, project_path=absolute_root)

    lock_path = root / LOCKFILE_FILE
    try:
        packages = parse_lockfile(lock_path)
    except FileOperationError as exc:
        return AnalysisResult.failure(
            exc.message,
            project_path=absolute_root,
            manifest=manifest,
        )

    if packages is None:
        return AnalysisResult.failure(
            f"No {LOCKFILE_FILE} found. Run `cargo generate-lockfile` first.",
            project_path=absolute_root,
            manifest=manifest,
        )

    issues = find_incompatible(packages, database)
    logger.info(
        "Found %d incompatible crate(s) among %d package(s)",
        len(issues),
        len(packages),
    )

    return AnalysisResult(
        success=True,
        project_path=absolute_root,
        lockfile_path=str(lock_path.resolve()),
        total_packages=len(packages),
        issues=tuple(issues),
        manifest=manifest,
        commands=tuple(generate_update_commands(issues)),
        patch_section=generate_patch_section(issues),
    )
