"""
Result data models for edition-fixer.

This module defines the records returned by the two top-level operations:
:class:`AnalysisResult` from :func:`edition_fixer.core.analyze` and
:class:`FixResult` from :func:`edition_fixer.core.apply_fixes`, plus the
:class:`ManifestInfo` summary of ``Cargo.toml``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from edition_fixer.models.issue import Issue


@dataclass(frozen=True)
class ManifestInfo:
    """Signals extracted from ``Cargo.toml``.

    Attributes:
        exists: Whether the manifest file was found.
        path: Absolute manifest path.
        has_rust_version: Whether a ``rust-version`` key is declared.
        rust_version: Declared MSRV, when it is a quoted string.
        has_patch_section: Whether ``[patch.crates-io]`` is already present.
    """

    exists: bool
    path: Optional[str] = None
    has_rust_version: bool = False
    rust_version: Optional[str] = None
    has_patch_section: bool = False

    def to_json(self) -> Dict[str, Any]:
        return {
            "exists": self.exists,
            "path": self.path,
            "has_rust_version": self.has_rust_version,
            "rust_version": self.rust_version,
            "has_patch_section": self.has_patch_section,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analyzing one Cargo project.

    ``success`` is ``False`` when the manifest or lockfile is missing or
    unreadable; ``error`` then explains why and ``manifest`` carries
    whatever was learned before the failure.

    Attributes:
        success: Whether the lockfile was analyzed.
        error: Failure description when ``success`` is ``False``.
        project_path: Absolute project directory.
        lockfile_path: Absolute ``Cargo.lock`` path.
        total_packages: Number of package records parsed from the lockfile.
        issues: Incompatible crates, in lockfile order.
        manifest: ``Cargo.toml`` signals.
        commands: ``cargo`` arguments that pin each issue, in issue order.
        patch_section: ``[patch.crates-io]`` block covering every issue.
    """

    success: bool
    error: Optional[str] = None
    project_path: Optional[str] = None
    lockfile_path: Optional[str] = None
    total_packages: int = 0
    issues: Tuple[Issue, ...] = field(default_factory=tuple)
    manifest: Optional[ManifestInfo] = None
    commands: Tuple[str, ...] = field(default_factory=tuple)
    patch_section: str = ""

    @classmethod
    def failure(
        cls,
        error: str,
        *,
        project_path: Optional[str] = None,
        manifest: Optional[ManifestInfo] = None,
    ) -> "AnalysisResult":
        return cls(
            success=False,
            error=error,
            project_path=project_path,
            manifest=manifest,
        )

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def to_json(self) -> Dict[str, Any]:
        """Serialize the analysis to a JSON-compatible dictionary."""
        data: Dict[str, Any] = {"success": self.success}
        if not self.success:
            data["error"] = self.error
            if self.manifest is not None:
                data["manifest"] = self.manifest.to_json()
            return data

        data.update(
            {
                "project_path": self.project_path,
                "lockfile_path": self.lockfile_path,
                "total_packages": self.total_packages,
                "issues": [issue.to_json() for issue in self.issues],
                "manifest": self.manifest.to_json() if self.manifest else None,
                "commands": list(self.commands),
                "patch_section": self.patch_section,
            }
        )
        return data


@dataclass(frozen=True)
class FailedUpdate:
    """A crate that cargo could not pin, with the captured error text."""

    name: str
    error: str

    def to_json(self) -> Dict[str, str]:
        return {"name": self.name, "error": self.error}


@dataclass
class FixResult:
    """Aggregate outcome of :func:`edition_fixer.core.apply_fixes`.

    Attributes:
        config_status: ``"created"``, ``"exists"`` or ``"failed"`` for the
            ``.cargo/config.toml`` step.
        config_path: Path of the Cargo configuration file.
        config_error: Error text when ``config_status`` is ``"failed"``.
        updated: Crates successfully pinned.
        skipped: Crates cargo reported as absent from the dependency graph.
        failed: Crates that could not be pinned.
    """

    config_status: str = "exists"
    config_path: Optional[str] = None
    config_error: Optional[str] = None
    updated: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[FailedUpdate] = field(default_factory=list)

    @property
    def config_created(self) -> bool:
        return self.config_status == "created"

    @property
    def updated_count(self) -> int:
        return len(self.updated)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def failed_names(self) -> List[str]:
        return [failure.name for failure in self.failed]

    def to_json(self) -> Dict[str, Any]:
        return {
            "config_status": self.config_status,
            "config_path": self.config_path,
            "config_error": self.config_error,
            "updated": list(self.updated),
            "skipped": list(self.skipped),
            "failed": [failure.to_json() for failure in self.failed],
        }
