"""
Unified data model exports for edition-fixer.

Example:
    >>> from edition_fixer.models import PackageRecord, Issue, AnalysisResult
"""

from __future__ import annotations

from edition_fixer.models.package import PackageRecord
from edition_fixer.models.compatibility import CompatibilityEntry
from edition_fixer.models.issue import Issue
from edition_fixer.models.result import (
    AnalysisResult,
    FailedUpdate,
    FixResult,
    ManifestInfo,
)

__all__ = [
    "PackageRecord",
    "CompatibilityEntry",
    "Issue",
    "AnalysisResult",
    "FailedUpdate",
    "FixResult",
    "ManifestInfo",
]
