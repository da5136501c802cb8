from __future__ import annotations

import pytest

from edition_fixer.core import CompatibilityDatabase
from edition_fixer.core.detector import find_incompatible
from edition_fixer.models import CompatibilityEntry, PackageRecord
from edition_fixer.utils import compare_versions


@pytest.mark.unit
class TestFindIncompatible:
    """Tests for find_incompatible issue detection."""

    def test_newer_version_produces_issue(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test blake3 1.8.3 against max 1.5.0 yields exactly one issue."""
        packages = [PackageRecord("blake3", "1.8.3", "registry+crates-io")]

        issues = find_incompatible(packages, database)

        assert len(issues) == 1
        issue = issues[0]
        assert issue.name == "blake3"
        assert issue.current_version == "1.8.3"
        assert issue.max_compatible == "1.5.0"
        assert issue.first_incompatible == "1.5.1"
        assert issue.used_by == ("solana-program",)
        assert issue.source == "registry+crates-io"
        assert issue.priority == "critical"

    def test_unknown_crate_produces_no_issue(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test crates absent from the table are ignored regardless of version."""
        packages = [PackageRecord("serde", "1.0.0"), PackageRecord("serde", "99.0.0")]

        assert find_incompatible(packages, database) == []

    def test_equal_version_is_compatible(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test a version equal to max_compatible is not an issue."""
        packages = [PackageRecord("subtle", "2.5.0")]

        assert find_incompatible(packages, database) == []

    def test_older_version_is_compatible(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test a version below max_compatible is not an issue."""
        packages = [PackageRecord("zeroize", "1.6.0")]

        assert find_incompatible(packages, database) == []

    def test_prerelease_of_max_is_compatible(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test pre-release suffixes are ignored when comparing."""
        packages = [PackageRecord("blake3", "1.5.0-rc.1")]

        assert find_incompatible(packages, database) == []

    def test_issue_order_follows_package_order(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test issues are not sorted by name or priority."""
        packages = [
            PackageRecord("zeroize", "1.8.1"),
            PackageRecord("serde", "1.0.0"),
            PackageRecord("blake3", "1.8.3"),
        ]

        issues = find_incompatible(packages, database)

        assert [i.name for i in issues] == ["zeroize", "blake3"]

    def test_duplicate_crate_versions_each_checked(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test each record of a repeated crate is judged on its own."""
        packages = [
            PackageRecord("zeroize", "1.3.0"),
            PackageRecord("zeroize", "1.8.1"),
            PackageRecord("zeroize", "1.9.0"),
        ]

        issues = find_incompatible(packages, database)

        assert [i.current_version for i in issues] == ["1.8.1", "1.9.0"]

    def test_accepts_plain_mapping(self) -> None:
        """Test any name -> entry mapping works as the table."""
        table = {"foo": CompatibilityEntry("0.1.0", "0.2.0", reason="custom")}

        issues = find_incompatible([PackageRecord("foo", "0.2.0")], table)

        assert issues[0].reason == "custom"

    def test_every_issue_is_strictly_newer(
        self, database: CompatibilityDatabase
    ) -> None:
        """Test detected issues always compare greater than max_compatible."""
        packages = [
            PackageRecord(name, version)
            for name in ("blake3", "subtle", "zeroize")
            for version in ("0.1.0", "1.5.0", "1.7.0", "1.8.3", "2.5.0", "2.5.1")
        ]

        for issue in find_incompatible(packages, database):
            assert compare_versions(issue.current_version, issue.max_compatible) > 0

    def test_empty_inputs(self, database: CompatibilityDatabase) -> None:
        """Test no packages means no issues."""
        assert find_incompatible([], database) == []
        assert find_incompatible([PackageRecord("blake3", "9.0.0")], {}) == []
