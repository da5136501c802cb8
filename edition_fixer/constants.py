"""
Centralized constants for edition-fixer.

This module defines immutable configuration values used across
edition-fixer, including Cargo file locations, lockfile syntax, cargo
invocation details, and logging formats. All values are intended to be
treated as read-only.
"""

from typing import Final, Sequence

# ---------------------------------------------------------------------------
# Project files
# ---------------------------------------------------------------------------

#: Manifest file name, relative to the project root.
MANIFEST_FILE: Final[str] = "Cargo.toml"

#: Lockfile name, relative to the project root.
LOCKFILE_FILE: Final[str] = "Cargo.lock"

#: Directory holding project-local Cargo configuration.
CARGO_CONFIG_DIR: Final[str] = ".cargo"

#: Cargo configuration file name inside :data:`CARGO_CONFIG_DIR`.
CARGO_CONFIG_FILE: Final[str] = "config.toml"

# ---------------------------------------------------------------------------
# Lockfile and manifest syntax
# ---------------------------------------------------------------------------

#: Line that opens a package block in ``Cargo.lock``.
PACKAGE_DELIMITER: Final[str] = "[[package]]"

#: Header of the manifest section overriding crates.io dependencies.
PATCH_SECTION_HEADER: Final[str] = "[patch.crates-io]"

# ---------------------------------------------------------------------------
# Compatibility table
# ---------------------------------------------------------------------------

#: Bundled compatibility table, relative to the package directory.
DEFAULT_DATABASE_RESOURCE: Final[str] = "data/edition2024_database.json"

#: Reason used when a table entry does not provide one.
DEFAULT_ISSUE_REASON: Final[str] = "Requires edition 2024"

# ---------------------------------------------------------------------------
# Cargo invocation
# ---------------------------------------------------------------------------

#: Default package manager executable.
DEFAULT_CARGO: Final[str] = "cargo"

#: Substrings of cargo's stderr meaning the crate is not in the lock graph.
NOT_IN_TREE_MARKERS: Final[Sequence[str]] = (
    "not found",
    "did not match any packages",
)

#: Error text recorded when a failed cargo run produced no stderr.
UNKNOWN_ERROR: Final[str] = "Unknown error"

# ---------------------------------------------------------------------------
# Security constraints
# ---------------------------------------------------------------------------

#: Maximum allowed file size (in bytes) when reading project files.
MAX_FILE_SIZE: Final[int] = 10 * 1024 * 1024  # 10 MB

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
