"""
Utility helpers for edition-fixer.

This package provides reusable utilities used across edition-fixer:

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers
- Version comparison helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------

from edition_fixer.utils.filesystem import (
    ensure_directory,
    safe_read_file,
    safe_write_file,
)

# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------

from edition_fixer.utils.logger import (
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)

# ---------------------------------------------------------------------------
# Console utilities
# ---------------------------------------------------------------------------

from edition_fixer.utils.console import (
    colorize_change_type,
    colorize_priority,
    confirm,
    get_raw_console,
    print_error,
    print_heading,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

# ---------------------------------------------------------------------------
# Version utilities
# ---------------------------------------------------------------------------

from edition_fixer.utils.version_utils import compare_versions, get_downgrade_type

__all__ = [
    # Console
    "confirm",
    "print_error",
    "print_table",
    "print_heading",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_priority",
    "colorize_change_type",
    # Logging
    "get_logger",
    "setup_logging",
    "level_for_verbosity",
    "is_logging_configured",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    "ensure_directory",
    # Versions
    "compare_versions",
    "get_downgrade_type",
]
