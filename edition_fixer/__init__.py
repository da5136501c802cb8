"""
edition-fixer — pin Rust crates that require edition 2024

Solana platform-tools and other pinned toolchains ship Cargo 1.75-1.84,
while crates published for the 2024 edition need Cargo 1.85+. A fresh
``cargo update`` therefore easily locks versions the toolchain cannot
build. edition-fixer finds those crates in ``Cargo.lock`` and pins them
back to the newest compatible release.

Features include:
    • Lockfile scanning against a curated compatibility table
    • Ready-to-run ``cargo update --precise`` commands
    • ``[patch.crates-io]`` blocks for Cargo.toml
    • MSRV-aware ``.cargo/config.toml`` generation
    • JSON output for CI

Programmatic use::

    from edition_fixer import analyze, load_database

    result = analyze("my-program", load_database())
    for issue in result.issues:
        print(issue.name, issue.current_version, "->", issue.max_compatible)
"""

from __future__ import annotations

from edition_fixer.__version__ import __version__
from edition_fixer.core import (
    analyze,
    apply_fixes,
    find_incompatible,
    generate_cargo_config,
    generate_patch_section,
    generate_update_commands,
    load_database,
    parse_lockfile,
)
from edition_fixer.utils.version_utils import compare_versions

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "edition-fixer Contributors"
__license__ = "MIT"
__description__ = "Pin Rust crates that require edition 2024 for older Cargo toolchains."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "analyze",
    "apply_fixes",
    "compare_versions",
    "find_incompatible",
    "generate_cargo_config",
    "generate_patch_section",
    "generate_update_commands",
    "load_database",
    "parse_lockfile",
]
