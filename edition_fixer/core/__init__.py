"""
Core functionality exports for edition-fixer.

The pipeline runs left to right::

    parse_lockfile -> find_incompatible -> generate_* -> apply_fixes

with :func:`analyze` bundling the first three steps for a project
directory:

    from edition_fixer.core import analyze, load_database

    result = analyze("my-program", load_database())
"""

from __future__ import annotations

from edition_fixer.core.lockfile import parse_lockfile, parse_lockfile_text
from edition_fixer.core.database import CompatibilityDatabase, load_database
from edition_fixer.core.detector import find_incompatible
from edition_fixer.core.remediation import (
    generate_cargo_config,
    generate_patch_section,
    generate_update_commands,
    update_arguments,
)
from edition_fixer.core.manifest import inspect_manifest, inspect_manifest_text
from edition_fixer.core.runner import CommandOutput, CommandRunner, SubprocessRunner
from edition_fixer.core.fixer import apply_fixes, cargo_config_path
from edition_fixer.core.analyzer import analyze

__all__ = [
    "parse_lockfile",
    "parse_lockfile_text",
    "CompatibilityDatabase",
    "load_database",
    "find_incompatible",
    "generate_cargo_config",
    "generate_patch_section",
    "generate_update_commands",
    "update_arguments",
    "inspect_manifest",
    "inspect_manifest_text",
    "CommandOutput",
    "CommandRunner",
    "SubprocessRunner",
    "apply_fixes",
    "cargo_config_path",
    "analyze",
]
