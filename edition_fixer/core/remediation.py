"""Remediation text for detected issues.

All functions here are pure: they turn issues into the ``cargo update``
arguments, the ``[patch.crates-io]`` block for ``Cargo.toml`` and the
static ``.cargo/config.toml`` content.
"""

from __future__ import annotations

from typing import Iterable, List

from edition_fixer.models import Issue
from edition_fixer.constants import PATCH_SECTION_HEADER

CARGO_CONFIG_TEMPLATE = """\
# Cargo configuration for Solana/Anchor compatibility
# Generated by edition-fixer

[resolver]
# MSRV-aware resolver - prefer versions compatible with rust-version
# Requires Cargo 1.84+ to have effect
incompatible-rust-versions = "fallback"

[net]
# Use git CLI for fetching (more reliable on some systems)
git-fetch-with-cli = true

[registries.crates-io]
# Use sparse registry protocol (faster and more stable)
protocol = "sparse"

[build]
# Recommended for Solana builds
rustflags = ["-C", "target-cpu=sbfv2"]
"""


def update_arguments(issue: Issue) -> List[str]:
    """Return the ``cargo`` arguments that pin ``issue`` to its safe version."""
    return ["update", "-p", issue.name, "--precise", issue.max_compatible]


def generate_update_commands(issues: Iterable[Issue]) -> List[str]:
    """Return one ``update -p <name> --precise <version>`` command per issue.

    The executable is not included; callers prefix ``cargo`` (or the
    configured binary) when displaying or running the command.

    Example::

        >>> generate_update_commands([zeroize_issue])
        ['update -p zeroize --precise 1.7.0']
    """
    return [" ".join(update_arguments(issue)) for issue in issues]


def generate_patch_section(issues: Iterable[Issue]) -> str:
    """Return a ``[patch.crates-io]`` block pinning every issue.

    Example::

        [patch.crates-io]
        blake3 = "=1.5.0"
    """
    lines = [PATCH_SECTION_HEADER]
    lines.extend(f'{issue.name} = "={issue.max_compatible}"' for issue in issues)
    return "\n".join(lines)


def generate_cargo_config() -> str:
    """Return the ``.cargo/config.toml`` content written by ``fix``.

    Enables the MSRV-aware resolver, git CLI fetching, the sparse
    crates.io protocol and the SBF target CPU flag. The text never varies.
    """
    return CARGO_CONFIG_TEMPLATE
