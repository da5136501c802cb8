"""Cargo.toml inspection.

Only two signals are read from the manifest: whether an MSRV
(``rust-version``) is declared and whether a ``[patch.crates-io]`` section
already exists. Both are found with a text scan, so manifests that a TOML
parser would reject still produce useful hints.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

from edition_fixer.models import ManifestInfo
from edition_fixer.constants import MANIFEST_FILE
from edition_fixer.utils import get_logger, safe_read_file

logger = get_logger("core.manifest")

_RUST_VERSION_KEY = re.compile(r"rust-version\s*=")
_RUST_VERSION_VALUE = re.compile(r'rust-version\s*=\s*"([^"]+)"')
_PATCH_SECTION = re.compile(r"\[patch\.crates-io\]")


def inspect_manifest_text(content: str, *, path: str = MANIFEST_FILE) -> ManifestInfo:
    """Extract MSRV and patch-section signals from manifest text."""
    value_match = _RUST_VERSION_VALUE.search(content)
    return ManifestInfo(
        exists=True,
        path=path,
        has_rust_version=bool(_RUST_VERSION_KEY.search(content)),
        rust_version=value_match.group(1) if value_match else None,
        has_patch_section=bool(_PATCH_SECTION.search(content)),
    )


def inspect_manifest(project_path: Union[str, Path]) -> ManifestInfo:
    """Inspect ``Cargo.toml`` in ``project_path``.

    Returns:
        ``ManifestInfo(exists=False)`` when there is no manifest, otherwise
        the detected signals.

    Raises:
        FileOperationError: The manifest exists but cannot be read.
    """
    manifest_path = Path(project_path) / MANIFEST_FILE
    if not manifest_path.is_file():
        return ManifestInfo(exists=False)

    info = inspect_manifest_text(
        safe_read_file(manifest_path, errors="replace"),
        path=str(manifest_path.resolve()),
    )
    logger.debug(
        "Manifest %s: rust-version=%s, patch section=%s",
        info.path,
        info.rust_version or ("<unquoted>" if info.has_rust_version else "<none>"),
        info.has_patch_section,
    )
    return info
