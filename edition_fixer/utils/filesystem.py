"""
Filesystem utilities for edition-fixer.

Helpers for reading project files (``Cargo.toml``, ``Cargo.lock``) and for
writing the project-local ``.cargo/config.toml``. All filesystem errors are
normalized to ``FileOperationError``.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from edition_fixer.utils.logger import get_logger
from edition_fixer.exceptions import FileOperationError
from edition_fixer.constants import MAX_FILE_SIZE


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Ensure ``path`` is an existing regular file and resolve it."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def _target_mode(target: Path) -> int:
    """Permission bits for ``target``: kept if it exists, else umask default.

    Temporary files are created 0600, so the final mode is set explicitly.
    """
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _atomic_write(target: Path, content: str) -> None:
    """Write text to ``target`` through a temporary file and a rename."""
    temp_path: Optional[Path] = None

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=str(target.parent),
            delete=False,
            prefix=f".{target.name}.",
            suffix=".tmp",
        ) as tmp:
            temp_path = Path(tmp.name)
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())

        os.chmod(temp_path, _target_mode(target))
        temp_path.replace(target)

    except OSError as exc:
        if temp_path and temp_path.exists():
            try:
                temp_path.unlink()
                logger.debug("Cleaned up temporary file: %s", temp_path)
            except OSError as cleanup_exc:
                logger.warning(
                    "Failed to clean up temporary file %s: %s",
                    temp_path,
                    cleanup_exc,
                )

        raise FileOperationError(
            f"Failed to write {target.name}: {exc}",
            file_path=str(target),
            operation="write",
            original_error=exc,
        ) from exc


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
    errors: str = "strict",
) -> str:
    """Read a text file, refusing anything larger than ``max_size`` bytes.

    ``errors`` is passed to the decoder; ``"replace"`` turns undecodable
    bytes into U+FFFD instead of failing.

    Raises:
        FileOperationError: The file is missing, too large, or unreadable.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding, errors=errors)
    except (OSError, UnicodeDecodeError) as exc:
        raise FileOperationError(
            f"Failed to read {path.name}: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def ensure_directory(directory: PathLike) -> Path:
    """Create ``directory`` and its parents; succeed if it already exists."""
    path = Path(directory)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to create directory {path}: {exc}",
            file_path=str(path),
            operation="mkdir",
            original_error=exc,
        ) from exc
    return path


def safe_write_file(file_path: PathLike, content: str) -> Path:
    """Atomically write ``content`` to ``file_path``, creating parent dirs.

    Returns:
        The path that was written.
    """
    path = Path(file_path)
    ensure_directory(path.parent)
    _atomic_write(path, content)
    logger.debug("Wrote %d bytes to %s", len(content), path)
    return path
