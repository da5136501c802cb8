"""Compatibility table for crates that moved to the 2024 edition.

The table maps a crate name to the newest version that still builds with
Cargo < 1.85. It ships with the package as JSON and may be replaced by a
user-supplied file with the same layout::

    {
      "edition": "2024",
      "minCargoVersion": "1.85.0",
      "updated": "2025-06-01",
      "crates": {
        "blake3": {
          "maxCompatible": "1.5.0",
          "firstIncompatible": "1.5.1",
          "reason": "Requires edition 2024",
          "usedBy": ["solana-program"],
          "priority": "critical"
        }
      }
    }

The table is loaded once per process and handed explicitly to
:func:`edition_fixer.core.detector.find_incompatible`; it is never
mutated.
"""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from edition_fixer.models import CompatibilityEntry
from edition_fixer.exceptions import DatabaseError, FileOperationError
from edition_fixer.constants import DEFAULT_DATABASE_RESOURCE
from edition_fixer.utils import get_logger, safe_read_file

logger = get_logger("core.database")

_BUNDLED_DATABASE = Path(__file__).resolve().parent.parent / DEFAULT_DATABASE_RESOURCE


class CompatibilityDatabase(Mapping[str, CompatibilityEntry]):
    """Immutable, exact-name lookup of :class:`CompatibilityEntry` records.

    Attributes:
        edition: Rust edition the table guards against.
        min_cargo_version: First Cargo release supporting that edition.
        updated: Date the table was last curated, if recorded.
        source: Where the table was loaded from.
    """

    __slots__ = ("_entries", "edition", "min_cargo_version", "updated", "source")

    def __init__(
        self,
        entries: Mapping[str, CompatibilityEntry],
        *,
        edition: str = "2024",
        min_cargo_version: Optional[str] = None,
        updated: Optional[str] = None,
        source: Optional[str] = None,
    ) -> None:
        self._entries: Mapping[str, CompatibilityEntry] = MappingProxyType(
            dict(entries)
        )
        self.edition = edition
        self.min_cargo_version = min_cargo_version
        self.updated = updated
        self.source = source

    def __getitem__(self, name: str) -> CompatibilityEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"CompatibilityDatabase(crates={len(self)}, "
            f"edition={self.edition!r}, source={self.source!r})"
        )

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        source: Optional[str] = None,
    ) -> "CompatibilityDatabase":
        """Build a database from the decoded JSON document.

        Raises:
            DatabaseError: The document or one of its entries is malformed.
        """
        crates = data.get("crates")
        if not isinstance(crates, dict):
            raise DatabaseError(
                "Compatibility table must contain a 'crates' object",
                database_path=source,
            )

        entries: Dict[str, CompatibilityEntry] = {}
        for name, record in crates.items():
            if not isinstance(record, dict):
                raise DatabaseError(
                    "Crate entry must be an object",
                    database_path=source,
                    crate=name,
                )
            try:
                entries[name] = CompatibilityEntry.from_mapping(record)
            except KeyError as exc:
                raise DatabaseError(
                    f"Crate entry is missing {exc}",
                    database_path=source,
                    crate=name,
                ) from exc
            except TypeError as exc:
                raise DatabaseError(
                    f"Invalid crate entry: {exc}",
                    database_path=source,
                    crate=name,
                ) from exc

        return cls(
            entries,
            edition=str(data.get("edition", "2024")),
            min_cargo_version=data.get("minCargoVersion"),
            updated=data.get("updated"),
            source=source,
        )


def load_database(path: Optional[Union[str, Path]] = None) -> CompatibilityDatabase:
    """Load the compatibility table.

    Args:
        path: Custom JSON table. ``None`` loads the table bundled with
            edition-fixer.

    Returns:
        The loaded :class:`CompatibilityDatabase`.

    Raises:
        DatabaseError: The file cannot be read or is not a valid table.
    """
    table_path = Path(path) if path is not None else _BUNDLED_DATABASE

    try:
        raw = safe_read_file(table_path)
    except FileOperationError as exc:
        raise DatabaseError(
            f"Cannot read compatibility table: {exc.message}",
            database_path=str(table_path),
        ) from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DatabaseError(
            f"Invalid JSON in compatibility table: {exc}",
            database_path=str(table_path),
        ) from exc

    if not isinstance(data, dict):
        raise DatabaseError(
            "Compatibility table must be a JSON object",
            database_path=str(table_path),
        )

    database = CompatibilityDatabase.from_dict(data, source=str(table_path))
    logger.debug("Loaded %d crate(s) from %s", len(database), table_path)
    return database
