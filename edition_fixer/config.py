"""Configuration file loader for edition-fixer.

Handles discovery, loading, parsing, and validation of configuration files.
Supports two formats:

- ``edition-fixer.toml`` — settings under the ``[edition-fixer]`` table
- ``Cargo.toml`` — settings under ``[package.metadata.edition-fixer]`` or
  ``[workspace.metadata.edition-fixer]``

Discovery order:

1. Explicit path from ``--config`` or ``EDITION_FIXER_CONFIG``
2. ``edition-fixer.toml`` in current directory
3. ``Cargo.toml`` with an ``edition-fixer`` metadata table

Configuration precedence: defaults < config file < CLI args.

Example (``edition-fixer.toml``)::

    [edition-fixer]
    cargo = "/home/me/.local/share/solana/install/active_release/bin/cargo"
    database = "ci/edition2024.json"
"""

from __future__ import annotations

import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from edition_fixer.exceptions import ConfigError
from edition_fixer.utils.logger import get_logger
from edition_fixer.constants import DEFAULT_CARGO, MANIFEST_FILE

logger = get_logger("config")

CONFIG_FILE_NAME = "edition-fixer.toml"
CONFIG_SECTION = "edition-fixer"


@dataclass
class EditionFixerConfig:
    """Parsed and validated edition-fixer configuration.

    All fields have defaults, so empty config files are valid.

    Attributes:
        cargo: Cargo executable used by ``fix``.
        database: Custom compatibility table; ``None`` uses the bundled one.
            Relative paths are resolved against the config file's directory.
        source_path: Path to loaded config file, or ``None`` if using defaults.
    """

    cargo: str = DEFAULT_CARGO
    database: Optional[Path] = None

    # Metadata (not a user-facing option)
    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return configuration as dictionary for debug logging."""
        return {
            "cargo": self.cargo,
            "database": str(self.database) if self.database else None,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    config_toml = cwd / CONFIG_FILE_NAME
    if config_toml.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, config_toml)
        return config_toml

    cargo_toml = cwd / MANIFEST_FILE
    if cargo_toml.is_file() and _cargo_toml_has_section(cargo_toml):
        logger.debug("Found edition-fixer metadata in %s", cargo_toml)
        return cargo_toml

    logger.debug("No configuration file found")
    return None


def _metadata_section(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Return the ``edition-fixer`` metadata table of a parsed Cargo.toml."""
    for table in ("package", "workspace"):
        section = raw.get(table, {}).get("metadata", {}).get(CONFIG_SECTION)
        if isinstance(section, dict):
            return section
    return {}


def _cargo_toml_has_section(path: Path) -> bool:
    """Check if Cargo.toml carries edition-fixer metadata.

    Parse errors are ignored; an invalid manifest simply provides no
    configuration.
    """
    try:
        return bool(_metadata_section(_read_toml(path)))
    except ConfigError:
        return False


def load_config(config_path: Optional[Path] = None) -> EditionFixerConfig:
    """Load and validate edition-fixer configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`EditionFixerConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        logger.debug("No config file found, using defaults")
        return EditionFixerConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == MANIFEST_FILE:
        section = _metadata_section(raw)
    else:
        section = raw.get(CONFIG_SECTION, {})

    if not section:
        logger.debug("Config file found but no edition-fixer section, using defaults")
        return EditionFixerConfig(source_path=resolved)

    config = _parse_section(section, config_path=resolved)
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    config_path: Path,
) -> EditionFixerConfig:
    """Validate the ``edition-fixer`` table.

    Raises:
        ConfigError: Unknown keys or values of the wrong type.
    """
    config = EditionFixerConfig()

    known_top = {"cargo", "database"}
    unknown_top = set(section.keys()) - known_top
    if unknown_top:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown_top))}",
            config_path=str(config_path),
        )

    if "cargo" in section:
        val = section["cargo"]
        if not isinstance(val, str) or not val.strip():
            raise ConfigError(
                f"cargo must be a non-empty string, got {type(val).__name__}",
                config_path=str(config_path),
                option="cargo",
            )
        config.cargo = val

    if "database" in section:
        val = section["database"]
        if not isinstance(val, str) or not val.strip():
            raise ConfigError(
                f"database must be a non-empty string, got {type(val).__name__}",
                config_path=str(config_path),
                option="database",
            )
        database = Path(val).expanduser()
        if not database.is_absolute():
            database = config_path.parent / database
        config.database = database

    return config
