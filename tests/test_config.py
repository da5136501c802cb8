from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from edition_fixer.config import (
    EditionFixerConfig,
    discover_config_file,
    load_config,
    _cargo_toml_has_section,
    _parse_section,
    _read_toml,
)
from edition_fixer.exceptions import ConfigError


@pytest.mark.unit
class TestEditionFixerConfig:
    """Tests for EditionFixerConfig dataclass."""

    def test_default_initialization(self) -> None:
        """Test EditionFixerConfig initializes with correct defaults."""
        config = EditionFixerConfig()

        assert config.cargo == "cargo"
        assert config.database is None
        assert config.source_path is None

    def test_to_log_dict(self) -> None:
        """Test to_log_dict returns configuration without metadata."""
        config = EditionFixerConfig(
            cargo="/opt/cargo",
            database=Path("/data/table.json"),
            source_path=Path("/test/edition-fixer.toml"),
        )

        result = config.to_log_dict()

        assert result == {"cargo": "/opt/cargo", "database": str(Path("/data/table.json"))}
        assert "source_path" not in result


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file function."""

    def test_explicit_path_priority(self, tmp_path: Path) -> None:
        """Test explicit path is used when provided and exists."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[edition-fixer]\n", encoding="utf-8")
        (tmp_path / "edition-fixer.toml").write_text("[edition-fixer]\n", encoding="utf-8")

        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file(config_file)

        assert result == config_file.resolve()

    def test_explicit_path_not_found_raises_error(self, tmp_path: Path) -> None:
        """Test ConfigError raised when explicit path doesn't exist."""
        with pytest.raises(ConfigError) as exc_info:
            discover_config_file(tmp_path / "nonexistent.toml")

        assert "not found" in str(exc_info.value).lower()

    def test_discovers_edition_fixer_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "edition-fixer.toml"
        config_file.write_text("[edition-fixer]\n", encoding="utf-8")

        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    @pytest.mark.parametrize("table", ["package", "workspace"])
    def test_discovers_cargo_toml_metadata(self, tmp_path: Path, table: str) -> None:
        """Test Cargo.toml is used when it carries edition-fixer metadata."""
        config_file = tmp_path / "Cargo.toml"
        config_file.write_text(
            f'[{table}.metadata.edition-fixer]\ncargo = "cargo"\n',
            encoding="utf-8",
        )

        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_ignores_cargo_toml_without_section(self, tmp_path: Path) -> None:
        (tmp_path / "Cargo.toml").write_text('[package]\nname = "x"\n', encoding="utf-8")

        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_edition_fixer_toml_wins_over_cargo_toml(self, tmp_path: Path) -> None:
        (tmp_path / "edition-fixer.toml").write_text("[edition-fixer]\n", encoding="utf-8")
        (tmp_path / "Cargo.toml").write_text(
            '[package.metadata.edition-fixer]\ncargo = "x"\n', encoding="utf-8"
        )

        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == tmp_path / "edition-fixer.toml"

    def test_no_config_found(self, tmp_path: Path) -> None:
        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None


@pytest.mark.unit
class TestCargoTomlHasSection:
    """Tests for _cargo_toml_has_section helper."""

    def test_invalid_toml_is_ignored(self, tmp_path: Path) -> None:
        """Test a broken manifest is treated as carrying no configuration."""
        path = tmp_path / "Cargo.toml"
        path.write_text("[package\nname=", encoding="utf-8")

        assert _cargo_toml_has_section(path) is False

    def test_empty_section_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.toml"
        path.write_text("[package.metadata.edition-fixer]\n", encoding="utf-8")

        assert _cargo_toml_has_section(path) is False


@pytest.mark.unit
class TestReadToml:
    """Tests for _read_toml helper."""

    def test_reads_valid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "a.toml"
        path.write_text('[edition-fixer]\ncargo = "x"\n', encoding="utf-8")

        assert _read_toml(path) == {"edition-fixer": {"cargo": "x"}}

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[edition-fixer\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            _read_toml(path)

        assert "Invalid TOML" in exc_info.value.message
        assert exc_info.value.config_path == str(path)

    def test_unreadable_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _read_toml(tmp_path / "missing.toml")

        assert "Cannot read configuration file" in exc_info.value.message


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section validation."""

    def test_empty_section_gives_defaults(self, tmp_path: Path) -> None:
        config = _parse_section({}, config_path=tmp_path / "c.toml")

        assert config.cargo == "cargo"
        assert config.database is None

    def test_cargo_value(self, tmp_path: Path) -> None:
        config = _parse_section({"cargo": "cargo-1.84"}, config_path=tmp_path / "c.toml")

        assert config.cargo == "cargo-1.84"

    def test_relative_database_resolved_against_config(self, tmp_path: Path) -> None:
        config = _parse_section(
            {"database": "ci/table.json"}, config_path=tmp_path / "c.toml"
        )

        assert config.database == tmp_path / "ci" / "table.json"

    def test_absolute_database_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "table.json"

        config = _parse_section(
            {"database": str(target)}, config_path=tmp_path / "c.toml"
        )

        assert config.database == target

    def test_unknown_key_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse_section(
                {"cargo": "x", "timeout": 3}, config_path=tmp_path / "c.toml"
            )

        assert "timeout" in exc_info.value.message

    @pytest.mark.parametrize(
        "key, value",
        [("cargo", 1), ("cargo", "  "), ("database", False), ("database", "")],
    )
    def test_invalid_values_raise(self, tmp_path: Path, key: str, value: object) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse_section({key: value}, config_path=tmp_path / "c.toml")

        assert exc_info.value.option == key


@pytest.mark.integration
class TestLoadConfig:
    """Tests for load_config end to end."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config == EditionFixerConfig()

    def test_loads_edition_fixer_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "edition-fixer.toml"
        path.write_text(
            '[edition-fixer]\ncargo = "/opt/cargo"\ndatabase = "table.json"\n',
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.cargo == "/opt/cargo"
        assert config.database == path.resolve().parent / "table.json"
        assert config.source_path == path.resolve()

    def test_loads_cargo_toml_metadata(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.toml"
        path.write_text(
            '[package]\nname = "x"\n\n'
            '[package.metadata.edition-fixer]\ncargo = "cargo-sbf"\n',
            encoding="utf-8",
        )

        with patch("edition_fixer.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config.cargo == "cargo-sbf"
        assert config.source_path == path

    def test_file_without_section_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.toml"
        path.write_text("[other]\nkey = 1\n", encoding="utf-8")

        config = load_config(path)

        assert config.cargo == "cargo"
        assert config.source_path == path.resolve()

    def test_invalid_section_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "edition-fixer.toml"
        path.write_text("[edition-fixer]\ncargo = 5\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)
