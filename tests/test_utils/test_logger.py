from __future__ import annotations

import io
import logging
from typing import Iterator
from unittest.mock import patch

import pytest

from edition_fixer.utils import logger as logger_module
from edition_fixer.utils.logger import (
    ROOT_LOGGER_NAME,
    ColoredFormatter,
    get_logger,
    is_logging_configured,
    level_for_verbosity,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Restore the package logger after each test."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    configured = logger_module._logging_configured

    yield

    root.handlers[:] = handlers
    root.setLevel(level)
    root.propagate = propagate
    logger_module._logging_configured = configured


def _record(level: int = logging.WARNING, msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="edition_fixer.test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger namespacing."""

    def test_short_name_is_prefixed(self) -> None:
        assert get_logger("core.fixer").name == "edition_fixer.core.fixer"

    def test_qualified_name_kept(self) -> None:
        assert get_logger("edition_fixer.config") is get_logger("config")

    @pytest.mark.parametrize("name", [None, "", "edition_fixer"])
    def test_root_logger(self, name) -> None:
        assert get_logger(name).name == ROOT_LOGGER_NAME

    def test_silent_without_setup(self) -> None:
        """Test library use adds a NullHandler instead of printing."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.handlers.clear()

        get_logger("anything")

        assert any(isinstance(h, logging.NullHandler) for h in root.handlers)


@pytest.mark.unit
class TestLevelForVerbosity:
    """Tests for -v count mapping."""

    @pytest.mark.parametrize(
        "verbose, expected",
        [
            (-1, logging.WARNING),
            (0, logging.WARNING),
            (1, logging.INFO),
            (2, logging.DEBUG),
            (5, logging.DEBUG),
        ],
    )
    def test_mapping(self, verbose: int, expected: int) -> None:
        assert level_for_verbosity(verbose) == expected


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_to_stream(self) -> None:
        stream = io.StringIO()

        setup_logging(level=logging.INFO, stream=stream)
        get_logger("core.fixer").info("Pinned blake3")

        assert "Pinned blake3" in stream.getvalue()
        assert is_logging_configured() is True

    def test_level_filters(self) -> None:
        stream = io.StringIO()

        setup_logging(level=logging.WARNING, stream=stream)
        get_logger("x").info("quiet")

        assert stream.getvalue() == ""

    def test_repeated_setup_single_handler(self) -> None:
        """Test calling setup twice does not duplicate output."""
        stream = io.StringIO()

        setup_logging(level=logging.INFO, stream=stream)
        setup_logging(level=logging.INFO, stream=stream)
        get_logger("x").warning("once")

        assert stream.getvalue().count("once") == 1
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_debug_uses_verbose_format(self) -> None:
        stream = io.StringIO()

        setup_logging(level=logging.DEBUG, stream=stream)
        get_logger("core.runner").debug("Running cargo")

        assert "edition_fixer.core.runner" in stream.getvalue()

    def test_does_not_propagate(self) -> None:
        setup_logging(stream=io.StringIO())

        assert logging.getLogger(ROOT_LOGGER_NAME).propagate is False


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_plain_without_tty(self) -> None:
        formatter = ColoredFormatter("%(levelname)s %(message)s")

        with patch.object(logger_module, "_stderr_supports_color", return_value=False):
            assert formatter.format(_record()) == "WARNING hello"

    def test_colored_with_tty(self) -> None:
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = _record(logging.ERROR)

        with patch.object(logger_module, "_stderr_supports_color", return_value=True):
            output = formatter.format(record)

        assert output.startswith("\033[31mERROR\033[0m")
        assert record.levelname == "ERROR"

    def test_color_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s", use_color=False)

        with patch.object(logger_module, "_stderr_supports_color", return_value=True):
            assert formatter.format(_record()) == "WARNING"

    @pytest.mark.parametrize("var", ["NO_COLOR", "CI"])
    def test_env_disables_color(self, monkeypatch: pytest.MonkeyPatch, var: str) -> None:
        monkeypatch.setenv(var, "1")

        assert logger_module._stderr_supports_color() is False
