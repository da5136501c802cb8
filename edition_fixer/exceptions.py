"""
Custom exception hierarchy for edition-fixer.

This module defines structured exception types used across edition-fixer.
All exceptions inherit from :class:`EditionFixerError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Sequence


class EditionFixerError(Exception):
    """Base exception for all edition-fixer errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


class FileOperationError(EditionFixerError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(EditionFixerError):
    """Raised when a configuration file is missing, unreadable, or invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "config", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option


class DatabaseError(EditionFixerError):
    """Raised when the compatibility table cannot be loaded.

    Args:
        message: Error description.
        database_path: Path or resource name of the table.
        crate: Crate whose entry is malformed, if known.
    """

    __slots__ = ("database_path", "crate")

    def __init__(
        self,
        message: str,
        *,
        database_path: Optional[str] = None,
        crate: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "database", database_path)
        _add_if(details, "crate", crate)

        super().__init__(message, details)

        self.database_path = database_path
        self.crate = crate


class CommandExecutionError(EditionFixerError):
    """Raised when an external command cannot be spawned.

    Args:
        message: Error description.
        command: Executable and arguments.
        cwd: Working directory of the invocation.
        original_error: Original exception raised by the OS.
    """

    __slots__ = ("command", "cwd", "original_error")

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        cwd: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", " ".join(command) if command else None)
        _add_if(details, "cwd", cwd)

        super().__init__(message, details)

        self.command = list(command) if command else []
        self.cwd = cwd
        self.original_error = original_error
