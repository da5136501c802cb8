"""
Console output utilities for edition-fixer using Rich.

Everything the user is meant to read (the issue report, remediation
instructions, fix results) goes through this module. Diagnostics belong
in :mod:`edition_fixer.utils.logger`.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.rule import Rule
from rich.table import Table
from rich.theme import Theme
from rich.console import Console

EDITION_FIXER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "heading": "bold blue",
        "dim": "dim",
    }
)

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    """Return the shared Rich console, creating it on first use."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                use_color = _should_use_color()
                _console = Console(
                    theme=EDITION_FIXER_THEME,
                    no_color=not use_color,
                    highlight=False,
                    soft_wrap=True,
                )
    return _console


def reconfigure_console() -> None:
    """Drop the shared console so the next call picks up a new environment."""
    global _console
    with _console_lock:
        _console = None


def get_raw_console() -> Console:
    """Return the underlying Rich Console instance."""
    return _get_console()


# ---------------------------------------------------------------------------
# Status messages
# ---------------------------------------------------------------------------


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _get_console().print(f"{prefix} {message}", style="success", markup=False)


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _get_console().print(f"{prefix} {message}", style="error", markup=False)


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _get_console().print(f"{prefix} {message}", style="warning", markup=False)


def print_heading(title: str, *, style: str = "info") -> None:
    """Print a full-width rule with a title, used between report sections."""
    _get_console().print(Rule(title, style=style))


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render a list of row dictionaries as a Rich table.

    Args:
        data: Rows; values may contain Rich markup.
        headers: Column order. Defaults to the keys of the first row.
        title: Optional table title.
        column_styles: Per-column keyword arguments for ``Table.add_column``
            (``style``, ``justify``, ``no_wrap``).
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(title=title, show_header=True, header_style="bold")

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "left"),
            no_wrap=config.get("no_wrap", False),
        )

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)


# ---------------------------------------------------------------------------
# User interaction
# ---------------------------------------------------------------------------


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question on the console.

    Empty or unrecognized input returns ``default``; Ctrl+C and EOF
    return ``False``.
    """
    console = _get_console()
    suffix = " [Y/n]: " if default else " [y/N]: "
    console.print(f"{message}{suffix}", end="", style="info", markup=False)

    try:
        response = input().strip().lower()
    except (KeyboardInterrupt, EOFError):
        console.print()
        return False

    if response in ("y", "yes"):
        return True
    if response in ("n", "no"):
        return False
    return default


# ---------------------------------------------------------------------------
# Markup helpers
# ---------------------------------------------------------------------------


def colorize_priority(priority: Optional[str]) -> str:
    """Return a Rich-markup label for a compatibility table priority."""
    if not priority:
        return "[dim]-[/dim]"

    color_map = {
        "critical": "bold red",
        "high": "red",
        "medium": "yellow",
        "low": "green",
    }
    color = color_map.get(priority.lower())
    return f"[{color}]{priority}[/{color}]" if color else priority


def colorize_change_type(change_type: str) -> str:
    """Return a Rich-markup label for the size of a version pin."""
    color_map = {
        "major": "red",
        "minor": "yellow",
        "patch": "green",
    }
    color = color_map.get(change_type.lower())
    return f"[{color}]{change_type}[/{color}]" if color else change_type
