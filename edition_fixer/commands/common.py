"""Helpers shared by the ``check`` and ``fix`` commands.

Both commands resolve the compatibility table the same way (``--database``
flag, then config file, then the bundled table), run the same analysis
and print the same project summary and issue table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from rich.markup import escape

from edition_fixer.models import AnalysisResult, Issue
from edition_fixer.context import EditionFixerContext
from edition_fixer.core import CompatibilityDatabase, analyze, load_database
from edition_fixer.utils import (
    colorize_change_type,
    colorize_priority,
    get_logger,
    get_raw_console,
    print_table,
    print_warning,
)

logger = get_logger("commands.common")


def resolve_database(
    ctx: EditionFixerContext,
    override: Optional[Path],
) -> CompatibilityDatabase:
    """Load the compatibility table selected by flag, config, or default.

    Raises:
        DatabaseError: The selected table cannot be loaded.
    """
    path = override or ctx.settings.database
    database = load_database(path)
    logger.info(
        "Using compatibility table %s (%d crates)",
        database.source,
        len(database),
    )
    return database


def run_analysis(
    ctx: EditionFixerContext,
    project_path: Path,
    database_override: Optional[Path],
) -> AnalysisResult:
    """Load the table once and analyze ``project_path`` with it."""
    database = resolve_database(ctx, database_override)
    logger.info("Analyzing %s...", project_path)
    return analyze(project_path, database)


def display_project_summary(result: AnalysisResult) -> None:
    """Print the project path, package count and manifest hints."""
    console = get_raw_console()
    project = escape(result.project_path or "")
    console.print(f"[heading]Project:[/heading] {project}")
    console.print(f"[heading]Packages in Cargo.lock:[/heading] {result.total_packages}")
    console.print("")

    manifest = result.manifest
    if manifest is not None and manifest.exists and not manifest.has_rust_version:
        print_warning("No rust-version specified in Cargo.toml")
        console.print(
            '  [dim]Add: rust-version = "1.75" to your \\[package] section[/dim]'
        )
        console.print("")


def display_issue_table(issues: Sequence[Issue], *, verbose: bool = False) -> None:
    """Render detected issues as a Rich table.

    Example::

        ┏━━━━━━━━┳━━━━━━━━━┳━━━━━━━━━━━━┳━━━━━━━━┳━━━━━━━━━━┓
        ┃ Crate  ┃ Current ┃ Compatible ┃ Change ┃ Priority ┃
        ┡━━━━━━━━╇━━━━━━━━━╇━━━━━━━━━━━━╇━━━━━━━━╇━━━━━━━━━━┩
        │ blake3 │ 1.8.3   │ 1.5.0      │ minor  │ critical │
        └────────┴─────────┴────────────┴────────┴──────────┘
    """
    rows = [_issue_row(issue, verbose=verbose) for issue in issues]

    column_styles: Dict[str, Dict[str, Any]] = {
        "Crate": {"style": "bold cyan", "no_wrap": True},
        "Current": {"justify": "center", "style": "red"},
        "Compatible": {"justify": "center", "style": "green"},
        "Change": {"justify": "center"},
        "Priority": {"justify": "center"},
    }

    print_table(
        rows,
        title="Edition 2024 Incompatibilities",
        column_styles=column_styles,
    )


def _issue_row(issue: Issue, *, verbose: bool) -> Dict[str, str]:
    row = {
        "Crate": issue.name,
        "Current": issue.current_version,
        "Compatible": issue.max_compatible,
        "Change": colorize_change_type(issue.change_type),
        "Priority": colorize_priority(issue.priority),
    }
    if verbose:
        row["Reason"] = escape(issue.reason)
        row["Used by"] = ", ".join(issue.used_by) or "[dim]-[/dim]"
    return row
