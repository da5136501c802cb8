"""Check command implementation for edition-fixer.

Scans a project's ``Cargo.lock`` for crates whose locked versions require
the Rust 2024 edition and reports how to pin them back.

The command runs the analysis pipeline once:

1. **Lockfile parser** — reads every ``[[package]]`` block.
2. **Issue detector** — compares each crate against the compatibility
   table.
3. **Remediation generator** — builds ``cargo update`` commands and a
   ``[patch.crates-io]`` block.

Nothing is modified on disk; use ``edition-fixer fix`` for that.

Typical usage::

    # Check the current directory
    $ edition-fixer check

    # Machine-readable output for CI
    $ edition-fixer check ./program --format json | jq '.issues'

    # Use a custom compatibility table
    $ edition-fixer check --database ci/edition2024.json
"""

from __future__ import annotations

import sys
import json
import click
from pathlib import Path
from typing import Optional

from rich.markup import escape

from edition_fixer.models import AnalysisResult
from edition_fixer.exceptions import EditionFixerError
from edition_fixer.context import pass_context, EditionFixerContext
from edition_fixer.commands.common import (
    display_issue_table,
    display_project_summary,
    run_analysis,
)
from edition_fixer.utils import (
    get_logger,
    get_raw_console,
    print_error,
    print_heading,
    print_success,
    print_warning,
)

logger = get_logger("commands.check")


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--database",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Custom compatibility table (JSON).",
)
@pass_context
def check(
    ctx: EditionFixerContext,
    path: Path,
    format: str,
    database: Optional[Path],
) -> None:
    """Report crates that require a newer Rust edition.

    Reads PATH/Cargo.toml and PATH/Cargo.lock (PATH defaults to the
    current directory) and lists every locked crate that is newer than
    the newest release compatible with pre-2024 toolchains.

    Exits:
        0 if no incompatible crates were found, 1 if some were found or
        the project could not be analyzed.
    """
    try:
        has_issues = _run_check(ctx, path, format.lower(), database)
        sys.exit(1 if has_issues else 0)

    except EditionFixerError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in check command")
        sys.exit(1)


def _run_check(
    ctx: EditionFixerContext,
    path: Path,
    format: str,
    database: Optional[Path],
) -> bool:
    """Analyze ``path`` and render the report.

    Returns:
        ``True`` when the run should exit non-zero: issues were found or
        the analysis failed.
    """
    result = run_analysis(ctx, path, database)

    if format == "json":
        _display_json(result)
        return not result.success or result.has_issues

    if not result.success:
        print_error(result.error or "Analysis failed")
        return True

    if format == "simple":
        _display_simple(result)
        return result.has_issues

    display_project_summary(result)

    if not result.has_issues:
        print_success("No edition 2024 compatibility issues found!")
        return False

    display_issue_table(result.issues, verbose=ctx.verbose > 0)
    print_warning(f"Found {len(result.issues)} incompatible crate(s)")
    _display_remediation(result, cargo=ctx.settings.cargo)
    return True


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_remediation(result: AnalysisResult, *, cargo: str) -> None:
    """Print the three ways to resolve the detected issues.

    Example output::

        ──────────────── To fix these issues ────────────────
        Option 1: Run edition-fixer with fix
          edition-fixer fix

        Option 2: Run cargo update commands manually
          cargo update -p blake3 --precise 1.5.0

        Option 3: Add to Cargo.toml
        [patch.crates-io]
        blake3 = "=1.5.0"
    """
    console = get_raw_console()
    console.print("")
    print_heading("To fix these issues")
    console.print("")

    console.print("[heading]Option 1:[/heading] Run edition-fixer with fix")
    console.print("  edition-fixer fix")
    console.print("")

    console.print("[heading]Option 2:[/heading] Run cargo update commands manually")
    for command in result.commands:
        console.print(f"  {cargo} {command}", markup=False)
    console.print("")

    console.print("[heading]Option 3:[/heading] Add to Cargo.toml")
    if result.manifest is not None and result.manifest.has_patch_section:
        console.print(
            "  [dim]Cargo.toml already has a "
            f"{escape('[patch.crates-io]')} section; merge these entries into it[/dim]"
        )
    console.print(result.patch_section, markup=False)
    console.print("")


def _display_simple(result: AnalysisResult) -> None:
    """Render one line per issue, suitable for piping to other tools.

    Example::

        blake3               1.8.3      -> 1.5.0      Requires edition 2024
    """
    console = get_raw_console()
    for issue in result.issues:
        console.print(
            f"{issue.name:20} {issue.current_version:10} -> "
            f"{issue.max_compatible:10} {issue.reason}",
            markup=False,
        )


def _display_json(result: AnalysisResult) -> None:
    """Print the full analysis result as JSON."""
    print(json.dumps(result.to_json(), indent=2))
