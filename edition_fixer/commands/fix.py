"""Fix command implementation for edition-fixer.

Pins every crate that requires the Rust 2024 edition back to its newest
compatible release by running ``cargo update -p <crate> --precise
<version>`` in the project, and creates ``.cargo/config.toml`` with the
MSRV-aware resolver enabled when the project does not have one yet.

Crates are pinned one at a time, in lockfile order. A crate that cargo
cannot pin does not stop the run; failures are summarized at the end
together with a ``[patch.crates-io]`` block that can be added to
``Cargo.toml`` instead.

Typical usage::

    # Show what would be run
    $ edition-fixer fix --dry-run

    # Apply without confirmation, streaming cargo's output
    $ edition-fixer -v fix -y ./my-anchor-project

    # Use the cargo shipped with Solana platform-tools
    $ edition-fixer fix --cargo ~/.cache/solana/v1.43/platform-tools/rust/bin/cargo
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Optional

import click

from edition_fixer.models import AnalysisResult, FixResult
from edition_fixer.exceptions import EditionFixerError
from edition_fixer.context import pass_context, EditionFixerContext
from edition_fixer.core import apply_fixes, generate_patch_section
from edition_fixer.commands.common import (
    display_issue_table,
    display_project_summary,
    run_analysis,
)
from edition_fixer.utils import (
    confirm,
    get_logger,
    get_raw_console,
    print_error,
    print_heading,
    print_success,
    print_warning,
)

logger = get_logger("commands.fix")


@click.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the cargo commands without running them.",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@click.option(
    "--cargo",
    "cargo_bin",
    help="Cargo executable to run (default: from config, else 'cargo').",
)
@click.option(
    "--database",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Custom compatibility table (JSON).",
)
@pass_context
def fix(
    ctx: EditionFixerContext,
    path: Path,
    dry_run: bool,
    yes: bool,
    cargo_bin: Optional[str],
    database: Optional[Path],
) -> None:
    """Pin crates that require a newer Rust edition.

    Runs ``cargo update -p <crate> --precise <version>`` for each
    incompatible crate in PATH (default: current directory) and writes
    ``.cargo/config.toml`` if it is missing. With ``-v`` cargo's own
    output is shown as it runs.

    Exits:
        0 if nothing needed fixing or every crate was pinned or skipped,
        1 if any crate failed to update or the project could not be
        analyzed.
    """
    cargo = cargo_bin or ctx.settings.cargo
    try:
        ok = _run_fix(ctx, path, dry_run, yes, cargo, database)
        sys.exit(0 if ok else 1)

    except EditionFixerError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in fix command")
        sys.exit(1)


def _run_fix(
    ctx: EditionFixerContext,
    path: Path,
    dry_run: bool,
    skip_confirm: bool,
    cargo: str,
    database: Optional[Path],
) -> bool:
    """Analyze ``path`` and apply fixes.

    Returns:
        ``True`` on success, ``False`` if the analysis failed or any crate
        could not be updated.
    """
    # ── Step 1: Analyze ───────────────────────────────────────────────
    result = run_analysis(ctx, path, database)
    if not result.success:
        print_error(result.error or "Analysis failed")
        return False

    display_project_summary(result)

    if not result.has_issues:
        print_success("No edition 2024 compatibility issues found!")
        return True

    # ── Step 2: Show plan ─────────────────────────────────────────────
    display_issue_table(result.issues, verbose=ctx.verbose > 0)
    _display_plan(result, cargo)

    if dry_run:
        print_warning("Dry run mode - no changes applied")
        return True

    # ── Step 3: Confirm ───────────────────────────────────────────────
    if not skip_confirm:
        if not confirm(f"Pin {len(result.issues)} crate(s) with cargo update?"):
            logger.info("Fix cancelled by user")
            return True

    # ── Step 4: Apply ─────────────────────────────────────────────────
    fix_result = apply_fixes(
        result.project_path or path,
        result.issues,
        cargo=cargo,
        stream_output=ctx.verbose > 0,
    )

    logger.debug("Fix result: %s", json.dumps(fix_result.to_json()))
    _display_fix_results(result, fix_result)
    return fix_result.failed_count == 0


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_plan(result: AnalysisResult, cargo: str) -> None:
    console = get_raw_console()
    console.print("")
    console.print("[heading]Commands to run:[/heading]")
    for command in result.commands:
        console.print(f"  {cargo} {command}", markup=False)
    console.print("")


def _display_fix_results(result: AnalysisResult, fix_result: FixResult) -> None:
    """Print per-step outcomes, a patch block for failures, and next steps.

    Example output::

        ───────────────────── Results ─────────────────────
          Updated: 2
          Skipped: 1
          Failed:  0
          Created: .cargo/config.toml
    """
    console = get_raw_console()
    console.print("")
    print_heading("Results")
    console.print(f"  [success]Updated:[/success] {fix_result.updated_count}")
    console.print(f"  [warning]Skipped:[/warning] {fix_result.skipped_count}")
    console.print(f"  [error]Failed:[/error]  {fix_result.failed_count}")

    if fix_result.config_status == "created":
        console.print("  [success]Created:[/success] .cargo/config.toml")
    elif fix_result.config_status == "exists":
        console.print("  [dim]Kept existing .cargo/config.toml[/dim]")
    else:
        print_error(
            f"Could not create .cargo/config.toml: {fix_result.config_error}"
        )

    for failure in fix_result.failed:
        logger.info("%s: %s", failure.name, failure.error.strip())

    if fix_result.failed:
        failed_names = set(fix_result.failed_names)
        console.print("")
        print_warning("Some dependencies could not be updated automatically.")
        console.print("Try adding a patch section to your Cargo.toml:", markup=False)
        console.print("")
        console.print(
            generate_patch_section(
                issue for issue in result.issues if issue.name in failed_names
            ),
            markup=False,
        )

    console.print("")
    console.print("[heading]Next steps:[/heading]")
    console.print("  1. Try building: cargo build-sbf")
    console.print("  2. Or with Anchor: anchor build")
    console.print("")
