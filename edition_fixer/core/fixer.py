"""Fix executor: apply remediation to a Cargo project.

:func:`apply_fixes` performs two steps, in order:

1. Write ``.cargo/config.toml`` with the MSRV-aware resolver settings,
   unless the project already has one.
2. Run ``cargo update -p <crate> --precise <version>`` once per issue,
   sequentially, classifying each outcome as updated, skipped (crate not
   in the lock graph) or failed.

Nothing in this module raises past :func:`apply_fixes`; every problem is
recorded in the returned :class:`FixResult`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Union

from edition_fixer.models import FailedUpdate, FixResult, Issue
from edition_fixer.constants import (
    CARGO_CONFIG_DIR,
    CARGO_CONFIG_FILE,
    DEFAULT_CARGO,
    NOT_IN_TREE_MARKERS,
    UNKNOWN_ERROR,
)
from edition_fixer.exceptions import FileOperationError
from edition_fixer.core.remediation import generate_cargo_config, update_arguments
from edition_fixer.core.runner import CommandOutput, CommandRunner, SubprocessRunner
from edition_fixer.utils import get_logger, safe_write_file

logger = get_logger("core.fixer")


def cargo_config_path(project_path: Union[str, Path]) -> Path:
    """Return the path of the project-local Cargo configuration file."""
    return Path(project_path) / CARGO_CONFIG_DIR / CARGO_CONFIG_FILE


def is_not_in_tree(stderr: str) -> bool:
    """True if cargo's stderr says the crate is absent from the lock graph."""
    return any(marker in stderr for marker in NOT_IN_TREE_MARKERS)


def write_cargo_config(project_path: Union[str, Path], result: FixResult) -> None:
    """Create ``.cargo/config.toml`` if missing and record the outcome."""
    config_path = cargo_config_path(project_path)
    result.config_path = str(config_path)

    if config_path.exists():
        logger.info("%s already exists, leaving it untouched", config_path)
        result.config_status = "exists"
        return

    try:
        safe_write_file(config_path, generate_cargo_config())
    except FileOperationError as exc:
        logger.warning("Could not create %s: %s", config_path, exc.message)
        result.config_status = "failed"
        result.config_error = exc.message
        return

    logger.info("Created %s", config_path)
    result.config_status = "created"


def _classify(issue: Issue, output: CommandOutput, result: FixResult) -> None:
    if output.succeeded:
        logger.info(
            "Pinned %s: %s -> %s",
            issue.name,
            issue.current_version,
            issue.max_compatible,
        )
        result.updated.append(issue.name)
    elif is_not_in_tree(output.stderr):
        logger.info("%s is not in the dependency tree, skipping", issue.name)
        result.skipped.append(issue.name)
    else:
        logger.warning(
            "cargo update failed for %s (exit %d)", issue.name, output.exit_code
        )
        result.failed.append(
            FailedUpdate(name=issue.name, error=output.stderr or UNKNOWN_ERROR)
        )


def apply_fixes(
    project_path: Union[str, Path],
    issues: Sequence[Issue],
    *,
    runner: Optional[CommandRunner] = None,
    cargo: str = DEFAULT_CARGO,
    stream_output: bool = False,
) -> FixResult:
    """Apply remediation for ``issues`` to the project at ``project_path``.

    Args:
        project_path: Cargo project directory; cargo runs with it as cwd.
        issues: Detected issues, processed in order.
        runner: Command runner; defaults to :class:`SubprocessRunner`.
        cargo: Cargo executable to invoke.
        stream_output: Show cargo's output live instead of capturing it.
            Captured stderr is needed to recognize "not in tree" skips.

    Returns:
        Per-crate outcomes and the Cargo configuration status.
    """
    runner = runner or SubprocessRunner()
    result = FixResult()

    write_cargo_config(project_path, result)

    for issue in issues:
        args = update_arguments(issue)
        logger.debug("Running: %s %s", cargo, " ".join(args))

        try:
            output = runner.run(cargo, args, project_path, stream_output)
        except Exception as exc:
            logger.debug("cargo invocation for %s raised", issue.name, exc_info=True)
            result.failed.append(FailedUpdate(name=issue.name, error=str(exc)))
            continue

        _classify(issue, output, result)

    logger.info(
        "Fix summary: %d updated, %d skipped, %d failed",
        result.updated_count,
        result.skipped_count,
        result.failed_count,
    )
    return result
