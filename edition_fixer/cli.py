"""
Command-line interface for edition-fixer.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from edition_fixer.config import load_config
from edition_fixer.__version__ import __version__
from edition_fixer.context import EditionFixerContext
from edition_fixer.exceptions import ConfigError, EditionFixerError
from edition_fixer.utils.logger import get_logger, level_for_verbosity, setup_logging
from edition_fixer.utils.console import (
    print_error,
    print_warning,
    reconfigure_console,
)

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="EDITION_FIXER_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="EDITION_FIXER_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="edition-fixer",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """edition-fixer — pin Rust crates that require edition 2024.

    Scans Cargo.lock for crates whose locked versions need Cargo 1.85+
    and pins them back to the newest release an older toolchain (such as
    Solana platform-tools) can build.

    \b
    Available commands:
      edition-fixer check [PATH]     Report incompatible crates
      edition-fixer fix [PATH]       Pin incompatible crates with cargo

    \b
    Examples:
      edition-fixer check
      edition-fixer check ./my-anchor-project --format json
      edition-fixer fix -y
      edition-fixer -v fix --dry-run

    Use ``edition-fixer COMMAND --help`` for command-specific options.
    """
    level = level_for_verbosity(verbose)
    setup_logging(level=level)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))

    # Respect NO_COLOR for rich and the log formatter
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    fixer_ctx = EditionFixerContext()
    fixer_ctx.config_path = config or loaded_config.source_path
    fixer_ctx.color = color
    fixer_ctx.verbose = verbose
    fixer_ctx.config = loaded_config
    ctx.obj = fixer_ctx

    logger.debug("edition-fixer v%s", __version__)
    logger.debug("Config path: %s", fixer_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _register_commands() -> None:
    from edition_fixer.commands.check import check
    from edition_fixer.commands.fix import fix

    cli.add_command(check)
    cli.add_command(fix)


_register_commands()


def main() -> int:
    """Main entry point for the edition-fixer CLI.

    Returns:
        Exit code:
            0   Success, no issues
            1   Issues found, fix failures, or an application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 1

    except EditionFixerError as exc:
        print_error(str(exc))
        logger.debug(
            "EditionFixerError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
