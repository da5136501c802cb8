"""
Shared context object for edition-fixer CLI commands.

This module defines the Click context object used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from edition_fixer.config import EditionFixerConfig


class EditionFixerContext:
    """Global context object for edition-fixer CLI commands.

    An instance of this class is created once per CLI invocation and
    passed to commands using Click's context mechanism.

    Attributes:
        config_path: Path to the configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration, ``None`` until the group callback runs.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[EditionFixerConfig] = None

    @property
    def settings(self) -> EditionFixerConfig:
        """Loaded configuration, or defaults when none was loaded."""
        return self.config if self.config is not None else EditionFixerConfig()


#: Click decorator for injecting :class:`EditionFixerContext` into commands.
pass_context = click.make_pass_decorator(EditionFixerContext, ensure=True)
