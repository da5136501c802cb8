"""External command execution.

:class:`CommandRunner` is the narrow interface the fix executor uses to
run cargo. :class:`SubprocessRunner` is the real implementation; tests
substitute a fake that records calls and returns canned results.

Invocations are synchronous and have no timeout: a hung cargo process
blocks the run until it exits or is killed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from dataclasses import dataclass
from typing import Protocol, Sequence, Union

from edition_fixer.exceptions import CommandExecutionError
from edition_fixer.utils import get_logger

logger = get_logger("core.runner")


@dataclass(frozen=True)
class CommandOutput:
    """Exit status and captured stderr of one command.

    ``stderr`` is empty when output was streamed to the terminal.
    """

    exit_code: int
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class CommandRunner(Protocol):
    """Runs a command to completion and reports its outcome."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Union[str, Path],
        stream_output: bool = False,
    ) -> CommandOutput:
        ...


class SubprocessRunner:
    """:class:`CommandRunner` backed by :func:`subprocess.run`."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Union[str, Path],
        stream_output: bool = False,
    ) -> CommandOutput:
        """Run ``command`` with ``args`` in ``cwd`` and wait for it.

        Args:
            command: Executable name or path.
            args: Arguments passed to the executable.
            cwd: Working directory.
            stream_output: Let the child write to this process's stdout
                and stderr instead of capturing them.

        Raises:
            CommandExecutionError: The executable could not be started.
        """
        argv = [command, *args]
        logger.debug("Running %s in %s", " ".join(argv), cwd)

        try:
            if stream_output:
                completed = subprocess.run(argv, cwd=str(cwd), check=False)
                return CommandOutput(exit_code=completed.returncode)

            completed = subprocess.run(
                argv,
                cwd=str(cwd),
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as exc:
            raise CommandExecutionError(
                f"Failed to run {command}: {exc}",
                command=argv,
                cwd=str(cwd),
                original_error=exc,
            ) from exc

        return CommandOutput(
            exit_code=completed.returncode,
            stderr=completed.stderr or "",
        )
