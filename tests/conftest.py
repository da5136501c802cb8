from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import pytest

from edition_fixer.core import CompatibilityDatabase, CommandOutput
from edition_fixer.models import CompatibilityEntry, Issue


SAMPLE_LOCKFILE = """\
# This file is automatically @generated by Cargo.
# It is not intended for manual editing.
version = 4

[[package]]
name = "arrayref"
version = "0.3.9"
source = "registry+https://github.com/rust-lang/crates.io-index"
checksum = "76a2e8124351fda1ef8aaaa3bbd7ebbcb486bbcd4225aca0aa0d84bb2db8fecb"

[[package]]
name = "blake3"
version = "1.8.3"
source = "registry+https://github.com/rust-lang/crates.io-index"
dependencies = [
 "arrayref",
 "constant_time_eq",
]

[[package]]
name = "my-program"
version = "0.1.0"
dependencies = [
 "blake3",
 "subtle",
]

[[package]]
name = "subtle"
version = "2.5.0"
source = "registry+https://github.com/rust-lang/crates.io-index"

[[package]]
name = "zeroize"
version = "1.8.1"
source = "registry+https://github.com/rust-lang/crates.io-index"
"""

SAMPLE_MANIFEST = """\
[package]
name = "my-program"
version = "0.1.0"
edition = "2021"
rust-version = "1.75"

[dependencies]
blake3 = "1"
"""


@pytest.fixture
def database() -> CompatibilityDatabase:
    """Small compatibility table used across tests."""
    return CompatibilityDatabase(
        {
            "blake3": CompatibilityEntry(
                max_compatible="1.5.0",
                first_incompatible="1.5.1",
                reason="Requires edition 2024",
                used_by=("solana-program",),
                priority="critical",
            ),
            "subtle": CompatibilityEntry(
                max_compatible="2.5.0",
                first_incompatible="2.6.0",
            ),
            "zeroize": CompatibilityEntry(
                max_compatible="1.7.0",
                first_incompatible="1.8.0",
                priority="high",
            ),
        },
        min_cargo_version="1.85.0",
        source="<test>",
    )


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Create a Cargo project directory with optional manifest and lockfile."""

    def _make(
        manifest: Optional[str] = SAMPLE_MANIFEST,
        lockfile: Optional[str] = SAMPLE_LOCKFILE,
        name: str = "project",
    ) -> Path:
        project = tmp_path / name
        project.mkdir()
        if manifest is not None:
            (project / "Cargo.toml").write_text(manifest, encoding="utf-8")
        if lockfile is not None:
            (project / "Cargo.lock").write_text(lockfile, encoding="utf-8")
        return project

    return _make


def make_issue(
    name: str,
    max_compatible: str,
    current_version: str = "9.9.9",
) -> Issue:
    return Issue(
        name=name,
        current_version=current_version,
        max_compatible=max_compatible,
        first_incompatible="",
        reason="Requires edition 2024",
    )


class FakeRunner:
    """CommandRunner that records calls and returns scripted outcomes."""

    def __init__(
        self,
        outcomes: Optional[dict] = None,
        default: Union[CommandOutput, Exception, None] = None,
    ) -> None:
        self.outcomes = outcomes or {}
        self.default = default or CommandOutput(exit_code=0)
        self.calls: List[Tuple[str, List[str], str, bool]] = []

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Union[str, Path],
        stream_output: bool = False,
    ) -> CommandOutput:
        self.calls.append((command, list(args), str(cwd), stream_output))
        outcome = self.outcomes.get(args[2], self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def issue_factory() -> Callable[..., Issue]:
    return make_issue


@pytest.fixture
def runner_factory() -> Callable[..., FakeRunner]:
    return FakeRunner


@pytest.fixture
def sample_lockfile() -> str:
    return SAMPLE_LOCKFILE


@pytest.fixture
def sample_manifest() -> str:
    return SAMPLE_MANIFEST
