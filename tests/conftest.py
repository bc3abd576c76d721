"""Shared pytest fixtures for the Kickstart test suite.

Provides reusable fixtures for:
- A configuration rooted in a temporary working directory
- A scripted prompt answer
- A fake command runner that records invocations and simulates the
  generator creating the project directory
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kickstart.config import Config
from kickstart.scaffolder.process import CommandResult, CommandSpec
from kickstart.scaffolder.registry import default_catalogue


# ---------------------------------------------------------------------------
# Doubles
# ---------------------------------------------------------------------------


class FakePrompter:
    """Answers every prompt with a fixed string and records the questions."""

    def __init__(self, answer: str) -> None:
        self.answer = answer
        self.calls: list[tuple[str, str]] = []

    def ask(self, message: str, default: str) -> str:
        self.calls.append((message, default))
        return self.answer


class FakeRunner:
    """Records command specs and returns scripted exit codes.

    Exit codes are consumed in call order; once exhausted every command
    succeeds. A successful ``create`` command makes the project directory
    with a stand-in for the generator's own output, the way ``npm create
    vite`` would.
    """

    def __init__(self, exit_codes: list[int] | None = None, create_project: bool = True) -> None:
        self.exit_codes = list(exit_codes or [])
        self.create_project = create_project
        self.calls: list[CommandSpec] = []

    async def run(self, spec: CommandSpec) -> CommandResult:
        self.calls.append(spec)
        code = self.exit_codes.pop(0) if self.exit_codes else 0
        if code == 0 and self.create_project and spec.args[:1] == ["create"]:
            root = spec.cwd / spec.args[2]
            (root / "src").mkdir(parents=True)
            (root / "package.json").write_text('{"name": "%s"}\n' % spec.args[2], encoding="utf-8")
            (root / "src" / "index.css").write_text("", encoding="utf-8")
        return CommandResult(spec=spec, exit_code=code)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Empty directory standing in for the operator's current directory."""
    path = tmp_path / "workspace"
    path.mkdir()
    yield path


@pytest.fixture
def config(workdir: Path) -> Config:
    return Config(working_dir=workdir)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def catalogue():
    return default_catalogue()


@pytest.fixture
def snapshot_tree():
    """Return a helper that maps every file under a root to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            p.relative_to(root).as_posix(): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot


@pytest.fixture
def make_runner():
    """Factory for ``FakeRunner`` instances with scripted exit codes."""
    return FakeRunner


@pytest.fixture
def make_prompter():
    """Factory for ``FakePrompter`` instances with a fixed answer."""
    return FakePrompter
