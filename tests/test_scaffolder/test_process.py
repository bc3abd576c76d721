"""Tests for external command execution (kickstart.scaffolder.process).

Covers:
- CommandSpec / CommandResult helpers
- Command builders for the generator and the two installer runs
- SubprocessRunner against real child processes (the current interpreter)
"""

from __future__ import annotations

import signal
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from kickstart.config import Config, DependencyConfig, GeneratorConfig
from kickstart.scaffolder.process import (
    CommandResult,
    CommandRunnerError,
    CommandSpec,
    SubprocessRunner,
    dev_install_command,
    generator_command,
    runtime_install_command,
)


def _python(tmp_path: Path, code: str, stream: bool = False) -> CommandSpec:
    return CommandSpec(executable=sys.executable, args=["-c", code], cwd=tmp_path, stream=stream)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TestCommandSpec:
    @pytest.mark.unit
    def test_argv(self, tmp_path: Path):
        spec = CommandSpec(executable="npm", args=["install", "axios"], cwd=tmp_path)
        assert spec.argv == ["npm", "install", "axios"]
        assert spec.stream is True

    @pytest.mark.unit
    def test_display_quotes(self, tmp_path: Path):
        spec = CommandSpec(executable="npm", args=["create", "my app"], cwd=tmp_path)
        assert spec.display() == "npm create 'my app'"

    @pytest.mark.unit
    def test_empty_executable_rejected(self, tmp_path: Path):
        with pytest.raises(ValidationError):
            CommandSpec(executable="", cwd=tmp_path)


class TestCommandResult:
    @pytest.mark.unit
    def test_success(self, tmp_path: Path):
        spec = CommandSpec(executable="npm", cwd=tmp_path)
        assert CommandResult(spec, 0).success is True
        assert CommandResult(spec, 1).success is False
        assert CommandResult(spec, -2).success is False


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


class TestCommandBuilders:
    @pytest.mark.unit
    def test_generator_runs_in_working_dir(self, tmp_path: Path):
        spec = generator_command(Config(working_dir=tmp_path), "demo-app")
        assert spec.argv == ["npm", "create", "vite@6", "demo-app", "--", "--template", "react-ts"]
        assert spec.cwd == tmp_path

    @pytest.mark.unit
    def test_generator_honours_config(self, tmp_path: Path):
        config = Config(
            working_dir=tmp_path,
            generator=GeneratorConfig(package_manager="pnpm", version="5", template="react-swc-ts"),
        )
        spec = generator_command(config, "x")
        assert spec.argv == ["pnpm", "create", "vite@5", "x", "--", "--template", "react-swc-ts"]

    @pytest.mark.unit
    def test_runtime_install(self, tmp_path: Path):
        root = tmp_path / "demo-app"
        spec = runtime_install_command(Config(working_dir=tmp_path), root)
        assert spec.argv == [
            "npm", "install", "react-router-dom", "@reduxjs/toolkit", "react-redux", "axios",
        ]
        assert spec.cwd == root

    @pytest.mark.unit
    def test_dev_install(self, tmp_path: Path):
        root = tmp_path / "demo-app"
        config = Config(working_dir=tmp_path, dependencies=DependencyConfig(dev=["@types/node", "vitest"]))
        spec = dev_install_command(config, root)
        assert spec.argv == ["npm", "install", "-D", "@types/node", "vitest"]
        assert spec.cwd == root


# ---------------------------------------------------------------------------
# SubprocessRunner
# ---------------------------------------------------------------------------


class TestSubprocessRunner:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_zero_exit(self, tmp_path: Path):
        result = await SubprocessRunner().run(_python(tmp_path, "pass"))
        assert result.success is True
        assert result.exit_code == 0
        assert result.duration_seconds >= 0

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nonzero_exit(self, tmp_path: Path):
        result = await SubprocessRunner().run(_python(tmp_path, "import sys; sys.exit(3)"))
        assert result.success is False
        assert result.exit_code == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_in_cwd(self, tmp_path: Path):
        code = "open('marker.txt', 'w').write('here')"
        await SubprocessRunner().run(_python(tmp_path, code))
        assert (tmp_path / "marker.txt").read_text() == "here"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_streams_to_terminal(self, tmp_path: Path, capfd):
        spec = _python(tmp_path, "import sys; print('from child'); sys.stderr.write('oops\\n')", stream=True)
        result = await SubprocessRunner().run(spec)
        captured = capfd.readouterr()
        assert result.success
        assert "from child" in captured.out
        assert "oops" in captured.err

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_executable(self, tmp_path: Path):
        spec = CommandSpec(executable="kickstart-no-such-binary-xyz", cwd=tmp_path)
        with pytest.raises(CommandRunnerError) as excinfo:
            await SubprocessRunner().run(spec)
        assert "not found" in str(excinfo.value)
        assert excinfo.value.spec is spec

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_cwd(self, tmp_path: Path):
        spec = _python(tmp_path / "nope", "pass")
        with pytest.raises(CommandRunnerError, match="Working directory not found"):
            await SubprocessRunner().run(spec)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_permission_error(self, tmp_path: Path):
        with patch(
            "kickstart.scaffolder.process.asyncio.create_subprocess_exec",
            side_effect=PermissionError,
        ):
            with pytest.raises(CommandRunnerError, match="Permission denied") as excinfo:
                await SubprocessRunner().run(_python(tmp_path, "pass"))
        assert isinstance(excinfo.value.__cause__, PermissionError)

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
    async def test_interrupt_does_not_abort_parent(self, tmp_path: Path):
        before = signal.getsignal(signal.SIGINT)
        code = "import os, signal; os.kill(os.getppid(), signal.SIGINT)"
        result = await SubprocessRunner().run(_python(tmp_path, code))
        assert result.exit_code == 0
        assert signal.getsignal(signal.SIGINT) is before
