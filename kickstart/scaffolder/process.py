"""External process execution for the scaffolder.

Runs the project generator and the dependency installer as child processes
whose stdin/stdout/stderr are the operator's terminal, so prompts and
progress output of those tools are seen as-is. There is no timeout: some of
the tools are interactive and the run waits for them for as long as needed.
"""

from __future__ import annotations

import asyncio
import shlex
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, Field

from ..config import Config
from ..utils import ignore_sigint, sigint_handler


class CommandSpec(BaseModel):
    """One external invocation: what to run, where, and how to attach it."""

    executable: str = Field(..., min_length=1)
    args: list[str] = Field(default_factory=list)
    cwd: Path
    stream: bool = Field(default=True, description="Attach the child to the terminal")

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def display(self) -> str:
        """Shell-style rendering of the command, for status lines."""
        return shlex.join(self.argv)


@dataclass
class CommandResult:
    """Exit status of a finished external command."""

    spec: CommandSpec
    exit_code: int
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_code == 0


class CommandRunnerError(Exception):
    """Raised when a command cannot be started at all."""

    def __init__(self, message: str, spec: CommandSpec | None = None):
        self.spec = spec
        super().__init__(message)


class CommandRunner(Protocol):
    """Anything that can run a ``CommandSpec`` to completion."""

    async def run(self, spec: CommandSpec) -> CommandResult:
        ...


class SubprocessRunner:
    """Runs commands with ``asyncio`` subprocesses.

    The executable is looked up on ``PATH`` first, which also resolves
    wrappers such as ``npm.cmd`` on Windows. While the child runs, SIGINT is
    ignored by this process: Ctrl-C still reaches the child through the
    terminal and shows up here as the child's nonzero exit status.
    """

    async def run(self, spec: CommandSpec) -> CommandResult:
        """Spawn *spec*, wait for it to exit and return its status.

        Raises:
            CommandRunnerError: If the executable is missing or cannot be
                launched, or the working directory does not exist.
        """
        executable = shutil.which(spec.executable)
        if executable is None:
            raise CommandRunnerError(
                f"Executable not found: '{spec.executable}'. "
                "Ensure it is installed and in PATH.",
                spec,
            )
        if not spec.cwd.is_dir():
            raise CommandRunnerError(f"Working directory not found: {spec.cwd}", spec)

        pipe = None if spec.stream else asyncio.subprocess.DEVNULL
        start_time = time.monotonic()

        with sigint_handler(ignore_sigint):
            try:
                process = await asyncio.create_subprocess_exec(
                    executable,
                    *spec.args,
                    cwd=str(spec.cwd),
                    stdin=pipe,
                    stdout=pipe,
                    stderr=pipe,
                )
            except PermissionError as exc:
                raise CommandRunnerError(
                    f"Permission denied executing: '{executable}'. "
                    "Check file permissions.",
                    spec,
                ) from exc
            except OSError as exc:
                raise CommandRunnerError(
                    f"Could not start '{spec.display()}': {exc}", spec
                ) from exc

            exit_code = await process.wait()

        return CommandResult(
            spec=spec,
            exit_code=exit_code,
            duration_seconds=time.monotonic() - start_time,
        )


# ---------------------------------------------------------------------------
# Command builders
# ---------------------------------------------------------------------------


def generator_command(config: Config, project_name: str) -> CommandSpec:
    """``npm create vite@<version> <name> -- --template <template>``.

    Runs in the working directory; the generator creates the project root.
    """
    gen = config.generator
    return CommandSpec(
        executable=gen.package_manager,
        args=["create", gen.package_spec, project_name, "--", "--template", gen.template],
        cwd=config.working_dir,
    )


def runtime_install_command(config: Config, project_root: Path) -> CommandSpec:
    """Install the runtime dependencies into *project_root*."""
    return CommandSpec(
        executable=config.generator.package_manager,
        args=["install", *config.dependencies.runtime],
        cwd=project_root,
    )


def dev_install_command(config: Config, project_root: Path) -> CommandSpec:
    """Install the development-only dependencies into *project_root*."""
    return CommandSpec(
        executable=config.generator.package_manager,
        args=["install", "-D", *config.dependencies.dev],
        cwd=project_root,
    )
