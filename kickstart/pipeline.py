"""Kickstart scaffolding pipeline.

Drives one strictly linear scaffolding run:

ResolveInput -> Precheck -> RunGenerator -> InstallRuntimeDeps ->
InstallDevDeps -> CreateDirectories -> WriteFiles -> ReportSuccess

An empty project name aborts before any side effect. Any failing stage ends
the run immediately; later stages never execute and earlier stages are not
undone. Re-running after fixing the cause is the recovery path.
"""

from __future__ import annotations

import time
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field
from rich.markup import escape

from .config import Config
from .prompt import Prompter, RichPrompter
from .scaffolder.generator import MaterializeError, ProjectMaterializer
from .scaffolder.process import (
    CommandRunner,
    CommandRunnerError,
    CommandSpec,
    SubprocessRunner,
    dev_install_command,
    generator_command,
    runtime_install_command,
)
from .scaffolder.registry import TemplateCatalogue, build_context, default_catalogue
from .utils import (
    console,
    format_duration,
    is_non_empty_dir,
    print_error,
    print_hint,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)

# ---------------------------------------------------------------------------
# Stages and outcome
# ---------------------------------------------------------------------------


class Stage(str, Enum):
    RESOLVE_INPUT = "ResolveInput"
    PRECHECK = "Precheck"
    RUN_GENERATOR = "RunGenerator"
    INSTALL_RUNTIME_DEPS = "InstallRuntimeDeps"
    INSTALL_DEV_DEPS = "InstallDevDeps"
    CREATE_DIRECTORIES = "CreateDirectories"
    WRITE_FILES = "WriteFiles"
    REPORT_SUCCESS = "ReportSuccess"


STAGE_LABELS: dict[Stage, str] = {
    Stage.RESOLVE_INPUT: "project name",
    Stage.PRECHECK: "target directory check",
    Stage.RUN_GENERATOR: "project generator",
    Stage.INSTALL_RUNTIME_DEPS: "runtime dependency install",
    Stage.INSTALL_DEV_DEPS: "dev dependency install",
    Stage.CREATE_DIRECTORIES: "directory creation",
    Stage.WRITE_FILES: "file writing",
    Stage.REPORT_SUCCESS: "report",
}


class RunStatus(str, Enum):
    SUCCESS = "success"
    ABORTED_NO_INPUT = "aborted_no_input"
    FAILED = "failed"


class RunOutcome(BaseModel):
    """Terminal state of a scaffolding run."""

    status: RunStatus
    project_name: str = ""
    project_root: Path | None = None
    stage: Stage | None = Field(default=None, description="Failing stage, if any")
    error: str = ""
    exit_code: int | None = Field(default=None, description="Exit status of a failed command")
    files_written: list[Path] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status is RunStatus.SUCCESS

    @classmethod
    def aborted(cls) -> "RunOutcome":
        return cls(status=RunStatus.ABORTED_NO_INPUT)

    @classmethod
    def failed(
        cls, exc: "StageError", project_name: str, project_root: Path | None
    ) -> "RunOutcome":
        return cls(
            status=RunStatus.FAILED,
            project_name=project_name,
            project_root=project_root,
            stage=exc.stage,
            error=exc.message,
            exit_code=exc.exit_code,
        )


class StageError(Exception):
    """Raised when a pipeline stage fails irrecoverably."""

    def __init__(self, stage: Stage, message: str, exit_code: int | None = None) -> None:
        self.stage = stage
        self.message = message
        self.exit_code = exit_code
        super().__init__(f"{stage.value} ({STAGE_LABELS[stage]}): {message}")


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ScaffoldPipeline:
    """Scaffolds one React + TypeScript project.

    The prompt and the process runner are injected so the whole sequence can
    run against fakes; by default they talk to the real terminal and spawn
    real processes.

    Attributes:
        config: Run configuration.
        prompter: Source of the project name.
        runner: Executes the generator and installer commands.
        catalogue: Directories and files laid over the generated project.
    """

    PROMPT_MESSAGE = "Project name?"

    def __init__(
        self,
        config: Config,
        prompter: Prompter | None = None,
        runner: CommandRunner | None = None,
        catalogue: TemplateCatalogue | None = None,
    ) -> None:
        self.config = config
        self.prompter = prompter or RichPrompter()
        self.runner = runner or SubprocessRunner()
        self.catalogue = catalogue or default_catalogue()
        self.materializer = ProjectMaterializer(self.catalogue)

    async def run(self) -> RunOutcome:
        """Execute every stage in order and return the outcome."""
        project_name = self.resolve_input()
        if not project_name:
            print_error("❌ Project name required")
            return RunOutcome.aborted()

        project_root = self.config.project_root(project_name)
        start = time.monotonic()
        print_step(f"🚀 Creating project: [cyan]{escape(project_name)}[/cyan]")

        try:
            self.precheck(project_root)
            await self._run_command(
                Stage.RUN_GENERATOR, generator_command(self.config, project_name)
            )

            print_step("📦 Installing dependencies...")
            await self._run_command(
                Stage.INSTALL_RUNTIME_DEPS,
                runtime_install_command(self.config, project_root),
            )
            await self._run_command(
                Stage.INSTALL_DEV_DEPS,
                dev_install_command(self.config, project_root),
            )

            print_step("📁 Creating folder structure...")
            await self.create_directories(project_root)

            print_step("📝 Writing boilerplate files...")
            written = await self.write_files(project_root, project_name)
        except StageError as exc:
            self._report_failure(exc, project_root)
            return RunOutcome.failed(exc, project_name, project_root)

        self._report_success(
            project_name, project_root, len(written), time.monotonic() - start
        )
        return RunOutcome(
            status=RunStatus.SUCCESS,
            project_name=project_name,
            project_root=project_root,
            files_written=written,
        )

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def resolve_input(self) -> str:
        """Ask for the project name. Surrounding whitespace is dropped."""
        answer = self.prompter.ask(self.PROMPT_MESSAGE, self.config.default_project_name)
        return (answer or "").strip()

    def precheck(self, project_root: Path) -> None:
        """Refuse to scaffold over a directory that already has content."""
        if not is_non_empty_dir(project_root):
            return
        if self.config.allow_existing:
            print_warning(f"{escape(str(project_root))} is not empty; continuing anyway.")
            return
        raise StageError(
            Stage.PRECHECK,
            f"{project_root} already exists and is not empty. "
            "Choose another name or remove the directory.",
        )

    async def create_directories(self, project_root: Path) -> list[Path]:
        try:
            return await self.materializer.create_directories(project_root)
        except MaterializeError as exc:
            raise StageError(Stage.CREATE_DIRECTORIES, str(exc)) from exc

    async def write_files(self, project_root: Path, project_name: str) -> list[Path]:
        try:
            return await self.materializer.write_files(
                project_root, build_context(project_name)
            )
        except MaterializeError as exc:
            raise StageError(Stage.WRITE_FILES, str(exc)) from exc

    async def _run_command(self, stage: Stage, spec: CommandSpec) -> None:
        console.print(f"[dim]$ {escape(spec.display())}[/dim]")
        try:
            result = await self.runner.run(spec)
        except CommandRunnerError as exc:
            raise StageError(stage, str(exc)) from exc
        if not result.success:
            raise StageError(
                stage,
                f"'{spec.display()}' exited with status {result.exit_code}",
                exit_code=result.exit_code,
            )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _report_failure(self, exc: StageError, project_root: Path) -> None:
        print_error(f"❌ Failed at {STAGE_LABELS[exc.stage]} ({exc.stage.value})")
        console.print(f"  {escape(exc.message)}")
        if exc.stage in (
            Stage.INSTALL_RUNTIME_DEPS,
            Stage.INSTALL_DEV_DEPS,
            Stage.CREATE_DIRECTORIES,
            Stage.WRITE_FILES,
        ):
            console.print(
                f"  [dim]Partial output left in {escape(str(project_root))}[/dim]"
            )

    def _report_success(
        self, project_name: str, project_root: Path, file_count: int, elapsed: float
    ) -> None:
        print_success("✅ Project setup complete!")
        print_summary_table(
            {
                "Project": escape(project_name),
                "Location": escape(str(project_root)),
                "Directories": str(len(self.catalogue.directories)),
                "Files written": str(file_count),
                "Duration": format_duration(elapsed),
            },
        )
        print_hint(f"👉 cd {escape(project_name)}")
        print_hint("👉 npm run dev")
