"""Kickstart configuration.

Typed configuration for the scaffolding run. All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class GeneratorConfig(BaseModel):
    """The external project generator and the package manager that drives it."""

    package_manager: str = Field(default="npm", min_length=1)
    package: str = Field(default="vite", min_length=1)
    version: str = Field(default="6", min_length=1, description="Pinned generator version tag")
    template: str = Field(default="react-ts", min_length=1)

    @property
    def package_spec(self) -> str:
        """Return the ``<package>@<version>`` specifier passed to ``create``."""
        return f"{self.package}@{self.version}"


class DependencyConfig(BaseModel):
    """Packages installed into the freshly generated project."""

    runtime: list[str] = Field(
        default=["react-router-dom", "@reduxjs/toolkit", "react-redux", "axios"],
        description="Routing, state container, state bindings and HTTP client",
    )
    dev: list[str] = Field(
        default=["@types/node"],
        description="Needed for the path alias in vite.config.ts",
    )


class Config(BaseModel):
    """Global Kickstart configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``ScaffoldPipeline``.
    """

    default_project_name: str = Field(default="my-react-app")
    working_dir: Path = Field(default_factory=Path.cwd)
    allow_existing: bool = Field(
        default=False,
        description="Skip the check that refuses to scaffold into a non-empty directory",
    )
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    dependencies: DependencyConfig = Field(default_factory=DependencyConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def project_root(self, project_name: str) -> Path:
        """Absolute path of the project directory for *project_name*."""
        return (self.working_dir / project_name).absolute()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        ``KICKSTART_CONFIG`` names a JSON file written by :meth:`save`; when
        set, it provides the base settings and the remaining variables
        override individual fields on top of it.

        Recognised variables (all optional):
            KICKSTART_CONFIG, KICKSTART_DEFAULT_NAME, KICKSTART_WORKING_DIR,
            KICKSTART_ALLOW_EXISTING, KICKSTART_PACKAGE_MANAGER,
            KICKSTART_GENERATOR_VERSION, KICKSTART_TEMPLATE.
        """
        data: dict[str, Any] = {}
        if os.environ.get("KICKSTART_CONFIG"):
            data = cls.load(Path(os.environ["KICKSTART_CONFIG"])).model_dump()

        generator = data.setdefault("generator", {})
        if os.environ.get("KICKSTART_PACKAGE_MANAGER"):
            generator["package_manager"] = os.environ["KICKSTART_PACKAGE_MANAGER"]
        if os.environ.get("KICKSTART_GENERATOR_VERSION"):
            generator["version"] = os.environ["KICKSTART_GENERATOR_VERSION"]
        if os.environ.get("KICKSTART_TEMPLATE"):
            generator["template"] = os.environ["KICKSTART_TEMPLATE"]

        if "KICKSTART_DEFAULT_NAME" in os.environ:
            data["default_project_name"] = os.environ["KICKSTART_DEFAULT_NAME"]
        if os.environ.get("KICKSTART_WORKING_DIR"):
            data["working_dir"] = Path(os.environ["KICKSTART_WORKING_DIR"])

        if "KICKSTART_ALLOW_EXISTING" in os.environ:
            allow = os.environ["KICKSTART_ALLOW_EXISTING"].strip().lower()
            data["allow_existing"] = allow in ("1", "true", "yes", "on")

        return cls.model_validate(data)
