"""Kickstart scaffolder -- lays a React + Redux Toolkit skeleton over a Vite project.

Quick usage::

    from kickstart.scaffolder import ProjectMaterializer, default_catalogue

    materializer = ProjectMaterializer(default_catalogue())
    await materializer.create_directories(root)
    await materializer.write_files(root, {"project_name": "demo-app"})
"""

from kickstart.scaffolder.generator import MaterializeError, ProjectMaterializer
from kickstart.scaffolder.process import (
    CommandResult,
    CommandRunnerError,
    CommandSpec,
    SubprocessRunner,
)
from kickstart.scaffolder.registry import FileTemplate, TemplateCatalogue, default_catalogue
from kickstart.scaffolder.templates import TemplateRenderer

__all__ = [
    "CommandResult",
    "CommandRunnerError",
    "CommandSpec",
    "FileTemplate",
    "MaterializeError",
    "ProjectMaterializer",
    "SubprocessRunner",
    "TemplateCatalogue",
    "TemplateRenderer",
    "default_catalogue",
]
