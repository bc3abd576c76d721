"""The catalogue of directories and files laid over a generated project.

Everything here is data: an ordered, immutable table of directories and
``FileTemplate`` entries, each of which knows how to produce its content.
The files form a layered React + Redux Toolkit architecture:

* ``vite.config.ts`` / ``tsconfig.json`` with an ``@`` alias for ``src/``
* an Axios instance configured from ``VITE_API_BASE_URL``
* a store composed from the ``auth`` and ``users`` slices
* per slice: reducer, async thunks and selectors
* typed ``useAppDispatch`` / ``useAppSelector`` hooks
* route table, root ``App`` component and the ``main.tsx`` entry point

Cross-file references (store -> selectors -> hooks) are kept consistent here
by hand; nothing type-checks the output at run time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .templates import TemplateRenderer


@dataclass(frozen=True)
class FileTemplate:
    """A file to write, relative to the project root."""

    path: str
    source: str = ""

    def __post_init__(self) -> None:
        if not self.path or self.path.startswith("/") or ".." in self.path.split("/"):
            raise ValueError(f"Template path must be relative to the project root: {self.path!r}")
        if not self.source:
            object.__setattr__(self, "source", f"{self.path}.j2")

    def render(self, renderer: TemplateRenderer, context: dict[str, Any]) -> str:
        """Produce the file content."""
        return renderer.render(self.source, context)


DIRECTORIES: tuple[str, ...] = (
    "src/app",
    "src/api",
    "src/assets",
    "src/components/common",
    "src/components/ui",
    "src/features/auth/api",
    "src/features/auth/pages",
    "src/features/auth/types",
    "src/features/users/api",
    "src/features/users/pages",
    "src/features/users/types",
    "src/hooks",
    "src/layouts",
    "src/routes",
    "src/utils",
    "src/types",
)

FILE_TEMPLATES: tuple[FileTemplate, ...] = (
    # Build tooling
    FileTemplate("vite.config.ts"),
    FileTemplate("tsconfig.json"),
    FileTemplate(".env.example", source="env.example.j2"),
    # HTTP client and store
    FileTemplate("src/api/axiosInstance.ts"),
    FileTemplate("src/app/store.ts"),
    # auth feature
    FileTemplate("src/features/auth/auth.slice.ts"),
    FileTemplate("src/features/auth/auth.thunks.ts"),
    FileTemplate("src/features/auth/auth.selectors.ts"),
    # users feature
    FileTemplate("src/features/users/users.slice.ts"),
    FileTemplate("src/features/users/users.thunks.ts"),
    FileTemplate("src/features/users/users.selectors.ts"),
    # Typed hooks
    FileTemplate("src/hooks/useAppDispatch.ts"),
    FileTemplate("src/hooks/useAppSelector.ts"),
    # Composition
    FileTemplate("src/routes/AppRoutes.tsx"),
    FileTemplate("src/App.tsx"),
    FileTemplate("src/main.tsx"),
)


@dataclass(frozen=True)
class TemplateCatalogue:
    """Directories to create and files to write, in order."""

    directories: tuple[str, ...] = DIRECTORIES
    files: tuple[FileTemplate, ...] = FILE_TEMPLATES
    renderer: TemplateRenderer = field(default_factory=TemplateRenderer, compare=False)

    @property
    def paths(self) -> list[str]:
        """Relative paths of every file in the catalogue."""
        return [t.path for t in self.files]

    def render_all(self, context: dict[str, Any]) -> list[tuple[str, str]]:
        """Return ``(path, content)`` pairs for every file, in order."""
        return [(t.path, t.render(self.renderer, context)) for t in self.files]


def default_catalogue() -> TemplateCatalogue:
    """The React + Redux Toolkit catalogue shipped with Kickstart."""
    return TemplateCatalogue()


def build_context(project_name: str) -> dict[str, Any]:
    """Template variables for *project_name*."""
    return {"project_name": project_name}
