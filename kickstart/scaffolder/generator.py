"""Filesystem materializer.

Lays the template catalogue over a project root that the external generator
has already created: first every directory, then every file. Operations are
issued one at a time, in catalogue order. Existing directories are fine and
existing files are overwritten. Nothing is rolled back on failure: whatever
was written before the error stays on disk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from ..utils import ensure_dir, write_text_file
from .registry import TemplateCatalogue


class MaterializeError(Exception):
    """Raised when a directory or file cannot be produced.

    *cause* is the underlying filesystem error, or the Jinja2 (or decoding)
    error for a template that could not be loaded or rendered.
    """

    def __init__(self, path: Path, cause: OSError | TemplateError | UnicodeDecodeError) -> None:
        self.path = path
        self.cause = cause
        if isinstance(cause, OSError):
            reason = cause.strerror or str(cause)
        else:
            reason = f"cannot render template: {cause}"
        super().__init__(f"{path}: {reason}")


class ProjectMaterializer:
    """Creates the catalogue's directories and files under a project root."""

    def __init__(self, catalogue: TemplateCatalogue) -> None:
        self.catalogue = catalogue

    async def create_directories(self, root: str | Path) -> list[Path]:
        """Create every catalogue directory (with parents) under *root*.

        Returns:
            The created (or already present) directory paths.

        Raises:
            MaterializeError: On the first directory that cannot be created.
        """
        root = Path(root)
        created: list[Path] = []
        for rel in self.catalogue.directories:
            target = root / rel
            try:
                await asyncio.to_thread(ensure_dir, target)
            except OSError as exc:
                raise MaterializeError(target, exc) from exc
            created.append(target)
        return created

    async def write_files(self, root: str | Path, context: dict[str, Any]) -> list[Path]:
        """Render and write every catalogue file under *root*.

        Each file is replaced outright; nothing is merged with or appended
        to a previous version.

        Returns:
            The written file paths, in catalogue order.

        Raises:
            MaterializeError: On the first file that cannot be rendered or
                written.
        """
        root = Path(root)
        written: list[Path] = []
        for template in self.catalogue.files:
            target = root / template.path
            try:
                content = template.render(self.catalogue.renderer, context)
                await asyncio.to_thread(write_text_file, target, content)
            except (OSError, TemplateError, UnicodeDecodeError) as exc:
                raise MaterializeError(target, exc) from exc
            written.append(target)
        return written
