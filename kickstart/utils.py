"""Shared utility functions for Kickstart.

Provides Rich-based status output, SIGINT scoping for blocking operator
interaction, and small file-system helpers used by the materializer.
"""

from __future__ import annotations

import signal
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Signal handling
# ---------------------------------------------------------------------------


@contextmanager
def sigint_handler(handler: Callable[[int, Any], Any] | int) -> Iterator[None]:
    """Temporarily install *handler* for SIGINT, restoring the previous one.

    Signal handlers can only be changed from the main thread; elsewhere this
    is a no-op so the wrapped code still runs.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = signal.signal(signal.SIGINT, handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def ignore_sigint(signum: int, frame: Any) -> None:
    """SIGINT handler that does nothing.

    Unlike ``SIG_IGN`` a Python-level handler is reset in exec'd children, so
    a child process sharing the terminal still receives and acts on Ctrl-C.
    """


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Returns:
        The ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def write_text_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, replacing any existing file.

    The file is opened in truncating mode, so earlier content never survives
    a rewrite. Newlines are written as-is on every platform.
    """
    file_path = Path(path)
    with open(file_path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)
    return file_path


def is_non_empty_dir(path: str | Path) -> bool:
    """Return ``True`` if *path* is a directory containing at least one entry."""
    dir_path = Path(path)
    if not dir_path.is_dir():
        return False
    return any(dir_path.iterdir())


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a green status line announcing the next stage."""
    console.print(f"[green]{message}[/green]")


def print_hint(message: str) -> None:
    """Print a cyan follow-up hint (e.g. the next command to run)."""
    console.print(f"[cyan]{message}[/cyan]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()
