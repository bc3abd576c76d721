"""Operator input for the scaffolding run.

The pipeline only depends on the narrow ``Prompter`` protocol so tests can
substitute a deterministic answer instead of a real terminal.
"""

from __future__ import annotations

import signal
from typing import Protocol

from rich.console import Console
from rich.prompt import Prompt

from .utils import console as default_console
from .utils import sigint_handler


class Prompter(Protocol):
    """Anything that can ask the operator one question."""

    def ask(self, message: str, default: str) -> str:
        """Return the operator's answer, or *default* if they accept it."""
        ...


class RichPrompter:
    """Ask for text on the terminal with a Rich prompt.

    Submitting an empty line accepts the default, so with a non-empty default
    the answer is never empty. Cancelling the prompt (Ctrl-C or end of input)
    is an answer too: it resolves to the empty string, which the pipeline
    treats as "no project".
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    def ask(self, message: str, default: str) -> str:
        # asyncio.run turns the first Ctrl-C into a task cancellation, which
        # would leave input() blocked. Restore the plain interrupt while asking.
        with sigint_handler(signal.default_int_handler):
            try:
                answer = Prompt.ask(message, default=default, console=self.console)
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                return ""
        return answer or ""
