"""Rich console setup and progress callbacks."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

console = Console()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logger with Rich handler."""
    level = logging.DEBUG if verbose else (logging.ERROR if quiet else logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Callbacks protocol
# ---------------------------------------------------------------------------


class NotesCallbacks(Protocol):
    """Protocol for reporting progress of a make-notes action."""

    def on_stage_start(self, stage: str, description: str) -> None: ...
    def on_stage_end(self, stage: str, success: bool) -> None: ...
    def on_warning(self, message: str) -> None: ...
    def on_error(self, message: str) -> None: ...


class NullCallbacks:
    """Callbacks that report nothing."""

    def on_stage_start(self, stage: str, description: str) -> None:
        pass

    def on_stage_end(self, stage: str, success: bool) -> None:
        pass

    def on_warning(self, message: str) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass


class RichCallbacks:
    """Rich-based implementation of NotesCallbacks."""

    def __init__(self, target: Console | None = None) -> None:
        self._console = target or console

    def on_stage_start(self, stage: str, description: str) -> None:
        self._console.print(f"[bold blue]{stage}[/] {escape(description)}")

    def on_stage_end(self, stage: str, success: bool) -> None:
        status = "[green]OK[/]" if success else "[red]FAILED[/]"
        self._console.print(f"  {stage}: {status}")

    def on_warning(self, message: str) -> None:
        self._console.print(f"  [yellow]WARNING:[/] {escape(message)}")

    def on_error(self, message: str) -> None:
        self._console.print(f"  [red]ERROR:[/] {escape(message)}")
