"""Interactive Rich prompts for inputs left unset on the command line."""

from __future__ import annotations

import datetime as dt

from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from .form import NoteForm

console = Console()


def _unset(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def prompt_font_size(font_sizes: list[int]) -> int:
    """Prompt until one of the allowed sizes is chosen."""
    return IntPrompt.ask(
        "[bold]Font size[/]",
        choices=[str(s) for s in font_sizes],
        default=font_sizes[len(font_sizes) // 2],
    )


def prompt_options(form: NoteForm) -> None:
    """Ask about every catalog option that is not already selected."""
    console.print("\n[bold]Formatting options:[/]")
    for option in form.catalog:
        if form.is_selected(option.name):
            continue
        if Confirm.ask(f"  Use [cyan]{option.name}[/]?", default=False):
            form.select(option.name)


def run_interactive_form(form: NoteForm, font_sizes: list[int]) -> NoteForm:
    """Fill unset fields of *form* in the order they are validated."""
    if _unset(form.course_name):
        form.course_name = Prompt.ask("[bold]Course name[/]")
    if _unset(form.file_name) and not form.use_lecture_number:
        form.use_lecture_number = Confirm.ask("Use lecture number for file name?", default=True)
        if not form.use_lecture_number:
            form.file_name = Prompt.ask("[bold]File name[/]")
    if _unset(form.date):
        form.date = Prompt.ask("[bold]Date[/] (YYYY-MM-DD)", default=dt.date.today().isoformat())
    if _unset(form.lecture_number):
        form.lecture_number = Prompt.ask("[bold]Lecture number[/]")
    if _unset(form.font_size) or form.font_size in (0, "0"):
        form.font_size = prompt_font_size(font_sizes)
    if _unset(form.directory):
        form.directory = Prompt.ask("[bold]Directory[/]", default=".")
    prompt_options(form)
    return form
