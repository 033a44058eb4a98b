"""CLI entry point using Hydra.

Usage examples:
  texnotes course_name=CS101 file_name=lec1 lecture_number=3 date=2024-03-07 font_size=11 directory=notes/
  texnotes course_name=CS101 use_lecture_number=true lecture_number=3 date=2024-03-07 font_size=11 \\
      directory=. 'options=["AMS Math","Full Page"]'
  texnotes interactive=true
  texnotes mode=render course_name=CS101 file_name=lec1 lecture_number=3 date=2024-03-07 font_size=11
  texnotes mode=options
  texnotes mode=compile tex_file=notes/lec1.tex
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import hydra
from omegaconf import DictConfig, OmegaConf
from rich.markup import escape
from rich.table import Table

from ._hydra_conf import CLI_ONLY_KEYS, FORM_KEYS, register_configs
from .catalog import DEFAULT_CATALOG
from .config import apply_env_fallbacks
from .exceptions import CompilationError
from .form import NoteForm
from .logging_config import RichCallbacks, console, setup_logging
from .models import ProjectConfig

register_configs()

# ---------------------------------------------------------------------------
# Hydra DictConfig → Pydantic ProjectConfig / NoteForm bridge
# ---------------------------------------------------------------------------


def _to_project_config(cfg: DictConfig) -> ProjectConfig:
    """Convert a Hydra *DictConfig* to a Pydantic ``ProjectConfig``.

    CLI-only and form keys are stripped before validation.
    """
    container: dict[str, Any] = OmegaConf.to_container(cfg, resolve=True)  # type: ignore[assignment]
    for key in CLI_ONLY_KEYS | FORM_KEYS:
        container.pop(key, None)
    config = ProjectConfig.model_validate(container)
    return apply_env_fallbacks(config)


def _to_form(cfg: DictConfig) -> NoteForm:
    """Build a fresh ``NoteForm`` from the form keys of *cfg*.

    Raises ``KeyError`` for option names the catalog does not know.
    """
    form = NoteForm(
        course_name=cfg.get("course_name"),
        file_name=cfg.get("file_name"),
        use_lecture_number=bool(cfg.get("use_lecture_number", False)),
        date=cfg.get("date"),
        lecture_number=cfg.get("lecture_number"),
        font_size=cfg.get("font_size"),
        directory=cfg.get("directory"),
    )
    form.set_selected(cfg.get("options") or [])
    return form


def _prepare_form(cfg: DictConfig, config: ProjectConfig) -> NoteForm:
    try:
        form = _to_form(cfg)
    except KeyError as e:
        console.print(f"[red]{escape(e.args[0])}[/]")
        sys.exit(1)

    if cfg.get("interactive", False):
        from .prompts import run_interactive_form

        run_interactive_form(form, config.font_sizes)
    return form


# ---------------------------------------------------------------------------
# Mode handlers
# ---------------------------------------------------------------------------


def _make_mode(cfg: DictConfig) -> None:
    config = _to_project_config(cfg)
    form = _prepare_form(cfg, config)

    from .pipeline import make_notes

    result = make_notes(form.to_raw(), config, callbacks=RichCallbacks())

    if result.success:
        for msg in result.messages:
            console.print(f"\n[bold green]{msg}[/]")
        console.print(f"  TeX: {result.tex_path}")
        if result.pdf_path:
            console.print(f"  PDF: {result.pdf_path}")
    else:
        console.print(f"\n[bold red]{result.error_kind}[/] ({result.stage.value})")
        for msg in result.messages:
            console.print(f"  [red]{escape(msg)}[/]")
        sys.exit(1)


def _render_mode(cfg: DictConfig) -> None:
    config = _to_project_config(cfg)
    form = _prepare_form(cfg, config)
    if form.directory is None:
        form.directory = "."

    from .pipeline import render_request, validate_request

    validation = validate_request(form.to_raw(), config)
    if not validation.ok:
        assert validation.failure is not None
        console.print(f"[red]{validation.failure.kind}: {escape(validation.failure.message)}[/]")
        sys.exit(1)

    assert validation.request is not None
    sys.stdout.write(render_request(validation.request, config))


def _options_mode(cfg: DictConfig) -> None:
    table = Table(title="Formatting options")
    table.add_column("Order", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("LaTeX")
    for option in DEFAULT_CATALOG:
        table.add_row(str(option.order), option.name, option.snippet)
    console.print(table)


def _compile_mode(cfg: DictConfig) -> None:
    config = _to_project_config(cfg)
    tex_file = cfg.get("tex_file")
    if not tex_file:
        console.print("[red]tex_file is required for compile mode[/]")
        sys.exit(1)

    from .tools.compiler import run_engine

    path = Path(tex_file)
    if not path.exists():
        console.print(f"[red]{path} not found[/]")
        sys.exit(1)

    try:
        result = run_engine(path, config.engine, timeout=config.compile_timeout)
    except CompilationError as e:
        console.print(f"[red]{e.kind}: {escape(str(e))}[/]")
        sys.exit(1)

    if result.success:
        console.print(f"[green]Compilation successful: {result.pdf_path}[/]")
    else:
        console.print(f"[red]Compilation failed (exit {result.return_code}).[/]")
        for err in result.errors:
            console.print(f"  [red]L{err.line or '?'}: {escape(err.message)}[/]")
        sys.exit(1)


_MODE_DISPATCH: dict[str, Any] = {
    "make": _make_mode,
    "render": _render_mode,
    "options": _options_mode,
    "compile": _compile_mode,
}


# ---------------------------------------------------------------------------
# Hydra entry point
# ---------------------------------------------------------------------------


@hydra.main(config_path="conf", config_name="config", version_base=None)
def hydra_entry(cfg: DictConfig) -> None:
    """Hydra-managed CLI entry point."""
    setup_logging(verbose=cfg.get("verbose", False), quiet=cfg.get("quiet", False))

    mode = cfg.get("mode", "make")
    handler = _MODE_DISPATCH.get(mode)
    if handler is None:
        console.print(f"[red]Unknown mode: {mode!r}. Choose from: {', '.join(_MODE_DISPATCH)}[/]")
        sys.exit(1)

    handler(cfg)


def main() -> None:
    """Package entry point (``[project.scripts]`` target)."""
    hydra_entry()  # pylint: disable=no-value-for-parameter
