"""Hydra structured config dataclasses.

``TexNotesConf`` mirrors the Pydantic ``ProjectConfig`` plus the form fields
and CLI switches. At runtime the Hydra DictConfig is split into a
``ProjectConfig`` (via ``cli._to_project_config()``) and a ``NoteForm``
(via ``cli._to_form()``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from hydra.core.config_store import ConfigStore


@dataclass
class TexNotesConf:
    # --- Dispatch + CLI-only fields ---
    mode: str = "make"
    verbose: bool = False
    quiet: bool = False
    interactive: bool = False
    tex_file: str | None = None

    # --- Form fields ---
    course_name: str | None = None
    file_name: str | None = None
    use_lecture_number: bool = False
    date: str | None = None
    lecture_number: str | None = None
    font_size: str | None = None
    directory: str | None = None
    options: list[str] = field(default_factory=list)

    # --- ProjectConfig fields (1:1 mapping) ---
    engine: str = "${oc.env:TEXNOTES_ENGINE,pdflatex}"
    compile_pdf: bool = True
    compile_timeout: int = 120
    font_sizes: list[int] = field(default_factory=lambda: [10, 11, 12])
    lecture_prefix: str = "Lecture_"
    separator: str = "|"
    extension: str = "tex"


# Keys present in TexNotesConf that are NOT part of ProjectConfig.
CLI_ONLY_KEYS = frozenset({
    "mode", "verbose", "quiet", "interactive", "tex_file",
})

# Keys that describe the note being made rather than how it is made.
FORM_KEYS = frozenset({
    "course_name", "file_name", "use_lecture_number", "date",
    "lecture_number", "font_size", "directory", "options",
})


def register_configs() -> None:
    """Register the structured config schema with Hydra's ConfigStore."""
    cs = ConfigStore.instance()
    cs.store(name="texnotes_schema", node=TexNotesConf)
