"""LaTeX document assembly for lecture notes.

Produces a single self-contained file::

    \\documentclass[<size>pt]{article}
    <selected option snippets, sorted by order>
    \\begin{document}
    ... centred title block: course, "Class Notes", lecture | date ...
    \\end{document}

Rendering is pure; writing the result is a separate step.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from pathlib import Path

from ..catalog import DEFAULT_CATALOG, OptionCatalog
from ..exceptions import FileWriteFailure
from ..models import NoteRequest, Option

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "|"


# ---------------------------------------------------------------------------
# Option ordering
# ---------------------------------------------------------------------------

def sort_options(options: Iterable[Option], catalog: OptionCatalog = DEFAULT_CATALOG) -> list[Option]:
    """Sort options by ``order``; equal orders keep catalog declaration order.

    Options the catalog does not know come after known ones of the same order
    and are ranked by name, then snippet, so the result depends only on the
    set of options and never on how they were collected.
    """
    unknown = len(catalog)

    def key(option: Option) -> tuple[int, int, str, str]:
        pos = catalog.position(option)
        return (option.order, unknown if pos is None else pos, option.name, option.snippet)

    return sorted(set(options), key=key)


# ---------------------------------------------------------------------------
# Document parts
# ---------------------------------------------------------------------------

def format_date(date: dt.date) -> str:
    """``YYYY-M-D`` with no zero padding."""
    return f"{date.year}-{date.month}-{date.day}"


def render_header(font_size: int) -> str:
    return f"\\documentclass[{font_size}pt]{{article}}"


def render_title_block(
    course_name: str,
    lecture_number: int,
    date: dt.date,
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> list[str]:
    return [
        "\\begin{center}",
        f"\\Huge{{{course_name}}}",
        "",
        "\\Large{Class Notes}",
        "",
        f"\\Large{{Lecture {lecture_number} {separator} {format_date(date)}}}",
        "",
        "\\end{center}",
    ]


def render(
    request: NoteRequest,
    *,
    catalog: OptionCatalog = DEFAULT_CATALOG,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    """Render the complete document for *request*.

    Identical requests give byte-identical output regardless of the order the
    options were selected in.
    """
    parts: list[str] = [render_header(request.font_size)]

    for option in sort_options(request.selected_options, catalog):
        parts.append(option.snippet)

    parts.append("\\begin{document}")
    parts.append("")
    parts.extend(render_title_block(
        request.course_name,
        request.lecture_number,
        request.date,
        separator=separator,
    ))
    parts.append("")
    parts.append("\\end{document}")

    return "\n".join(parts) + "\n"


# ---------------------------------------------------------------------------
# File writing
# ---------------------------------------------------------------------------

def write_tex(content: str, tex_path: str | Path) -> Path:
    """Write *content* to *tex_path* as UTF-8.

    Raises
    ------
    FileWriteFailure
        If the file cannot be written. A partial file may be left behind.
    """
    path = Path(tex_path)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise FileWriteFailure(path, e.strerror or str(e)) from e
    logger.info("Wrote %s", path)
    return path
