"""Make-notes orchestration: validate, render, write, compile.

Each stage fails on its own terms and every failure is recovered here and
turned into a :class:`MakeResult` the caller can show to the user. Nothing
raised by a stage escapes :func:`make_notes`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .catalog import DEFAULT_CATALOG, OptionCatalog
from .exceptions import CompilationError, FileWriteFailure
from .logging_config import NotesCallbacks, NullCallbacks
from .models import MakeResult, MakeStage, NoteRequest, ProjectConfig
from .tools.compiler import run_engine
from .tools.latex_builder import render, write_tex
from .validator import RawFields, ValidationResult, validate

logger = logging.getLogger(__name__)

SUCCESS_TEXT = "Notes created successfully!"
NOTHING_CREATED_TEXT = "(Error: Nothing was created)"
PARTIAL_WRITE_TEXT = "(Error: The LaTeX file may be missing or incomplete)"
SOURCE_MAY_EXIST_TEXT = "Something went wrong while compiling the document! A valid LaTeX file may exist at {path}."


def validate_request(raw: RawFields, config: ProjectConfig) -> ValidationResult:
    """Run the validator with the limits from *config*."""
    return validate(
        raw,
        font_sizes=config.font_sizes,
        lecture_prefix=config.lecture_prefix,
        extension=config.extension,
    )


def render_request(
    request: NoteRequest,
    config: ProjectConfig,
    catalog: OptionCatalog = DEFAULT_CATALOG,
) -> str:
    return render(request, catalog=catalog, separator=config.separator)


def make_notes(
    raw: RawFields,
    config: ProjectConfig | None = None,
    *,
    callbacks: NotesCallbacks | None = None,
    catalog: OptionCatalog = DEFAULT_CATALOG,
) -> MakeResult:
    """Validate *raw*, write the .tex file and compile it.

    Validation failures prevent any file I/O. Write and compile failures are
    reported with the path of whatever may already be on disk.
    """
    config = config or ProjectConfig()
    cb = callbacks or NullCallbacks()

    # --- validate ---
    cb.on_stage_start(MakeStage.VALIDATE.value, "Checking inputs")
    validation = validate_request(raw, config)
    if not validation.ok:
        failure = validation.failure
        assert failure is not None
        cb.on_error(failure.message)
        cb.on_stage_end(MakeStage.VALIDATE.value, False)
        return MakeResult(
            success=False,
            stage=MakeStage.VALIDATE,
            error_kind=failure.kind,
            messages=[failure.message, NOTHING_CREATED_TEXT],
        )
    request = validation.request
    assert request is not None
    cb.on_stage_end(MakeStage.VALIDATE.value, True)

    # --- render ---
    cb.on_stage_start(MakeStage.RENDER.value, f"Rendering {request.tex_name}")
    content = render_request(request, config, catalog)
    cb.on_stage_end(MakeStage.RENDER.value, True)

    # --- write ---
    cb.on_stage_start(MakeStage.WRITE.value, f"Writing {request.tex_path}")
    try:
        tex_path = write_tex(content, request.tex_path)
    except FileWriteFailure as e:
        logger.error("%s", e)
        cb.on_error(str(e))
        cb.on_stage_end(MakeStage.WRITE.value, False)
        return MakeResult(
            success=False,
            stage=MakeStage.WRITE,
            error_kind=e.kind,
            messages=[str(e), PARTIAL_WRITE_TEXT],
        )
    cb.on_stage_end(MakeStage.WRITE.value, True)

    if not config.compile_pdf:
        logger.info("Compilation disabled; leaving %s uncompiled", tex_path)
        return MakeResult(success=True, tex_path=str(tex_path), messages=[SUCCESS_TEXT])

    # --- compile ---
    return _compile_stage(tex_path, config, cb)


def _compile_stage(tex_path: Path, config: ProjectConfig, cb: NotesCallbacks) -> MakeResult:
    cb.on_stage_start(MakeStage.COMPILE.value, f"Compiling with {config.engine}")
    source_note = SOURCE_MAY_EXIST_TEXT.format(path=tex_path)
    try:
        result = run_engine(tex_path, config.engine, timeout=config.compile_timeout)
    except CompilationError as e:
        logger.error("%s", e)
        cb.on_error(str(e))
        cb.on_stage_end(MakeStage.COMPILE.value, False)
        return MakeResult(
            success=False,
            stage=MakeStage.COMPILE,
            error_kind=e.kind,
            messages=[str(e), source_note],
            tex_path=str(tex_path),
        )

    for warning in result.warnings:
        cb.on_warning(warning.message)

    if not result.success:
        messages = [f"{config.engine} exited with status {result.return_code}"]
        for err in result.errors:
            where = f"l.{err.line}: " if err.line else ""
            messages.append(f"{where}{err.message}")
        messages.append(source_note)
        for msg in messages[:-1]:
            cb.on_error(msg)
        cb.on_stage_end(MakeStage.COMPILE.value, False)
        return MakeResult(
            success=False,
            stage=MakeStage.COMPILE,
            error_kind="CompilationFailure",
            messages=messages,
            tex_path=str(tex_path),
            compilation=result,
        )

    cb.on_stage_end(MakeStage.COMPILE.value, True)
    return MakeResult(
        success=True,
        tex_path=str(tex_path),
        pdf_path=result.pdf_path,
        compilation=result,
        messages=[SUCCESS_TEXT],
    )
