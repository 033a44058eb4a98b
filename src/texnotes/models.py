"""Pydantic models for the note generator."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


class ValidationErrorKind(str, Enum):
    MISSING_COURSE_NAME = "MissingCourseName"
    MISSING_FILE_NAME = "MissingFileName"
    UNSAFE_FILE_NAME = "UnsafeFileName"
    MISSING_DATE = "MissingDate"
    MALFORMED_DATE = "MalformedDate"
    MISSING_LECTURE_NUMBER = "MissingLectureNumber"
    MALFORMED_LECTURE_NUMBER = "MalformedLectureNumber"
    MISSING_FONT_SIZE = "MissingFontSize"
    UNSUPPORTED_FONT_SIZE = "UnsupportedFontSize"
    MISSING_DIRECTORY = "MissingDirectory"
    UNWRITABLE_DIRECTORY = "UnwritableDirectory"


class MakeStage(str, Enum):
    VALIDATE = "validate"
    RENDER = "render"
    WRITE = "write"
    COMPILE = "compile"
    DONE = "done"


# ---------------------------------------------------------------------------
# Options and requests
# ---------------------------------------------------------------------------

class Option(BaseModel):
    """A toggleable preamble feature with a fixed insertion rank."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Display label")
    snippet: str = Field(default="", description="LaTeX inserted verbatim into the preamble")
    order: int = Field(default=0, description="Insertion rank (lower comes first)")


class NoteRequest(BaseModel):
    """Validated inputs for one document. Only the validator builds these."""
    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., min_length=1)
    font_size: int = Field(..., gt=0, description="Font size in pt")
    selected_options: frozenset[Option] = Field(default_factory=frozenset)
    course_name: str = Field(..., min_length=1)
    lecture_number: int = Field(..., gt=0)
    date: dt.date
    directory: Path
    extension: str = Field(default="tex")

    @property
    def tex_name(self) -> str:
        return f"{self.file_name}.{self.extension}"

    @property
    def tex_path(self) -> Path:
        return self.directory / self.tex_name


# ---------------------------------------------------------------------------
# Compilation
# ---------------------------------------------------------------------------

class CompilationWarning(BaseModel):
    """A single warning or error from the LaTeX log."""
    line: int | None = Field(default=None, description="Line number")
    message: str = Field(..., description="Warning/error message")
    severity: Severity = Field(default=Severity.WARNING)


class CompilationResult(BaseModel):
    """Result of a LaTeX engine run that started and exited normally."""
    success: bool = Field(..., description="Exit code 0 and a PDF was produced")
    return_code: int = Field(default=0)
    pdf_path: str | None = Field(default=None, description="Path to generated PDF")
    errors: list[CompilationWarning] = Field(default_factory=list)
    warnings: list[CompilationWarning] = Field(default_factory=list)
    log_excerpt: str = Field(default="", description="Tail of engine output on failure")


# ---------------------------------------------------------------------------
# Top-level result
# ---------------------------------------------------------------------------

class MakeResult(BaseModel):
    """Outcome of one "make notes" action, ready to show to the user."""
    success: bool = Field(...)
    stage: MakeStage = Field(default=MakeStage.DONE, description="Stage reached or failed in")
    error_kind: str | None = Field(default=None, description="Taxonomy name of the failure")
    messages: list[str] = Field(default_factory=list)
    tex_path: str | None = Field(default=None, description="Written .tex file, if any")
    pdf_path: str | None = Field(default=None)
    compilation: CompilationResult | None = Field(default=None)


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------

class ProjectConfig(BaseModel):
    """Settings loaded from config.yaml or the Hydra command line."""
    engine: str = Field(default="pdflatex", description="LaTeX engine executable")
    compile_pdf: bool = Field(default=True, description="Run the engine after writing the file")
    compile_timeout: int = Field(default=120, gt=0, description="Engine timeout in seconds")
    font_sizes: list[int] = Field(default_factory=lambda: [10, 11, 12], min_length=1, description="Allowed font sizes in pt")
    lecture_prefix: str = Field(default="Lecture_", description="Prefix for derived file names")
    separator: str = Field(default="|", description="Separator between lecture number and date")
    extension: str = Field(default="tex")
