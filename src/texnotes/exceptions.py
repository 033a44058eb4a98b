"""Error taxonomy for note generation.

Every error here is recovered by :func:`texnotes.pipeline.make_notes` and
turned into a user-visible message.
"""

from __future__ import annotations

from pathlib import Path

from .models import ValidationErrorKind


class TexNotesError(Exception):
    """Base class for all reportable texnotes failures."""

    kind: str = "TexNotesError"


class ValidationFailure(TexNotesError):
    """
    A required input is missing or malformed.

    Attributes:
        kind: Which check failed
        field: Name of the offending input field
        message: User-facing explanation
    """

    def __init__(self, kind: ValidationErrorKind, field: str, message: str):
        self.kind = kind.value
        self.error_kind = kind
        self.field = field
        self.message = message
        super().__init__(message)


class FileWriteFailure(TexNotesError):
    """The .tex file could not be written."""

    kind = "FileWriteFailure"

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")


class CompilationError(TexNotesError):
    """The LaTeX engine did not run to completion."""

    def __init__(self, engine: str, reason: str):
        self.engine = engine
        self.reason = reason
        super().__init__(f"{engine}: {reason}")


class CompilerLaunchFailure(CompilationError):
    """The engine could not be started (not installed, not executable, ...)."""

    kind = "CompilerLaunchFailure"


class CompilerInterrupted(CompilationError):
    """The engine started but was stopped before it exited on its own."""

    kind = "CompilerInterrupted"
