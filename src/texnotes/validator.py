"""Input validation gate in front of document assembly.

Checks run in a fixed priority order and the first failure wins::

    course name -> file name -> date -> lecture number -> font size -> directory

A failed check never yields a partially built :class:`NoteRequest`.
"""

from __future__ import annotations

import datetime as dt
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ValidationFailure
from .models import NoteRequest, Option, ValidationErrorKind

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZES: tuple[int, ...] = (10, 11, 12)
DEFAULT_LECTURE_PREFIX = "Lecture_"

# Characters that cannot appear in a bare file name on common filesystems.
_UNSAFE_CHARS = frozenset('/\\\0:*?"<>|')


@dataclass
class RawFields:
    """Unvalidated form input. Every field may be missing or loosely typed."""

    course_name: str | None = None
    file_name: str | None = None
    use_lecture_number: bool = False
    date: dt.date | str | None = None
    lecture_number: int | str | None = None
    font_size: int | str | None = None
    directory: str | Path | None = None
    selected_options: Iterable[Option] = field(default_factory=tuple)


@dataclass(frozen=True)
class ValidationResult:
    """Either a complete request or the single failure that stopped validation."""

    request: NoteRequest | None = None
    failure: ValidationFailure | None = None

    @property
    def ok(self) -> bool:
        return self.request is not None

    def unwrap(self) -> NoteRequest:
        """Return the request or raise the failure."""
        if self.failure is not None:
            raise self.failure
        assert self.request is not None
        return self.request


def _fail(kind: ValidationErrorKind, field_name: str, message: str) -> ValidationResult:
    logger.debug("Validation failed: %s (%s)", kind.value, field_name)
    return ValidationResult(failure=ValidationFailure(kind, field_name, message))


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_safe_file_name(name: str) -> bool:
    if name in (".", ".."):
        return False
    return not any(ch in _UNSAFE_CHARS for ch in name)


def _parse_date(value: dt.date | str) -> dt.date | None:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def _parse_lecture_number(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            return None
    return number if number > 0 else None


def _parse_font_size(value: int | str | None) -> int | None:
    """Return the size in pt, or ``None`` for the unset sentinel (``None``/``0``)."""
    if isinstance(value, str):
        value = value.strip().removesuffix("pt")
        if not value:
            return None
        try:
            value = int(value)
        except ValueError:
            return -1
    if not value:
        return None
    if isinstance(value, float) and not value.is_integer():
        return -1
    return int(value)


def _is_writable_dir(path: Path) -> bool:
    return path.is_dir() and os.access(path, os.W_OK | os.X_OK)


def validate(
    raw: RawFields,
    *,
    font_sizes: Iterable[int] = DEFAULT_FONT_SIZES,
    lecture_prefix: str = DEFAULT_LECTURE_PREFIX,
    extension: str = "tex",
) -> ValidationResult:
    """Validate *raw* form input into a :class:`NoteRequest`.

    Parameters
    ----------
    raw : RawFields
        Snapshot of the form. ``selected_options`` is copied, never referenced.
    font_sizes : Iterable[int]
        Allowed font sizes in pt.
    lecture_prefix : str
        Prefix for the file name synthesized when ``use_lecture_number`` is set.
    extension : str
        Extension of the file the request will be written to.
    """
    # 1. Course name
    if _is_blank(raw.course_name):
        return _fail(ValidationErrorKind.MISSING_COURSE_NAME, "course_name", "Please enter a course name!")
    course_name = str(raw.course_name).strip()

    # 2. File name (skipped when derived from the lecture number)
    file_name: str | None = None
    if not raw.use_lecture_number:
        if _is_blank(raw.file_name):
            return _fail(ValidationErrorKind.MISSING_FILE_NAME, "file_name", "Please enter a file name!")
        file_name = str(raw.file_name).strip()
        suffix = f".{extension}"
        if file_name.lower().endswith(suffix) and len(file_name) > len(suffix):
            file_name = file_name[: -len(suffix)]
        if not _is_safe_file_name(file_name):
            return _fail(
                ValidationErrorKind.UNSAFE_FILE_NAME,
                "file_name",
                f"File name {file_name!r} must not contain path separators or reserved characters!",
            )

    # 3. Date
    if _is_blank(raw.date):
        return _fail(ValidationErrorKind.MISSING_DATE, "date", "Please enter a date!")
    date = _parse_date(raw.date)
    if date is None:
        return _fail(ValidationErrorKind.MALFORMED_DATE, "date", "Date must be in YYYY-MM-DD form!")

    # 4. Lecture number
    if _is_blank(raw.lecture_number):
        return _fail(
            ValidationErrorKind.MISSING_LECTURE_NUMBER, "lecture_number", "Please enter a lecture number!"
        )
    lecture_number = _parse_lecture_number(raw.lecture_number)
    if lecture_number is None:
        return _fail(
            ValidationErrorKind.MALFORMED_LECTURE_NUMBER,
            "lecture_number",
            "Lecture number must be a valid number!",
        )
    if file_name is None:
        file_name = f"{lecture_prefix}{lecture_number}"
        if not _is_safe_file_name(file_name):
            return _fail(
                ValidationErrorKind.UNSAFE_FILE_NAME,
                "file_name",
                f"Lecture file name {file_name!r} must not contain path separators or reserved characters!",
            )

    # 5. Font size
    font_size = _parse_font_size(raw.font_size)
    if font_size is None:
        return _fail(ValidationErrorKind.MISSING_FONT_SIZE, "font_size", "Please choose a font size!")
    allowed = tuple(font_sizes)
    if font_size not in allowed:
        return _fail(
            ValidationErrorKind.UNSUPPORTED_FONT_SIZE,
            "font_size",
            f"Font size must be one of {', '.join(str(s) for s in allowed)}!",
        )

    # 6. Directory
    if _is_blank(raw.directory):
        return _fail(ValidationErrorKind.MISSING_DIRECTORY, "directory", "Please choose a directory!")
    directory = Path(raw.directory).expanduser()
    if not _is_writable_dir(directory):
        return _fail(
            ValidationErrorKind.UNWRITABLE_DIRECTORY,
            "directory",
            f"Directory {str(directory)!r} does not exist or is not writable!",
        )

    request = NoteRequest(
        file_name=file_name,
        font_size=font_size,
        selected_options=frozenset(raw.selected_options),
        course_name=course_name,
        lecture_number=lecture_number,
        date=date,
        directory=directory.resolve(),
        extension=extension,
    )
    logger.debug("Validated request for %s", request.tex_name)
    return ValidationResult(request=request)
