"""Shared test fixtures."""

from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from texnotes.catalog import DEFAULT_CATALOG
from texnotes.validator import RawFields

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_LOGS = FIXTURES_DIR / "sample_logs"
SAMPLE_CONFIG = FIXTURES_DIR / "sample_config.yaml"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_config_path() -> Path:
    return SAMPLE_CONFIG


@pytest.fixture
def success_log_path() -> Path:
    return SAMPLE_LOGS / "success.log"


@pytest.fixture
def error_log_path() -> Path:
    return SAMPLE_LOGS / "error.log"


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    out = tmp_path / "notes"
    out.mkdir()
    return out


@pytest.fixture
def raw_fields(notes_dir: Path) -> RawFields:
    """Complete, valid form input (the CS101 lecture 3 example)."""
    return RawFields(
        course_name="CS101",
        file_name="lec1",
        date=dt.date(2024, 3, 7),
        lecture_number="3",
        font_size=11,
        directory=notes_dir,
        selected_options=[DEFAULT_CATALOG.get("Full Page"), DEFAULT_CATALOG.get("AMS Math")],
    )
