"""Tests for logging_config.py — log levels and rich progress callbacks."""

from __future__ import annotations

import io
import logging

import pytest
from rich.console import Console

from texnotes.logging_config import NullCallbacks, RichCallbacks, setup_logging


@pytest.fixture
def buffer_console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, force_terminal=False, width=120), buf


class TestSetupLogging:
    @pytest.mark.parametrize("verbose,quiet,level", [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.ERROR),
    ])
    def test_levels(self, verbose, quiet, level):
        setup_logging(verbose=verbose, quiet=quiet)
        assert logging.getLogger().level == level


class TestRichCallbacks:
    def test_stage_progress(self, buffer_console):
        target, buf = buffer_console
        cb = RichCallbacks(target)
        cb.on_stage_start("write", "Writing notes/lec1.tex")
        cb.on_stage_end("write", True)
        cb.on_stage_end("compile", False)
        out = buf.getvalue()
        assert "write Writing notes/lec1.tex" in out
        assert "write: OK" in out
        assert "compile: FAILED" in out

    def test_messages_are_not_treated_as_markup(self, buffer_console):
        target, buf = buffer_console
        cb = RichCallbacks(target)
        cb.on_error("Unknown option [bold]")
        cb.on_warning("Label(s) may have changed")
        out = buf.getvalue()
        assert "ERROR: Unknown option [bold]" in out
        assert "WARNING: Label(s) may have changed" in out

    def test_null_callbacks_accept_every_event(self):
        cb = NullCallbacks()
        cb.on_stage_start("validate", "Checking inputs")
        cb.on_stage_end("validate", True)
        cb.on_warning("w")
        cb.on_error("e")
