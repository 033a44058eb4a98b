"""Tests for form.py — per-session selection state."""

from __future__ import annotations

import datetime as dt

import pytest

from texnotes.form import NoteForm
from texnotes.validator import validate


class TestSelection:
    def test_select_and_deselect(self):
        form = NoteForm()
        form.select("Full Page")
        form.select("AMS Math")
        assert [o.name for o in form.selected()] == ["AMS Math", "Full Page"]
        form.deselect("Full Page")
        assert [o.name for o in form.selected()] == ["AMS Math"]

    def test_deselect_unselected_is_noop(self):
        form = NoteForm()
        form.deselect("Microtype")
        assert form.selected() == []

    def test_toggle(self):
        form = NoteForm()
        assert form.toggle("Microtype") is True
        assert form.is_selected("Microtype")
        assert form.toggle("Microtype") is False
        assert not form.is_selected("Microtype")

    def test_set_selected_replaces(self):
        form = NoteForm()
        form.select("No Indent")
        form.set_selected(["Full Page"])
        assert [o.name for o in form.selected()] == ["Full Page"]

    def test_unknown_option(self):
        with pytest.raises(KeyError):
            NoteForm().select("Beamer")

    def test_sessions_do_not_share_selection(self):
        a, b = NoteForm(), NoteForm()
        a.select("AMS Math")
        assert b.selected() == []


class TestToRaw:
    def test_snapshot_is_independent(self, notes_dir):
        form = NoteForm(
            course_name="CS101",
            file_name="lec1",
            date=dt.date(2024, 3, 7),
            lecture_number="3",
            font_size=11,
            directory=notes_dir,
        )
        form.select("AMS Math")
        raw = form.to_raw()
        form.select("Full Page")

        request = validate(raw).unwrap()
        assert {o.name for o in request.selected_options} == {"AMS Math"}

    def test_font_size_defaults_to_unset(self):
        assert NoteForm().to_raw().font_size is None
