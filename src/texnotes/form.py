"""Per-session form state: the inputs and option selection being edited."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .catalog import DEFAULT_CATALOG, OptionCatalog
from .models import Option
from .validator import RawFields


@dataclass
class NoteForm:
    """Mutable inputs owned by one request-building session.

    The selection lives here rather than in module state; :meth:`to_raw`
    snapshots it so later edits never leak into a request already handed to
    the validator.
    """

    course_name: str | None = None
    file_name: str | None = None
    use_lecture_number: bool = False
    date: dt.date | str | None = None
    lecture_number: int | str | None = None
    font_size: int | str | None = None
    directory: str | Path | None = None
    catalog: OptionCatalog = field(default=DEFAULT_CATALOG, repr=False)
    _selected: set[Option] = field(default_factory=set, repr=False)

    def select(self, name: str) -> None:
        self._selected.add(self.catalog.get(name))

    def deselect(self, name: str) -> None:
        self._selected.discard(self.catalog.get(name))

    def toggle(self, name: str) -> bool:
        """Flip the option and return whether it is now selected."""
        option = self.catalog.get(name)
        if option in self._selected:
            self._selected.remove(option)
            return False
        self._selected.add(option)
        return True

    def set_selected(self, names: Iterable[str]) -> None:
        self._selected = set(self.catalog.resolve(names))

    def is_selected(self, name: str) -> bool:
        return self.catalog.get(name) in self._selected

    def selected(self) -> list[Option]:
        """Current selection in catalog order (a copy)."""
        return [o for o in self.catalog if o in self._selected]

    def to_raw(self) -> RawFields:
        return RawFields(
            course_name=self.course_name,
            file_name=self.file_name,
            use_lecture_number=self.use_lecture_number,
            date=self.date,
            lecture_number=self.lecture_number,
            font_size=self.font_size,
            directory=self.directory,
            selected_options=tuple(self._selected),
        )
