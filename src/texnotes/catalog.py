"""The fixed, ordered set of preamble options offered to the user."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Option


class OptionCatalog:
    """Immutable, declaration-ordered collection of :class:`Option`."""

    def __init__(self, options: Iterable[Option]) -> None:
        self._options: tuple[Option, ...] = tuple(options)
        self._by_name = {o.name: o for o in self._options}
        if len(self._by_name) != len(self._options):
            raise ValueError("Option names in a catalog must be unique")
        self._positions = {o: i for i, o in enumerate(self._options)}

    def list(self) -> tuple[Option, ...]:
        return self._options

    def names(self) -> list[str]:
        return [o.name for o in self._options]

    def get(self, name: str) -> Option:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown option {name!r}. Available: {', '.join(self.names())}") from None

    def resolve(self, names: Iterable[str]) -> list[Option]:
        """Map option names to catalog entries, dropping duplicates."""
        seen: dict[str, Option] = {}
        for name in names:
            seen.setdefault(name, self.get(name))
        return list(seen.values())

    def position(self, option: Option) -> int | None:
        """Declaration index of *option*, or ``None`` if it is not in the catalog."""
        return self._positions.get(option)

    def __contains__(self, option: object) -> bool:
        return option in self._positions

    def __iter__(self):
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)


DEFAULT_OPTIONS: tuple[Option, ...] = (
    Option(name="No Indent", snippet="\\setlength\\parindent{0pt}", order=1),
    Option(name="AMS Math", snippet="\\usepackage{amsmath}", order=2),
    Option(name="Microtype", snippet="\\usepackage{microtype}", order=3),
    Option(name="Full Page", snippet="\\usepackage{fullpage}", order=4),
)

DEFAULT_CATALOG = OptionCatalog(DEFAULT_OPTIONS)
