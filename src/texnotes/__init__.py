"""Generate skeleton LaTeX lecture notes from a handful of preferences."""

from .catalog import DEFAULT_CATALOG, OptionCatalog
from .form import NoteForm
from .models import MakeResult, NoteRequest, Option, ProjectConfig
from .pipeline import make_notes
from .tools.latex_builder import render
from .validator import RawFields, ValidationResult, validate

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CATALOG",
    "MakeResult",
    "NoteForm",
    "NoteRequest",
    "Option",
    "OptionCatalog",
    "ProjectConfig",
    "RawFields",
    "ValidationResult",
    "make_notes",
    "render",
    "validate",
]
