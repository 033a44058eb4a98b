"""Deterministic tools for LaTeX generation and compilation."""

from .compiler import parse_log, run_engine
from .latex_builder import render, sort_options, write_tex

__all__ = [
    "parse_log",
    "render",
    "run_engine",
    "sort_options",
    "write_tex",
]
