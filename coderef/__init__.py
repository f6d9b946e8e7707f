"""
coderef - code reference search for coding agents.

Finds where a symbol is defined, referenced or used, and maps import/export
relationships, including transitive and reverse dependencies, with
pattern heuristics instead of full parsers.
"""

__version__ = "1.0.0"

from .engine import SearchEngine, search
from .errors import CodeRefError, InvalidParamsError, MethodNotFoundError
from .models import Match, SearchQuery, SearchReport, SearchType
from .report import render_report

__all__ = [
    "SearchEngine",
    "search",
    "render_report",
    "CodeRefError",
    "InvalidParamsError",
    "MethodNotFoundError",
    "Match",
    "SearchQuery",
    "SearchReport",
    "SearchType",
]
