"""Import / export extractors, one per language family."""

from typing import Optional

from ..languages import family_for
from ..models import ExportRecord, ImportKind, ImportRecord
from .base import BaseExtractor
from .clike import CLikeExtractor
from .go import GoExtractor
from .java import JavaExtractor
from .javascript import JavaScriptExtractor
from .php import PhpExtractor
from .python import PythonExtractor
from .ruby import RubyExtractor
from .rust import RustExtractor

EXTRACTORS: dict[str, BaseExtractor] = {}
for _extractor in (
    JavaScriptExtractor(),
    PythonExtractor(),
    GoExtractor(),
    RustExtractor(),
    JavaExtractor(),
    CLikeExtractor(),
    RubyExtractor(),
    PhpExtractor(),
):
    for _family in _extractor.families:
        EXTRACTORS[_family] = _extractor


def get_extractor(path) -> Optional[BaseExtractor]:
    """Extractor for path's language family, or None"""
    family = family_for(path)
    if family is None:
        return None
    return EXTRACTORS.get(family)


def extract_imports(content: str, path, resolver=None) -> list[ImportRecord]:
    """
    Import records of a file, in source order.

    When a resolver is given each record's source is resolved against path;
    records whose target does not exist keep resolved_path = None. Names
    imported from a Python package that are modules of that package get
    their files in member_paths.
    """
    extractor = get_extractor(path)
    if extractor is None:
        return []
    records = extractor.extract_imports(content, path)
    if resolver is not None:
        for record in records:
            record.resolved_path = resolver.resolve(record.source, path)
            if record.kind is ImportKind.PYTHON_FROM:
                record.member_paths = resolver.resolve_members(record.source, record.imported_names, path)
    return records


def extract_exports(content: str, path) -> list[ExportRecord]:
    extractor = get_extractor(path)
    if extractor is None:
        return []
    return extractor.extract_exports(content, path)


__all__ = [
    "BaseExtractor",
    "CLikeExtractor",
    "GoExtractor",
    "JavaExtractor",
    "JavaScriptExtractor",
    "PhpExtractor",
    "PythonExtractor",
    "RubyExtractor",
    "RustExtractor",
    "EXTRACTORS",
    "get_extractor",
    "extract_imports",
    "extract_exports",
]
