"""
Python import and export extraction.

Regex-based rather than ast-based: files that do not parse (Python 2,
work in progress) still yield their imports.
"""

import re

from ..languages import PYTHON
from ..models import ExportKind, ExportRecord, ImportKind, ImportRecord
from .base import BaseExtractor, Found


class PythonExtractor(BaseExtractor):
    """
    Python extractor

    Imports:  import a.b as c, d / from .x import (a, b as c)
    Exports:  __all__ when present, otherwise public top-level def/class
    """

    families = [PYTHON]

    IMPORT_PATTERN = re.compile(
        r"^[ \t]*import[ \t]+(?P<modules>[\w. \t,]+)",
        re.MULTILINE
    )

    FROM_IMPORT_PATTERN = re.compile(
        r"^[ \t]*from[ \t]+(?P<source>\.+[\w.]*|[\w.]+)[ \t]+import[ \t]+"
        r"(?P<names>\([^)]*\)|[^\n#;]+)",
        re.MULTILINE
    )

    ALL_PATTERN = re.compile(
        r"^__all__[ \t]*(?::[^=]+)?\+?=[ \t]*[\[(](?P<names>[^\])]*)[\])]",
        re.MULTILINE
    )

    TOP_LEVEL_PATTERN = re.compile(
        r"^(?:async[ \t]+)?(?:def|class)[ \t]+(?P<name>[A-Za-z]\w*)",
        re.MULTILINE
    )

    def _find_imports(self, content: str) -> Found:
        found = []

        for match in self.IMPORT_PATTERN.finditer(content):
            line = self.line_at(content, match.start("modules"))
            for offset, part in enumerate(match.group("modules").split(",")):
                part = part.strip()
                if not part:
                    continue
                module, _, alias = part.partition(" as ")
                module = module.strip()
                found.append((match.start() + offset, ImportRecord(
                    kind=ImportKind.PYTHON_IMPORT,
                    source=module,
                    imported_names=[alias.strip() or module.split(".")[0]],
                    line=line,
                )))

        for match in self.FROM_IMPORT_PATTERN.finditer(content):
            names = match.group("names").strip().strip("()")
            names = names.replace("\\\n", " ").replace("\n", " ")
            found.append((match.start(), ImportRecord(
                kind=ImportKind.PYTHON_FROM,
                source=match.group("source"),
                imported_names=self.split_names(names),
                line=self.line_at(content, match.start("source")),
            )))

        return found

    def _find_exports(self, content: str) -> Found:
        found = []

        for match in self.ALL_PATTERN.finditer(content):
            line = self.line_at(content, match.start())
            names = re.findall(r"['\"](\w+)['\"]", match.group("names"))
            for offset, name in enumerate(names):
                found.append((match.start() + offset, ExportRecord(
                    kind=ExportKind.DUNDER_ALL,
                    name=name,
                    line=line,
                )))

        if found:
            return found

        for match in self.TOP_LEVEL_PATTERN.finditer(content):
            found.append((match.start(), ExportRecord(
                kind=ExportKind.PUBLIC,
                name=match.group("name"),
                line=self.line_at(content, match.start()),
            )))

        return found
