"""
Java / Kotlin / Scala / Groovy import and export extraction.

Handles:
- import package.Class; / import static package.Class.method;
- import package.* / Kotlin "import a.B as C" (no semicolon)
- public top-level classes, interfaces, enums and records as exports
"""

import re

from ..languages import JAVA
from ..models import ExportKind, ExportRecord, ImportKind, ImportRecord
from .base import BaseExtractor, Found


class JavaExtractor(BaseExtractor):
    """
    JVM-family extractor
    """

    families = [JAVA]

    IMPORT_PATTERN = re.compile(
        r'^[ \t]*import\s+(?:static\s+)?(?P<source>\w+(?:\.\w+)*(?:\.\*)?)(?:\s+as\s+(?P<alias>\w+))?\s*;?',
        re.MULTILINE
    )

    PUBLIC_TYPE_PATTERN = re.compile(
        r'^[ \t]*public\s+(?:(?:abstract|final|sealed|static)\s+)*'
        r'(?:class|interface|enum|record|@interface)\s+(?P<name>\w+)',
        re.MULTILINE
    )

    def _find_imports(self, content: str) -> Found:
        found = []
        for match in self.IMPORT_PATTERN.finditer(content):
            source = match.group("source")
            name = match.group("alias") or source.split(".")[-1]
            found.append((match.start(), ImportRecord(
                kind=ImportKind.JAVA_IMPORT,
                source=source,
                imported_names=[] if name == "*" else [name],
                line=self.line_at(content, match.start("source")),
            )))
        return found

    def _find_exports(self, content: str) -> Found:
        return [
            (match.start(), ExportRecord(
                kind=ExportKind.PUBLIC,
                name=match.group("name"),
                line=self.line_at(content, match.start("name")),
            ))
            for match in self.PUBLIC_TYPE_PATTERN.finditer(content)
        ]
