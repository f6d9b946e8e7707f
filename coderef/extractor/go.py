"""
Go import and export extraction.

Handles:
- import "pkg" / import alias "pkg"
- import ( "pkg1"; alias "pkg2" )
- exported (capitalised) top-level funcs, methods, types, vars and consts
"""

import re

from ..languages import GO
from ..models import ExportKind, ExportRecord, ImportKind, ImportRecord
from .base import BaseExtractor, Found


class GoExtractor(BaseExtractor):
    """
    Go extractor
    """

    families = [GO]

    IMPORT_SINGLE_PATTERN = re.compile(
        r'^import\s+(?:([\w.]+)\s+)?"([^"]+)"',
        re.MULTILINE
    )

    IMPORT_BLOCK_PATTERN = re.compile(
        r'^import\s*\(([\s\S]*?)\)',
        re.MULTILINE
    )

    IMPORT_LINE_PATTERN = re.compile(
        r'^\s*(?:([\w.]+)\s+)?"([^"]+)"',
        re.MULTILINE
    )

    EXPORT_PATTERN = re.compile(
        r'^(?:func\s+(?:\([^)]*\)\s*)?|type\s+|var\s+|const\s+)([A-Z]\w*)',
        re.MULTILINE
    )

    def _find_imports(self, content: str) -> Found:
        found = []

        # Single imports: import "pkg"
        for match in self.IMPORT_SINGLE_PATTERN.finditer(content):
            alias = match.group(1) or ""
            module = match.group(2)
            found.append((match.start(), ImportRecord(
                kind=ImportKind.GO_IMPORT,
                source=module,
                imported_names=[alias or module.split("/")[-1]],
                line=self.line_at(content, match.start()),
            )))

        # Import blocks: import ( "pkg1" "pkg2" )
        for match in self.IMPORT_BLOCK_PATTERN.finditer(content):
            block_start = match.start(1)
            block_content = match.group(1)

            for line_match in self.IMPORT_LINE_PATTERN.finditer(block_content):
                alias = line_match.group(1) or ""
                module = line_match.group(2)
                found.append((block_start + line_match.start(2), ImportRecord(
                    kind=ImportKind.GO_IMPORT,
                    source=module,
                    imported_names=[alias or module.split("/")[-1]],
                    line=self.line_at(content, block_start + line_match.start(2)),
                )))

        return found

    def _find_exports(self, content: str) -> Found:
        return [
            (match.start(), ExportRecord(
                kind=ExportKind.PUBLIC,
                name=match.group(1),
                line=self.line_at(content, match.start()),
            ))
            for match in self.EXPORT_PATTERN.finditer(content)
        ]
