"""
C-family import extraction: C, C++, C#, Swift, Dart.

Handles:
- #include "local.h" / #include <system.h> (and Objective-C #import)
- C# using Namespace; / using static Namespace.Type;
- Swift import Module / Dart import 'package:x/y.dart';

Header-based languages have no export statements.
"""

import re

from ..languages import C
from ..models import ImportKind, ImportRecord
from .base import BaseExtractor, Found


class CLikeExtractor(BaseExtractor):
    """
    C-family extractor
    """

    families = [C]

    INCLUDE_PATTERN = re.compile(
        r'^[ \t]*#[ \t]*(?:include|import)[ \t]*(?P<open>[<"])(?P<source>[^>"\n]+)[>"]',
        re.MULTILINE
    )

    USING_PATTERN = re.compile(
        r'^[ \t]*using\s+(?:static\s+)?(?:(?P<alias>\w+)\s*=\s*)?(?P<source>[\w.]+)\s*;',
        re.MULTILINE
    )

    MODULE_IMPORT_PATTERN = re.compile(
        r'''^[ \t]*import\s+(?:['"](?P<quoted>[^'"\n]+)['"]|(?P<module>[\w.]+))''',
        re.MULTILINE
    )

    def _find_imports(self, content: str) -> Found:
        found = []

        for match in self.INCLUDE_PATTERN.finditer(content):
            source = match.group("source").strip()
            found.append((match.start(), ImportRecord(
                kind=ImportKind.INCLUDE,
                # quoted includes are relative to the including file
                source=f"./{source}" if match.group("open") == '"' and not source.startswith(".") else source,
                imported_names=[],
                line=self.line_at(content, match.start("source")),
            )))

        for match in self.USING_PATTERN.finditer(content):
            source = match.group("source")
            found.append((match.start(), ImportRecord(
                kind=ImportKind.USING,
                source=source,
                imported_names=[match.group("alias") or source.split(".")[-1]],
                line=self.line_at(content, match.start("source")),
            )))

        for match in self.MODULE_IMPORT_PATTERN.finditer(content):
            source = match.group("quoted") or match.group("module")
            found.append((match.start(), ImportRecord(
                kind=ImportKind.MODULE_IMPORT,
                source=source,
                imported_names=[],
                line=self.line_at(content, match.start()),
            )))

        return found
