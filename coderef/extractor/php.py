"""
PHP import extraction.

Handles:
- use Vendor\\Package\\Class; / use Vendor\\Package\\{A, B};
- require / require_once / include / include_once 'file.php'
"""

import re

from ..languages import PHP
from ..models import ImportKind, ImportRecord
from .base import BaseExtractor, Found


class PhpExtractor(BaseExtractor):
    """
    PHP extractor
    """

    families = [PHP]

    USE_PATTERN = re.compile(
        r'^[ \t]*use\s+(?:function\s+|const\s+)?(?P<source>[\w\\]+)(?:\s*\{(?P<group>[^}]*)\}|\s+as\s+(?P<alias>\w+))?\s*;',
        re.MULTILINE
    )

    REQUIRE_PATTERN = re.compile(
        r'''\b(?:require|include)(?:_once)?\s*\(?\s*['"](?P<source>[^'"\n]+)['"]'''
    )

    def _find_imports(self, content: str) -> Found:
        found = []

        for match in self.USE_PATTERN.finditer(content):
            source = match.group("source").rstrip("\\")
            if match.group("group") is not None:
                names = self.alias_names(match.group("group"))
            else:
                names = [match.group("alias") or source.split("\\")[-1]]
            found.append((match.start(), ImportRecord(
                kind=ImportKind.PHP_USE,
                source=source,
                imported_names=names,
                line=self.line_at(content, match.start("source")),
            )))

        for match in self.REQUIRE_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.PHP_REQUIRE,
                source=match.group("source"),
                imported_names=[],
                line=self.line_at(content, match.start("source")),
            )))

        return found
