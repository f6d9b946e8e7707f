"""
Rust import and export extraction.

Handles:
- use a::b::{c, d as e}; / pub use ...;
- mod name; (out-of-line module declarations)
- extern crate name;
- pub fn / struct / enum / trait / const / static / type / mod items
"""

import re

from ..languages import RUST
from ..models import ExportKind, ExportRecord, ImportKind, ImportRecord
from .base import BaseExtractor, Found


class RustExtractor(BaseExtractor):
    """
    Rust extractor
    """

    families = [RUST]

    USE_PATTERN = re.compile(
        r'^[ \t]*(?P<pub>pub(?:\([^)]*\))?\s+)?use\s+(?P<path>[^;]+);',
        re.MULTILINE
    )

    MOD_PATTERN = re.compile(
        r'^[ \t]*(?:pub(?:\([^)]*\))?\s+)?mod\s+(?P<name>\w+)\s*;',
        re.MULTILINE
    )

    EXTERN_CRATE_PATTERN = re.compile(
        r'^[ \t]*extern\s+crate\s+(?P<name>\w+)(?:\s+as\s+(?P<alias>\w+))?\s*;',
        re.MULTILINE
    )

    PUB_ITEM_PATTERN = re.compile(
        r'^[ \t]*pub(?:\([^)]*\))?\s+(?:async\s+)?(?:unsafe\s+)?(?:const\s+)?'
        r'(?:fn|struct|enum|trait|const|static|type|mod|union)\s+(?:mut\s+)?(?P<name>\w+)',
        re.MULTILINE
    )

    def _find_imports(self, content: str) -> Found:
        found = []

        for match in self.USE_PATTERN.finditer(content):
            source, names = self._split_use(match.group("path"))
            found.append((match.start(), ImportRecord(
                kind=ImportKind.RUST_USE,
                source=source,
                imported_names=names,
                line=self.line_at(content, match.start("path")),
            )))

        for match in self.MOD_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.RUST_MOD,
                source=match.group("name"),
                imported_names=[match.group("name")],
                line=self.line_at(content, match.start("name")),
            )))

        for match in self.EXTERN_CRATE_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.EXTERN_CRATE,
                source=match.group("name"),
                imported_names=[match.group("alias") or match.group("name")],
                line=self.line_at(content, match.start("name")),
            )))

        return found

    def _find_exports(self, content: str) -> Found:
        found = []

        for match in self.PUB_ITEM_PATTERN.finditer(content):
            found.append((match.start(), ExportRecord(
                kind=ExportKind.PUBLIC,
                name=match.group("name"),
                line=self.line_at(content, match.start("name")),
            )))

        for match in self.USE_PATTERN.finditer(content):
            if not match.group("pub"):
                continue
            _, names = self._split_use(match.group("path"))
            for offset, name in enumerate(names):
                found.append((match.start() + offset, ExportRecord(
                    kind=ExportKind.RE_EXPORT,
                    name=name,
                    line=self.line_at(content, match.start("path")),
                )))

        return found

    def _split_use(self, path: str) -> tuple[str, list[str]]:
        """
        'crate::a::{b, c as d}' -> ('crate::a', ['b', 'c'])
        'std::io::Read'         -> ('std::io::Read', ['Read'])
        """
        path = " ".join(path.split())
        if "{" in path:
            prefix, _, rest = path.partition("{")
            names = self.split_names(rest.rstrip("} "))
            return prefix.rstrip(": "), [n.split("::")[-1] for n in names]
        name = path.split(" as ")[0].split("::")[-1].strip()
        return path.split(" as ")[0].strip(), [name] if name else []
