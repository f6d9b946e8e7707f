"""
JavaScript / TypeScript import and export extraction (regex-based).

Handles:
- import x from 'm' / import { a, b as c } from 'm' / import * as ns from 'm'
- import 'm' (side effect) / import type { T } from 'm'
- import('m') / require('m')
- export default / export const|function|class / export { a, b }
- export * from 'm' / export { a } from 'm'
- module.exports = ... / exports.x = ...
"""

import re

from ..languages import JAVASCRIPT
from ..models import ExportKind, ExportRecord, ImportKind, ImportRecord
from .base import QUOTED, BaseExtractor, Found


class JavaScriptExtractor(BaseExtractor):
    """
    JavaScript / TypeScript extractor (also used for .vue and .svelte files)
    """

    families = [JAVASCRIPT]

    IMPORT_FROM_PATTERN = re.compile(
        r"^[ \t]*import\s+(?:type\s+)?(?P<clause>[\w$*{}\s,]+?)\s*from\s*['\"](?P<source>[^'\"\n]+)['\"]",
        re.MULTILINE
    )

    IMPORT_SIDE_EFFECT_PATTERN = re.compile(
        r"^[ \t]*import\s+['\"](?P<source>[^'\"\n]+)['\"]",
        re.MULTILINE
    )

    DYNAMIC_IMPORT_PATTERN = re.compile(r"\bimport\s*\(\s*" + QUOTED + r"\s*\)")

    REQUIRE_PATTERN = re.compile(
        r"(?:\b(?:const|let|var)\s+(?P<binding>\{[^}]*\}|[\w$]+)\s*=\s*)?"
        r"\brequire\s*\(\s*" + QUOTED + r"\s*\)"
    )

    RE_EXPORT_PATTERN = re.compile(
        r"^[ \t]*export\s+(?:type\s+)?(?P<clause>\*(?:\s+as\s+[\w$]+)?|\{[^}]*\})\s*from\s*['\"](?P<source>[^'\"\n]+)['\"]",
        re.MULTILINE
    )

    EXPORT_DEFAULT_PATTERN = re.compile(
        r"^[ \t]*export\s+default\s+(?:async\s+)?(?:(?:function\*?|class)\s*)?(?P<name>[\w$]+)?",
        re.MULTILINE
    )

    EXPORT_DECLARATION_PATTERN = re.compile(
        r"^[ \t]*export\s+(?:declare\s+)?(?:async\s+)?(?:abstract\s+)?"
        r"(?:function\*?|class|const|let|var|interface|type|enum|namespace)\s+(?P<name>[\w$]+)",
        re.MULTILINE
    )

    EXPORT_LIST_PATTERN = re.compile(
        r"^[ \t]*export\s+(?:type\s+)?\{(?P<names>[^}]*)\}(?!\s*from)",
        re.MULTILINE
    )

    MODULE_EXPORTS_PATTERN = re.compile(
        r"\bmodule\.exports\s*=\s*(?P<value>\{[^}]*\}|[\w$]+)"
    )

    EXPORTS_PROPERTY_PATTERN = re.compile(
        r"\b(?:module\.)?exports\.(?P<name>[\w$]+)\s*=(?!=)"
    )

    def _find_imports(self, content: str) -> Found:
        found = []

        for match in self.IMPORT_FROM_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.ES_IMPORT,
                source=match.group("source"),
                imported_names=self._clause_names(match.group("clause")),
                line=self.line_at(content, match.start("clause")),
            )))

        for match in self.IMPORT_SIDE_EFFECT_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.ES_SIDE_EFFECT,
                source=match.group("source"),
                line=self.line_at(content, match.start("source")),
            )))

        for match in self.DYNAMIC_IMPORT_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.DYNAMIC_IMPORT,
                source=match.group(1),
                line=self.line_at(content, match.start()),
            )))

        for match in self.REQUIRE_PATTERN.finditer(content):
            binding = match.group("binding") or ""
            if binding.startswith("{"):
                names = self.split_names(binding.strip("{} ").replace(":", " as "))
            else:
                names = [binding] if binding else []
            found.append((match.start(), ImportRecord(
                kind=ImportKind.REQUIRE,
                source=match.group(2),
                imported_names=names,
                line=self.line_at(content, match.start(2)),
            )))

        for match in self.RE_EXPORT_PATTERN.finditer(content):
            found.append((match.start(), ImportRecord(
                kind=ImportKind.RE_EXPORT,
                source=match.group("source"),
                imported_names=self._clause_names(match.group("clause")),
                line=self.line_at(content, match.start("clause")),
            )))

        return found

    def _find_exports(self, content: str) -> Found:
        found = []

        for match in self.EXPORT_DEFAULT_PATTERN.finditer(content):
            found.append((match.start(), ExportRecord(
                kind=ExportKind.DEFAULT,
                name=match.group("name") or "default",
                is_default=True,
                line=self.line_at(content, match.end()),
            )))

        for match in self.EXPORT_DECLARATION_PATTERN.finditer(content):
            found.append((match.start(), ExportRecord(
                kind=ExportKind.NAMED,
                name=match.group("name"),
                line=self.line_at(content, match.start("name")),
            )))

        for match in self.EXPORT_LIST_PATTERN.finditer(content):
            line = self.line_at(content, match.start("names"))
            for offset, name in enumerate(self.alias_names(match.group("names"))):
                found.append((match.start() + offset, ExportRecord(
                    kind=ExportKind.LIST,
                    name=name,
                    is_default=name == "default",
                    line=line,
                )))

        for match in self.RE_EXPORT_PATTERN.finditer(content):
            line = self.line_at(content, match.start("clause"))
            clause = match.group("clause")
            names = ["*"] if clause.startswith("*") and " as " not in clause else self._exported_names(clause)
            for offset, name in enumerate(names):
                found.append((match.start() + offset, ExportRecord(
                    kind=ExportKind.RE_EXPORT,
                    name=name,
                    line=line,
                )))

        for match in self.MODULE_EXPORTS_PATTERN.finditer(content):
            value = match.group("value")
            line = self.line_at(content, match.start("value"))
            if value.startswith("{"):
                keys = [part.split(":")[0].strip() for part in value.strip("{} \n").split(",")]
                for offset, key in enumerate(k for k in keys if k):
                    found.append((match.start() + offset, ExportRecord(
                        kind=ExportKind.COMMONJS,
                        name=key,
                        line=line,
                    )))
            else:
                found.append((match.start(), ExportRecord(
                    kind=ExportKind.COMMONJS,
                    name=value,
                    is_default=True,
                    line=line,
                )))

        for match in self.EXPORTS_PROPERTY_PATTERN.finditer(content):
            found.append((match.start(), ExportRecord(
                kind=ExportKind.COMMONJS,
                name=match.group("name"),
                line=self.line_at(content, match.start()),
            )))

        return found

    def _clause_names(self, clause: str) -> list[str]:
        """
        Names bound by an import clause.

        'React, { useState, useEffect as fx }' -> ['React', 'useState', 'useEffect']
        '* as api'                             -> ['api']
        """
        clause = clause.strip()
        names = []

        braced = re.search(r"\{([^}]*)\}", clause)
        if braced:
            names_before = clause[:braced.start()]
            names.extend(self._plain_bindings(names_before))
            names.extend(self.split_names(braced.group(1)))
            names.extend(self._plain_bindings(clause[braced.end():]))
            return names

        return self._plain_bindings(clause)

    def _exported_names(self, clause: str) -> list[str]:
        clause = clause.strip()
        if clause.startswith("*"):
            return [clause.split(" as ")[-1].strip()]
        return self.alias_names(clause.strip("{} "))

    @staticmethod
    def _plain_bindings(text: str) -> list[str]:
        names = []
        for part in text.split(","):
            part = part.strip()
            if not part:
                continue
            if part.startswith("*"):
                alias = part.split(" as ")[-1].strip()
                if alias and alias != "*":
                    names.append(alias)
                continue
            names.append(part)
        return names
