"""Tests for markdown report rendering."""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from coderef.models import (
    ExportKind, ExportRecord, FileAnalysis, ImportKind, ImportRecord, Match,
    ReverseDependency, SearchQuery, SearchReport, SearchType,
)
from coderef.report import clip, render_report


def _report(matches=None, **query_kwargs):
    query_kwargs.setdefault("symbol", "getUser")
    report = SearchReport(query=SearchQuery(**query_kwargs))
    report.matches = matches or []
    report.files_scanned = 3
    return report


class TestClip:
    def test_short_text_stripped(self):
        assert clip("   getUser()  ") == "getUser()"

    def test_long_text_truncated(self):
        text = clip("x" * 500)
        assert len(text) == 200
        assert text.endswith("...")


class TestRenderReport:
    def test_path_not_found(self):
        report = _report(base_path="missing")
        report.base_path_found = False
        text = render_report(report)
        assert "Path not found" in text
        assert "`missing`" in text

    def test_no_results_suggests_fuzzy(self):
        text = render_report(_report())
        assert "No results found for `getUser`" in text
        assert "(3 files scanned)" in text
        assert "fuzzyMatch" in text

    def test_no_results_fuzzy_has_no_hint(self):
        text = render_report(_report(fuzzy_match=True))
        assert "No results found" in text
        assert "fuzzyMatch" not in text

    def test_matches_grouped_by_file_in_rank_order(self):
        matches = [
            Match("b.ts", 4, "getUser()", SearchType.REFERENCES, 1.0),
            Match("a.ts", 1, "function getUser() {}", SearchType.DEFINITION, 1.0),
            Match("b.ts", 9, "getUsr()", SearchType.REFERENCES, 0.79),
        ]
        text = render_report(_report(matches, fuzzy_match=True))
        assert text.startswith("# Code references for `getUser` (all)")
        assert "Found 3 matches in 2 files (fuzzy: on, truncated: no)." in text
        assert text.index("### b.ts") < text.index("### a.ts")
        assert "- **references** (line 9, confidence 0.79): `getUsr()`" in text
        # both b.ts lines sit under one heading
        assert text.count("### b.ts") == 1

    def test_truncated_flag(self):
        report = _report([Match("a.ts", 1, "getUser()", SearchType.USAGE, 1.0)])
        report.truncated = True
        assert "truncated: yes" in render_report(report)


class TestRenderAnalysis:
    def test_sections(self):
        report = _report(
            [Match("src/user.ts", 1, "export function getUser() {}", SearchType.DEFINITION, 1.0)],
            analyze_imports=True, include_dependencies=True, include_reverse_dependencies=True,
            depth_level=2,
        )
        report.analyses = [FileAnalysis(
            file="src/user.ts",
            path="/abs/src/user.ts",
            imports=[
                ImportRecord(ImportKind.ES_IMPORT, "./db", ["query"], 1, "src/db.ts"),
                ImportRecord(ImportKind.ES_IMPORT, "lodash", [], 2, None),
            ],
            exports=[ExportRecord(ExportKind.NAMED, "getUser", False, 3)],
            dependencies=["src/db.ts"],
            reverse_dependencies=[
                ReverseDependency("src/app.ts", 1, "import { getUser } from './user'"),
                ReverseDependency("src/legacy.ts", 2, "import u from 'lib/user'", strict=False),
            ],
        )]
        text = render_report(report)
        assert "## Dependency analysis" in text
        assert "- line 1: `./db` [query] -> src/db.ts" in text
        assert "- line 2: `lodash` -> unresolved" in text
        assert "- line 3: `getUser` named" in text
        assert "**Dependencies (depth 2):**" in text
        assert "- src/db.ts" in text
        assert "- src/app.ts:1: `import { getUser } from './user'`" in text
        assert "- src/legacy.ts:2 (by name):" in text

    def test_empty_sections(self):
        report = _report(
            [Match("a.ts", 1, "getUser()", SearchType.USAGE, 1.0)],
            include_dependencies=True,
        )
        report.analyses = [FileAnalysis(file="a.ts", path="/abs/a.ts")]
        text = render_report(report)
        assert "- (none)" in text
        assert "**Imports:**" not in text
        assert "**Reverse dependencies:**" not in text
