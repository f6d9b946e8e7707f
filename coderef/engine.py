"""
Search engine - runs one code_reference_search request end to end.

Usage:
1. engine = SearchEngine(query)
2. report = engine.run() - walk -> match -> aggregate -> dependency analysis

Nothing survives the request: every run reads the file tree fresh.
"""

import dataclasses
import logging
import os
import time
from pathlib import Path
from typing import Optional

from . import settings
from .aggregator import ResultAggregator
from .extractor import extract_exports, extract_imports
from .graph import DependencyGraphBuilder
from .matcher import PatternMatcher
from .models import FileAnalysis, Match, SearchQuery, SearchReport, SearchType
from .resolver import PathResolver
from .walker import read_lines, read_text, walk_files

logger = logging.getLogger(__name__)

# categories whose hits mark a file as the home of the symbol
_TARGET_CATEGORIES = (SearchType.DEFINITION, SearchType.REVERSE_DEPENDENCIES)


class SearchEngine:
    """
    Symbol search engine

    Main features:
    1. run() - ranked matches for the query
    2. analyze() - imports / exports / dependencies of matched files

    Match.file paths are relative to cwd (the directory the request was
    issued from), defaulting to the process working directory.
    """

    def __init__(self, query: SearchQuery, cwd: Optional[str] = None):
        self.query = query
        self.cwd = os.path.abspath(cwd or os.getcwd())
        self.base_path = Path(self.cwd, query.base_path).resolve()
        self.resolver = PathResolver()
        self.graph = DependencyGraphBuilder(self.resolver)
        self.matcher = PatternMatcher(
            query.symbol,
            search_type=query.search_type,
            fuzzy_match=query.fuzzy_match,
            include_comments=query.include_comments,
        )
        self._files: list[Path] = []

    def relative(self, path) -> str:
        return os.path.relpath(str(path), self.cwd)

    def run(self) -> SearchReport:
        started = time.perf_counter()
        query = self.query
        report = SearchReport(query=query)

        if not self.base_path.exists():
            report.base_path_found = False
            logger.info("Base path not found: %s", self.base_path)
            return report

        self._files = sorted(walk_files(self.base_path, max_size=None), key=self.relative)
        aggregator = ResultAggregator(query.max_results)
        targets = self._scan(aggregator, report)

        if query.search_type in (SearchType.REVERSE_DEPENDENCIES, SearchType.ALL) and targets:
            self._add_importers(aggregator, targets)

        report.matches = aggregator.results()
        report.truncated = report.truncated or aggregator.truncated
        if query.wants_analysis:
            report.analyses = self.analyze(report.matches)

        logger.info(
            "Search %r (%s): %d files scanned, %d skipped, %d matches kept in %.0f ms",
            query.symbol, query.search_type.value, report.files_scanned,
            report.files_skipped, len(report.matches), (time.perf_counter() - started) * 1000,
        )
        return report

    def _scan(self, aggregator: ResultAggregator, report: SearchReport) -> dict[Path, float]:
        """
        Match every line of every file; returns the files that define or
        export the symbol with their best confidence.
        """
        query = self.query
        # every exact hit scores 1.0 and files are visited in ranked order,
        # so a full aggregator cannot be displaced by later files
        can_stop_early = not query.fuzzy_match and query.search_type not in (
            SearchType.ALL, SearchType.REVERSE_DEPENDENCIES)

        definition_matcher = None
        if query.search_type is SearchType.REVERSE_DEPENDENCIES:
            definition_matcher = PatternMatcher(
                query.symbol, SearchType.DEFINITION, query.fuzzy_match, query.include_comments)

        targets: dict[Path, float] = {}
        for path in self._files:
            lines = read_lines(path, settings.MAX_SYMBOL_FILE_SIZE)
            if lines is None:
                report.files_skipped += 1
                continue
            report.files_scanned += 1

            rel = self.relative(path)
            for number, line in enumerate(lines, start=1):
                hits = self.matcher.match_line(line, path)
                for category, confidence in hits:
                    aggregator.add(Match(rel, number, line, category, confidence))
                if definition_matcher is not None:
                    hits = hits + definition_matcher.match_line(line, path)
                for category, confidence in hits:
                    if category in _TARGET_CATEGORIES:
                        targets[path] = max(confidence, targets.get(path, 0.0))

            if can_stop_early and aggregator.is_full():
                logger.debug("Result cap %d reached after %s, stopping scan", query.max_results, rel)
                report.truncated = path != self._files[-1]
                break
        return targets

    def _add_importers(self, aggregator: ResultAggregator, targets: dict[Path, float]):
        """Import lines of files that depend on the symbol's home files"""
        ranked = sorted(targets.items(), key=lambda item: (-item[1], self.relative(item[0])))
        for target, confidence in ranked[:settings.REPORT_FILE_LIMIT]:
            for dep in self.graph.reverse_dependencies(target, self.base_path, self._files):
                aggregator.add(Match(
                    self.relative(dep.file), dep.line, dep.content,
                    SearchType.REVERSE_DEPENDENCIES, confidence,
                ))

    def analyze(self, matches: list[Match]) -> list[FileAnalysis]:
        """Dependency sections for the first few distinct matched files"""
        query = self.query
        files = []
        for match in matches:
            if match.file not in files:
                files.append(match.file)
            if len(files) >= settings.REPORT_FILE_LIMIT:
                break

        analyses = []
        for rel in files:
            path = os.path.normpath(os.path.join(self.cwd, rel))
            content = read_text(path, settings.MAX_SYMBOL_FILE_SIZE)
            if content is None:
                continue

            analysis = FileAnalysis(file=rel, path=path)
            if query.analyze_imports:
                analysis.imports = [
                    dataclasses.replace(
                        record,
                        resolved_path=self.relative(record.resolved_path) if record.resolved_path else None,
                        member_paths=[self.relative(p) for p in record.member_paths],
                    )
                    for record in extract_imports(content, path, self.resolver)
                ]
                analysis.exports = extract_exports(content, path)
            if query.include_dependencies:
                analysis.dependencies = [
                    self.relative(dep) for dep in self.graph.deep_dependencies(path, query.depth_level)
                ]
            if query.include_reverse_dependencies:
                analysis.reverse_dependencies = [
                    dataclasses.replace(dep, file=self.relative(dep.file))
                    for dep in self.graph.reverse_dependencies(path, self.base_path, self._files)
                ]
            analyses.append(analysis)
        return analyses


def search(query: SearchQuery, cwd: Optional[str] = None) -> SearchReport:
    """Run one search and return its structured report."""
    return SearchEngine(query, cwd).run()
