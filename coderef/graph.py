"""
Dependency Graph - Transitive and reverse file dependencies.

The import graph is rebuilt from disk on every call: files are read, their
imports extracted and resolved, and nothing is kept once the request ends.
The graph may contain cycles; traversal threads a visited set so that it
always terminates.
"""

import logging
import os
import re
from collections import deque
from pathlib import Path
from typing import Iterable, Iterator, Optional

from . import settings
from .extractor import extract_imports
from .models import DependencyEdge, ImportKind, ReverseDependency
from .resolver import PathResolver
from .walker import read_text, walk_files

logger = logging.getLogger(__name__)

# file stems that stand for their directory
_INDEX_STEMS = {"index", "__init__", "mod", "main"}

_SOURCE_SEGMENTS = re.compile(r"[/\\.:]+")


def _normalize(path) -> str:
    return os.path.normpath(os.path.abspath(str(path)))


def target_names(target: str) -> set[str]:
    """
    Names an import source may use for target: its stem, and its
    directory name when the file is a directory index.
    """
    path = Path(target)
    stem = path.name.split(".")[0]
    names = {stem}
    if stem in _INDEX_STEMS and path.parent.name:
        names.add(path.parent.name)
    return names


def names_target(source: str, names: set[str]) -> bool:
    """True if one of the path segments of source is one of names"""
    last = source.rsplit("/", 1)[-1]
    for ext in settings.RESOLVE_EXTENSIONS:
        if last.endswith(ext):
            source = source[:-len(ext)]
            break
    return any(segment in names for segment in _SOURCE_SEGMENTS.split(source) if segment)


class DependencyGraphBuilder:
    """
    Computes dependencies of files on demand.

    Example:
        graph = DependencyGraphBuilder()
        graph.deep_dependencies("/repo/src/app.ts", depth=2)
        graph.reverse_dependencies("/repo/src/user.ts", "/repo")
    """

    def __init__(self, resolver: Optional[PathResolver] = None,
                 max_size: Optional[int] = settings.MAX_SYMBOL_FILE_SIZE):
        self.resolver = resolver or PathResolver()
        self.max_size = max_size

    def direct_dependencies(self, file) -> list[str]:
        """Resolved imports of file, first occurrence order, no duplicates"""
        file = _normalize(file)
        content = read_text(file, self.max_size)
        if content is None:
            return []

        deps = []
        for record in extract_imports(content, file, self.resolver):
            for target in [record.resolved_path, *record.member_paths]:
                if target and target != file and target not in deps:
                    deps.append(target)
        return deps

    def traverse(self, file, depth: int, visited: Optional[set] = None) -> Iterator[DependencyEdge]:
        """
        Yield an edge for every newly reached file, up to depth hops away.

        The walk is breadth-first over an explicit queue, so every file is
        first reached by its shortest import path and expanded with the
        most remaining depth. Each reached file is added to visited at once;
        no file is reported or expanded twice.
        """
        visited = visited if visited is not None else set()
        start = _normalize(file)
        visited.add(start)

        queue = deque([(start, depth)])
        while queue:
            current, remaining = queue.popleft()
            if remaining <= 0:
                continue
            for dep in self.direct_dependencies(current):
                if dep in visited:
                    continue
                visited.add(dep)
                yield DependencyEdge(current, dep)
                queue.append((dep, remaining - 1))

    def deep_dependencies(self, file, depth: int = settings.DEFAULT_DEPTH,
                          visited: Optional[set] = None) -> list[str]:
        """Files reachable from file within depth import hops, file excluded"""
        return [edge.to_file for edge in self.traverse(file, depth, visited)]

    def reverse_dependencies(self, target, root,
                             candidates: Optional[Iterable] = None) -> list[ReverseDependency]:
        """
        Import lines in other files that point at target.

        A line is strict evidence when its source resolves to target (or,
        for Python "from pkg import mod", when mod is target), and loose
        evidence when one of its path segments names target. Files
        with strict evidence report only their strict lines. Re-exports
        (export ... from) count as imports.
        """
        target = _normalize(target)
        names = target_names(target)
        if candidates is None:
            candidates = walk_files(root, max_size=None)

        found = []
        for candidate in candidates:
            path = _normalize(candidate)
            if path == target:
                continue
            content = read_text(path, self.max_size)
            if content is None:
                continue
            found.extend(self._evidence(path, content, target, names))

        found.sort(key=lambda dep: (dep.file, dep.line))
        return found

    def _evidence(self, path: str, content: str, target: str, names: set[str]) -> list[ReverseDependency]:
        strict = []
        loose = []
        lines = None
        for record in extract_imports(content, path):
            members = record.imported_names if record.kind is ImportKind.PYTHON_FROM else []
            mentioned = names_target(record.source, names) or any(m in names for m in members)
            if not mentioned and not _is_path_like(record.source):
                continue
            resolved = self.resolver.resolve(record.source, path)
            if resolved == target:
                bucket = strict
            elif members and target in self.resolver.resolve_members(record.source, members, path):
                bucket = strict
            elif resolved is None and mentioned:
                bucket = loose
            else:
                continue
            if lines is None:
                lines = content.split("\n")
            text = lines[record.line - 1].strip() if 0 < record.line <= len(lines) else record.source
            bucket.append(ReverseDependency(path, record.line, text, strict=bucket is strict))

        result = strict or loose
        # one entry per line
        seen = set()
        unique = []
        for dep in result:
            if dep.line not in seen:
                seen.add(dep.line)
                unique.append(dep)
        return unique


def _is_path_like(source: str) -> bool:
    return source.startswith((".", "/"))
