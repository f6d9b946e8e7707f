"""
Import Resolver - Resolves import source strings to files on disk.

This module provides functionality to:
1. Resolve relative and absolute sources against the importing file
2. Search dependency-install directories in ancestor folders
3. Apply path mappings from tsconfig.json / jsconfig.json
4. Apply conventional aliases (@/, ~/ ...) against the project root

Strategies run in that order; the first one that finds an existing file
wins. A source that no strategy resolves is simply unresolved.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from . import settings
from .languages import PYTHON, RUST, family_for

logger = logging.getLogger(__name__)

_TRAILING_COMMA = re.compile(r",(\s*[}\]])")


def strip_json_comments(text: str) -> str:
    """
    Remove // and /* */ comments from JSON text, leaving string literals
    intact ("@/*" is a path pattern, not a comment).
    """
    out = []
    i = 0
    n = len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1
    return _TRAILING_COMMA.sub(r"\1", "".join(out))


def find_project_root(start) -> Optional[Path]:
    """Nearest ancestor of start (inclusive) holding a project marker file."""
    current = Path(start).resolve()
    if current.is_file():
        current = current.parent
    for directory in [current, *current.parents]:
        for marker in settings.PROJECT_MARKERS:
            if (directory / marker).exists():
                return directory
    return None


@dataclass
class PathMapping:
    """paths / baseUrl from one tsconfig.json or jsconfig.json"""
    config_file: str
    base_dir: str
    paths: dict[str, list[str]] = field(default_factory=dict)
    has_base_url: bool = False

    def substitutions(self, source: str) -> list[str]:
        """Candidate paths for source, most specific pattern first."""
        candidates = []
        patterns = sorted(self.paths, key=lambda p: (-len(p.split("*")[0]), p))
        for pattern in patterns:
            targets = self.paths[pattern]
            if "*" in pattern:
                prefix, _, suffix = pattern.partition("*")
                if not (source.startswith(prefix) and source.endswith(suffix)):
                    continue
                if len(source) < len(prefix) + len(suffix):
                    continue
                captured = source[len(prefix):len(source) - len(suffix)]
                for target in targets:
                    candidates.append(os.path.join(self.base_dir, target.replace("*", captured, 1)))
            elif pattern == source:
                for target in targets:
                    candidates.append(os.path.join(self.base_dir, target))
        if self.has_base_url:
            candidates.append(os.path.join(self.base_dir, source))
        return candidates


class PathResolver:
    """
    Resolve import sources to concrete files.

    Example:
        resolver = PathResolver()
        resolver.resolve("./user", "/repo/src/app.ts")
        # -> "/repo/src/user.ts"

    One resolver serves one request; parsed configuration files are kept
    for the lifetime of the instance only.
    """

    def __init__(self):
        self._mappings: dict[str, Optional[PathMapping]] = {}
        self._roots: dict[str, Optional[Path]] = {}

    def resolve(self, source: str, from_file) -> Optional[str]:
        """
        Resolve source as imported by from_file.

        Returns an absolute normalized path, or None when unresolved.
        """
        if not source:
            return None
        from_file = os.path.abspath(str(from_file))
        from_dir = os.path.dirname(from_file)
        family = family_for(from_file)
        source = self._normalize_source(source, family)

        for strategy in (
            self._resolve_relative,
            self._resolve_packages,
            self._resolve_path_mapping,
            self._resolve_convention_alias,
        ):
            resolved = strategy(source, from_dir, family)
            if resolved:
                logger.debug("Resolved %s from %s via %s", source, from_file, strategy.__name__)
                return os.path.normpath(resolved)
        return None

    def resolve_members(self, source: str, members: list[str], from_file) -> list[str]:
        """
        Modules among the names of a Python "from source import ..." line.

        Names that are not modules of the package (functions, classes,
        constants) are left out; so is everything when source is a module
        rather than a package directory.
        """
        from_dir = os.path.dirname(os.path.abspath(str(from_file)))
        package_dir = self._package_dir(source, from_dir)
        if package_dir is None:
            return []

        found = []
        for name in members:
            if not name.isidentifier():
                continue
            module = self._probe_module(os.path.join(package_dir, name))
            if module:
                module = os.path.normpath(module)
                if module not in found:
                    found.append(module)
        return found

    def _package_dir(self, source: str, from_dir: str) -> Optional[str]:
        """Directory of a Python package source; namespace packages included"""
        path = _python_source_to_path(source)
        if _is_relative(path):
            candidates = [os.path.join(from_dir, path)]
        else:
            current = Path(from_dir)
            candidates = [str(directory / path) for directory in [current, *current.parents]]
        for candidate in candidates:
            if os.path.isdir(candidate):
                return os.path.normpath(candidate)
        return None

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _resolve_relative(self, source: str, from_dir: str, family: Optional[str]) -> Optional[str]:
        if os.path.isabs(source):
            return self.probe(source)
        if source in (".", "..") or source.startswith(("./", "../")):
            return self.probe(os.path.join(from_dir, source))
        return None

    def _resolve_packages(self, source: str, from_dir: str, family: Optional[str]) -> Optional[str]:
        if _is_relative(source):
            return None
        current = Path(from_dir)
        for directory in [current, *current.parents]:
            resolved = self.probe(str(directory / settings.DEPENDENCY_DIR / source))
            if resolved:
                return resolved
            # absolute Python imports live under an ancestor package root
            if family == PYTHON:
                resolved = self._probe_module(str(directory / source))
                if resolved:
                    return resolved
        return None

    def _resolve_path_mapping(self, source: str, from_dir: str, family: Optional[str]) -> Optional[str]:
        if _is_relative(source):
            return None
        mapping = self.find_path_mapping(from_dir)
        if mapping is None:
            return None
        for candidate in mapping.substitutions(source):
            resolved = self.probe(candidate)
            if resolved:
                return resolved
        return None

    def _resolve_convention_alias(self, source: str, from_dir: str, family: Optional[str]) -> Optional[str]:
        if _is_relative(source):
            return None
        root = self.project_root(from_dir)
        if root is None:
            return None
        aliases = sorted(settings.CONVENTION_ALIASES.items(), key=lambda item: -len(item[0]))
        for alias, target in aliases:
            if source.startswith(alias):
                resolved = self.probe(str(root / target / source[len(alias):]))
                if resolved:
                    return resolved
        return None

    # ------------------------------------------------------------------
    # Probing
    # ------------------------------------------------------------------

    def probe(self, base: str, _seen: Optional[set] = None) -> Optional[str]:
        """
        First existing file among: base, base + extension, base/index.*,
        base/package.json entry field.
        """
        if os.path.isfile(base):
            return base
        for ext in settings.RESOLVE_EXTENSIONS:
            if os.path.isfile(base + ext):
                return base + ext
        if not os.path.isdir(base):
            return None

        for index_file in settings.INDEX_FILES:
            candidate = os.path.join(base, index_file)
            if os.path.isfile(candidate):
                return candidate

        seen = _seen if _seen is not None else set()
        key = os.path.normpath(base)
        if key in seen:
            return None
        seen.add(key)
        for entry in self._manifest_entries(base):
            resolved = self.probe(os.path.normpath(os.path.join(base, entry)), seen)
            if resolved:
                return resolved
        return None

    def _probe_module(self, base: str) -> Optional[str]:
        """Probe without the package-directory fallback (modules only)."""
        if os.path.isfile(base):
            return base
        for ext in settings.RESOLVE_EXTENSIONS:
            if os.path.isfile(base + ext):
                return base + ext
        for index_file in ("__init__.py", "mod.rs"):
            candidate = os.path.join(base, index_file)
            if os.path.isfile(candidate):
                return candidate
        return None

    def _manifest_entries(self, directory: str) -> list[str]:
        manifest = os.path.join(directory, settings.MANIFEST_FILE)
        if not os.path.isfile(manifest):
            return []
        try:
            data = json.loads(Path(manifest).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("Ignoring unreadable manifest %s: %s", manifest, e)
            return []
        if not isinstance(data, dict):
            return []
        return [
            data[name] for name in settings.MANIFEST_ENTRY_FIELDS
            if isinstance(data.get(name), str) and data[name]
        ]

    # ------------------------------------------------------------------
    # Project context
    # ------------------------------------------------------------------

    def project_root(self, start: str) -> Optional[Path]:
        if start not in self._roots:
            self._roots[start] = find_project_root(start)
        return self._roots[start]

    def find_path_mapping(self, start: str) -> Optional[PathMapping]:
        """
        Path mapping from the nearest tsconfig.json / jsconfig.json that
        declares paths or baseUrl. Configs without either (one that only
        extends a parent, say) and malformed ones are passed over.
        """
        current = Path(start)
        for directory in [current, *current.parents]:
            for name in settings.PATH_MAPPING_FILES:
                config_file = directory / name
                if not config_file.is_file():
                    continue
                mapping = self._load_mapping(str(config_file))
                if mapping is not None:
                    return mapping
        return None

    def _load_mapping(self, config_file: str) -> Optional[PathMapping]:
        if config_file in self._mappings:
            return self._mappings[config_file]

        mapping = None
        try:
            raw = Path(config_file).read_text(encoding="utf-8")
            data = json.loads(strip_json_comments(raw))
            options = data.get("compilerOptions", {}) if isinstance(data, dict) else {}
            if not isinstance(options, dict):
                options = {}
            base_url = options.get("baseUrl")
            paths = options.get("paths") or {}
            if base_url is not None or paths:
                config_dir = os.path.dirname(config_file)
                mapping = PathMapping(
                    config_file=config_file,
                    base_dir=os.path.normpath(os.path.join(config_dir, base_url or ".")),
                    paths={
                        str(k): [str(t) for t in v] for k, v in paths.items()
                        if isinstance(v, list)
                    } if isinstance(paths, dict) else {},
                    has_base_url=base_url is not None,
                )
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, AttributeError) as e:
            logger.warning("Ignoring malformed path mapping in %s: %s", config_file, e)

        self._mappings[config_file] = mapping
        return mapping

    # ------------------------------------------------------------------
    # Language-specific source forms
    # ------------------------------------------------------------------

    def _normalize_source(self, source: str, family: Optional[str]) -> str:
        if family == PYTHON:
            return _python_source_to_path(source)
        if family == RUST and re.fullmatch(r"\w+", source):
            # mod name; -> sibling name.rs or name/mod.rs
            return f"./{source}"
        return source


def _is_relative(source: str) -> bool:
    return os.path.isabs(source) or source in (".", "..") or source.startswith(("./", "../"))


def _python_source_to_path(source: str) -> str:
    """
    'pkg.mod' -> 'pkg/mod', '.mod' -> './mod', '..pkg.mod' -> '../pkg/mod'
    """
    if "/" in source:
        return source
    dots = len(source) - len(source.lstrip("."))
    rest = source[dots:].replace(".", "/")
    if dots == 0:
        return rest
    prefix = "./" if dots == 1 else "../" * (dots - 1)
    return prefix + rest if rest else prefix.rstrip("/") or "."
