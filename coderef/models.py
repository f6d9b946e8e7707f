"""
Core data models for coderef.

Every entity here lives for a single request: it is built while a search
runs and thrown away once the report has been produced.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from . import settings
from .errors import InvalidParamsError


class SearchType(str, Enum):
    """What kind of occurrence a search is looking for"""
    DEFINITION = "definition"                       # where the symbol is declared
    REFERENCES = "references"                       # calls / member access
    USAGE = "usage"                                 # any occurrence, strings included
    DEPENDENCIES = "dependencies"                   # import / require / use lines
    REVERSE_DEPENDENCIES = "reverse-dependencies"   # export lines others import from
    ALL = "all"

    @classmethod
    def categories(cls) -> list["SearchType"]:
        """Concrete categories, in evaluation order (everything but ALL)."""
        return [t for t in cls if t is not cls.ALL]


class ImportKind(str, Enum):
    """Syntactic style of an import statement"""
    ES_IMPORT = "es-import"           # import x from 'y'
    ES_SIDE_EFFECT = "es-side-effect" # import 'y'
    DYNAMIC_IMPORT = "dynamic-import" # import('y')
    REQUIRE = "require"               # require('y')
    RE_EXPORT = "re-export"           # export ... from 'y'
    PYTHON_IMPORT = "python-import"   # import a.b
    PYTHON_FROM = "python-from"       # from a import b
    GO_IMPORT = "go-import"
    RUST_USE = "rust-use"
    RUST_MOD = "rust-mod"
    EXTERN_CRATE = "extern-crate"
    JAVA_IMPORT = "java-import"
    INCLUDE = "include"               # #include "x"
    MODULE_IMPORT = "module-import"   # Swift / Dart import
    USING = "using"                   # C# using X;
    RUBY_REQUIRE = "ruby-require"
    PHP_USE = "php-use"
    PHP_REQUIRE = "php-require"


class ExportKind(str, Enum):
    """Syntactic style of an export statement"""
    DEFAULT = "default"               # export default ...
    NAMED = "named"                   # export const x / export function x
    LIST = "list"                     # export { a, b }
    RE_EXPORT = "re-export"           # export { a } from 'y' / export * from 'y'
    COMMONJS = "commonjs"             # module.exports = / exports.x =
    DUNDER_ALL = "dunder-all"         # __all__ = [...]
    PUBLIC = "public"                 # pub fn / capitalised Go identifier


@dataclass
class SearchQuery:
    """
    Parameters of one code_reference_search request.

    Use from_params() to build it from raw request params: it validates the
    required fields and clamps the numeric ones into range.
    """
    symbol: str
    search_type: SearchType = SearchType.ALL
    base_path: str = "."
    include_comments: bool = False
    fuzzy_match: bool = False
    max_results: int = settings.DEFAULT_MAX_RESULTS
    include_dependencies: bool = False
    include_reverse_dependencies: bool = False
    analyze_imports: bool = False
    depth_level: int = settings.DEFAULT_DEPTH

    def __post_init__(self):
        if not isinstance(self.symbol, str) or not self.symbol.strip():
            raise InvalidParamsError("Missing required parameter: symbol")
        self.symbol = self.symbol.strip()
        self.search_type = SearchType(self.search_type)
        self.max_results = _clamp(self.max_results, 1, settings.MAX_RESULTS_LIMIT)
        self.depth_level = _clamp(self.depth_level, 1, settings.MAX_DEPTH)

    @property
    def wants_analysis(self) -> bool:
        return self.include_dependencies or self.include_reverse_dependencies or self.analyze_imports

    @classmethod
    def from_params(cls, params: Optional[dict]) -> "SearchQuery":
        """Build a query from request params (camelCase, as sent by the agent)."""
        if not isinstance(params, dict):
            raise InvalidParamsError("Missing required parameter: symbol")
        if params.get("symbol") is None:
            raise InvalidParamsError("Missing required parameter: symbol")

        search_type = params.get("searchType") or SearchType.ALL.value
        try:
            search_type = SearchType(search_type)
        except ValueError:
            valid = ", ".join(t.value for t in SearchType)
            raise InvalidParamsError(f"Invalid searchType '{search_type}'. Expected one of: {valid}")

        return cls(
            symbol=params["symbol"],
            search_type=search_type,
            base_path=params.get("basePath") or ".",
            include_comments=_bool_param(params, "includeComments"),
            fuzzy_match=_bool_param(params, "fuzzyMatch"),
            max_results=_int_param(params, "maxResults", settings.DEFAULT_MAX_RESULTS),
            include_dependencies=_bool_param(params, "includeDependencies"),
            include_reverse_dependencies=_bool_param(params, "includeReverseDependencies"),
            analyze_imports=_bool_param(params, "analyzeImports"),
            depth_level=_int_param(params, "depthLevel", settings.DEFAULT_DEPTH),
        )


@dataclass
class Match:
    """
    One matched line.

    file is relative to the directory the search was invoked from, so two
    identical requests produce identical, comparable results.
    """
    file: str
    line: int                 # 1-based
    content: str
    type: SearchType
    confidence: float         # 0 < c <= 1, exact hits are 1.0

    @property
    def key(self) -> tuple:
        return (self.file, self.line, self.type)

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "content": self.content,
            "type": self.type.value,
            "confidence": round(self.confidence, 4),
        }


@dataclass
class ImportRecord:
    kind: ImportKind
    source: str                                   # raw import string
    imported_names: list[str] = field(default_factory=list)
    line: int = 0
    resolved_path: Optional[str] = None           # set only when the file exists
    # Python "from pkg import a, b": the files of a and b when they are
    # modules of pkg
    member_paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "source": self.source,
            "imported_names": self.imported_names,
            "line": self.line,
            "resolved_path": self.resolved_path,
            "member_paths": self.member_paths,
        }


@dataclass
class ExportRecord:
    kind: ExportKind
    name: str
    is_default: bool = False
    line: int = 0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "is_default": self.is_default,
            "line": self.line,
        }


@dataclass(frozen=True)
class DependencyEdge:
    """from_file -> to_file, both absolute normalized paths"""
    from_file: str
    to_file: str

    def to_dict(self) -> dict:
        return {"from": self.from_file, "to": self.to_file}


@dataclass
class ReverseDependency:
    """A line in another file that imports the target"""
    file: str
    line: int
    content: str
    strict: bool = True       # True when the import resolved to the target

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "content": self.content,
            "strict": self.strict,
        }


@dataclass
class FileAnalysis:
    """Dependency section of the report for one matched file"""
    file: str                 # relative, as in Match.file
    path: str                 # absolute
    imports: list[ImportRecord] = field(default_factory=list)
    exports: list[ExportRecord] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    reverse_dependencies: list[ReverseDependency] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "imports": [i.to_dict() for i in self.imports],
            "exports": [e.to_dict() for e in self.exports],
            "dependencies": self.dependencies,
            "reverse_dependencies": [r.to_dict() for r in self.reverse_dependencies],
        }


@dataclass
class SearchReport:
    """Everything one search produced, before it is rendered"""
    query: SearchQuery
    matches: list[Match] = field(default_factory=list)
    analyses: list[FileAnalysis] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    truncated: bool = False
    base_path_found: bool = True

    def to_dict(self) -> dict:
        return {
            "symbol": self.query.symbol,
            "search_type": self.query.search_type.value,
            "fuzzy": self.query.fuzzy_match,
            "total": len(self.matches),
            "truncated": self.truncated,
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "matches": [m.to_dict() for m in self.matches],
            "analysis": [a.to_dict() for a in self.analyses],
        }


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def _int_param(params: dict, name: str, default: int) -> int:
    value = params.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidParamsError(f"Parameter {name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidParamsError(f"Parameter {name} must be an integer")


def _bool_param(params: dict, name: str) -> bool:
    value = params.get(name)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidParamsError(f"Parameter {name} must be a boolean")
    return value
