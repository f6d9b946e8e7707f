"""
Command-line interface for coderef.

Usage:
    coderef search <symbol> [--path P] [--type T] [--fuzzy] [--include-comments]
                            [--max-results N] [--deps] [--reverse-deps] [--imports]
                            [--depth N] [--json]
    coderef deps <file> [--depth N] [--reverse] [--path ROOT] [--json]
    coderef serve
"""

import argparse
import json
import os
import sys
from pathlib import Path

from . import settings
from .errors import CodeRefError
from .mcp_server import configure_logging
from .models import SearchType


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="coderef - Symbol search and dependency mapping"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # search
    search_parser = subparsers.add_parser("search", help="Find definitions, references and usages of a symbol")
    search_parser.add_argument("symbol", help="Symbol to search for")
    search_parser.add_argument("--path", default=".", help="Directory to search (default: current directory)")
    search_parser.add_argument("--type", default=SearchType.ALL.value,
                               choices=[t.value for t in SearchType], help="Search type (default: all)")
    search_parser.add_argument("--fuzzy", action="store_true", help="Approximate name matching")
    search_parser.add_argument("--include-comments", action="store_true", help="Also match comment-only lines")
    search_parser.add_argument("--max-results", type=int, default=settings.DEFAULT_MAX_RESULTS,
                               help=f"Max results (default: {settings.DEFAULT_MAX_RESULTS})")
    search_parser.add_argument("--deps", action="store_true", help="Show transitive dependencies of matched files")
    search_parser.add_argument("--reverse-deps", action="store_true", help="Show files importing matched files")
    search_parser.add_argument("--imports", action="store_true", help="Show imports and exports of matched files")
    search_parser.add_argument("--depth", type=int, default=settings.DEFAULT_DEPTH, help="Dependency depth (1-3)")
    search_parser.add_argument("--json", action="store_true", dest="as_json", help="Output as JSON")

    # deps
    deps_parser = subparsers.add_parser("deps", help="Show imports and dependencies of a file")
    deps_parser.add_argument("file", help="Source file")
    deps_parser.add_argument("--depth", type=int, default=settings.DEFAULT_DEPTH, help="Dependency depth (1-3)")
    deps_parser.add_argument("--reverse", action="store_true", help="Also list files importing this file")
    deps_parser.add_argument("--path", default=".", help="Root scanned for reverse dependencies (default: current directory)")
    deps_parser.add_argument("--json", action="store_true", dest="as_json", help="Output as JSON")

    # serve
    subparsers.add_parser("serve", help="Run the JSON-RPC server on stdin/stdout")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if args.command != "serve":
        configure_logging(os.environ.get("CODEREF_LOG_LEVEL") or "WARNING")

    try:
        if args.command == "search":
            result = cmd_search(args)
        elif args.command == "deps":
            result = cmd_deps(args)
        elif args.command == "serve":
            result = cmd_serve(args)
        else:
            parser.print_help()
            return

        if result is None:
            pass  # Command handled its own output
        elif isinstance(result, str):
            print(result)
        else:
            print(json.dumps(result, indent=2, ensure_ascii=False))

    except CodeRefError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


def cmd_search(args):
    from .engine import search
    from .models import SearchQuery
    from .report import render_report

    query = SearchQuery.from_params({
        "symbol": args.symbol,
        "searchType": args.type,
        "basePath": args.path,
        "includeComments": args.include_comments,
        "fuzzyMatch": args.fuzzy,
        "maxResults": args.max_results,
        "includeDependencies": args.deps,
        "includeReverseDependencies": args.reverse_deps,
        "analyzeImports": args.imports,
        "depthLevel": args.depth,
    })
    report = search(query)
    if args.as_json:
        return report.to_dict()
    return render_report(report)


def cmd_deps(args):
    """Resolved imports, transitive dependencies and (optionally) importers of one file."""
    from .extractor import extract_imports
    from .graph import DependencyGraphBuilder
    from .walker import read_text

    file_path = Path(args.file).resolve()
    if not file_path.is_file():
        print(f"File does not exist: {args.file}", file=sys.stderr)
        sys.exit(1)

    depth = max(1, min(settings.MAX_DEPTH, args.depth))
    graph = DependencyGraphBuilder()
    cwd = os.getcwd()

    def rel(path):
        return os.path.relpath(path, cwd) if path else None

    content = read_text(file_path) or ""
    result = {
        "file": rel(str(file_path)),
        "imports": [
            {"line": r.line, "source": r.source, "resolved": rel(r.resolved_path)}
            for r in extract_imports(content, file_path, graph.resolver)
        ],
        "dependencies": [rel(dep) for dep in graph.deep_dependencies(file_path, depth)],
    }
    if args.reverse:
        result["reverse_dependencies"] = [
            {"file": rel(dep.file), "line": dep.line, "content": dep.content, "strict": dep.strict}
            for dep in graph.reverse_dependencies(file_path, Path(args.path).resolve())
        ]

    if args.as_json:
        return result

    lines = [f"{result['file']}", "", "Imports:"]
    for record in result["imports"]:
        lines.append(f"  {record['line']:>5}: {record['source']} -> {record['resolved'] or 'unresolved'}")
    lines.append("")
    lines.append(f"Dependencies (depth {depth}):")
    lines.extend(f"  {dep}" for dep in result["dependencies"])
    if args.reverse:
        lines.append("")
        lines.append("Reverse dependencies:")
        for dep in result["reverse_dependencies"]:
            lines.append(f"  {dep['file']}:{dep['line']}: {dep['content']}")
    return "\n".join(lines)


def cmd_serve(args):
    from .mcp_server import main as serve

    serve()
    return None


if __name__ == "__main__":
    main()
