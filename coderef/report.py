"""
Markdown rendering of search results for the calling agent.
"""

from itertools import groupby

from . import settings
from .models import FileAnalysis, SearchReport


def clip(text: str, limit: int = settings.MAX_CONTENT_LENGTH) -> str:
    text = text.strip()
    if len(text) > limit:
        return text[:limit - 3] + "..."
    return text


def render_report(report: SearchReport) -> str:
    """Render a SearchReport as the markdown returned by the tool."""
    query = report.query
    if not report.base_path_found:
        return f"Path not found: `{query.base_path}`. Check basePath and try again."

    heading = f"# Code references for `{query.symbol}` ({query.search_type.value})"
    if not report.matches:
        lines = [
            heading,
            "",
            f"No results found for `{query.symbol}` in `{query.base_path}` "
            f"({report.files_scanned} files scanned).",
        ]
        if not query.fuzzy_match:
            lines.append("Try fuzzyMatch: true for approximate matches, or searchType: all.")
        return "\n".join(lines)

    file_count = len({m.file for m in report.matches})
    lines = [
        heading,
        "",
        f"Found {len(report.matches)} matches in {file_count} files "
        f"(fuzzy: {'on' if query.fuzzy_match else 'off'}, "
        f"truncated: {'yes' if report.truncated else 'no'}).",
    ]

    # matches are ranked, so group in first-appearance order of each file
    order = list(dict.fromkeys(m.file for m in report.matches))
    by_file = sorted(report.matches, key=lambda m: order.index(m.file))
    for file, matches in groupby(by_file, key=lambda m: m.file):
        lines.append("")
        lines.append(f"### {file}")
        for match in matches:
            lines.append(
                f"- **{match.type.value}** (line {match.line}, confidence {match.confidence:.2f}): "
                f"`{clip(match.content)}`"
            )

    if report.analyses:
        lines.append("")
        lines.append("## Dependency analysis")
        for analysis in report.analyses:
            lines.extend(_render_analysis(analysis, report))

    return "\n".join(lines)


def _render_analysis(analysis: FileAnalysis, report: SearchReport) -> list[str]:
    query = report.query
    lines = ["", f"### {analysis.file}"]

    if query.analyze_imports:
        lines.append("")
        lines.append("**Imports:**")
        if not analysis.imports:
            lines.append("- (none)")
        for record in analysis.imports:
            targets = [p for p in [record.resolved_path, *record.member_paths] if p]
            target = ", ".join(targets) or "unresolved"
            names = f" [{', '.join(record.imported_names)}]" if record.imported_names else ""
            lines.append(f"- line {record.line}: `{record.source}`{names} -> {target}")

        lines.append("")
        lines.append("**Exports:**")
        if not analysis.exports:
            lines.append("- (none)")
        for record in analysis.exports:
            default = " (default)" if record.is_default else ""
            lines.append(f"- line {record.line}: `{record.name}` {record.kind.value}{default}")

    if query.include_dependencies:
        lines.append("")
        lines.append(f"**Dependencies (depth {query.depth_level}):**")
        if not analysis.dependencies:
            lines.append("- (none)")
        lines.extend(f"- {dep}" for dep in analysis.dependencies)

    if query.include_reverse_dependencies:
        lines.append("")
        lines.append("**Reverse dependencies:**")
        if not analysis.reverse_dependencies:
            lines.append("- (none)")
        for dep in analysis.reverse_dependencies:
            marker = "" if dep.strict else " (by name)"
            lines.append(f"- {dep.file}:{dep.line}{marker}: `{clip(dep.content)}`")

    return lines
