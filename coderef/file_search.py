"""
File name and file content search.

Both searches report "nothing found" and "path not found" as readable
text rather than errors, so the agent can adjust and retry.
"""

import os
from pathlib import Path
from typing import Optional

from . import settings
from .errors import InvalidParamsError
from .languages import fence_language
from .walker import read_lines, walk_files


def _any_file(path: Path) -> bool:
    return True


def _text_file(path: Path) -> bool:
    return path.suffix.lower() not in settings.BINARY_EXTENSIONS


def _required(params: Optional[dict], name: str) -> str:
    value = (params or {}).get(name)
    if not isinstance(value, str) or value == "":
        raise InvalidParamsError(f"Missing required parameter: {name}")
    return value


def _start_path(params: dict, cwd: Optional[str]) -> tuple[str, Path]:
    base = params.get("basePath") or "."
    return base, Path(cwd or os.getcwd(), base).resolve()


def path_not_found(base: str) -> str:
    return (
        f"**Path not found**\n\nThe path \"{base}\" does not exist.\n\n"
        "Check the path spelling, or use a path relative to the working directory."
    )


def search_files(params: dict, cwd: Optional[str] = None) -> str:
    """Files whose name contains params["query"]."""
    query = _required(params, "query")
    base, start = _start_path(params, cwd)
    if not start.exists():
        return path_not_found(base)

    root = os.path.abspath(cwd or os.getcwd())
    found = [
        os.path.relpath(str(path), root)
        for path in walk_files(start, file_filter=_any_file, max_size=None)
        if query in path.name
    ]
    if not found:
        return (
            f"**No files found for \"{query}\"**\n\n"
            "No file name contains the query. Try a broader query or another basePath."
        )

    lines = [f"**File search results for \"{query}\"**", "", f"Found {len(found)} files:", ""]
    lines.extend(f"- `{path}`" for path in sorted(found))
    return "\n".join(lines)


def search_file_content(params: dict, cwd: Optional[str] = None) -> str:
    """Lines containing params["keyword"] (case-sensitive), grouped by file."""
    keyword = _required(params, "keyword")
    base, start = _start_path(params, cwd)
    if not start.exists():
        return path_not_found(base)

    root = os.path.abspath(cwd or os.getcwd())
    results: dict[str, list[tuple[int, str]]] = {}
    for path in walk_files(start, file_filter=_text_file, max_size=None):
        lines = read_lines(path, settings.MAX_TEXT_FILE_SIZE)
        if lines is None:
            continue
        hits = [(i, line.strip()) for i, line in enumerate(lines, start=1) if keyword in line]
        if hits:
            results[os.path.relpath(str(path), root)] = hits

    if not results:
        return (
            f"**No content matches for \"{keyword}\"**\n\n"
            "No searched file contains the keyword. Binary files and files over "
            f"{settings.MAX_TEXT_FILE_SIZE // (1024 * 1024)} MB are not searched."
        )

    out = [f"**Content search results for \"{keyword}\"**", "", f"Found keyword in {len(results)} files:"]
    for file in sorted(results):
        block = "\n".join(f"{number}: {text}" for number, text in results[file])
        out.append("")
        out.append(f"**File:** `{file}`")
        out.append(f"```{fence_language(file)}\n{block}\n```")
    return "\n".join(out)
