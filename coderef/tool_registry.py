"""
Tool Registry - Single source of truth for coderef tool names and dispatch.

Used by:
  - mcp_server.py: protocol dispatch (direct method calls and tools/call)
  - cli.py: the search sub-command

All tools return markdown text. Recoverable conditions (nothing found, path
not found) come back as ordinary text; only bad parameters raise.
"""

from typing import Any, Dict, Optional, Set

from . import settings
from .engine import search
from .errors import MethodNotFoundError
from .file_search import search_file_content, search_files
from .models import SearchQuery, SearchType
from .report import render_report

TOOL_NAMES: Set[str] = {
    "code_reference_search",
    "search_files",
    "search_file_content",
}


def get_tool_schemas() -> list:
    """
    Return tool definitions in MCP tools/list format.

    Descriptions include chain hints for the agent to use tools effectively.
    """
    return [
        {
            "name": "code_reference_search",
            "description": (
                "Find where a symbol is defined, referenced or used, and map import/export "
                "relationships including transitive and reverse dependencies. Results are ranked "
                "by confidence (1.0 = exact). Use fuzzyMatch for misspelled names. "
                "Chain with: search_file_content (raw text hits), search_files (find a file by name)."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "symbol": {"type": "string", "description": "Identifier to search for. Example: 'getUser'"},
                    "searchType": {
                        "type": "string",
                        "enum": [t.value for t in SearchType],
                        "description": "Kind of occurrence. Default: all",
                    },
                    "basePath": {"type": "string", "description": "Directory to search. Default: '.'"},
                    "includeComments": {"type": "boolean", "description": "Also match comment-only lines. Default: false"},
                    "fuzzyMatch": {"type": "boolean", "description": "Approximate name matching. Default: false"},
                    "maxResults": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": settings.MAX_RESULTS_LIMIT,
                        "description": f"Max results. Default: {settings.DEFAULT_MAX_RESULTS}",
                    },
                    "includeDependencies": {"type": "boolean", "description": "Transitive imports of matched files"},
                    "includeReverseDependencies": {"type": "boolean", "description": "Files importing matched files"},
                    "analyzeImports": {"type": "boolean", "description": "Imports and exports of matched files"},
                    "depthLevel": {
                        "type": "integer",
                        "minimum": 1,
                        "maximum": settings.MAX_DEPTH,
                        "description": f"Dependency depth. Default: {settings.DEFAULT_DEPTH}",
                    },
                },
                "required": ["symbol"],
            },
        },
        {
            "name": "search_files",
            "description": (
                "Find files whose name contains a string. "
                "Chain with: code_reference_search (symbols inside the file)."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Part of the file name. Example: 'user.ts'"},
                    "basePath": {"type": "string", "description": "Directory to search. Default: '.'"},
                },
                "required": ["query"],
            },
        },
        {
            "name": "search_file_content",
            "description": (
                "Find every line containing a keyword (case-sensitive) in text files up to 2 MB, "
                "grouped by file. Use when the text is not an identifier."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "keyword": {"type": "string", "description": "Literal text to find"},
                    "basePath": {"type": "string", "description": "Directory to search. Default: '.'"},
                },
                "required": ["keyword"],
            },
        },
    ]


def code_reference_search(params: Dict[str, Any], cwd: Optional[str] = None) -> str:
    """Run a symbol search and render it as markdown."""
    query = SearchQuery.from_params(params)
    return render_report(search(query, cwd))


def execute_tool(name: str, arguments: Optional[Dict[str, Any]], cwd: Optional[str] = None) -> str:
    """
    Execute a tool by canonical name. Returns the markdown result.

    Raises MethodNotFoundError for unknown tool names and
    InvalidParamsError for missing or malformed arguments.
    """
    _DISPATCH = {
        "code_reference_search": code_reference_search,
        "search_files": search_files,
        "search_file_content": search_file_content,
    }
    handler = _DISPATCH.get(name)
    if handler is None:
        raise MethodNotFoundError(f"Unknown tool: {name}")
    return handler(arguments or {}, cwd)
