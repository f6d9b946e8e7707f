#!/usr/bin/env python3
"""
coderef MCP Server

Symbol search, dependency mapping and file search for a coding agent, over
line-delimited JSON-RPC on stdin/stdout.

Usage:
    coderef serve
    python -m coderef.mcp_server

Agent config (mcp_servers.json):
{
    "coderef": {
        "command": "coderef",
        "args": ["serve"],
        "cwd": "/path/to/project"
    }
}

Tools can be called through the MCP envelope (tools/call) or directly, with
the tool name as the JSON-RPC method:
    {"id": 1, "method": "code_reference_search", "params": {"symbol": "getUser"}}
"""

import json
import logging
import os
import sys
from typing import Any, Optional

from . import __version__
from .errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    CodeRefError,
)
from .tool_registry import TOOL_NAMES, execute_tool, get_tool_schemas

logger = logging.getLogger(__name__)

LOG_FORMAT = "[coderef] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None):
    """Log to stderr; stdout is reserved for protocol messages."""
    level = (level or os.environ.get("CODEREF_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT)


# MCP Protocol
def send_response(id: Any, result: Any):
    response = {"jsonrpc": "2.0", "id": id, "result": result}
    print(json.dumps(response, ensure_ascii=False), flush=True)


def send_error(id: Any, code: int, message: str, data: Any = None):
    error = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    response = {"jsonrpc": "2.0", "id": id, "error": error}
    print(json.dumps(response, ensure_ascii=False), flush=True)


def _call_tool(id: Any, name: str, arguments: Any, wrap: bool):
    """
    Run a tool and answer the request. wrap puts the markdown into an MCP
    content list; direct calls get the markdown string as the result.
    """
    if arguments is not None and not isinstance(arguments, dict):
        send_error(id, INVALID_PARAMS, "Invalid params: expected an object")
        return
    try:
        text = execute_tool(name, arguments)
    except CodeRefError as e:
        send_error(id, e.code, e.message, e.data)
        return
    except Exception as e:
        logger.warning("Tool %s failed: %s", name, e, exc_info=True)
        send_error(id, INTERNAL_ERROR, "Internal error", str(e))
        return

    if wrap:
        send_response(id, {"content": [{"type": "text", "text": text}]})
    else:
        send_response(id, text)


def handle_request(request: Any):
    """Handle one JSON-RPC message"""
    if not isinstance(request, dict):
        send_error(None, INVALID_REQUEST, "Invalid request: expected a JSON object")
        return

    method = request.get("method", "")
    id = request.get("id")
    params = request.get("params") or {}
    is_notification = "id" not in request

    if not isinstance(method, str) or not method:
        if not is_notification:
            send_error(id, INVALID_REQUEST, "Invalid request: missing method")
        return

    if method.startswith("notifications/"):
        return  # No response for notifications

    if is_notification:
        logger.debug("Ignoring notification %s", method)
        return

    if method == "initialize":
        send_response(id, {
            "protocolVersion": params.get("protocolVersion", "2024-11-05") if isinstance(params, dict) else "2024-11-05",
            "capabilities": {
                "tools": {"listChanged": False},
                "logging": {},
            },
            "serverInfo": {
                "name": "coderef",
                "title": "Code Reference Search",
                "version": __version__,
            },
            "instructions": (
                "Use code_reference_search to find where a symbol is defined, referenced or used "
                "and to map its dependencies. Use search_files and search_file_content for plain "
                "file name and text lookups."
            ),
        })

    elif method == "ping":
        send_response(id, {})

    elif method == "tools/list":
        send_response(id, {"tools": get_tool_schemas()})

    elif method == "tools/call":
        if not isinstance(params, dict):
            send_error(id, INVALID_PARAMS, "Invalid params: expected an object")
            return
        _call_tool(id, params.get("name", ""), params.get("arguments") or {}, wrap=True)

    elif method in TOOL_NAMES:
        _call_tool(id, method, params, wrap=False)

    elif method == "logging/setLevel":
        level = params.get("level", "") if isinstance(params, dict) else ""
        # MCP levels are syslog names; map the ones logging lacks
        name = {"notice": "INFO", "alert": "CRITICAL", "emergency": "CRITICAL"}.get(level, level).upper()
        if name not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            send_error(id, INVALID_PARAMS, f"Invalid log level: {level}")
            return
        logging.getLogger().setLevel(name)
        send_response(id, {})

    else:
        send_error(id, METHOD_NOT_FOUND, f"Unsupported method: {method}")


def main():
    """MCP Server main program"""
    configure_logging()
    logger.info("Starting MCP server (pid=%d, cwd=%s)", os.getpid(), os.getcwd())

    for line in sys.stdin:
        line = line.strip()
        if not line:
            continue
        logger.debug("Received: %s", line[:100])
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("JSON decode error: %s", e)
            send_error(None, PARSE_ERROR, "Parse error", str(e))
            continue
        handle_request(request)


if __name__ == "__main__":
    main()
