"""
Request-level errors.

Only problems with the shape of a request are raised as exceptions. Things
the calling agent should read and react to (symbol not found, path not
found) are returned as ordinary report text instead.
"""

# JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class CodeRefError(Exception):
    """Base class for errors that map onto a protocol error code"""
    code = INTERNAL_ERROR

    def __init__(self, message: str, data=None):
        super().__init__(message)
        self.message = message
        self.data = data


class InvalidParamsError(CodeRefError):
    code = INVALID_PARAMS


class MethodNotFoundError(CodeRefError):
    code = METHOD_NOT_FOUND
