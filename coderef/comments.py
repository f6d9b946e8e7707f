"""
Comment-only line detection.

Heuristic: only a line that *starts* with a comment marker counts. A line
with code followed by a trailing comment is code.
"""

from .languages import comment_syntax_for


def is_comment_line(line: str, path) -> bool:
    """
    True if line is comment-only for the language of path.

    Files with no known comment convention never have comment lines.
    """
    syntax = comment_syntax_for(path)
    if syntax is None:
        return False

    stripped = line.strip()
    if not stripped:
        return False

    for marker in syntax.line:
        if stripped.startswith(marker):
            return True

    for marker in syntax.block:
        if stripped.startswith(marker):
            # a bare "*" continues a block only before whitespace, "/" or EOL
            if marker == "*" and len(stripped) > 1 and stripped[1] not in " \t/":
                continue
            return True

    return False


class CommentFilter:
    """Skips comment-only lines unless comments are wanted."""

    def __init__(self, include_comments: bool = False):
        self.include_comments = include_comments

    def should_skip(self, line: str, path) -> bool:
        if self.include_comments:
            return False
        return is_comment_line(line, path)
