"""
Language families, keyed by file extension.

A family groups languages that share comment and import syntax closely
enough to be handled by the same rules.
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional


JAVASCRIPT = "javascript"
PYTHON = "python"
GO = "go"
RUST = "rust"
JAVA = "java"
C = "c"
RUBY = "ruby"
PHP = "php"
SHELL = "shell"
LUA = "lua"
SQL = "sql"
MARKUP = "markup"
CSS = "css"
YAML = "yaml"
TOML = "toml"

FAMILY_BY_EXTENSION = {
    ".js": JAVASCRIPT, ".jsx": JAVASCRIPT, ".mjs": JAVASCRIPT, ".cjs": JAVASCRIPT,
    ".ts": JAVASCRIPT, ".tsx": JAVASCRIPT, ".mts": JAVASCRIPT, ".cts": JAVASCRIPT,
    ".vue": JAVASCRIPT, ".svelte": JAVASCRIPT,
    ".py": PYTHON, ".pyi": PYTHON,
    ".go": GO,
    ".rs": RUST,
    ".java": JAVA, ".kt": JAVA, ".kts": JAVA, ".scala": JAVA, ".groovy": JAVA,
    ".c": C, ".h": C, ".cpp": C, ".cc": C, ".cxx": C, ".hpp": C,
    ".cs": C, ".swift": C, ".dart": C,
    ".rb": RUBY,
    ".php": PHP,
    ".sh": SHELL, ".bash": SHELL, ".zsh": SHELL,
    ".lua": LUA,
    ".sql": SQL,
    ".html": MARKUP, ".htm": MARKUP, ".xml": MARKUP, ".md": MARKUP,
    ".css": CSS, ".scss": CSS, ".less": CSS,
    ".yaml": YAML, ".yml": YAML,
    ".toml": TOML,
}


@dataclass(frozen=True)
class CommentSyntax:
    line: tuple[str, ...] = ()
    block: tuple[str, ...] = ()     # markers that open or continue a block comment


_C_STYLE = CommentSyntax(line=("//",), block=("/*", "*", "*/"))
_HASH = CommentSyntax(line=("#",))

COMMENT_SYNTAX = {
    JAVASCRIPT: CommentSyntax(line=("//",), block=("/*", "*", "*/", "<!--")),
    PYTHON: CommentSyntax(line=("#",), block=('"""', "'''")),
    GO: _C_STYLE,
    RUST: CommentSyntax(line=("//",), block=("/*", "*", "*/")),
    JAVA: _C_STYLE,
    C: _C_STYLE,
    RUBY: CommentSyntax(line=("#",), block=("=begin", "=end")),
    PHP: CommentSyntax(line=("//", "#"), block=("/*", "*", "*/")),
    SHELL: _HASH,
    LUA: CommentSyntax(line=("--",)),
    SQL: CommentSyntax(line=("--",), block=("/*", "*", "*/")),
    MARKUP: CommentSyntax(block=("<!--",)),
    CSS: CommentSyntax(line=("//",), block=("/*", "*", "*/")),
    YAML: _HASH,
    TOML: _HASH,
}

# Code fence names used when rendering snippets
FENCE_LANGUAGE = {
    ".js": "javascript", ".jsx": "javascript", ".mjs": "javascript", ".cjs": "javascript",
    ".ts": "typescript", ".tsx": "typescript",
    ".json": "json",
    ".py": "python",
    ".rb": "ruby",
    ".java": "java",
    ".go": "go",
    ".php": "php",
    ".cs": "csharp",
    ".cpp": "cpp",
    ".c": "c",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".less": "less",
    ".md": "markdown",
    ".sh": "shell", ".bash": "shell", ".zsh": "shell",
    ".yaml": "yaml", ".yml": "yaml",
    ".xml": "xml",
    ".toml": "toml",
    ".ini": "ini",
    ".sql": "sql",
    ".rs": "rust",
    ".kt": "kotlin",
    ".swift": "swift",
    ".dart": "dart",
    ".lua": "lua",
    ".pl": "perl",
    ".r": "r",
    ".ex": "elixir", ".exs": "elixir",
    ".vue": "vue",
}


def _suffix(path) -> str:
    return PurePath(str(path)).suffix.lower()


def family_for(path) -> Optional[str]:
    """Language family for a path, or None when the extension is unknown."""
    return FAMILY_BY_EXTENSION.get(_suffix(path))


def comment_syntax_for(path) -> Optional[CommentSyntax]:
    family = family_for(path)
    if family is None:
        return None
    return COMMENT_SYNTAX.get(family)


def fence_language(path) -> str:
    return FENCE_LANGUAGE.get(_suffix(path), "")


def is_source_file(path) -> bool:
    return family_for(path) is not None
