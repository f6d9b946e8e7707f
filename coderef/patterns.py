"""
Recognizer rules, per search category.

Each rule describes the *shape* of a construct (a declaration, a call, an
import line) with a regex template. The template holds a {name} slot where
the identifier sits; the matcher fills the slot either with the escaped
symbol (exact mode) or with each candidate token of the line (fuzzy mode).

The table is plain data: adding a language means adding rules here, the
matcher and the aggregation do not change.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .languages import C, GO, JAVA, JAVASCRIPT, PHP, PYTHON, RUBY, RUST
from .models import SearchType

NAME_SLOT = "{name}"

# Identifier characters, "$" included for JavaScript/PHP
IDENT_CHARS = r"[\w$]"
IDENT_PATTERN = re.compile(r"[A-Za-z_$][\w$]*")

# Statement heads that look like "type name(" but are not declarations
_NOT_A_TYPE = r"(?!(?:return|new|throw|await|else|yield|case|goto|delete|typeof|echo|print)\b)"


@dataclass(frozen=True)
class PatternRule:
    name: str
    template: str
    families: Optional[frozenset] = None    # None: every family
    flags: int = 0

    def applies_to(self, family: Optional[str]) -> bool:
        return self.families is None or family in self.families

    def compile(self, identifier: str) -> re.Pattern:
        """Compile the rule with identifier (taken literally) in the name slot."""
        slot = rf"(?<!{IDENT_CHARS})(?P<name>{re.escape(identifier)})(?!{IDENT_CHARS})"
        return re.compile(self.template.replace(NAME_SLOT, slot), self.flags)


def _families(*names) -> frozenset:
    return frozenset(names)


DEFINITION_RULES = [
    PatternRule(
        "declaration-keyword",
        r"(?:^|[\s;{(])(?:export\s+)?(?:default\s+)?(?:async\s+)?"
        r"(?:function\*?|def|fn|func|class|interface|type|struct|enum|trait|"
        r"module|namespace|object|record|protocol|union|macro_rules!)\s+\*?\s*{name}",
    ),
    PatternRule(
        "go-method",
        r"\bfunc\s*\([^)]*\)\s*{name}\s*[(\[]",
        _families(GO),
    ),
    PatternRule(
        "variable-declaration",
        r"\b(?:const|let|var|val|static)\s+(?:mut\s+)?{name}\s*(?:[:=;,)]|$)",
    ),
    PatternRule(
        "short-variable-declaration",
        r"(?:^|[\s(,]){name}(?:\s*,\s*[\w$]+)*\s*:=",
        _families(GO),
    ),
    PatternRule(
        "function-expression",
        r"{name}\s*[:=]\s*(?:async\s+)?(?:function\b|\([^)]*\)\s*(?::\s*[^=]+)?=>|[\w$]+\s*=>)",
        _families(JAVASCRIPT),
    ),
    PatternRule(
        "method-shorthand",
        r"^\s*(?:(?:public|private|protected|static|async|readonly|override|get|set)\s+)*"
        r"\*?{name}\s*(?:<[^>]*>)?\s*\([^)]*\)\s*(?::\s*[^{]+)?\{",
        _families(JAVASCRIPT),
    ),
    PatternRule(
        "typed-declaration",
        r"^\s*(?:(?:public|private|protected|internal|static|final|abstract|virtual|override|"
        r"inline|extern|const|synchronized|async|unsafe)\s+)*"
        + _NOT_A_TYPE +
        r"[\w$.<>\[\],?*&:]+\s+[*&]?{name}\s*\([^;]*$",
        _families(C, JAVA),
    ),
    PatternRule(
        "module-assignment",
        r"^{name}\s*(?::\s*[^=]+)?=(?!=)",
        _families(PYTHON, RUBY),
    ),
    PatternRule(
        "php-function",
        r"\bfunction\s+&?{name}\s*\(",
        _families(PHP),
    ),
]

REFERENCE_RULES = [
    PatternRule(
        "call",
        r"(?<!function\s)(?<!def\s)(?<!fn\s)(?<!func\s)(?<!class\s){name}\s*(?:<[^<>()]*>)?\s*\(",
    ),
    PatternRule(
        "member-access",
        r"(?:\.|::|->)\s*{name}",
    ),
    PatternRule(
        "receiver",
        r"{name}\s*(?:\?\.|\.|::|->)\s*[A-Za-z_$]",
    ),
    PatternRule(
        "instantiation",
        r"\bnew\s+{name}",
    ),
    PatternRule(
        "jsx-element",
        r"</?{name}(?:[\s/>]|$)",
        _families(JAVASCRIPT),
    ),
    PatternRule(
        "type-annotation",
        r"(?:[:<|,]\s*|\bextends\s+|\bimplements\s+|->\s*){name}",
        _families(JAVASCRIPT, PYTHON, RUST, JAVA),
    ),
]

USAGE_RULES = [
    PatternRule("identifier", r"{name}"),
    PatternRule("string-literal", r"""(["'`])(?:(?!\1).)*?{name}"""),
]

DEPENDENCY_RULES = [
    PatternRule("es-import", r"^\s*import\b.*?{name}"),
    PatternRule("dynamic-import", r"\bimport\s*\(\s*['\"`][^'\"`]*?{name}"),
    PatternRule("require", r"\brequire\s*\(\s*['\"`][^'\"`]*?{name}"),
    PatternRule("from-import", r"^\s*from\s+\S+\s+import\b.*?{name}", _families(PYTHON)),
    PatternRule("from-module", r"^\s*from\s+\.*[\w.]*?{name}", _families(PYTHON)),
    PatternRule("use", r"^\s*(?:pub(?:\([^)]*\))?\s+)?use\s+[^;]*?{name}", _families(RUST, PHP)),
    PatternRule("mod", r"^\s*(?:pub\s+)?mod\s+{name}\s*;", _families(RUST)),
    PatternRule("include", r"^\s*#\s*(?:include|import)\s*[<\"][^>\"]*?{name}", _families(C)),
    PatternRule("using", r"^\s*using\s+(?:static\s+)?[\w.]*?{name}", _families(C)),
    PatternRule("ruby-require", r"^\s*(?:require|require_relative|load)\s*\(?\s*['\"][^'\"]*?{name}", _families(RUBY)),
    PatternRule("php-include", r"\b(?:require|include)(?:_once)?\s*\(?\s*['\"][^'\"]*?{name}", _families(PHP)),
]

REVERSE_DEPENDENCY_RULES = [
    PatternRule(
        "export-declaration",
        r"^\s*export\s+(?:default\s+)?(?:declare\s+)?(?:async\s+)?(?:abstract\s+)?"
        r"(?:function\*?|class|const|let|var|interface|type|enum|namespace)\s+{name}",
    ),
    PatternRule("export-default", r"^\s*export\s+default\s+{name}"),
    PatternRule("export-list", r"^\s*export\s+(?:type\s+)?\{[^}]*?{name}"),
    PatternRule("export-star", r"^\s*export\s*\*\s*(?:as\s+[\w$]+\s+)?from\s*['\"][^'\"]*?{name}"),
    PatternRule("commonjs-exports", r"\bmodule\.exports\s*=.*?{name}"),
    PatternRule("commonjs-property", r"\b(?:module\.)?exports\.{name}\s*="),
    PatternRule("dunder-all", r"^\s*__all__\s*(?:\+?=|:)[^#]*?['\"]{name}['\"]", _families(PYTHON)),
    PatternRule(
        "pub-item",
        r"^\s*pub(?:\([^)]*\))?\s+(?:async\s+)?(?:unsafe\s+)?"
        r"(?:fn|struct|enum|trait|const|static|type|mod|use\s+[^;]*?)\s*{name}",
        _families(RUST),
    ),
]

RULES = {
    SearchType.DEFINITION: DEFINITION_RULES,
    SearchType.REFERENCES: REFERENCE_RULES,
    SearchType.USAGE: USAGE_RULES,
    SearchType.DEPENDENCIES: DEPENDENCY_RULES,
    SearchType.REVERSE_DEPENDENCIES: REVERSE_DEPENDENCY_RULES,
}
