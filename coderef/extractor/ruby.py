"""
Ruby import extraction: require, require_relative, load.
"""

import re

from ..languages import RUBY
from ..models import ImportKind, ImportRecord
from .base import BaseExtractor, Found


class RubyExtractor(BaseExtractor):
    """
    Ruby extractor

    require_relative paths are made explicitly relative ("./x") so they
    resolve against the requiring file.
    """

    families = [RUBY]

    REQUIRE_PATTERN = re.compile(
        r'''^[ \t]*(?P<verb>require_relative|require|load)[ \t]*\(?[ \t]*['"](?P<source>[^'"\n]+)['"]''',
        re.MULTILINE
    )

    def _find_imports(self, content: str) -> Found:
        found = []
        for match in self.REQUIRE_PATTERN.finditer(content):
            source = match.group("source")
            if match.group("verb") == "require_relative" and not source.startswith("."):
                source = f"./{source}"
            found.append((match.start(), ImportRecord(
                kind=ImportKind.RUBY_REQUIRE,
                source=source,
                imported_names=[],
                line=self.line_at(content, match.start("source")),
            )))
        return found
