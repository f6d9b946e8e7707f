"""
Base class for import/export extractors.
"""

import re
from abc import ABC, abstractmethod

from ..comments import is_comment_line
from ..models import ExportRecord, ImportRecord

# (offset in content, record) pairs; offsets give the final ordering
Found = list[tuple[int, object]]

QUOTED = r"""['"`]([^'"`\n]+)['"`]"""


class BaseExtractor(ABC):
    """
    Extractor base class

    Subclasses must implement:
    - _find_imports(): (offset, ImportRecord) pairs found in content
    - _find_exports(): (offset, ExportRecord) pairs found in content
    - families: language families handled

    Comment-only lines are blanked before either runs, so subclasses never
    see them; line numbers are unaffected.
    """

    families: list[str] = []

    def extract_imports(self, content: str, path) -> list[ImportRecord]:
        """Import records of a file, in source order"""
        content = self.strip_comment_lines(content, path)
        return self._ordered(self._find_imports(content))

    def extract_exports(self, content: str, path) -> list[ExportRecord]:
        """Export records of a file, in source order"""
        content = self.strip_comment_lines(content, path)
        return self._ordered(self._find_exports(content))

    @abstractmethod
    def _find_imports(self, content: str) -> Found:
        pass

    def _find_exports(self, content: str) -> Found:
        return []

    @staticmethod
    def strip_comment_lines(content: str, path) -> str:
        lines = content.split("\n")
        return "\n".join("" if is_comment_line(line, path) else line for line in lines)

    @staticmethod
    def line_at(content: str, pos: int) -> int:
        """1-based line number of offset pos"""
        return content.count("\n", 0, pos) + 1

    @staticmethod
    def split_names(names_str: str) -> list[str]:
        """'a, b as c, type d' -> ['a', 'b', 'd'] (names as exported by the source)"""
        names = []
        for part in names_str.split(","):
            part = part.strip()
            if not part:
                continue
            part = re.sub(r"^type\s+", "", part)
            name = part.split(" as ")[0].strip()
            if name:
                names.append(name)
        return names

    @staticmethod
    def alias_names(names_str: str) -> list[str]:
        """'a, b as c' -> ['a', 'c'] (names as seen by the importer)"""
        names = []
        for part in names_str.split(","):
            part = part.strip()
            if not part:
                continue
            part = re.sub(r"^type\s+", "", part)
            name = part.split(" as ")[-1].strip()
            if name:
                names.append(name)
        return names

    @staticmethod
    def _ordered(found: Found) -> list:
        found.sort(key=lambda item: item[0])
        return [record for _, record in found]
