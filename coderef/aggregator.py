"""
Result aggregation: dedupe, rank and cap matches.
"""

from .models import Match, SearchType

_CATEGORY_ORDER = {category: i for i, category in enumerate(SearchType.categories())}


def sort_key(match: Match) -> tuple:
    """confidence desc, then file, then line (category breaks the last ties)"""
    return (-match.confidence, match.file, match.line, _CATEGORY_ORDER.get(match.type, 0))


class ResultAggregator:
    """
    Collects matches from the scan loop.

    A (file, line, type) triple is kept once, with the highest confidence
    seen for it. results() returns at most max_results matches in ranked
    order.
    """

    def __init__(self, max_results: int):
        self.max_results = max_results
        self._matches: dict[tuple, Match] = {}

    def add(self, match: Match):
        existing = self._matches.get(match.key)
        if existing is None or match.confidence > existing.confidence:
            self._matches[match.key] = match

    def extend(self, matches):
        for match in matches:
            self.add(match)

    def __len__(self) -> int:
        return len(self._matches)

    def is_full(self) -> bool:
        """True once enough distinct matches are held to fill the cap"""
        return len(self._matches) >= self.max_results

    @property
    def truncated(self) -> bool:
        return len(self._matches) > self.max_results

    def results(self) -> list[Match]:
        ranked = sorted(self._matches.values(), key=sort_key)
        return ranked[:self.max_results]


def aggregate(matches, max_results: int) -> list[Match]:
    """Dedupe, sort and truncate in one call."""
    aggregator = ResultAggregator(max_results)
    aggregator.extend(matches)
    return aggregator.results()
