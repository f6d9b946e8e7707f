"""
Line matcher: applies the rule table to one source line.

Exact mode fills every rule's name slot with the symbol itself and awards
1.0 on any hit. Fuzzy mode tries each identifier of the line as the slot
value, scores it against the symbol and keeps, per category, only the best
scoring hit.
"""

from functools import lru_cache, reduce
from typing import Callable, Iterable, Optional

from . import fuzzy, settings
from .comments import CommentFilter
from .languages import family_for
from .models import SearchType
from .patterns import IDENT_PATTERN, RULES, PatternRule

Hit = tuple[SearchType, float]


@lru_cache(maxsize=4096)
def _compiled(rule: PatternRule, identifier: str):
    return rule.compile(identifier)


def best_match(hits: Iterable[Hit]) -> Optional[Hit]:
    """Fold hits of one category down to the highest-confidence one."""
    def keep_better(best, hit):
        if best is None or hit[1] > best[1]:
            return hit
        return best
    return reduce(keep_better, hits, None)


class PatternMatcher:
    """
    Matches lines against one symbol for one search type.

    Build one per request; compiled patterns are reused for every line.
    """

    def __init__(
        self,
        symbol: str,
        search_type: SearchType = SearchType.ALL,
        fuzzy_match: bool = False,
        include_comments: bool = False,
        rules: Optional[dict] = None,
        scorer: Callable[[str, str], float] = fuzzy.score,
    ):
        self.symbol = symbol
        self.fuzzy_match = fuzzy_match
        self.rules = rules if rules is not None else RULES
        self.scorer = scorer
        self.comment_filter = CommentFilter(include_comments)

        search_type = SearchType(search_type)
        if search_type is SearchType.ALL:
            self.categories = SearchType.categories()
        else:
            self.categories = [search_type]

    def match_line(self, line: str, path) -> list[Hit]:
        """
        All (category, confidence) hits for line, at most one per category.

        path only selects the language family; the file is not read.
        """
        if self.comment_filter.should_skip(line, path):
            return []

        family = family_for(path)
        if self.fuzzy_match:
            return self._match_fuzzy(line, family)
        return self._match_exact(line, family)

    def _match_exact(self, line: str, family: Optional[str]) -> list[Hit]:
        if self.symbol not in line:
            return []

        hits = []
        for category in self.categories:
            for rule in self.rules.get(category, []):
                if rule.applies_to(family) and _compiled(rule, self.symbol).search(line):
                    hits.append((category, settings.EXACT_CONFIDENCE))
                    break
        return hits

    def _match_fuzzy(self, line: str, family: Optional[str]) -> list[Hit]:
        candidates = self._score_candidates(line)
        if not candidates:
            return []

        hits = []
        for category in self.categories:
            rules = [r for r in self.rules.get(category, []) if r.applies_to(family)]
            best = best_match(
                (category, confidence)
                for token, confidence in candidates
                for rule in rules
                if _compiled(rule, token).search(line)
            )
            if best is not None:
                hits.append(best)
        return hits

    def _score_candidates(self, line: str) -> list[tuple[str, float]]:
        """Identifier tokens of line that score above zero, best first."""
        scored = {}
        for token in IDENT_PATTERN.findall(line):
            if token in scored:
                continue
            scored[token] = self.scorer(token, self.symbol)
        candidates = [(t, c) for t, c in scored.items() if c > 0]
        candidates.sort(key=lambda item: (-item[1], item[0]))
        return candidates
