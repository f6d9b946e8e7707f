"""
Fuzzy confidence scoring between a candidate token and the queried symbol.

Tiers, in priority order:

    exact match                 1.0
    case-insensitive match      0.95
    substring either way        0.8 .. 0.95 (scaled by length ratio)
    Jaro-Winkler similarity     accepted above 0.6, mapped onto 0.6 .. 0.79

The tiers never overlap, so an approximate match can not outrank an exact
or substring one.
"""

from . import settings


def jaro(s1: str, s2: str) -> float:
    """Jaro similarity of two strings, 0.0 .. 1.0"""
    if s1 == s2:
        return 1.0
    len1, len2 = len(s1), len(s2)
    if len1 == 0 or len2 == 0:
        return 0.0

    window = max(max(len1, len2) // 2 - 1, 0)
    matched1 = [False] * len1
    matched2 = [False] * len2

    matches = 0
    for i, ch in enumerate(s1):
        start = max(0, i - window)
        end = min(i + window + 1, len2)
        for j in range(start, end):
            if matched2[j] or s2[j] != ch:
                continue
            matched1[i] = True
            matched2[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    # Count characters matched out of order
    transpositions = 0
    k = 0
    for i in range(len1):
        if not matched1[i]:
            continue
        while not matched2[k]:
            k += 1
        if s1[i] != s2[k]:
            transpositions += 1
        k += 1
    transpositions //= 2

    return (
        matches / len1
        + matches / len2
        + (matches - transpositions) / matches
    ) / 3.0


def jaro_winkler(s1: str, s2: str) -> float:
    """Jaro similarity boosted by the length of the common prefix (max 4)."""
    score = jaro(s1, s2)
    prefix = 0
    for a, b in zip(s1[:settings.WINKLER_PREFIX_LIMIT], s2[:settings.WINKLER_PREFIX_LIMIT]):
        if a != b:
            break
        prefix += 1
    return score + prefix * settings.WINKLER_SCALING * (1.0 - score)


def score(found: str, target: str) -> float:
    """
    Confidence that found denotes target.

    Returns 0.0 when the strings are not similar enough to count as a match.
    """
    if not found or not target:
        return 0.0
    if found == target:
        return settings.EXACT_CONFIDENCE

    found_lower = found.lower()
    target_lower = target.lower()
    if found_lower == target_lower:
        return settings.CASE_INSENSITIVE_CONFIDENCE

    if found_lower in target_lower or target_lower in found_lower:
        shorter, longer = sorted((len(found), len(target)))
        return settings.SUBSTRING_BASE + (shorter / longer) * settings.SUBSTRING_SPAN

    similarity = jaro_winkler(found_lower, target_lower)
    if similarity > settings.FUZZY_THRESHOLD:
        return approximate_confidence(similarity)
    return 0.0


def approximate_confidence(similarity: float) -> float:
    """
    Linear map of a similarity in (threshold, 1] onto (threshold, ceiling].

    Order preserving: a closer spelling always scores higher.
    """
    threshold = settings.FUZZY_THRESHOLD
    ceiling = settings.FUZZY_CEILING
    return threshold + (similarity - threshold) / (1.0 - threshold) * (ceiling - threshold)

