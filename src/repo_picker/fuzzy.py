"""Fuzzy ranking for the picker list.

``fuzzy_score`` rates how well a query matches a display name as an ordered
subsequence. ``rank`` turns those scores into the filtered, ordered view.
Any callable with the ``Scorer`` signature can replace ``fuzzy_score``.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from .types import Item

Scorer = Callable[[str, str], "int | None"]

DEFAULT_THRESHOLD = 1

SCORE_MATCH = 16
BONUS_BOUNDARY = 8
BONUS_CAMEL = 7
BONUS_CONSECUTIVE = 4
BONUS_FIRST_CHAR_MULTIPLIER = 2
PENALTY_GAP_START = 3
PENALTY_GAP_EXTENSION = 1

# Contiguous matches are scored in their own tier, above every sparse match.
SUBSTRING_TIER = 1000

_SEPARATORS = "/_-. "


def _fold(query: str, text: str) -> tuple[list[str], list[str]]:
    """Smart case: ignore case unless the query has an upper-case letter."""
    if any(ch.isupper() for ch in query):
        return list(query), list(text)
    return [ch.lower() for ch in query], [ch.lower() for ch in text]


def _bonus_at(text: str, idx: int) -> int:
    if idx == 0:
        return BONUS_BOUNDARY
    prev, cur = text[idx - 1], text[idx]
    if prev in _SEPARATORS:
        return BONUS_BOUNDARY
    if prev.islower() and cur.isupper():
        return BONUS_CAMEL
    if prev.isalpha() and cur.isdigit():
        return BONUS_CAMEL
    return 0


def _score_indices(text: str, indices: Sequence[int]) -> int:
    score = 0
    prev: int | None = None
    for n, idx in enumerate(indices):
        bonus = _bonus_at(text, idx)
        if n == 0:
            bonus *= BONUS_FIRST_CHAR_MULTIPLIER
        if prev is not None:
            if idx == prev + 1:
                score += BONUS_CONSECUTIVE
            else:
                gap = idx - prev - 1
                score -= PENALTY_GAP_START + (gap - 1) * PENALTY_GAP_EXTENSION
        score += SCORE_MATCH + bonus
        prev = idx
    return score


def _substring_score(needle: list[str], haystack: list[str], text: str) -> int | None:
    size = len(needle)
    best: int | None = None
    for start in range(len(haystack) - size + 1):
        if haystack[start : start + size] == needle:
            score = SUBSTRING_TIER + _score_indices(text, range(start, start + size))
            if best is None or score > best:
                best = score
    return best


def _subsequence_indices(needle: list[str], haystack: list[str]) -> list[int] | None:
    """Tightest window ending at the first complete forward match."""
    qi = 0
    end = -1
    for i, ch in enumerate(haystack):
        if ch == needle[qi]:
            qi += 1
            if qi == len(needle):
                end = i
                break
    if end < 0:
        return None

    indices: list[int] = []
    qi = len(needle) - 1
    for i in range(end, -1, -1):
        if haystack[i] == needle[qi]:
            indices.append(i)
            qi -= 1
            if qi < 0:
                break
    indices.reverse()
    return indices


def fuzzy_score(query: str, text: str) -> int | None:
    """Score ``text`` against ``query``.

    Returns None when the query characters do not appear in order in the
    text. Consecutive and word-boundary matches score higher; gaps cost
    points, so a very sparse match can score below zero.
    """
    if not query:
        return 0
    needle, haystack = _fold(query, text)
    if len(needle) > len(haystack):
        return None

    substring = _substring_score(needle, haystack, text)
    if substring is not None:
        return substring

    indices = _subsequence_indices(needle, haystack)
    if indices is None:
        return None
    return _score_indices(text, indices)


def rank(
    query: str,
    items: Sequence[Item],
    threshold: int = DEFAULT_THRESHOLD,
    scorer: Scorer = fuzzy_score,
) -> tuple[Item, ...]:
    """Filter and order ``items`` by how well their names match ``query``.

    An empty query returns every item in its original order. Otherwise items
    scoring None or below ``threshold`` are dropped and the rest are sorted
    by descending score; equal scores keep their original relative order.
    """
    if not query:
        return tuple(items)

    scored: list[tuple[int, Item]] = []
    for item in items:
        score = scorer(query, item.name)
        if score is None or score < threshold:
            continue
        scored.append((score, item))

    scored.sort(key=lambda pair: -pair[0])
    return tuple(item for _, item in scored)
