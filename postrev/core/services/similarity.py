"""Body similarity scorers.

Both scorers return a value in [0, 1], are symmetric, and score a document
against itself as 1.0. Bodies without tokens follow the empty-body rule:
empty vs empty is 1.0, empty vs non-empty is 0.0.
"""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from postrev.core.domain.entities import Document
from postrev.core.ports import SimilarityPort
from postrev.utils import tokenize

__all__ = [
    "EditDistanceScorer",
    "TokenOverlapScorer",
    "body_tokens",
    "get_scorer",
    "levenshtein",
]


@lru_cache(maxsize=4096)
def body_tokens(body: str) -> Tuple[str, ...]:
    return tuple(tokenize(body))


def _empty_rule(a: Sequence[str], b: Sequence[str]) -> Optional[float]:
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return None


def _apply_cutoff(score: float, score_cutoff: Optional[float]) -> float:
    if score_cutoff is not None and score < score_cutoff:
        return 0.0
    return score


def levenshtein(
    a: Sequence[str], b: Sequence[str], max_distance: Optional[int] = None
) -> int:
    """Edit distance between two token sequences (unit cost insert/delete/substitute).

    With ``max_distance`` only a diagonal band of that width is filled and any
    distance above it is reported as ``max_distance + 1``.
    """
    if len(a) < len(b):
        a, b = b, a
    la, lb = len(a), len(b)
    k = la if max_distance is None else max_distance
    over = k + 1
    if la - lb > k:
        return over

    previous = [j if j <= k else over for j in range(lb + 1)]
    for i in range(1, la + 1):
        lo, hi = max(1, i - k), min(lb, i + k)
        current = [over] * (lb + 1)
        if i <= k:
            current[0] = i
        tok_a = a[i - 1]
        for j in range(lo, hi + 1):
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (tok_a != b[j - 1]),
            )
        if min(current[lo - 1 : hi + 1]) > k:
            return over
        previous = current
    return min(previous[lb], over)


def _max_distance(longest: int, score_cutoff: Optional[float]) -> Optional[int]:
    if score_cutoff is None:
        return None
    # largest d with 1 - d / longest >= score_cutoff
    return math.floor((1.0 - score_cutoff) * longest + 1e-9)


class EditDistanceScorer(SimilarityPort):
    """1 - levenshtein(tokens_a, tokens_b) / max(len_a, len_b).

    When ``score_cutoff`` is given, pairs that cannot reach it score 0.0
    without running the full dynamic programme.
    """

    name = "edit"

    def score(
        self, a: Document, b: Document, score_cutoff: Optional[float] = None
    ) -> float:
        ta, tb = body_tokens(a.body), body_tokens(b.body)
        empty = _empty_rule(ta, tb)
        if empty is not None:
            return _apply_cutoff(empty, score_cutoff)
        if ta == tb:
            return 1.0
        longest = max(len(ta), len(tb))
        max_distance = _max_distance(longest, score_cutoff)
        if max_distance is not None and abs(len(ta) - len(tb)) > max_distance:
            return 0.0
        distance = levenshtein(ta, tb, max_distance)
        if max_distance is not None and distance > max_distance:
            return 0.0
        return 1.0 - distance / longest


class TokenOverlapScorer(SimilarityPort):
    """Jaccard similarity over token sets."""

    name = "token"

    def score(
        self, a: Document, b: Document, score_cutoff: Optional[float] = None
    ) -> float:
        ta, tb = body_tokens(a.body), body_tokens(b.body)
        empty = _empty_rule(ta, tb)
        if empty is not None:
            return _apply_cutoff(empty, score_cutoff)
        sa, sb = set(ta), set(tb)
        return _apply_cutoff(len(sa & sb) / len(sa | sb), score_cutoff)


_SCORERS = {
    EditDistanceScorer.name: EditDistanceScorer,
    TokenOverlapScorer.name: TokenOverlapScorer,
}


def get_scorer(metric: str) -> SimilarityPort:
    try:
        return _SCORERS[metric]()
    except KeyError:
        raise ValueError(
            f"Unsupported similarity metric '{metric}'. Use one of {sorted(_SCORERS)}."
        ) from None
