"""Bounded top-K set used by extract.

A fixed-capacity binary min-heap (via heapq) whose root is always the
worst result held, so a scan over n candidates costs O(n log K) instead of
a full O(n log n) sort.

Eviction compares exact scores, not the output tolerance: when the set is
full, a result that is higher by less than SCORE_TIE_TOLERANCE still
displaces one whose text would have sorted first. The kept set can then
differ from the top ``capacity`` of a full sort_results() pass, but only
among such near-ties.
"""

from __future__ import annotations

import heapq
from operator import attrgetter

from fuzzy_select.errors import InvariantViolation
from fuzzy_select.similarity.types import MatchResult

# Scores closer than this are treated as tied when ordering output
SCORE_TIE_TOLERANCE = 0.001


def compare_results(a: MatchResult, b: MatchResult) -> int:
    """Order two results: descending score, ascending choice text for near-ties.

    Pairwise only. The tolerance makes this relation non-transitive
    (1.0 ~ 1.0008 ~ 1.0016 but 1.0 < 1.0016), so it must not be used as a
    sort key on its own; sort_results() builds a consistent order instead.
    """
    diff = b.score - a.score
    if abs(diff) < SCORE_TIE_TOLERANCE:
        if a.choice < b.choice:
            return -1
        if a.choice > b.choice:
            return 1
        return 0
    return -1 if diff < 0 else 1


def sort_results(results: list[MatchResult]) -> list[MatchResult]:
    """Return results in output order.

    Results are sorted by exact descending score (then text), split into
    bands whose scores lie within SCORE_TIE_TOLERANCE of the band's highest
    score, and each band is ordered by ascending choice text. The order is
    total and independent of input order. Two near-tied results that fall
    into neighbouring bands stay in score order.
    """
    ordered = sorted(results, key=lambda r: (-r.score, r.choice))

    output: list[MatchResult] = []
    band: list[MatchResult] = []
    for result in ordered:
        if band and band[0].score - result.score >= SCORE_TIE_TOLERANCE:
            output.extend(sorted(band, key=attrgetter("choice")))
            band = []
        band.append(result)
    output.extend(sorted(band, key=attrgetter("choice")))
    return output


class _HeapEntry:
    """Heap wrapper whose ``<`` means "ranks worse than"."""

    __slots__ = ("result",)

    def __init__(self, result: MatchResult):
        self.result = result

    def __lt__(self, other: _HeapEntry) -> bool:
        mine, theirs = self.result, other.result
        if mine.score != theirs.score:
            return mine.score < theirs.score
        # Equal scores: the lexicographically larger choice ranks worse
        return mine.choice > theirs.choice


class BoundedTopSet:
    """Holds the best ``capacity`` results pushed into it."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise InvariantViolation(f"BoundedTopSet capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._heap: list[_HeapEntry] = []

    def __len__(self) -> int:
        return len(self._heap)

    @property
    def is_full(self) -> bool:
        return len(self._heap) >= self.capacity

    @property
    def min_score(self) -> float:
        """Score of the worst held result; K-th best once the set is full."""
        if not self._heap:
            raise InvariantViolation("min_score requested from an empty BoundedTopSet")
        return self._heap[0].result.score

    def push(self, result: MatchResult) -> bool:
        """Offer a result; returns True if it was kept."""
        entry = _HeapEntry(result)
        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, entry)
            return True
        if self._heap[0] < entry:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def all_scores_equal(self, score: float) -> bool:
        return all(entry.result.score == score for entry in self._heap)

    def sorted_results(self) -> list[MatchResult]:
        """Dump held results in output order without consuming the set."""
        return sort_results([entry.result for entry in self._heap])
