"""Top-K candidate selection.

Strategy depends on the number of candidates n relative to the limit K:
- n <= 2K: score everything and sort
- n <= 8000: single pass through a bounded top-K heap
- larger: chunked pass through the same heap, stopping early once the
  K-th best score is high after a fifth of the input

The chunked strategy is deliberately approximate: once results are good
enough it stops scanning, so a marginally better match late in a huge
collection can be missed. Thresholds come from the "extract" settings
section.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Optional

from fuzzy_select.process.base import PERFECT_SCORE, as_sequence, bind_scorer
from fuzzy_select.process.top_set import BoundedTopSet, sort_results
from fuzzy_select.similarity.scoring import wratio
from fuzzy_select.similarity.types import MatchResult, Processor, Scorer
from fuzzy_select.utils.settings import get_section, tiered_value

logger = logging.getLogger(__name__)


def extract(
    query: str,
    choices: Iterable[str],
    scorer: Scorer = wratio,
    limit: int = 5,
    *,
    processor: Optional[Processor] = None,
    settings: Optional[dict[str, Any]] = None,
) -> list[MatchResult]:
    """Return the ``limit`` best-scoring candidates for a query.

    Args:
        query: Query string
        choices: Candidate strings
        scorer: Any ``(query, candidate) -> number`` function
        limit: Maximum number of results; <= 0 returns an empty list
        processor: Optional processor applied to query and candidates
            before scoring; results keep the original candidate text
        settings: Settings dict; defaults are used for missing keys

    Returns:
        Results sorted by descending score, near-ties (< 0.001 apart)
        ordered by ascending candidate text. Exceptions from the scorer
        or processor propagate unchanged.

    """
    if limit <= 0:
        return []

    choices = as_sequence(choices)
    n = len(choices)
    if n == 0:
        return []

    limit = min(limit, n)
    cfg = get_section(settings, "extract")
    score_of = bind_scorer(query, scorer, processor)

    if n <= cfg["small_factor"] * limit:
        logger.debug(f"extract: full sort of {n} candidates (limit={limit})")
        return _extract_sorted(choices, score_of, limit)

    if n <= cfg["heap_max"]:
        logger.debug(f"extract: heap scan of {n} candidates (limit={limit})")
        top_set = BoundedTopSet(limit)
        _scan_into(top_set, choices, score_of, 0, n, _PerfectCounter(limit))
        return top_set.sorted_results()

    return _extract_chunked(choices, score_of, limit, cfg)


def _extract_sorted(
    choices: Sequence[str],
    score_of: Callable[[str], float],
    limit: int,
) -> list[MatchResult]:
    results = [MatchResult(choice, score_of(choice)) for choice in choices]
    return sort_results(results)[:limit]


class _PerfectCounter:
    """Counts perfect scores to detect when no later candidate can help."""

    __slots__ = ("limit", "seen")

    def __init__(self, limit: int):
        self.limit = limit
        self.seen = 0

    def record(self, score: float, top_set: BoundedTopSet) -> bool:
        """Returns True once the set holds ``limit`` perfect results."""
        if score != PERFECT_SCORE:
            return False
        self.seen += 1
        return (
            self.seen >= self.limit
            and top_set.is_full
            and top_set.all_scores_equal(PERFECT_SCORE)
        )


def _scan_into(
    top_set: BoundedTopSet,
    choices: Sequence[str],
    score_of: Callable[[str], float],
    start: int,
    end: int,
    perfect: _PerfectCounter,
) -> bool:
    """Score choices[start:end] into the set; True if saturated with perfect scores."""
    for i in range(start, end):
        choice = choices[i]
        score = score_of(choice)
        top_set.push(MatchResult(choice, score))
        if perfect.record(score, top_set):
            logger.debug(f"extract: {perfect.seen} perfect matches, stopping at index {i}")
            return True
    return False


def _extract_chunked(
    choices: Sequence[str],
    score_of: Callable[[str], float],
    limit: int,
    cfg: dict[str, Any],
) -> list[MatchResult]:
    n = len(choices)
    chunk_size = tiered_value(cfg["chunk_sizes"], n)
    early_exit_after = n * cfg["early_exit_fraction"]
    early_exit_score = cfg["early_exit_score"]

    logger.debug(
        f"extract: chunked scan of {n} candidates (limit={limit}, chunk_size={chunk_size})",
    )

    top_set = BoundedTopSet(limit)
    perfect = _PerfectCounter(limit)
    processed = 0

    for start in range(0, n, chunk_size):
        end = min(start + chunk_size, n)
        if _scan_into(top_set, choices, score_of, start, end, perfect):
            return top_set.sorted_results()
        processed = end

        if (
            processed > early_exit_after
            and top_set.is_full
            and top_set.min_score > early_exit_score
        ):
            extra_chunks = min(cfg["confirmation_chunks"], (n - processed) // chunk_size)
            confirm_end = processed + extra_chunks * chunk_size
            logger.debug(
                f"extract: K-th best {top_set.min_score:.2f} > {early_exit_score} after "
                f"{processed}/{n}; confirming over {extra_chunks} more chunk(s)",
            )
            _scan_into(top_set, choices, score_of, processed, confirm_end, perfect)
            return top_set.sorted_results()

    return top_set.sorted_results()
