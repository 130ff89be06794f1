"""Best-match selection.

Up to 20000 candidates are scanned linearly, so the result is exact.
Above that a tiered sampling strategy bounds latency:

1. An exact (raw string equality) candidate is checked first.
2. Evenly spaced samples plus strategic positions are scored.
3. For n > 100000, a best score above 98 is checked against 100 random
   positions and accepted if none of them improves it.
4. Otherwise the input is scanned in chunks; once 10% (n > 100000) or
   15% has been seen with a best score above 97, up to 200 evenly spaced
   positions of the remainder are scored and the best found is returned.

Results above these thresholds are high-confidence approximations, not
guaranteed maxima. All thresholds come from the "extract_one" settings
section.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, Optional

import numpy as np

from fuzzy_select.errors import InvariantViolation
from fuzzy_select.process.base import PERFECT_SCORE, as_sequence, bind_scorer
from fuzzy_select.similarity.scoring import wratio
from fuzzy_select.similarity.types import MatchResult, Processor, Scorer
from fuzzy_select.utils.settings import get_section, tiered_value

logger = logging.getLogger(__name__)


class _RunningBest:
    __slots__ = ("choice", "score")

    def __init__(self, choice: str, score: float):
        self.choice = choice
        self.score = score

    def offer(self, choice: str, score: float) -> bool:
        """Keep the candidate if it strictly improves; True once perfect."""
        if score > self.score:
            self.choice = choice
            self.score = score
        return self.score == PERFECT_SCORE

    def result(self) -> MatchResult:
        return MatchResult(self.choice, self.score)


def extract_one(
    query: str,
    choices: Iterable[str],
    scorer: Scorer = wratio,
    *,
    processor: Optional[Processor] = None,
    settings: Optional[dict[str, Any]] = None,
) -> Optional[MatchResult]:
    """Return the single best-scoring candidate for a query.

    Args:
        query: Query string
        choices: Candidate strings
        scorer: Any ``(query, candidate) -> number`` function
        processor: Optional processor applied to query and candidates
        settings: Settings dict; defaults are used for missing keys

    Returns:
        The best MatchResult (the earliest one on ties), or None when there
        are no candidates. Exact for up to ``linear_max`` candidates,
        sampled above it. Scorer exceptions propagate unchanged.

    """
    choices = as_sequence(choices)
    n = len(choices)
    if n == 0:
        return None

    cfg = get_section(settings, "extract_one")
    score_of = bind_scorer(query, scorer, processor)

    best = _RunningBest(choices[0], score_of(choices[0]))
    if best.score == PERFECT_SCORE:
        return best.result()

    if n > cfg["linear_max"]:
        return _extract_one_sampled(query, choices, score_of, best, cfg)

    logger.debug(f"extract_one: linear scan of {n} candidates")
    for i in range(1, n):
        choice = choices[i]
        if best.offer(choice, score_of(choice)):
            break

    return best.result()


def _checked_index(index: int, size: int) -> int:
    if not 0 <= index < size:
        raise InvariantViolation(f"Sample index {index} outside [0, {size})")
    return index


def _sample(
    indices: Iterable[int],
    choices: Sequence[str],
    score_of: Callable[[str], float],
    best: _RunningBest,
) -> bool:
    """Score the given positions; True as soon as a perfect match is found."""
    n = len(choices)
    for index in indices:
        choice = choices[_checked_index(int(index), n)]
        if best.offer(choice, score_of(choice)):
            return True
    return False


def _extract_one_sampled(
    query: str,
    choices: Sequence[str],
    score_of: Callable[[str], float],
    best: _RunningBest,
    cfg: dict[str, Any],
) -> MatchResult:
    n = len(choices)
    logger.debug(f"extract_one: sampled search over {n} candidates")

    # Sampling must never hide a candidate identical to the query
    try:
        exact_index = choices.index(query)
    except ValueError:
        exact_index = None
    if exact_index is not None and _sample([exact_index], choices, score_of, best):
        logger.debug(f"extract_one: exact candidate at index {exact_index}")
        return best.result()

    extra = tiered_value(cfg["extra_samples"], n)
    spaced = [((n - 1) * (s + 1)) // (extra + 1) for s in range(extra)]
    strategic = [min(int(n * position), n - 1) for position in cfg["strategic_positions"]]
    strategic = [index for index in strategic if index > 0]
    if _sample(spaced + strategic, choices, score_of, best):
        return best.result()

    if best.score > cfg["verify_score"] and n > cfg["verify_min_size"]:
        rng = np.random.default_rng(cfg["random_seed"])
        before = best.score
        if _sample(rng.integers(0, n, size=cfg["verify_samples"]), choices, score_of, best):
            return best.result()
        if best.score == before:
            logger.debug(
                f"extract_one: sampled best {best.score:.2f} confirmed by "
                f"{cfg['verify_samples']} random positions",
            )
            return best.result()

    chunk_size = tiered_value(cfg["chunk_sizes"], n)
    if n > cfg["verify_min_size"]:
        early_exit_after = n * cfg["early_exit_fraction_large"]
    else:
        early_exit_after = n * cfg["early_exit_fraction"]

    processed = 1
    for start in range(1, n, chunk_size):
        end = min(start + chunk_size, n)
        if _sample(range(start, end), choices, score_of, best):
            return best.result()
        processed += end - start

        if processed > early_exit_after and best.score > cfg["early_exit_score"]:
            remaining = n - processed
            sample_count = min(cfg["final_samples"], remaining // cfg["final_sample_stride"])
            if sample_count > 0:
                step = remaining // sample_count
                _sample(
                    (processed + s * step for s in range(sample_count)),
                    choices,
                    score_of,
                    best,
                )
            logger.debug(
                f"extract_one: stopping after {processed}/{n} with best {best.score:.2f}",
            )
            return best.result()

    return best.result()
