"""Helpers shared by the selection functions."""

from collections.abc import Callable, Iterable, Sequence
from typing import Optional

from fuzzy_select.similarity.types import Processor, Scorer

PERFECT_SCORE = 100


def as_sequence(choices: Iterable[str]) -> Sequence[str]:
    """Return choices as an indexable sequence, materializing iterables once.

    Lists and tuples pass through untouched; generators, sets and pandas
    Series are copied into a list.
    """
    if isinstance(choices, Sequence):
        return choices
    return list(choices)


def bind_scorer(
    query: str,
    scorer: Scorer,
    processor: Optional[Processor] = None,
) -> Callable[[str], float]:
    """Fix the query side of a scorer, processing the query only once.

    Args:
        query: Query string
        scorer: Two-argument scorer
        processor: Optional processor applied to query and every candidate

    Returns:
        One-argument function scoring a candidate against the query

    """
    if processor is None:
        return lambda choice: scorer(query, choice)

    processed_query = processor(query)
    return lambda choice: scorer(processed_query, processor(choice))
