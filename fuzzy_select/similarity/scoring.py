"""Similarity scoring functionality.

Processed scorers wrap the composite algorithms: both inputs pass through
a processor (trim + lowercase by default) before scoring. These are the
scorers callers hand to ``extract`` and ``extract_one``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fuzzy_select.normalize import default_processor
from fuzzy_select.similarity import composite
from fuzzy_select.similarity.levenshtein import levenshtein_ratio
from fuzzy_select.similarity.types import Processor, ScoreComponents, Scorer
from fuzzy_select.utils.metadata import metadata

logger = logging.getLogger(__name__)


@metadata("algorithm", "simple")
@metadata("description", "Normalized Levenshtein similarity of the whole strings")
def ratio(s1: str, s2: str, processor: Optional[Processor] = None) -> float:
    proc = processor or default_processor
    return levenshtein_ratio(proc(s1), proc(s2))


@metadata("algorithm", "partial")
@metadata("description", "Best-aligned substring similarity")
def partial_ratio(s1: str, s2: str, processor: Optional[Processor] = None) -> float:
    proc = processor or default_processor
    return composite.partial_ratio(proc(s1), proc(s2))


@metadata("algorithm", "token_sort")
@metadata("description", "Similarity after sorting words, ignores word order")
def token_sort_ratio(s1: str, s2: str, processor: Optional[Processor] = None) -> float:
    proc = processor or default_processor
    return composite.token_sort_ratio(proc(s1), proc(s2))


@metadata("algorithm", "token_set")
@metadata("description", "Similarity of word sets, ignores duplicates and extra words")
def token_set_ratio(s1: str, s2: str, processor: Optional[Processor] = None) -> float:
    proc = processor or default_processor
    return composite.token_set_ratio(proc(s1), proc(s2))


@metadata("algorithm", "weighted")
@metadata("description", "Length-aware combination of the other scorers")
def wratio(s1: str, s2: str, processor: Optional[Processor] = None) -> float:
    """Weighted ratio of two processed strings; the default selection scorer."""
    proc = processor or default_processor
    return composite.weighted_ratio(proc(s1), proc(s2))


SCORERS: dict[str, Scorer] = {
    "simple": ratio,
    "partial": partial_ratio,
    "token_sort": token_sort_ratio,
    "token_set": token_set_ratio,
    "weighted": wratio,
}

# Accepted alternative spellings for scorer names
_SCORER_ALIASES = {
    "ratio": "simple",
    "partial_ratio": "partial",
    "token_sort_ratio": "token_sort",
    "token_set_ratio": "token_set",
    "wratio": "weighted",
    "weighted_ratio": "weighted",
}


def get_scorer(name: str) -> Scorer:
    """Resolve a scorer by name.

    Args:
        name: Scorer name or alias (case-insensitive, dashes allowed)

    Returns:
        The processed scorer function

    Raises:
        ValueError: If the name is unknown

    """
    key = name.strip().lower().replace("-", "_")
    key = _SCORER_ALIASES.get(key, key)
    if key not in SCORERS:
        raise ValueError(
            f"Unknown scorer '{name}'. Expected one of: {', '.join(sorted(SCORERS))}",
        )
    return SCORERS[key]


def score_components(
    s1: str,
    s2: str,
    processor: Optional[Processor] = None,
) -> ScoreComponents:
    """Compute every component score for one pair of strings.

    Args:
        s1: First string
        s2: Second string
        processor: Optional processor applied to both strings first

    Returns:
        ScoreComponents with each scorer's result and the length ratio

    """
    proc = processor or default_processor
    a = proc(s1)
    b = proc(s2)

    components: ScoreComponents = {
        "ratio": levenshtein_ratio(a, b),
        "partial_ratio": composite.partial_ratio(a, b),
        "token_sort_ratio": composite.token_sort_ratio(a, b),
        "token_set_ratio": composite.token_set_ratio(a, b),
        "weighted_ratio": composite.weighted_ratio(a, b),
        "length_ratio": composite.length_ratio(a, b),
    }
    logger.debug(f"Score components for {a!r} vs {b!r}: {components}")
    return components
