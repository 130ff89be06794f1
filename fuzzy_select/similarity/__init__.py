"""Similarity module for fuzzy_select.

This module provides the edit-distance engine, composite scorers and the
processed scorers built on them.
"""

from .composite import (
    length_ratio,
    partial_ratio as core_partial_ratio,
    token_set_ratio as core_token_set_ratio,
    token_sort_ratio as core_token_sort_ratio,
    weighted_ratio,
)
from .levenshtein import levenshtein_distance, levenshtein_ratio
from .scoring import (
    SCORERS,
    get_scorer,
    partial_ratio,
    ratio,
    score_components,
    token_set_ratio,
    token_sort_ratio,
    wratio,
)
from .types import MatchResult, Processor, ScoreComponents, Scorer

__all__ = [
    "MatchResult",
    "Processor",
    "SCORERS",
    "ScoreComponents",
    "Scorer",
    "core_partial_ratio",
    "core_token_set_ratio",
    "core_token_sort_ratio",
    "get_scorer",
    "length_ratio",
    "levenshtein_distance",
    "levenshtein_ratio",
    "partial_ratio",
    "ratio",
    "score_components",
    "token_set_ratio",
    "token_sort_ratio",
    "weighted_ratio",
    "wratio",
]
