"""fuzzy_select: fuzzy string scoring and candidate selection.

Scorers map two strings to a 0-100 similarity score; extract() returns the
top-K candidates for a query and extract_one() the single best one.
"""

__version__ = "1.0.0"

from .builders import ScorerBuilder, ScorerConfig, create_scorer, scorer_builder
from .errors import FuzzySelectError, InvariantViolation, SettingsError, ValidationError
from .normalize import default_processor, sort_tokens, token_set, tokenize
from .process import extract, extract_one
from .similarity import (
    MatchResult,
    Processor,
    ScoreComponents,
    Scorer,
    core_partial_ratio,
    core_token_set_ratio,
    core_token_sort_ratio,
    get_scorer,
    levenshtein_distance,
    levenshtein_ratio,
    partial_ratio,
    ratio,
    score_components,
    token_set_ratio,
    token_sort_ratio,
    weighted_ratio,
    wratio,
)
from .utils.cache_utils import LRUCache, cached
from .utils.metadata import define_metadata, get_metadata, has_metadata, metadata
from .utils.perf_utils import PerformanceProfiler, profile, profiler
from .utils.validation_utils import max_length, non_empty_string, validate

__all__ = [
    "FuzzySelectError",
    "InvariantViolation",
    "LRUCache",
    "MatchResult",
    "PerformanceProfiler",
    "Processor",
    "ScoreComponents",
    "Scorer",
    "ScorerBuilder",
    "ScorerConfig",
    "SettingsError",
    "ValidationError",
    "__version__",
    "cached",
    "core_partial_ratio",
    "core_token_set_ratio",
    "core_token_sort_ratio",
    "create_scorer",
    "default_processor",
    "define_metadata",
    "extract",
    "extract_one",
    "get_metadata",
    "get_scorer",
    "has_metadata",
    "levenshtein_distance",
    "levenshtein_ratio",
    "max_length",
    "metadata",
    "non_empty_string",
    "partial_ratio",
    "profile",
    "profiler",
    "ratio",
    "score_components",
    "scorer_builder",
    "sort_tokens",
    "token_set",
    "token_set_ratio",
    "token_sort_ratio",
    "tokenize",
    "validate",
    "weighted_ratio",
    "wratio",
]
