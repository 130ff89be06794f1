"""Declarative scorer construction.

create_scorer() turns a ScorerConfig into a plain two-argument scorer;
ScorerBuilder offers the same through method chaining. Built scorers
carry their configuration as metadata.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from fuzzy_select.normalize import default_processor
from fuzzy_select.similarity import composite
from fuzzy_select.similarity.levenshtein import levenshtein_ratio
from fuzzy_select.similarity.types import Processor, Scorer
from fuzzy_select.utils.cache_utils import cached
from fuzzy_select.utils.metadata import define_metadata, get_all_metadata

ALGORITHMS: dict[str, Scorer] = {
    "weighted": composite.weighted_ratio,
    "simple": levenshtein_ratio,
    "partial": composite.partial_ratio,
    "token_sort": composite.token_sort_ratio,
    "token_set": composite.token_set_ratio,
}


@dataclass(frozen=True)
class ScorerConfig:
    algorithm: str = "weighted"
    processor: Optional[Processor] = None
    min_score: float = 0
    max_score: float = 100


def create_scorer(config: Optional[ScorerConfig] = None, **overrides: Any) -> Scorer:
    """Build a scorer that processes, scores and clamps.

    Args:
        config: Base configuration (default: ScorerConfig())
        **overrides: Field overrides applied on top of config

    Returns:
        A ``(s1, s2) -> float`` scorer with "algorithm", "min_score",
        "max_score" and "config" metadata

    Raises:
        ValueError: On an unknown algorithm or min_score > max_score

    """
    config = replace(config or ScorerConfig(), **overrides)

    core = ALGORITHMS.get(config.algorithm)
    if core is None:
        raise ValueError(
            f"Unknown algorithm '{config.algorithm}'. "
            f"Expected one of: {', '.join(sorted(ALGORITHMS))}",
        )
    if config.min_score > config.max_score:
        raise ValueError(
            f"min_score ({config.min_score}) must not exceed max_score ({config.max_score})",
        )

    processor = config.processor or default_processor
    min_score = config.min_score
    max_score = config.max_score

    def scorer(s1: str, s2: str) -> float:
        score = core(processor(s1), processor(s2))
        return max(min_score, min(max_score, score))

    scorer.__name__ = f"{config.algorithm}_scorer"
    define_metadata("algorithm", config.algorithm, scorer)
    define_metadata("min_score", min_score, scorer)
    define_metadata("max_score", max_score, scorer)
    define_metadata("config", config, scorer)
    return scorer


class ScorerBuilder:
    """Builder pattern for creating scorers with method chaining."""

    def __init__(self) -> None:
        self._config = ScorerConfig()
        self._cache_size: Optional[int] = None
        self._cache_ttl: Optional[float] = None

    def with_algorithm(self, algorithm: str) -> ScorerBuilder:
        self._config = replace(self._config, algorithm=algorithm)
        return self

    def with_processor(self, processor: Processor) -> ScorerBuilder:
        self._config = replace(self._config, processor=processor)
        return self

    def with_min_score(self, min_score: float) -> ScorerBuilder:
        self._config = replace(self._config, min_score=min_score)
        return self

    def with_max_score(self, max_score: float) -> ScorerBuilder:
        self._config = replace(self._config, max_score=max_score)
        return self

    def with_cache(self, max_size: int = 1000, ttl: Optional[float] = None) -> ScorerBuilder:
        """Memoize the built scorer (see utils.cache_utils.cached)."""
        self._cache_size = max_size
        self._cache_ttl = ttl
        return self

    def build(self) -> Scorer:
        scorer = create_scorer(self._config)
        if self._cache_size is None:
            return scorer

        memoized = cached(max_size=self._cache_size, ttl=self._cache_ttl)(scorer)
        for key, value in get_all_metadata(scorer).items():
            define_metadata(key, value, memoized)
        define_metadata("cache_size", self._cache_size, memoized)
        return memoized


def scorer_builder() -> ScorerBuilder:
    """Creates a new scorer builder instance."""
    return ScorerBuilder()
