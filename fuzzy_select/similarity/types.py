"""Type definitions for scorers, processors and match results.

This module provides structured type definitions shared by the scoring
and selection layers so callers never deal with bare tuples or dicts.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, TypedDict

Scorer = Callable[[str, str], float]
Processor = Callable[[str], str]


@dataclass(frozen=True)
class MatchResult:
    """A candidate and the score it received against a query."""

    choice: str
    score: float

    def __iter__(self) -> Iterator[Any]:
        # Allows ``choice, score = result``
        yield self.choice
        yield self.score

    def as_dict(self) -> dict[str, Any]:
        return {"choice": self.choice, "score": self.score}


class ScoreComponents(TypedDict):
    """Every built-in component score for a single pair of strings.

    Both strings are processed before any component is computed, so the
    components are directly comparable with each other.
    """

    ratio: float
    partial_ratio: float
    token_sort_ratio: float
    token_set_ratio: float
    weighted_ratio: float
    length_ratio: float
