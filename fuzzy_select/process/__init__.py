"""Candidate selection: top-K (extract) and best match (extract_one)."""

from .extract import extract
from .extract_one import extract_one
from .top_set import BoundedTopSet, compare_results, sort_results

__all__ = [
    "BoundedTopSet",
    "compare_results",
    "extract",
    "extract_one",
    "sort_results",
]
