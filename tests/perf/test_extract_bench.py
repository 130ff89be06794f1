"""
Performance benchmarks for candidate selection.

This module provides micro-benchmarks to track how extract and extract_one
scale across selection strategies and collection sizes.
"""

import numpy as np
import pytest

from fuzzy_select.process import extract, extract_one
from fuzzy_select.similarity.scoring import wratio
from tests.helpers.choices import length_scorer

WORDS = ["acme", "global", "systems", "holdings", "partners", "group", "labs", "capital"]


def synthetic_names(count: int) -> list[str]:
    """Generate reproducible two- and three-word company names."""
    rng = np.random.default_rng(42)
    picks = rng.integers(0, len(WORDS), size=(count, 3))
    return [
        " ".join(WORDS[j] for j in row[: 2 + (i % 2)]) + f" {i}"
        for i, row in enumerate(picks)
    ]


@pytest.fixture(scope="module")
def names_2k():
    return synthetic_names(2000)


@pytest.fixture(scope="module")
def names_50k():
    return synthetic_names(50000)


@pytest.fixture(scope="module")
def names_250k():
    return synthetic_names(250000)


class TestExtractBenchmarks:
    """Benchmark tests for top-K selection."""

    @pytest.mark.performance
    def test_extract_heap_2k_wratio(self, benchmark, names_2k):
        """Heap strategy with the processed weighted scorer."""
        result = benchmark.pedantic(
            extract, args=("acme holdings", names_2k, wratio, 10), rounds=3, iterations=1
        )
        assert len(result) == 10

    @pytest.mark.performance
    def test_extract_chunked_50k(self, benchmark, names_50k):
        """Chunked strategy with a cheap scorer."""
        result = benchmark(extract, "acme labs 7", names_50k, length_scorer, 5)
        assert len(result) == 5

    @pytest.mark.performance
    @pytest.mark.slow
    def test_extract_chunked_250k(self, benchmark, names_250k):
        result = benchmark.pedantic(
            extract, args=("acme labs 7", names_250k, length_scorer, 5), rounds=3, iterations=1
        )
        assert len(result) == 5


class TestExtractOneBenchmarks:
    """Benchmark tests for best-match selection."""

    @pytest.mark.performance
    def test_extract_one_linear_2k_wratio(self, benchmark, names_2k):
        result = benchmark.pedantic(
            extract_one, args=("global systems", names_2k, wratio), rounds=3, iterations=1
        )
        assert result is not None

    @pytest.mark.performance
    def test_extract_one_sampled_50k(self, benchmark, names_50k):
        result = benchmark(extract_one, "capital group 123", names_50k, length_scorer)
        assert result is not None

    @pytest.mark.performance
    @pytest.mark.slow
    def test_extract_one_exact_250k(self, benchmark, names_250k):
        """Exact candidates are found without a full scan."""
        query = names_250k[-1]
        result = benchmark(extract_one, query, names_250k, length_scorer)
        assert result.choice == query
        assert result.score == 100
