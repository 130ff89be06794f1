"""Property-based tests for similarity scoring using Hypothesis."""

import math

import pytest
from hypothesis import given, settings, strategies as st

from fuzzy_select.similarity.composite import (
    partial_ratio,
    token_set_ratio,
    token_sort_ratio,
    weighted_ratio,
)
from fuzzy_select.similarity.levenshtein import levenshtein_ratio
from fuzzy_select.similarity.scoring import wratio

CORE_SCORERS = [levenshtein_ratio, partial_ratio, token_sort_ratio, token_set_ratio, weighted_ratio]

words = st.text(alphabet="abcdefghij", min_size=1, max_size=8)
phrases = st.lists(words, min_size=1, max_size=6).map(" ".join)


class TestSimilarityPropertyBased:
    """Property-based tests for similarity scoring invariants."""

    @pytest.mark.hypothesis
    @given(name1=st.text(max_size=60), name2=st.text(max_size=60))
    @settings(max_examples=200, deadline=None)
    def test_score_bounds(self, name1: str, name2: str):
        """Every built-in scorer stays within [0, 100]."""
        for scorer in CORE_SCORERS:
            score = scorer(name1, name2)
            assert 0 <= score <= 100, f"{scorer.__name__} returned {score}"

    @pytest.mark.hypothesis
    @given(name1=st.text(max_size=60), name2=st.text(max_size=60))
    @settings(max_examples=200, deadline=None)
    def test_score_symmetry(self, name1: str, name2: str):
        """Scores are symmetric (score(a,b) = score(b,a))."""
        for scorer in CORE_SCORERS:
            assert math.isclose(
                scorer(name1, name2),
                scorer(name2, name1),
                rel_tol=1e-9,
                abs_tol=1e-9,
            ), scorer.__name__

    @pytest.mark.hypothesis
    @given(name=st.text(max_size=60))
    @settings(max_examples=100, deadline=None)
    def test_score_identity(self, name: str):
        """Identical strings get perfect scores from the whole-string scorers."""
        assert levenshtein_ratio(name, name) == 100
        assert weighted_ratio(name, name) == 100
        assert wratio(name, name) == 100

    @pytest.mark.hypothesis
    @given(phrase=phrases, data=st.data())
    @settings(max_examples=100, deadline=None)
    def test_token_sort_order_invariance(self, phrase: str, data):
        """Shuffling words never changes the token-sort score against the original."""
        tokens = phrase.split()
        shuffled = data.draw(st.permutations(tokens))
        assert token_sort_ratio(phrase, " ".join(shuffled)) == 100

    @pytest.mark.hypothesis
    @given(phrase=phrases, data=st.data())
    @settings(max_examples=100, deadline=None)
    def test_token_set_duplicate_invariance(self, phrase: str, data):
        """Repeating words from a phrase keeps a perfect token-set score."""
        tokens = phrase.split()
        extra = data.draw(st.lists(st.sampled_from(tokens), max_size=4))
        assert token_set_ratio(phrase, " ".join(tokens + extra)) == 100

    @pytest.mark.hypothesis
    @given(core=st.text(alphabet="abcxyz", min_size=1, max_size=10),
           prefix=st.text(alphabet="abcxyz", max_size=10),
           suffix=st.text(alphabet="abcxyz", max_size=10))
    @settings(max_examples=100, deadline=None)
    def test_partial_containment(self, core: str, prefix: str, suffix: str):
        """A string embedded in a longer one always scores a perfect partial ratio."""
        assert partial_ratio(core, prefix + core + suffix) == 100
