"""Composite similarity scorers built on edit distance and tokenization.

All functions here take already-processed strings. The processed,
user-facing variants live in ``fuzzy_select.similarity.scoring``.
"""

from __future__ import annotations

from fuzzy_select.normalize import sort_tokens, token_set, tokenize
from fuzzy_select.similarity.levenshtein import levenshtein_ratio

# Length-ratio bands used by weighted_ratio
SIMILAR_LENGTH_RATIO = 0.8
DISPARATE_LENGTH_RATIO = 0.6
# Token scores count for less when lengths differ a lot
TOKEN_DISCOUNT = 0.95


def partial_ratio(s1: str, s2: str) -> float:
    """Best ratio between the shorter string and any equal-length window of the longer.

    Args:
        s1: First string
        s2: Second string

    Returns:
        0.0 if either string is empty, 100.0 on substring containment,
        otherwise the best window ratio

    """
    if len(s1) <= len(s2):
        shorter, longer = s1, s2
    else:
        shorter, longer = s2, s1

    if not shorter or not longer:
        return 0.0

    # Containment covers prefix and suffix matches as well
    if shorter in longer:
        return 100.0

    window = len(shorter)
    best = 0.0
    for offset in range(len(longer) - window + 1):
        score = levenshtein_ratio(shorter, longer[offset : offset + window])
        if score > best:
            best = score
            if best == 100:
                break

    return best


def token_sort_ratio(s1: str, s2: str) -> float:
    """Ratio of the two strings after sorting their tokens."""
    tokens_a = tokenize(s1)
    tokens_b = tokenize(s2)

    if not tokens_a and not tokens_b:
        return 100.0
    if not tokens_a or not tokens_b:
        return 0.0

    sorted_a = sort_tokens(tokens_a)
    sorted_b = sort_tokens(tokens_b)
    if sorted_a == sorted_b:
        return 100.0

    return levenshtein_ratio(sorted_a, sorted_b)


def token_set_ratio(s1: str, s2: str) -> float:
    """Token-set comparison tolerant of duplicated and extra words.

    The shared vocabulary is compared against each side's full vocabulary
    and the two full vocabularies against each other; the best of the
    three ratios wins.

    Args:
        s1: First string
        s2: Second string

    Returns:
        Similarity score between 0 and 100

    """
    tokens_a = tokenize(s1)
    tokens_b = tokenize(s2)

    if not tokens_a and not tokens_b:
        return 100.0
    if not tokens_a or not tokens_b:
        return 0.0

    set_a = token_set(tokens_a)
    set_b = token_set(tokens_b)

    intersection = set_a & set_b
    if not intersection:
        return 0.0

    only_a = set_a - set_b
    only_b = set_b - set_a

    shared = sort_tokens(intersection)
    combined_a = sort_tokens(intersection | only_a)
    combined_b = sort_tokens(intersection | only_b)

    return max(
        levenshtein_ratio(shared, combined_a),
        levenshtein_ratio(shared, combined_b),
        levenshtein_ratio(combined_a, combined_b),
    )


def length_ratio(s1: str, s2: str) -> float:
    """Shorter length over longer length; 1.0 when both are empty."""
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    return min(len(s1), len(s2)) / longest


def weighted_ratio(s1: str, s2: str) -> float:
    """Pick and combine the other scorers based on relative string lengths.

    - Similar lengths (> 0.8): plain ratio, token sort, token set.
    - Very different lengths (< 0.6): partial ratio, with token scores
      discounted by 0.95.
    - In between: plain, partial, token sort and token set.

    Each band returns as soon as one of its cheaper scorers hits 100.

    Args:
        s1: First string
        s2: Second string

    Returns:
        Similarity score between 0 and 100

    """
    if s1 == s2:
        return 100.0

    len_ratio = length_ratio(s1, s2)

    if len_ratio > SIMILAR_LENGTH_RATIO:
        simple = levenshtein_ratio(s1, s2)
        if simple == 100:
            return 100.0
        token_sort = token_sort_ratio(s1, s2)
        if token_sort == 100:
            return 100.0
        return max(simple, token_sort, token_set_ratio(s1, s2))

    if len_ratio < DISPARATE_LENGTH_RATIO:
        partial = partial_ratio(s1, s2)
        if partial == 100:
            return 100.0
        return max(
            partial,
            token_sort_ratio(s1, s2) * TOKEN_DISCOUNT,
            token_set_ratio(s1, s2) * TOKEN_DISCOUNT,
        )

    simple = levenshtein_ratio(s1, s2)
    if simple == 100:
        return 100.0
    partial = partial_ratio(s1, s2)
    if partial == 100:
        return 100.0
    return max(simple, partial, token_sort_ratio(s1, s2), token_set_ratio(s1, s2))
