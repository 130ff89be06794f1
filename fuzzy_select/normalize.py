"""Text normalization and tokenization for fuzzy matching.

This module handles:
- Default processing (trim + lowercase) applied before scoring
- Word tokenization on whitespace, dash and underscore boundaries
- Stable sorted renderings and sets of tokens for comparison
"""

from collections.abc import Iterable

# Space, tab, newline, dash, underscore
TOKEN_DELIMITERS = frozenset(" \t\n-_")


def default_processor(text: str) -> str:
    """Lowercase and trim a string before scoring.

    Args:
        text: Raw input string

    Returns:
        Normalized string

    """
    return text.lower().strip()


def tokenize(text: str) -> list[str]:
    """Split a string into lower-cased word tokens.

    Runs of delimiters collapse, so no empty tokens are produced. Empty or
    all-delimiter input yields an empty list.

    Args:
        text: String to tokenize

    Returns:
        Tokens in input order

    """
    tokens: list[str] = []
    start = -1

    for i, char in enumerate(text):
        if char in TOKEN_DELIMITERS:
            if start >= 0:
                tokens.append(text[start:i].lower())
                start = -1
        elif start < 0:
            start = i

    if start >= 0:
        tokens.append(text[start:].lower())

    return tokens


def sort_tokens(tokens: Iterable[str]) -> str:
    """Render tokens as a single space-joined string in sorted order."""
    return " ".join(sorted(tokens))


def token_set(tokens: Iterable[str]) -> set[str]:
    """Deduplicate tokens, discarding order."""
    return set(tokens)
