"""Levenshtein edit distance and the normalized 0-100 ratio built on it."""

from fuzzy_select.errors import InvariantViolation


def levenshtein_distance(s1: str, s2: str) -> int:
    """Minimum number of single-character edits turning s1 into s2.

    Two rolling rows sized by the shorter string keep memory at
    O(min(len(s1), len(s2))).

    Args:
        s1: First string
        s2: Second string

    Returns:
        Edit distance (insertions, deletions and substitutions)

    """
    if s1 == s2:
        return 0
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Shorter string is the inner dimension
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    width = len(s2) + 1
    prev_row = list(range(width))
    curr_row = [0] * width

    for i, char_a in enumerate(s1, start=1):
        curr_row[0] = i
        for j, char_b in enumerate(s2, start=1):
            cost = 0 if char_a == char_b else 1
            curr_row[j] = min(
                curr_row[j - 1] + 1,
                prev_row[j] + 1,
                prev_row[j - 1] + cost,
            )
        prev_row, curr_row = curr_row, prev_row

    if len(prev_row) != width:
        raise InvariantViolation(
            f"Edit-distance row has {len(prev_row)} cells, expected {width}",
        )

    return prev_row[-1]


def levenshtein_ratio(s1: str, s2: str) -> float:
    """Similarity of two strings on a 0-100 scale.

    Args:
        s1: First string
        s2: Second string

    Returns:
        100.0 for identical strings (including two empty strings), 0.0 when
        every character must change, otherwise the share of the longer
        string left untouched by the edit distance

    """
    if s1 == s2:
        return 100.0

    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 100.0

    distance = levenshtein_distance(s1, s2)
    if distance == 0:
        return 100.0
    if distance >= max_len:
        return 0.0

    return (max_len - distance) / max_len * 100
