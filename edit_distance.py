"""
Edit Distance - String similarity for fuzzy fund matching
Strict Levenshtein for result gating, typo-tolerant variant for suggestions
"""
from typing import List


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic Levenshtein distance with unit costs

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of insertions, deletions and substitutions
    """
    # matrix[j][i]: distance between b[:j] and a[:i]
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            substitution_cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,      # Deletion
                matrix[j - 1][i] + 1,      # Insertion
                matrix[j - 1][i - 1] + substitution_cost  # Substitution
            )

    return matrix[len(b)][len(a)]


def typo_distance(a: str, b: str) -> float:
    """
    Edit distance that discounts common typing mistakes

    Substitutions cost 0.5 instead of 1.0 when they look like an
    adjacent-letter transposition or a missing doubled letter. The
    discount rules read character pairs from fixed operands, so
    typo_distance(a, b) and typo_distance(b, a) can differ.

    Args:
        a: Typed text (e.g. the user's query)
        b: Reference text (e.g. a known fund name)

    Returns:
        Non-negative cost, 0.0 only when a == b
    """
    if len(a) == 0:
        return float(len(b))
    if len(b) == 0:
        return float(len(a))

    matrix: List[List[float]] = [[0.0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(b) + 1):
        matrix[i][0] = float(i)
    for j in range(len(a) + 1):
        matrix[0][j] = float(j)

    for i in range(1, len(b) + 1):
        for j in range(1, len(a) + 1):
            cost = 0.0 if a[j - 1] == b[i - 1] else 1.0

            # Transposed neighbours ("tceh" vs "tech")
            if i > 1 and j > 1 and b[i - 1] == a[j - 2] and b[i - 2] == a[j - 1]:
                cost = min(cost, 0.5)

            # Missing doubled letter ("nipon" vs "nippon")
            if i > 1 and b[i - 1] == b[i - 2] and b[i - 1] == a[j - 1]:
                cost = min(cost, 0.5)

            matrix[i][j] = min(
                matrix[i - 1][j] + 1,
                matrix[i][j - 1] + 1,
                matrix[i - 1][j - 1] + cost
            )

    return matrix[len(b)][len(a)]
