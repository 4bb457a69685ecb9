"""
String similarity for free-text translation answers.
"""


def levenshtein_distance(s1: str, s2: str) -> int:
    """Classic whole-string edit distance (insert, delete, substitute)."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def similarity_ratio(s1: str, s2: str) -> float:
    """
    Similarity in [0, 1] relative to the longer string.

    Two empty strings are identical (1.0).

    Examples:
        >>> similarity_ratio("buonasera", "buonaser")
        0.8888888888888888
    """
    max_len = max(len(s1), len(s2))
    if max_len == 0:
        return 1.0
    return (max_len - levenshtein_distance(s1, s2)) / max_len
