"""String similarity between tag names.

Pure functions, no I/O. Both are case-insensitive.
"""


def levenshtein(a: str, b: str) -> int:
    """Compute the edit distance between two strings.

    Minimum number of single-character insertions, deletions or
    substitutions (unit cost each) turning ``a`` into ``b``, compared
    case-insensitively. Uses a ``(len(b) + 1) x (len(a) + 1)`` table.

    Args:
        a: First string
        b: Second string

    Returns:
        Edit distance, symmetric in its arguments
    """
    s = a.lower()
    t = b.lower()

    table = [[0] * (len(s) + 1) for _ in range(len(t) + 1)]
    for i in range(len(t) + 1):
        table[i][0] = i
    for j in range(len(s) + 1):
        table[0][j] = j

    for i in range(1, len(t) + 1):
        for j in range(1, len(s) + 1):
            if t[i - 1] == s[j - 1]:
                table[i][j] = table[i - 1][j - 1]
            else:
                table[i][j] = 1 + min(
                    table[i - 1][j - 1],  # substitute
                    table[i][j - 1],  # insert
                    table[i - 1][j],  # delete
                )

    return table[len(t)][len(s)]


def similarity(a: str, b: str) -> float:
    """Normalized similarity of two names in ``[0, 1]``.

    ``1.0`` when the case-folded strings are identical, otherwise
    ``1 - levenshtein(a, b) / max(len(a), len(b))``.

    Example:
        ``similarity("React", "Reactjs")`` is ``1 - 2/7``, about 0.714.
    """
    s = a.lower()
    t = b.lower()
    if s == t:
        return 1.0
    return 1.0 - levenshtein(s, t) / max(len(s), len(t))
