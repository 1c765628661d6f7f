"""
Bounded approximate string search.

Finds every substring of a text within a given Levenshtein distance of a
pattern. Literal occurrences are found by direct scan; otherwise the
Sellers edit-distance recurrence is evaluated one text column at a time,
with Ukkonen's cut-off limiting each column to the rows that can still end
up within the error bound.
"""

from anchoring.models import StringMatch


def search(text: str, pattern: str, max_errors: int) -> list[StringMatch]:
    """
    Find approximate occurrences of pattern in text.

    Args:
        text: The text to search in
        pattern: The string to look for
        max_errors: Maximum edit distance of a reported match

    Returns:
        Matches in text order. When the pattern occurs literally, only the
        literal occurrences are returned (errors=0). Otherwise one match per
        end position whose minimum edit distance is within max_errors.
    """
    if not pattern or max_errors < 0:
        return []

    exact = find_exact(text, pattern)
    if exact:
        return exact

    return _find_approximate(text, pattern, max_errors)


def find_exact(text: str, pattern: str) -> list[StringMatch]:
    """Find every literal occurrence of pattern, overlaps included."""
    matches: list[StringMatch] = []
    if not pattern:
        return matches

    pos = text.find(pattern)
    while pos != -1:
        matches.append(StringMatch(start=pos, end=pos + len(pattern), errors=0))
        pos = text.find(pattern, pos + 1)

    return matches


def best_match(text: str, pattern: str, max_errors: int) -> StringMatch | None:
    """The match with the fewest errors (earliest on ties), or None."""
    matches = search(text, pattern, max_errors)
    if not matches:
        return None
    return min(matches, key=lambda m: m.errors)


def text_match_score(text: str, pattern: str) -> float:
    """
    Similarity of pattern to its best approximate occurrence in text.

    Returns 1 - errors / len(pattern), or 0.0 when either string is empty.
    """
    if not text or not pattern:
        return 0.0

    match = best_match(text, pattern, len(pattern))
    if match is None:
        return 0.0
    return 1 - match.errors / len(pattern)


def _find_approximate(text: str, pattern: str, max_errors: int) -> list[StringMatch]:
    """
    Evaluate the edit-distance matrix column by column.

    costs[i] is the minimum distance between pattern[:i] and some substring
    of text ending at the current column; starts[i] is where that substring
    begins. Row 0 is always 0 because a match may begin anywhere. Values
    above max_errors are clamped to max_errors + 1.
    """
    size = len(pattern)
    limit = max_errors + 1

    costs = [min(i, limit) for i in range(size + 1)]
    starts = [0] * (size + 1)

    # Deepest row whose cost is within the bound
    last_active = min(max_errors, size)

    matches: list[StringMatch] = []
    # Column 0: the empty substring at the start of the text
    if size <= max_errors:
        matches.append(StringMatch(start=0, end=0, errors=size))

    for column, char in enumerate(text, start=1):
        diag_cost, diag_start = costs[0], starts[0]
        starts[0] = column

        bottom = min(last_active + 1, size)
        for row in range(1, bottom + 1):
            left_cost, left_start = costs[row], starts[row]

            # Match or substitution
            cost = diag_cost + (pattern[row - 1] != char)
            start = diag_start
            # Pattern character not present in the text
            if costs[row - 1] + 1 < cost:
                cost = costs[row - 1] + 1
                start = starts[row - 1]
            # Extra character in the text
            if left_cost + 1 < cost:
                cost = left_cost + 1
                start = left_start

            costs[row] = min(cost, limit)
            starts[row] = start
            diag_cost, diag_start = left_cost, left_start

        last_active = bottom
        while costs[last_active] > max_errors:
            last_active -= 1

        if last_active == size:
            matches.append(
                StringMatch(start=starts[size], end=column, errors=costs[size])
            )

    return matches
