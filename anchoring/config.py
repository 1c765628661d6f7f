"""Shared configuration for the anchoring module."""

# Characters of document context stored before and after a quote (W3C convention)
CONTEXT_LENGTH = 32

# Absolute cap on edit errors tolerated for a single quote
MAX_ERRORS_CAP = 256

# Candidate scoring weights (they sum to 100)
QUOTE_WEIGHT = 50
PREFIX_WEIGHT = 20
SUFFIX_WEIGHT = 20
POSITION_WEIGHT = 10

# Minimum normalized score for a candidate to be accepted
MATCH_THRESHOLD = 0.5

# Stricter bar for fuzzy anchoring without any prefix/suffix context
NO_CONTEXT_THRESHOLD = 0.95


def max_errors_for(pattern: str) -> int:
    """Error bound for a pattern: half its length, capped at MAX_ERRORS_CAP."""
    return min(MAX_ERRORS_CAP, len(pattern) // 2)


def validate_max_errors(max_errors: int) -> None:
    """Validate an error bound.

    Args:
        max_errors: Maximum number of edit errors

    Raises:
        ValueError: If max_errors is negative
    """
    if max_errors < 0:
        raise ValueError(f"Invalid error bound: {max_errors}. Expected 0 or more")
