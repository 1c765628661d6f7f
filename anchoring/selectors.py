"""
Selector engine: anchor quotes to document offsets and re-anchor them.

A quote is first confirmed at a caller-supplied offset, then searched
literally, and only then located by approximate search. Approximate
candidates are ranked by a weighted score combining quote similarity,
prefix/suffix context similarity and proximity to an expected offset.
"""

from anchoring.config import (
    CONTEXT_LENGTH,
    MATCH_THRESHOLD,
    NO_CONTEXT_THRESHOLD,
    POSITION_WEIGHT,
    PREFIX_WEIGHT,
    QUOTE_WEIGHT,
    SUFFIX_WEIGHT,
    max_errors_for,
)
from anchoring.logging_config import logger
from anchoring.models import (
    MatchContext,
    QuoteMatch,
    StringMatch,
    TextPosition,
    TextSelector,
)
from anchoring.search import search, text_match_score

MAX_SCORE = QUOTE_WEIGHT + PREFIX_WEIGHT + SUFFIX_WEIGHT + POSITION_WEIGHT


def score_candidate(
    text: str,
    quote: str,
    candidate: StringMatch,
    context: MatchContext | None = None,
) -> float:
    """
    Weighted confidence (0.0-1.0) that a candidate is the intended quote.

    Missing context contributes a neutral 1.0 for its component. Context is
    compared against a slice of the same length next to the candidate,
    truncated at the document boundaries.
    """
    context = context or MatchContext()

    quote_score = 1 - candidate.errors / len(quote)

    if context.prefix:
        before = text[max(0, candidate.start - len(context.prefix)) : candidate.start]
        prefix_score = text_match_score(before, context.prefix)
    else:
        prefix_score = 1.0

    if context.suffix:
        after = text[candidate.end : candidate.end + len(context.suffix)]
        suffix_score = text_match_score(after, context.suffix)
    else:
        suffix_score = 1.0

    if context.hint is not None:
        position_score = 1.0 - abs(candidate.start - context.hint) / len(text)
    else:
        position_score = 1.0

    raw_score = (
        QUOTE_WEIGHT * quote_score
        + PREFIX_WEIGHT * prefix_score
        + SUFFIX_WEIGHT * suffix_score
        + POSITION_WEIGHT * position_score
    )
    return raw_score / MAX_SCORE


def rank_candidates(
    text: str,
    quote: str,
    context: MatchContext | None = None,
) -> list[QuoteMatch]:
    """Score every approximate occurrence of quote, best first."""
    if not quote:
        return []

    candidates = search(text, quote, max_errors_for(quote))
    ranked = [
        QuoteMatch(
            start=c.start,
            end=c.end,
            score=score_candidate(text, quote, c, context),
            errors=c.errors,
        )
        for c in candidates
    ]
    # Stable sort keeps text order between equal scores
    ranked.sort(key=lambda m: m.score, reverse=True)
    return ranked


def match_quote(
    text: str,
    quote: str,
    context: MatchContext | None = None,
) -> QuoteMatch | None:
    """
    Find the best approximate match for a quote in text.

    Args:
        text: The full document text to search in
        quote: The quote to find
        context: Optional expected prefix, suffix and offset hint

    Returns:
        The highest-scoring candidate, or None if the quote is empty, no
        candidate is within the error bound, or the best score is below
        MATCH_THRESHOLD.
    """
    ranked = rank_candidates(text, quote, context)
    if not ranked:
        logger.debug(f"No candidates for quote '{_clip(quote)}'")
        return None

    best = ranked[0]
    logger.debug(
        f"{len(ranked)} candidate(s) for '{_clip(quote)}', best "
        f"[{best.start}, {best.end}) errors={best.errors} score={best.score:.3f}"
    )

    if best.score < MATCH_THRESHOLD:
        logger.debug(f"Rejected: score {best.score:.3f} below {MATCH_THRESHOLD}")
        return None

    return best


def compute_selector(
    text: str,
    quote: str,
    start_hint: int | None = None,
) -> TextSelector | None:
    """
    Compute a complete selector (offsets, exact text and context) for a quote.

    Resolution order:
    1. Confirm the quote literally at start_hint
    2. First literal occurrence in text
    3. Approximate match without context, accepted only at
       NO_CONTEXT_THRESHOLD or above

    Args:
        text: The full document text
        quote: The quote to anchor
        start_hint: Optional offset where the quote is expected to start

    Returns:
        TextSelector, or None if the quote could not be anchored
    """
    if not quote:
        return None

    start = -1
    if start_hint is not None and 0 <= start_hint <= len(text):
        if text[start_hint : start_hint + len(quote)] == quote:
            start = start_hint

    if start == -1:
        start = text.find(quote)

    if start != -1:
        return selector_at(text, start, start + len(quote))

    match = match_quote(text, quote)
    if match is None or match.score < NO_CONTEXT_THRESHOLD:
        logger.debug(f"Could not anchor '{_clip(quote)}' without context")
        return None

    return selector_at(text, match.start, match.end)


def selector_at(text: str, start: int, end: int) -> TextSelector:
    """Build a selector for text[start:end] with surrounding context."""
    return TextSelector(
        start_offset=start,
        end_offset=end,
        exact=text[start:end],
        prefix=text[max(0, start - CONTEXT_LENGTH) : start],
        suffix=text[end : min(len(text), end + CONTEXT_LENGTH)],
    )


def reanchor_highlight(text: str, selector: TextSelector) -> TextPosition | None:
    """
    Relocate a stored selector in a possibly edited document.

    The stored prefix, suffix and start offset act as context, so the
    general MATCH_THRESHOLD applies.

    Returns:
        New offsets, or None if re-anchoring failed
    """
    match = match_quote(
        text,
        selector.exact,
        MatchContext(
            prefix=selector.prefix,
            suffix=selector.suffix,
            hint=selector.start_offset,
        ),
    )
    if match is None:
        return None

    return TextPosition(start_offset=match.start, end_offset=match.end)


def _clip(value: str, length: int = 40) -> str:
    return value if len(value) <= length else value[: length - 3] + "..."
