"""
anchoring - Locate quoted spans in mutable documents.

This library provides:
- Bounded approximate string search
- W3C Web Annotation style selectors (offsets + exact text + context)
- Re-anchoring of stored selectors after a document is edited
- Content hashing to detect when stored selectors may be stale

Import patterns:

    # Primary API (recommended)
    from anchoring import compute_selector, match_quote, reanchor_highlight

    # Full submodule imports (for internal types)
    from anchoring.models import StringMatch, TextPosition
    from anchoring.search import search

Example usage:

    from anchoring import compute_selector, reanchor_highlight

    text = "The quick brown fox jumps over the lazy dog"
    selector = compute_selector(text, "brown fox")

    edited = "Look: " + text
    position = reanchor_highlight(edited, selector)
    if position is None:
        print("Quote could not be re-anchored")
"""

from anchoring.content_hash import compute_content_hash, has_content_changed
from anchoring.highlights import RefreshResult, anchor_quotes, refresh_highlights
from anchoring.models import Highlight, MatchContext, QuoteMatch, TextSelector
from anchoring.selectors import compute_selector, match_quote, reanchor_highlight

__version__ = "0.1.0"

# Primary public API
__all__ = [
    "Highlight",
    "MatchContext",
    "QuoteMatch",
    "RefreshResult",
    "TextSelector",
    "anchor_quotes",
    "compute_content_hash",
    "compute_selector",
    "has_content_changed",
    "match_quote",
    "reanchor_highlight",
    "refresh_highlights",
]
