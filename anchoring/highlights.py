"""
Batch helpers for anchoring proposed quotes and refreshing stored highlights.

These operate on in-memory records only. Persisting the results (and the
content digest) is the caller's job.
"""

from collections.abc import Iterable

from pydantic import BaseModel

from anchoring.content_hash import compute_content_hash, has_content_changed
from anchoring.logging_config import logger
from anchoring.models import Highlight, TextSelector
from anchoring.selectors import compute_selector, reanchor_highlight, selector_at


class RefreshResult(BaseModel):
    """
    Outcome of checking a document's highlights against its current text.

    Attributes:
        changed: True if the content digest differed from the stored one
        content_hash: Digest of the current text, to be stored by the caller
        highlights: The highlights, re-anchored when the content changed
        relocated: Number of highlights anchored again
        orphaned: Number of highlights that could not be anchored (now stale)
    """

    changed: bool
    content_hash: str
    highlights: list[Highlight] = []
    relocated: int = 0
    orphaned: int = 0


def anchor_quotes(text: str, quotes: Iterable[str]) -> list[TextSelector]:
    """
    Anchor each quote in text, skipping those that cannot be anchored.

    Quotes proposed by a language model often paraphrase instead of quoting
    verbatim, so a missing anchor is logged rather than raised.
    """
    selectors: list[TextSelector] = []
    for quote in quotes:
        selector = compute_selector(text, quote)
        if selector is None:
            logger.info(f"Skipping quote that could not be anchored: '{quote[:60]}'")
            continue
        selectors.append(selector)
    return selectors


def reanchor(highlight: Highlight, text: str) -> Highlight:
    """
    Copy of highlight re-anchored against text.

    On success the selector is rebuilt at the new offsets with fresh context
    and the copy is no longer stale. On failure the old selector is kept and
    the copy is marked stale.
    """
    position = reanchor_highlight(text, highlight.selector)
    if position is None:
        return highlight.model_copy(update={"is_stale": True})

    selector = selector_at(text, position.start_offset, position.end_offset)
    return highlight.model_copy(update={"selector": selector, "is_stale": False})


def mark_stale(highlights: Iterable[Highlight]) -> list[Highlight]:
    """Copies of highlights flagged as stale."""
    return [h.model_copy(update={"is_stale": True}) for h in highlights]


def refresh_highlights(
    text: str,
    highlights: Iterable[Highlight],
    stored_hash: str | None,
) -> RefreshResult:
    """
    Re-anchor highlights when text no longer matches stored_hash.

    A missing stored_hash counts as changed. Unchanged content returns the
    highlights as given, including any stale flags.
    """
    highlights = list(highlights)
    content_hash = compute_content_hash(text)

    if stored_hash is not None and not has_content_changed(text, stored_hash):
        return RefreshResult(
            changed=False, content_hash=content_hash, highlights=highlights
        )

    refreshed: list[Highlight] = []
    with logger.indent_block(f"Re-anchoring {len(highlights)} highlight(s)"):
        for highlight in highlights:
            updated = reanchor(highlight, text)
            if updated.is_stale:
                logger.warning(
                    f"Highlight {highlight.id or '?'} could not be re-anchored"
                )
            refreshed.append(updated)

    orphaned = sum(1 for h in refreshed if h.is_stale)
    return RefreshResult(
        changed=True,
        content_hash=content_hash,
        highlights=refreshed,
        relocated=len(refreshed) - orphaned,
        orphaned=orphaned,
    )
