"""
Content hashing for change detection.

Store the digest of a document next to the highlights anchored in it; when
the digest no longer matches, those highlights must be re-anchored before
their offsets are trusted.
"""

import hashlib


def compute_content_hash(content: str) -> str:
    """Hex-encoded SHA-256 digest of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def has_content_changed(content: str, stored_hash: str) -> bool:
    """True if content no longer hashes to stored_hash."""
    return compute_content_hash(content) != stored_hash
