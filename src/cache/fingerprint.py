# src/cache/fingerprint.py — v3
"""Content fingerprint used as the suggestion cache key.

SHA-256 over the full extracted text, UTF-8 encoded, rendered as hex. No
normalization is applied: two documents share a key only if their text is
identical.
"""

from __future__ import annotations

import hashlib

DIGEST_HEX_LENGTH = 64


def compute_content_hash(text: str) -> str:
    """Return the fixed-width hex digest of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
