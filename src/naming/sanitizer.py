# src/naming/sanitizer.py — v1
"""Turn a raw AI suggestion into a safe, bounded-length ``.pdf`` filename.

Output always matches ``^[a-z0-9_-]{0,46}\\.pdf$``. ``sanitize`` is pure and
idempotent: ``sanitize(sanitize(x)) == sanitize(x)``.
"""

from __future__ import annotations

import re

PDF_EXTENSION = ".pdf"
MAX_FILENAME_LENGTH = 50
MAX_STEM_LENGTH = MAX_FILENAME_LENGTH - len(PDF_EXTENSION)

_SEPARATORS = re.compile(r"[\s.]+")
_DISALLOWED = re.compile(r"[^a-z0-9_-]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")
# Reserved on Windows, plus ASCII control characters.
_ILLEGAL_FS_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class ArgumentError(ValueError):
    """Raised when a suggestion is missing or blank."""


def strip_extension(name: str) -> str:
    """Drop the final extension, if any (``'a.b.pdf'`` -> ``'a.b'``).

    A bare ``'.pdf'`` counts as an extension, unlike ``os.path.splitext``.
    """
    stem, dot, ext = name.rpartition(".")
    if dot and ext and not any(c.isspace() or c in "/\\" for c in ext):
        return stem
    return name


def sanitize(raw: str | None) -> str:
    """Normalize a suggestion to a lowercase ``[a-z0-9_-]`` stem plus ``.pdf``.

    Whitespace and dots become underscores, every other disallowed character
    is removed, underscore runs collapse, and the stem is trimmed of edge
    ``_``/``-`` and truncated to 46 characters.

    Raises:
        ArgumentError: If ``raw`` is None, empty or whitespace-only.
    """
    if raw is None or not raw.strip():
        raise ArgumentError("Suggestion must not be empty")

    stem = strip_extension(raw.strip()).lower()
    stem = _SEPARATORS.sub("_", stem)
    stem = _DISALLOWED.sub("", stem)
    stem = _UNDERSCORE_RUNS.sub("_", stem)
    stem = stem.strip("_-")
    # Truncation can expose a trailing separator again
    stem = stem[:MAX_STEM_LENGTH].strip("_-")
    return stem + PDF_EXTENSION


def strip_invalid_filename_chars(name: str) -> str:
    """Remove characters that no common filesystem accepts in a file name."""
    return _ILLEGAL_FS_CHARS.sub("", name)


def to_pdf_filename(suggested_name: str) -> str:
    """Display name for a rename: the suggestion's stem with ``.pdf``."""
    return strip_extension(suggested_name.strip()) + PDF_EXTENSION
