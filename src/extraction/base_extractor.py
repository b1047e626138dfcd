# src/extraction/base_extractor.py — v2
"""Abstract text extractor interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class TextExtractionError(Exception):
    """Raised when a document cannot be parsed into text."""


class BaseTextExtractor(ABC):
    """Turns raw document bytes into plain text."""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """File extensions this extractor handles (e.g., ['.pdf'])."""

    @abstractmethod
    async def extract_text(self, data: bytes) -> str:
        """Return the document's text, pages concatenated in order.

        Raises:
            TextExtractionError: If the bytes cannot be parsed.
        """
