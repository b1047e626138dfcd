# src/extraction/pdf_extractor.py — v2
"""PDF text extractor using PyMuPDF (fitz).

Parsing is CPU-bound, so it runs in a worker thread and sibling file tasks
keep making progress on the event loop meanwhile.
"""

from __future__ import annotations

import asyncio
import logging

from filerenamer.extraction.base_extractor import BaseTextExtractor, TextExtractionError

logger = logging.getLogger(__name__)


class PdfTextExtractor(BaseTextExtractor):
    """Extractor for PDF files using PyMuPDF."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".pdf"]

    async def extract_text(self, data: bytes) -> str:
        """Concatenate the text of every page, one page per line block."""
        return await asyncio.to_thread(self._extract_sync, data)

    @staticmethod
    def _extract_sync(data: bytes) -> str:
        try:
            import fitz  # PyMuPDF
        except ImportError as e:
            raise ImportError(
                "pymupdf package required for PDF extraction: pip install pymupdf"
            ) from e

        try:
            doc = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise TextExtractionError(f"Error extracting text from PDF: {e}") from e

        try:
            pages: list[str] = []
            for page_num in range(len(doc)):
                pages.append(doc[page_num].get_text("text"))
            logger.debug("Extracted %d page(s)", len(pages))
        except Exception as e:
            raise TextExtractionError(f"Error extracting text from PDF: {e}") from e
        finally:
            doc.close()

        return "\n".join(pages)
