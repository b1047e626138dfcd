# src/naming/prompts.py — v1
"""Prompt templates for filename suggestions.

Each provider gets the same instructions; only the amount of document text
differs (chat providers get a truncated window, Gemini the full text).
"""

from __future__ import annotations

from filerenamer.llm.models import Message

SYSTEM_PROMPT = (
    "You are a helpful assistant that suggests concise, descriptive filenames "
    "based on PDF content. The filename must be lowercase, use underscores or "
    "hyphens instead of spaces, contain only letters, numbers, underscores and "
    "hyphens, be at most 50 characters long, and end with .pdf. "
    "Reply with the filename only."
)


def truncate_content(content: str, window: int | None) -> str:
    """Return the first ``window`` characters of ``content`` (all if None)."""
    if window is None or len(content) <= window:
        return content
    return content[:window]


def build_user_prompt(file_name: str, content: str, window: int | None) -> str:
    """User turn asking for a filename for this document."""
    excerpt = truncate_content(content, window)
    return (
        "Please suggest a filename for a PDF with the following content:\n\n"
        f"{excerpt}\n\n"
        f"Current filename is: {file_name}"
    )


def build_messages(file_name: str, content: str, window: int | None) -> list[Message]:
    """Conversation sent to a provider, system instructions excluded."""
    return [Message(role="user", content=build_user_prompt(file_name, content, window))]
