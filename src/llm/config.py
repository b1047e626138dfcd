# src/llm/config.py — v2
"""Provider routing: which provider is asked first, and which one next.

Resolution order:
  1. ``AI_PROVIDER`` (OpenAI or Gemini, default OpenAI) is the primary.
  2. The other supported provider is the fallback, unless
     ``AI_FALLBACK_ENABLED`` is false.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from filerenamer.config.settings import Settings

SUPPORTED_PROVIDERS: tuple[str, ...] = ("OpenAI", "Gemini")


@dataclass(frozen=True)
class ProviderAssignment:
    """Resolved provider:model with its role in the fallback chain."""

    provider: str
    model: str
    content_window: int | None
    role: Literal["primary", "fallback"]

    @property
    def key(self) -> str:
        """Return 'provider:model' string."""
        return f"{self.provider}:{self.model}"


def _assignment(settings: Settings, provider: str, role: str) -> ProviderAssignment:
    section = settings.provider_settings(provider)
    return ProviderAssignment(
        provider=provider,
        model=section.model,
        content_window=section.content_window,
        role=role,  # type: ignore[arg-type]
    )


def resolve_provider_chain(settings: Settings) -> list[ProviderAssignment]:
    """Return the providers to try, primary first."""
    primary = settings.ai_provider
    chain = [_assignment(settings, primary, "primary")]
    if settings.ai_fallback_enabled:
        for provider in SUPPORTED_PROVIDERS:
            if provider != primary:
                chain.append(_assignment(settings, provider, "fallback"))
                break
    return chain
