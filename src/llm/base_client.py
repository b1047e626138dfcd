# src/llm/base_client.py — v2
"""Abstract LLM client interface and the shared response-parsing error."""

from __future__ import annotations

from abc import ABC, abstractmethod

from filerenamer.llm.models import LLMResponse, Message


class ProviderResponseError(Exception):
    """Provider answered, but the response was missing, malformed or empty."""

    def __init__(self, provider: str, reason: str):
        self.provider = provider
        self.reason = reason
        super().__init__(f"{provider} returned an unusable response: {reason}")


class BaseLLMClient(ABC):
    """Unified interface for all LLM providers."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 60,
        temperature: float = 0.2,
    ) -> LLMResponse:
        """Text completion.

        Raises:
            ProviderResponseError: If the response carries no usable text.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (OpenAI, Gemini)."""
