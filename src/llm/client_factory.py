# src/llm/client_factory.py — v3
"""Factory: instantiate an LLM client from a provider name.

Called by the suggestion resolver each time it tries a provider, so a
missing API key surfaces as that provider's failure rather than at startup.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from filerenamer.config.settings import Settings
from filerenamer.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "OpenAI": "filerenamer.llm.adapters.openai_adapter.OpenAIAdapter",
    "Gemini": "filerenamer.llm.adapters.gemini_adapter.GeminiAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    settings: Settings,
    **kwargs: Any,
) -> BaseLLMClient:
    """Instantiate the adapter for ``provider`` with its configured credentials.

    Args:
        provider: Provider identifier (OpenAI, Gemini).
        settings: Application settings (API keys, model, timeout).
        **kwargs: Extra adapter arguments (e.g. an injected SDK client).

    Raises:
        UnsupportedProviderError: If provider is not registered.
        ConfigurationError: If the provider's API key is not configured.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported AI provider: {provider!r}. "
            f"Available: {', '.join(available_providers())}"
        )

    api_key = settings.api_key_for(provider)
    section = settings.provider_settings(provider)

    init_kwargs = dict(kwargs)
    init_kwargs.setdefault("model", section.model)
    init_kwargs.setdefault("timeout_s", section.timeout_s)
    init_kwargs["api_key"] = api_key

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])
    logger.debug("Creating LLM client: provider=%s, model=%s", provider, init_kwargs["model"])
    return adapter_cls(**init_kwargs)


def available_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
