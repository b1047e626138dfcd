# src/naming/resolver.py — v2
"""Suggestion resolver: extracted text in, sanitized filename out.

The cache is checked exactly once, here, before any provider is touched.
On a miss the primary provider is asked; if it fails at runtime the fallback
provider is asked once. A missing API key is a configuration error and is
raised immediately. The winning answer is sanitized and cached.
"""

from __future__ import annotations

import logging
from typing import Callable

from filerenamer.cache.suggestion_cache import SuggestionCache
from filerenamer.config.settings import ConfigurationError, Settings
from filerenamer.llm.base_client import BaseLLMClient, ProviderResponseError
from filerenamer.llm.client_factory import create_llm_client
from filerenamer.llm.config import ProviderAssignment, resolve_provider_chain
from filerenamer.logging.context import set_provider_context
from filerenamer.naming.prompts import SYSTEM_PROMPT, build_messages
from filerenamer.naming.sanitizer import PDF_EXTENSION, sanitize

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], BaseLLMClient]


class SuggestionError(Exception):
    """No provider produced a usable suggestion."""

    def __init__(self, failures: dict[str, Exception]):
        self.failures = failures
        detail = "; ".join(f"{name}: {exc}" for name, exc in failures.items())
        super().__init__(f"Could not get a filename suggestion ({detail})")


class SuggestionResolver:
    """Resolve a filename suggestion with caching and provider fallback."""

    def __init__(
        self,
        settings: Settings,
        cache: SuggestionCache,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._client_factory = client_factory or self._create_client
        self._clients: dict[str, BaseLLMClient] = {}

    @property
    def cache(self) -> SuggestionCache:
        return self._cache

    async def suggest_name(self, file_name: str, content: str) -> str:
        """Return a sanitized ``.pdf`` filename for ``content``.

        A provider without an API key stops the lookup at once; only
        runtime failures move on to the next provider.

        Raises:
            ConfigurationError: If a provider that has to be asked has no API key.
            SuggestionError: If every provider tried failed.
        """
        cached = self._cache.get(content)
        if cached is not None:
            logger.info("Suggestion cache hit for %s", file_name)
            return cached

        failures: dict[str, Exception] = {}
        for assignment in resolve_provider_chain(self._settings):
            set_provider_context(assignment.provider)
            try:
                suggestion = await self._ask(assignment, file_name, content)
            except ConfigurationError:
                logger.error(
                    "%s provider (%s) is not configured", assignment.role, assignment.provider,
                )
                raise
            except Exception as e:
                failures[assignment.provider] = e
                logger.warning(
                    "%s provider (%s) failed for %s: %s",
                    assignment.role, assignment.key, file_name, e,
                )
                continue
            finally:
                set_provider_context(None)

            self._cache.put(content, suggestion)
            logger.info(
                "Suggested %s for %s via %s", suggestion, file_name, assignment.key,
            )
            return suggestion

        raise SuggestionError(failures)

    async def _ask(self, assignment: ProviderAssignment, file_name: str, content: str) -> str:
        """One provider call; returns the sanitized suggestion."""
        client = self._get_client(assignment)
        section = self._settings.provider_settings(assignment.provider)
        response = await client.complete(
            build_messages(file_name, content, assignment.content_window),
            system=SYSTEM_PROMPT,
            max_tokens=section.max_tokens,
            temperature=section.temperature,
        )
        if not response.content or not response.content.strip():
            raise ProviderResponseError(assignment.provider, "empty suggestion")
        suggestion = sanitize(response.content)
        if suggestion == PDF_EXTENSION:
            raise ProviderResponseError(
                assignment.provider, f"no usable characters in {response.content!r}"
            )
        return suggestion

    def _get_client(self, assignment: ProviderAssignment) -> BaseLLMClient:
        client = self._clients.get(assignment.key)
        if client is None:
            client = self._client_factory(assignment.provider)
            self._clients[assignment.key] = client
        return client

    def _create_client(self, provider: str) -> BaseLLMClient:
        return create_llm_client(provider, self._settings)
