# tests/unit/naming/test_resolver.py — v2
"""Tests for naming/resolver.py: cache-first lookup and provider fallback."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from filerenamer.config.settings import ConfigurationError, Settings
from filerenamer.llm.base_client import ProviderResponseError
from filerenamer.naming.resolver import SuggestionError, SuggestionResolver


def _keyed_factory(settings, clients):
    """Client factory that enforces API keys like the real one."""

    def factory(provider):
        settings.api_key_for(provider)
        return clients[provider]

    return factory


class TestCacheFirst:
    @pytest.mark.asyncio
    async def test_cache_hit_skips_providers(self, settings, cache):
        cache.put("invoice body", "cached_name.pdf")
        factory = MagicMock()
        resolver = SuggestionResolver(settings, cache, client_factory=factory)

        result = await resolver.suggest_name("scan.pdf", "invoice body")

        assert result == "cached_name.pdf"
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_miss_asks_primary_and_caches_sanitized(
        self, settings, cache, client_factory, openai_client, gemini_client
    ):
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)

        result = await resolver.suggest_name("scan.pdf", "quarterly numbers")

        assert result == "quarterly_report_q3.pdf"
        assert cache.get("quarterly numbers") == "quarterly_report_q3.pdf"
        openai_client.complete.assert_awaited_once()
        gemini_client.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_second_lookup_is_served_from_cache(self, settings, cache, client_factory, openai_client):
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)
        await resolver.suggest_name("a.pdf", "same text")
        await resolver.suggest_name("b.pdf", "same text")
        assert openai_client.complete.await_count == 1


class TestFallback:
    @pytest.mark.asyncio
    async def test_primary_failure_uses_fallback_once(
        self, settings, cache, client_factory, openai_client, gemini_client
    ):
        openai_client.complete.side_effect = TimeoutError("slow")
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)

        with patch.object(cache, "put", wraps=cache.put) as put_spy:
            result = await resolver.suggest_name("scan.pdf", "body")

        assert result == "gemini_choice.pdf"
        assert openai_client.complete.await_count == 1
        assert gemini_client.complete.await_count == 1
        put_spy.assert_called_once_with("body", "gemini_choice.pdf")

    @pytest.mark.asyncio
    async def test_unusable_primary_answer_uses_fallback(
        self, settings, cache, client_factory, openai_client, gemini_client
    ):
        openai_client.complete.side_effect = ProviderResponseError("OpenAI", "no choices")
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)
        assert await resolver.suggest_name("scan.pdf", "body") == "gemini_choice.pdf"

    @pytest.mark.asyncio
    async def test_answer_without_usable_chars_falls_back(
        self, settings, cache, make_client, gemini_client
    ):
        clients = {"OpenAI": make_client("OpenAI", "!!!"), "Gemini": gemini_client}
        resolver = SuggestionResolver(settings, cache, client_factory=clients.__getitem__)
        assert await resolver.suggest_name("scan.pdf", "body") == "gemini_choice.pdf"

    @pytest.mark.asyncio
    async def test_both_fail(self, settings, cache, client_factory, openai_client, gemini_client):
        openai_client.complete.side_effect = RuntimeError("openai down")
        gemini_client.complete.side_effect = RuntimeError("gemini down")
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)

        with pytest.raises(SuggestionError) as exc_info:
            await resolver.suggest_name("scan.pdf", "body")

        assert set(exc_info.value.failures) == {"OpenAI", "Gemini"}
        assert "gemini down" in str(exc_info.value)
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_fallback_disabled(self, settings, cache, client_factory, openai_client, gemini_client):
        settings.ai_fallback_enabled = False
        openai_client.complete.side_effect = RuntimeError("down")
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)

        with pytest.raises(SuggestionError):
            await resolver.suggest_name("scan.pdf", "body")
        gemini_client.complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_gemini_primary(self, settings, cache, client_factory, openai_client):
        settings.ai_provider = "Gemini"
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)
        assert await resolver.suggest_name("scan.pdf", "body") == "gemini_choice.pdf"
        openai_client.complete.assert_not_awaited()


class TestMissingKeys:
    @pytest.mark.asyncio
    async def test_missing_primary_key_fails_fast(self, cache, openai_client, gemini_client):
        s = Settings(_env_file=None, ai_provider="OpenAI", gemini={"api_key": "gm"})
        clients = {"OpenAI": openai_client, "Gemini": gemini_client}
        resolver = SuggestionResolver(s, cache, client_factory=_keyed_factory(s, clients))

        with pytest.raises(ConfigurationError, match="OpenAI:ApiKey"):
            await resolver.suggest_name("scan.pdf", "body")

        openai_client.complete.assert_not_awaited()
        gemini_client.complete.assert_not_awaited()
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_primary_failure_with_unkeyed_fallback(self, cache, openai_client, gemini_client):
        s = Settings(_env_file=None, ai_provider="OpenAI", openai={"api_key": "sk"})
        openai_client.complete.side_effect = RuntimeError("openai down")
        clients = {"OpenAI": openai_client, "Gemini": gemini_client}
        resolver = SuggestionResolver(s, cache, client_factory=_keyed_factory(s, clients))

        with pytest.raises(ConfigurationError, match="Gemini:ApiKey"):
            await resolver.suggest_name("scan.pdf", "body")

        assert openai_client.complete.await_count == 1
        gemini_client.complete.assert_not_awaited()
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_no_keys_is_configuration_error(self, cache, openai_client, gemini_client):
        s = Settings(_env_file=None)
        clients = {"OpenAI": openai_client, "Gemini": gemini_client}
        resolver = SuggestionResolver(s, cache, client_factory=_keyed_factory(s, clients))

        with pytest.raises(ConfigurationError):
            await resolver.suggest_name("scan.pdf", "body")

    @pytest.mark.asyncio
    async def test_default_factory_checks_keys(self, cache):
        resolver = SuggestionResolver(Settings(_env_file=None), cache)
        with pytest.raises(ConfigurationError):
            await resolver.suggest_name("scan.pdf", "body")


class TestPromptWindow:
    @pytest.mark.asyncio
    async def test_openai_gets_truncated_text(self, settings, cache, client_factory, openai_client):
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)
        await resolver.suggest_name("scan.pdf", "z" * 5000)

        kwargs = openai_client.complete.call_args.kwargs
        prompt = openai_client.complete.call_args.args[0][0].content
        assert "z" * 1000 in prompt
        assert "z" * 1001 not in prompt
        assert kwargs["max_tokens"] == 60
        assert kwargs["temperature"] == pytest.approx(0.2)
        assert kwargs["system"]

    @pytest.mark.asyncio
    async def test_gemini_gets_full_text(self, settings, cache, client_factory, gemini_client):
        settings.ai_provider = "Gemini"
        resolver = SuggestionResolver(settings, cache, client_factory=client_factory)
        await resolver.suggest_name("scan.pdf", "z" * 5000)

        prompt = gemini_client.complete.call_args.args[0][0].content
        assert "z" * 5000 in prompt

    @pytest.mark.asyncio
    async def test_clients_reused_across_calls(self, settings, cache, openai_client):
        factory = MagicMock(return_value=openai_client)
        resolver = SuggestionResolver(settings, cache, client_factory=factory)
        await resolver.suggest_name("a.pdf", "one")
        await resolver.suggest_name("b.pdf", "two")
        factory.assert_called_once_with("OpenAI")
