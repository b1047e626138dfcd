# src/llm/adapters/openai_adapter.py — v2
"""OpenAI chat-completion adapter implementing BaseLLMClient.

Uses the official openai SDK. The SDK response is dumped to a dict and
validated against ``ChatCompletionResponse``.
"""

from __future__ import annotations

import time
from typing import Any

from pydantic import ValidationError

from filerenamer.llm.base_client import BaseLLMClient, ProviderResponseError
from filerenamer.llm.models import ChatCompletionResponse, LLMResponse, Message

PROVIDER = "OpenAI"


def parse_chat_completion(payload: Any) -> ChatCompletionResponse:
    """Validate a chat-completion payload and require non-blank text."""
    if payload is None:
        raise ProviderResponseError(PROVIDER, "empty response")
    try:
        parsed = ChatCompletionResponse.model_validate(payload)
    except ValidationError as e:
        raise ProviderResponseError(
            PROVIDER, f"malformed response ({e.error_count()} validation errors)"
        ) from e
    text = parsed.first_text()
    if text is None or not text.strip():
        raise ProviderResponseError(PROVIDER, "no text in choices[0].message.content")
    return parsed


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT adapter."""

    def __init__(
        self,
        model: str = "gpt-3.5-turbo",
        api_key: str = "",
        timeout_s: float = 60.0,
        client: Any = None,
        **kwargs: Any,
    ):
        self._model = model
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self._api_key, timeout=self._timeout_s, max_retries=0,
            )
        return self._client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 60,
        temperature: float = 0.2,
    ) -> LLMResponse:
        client = self._get_client()
        oai_messages: list[dict[str, Any]] = []
        if system:
            oai_messages.append({"role": "system", "content": system})
        for m in messages:
            oai_messages.append({"role": m.role, "content": m.content})

        t0 = time.monotonic()
        resp = await client.chat.completions.create(
            model=self._model,
            messages=oai_messages,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        latency = int((time.monotonic() - t0) * 1000)

        payload = resp if isinstance(resp, dict) or resp is None else resp.model_dump()
        parsed = parse_chat_completion(payload)
        usage = parsed.usage
        return LLMResponse(
            content=(parsed.first_text() or "").strip(),
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=self._model,
            provider=PROVIDER,
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return PROVIDER
