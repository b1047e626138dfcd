# src/llm/adapters/gemini_adapter.py — v1
"""Google Gemini generative-content adapter implementing BaseLLMClient.

Uses the google-generativeai SDK. The SDK response is converted with
``to_dict()`` and validated against ``GenerateContentResponse``.
"""

from __future__ import annotations

import time
from typing import Any, Callable

from pydantic import ValidationError

from filerenamer.llm.base_client import BaseLLMClient, ProviderResponseError
from filerenamer.llm.models import GenerateContentResponse, LLMResponse, Message

PROVIDER = "Gemini"


def parse_generate_content(payload: Any) -> GenerateContentResponse:
    """Validate a generate-content payload and require non-blank text."""
    if payload is None:
        raise ProviderResponseError(PROVIDER, "empty response")
    try:
        parsed = GenerateContentResponse.model_validate(payload)
    except ValidationError as e:
        raise ProviderResponseError(
            PROVIDER, f"malformed response ({e.error_count()} validation errors)"
        ) from e
    text = parsed.first_text()
    if text is None or not text.strip():
        raise ProviderResponseError(
            PROVIDER, "no text in candidates[0].content.parts[0].text"
        )
    return parsed


class GeminiAdapter(BaseLLMClient):
    """Google Gemini adapter."""

    def __init__(
        self,
        model: str = "gemini-1.5-flash",
        api_key: str = "",
        timeout_s: float = 60.0,
        model_factory: Callable[[str | None], Any] | None = None,
        **kwargs: Any,
    ):
        self._model = model
        self._api_key = api_key
        self._timeout_s = timeout_s
        self._model_factory = model_factory or self._default_model_factory

    def _default_model_factory(self, system: str | None) -> Any:
        import google.generativeai as genai

        genai.configure(api_key=self._api_key)
        return genai.GenerativeModel(self._model, system_instruction=system)

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 60,
        temperature: float = 0.2,
    ) -> LLMResponse:
        model = self._model_factory(system)

        # Gemini has no system role inside contents
        contents = []
        for m in messages:
            role = "model" if m.role == "assistant" else "user"
            contents.append({"role": role, "parts": [{"text": m.content}]})

        t0 = time.monotonic()
        resp = await model.generate_content_async(
            contents,
            generation_config={"max_output_tokens": max_tokens, "temperature": temperature},
            request_options={"timeout": self._timeout_s},
        )
        latency = int((time.monotonic() - t0) * 1000)

        payload = resp if isinstance(resp, dict) or resp is None else resp.to_dict()
        parsed = parse_generate_content(payload)
        usage = parsed.usage_metadata
        return LLMResponse(
            content=(parsed.first_text() or "").strip(),
            input_tokens=usage.prompt_token_count if usage else 0,
            output_tokens=usage.candidates_token_count if usage else 0,
            model=self._model,
            provider=PROVIDER,
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return PROVIDER
