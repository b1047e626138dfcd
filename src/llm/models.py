# src/llm/models.py — v2
"""LLM-specific types: Message, LLMResponse and the provider wire schemas.

Provider responses are validated against explicit schemas instead of being
checked field by field. Unknown fields are ignored, missing required ones fail
validation.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant", "system"]
    content: str


class LLMResponse(BaseModel):
    """Normalized response from any LLM provider."""

    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    model: str
    provider: str
    latency_ms: int
    raw_response: Any = None


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# === Chat-completion wire shape (OpenAI) ===


class ChatMessage(_WireModel):
    role: str = "assistant"
    content: str | None = None


class ChatChoice(_WireModel):
    index: int = 0
    message: ChatMessage
    finish_reason: str | None = None


class ChatUsage(_WireModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0


class ChatCompletionResponse(_WireModel):
    """``choices[0].message.content`` carries the suggestion."""

    kind: Literal["chat_completion"] = "chat_completion"
    choices: list[ChatChoice]
    usage: ChatUsage | None = None

    def first_text(self) -> str | None:
        if not self.choices:
            return None
        return self.choices[0].message.content


# === Generative-content wire shape (Gemini) ===


class ContentPart(_WireModel):
    text: str | None = None


class Content(_WireModel):
    role: str | None = None
    parts: list[ContentPart] = Field(default_factory=list)


class Candidate(_WireModel):
    content: Content
    finish_reason: int | str | None = Field(
        default=None, validation_alias=AliasChoices("finish_reason", "finishReason")
    )


class GenerationUsage(_WireModel):
    prompt_token_count: int = Field(
        default=0, validation_alias=AliasChoices("prompt_token_count", "promptTokenCount")
    )
    candidates_token_count: int = Field(
        default=0,
        validation_alias=AliasChoices("candidates_token_count", "candidatesTokenCount"),
    )


class GenerateContentResponse(_WireModel):
    """``candidates[0].content.parts[0].text`` carries the suggestion."""

    kind: Literal["generate_content"] = "generate_content"
    candidates: list[Candidate]
    usage_metadata: GenerationUsage | None = Field(
        default=None, validation_alias=AliasChoices("usage_metadata", "usageMetadata")
    )

    def first_text(self) -> str | None:
        if not self.candidates or not self.candidates[0].content.parts:
            return None
        return self.candidates[0].content.parts[0].text
