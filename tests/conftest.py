# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides settings without .env loading, mock LLM clients, in-memory file
sources and extractors. No network access. Provider SDKs are never imported.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from filerenamer.cache.suggestion_cache import SuggestionCache
from filerenamer.config.settings import Settings
from filerenamer.core.models import FileRecord
from filerenamer.extraction.base_extractor import BaseTextExtractor
from filerenamer.llm.models import LLMResponse
from filerenamer.storage.file_source import BaseFileSource
from filerenamer.storage.memory_store import InMemoryRecordStore


# === FAKES ===


class DictFileSource(BaseFileSource):
    """Serves bytes from a dict; unknown paths read as None."""

    def __init__(self, files: dict[str, bytes | None] | None = None) -> None:
        self.files = dict(files or {})
        self.calls: list[str] = []

    async def fetch_bytes(self, file_path: str) -> bytes | None:
        self.calls.append(file_path)
        return self.files.get(file_path)


class Utf8Extractor(BaseTextExtractor):
    """Treats the bytes as UTF-8 text, standing in for a PDF parser."""

    @property
    def supported_extensions(self) -> list[str]:
        return [".pdf"]

    async def extract_text(self, data: bytes) -> str:
        return data.decode("utf-8")


def make_llm_response(content: str, provider: str = "OpenAI") -> LLMResponse:
    return LLMResponse(
        content=content,
        input_tokens=100,
        output_tokens=5,
        model="test-model",
        provider=provider,
        latency_ms=12,
    )


def make_llm_client(provider: str, content: str = "suggested_name.pdf") -> AsyncMock:
    """Mock BaseLLMClient answering ``content``."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=make_llm_response(content, provider))
    client.provider_name = provider
    return client


# === FIXTURES: Settings ===


@pytest.fixture
def settings() -> Settings:
    """Both providers configured, OpenAI primary, in-memory storage."""
    return Settings(
        _env_file=None,
        ai_provider="OpenAI",
        openai={"api_key": "sk-test"},
        gemini={"api_key": "gm-test"},
        record_store_backend="memory",
        log_file=None,
    )


# === FIXTURES: Mock LLM ===


@pytest.fixture
def openai_client() -> AsyncMock:
    return make_llm_client("OpenAI", "Quarterly Report Q3.pdf")


@pytest.fixture
def gemini_client() -> AsyncMock:
    return make_llm_client("Gemini", "gemini_choice.pdf")


@pytest.fixture
def client_factory(openai_client: AsyncMock, gemini_client: AsyncMock):
    """Provider name -> mock client."""
    clients = {"OpenAI": openai_client, "Gemini": gemini_client}
    return lambda provider: clients[provider]


# === FIXTURES: Collaborators ===


@pytest.fixture
def cache() -> SuggestionCache:
    return SuggestionCache(max_entries=100)


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def extractor() -> Utf8Extractor:
    return Utf8Extractor()


@pytest.fixture
def sample_record() -> FileRecord:
    return FileRecord(file_name="scan_0001.pdf", file_path="inbox/scan_0001.pdf")


@pytest.fixture
def file_source() -> DictFileSource:
    """Empty in-memory file source; tests fill ``.files``."""
    return DictFileSource()


@pytest.fixture
def make_client():
    """Builder for mock LLM clients: make_client(provider, content)."""
    return make_llm_client
