# src/config/settings.py — v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider credentials, batch sizing, cache bounds,
record storage and logging. Provider sections are nested, so the
``OpenAI:ApiKey`` / ``Gemini:ApiKey`` keys map to ``OPENAI__API_KEY`` and
``GEMINI__API_KEY`` environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["OpenAI", "Gemini"]


class ConfigurationError(Exception):
    """Raised when configuration is missing or internally inconsistent."""


class OpenAISettings(BaseModel):
    """Chat-completion provider section."""

    api_key: str = ""
    model: str = "gpt-3.5-turbo"
    content_window: int | None = 1000
    max_tokens: int = 60
    temperature: float = 0.2
    timeout_s: float = 60.0


class GeminiSettings(BaseModel):
    """Generative-content provider section."""

    api_key: str = ""
    model: str = "gemini-1.5-flash"
    content_window: int | None = None
    max_tokens: int = 60
    temperature: float = 0.2
    timeout_s: float = 60.0


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # === AI PROVIDERS ===
    ai_provider: ProviderName = "OpenAI"
    ai_fallback_enabled: bool = True
    openai: OpenAISettings = OpenAISettings()
    gemini: GeminiSettings = GeminiSettings()

    # === Pipeline ===
    batch_size: int = 3

    # === Suggestion cache ===
    cache_max_entries: int = 1000

    # === Record storage ===
    record_store_backend: Literal["memory", "sqlite"] = "sqlite"
    record_store_path: Path = Path("files.db")

    # === File access ===
    file_root: Path | None = None

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = Path("logs/app.log")
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("batch_size", "cache_max_entries")
    @classmethod
    def validate_positive(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        for name, section in (("OPENAI", self.openai), ("GEMINI", self.gemini)):
            if section.content_window is not None and section.content_window < 1:
                errors.append(f"{name}__CONTENT_WINDOW must be >= 1 when set")
            if section.timeout_s <= 0:
                errors.append(f"{name}__TIMEOUT_S must be > 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    def provider_settings(self, provider: str) -> OpenAISettings | GeminiSettings:
        """Return the settings section for a provider name."""
        if provider == "OpenAI":
            return self.openai
        if provider == "Gemini":
            return self.gemini
        raise ConfigurationError(f"Unknown AI provider: {provider!r}")

    def api_key_for(self, provider: str) -> str:
        """Return the API key for ``provider``.

        Raises:
            ConfigurationError: If the key is absent or blank.
        """
        key = self.provider_settings(provider).api_key.strip()
        if not key:
            raise ConfigurationError(f"{provider}:ApiKey is not configured")
        return key


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding hosts).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
