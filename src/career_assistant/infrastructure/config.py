"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from career_assistant.domain.entities import ProviderConfig, ProviderKind


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    llm_provider: ProviderKind = ProviderKind.GEMINI
    llm_api_key: SecretStr | None = None
    gemini_api_key: SecretStr | None = None  # fallback key for the native provider
    llm_base_url: str | None = None
    llm_model: str | None = None
    llm_reasoning_model: str | None = None
    request_timeout_seconds: float = 60.0
    stream_word_delay_ms: int = 10
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def provider_config(self) -> ProviderConfig:
        """Build the immutable provider configuration for a new gateway."""
        kind = self.llm_provider
        credential = _reveal(self.llm_api_key)
        if credential is None and kind is ProviderKind.GEMINI:
            credential = _reveal(self.gemini_api_key)

        return ProviderConfig(
            kind=kind,
            model=self.llm_model or kind.default_model,
            credential=credential,
            endpoint=self.llm_base_url or None,
            reasoning_model=self.llm_reasoning_model or kind.default_reasoning_model,
        )

    @property
    def stream_word_delay(self) -> float:
        return max(self.stream_word_delay_ms, 0) / 1000


def _reveal(secret: SecretStr | None) -> str | None:
    if secret is None:
        return None
    return secret.get_secret_value() or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
