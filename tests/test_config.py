"""Tests for turning settings into a provider configuration."""

import pytest

from career_assistant.domain.entities import ProviderKind
from career_assistant.infrastructure.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LLM_PROVIDER", "LLM_API_KEY", "GEMINI_API_KEY", "LLM_BASE_URL", "LLM_MODEL",
                 "LLM_REASONING_MODEL"):
        monkeypatch.delenv(name, raising=False)


def _settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)


def test_defaults_to_native_provider_models():
    config = _settings().provider_config()

    assert config.kind is ProviderKind.GEMINI
    assert config.model == "gemini-3-flash-preview"
    assert config.reasoning_model == "gemini-3-pro-preview"
    assert config.credential is None


def test_native_provider_falls_back_to_gemini_key():
    config = _settings(gemini_api_key="g-key").provider_config()
    assert config.credential == "g-key"


def test_generic_provider_ignores_gemini_key(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "groq")
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")

    config = _settings().provider_config()

    assert config.kind is ProviderKind.GROQ
    assert config.credential is None
    assert config.model == "llama3-70b-8192"


def test_blank_values_are_treated_as_absent():
    config = _settings(llm_provider="ollama", llm_api_key="", llm_base_url="").provider_config()

    assert config.credential is None
    assert config.endpoint is None
    assert config.resolve_endpoint() == "http://localhost:11434/v1"


def test_word_delay_is_in_seconds():
    assert _settings(stream_word_delay_ms=10).stream_word_delay == 0.01
    assert _settings(stream_word_delay_ms=0).stream_word_delay == 0
