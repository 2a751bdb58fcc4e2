"""Pick the backend variant that matches a provider configuration."""

from __future__ import annotations

import logging

import httpx

from career_assistant.domain.entities import ProviderConfig, ProviderFamily
from career_assistant.domain.ports.completion_backend import CompletionBackend
from career_assistant.infrastructure.gemini_adapter import GeminiAdapter
from career_assistant.infrastructure.openai_compatible_adapter import OpenAICompatibleAdapter
from career_assistant.infrastructure.simulated_streaming import SimulatedStreamingBackend
from career_assistant.infrastructure.unconfigured_adapter import UnconfiguredAdapter

logger = logging.getLogger(__name__)


def build_backend(
    config: ProviderConfig,
    *,
    http_client: httpx.AsyncClient | None = None,
    request_timeout: float | None = 60.0,
    word_delay: float = 0.01,
) -> CompletionBackend:
    """Return a ready backend, or an unconfigured one when the key is missing."""
    if config.kind.requires_credential and not config.has_credential:
        logger.warning("No API key configured for provider %s", config.kind.value)
        return UnconfiguredAdapter(config.kind)

    if config.kind.family is ProviderFamily.NATIVE:
        logger.info("Using native provider %s (%s)", config.kind.value, config.model)
        return GeminiAdapter(config, timeout=request_timeout)

    logger.info(
        "Using OpenAI-compatible provider %s (%s) at %s",
        config.kind.value,
        config.model,
        config.resolve_endpoint(),
    )
    adapter = OpenAICompatibleAdapter(config, client=http_client, timeout=request_timeout)
    return SimulatedStreamingBackend(adapter, word_delay=word_delay)
