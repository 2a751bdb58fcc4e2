"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from career_assistant.domain.entities import ProviderConfig
from career_assistant.infrastructure.backend_factory import build_backend
from career_assistant.infrastructure.config import get_settings
from career_assistant.services.career_gateway import CareerGateway

_http_client: httpx.AsyncClient | None = None
_gateway: CareerGateway | None = None
_provider_config: ProviderConfig | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _gateway, _provider_config  # noqa: PLW0603

    settings = get_settings()
    _provider_config = settings.provider_config()
    _http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds or None)
    )
    _gateway = CareerGateway(
        build_backend(
            _provider_config,
            http_client=_http_client,
            request_timeout=settings.request_timeout_seconds,
            word_delay=settings.stream_word_delay,
        )
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _gateway, _provider_config  # noqa: PLW0603

    if _gateway:
        await _gateway.close()
        _gateway = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _provider_config = None


def get_gateway() -> CareerGateway:
    """Return the gateway built for the current provider configuration."""
    assert _gateway is not None, "startup() was not called"
    return _gateway


def get_provider_config() -> ProviderConfig:
    assert _provider_config is not None, "startup() was not called"
    return _provider_config
