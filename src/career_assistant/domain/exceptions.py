"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class CareerAssistantError(Exception):
    """Base exception for the entire application."""


# ── Provider errors ─────────────────────────────────────────────────────────


class ProviderError(CareerAssistantError):
    """Any error originating from the configured LLM provider."""


class ProviderUnconfiguredError(ProviderError):
    """No usable credential or endpoint for the selected provider."""


class ProviderHTTPError(ProviderError):
    """The provider answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API error ({status_code}): {body}")


class ProviderConnectionError(ProviderError):
    """The provider could not be reached at all."""


class ProviderStreamError(ProviderError):
    """A streamed response failed after it had started."""


# ── Response errors ─────────────────────────────────────────────────────────


class ResponseDecodeError(CareerAssistantError):
    """The model's text could not be decoded into the expected JSON shape."""

    def __init__(self, message: str, raw: str = "") -> None:
        self.raw = raw
        super().__init__(message)


# ── Control flow ────────────────────────────────────────────────────────────


class OperationCancelledError(CareerAssistantError):
    """The caller cancelled the operation before it completed."""
