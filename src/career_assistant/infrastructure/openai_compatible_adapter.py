"""OpenAI-compatible HTTP adapter — Groq, Ollama and any custom endpoint.

Implements the buffered half of the ``CompletionBackend`` port; streaming is
layered on top by :mod:`simulated_streaming`.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from career_assistant.domain.entities import ConversationTurn, ProviderConfig
from career_assistant.domain.exceptions import (
    ProviderConnectionError,
    ProviderError,
    ProviderHTTPError,
)
from career_assistant.domain.value_objects import (
    CancelToken,
    OutputSchema,
    Readiness,
    run_cancellable,
)
from career_assistant.infrastructure.schema_text import structured_output_instruction

logger = logging.getLogger(__name__)

_COMPLETIONS_PATH = "/chat/completions"
_TEMPERATURE = 0.7


class OpenAICompatibleAdapter:
    """Single-shot chat completions over plain HTTP."""

    def __init__(
        self,
        config: ProviderConfig,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = 60.0,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout or None))
        self._headers: dict[str, str] = {"Content-Type": "application/json"}
        if config.credential:
            self._headers["Authorization"] = f"Bearer {config.credential}"

    @property
    def readiness(self) -> Readiness:
        return Readiness.READY

    @property
    def url(self) -> str:
        return f"{self._config.resolve_endpoint()}{_COMPLETIONS_PATH}"

    async def complete(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        reasoning: bool = False,
        cancel: CancelToken | None = None,
    ) -> str:
        """POST the conversation and return the first choice's text.

        *reasoning* is accepted for interface parity; OpenAI-compatible
        endpoints have no thinking-budget knob.
        """
        wire = _to_wire_messages(messages, system_prompt)
        return await self._post(wire, json_mode=False, cancel=cancel)

    async def complete_structured(
        self,
        prompt: str,
        schema: OutputSchema,
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        """Describe *schema* in the prompt and ask the server for a JSON object."""
        text = f"{prompt}\n\n{structured_output_instruction(schema)}"
        wire = _to_wire_messages([ConversationTurn.user(text)], system_prompt)
        return await self._post(wire, json_mode=True, cancel=cancel)

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def _post(
        self,
        messages: list[dict[str, str]],
        *,
        json_mode: bool,
        cancel: CancelToken | None,
    ) -> str:
        """Perform the completions request with error translation."""
        body: dict[str, Any] = {
            "model": self._config.model,
            "messages": messages,
            "temperature": _TEMPERATURE,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        url = self.url
        try:
            resp = await run_cancellable(
                self._client.post(url, headers=self._headers, json=body), cancel
            )
        except httpx.HTTPError as exc:
            logger.error("LLM request to %s failed: %s", url, exc)
            raise ProviderConnectionError(
                f"LLM connection failed: {exc}. Check your API key and settings."
            ) from exc

        if not resp.is_success:
            logger.error("LLM endpoint %s returned HTTP %d", url, resp.status_code)
            raise ProviderHTTPError(resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError(f"LLM endpoint {url} returned a non-JSON body.") from exc

        return _first_choice_text(data)


def _to_wire_messages(
    messages: Sequence[ConversationTurn], system_prompt: str | None
) -> list[dict[str, str]]:
    wire = []
    if system_prompt:
        wire.append({"role": "system", "content": system_prompt})
    wire.extend({"role": turn.role.value, "content": turn.text} for turn in messages)
    return wire


def _first_choice_text(data: Any) -> str:
    """``choices[0].message.content``, or ``""`` when any part is missing."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""
