"""Gemini adapter — native SDK backend with streaming, schemas and thinking."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Sequence

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from career_assistant.domain.entities import ChatRole, ConversationTurn, ProviderConfig
from career_assistant.domain.exceptions import (
    OperationCancelledError,
    ProviderConnectionError,
    ProviderHTTPError,
    ProviderStreamError,
)
from career_assistant.domain.value_objects import (
    CancelToken,
    OutputSchema,
    Readiness,
    SchemaType,
    run_cancellable,
)

logger = logging.getLogger(__name__)

THINKING_BUDGET = 8192

_TYPE_MAP: dict[SchemaType, types.Type] = {
    SchemaType.STRING: types.Type.STRING,
    SchemaType.INTEGER: types.Type.INTEGER,
    SchemaType.NUMBER: types.Type.NUMBER,
    SchemaType.BOOLEAN: types.Type.BOOLEAN,
    SchemaType.ARRAY: types.Type.ARRAY,
    SchemaType.OBJECT: types.Type.OBJECT,
}


def to_gemini_schema(schema: OutputSchema) -> types.Schema:
    """Convert the provider-neutral schema tree to the SDK's ``Schema``."""
    kwargs: dict[str, Any] = {"type": _TYPE_MAP[schema.type]}
    if schema.description:
        kwargs["description"] = schema.description
    if schema.enum:
        kwargs["enum"] = list(schema.enum)
    if schema.items is not None:
        kwargs["items"] = to_gemini_schema(schema.items)
    if schema.properties:
        kwargs["properties"] = {
            name: to_gemini_schema(node) for name, node in schema.properties
        }
        kwargs["property_ordering"] = [name for name, _ in schema.properties]
        kwargs["required"] = list(schema.required)
    return types.Schema(**kwargs)


class GeminiAdapter:
    """Concrete ``CompletionBackend`` backed by the google-genai SDK."""

    def __init__(
        self,
        config: ProviderConfig,
        client: genai.Client | None = None,
        timeout: float | None = 60.0,
    ) -> None:
        self._config = config
        if client is None:
            http_options = types.HttpOptions(
                base_url=config.endpoint or None,
                timeout=int(timeout * 1000) if timeout else None,
            )
            client = genai.Client(api_key=config.credential, http_options=http_options)
        self._client = client

    @property
    def readiness(self) -> Readiness:
        return Readiness.READY

    async def complete(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        reasoning: bool = False,
        cancel: CancelToken | None = None,
    ) -> str:
        """Single-shot generation; *reasoning* switches on the thinking budget."""
        config_kwargs: dict[str, Any] = {
            "system_instruction": _system_instruction(system_prompt, messages),
        }
        model = self._config.model
        if reasoning:
            model = self._config.reasoning_model or model
            config_kwargs["thinking_config"] = types.ThinkingConfig(
                thinking_budget=THINKING_BUDGET
            )

        response = await self._generate(
            model, _to_contents(messages), types.GenerateContentConfig(**config_kwargs), cancel
        )
        return response.text or ""

    async def complete_structured(
        self,
        prompt: str,
        schema: OutputSchema,
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        """Generation constrained to JSON matching *schema*."""
        config = types.GenerateContentConfig(
            system_instruction=system_prompt or None,
            response_mime_type="application/json",
            response_schema=to_gemini_schema(schema),
        )
        response = await self._generate(self._config.model, prompt, config, cancel)
        return response.text or ""

    async def stream(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        """Open a chat session seeded with the history and stream the reply."""
        if not messages:
            return
        *history, latest = messages
        chat = self._client.aio.chats.create(
            model=self._config.model,
            config=types.GenerateContentConfig(
                system_instruction=_system_instruction(system_prompt, messages),
            ),
            history=_to_contents(history),
        )

        iterator = None
        try:
            response = await run_cancellable(chat.send_message_stream(latest.text), cancel)
            iterator = response.__aiter__()
            while True:
                try:
                    chunk = await run_cancellable(iterator.__anext__(), cancel)
                except StopAsyncIteration:
                    break
                if chunk.text:
                    yield chunk.text

        except OperationCancelledError:
            raise

        except Exception as exc:
            logger.error("Gemini stream failed: %s", exc)
            raise ProviderStreamError(f"Gemini error: {exc}") from exc

        finally:
            if iterator is not None:
                await _aclose(iterator)

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.aio.aclose()

    async def _generate(
        self,
        model: str,
        contents: Any,
        config: types.GenerateContentConfig,
        cancel: CancelToken | None,
    ) -> types.GenerateContentResponse:
        """Call ``generate_content`` with error translation."""
        try:
            return await run_cancellable(
                self._client.aio.models.generate_content(
                    model=model, contents=contents, config=config
                ),
                cancel,
            )
        except genai_errors.APIError as exc:
            logger.error("Gemini returned %s: %s", exc.code, exc.message)
            raise ProviderHTTPError(exc.code, exc.message or str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.error("Gemini request failed: %s", exc)
            raise ProviderConnectionError(f"Gemini connection failed: {exc}") from exc


async def _aclose(iterator: Any) -> None:
    """Finalise the SDK stream so its HTTP response is released."""
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


def _to_contents(turns: Sequence[ConversationTurn]) -> list[types.Content]:
    """Map turns to Gemini contents; assistant turns use the ``model`` role."""
    return [
        types.Content(
            role="model" if turn.role is ChatRole.ASSISTANT else "user",
            parts=[types.Part(text=turn.text)],
        )
        for turn in turns
        if turn.role is not ChatRole.SYSTEM
    ]


def _system_instruction(
    system_prompt: str | None, turns: Sequence[ConversationTurn]
) -> str | None:
    """Gemini has no system turns, so fold them into the system instruction."""
    parts = [system_prompt] if system_prompt else []
    parts.extend(turn.text for turn in turns if turn.role is ChatRole.SYSTEM)
    return "\n\n".join(parts) or None
