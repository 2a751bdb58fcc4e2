"""Shared fixtures: a scriptable stub backend and HTTP-mocked generic adapters."""

from __future__ import annotations

import json
from typing import Any, AsyncIterator, Callable, Sequence

import httpx
import pytest

from career_assistant.domain.entities import ConversationTurn, ProviderConfig, ProviderKind
from career_assistant.domain.value_objects import CancelToken, OutputSchema, Readiness
from career_assistant.infrastructure.openai_compatible_adapter import OpenAICompatibleAdapter
from career_assistant.infrastructure.simulated_streaming import SimulatedStreamingBackend
from career_assistant.services.career_gateway import CareerGateway


class StubBackend:
    """Returns a canned reply and records every call it receives.

    *error* is raised by the buffered calls; *stream_error* is raised after
    the canned chunks have been yielded.
    """

    def __init__(
        self,
        reply: str = "",
        chunks: Sequence[str] = (),
        error: Exception | None = None,
        stream_error: Exception | None = None,
    ) -> None:
        self.reply = reply
        self.chunks = list(chunks)
        self.error = error
        self.stream_error = stream_error
        self.calls: list[dict[str, Any]] = []

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
        self.calls.append(
            {"op": "complete", "messages": messages, "system_prompt": system_prompt,
             "reasoning": reasoning}
        )
        if self.error is not None:
            raise self.error
        return self.reply

    async def complete_structured(
        self,
        prompt: str,
        schema: OutputSchema,
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        self.calls.append(
            {"op": "structured", "prompt": prompt, "schema": schema,
             "system_prompt": system_prompt}
        )
        if self.error is not None:
            raise self.error
        return self.reply

    async def stream(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        self.calls.append({"op": "stream", "messages": messages, "system_prompt": system_prompt})
        for chunk in self.chunks:
            yield chunk
        if self.stream_error is not None:
            raise self.stream_error

    async def close(self) -> None:
        return None


Handler = Callable[[httpx.Request], httpx.Response]


def completion_body(content: str | None) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def generic_config(
    kind: ProviderKind = ProviderKind.GROQ,
    endpoint: str | None = None,
    credential: str | None = "test-key",
) -> ProviderConfig:
    return ProviderConfig(kind=kind, model="test-model", credential=credential, endpoint=endpoint)


def make_adapter(handler: Handler, config: ProviderConfig | None = None) -> OpenAICompatibleAdapter:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAICompatibleAdapter(config or generic_config(), client=client)


def make_generic_gateway(handler: Handler, config: ProviderConfig | None = None) -> CareerGateway:
    return CareerGateway(SimulatedStreamingBackend(make_adapter(handler, config), word_delay=0))


def replying(content: str | None, captured: list[httpx.Request] | None = None) -> Handler:
    """Handler answering every request with *content* as the completion text."""

    def handler(request: httpx.Request) -> httpx.Response:
        if captured is not None:
            captured.append(request)
        return httpx.Response(200, json=completion_body(content))

    return handler


def request_json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)


@pytest.fixture
def stub() -> StubBackend:
    return StubBackend()
