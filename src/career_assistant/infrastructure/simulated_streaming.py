"""Chunk synthesizer — gives buffered providers the streaming interface.

The full reply is fetched first, then released word by word with a short
pause so a chat UI renders it progressively.  Nothing is generated
incrementally; the pacing is purely cosmetic.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Sequence

from career_assistant.domain.entities import ConversationTurn
from career_assistant.domain.ports.completion_backend import BufferedCompletionBackend
from career_assistant.domain.value_objects import (
    CancelToken,
    OutputSchema,
    Readiness,
    run_cancellable,
)


def synthesize_chunks(text: str) -> list[str]:
    """Split *text* on single spaces; each chunk is one word plus a space."""
    if not text:
        return []
    return [f"{word} " for word in text.split(" ")]


class SimulatedStreamingBackend:
    """Wraps a :class:`BufferedCompletionBackend` and adds ``stream``."""

    def __init__(self, inner: BufferedCompletionBackend, word_delay: float = 0.01) -> None:
        self._inner = inner
        self._delay = max(word_delay, 0.0)

    @property
    def inner(self) -> BufferedCompletionBackend:
        return self._inner

    @property
    def readiness(self) -> Readiness:
        return self._inner.readiness

    async def complete(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        reasoning: bool = False,
        cancel: CancelToken | None = None,
    ) -> str:
        return await self._inner.complete(
            messages, system_prompt=system_prompt, reasoning=reasoning, cancel=cancel
        )

    async def complete_structured(
        self,
        prompt: str,
        schema: OutputSchema,
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        return await self._inner.complete_structured(
            prompt, schema, system_prompt=system_prompt, cancel=cancel
        )

    async def stream(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        text = await self._inner.complete(messages, system_prompt=system_prompt, cancel=cancel)
        for chunk in synthesize_chunks(text):
            if cancel is not None:
                cancel.raise_if_cancelled()
            yield chunk
            if self._delay:
                await run_cancellable(asyncio.sleep(self._delay), cancel)

    async def close(self) -> None:
        await self._inner.close()
