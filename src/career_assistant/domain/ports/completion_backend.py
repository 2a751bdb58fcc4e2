"""Port: completion backend — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import AsyncIterator, Protocol, Sequence

from career_assistant.domain.entities import ConversationTurn
from career_assistant.domain.value_objects import CancelToken, OutputSchema, Readiness


class BufferedCompletionBackend(Protocol):
    """A provider that can only hand back whole replies."""

    @property
    def readiness(self) -> Readiness:
        """``READY`` when calls can be attempted, ``UNCONFIGURED`` otherwise."""
        ...

    async def complete(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        reasoning: bool = False,
        cancel: CancelToken | None = None,
    ) -> str:
        """Return the full reply text; ``""`` when the provider sends none."""
        ...

    async def complete_structured(
        self,
        prompt: str,
        schema: OutputSchema,
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        """Ask for a single JSON value shaped like *schema*; return the raw text."""
        ...

    async def close(self) -> None:
        """Release underlying network resources."""
        ...


class CompletionBackend(BufferedCompletionBackend, Protocol):
    """Abstract contract the gateway talks to: buffered calls plus streaming."""

    def stream(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        """Yield reply fragments in the order they are produced.

        The last entry of *messages* is the new user turn; everything before
        it is history.
        """
        ...
