"""Backend variant for a provider that is missing its credential."""

from __future__ import annotations

from typing import AsyncIterator, Sequence

from career_assistant.domain.entities import ConversationTurn, ProviderKind
from career_assistant.domain.exceptions import ProviderUnconfiguredError
from career_assistant.domain.value_objects import CancelToken, OutputSchema, Readiness


class UnconfiguredAdapter:
    """Fails every call with :class:`ProviderUnconfiguredError`, without any I/O."""

    def __init__(self, kind: ProviderKind) -> None:
        self._kind = kind

    @property
    def readiness(self) -> Readiness:
        return Readiness.UNCONFIGURED

    def _error(self) -> ProviderUnconfiguredError:
        return ProviderUnconfiguredError(
            f"Provider '{self._kind.value}' is not configured. "
            "Add an API key in settings."
        )

    async def complete(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        reasoning: bool = False,
        cancel: CancelToken | None = None,
    ) -> str:
        raise self._error()

    async def complete_structured(
        self,
        prompt: str,
        schema: OutputSchema,
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> str:
        raise self._error()

    async def stream(
        self,
        messages: Sequence[ConversationTurn],
        *,
        system_prompt: str | None = None,
        cancel: CancelToken | None = None,
    ) -> AsyncIterator[str]:
        raise self._error()
        yield  # pragma: no cover

    async def close(self) -> None:
        return None
