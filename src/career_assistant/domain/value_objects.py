"""Value objects — small immutable domain primitives."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Mapping, TypeVar

from career_assistant.domain.exceptions import OperationCancelledError

T = TypeVar("T")


class Readiness(str, Enum):
    """Whether a backend can serve requests at all."""

    READY = "ready"
    UNCONFIGURED = "unconfigured"


# ── Output schemas ──────────────────────────────────────────────────────────


class SchemaType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True, slots=True)
class OutputSchema:
    """Provider-neutral description of the JSON a feature expects back.

    The same tree is rendered as prompt text for generic providers and
    converted to the SDK schema type for the native provider.
    """

    type: SchemaType
    description: str = ""
    properties: tuple[tuple[str, OutputSchema], ...] = ()
    required: tuple[str, ...] = ()
    items: OutputSchema | None = None
    enum: tuple[str, ...] = ()

    @classmethod
    def string(cls, description: str = "", enum: tuple[str, ...] = ()) -> OutputSchema:
        return cls(type=SchemaType.STRING, description=description, enum=enum)

    @classmethod
    def integer(cls, description: str = "") -> OutputSchema:
        return cls(type=SchemaType.INTEGER, description=description)

    @classmethod
    def boolean(cls, description: str = "") -> OutputSchema:
        return cls(type=SchemaType.BOOLEAN, description=description)

    @classmethod
    def array(cls, items: OutputSchema, description: str = "") -> OutputSchema:
        return cls(type=SchemaType.ARRAY, items=items, description=description)

    @classmethod
    def object(
        cls,
        properties: Mapping[str, OutputSchema],
        required: tuple[str, ...] | None = None,
        description: str = "",
    ) -> OutputSchema:
        """Build an object node; every property is required unless listed otherwise."""
        names = tuple(properties)
        return cls(
            type=SchemaType.OBJECT,
            description=description,
            properties=tuple(properties.items()),
            required=names if required is None else required,
        )

    def field(self, name: str) -> OutputSchema | None:
        for key, node in self.properties:
            if key == name:
                return node
        return None


# ── Cancellation ────────────────────────────────────────────────────────────


class CancelToken:
    """Cooperative cancellation signal shared between a caller and a backend call."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation cancelled by caller.")

    async def wait(self) -> None:
        await self._event.wait()


async def run_cancellable(awaitable: Awaitable[T], cancel: CancelToken | None) -> T:
    """Await *awaitable*, abandoning it as soon as *cancel* fires."""
    if cancel is None:
        return await awaitable

    if cancel.cancelled:
        _discard(awaitable)
        cancel.raise_if_cancelled()

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task in done:
        return task.result()

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
    raise OperationCancelledError("Operation cancelled by caller.")


def _discard(awaitable: Any) -> None:
    close = getattr(awaitable, "close", None)
    if callable(close):
        close()
