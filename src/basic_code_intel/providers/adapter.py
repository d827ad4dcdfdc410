"""Host-facing result streams with per-operation memoization.

A ``ResultStream`` drains a provider's async generator in a background
task. Any number of consumers can iterate it; each sees every value from
the start, then follows new values as they arrive. Detaching a consumer
never stops the producer; only ``dispose()`` does.

``ProviderAdapter`` keeps one stream per operation. Asking again for the
same document content, position (and reference context) returns the
stream already running; any other request replaces it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Hashable
from typing import Generic, TypeVar

from basic_code_intel.providers.base import BaseProviders, Hover, ReferenceContext, TextDocument
from basic_code_intel.search.types import Location, Position

logger = logging.getLogger(__name__)

__all__ = ["ProviderAdapter", "ResultStream"]

T = TypeVar("T")


class ResultStream(Generic[T]):
    """A shared, replayable view over an async iterator.

    Must be created while an event loop is running.

    Args:
        source: The provider generator to drain.
        error_value: Value emitted in place of a failure of ``source``.
        name: Operation name used in log messages.

    """

    def __init__(self, source: AsyncIterator[T], error_value: T, name: str = "stream") -> None:
        self.name = name
        self._source = source
        self._error_value = error_value
        self._values: list[T] = []
        self._done = False
        self._disposed = False
        self._changed = asyncio.Condition()
        self._task = asyncio.ensure_future(self._produce())

    @property
    def done(self) -> bool:
        """Return True once the source is exhausted, has failed or was disposed."""
        return self._done

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def values(self) -> list[T]:
        """Return a snapshot of every value produced so far."""
        return list(self._values)

    async def _publish(self, value: T) -> None:
        async with self._changed:
            self._values.append(value)
            self._changed.notify_all()

    async def _finish(self) -> None:
        self._done = True
        async with self._changed:
            self._changed.notify_all()

    async def _produce(self) -> None:
        try:
            async for value in self._source:
                await self._publish(value)
        except asyncio.CancelledError:
            logger.debug("%s stream cancelled", self.name)
            raise
        except Exception as e:
            logger.error("%s lookup failed: %s", self.name, e, exc_info=True)
            await self._publish(self._error_value)
        finally:
            aclose = getattr(self._source, "aclose", None)
            if aclose is not None:
                await aclose()
            await self._finish()

    async def __aiter__(self) -> AsyncIterator[T]:
        index = 0
        while True:
            async with self._changed:
                await self._changed.wait_for(lambda: index < len(self._values) or self._done)
                if index >= len(self._values):
                    return
                value = self._values[index]
            index += 1
            yield value

    async def last(self) -> T | None:
        """Wait for the stream to finish and return its final value."""
        value: T | None = None
        async for value in self:
            pass
        return value

    async def dispose(self) -> None:
        """Cancel the producer and close the source generator."""
        if self._disposed:
            return
        self._disposed = True
        if not self._task.done():
            self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            logger.debug("%s stream disposed", self.name)
        # A task cancelled before it first ran never reaches its finally block
        if not self._done:
            await self._finish()


Key = tuple[Hashable, ...]


class ProviderAdapter:
    """Memoizing front for a set of providers.

    Args:
        providers: The providers whose operations are exposed.

    """

    def __init__(self, providers: BaseProviders) -> None:
        self.providers = providers
        self._slots: dict[str, tuple[Key, ResultStream]] = {}

    @staticmethod
    def _document_key(document: TextDocument, position: Position) -> Key:
        # Content may change while the URI stays the same
        return (document.uri, hash(document.text), position.line, position.character)

    async def _memoized(
        self,
        operation: str,
        key: Key,
        factory: Callable[[], AsyncIterator[T]],
        error_value: T,
    ) -> ResultStream[T]:
        slot = self._slots.get(operation)
        if slot is not None:
            previous_key, previous = slot
            if previous_key == key and not previous.disposed:
                logger.debug("Reusing in-flight %s stream", operation)
                return previous

        # The slot must be replaced before the first await, or a concurrent
        # request could install its own stream and have it overwritten here
        stream = ResultStream(factory(), error_value, name=operation)
        self._slots[operation] = (key, stream)
        if slot is not None:
            await slot[1].dispose()
        return stream

    async def definition(
        self, document: TextDocument, position: Position
    ) -> ResultStream[list[Location] | None]:
        return await self._memoized(
            "definition",
            self._document_key(document, position),
            lambda: self.providers.definition(document, position),
            None,
        )

    async def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> ResultStream[list[Location] | None]:
        return await self._memoized(
            "references",
            (*self._document_key(document, position), context.include_declaration),
            lambda: self.providers.references(document, position, context),
            [],
        )

    async def hover(self, document: TextDocument, position: Position) -> ResultStream[Hover | None]:
        return await self._memoized(
            "hover",
            self._document_key(document, position),
            lambda: self.providers.hover(document, position),
            None,
        )

    async def dispose(self) -> None:
        """Dispose every memoized stream."""
        slots, self._slots = self._slots, {}
        for _, stream in slots.values():
            await stream.dispose()
