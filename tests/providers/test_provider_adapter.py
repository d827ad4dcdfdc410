"""Tests for replayable result streams and the memoizing adapter."""

import asyncio
from collections.abc import AsyncIterator

import pytest

from basic_code_intel.providers.adapter import ProviderAdapter, ResultStream
from basic_code_intel.providers.base import BaseProviders, Hover, ReferenceContext, TextDocument
from basic_code_intel.search.types import Location, Position

DOC = TextDocument(uri="git://github.com/foo/bar?HEAD#main.go", language_id="go", text="a")
LOC = Location(uri="git://github.com/foo/bar?HEAD#util.go")


async def _values(*values: int) -> AsyncIterator[int]:
    for value in values:
        yield value


class CountingProviders(BaseProviders):
    """Providers recording every started lookup.

    Definitions wait for ``gate`` before yielding, so a test can observe a
    stream while it is still running.
    """

    def __init__(self, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.closed: list[str] = []
        self.gate = asyncio.Event()
        self.fail = fail

    async def definition(
        self, document: TextDocument, position: Position
    ) -> AsyncIterator[list[Location] | None]:
        self.calls.append("definition")
        try:
            await self.gate.wait()
            if self.fail:
                raise RuntimeError("backend down")
            yield [LOC]
        finally:
            self.closed.append("definition")

    async def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> AsyncIterator[list[Location] | None]:
        self.calls.append("references")
        if self.fail:
            raise RuntimeError("backend down")
        yield [LOC]

    async def hover(self, document: TextDocument, position: Position) -> AsyncIterator[Hover | None]:
        self.calls.append("hover")
        if self.fail:
            raise RuntimeError("backend down")
        yield Hover("text")


class TestResultStream:
    """Draining, replaying and disposing."""

    @pytest.mark.asyncio
    async def test_late_consumer_sees_every_value(self) -> None:
        stream = ResultStream(_values(1, 2, 3), error_value=-1)
        assert await stream.last() == 3
        assert stream.done
        assert [value async for value in stream] == [1, 2, 3]
        assert stream.values == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_concurrent_consumers(self) -> None:
        stream = ResultStream(_values(1, 2), error_value=-1)

        async def consume() -> list[int]:
            return [value async for value in stream]

        first, second = await asyncio.gather(consume(), consume())
        assert first == second == [1, 2]

    @pytest.mark.asyncio
    async def test_empty_source(self) -> None:
        stream = ResultStream(_values(), error_value=-1)
        assert await stream.last() is None

    @pytest.mark.asyncio
    async def test_failure_emits_error_value(self, caplog: pytest.LogCaptureFixture) -> None:
        async def failing() -> AsyncIterator[int]:
            yield 1
            raise RuntimeError("boom")

        with caplog.at_level("ERROR"):
            stream = ResultStream(failing(), error_value=-1, name="references")
            assert [value async for value in stream] == [1, -1]
        assert "references lookup failed: boom" in caplog.text

    @pytest.mark.asyncio
    async def test_dispose_cancels_running_source(self) -> None:
        providers = CountingProviders()
        stream = ResultStream(providers.definition(DOC, Position(0, 0)), error_value=None)
        await asyncio.sleep(0)
        assert providers.calls == ["definition"]

        await stream.dispose()
        assert stream.disposed
        assert stream.done
        assert providers.closed == ["definition"]
        assert [value async for value in stream] == []

    @pytest.mark.asyncio
    async def test_dispose_before_start(self) -> None:
        stream = ResultStream(_values(1), error_value=-1)
        await stream.dispose()
        assert stream.done
        assert await stream.last() is None

    @pytest.mark.asyncio
    async def test_dispose_is_idempotent(self) -> None:
        stream = ResultStream(_values(1), error_value=-1)
        await stream.last()
        await stream.dispose()
        await stream.dispose()
        assert stream.values == [1]


class TestProviderAdapter:
    """One memoized stream per operation."""

    @pytest.mark.asyncio
    async def test_same_request_reuses_stream(self) -> None:
        providers = CountingProviders()
        adapter = ProviderAdapter(providers)
        first = await adapter.definition(DOC, Position(1, 2))
        second = await adapter.definition(DOC, Position(1, 2))
        assert first is second

        providers.gate.set()
        assert await second.last() == [LOC]
        assert await adapter.definition(DOC, Position(1, 2)) is first
        assert providers.calls == ["definition"]
        await adapter.dispose()

    @pytest.mark.asyncio
    async def test_new_position_replaces_stream(self) -> None:
        providers = CountingProviders()
        adapter = ProviderAdapter(providers)
        first = await adapter.definition(DOC, Position(1, 2))
        await asyncio.sleep(0)
        second = await adapter.definition(DOC, Position(1, 3))

        assert first is not second
        assert first.disposed
        assert not second.disposed
        await asyncio.sleep(0)
        assert providers.calls == ["definition", "definition"]
        await adapter.dispose()
        assert second.disposed

    @pytest.mark.asyncio
    async def test_overlapping_requests_leave_no_orphaned_stream(self) -> None:
        """Concurrent replacements dispose every stream but the last one stored."""
        providers = CountingProviders()
        adapter = ProviderAdapter(providers)
        first = await adapter.definition(DOC, Position(0, 0))
        await asyncio.sleep(0)

        second, third = await asyncio.gather(
            adapter.definition(DOC, Position(1, 0)),
            adapter.definition(DOC, Position(2, 0)),
        )

        assert first.disposed
        assert second.disposed
        assert not third.disposed
        assert await adapter.definition(DOC, Position(2, 0)) is third
        await adapter.dispose()
        assert third.disposed

    @pytest.mark.asyncio
    async def test_changed_content_replaces_stream(self) -> None:
        providers = CountingProviders()
        providers.gate.set()
        adapter = ProviderAdapter(providers)
        first = await adapter.definition(DOC, Position(0, 0))
        edited = TextDocument(uri=DOC.uri, language_id=DOC.language_id, text="b")
        second = await adapter.definition(edited, Position(0, 0))
        assert first is not second
        await adapter.dispose()

    @pytest.mark.asyncio
    async def test_operations_have_separate_slots(self) -> None:
        providers = CountingProviders()
        providers.gate.set()
        adapter = ProviderAdapter(providers)
        definition = await adapter.definition(DOC, Position(0, 0))
        hover = await adapter.hover(DOC, Position(0, 0))
        assert await definition.last() == [LOC]
        assert await hover.last() == Hover("text")
        assert not definition.disposed
        await adapter.dispose()

    @pytest.mark.asyncio
    async def test_reference_context_is_part_of_key(self) -> None:
        providers = CountingProviders()
        adapter = ProviderAdapter(providers)
        with_declaration = await adapter.references(DOC, Position(0, 0), ReferenceContext())
        assert await adapter.references(DOC, Position(0, 0), ReferenceContext()) is with_declaration
        assert await with_declaration.last() == [LOC]
        without = await adapter.references(
            DOC, Position(0, 0), ReferenceContext(include_declaration=False)
        )
        assert without is not with_declaration
        await without.last()
        assert providers.calls == ["references", "references"]
        await adapter.dispose()

    @pytest.mark.asyncio
    async def test_failures_map_to_empty_values(self) -> None:
        providers = CountingProviders(fail=True)
        providers.gate.set()
        adapter = ProviderAdapter(providers)
        assert await (await adapter.definition(DOC, Position(0, 0))).last() is None
        assert await (await adapter.references(DOC, Position(0, 0), ReferenceContext())).last() == []
        assert await (await adapter.hover(DOC, Position(0, 0))).last() is None
        await adapter.dispose()
