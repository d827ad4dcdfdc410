"""Tests for merging precise and search-based providers."""

from collections.abc import AsyncIterator, Sequence

import pytest

from basic_code_intel.config import BasicCodeIntelSettings
from basic_code_intel.providers.base import (
    BaseProviders,
    Hover,
    NoopProviders,
    ReferenceContext,
    TextDocument,
)
from basic_code_intel.providers.combined import CombinedProviders, file_key
from basic_code_intel.providers.indicators import (
    IMPRECISE_BADGE,
    PARTIAL_DEFINITION_NO_HOVER_BADGE,
    PARTIAL_HOVER_NO_DEFINITION_BADGE,
    SEARCH_BASED_BADGE,
    SEMANTIC_BADGE,
)
from basic_code_intel.search.types import Location, Position, Range

DOC = TextDocument(uri="git://github.com/foo/bar?HEAD#main.go", language_id="go", text="x")
POS = Position(0, 0)
CONTEXT = ReferenceContext()


def _loc(path: str, line: int = 0, repo: str = "github.com/foo/bar") -> Location:
    return Location(uri=f"git://{repo}?HEAD#{path}", range=Range.from_coordinates(line, 0, line, 1))


class ScriptedProviders(BaseProviders):
    """Providers replaying fixed sequences of values."""

    def __init__(
        self,
        definitions: Sequence[list[Location] | None] = (),
        references: Sequence[list[Location] | None] = (),
        hovers: Sequence[Hover | None] = (),
    ) -> None:
        self.definitions = definitions
        self.references_values = references
        self.hovers = hovers

    async def definition(
        self, document: TextDocument, position: Position
    ) -> AsyncIterator[list[Location] | None]:
        for value in self.definitions:
            yield value

    async def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> AsyncIterator[list[Location] | None]:
        for value in self.references_values:
            yield value

    async def hover(self, document: TextDocument, position: Position) -> AsyncIterator[Hover | None]:
        for value in self.hovers:
            yield value


async def _collect(stream: AsyncIterator[object]) -> list[object]:
    return [value async for value in stream]


class TestFileKey:
    """Identifying files across revisions."""

    def test_ignores_revision(self) -> None:
        assert file_key("git://github.com/foo/bar?abc#a/b.go") == ("github.com/foo/bar", "a/b.go")
        assert file_key("git://github.com/foo/bar?def#a/b.go") == file_key(
            "git://github.com/foo/bar?abc#a/b.go"
        )


class TestDefinition:
    """Precise definitions win over search."""

    @pytest.mark.asyncio
    async def test_precise_results_skip_search(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(definitions=[[_loc("a.go")]]),
            ScriptedProviders(definitions=[[_loc("b.go")]]),
        )
        values = await _collect(providers.definition(DOC, POS))
        assert values == [[_loc("a.go")]]
        [location] = values[0]
        assert location.aggregable_badges == (SEMANTIC_BADGE,)
        assert location.badge is None

    @pytest.mark.asyncio
    async def test_falls_back_to_badged_search(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(definitions=[None, []]),
            ScriptedProviders(definitions=[[_loc("b.go")]]),
        )
        values = await _collect(providers.definition(DOC, POS))
        assert values == [[_loc("b.go")]]
        [location] = values[0]
        assert location.badge == IMPRECISE_BADGE
        assert location.aggregable_badges == (SEARCH_BASED_BADGE,)

    @pytest.mark.asyncio
    async def test_nothing_found(self) -> None:
        providers = CombinedProviders(NoopProviders(), ScriptedProviders(definitions=[[]]))
        assert await _collect(providers.definition(DOC, POS)) == []


class TestReferences:
    """Search references extend precise ones file by file."""

    @pytest.mark.asyncio
    async def test_excludes_files_covered_by_precise_results(self) -> None:
        precise = [_loc("a.go", 1)]
        search = [_loc("a.go", 5), _loc("b.go", 2), _loc("a.go", 1, repo="github.com/other/x")]
        providers = CombinedProviders(
            ScriptedProviders(references=[precise]),
            ScriptedProviders(references=[search]),
        )
        values = await _collect(providers.references(DOC, POS, CONTEXT))
        assert values == [
            precise,
            [_loc("a.go", 1), _loc("b.go", 2), _loc("a.go", 1, repo="github.com/other/x")],
        ]
        merged = values[-1]
        assert isinstance(merged, list)
        assert merged[0].aggregable_badges == (SEMANTIC_BADGE,)
        assert [location.badge for location in merged[1:]] == [IMPRECISE_BADGE, IMPRECISE_BADGE]

    @pytest.mark.asyncio
    async def test_search_only_in_covered_files_adds_nothing(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(references=[[_loc("a.go", 1)]]),
            ScriptedProviders(references=[[_loc("a.go", 9)]]),
        )
        assert await _collect(providers.references(DOC, POS, CONTEXT)) == [[_loc("a.go", 1)]]

    @pytest.mark.asyncio
    async def test_mixed_results_can_be_disabled(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(references=[[_loc("a.go", 1)]]),
            ScriptedProviders(references=[[_loc("b.go", 2)]]),
            BasicCodeIntelSettings(disable_mixed_results=True),
        )
        assert await _collect(providers.references(DOC, POS, CONTEXT)) == [[_loc("a.go", 1)]]

    @pytest.mark.asyncio
    async def test_disabled_mixing_still_uses_search_without_precise(self) -> None:
        providers = CombinedProviders(
            NoopProviders(),
            ScriptedProviders(references=[[_loc("b.go", 2)]]),
            BasicCodeIntelSettings(disable_mixed_results=True),
        )
        assert await _collect(providers.references(DOC, POS, CONTEXT)) == [[_loc("b.go", 2)]]


class TestHover:
    """Hover badges describe which half of the answer is precise."""

    @pytest.mark.asyncio
    async def test_precise_hover_and_definition(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(definitions=[[_loc("a.go")]], hovers=[Hover("precise")]),
            ScriptedProviders(hovers=[Hover("search")]),
        )
        [hover] = await _collect(providers.hover(DOC, POS))
        assert isinstance(hover, Hover)
        assert hover.contents == "precise"
        assert hover.aggregable_badges == (SEMANTIC_BADGE,)

    @pytest.mark.asyncio
    async def test_precise_hover_with_search_definition_only(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(hovers=[None, Hover("precise")]),
            ScriptedProviders(definitions=[[_loc("b.go")]]),
        )
        [hover] = await _collect(providers.hover(DOC, POS))
        assert isinstance(hover, Hover)
        assert hover.aggregable_badges == (PARTIAL_HOVER_NO_DEFINITION_BADGE,)

    @pytest.mark.asyncio
    async def test_precise_hover_without_any_definition(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(hovers=[Hover("precise")]),
            NoopProviders(),
        )
        [hover] = await _collect(providers.hover(DOC, POS))
        assert isinstance(hover, Hover)
        assert hover.aggregable_badges == (SEMANTIC_BADGE,)

    @pytest.mark.asyncio
    async def test_search_hover_with_precise_definition(self) -> None:
        providers = CombinedProviders(
            ScriptedProviders(definitions=[[_loc("a.go")]]),
            ScriptedProviders(hovers=[Hover("search")]),
        )
        [hover] = await _collect(providers.hover(DOC, POS))
        assert isinstance(hover, Hover)
        assert hover.contents == "search"
        assert hover.aggregable_badges == (PARTIAL_DEFINITION_NO_HOVER_BADGE,)

    @pytest.mark.asyncio
    async def test_search_hover_only(self) -> None:
        providers = CombinedProviders(NoopProviders(), ScriptedProviders(hovers=[None, Hover("search")]))
        [hover] = await _collect(providers.hover(DOC, POS))
        assert isinstance(hover, Hover)
        assert hover.aggregable_badges == (SEARCH_BASED_BADGE,)

    @pytest.mark.asyncio
    async def test_no_hover_anywhere(self) -> None:
        providers = CombinedProviders(NoopProviders(), ScriptedProviders(hovers=[None]))
        assert await _collect(providers.hover(DOC, POS)) == []
