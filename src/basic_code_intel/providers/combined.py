"""Merging precise and search-based provider streams.

Precise results always take priority. Search-based results fill the gaps:
definitions and hovers fall back to search only when the precise provider
has nothing, and references are extended with search hits from files the
precise provider did not cover.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import replace

from basic_code_intel.config import BasicCodeIntelSettings
from basic_code_intel.providers.base import BaseProviders, Hover, ReferenceContext, TextDocument
from basic_code_intel.providers.indicators import (
    IMPRECISE_BADGE,
    PARTIAL_DEFINITION_NO_HOVER_BADGE,
    PARTIAL_HOVER_NO_DEFINITION_BADGE,
    SEARCH_BASED_BADGE,
    SEMANTIC_BADGE,
)
from basic_code_intel.search.types import Location, Position
from basic_code_intel.search.uri import parse_git_uri

logger = logging.getLogger(__name__)

__all__ = ["CombinedProviders", "file_key"]


def file_key(uri: str) -> tuple[str, str]:
    """Return the (repository, path) pair a location's file is identified by."""
    parsed = parse_git_uri(uri)
    return parsed.repo, parsed.path


def _badge_precise(locations: list[Location]) -> list[Location]:
    return [replace(location, aggregable_badges=(SEMANTIC_BADGE,)) for location in locations]


def _badge_search(locations: list[Location]) -> list[Location]:
    return [
        replace(location, badge=IMPRECISE_BADGE, aggregable_badges=(SEARCH_BASED_BADGE,))
        for location in locations
    ]


async def _first_nonempty(stream: AsyncIterator[list[Location] | None]) -> list[Location]:
    async for locations in stream:
        if locations:
            return locations
    return []


class CombinedProviders(BaseProviders):
    """Providers preferring a precise source over search.

    Args:
        precise: Compiler or index based providers.
        search: Search-based providers.
        settings: Supplies ``disable_mixed_results``.

    """

    def __init__(
        self,
        precise: BaseProviders,
        search: BaseProviders,
        settings: BasicCodeIntelSettings | None = None,
    ) -> None:
        self.precise = precise
        self.search = search
        self.settings = settings or BasicCodeIntelSettings()

    async def definition(
        self, document: TextDocument, position: Position
    ) -> AsyncIterator[list[Location] | None]:
        has_precise = False
        async for locations in self.precise.definition(document, position):
            if locations:
                has_precise = True
                yield _badge_precise(locations)
        if has_precise:
            return

        async for locations in self.search.definition(document, position):
            if locations:
                yield _badge_search(locations)

    async def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> AsyncIterator[list[Location] | None]:
        precise: list[Location] = []
        async for locations in self.precise.references(document, position, context):
            if locations:
                precise = _badge_precise(locations)
                yield precise

        precise_files = {file_key(location.uri) for location in precise}
        if precise_files and self.settings.disable_mixed_results:
            return

        async for locations in self.search.references(document, position, context):
            extra = [
                location
                for location in locations or []
                if file_key(location.uri) not in precise_files
            ]
            if not extra:
                continue
            logger.debug("Adding %d search-based references", len(extra))
            yield precise + _badge_search(extra)

    async def hover(self, document: TextDocument, position: Position) -> AsyncIterator[Hover | None]:
        async for result in self.precise.hover(document, position):
            if result is None:
                continue
            badge = SEMANTIC_BADGE
            if not await _first_nonempty(self.precise.definition(document, position)):
                if await _first_nonempty(self.search.definition(document, position)):
                    badge = PARTIAL_HOVER_NO_DEFINITION_BADGE
            yield replace(result, aggregable_badges=(badge,))
            return

        has_precise_definition = bool(
            await _first_nonempty(self.precise.definition(document, position))
        )
        badge = PARTIAL_DEFINITION_NO_HOVER_BADGE if has_precise_definition else SEARCH_BASED_BADGE
        async for result in self.search.hover(document, position):
            if result is not None:
                yield replace(result, aggregable_badges=(badge,))
