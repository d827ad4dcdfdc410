"""Conversion of GraphQL search matches into SearchResults."""

from __future__ import annotations

import logging
from typing import Any

from basic_code_intel.search.types import Range, SearchResult

logger = logging.getLogger(__name__)

__all__ = ["search_result_to_results"]


def _range_from_payload(payload: dict[str, Any]) -> Range:
    start, end = payload["start"], payload["end"]
    return Range.from_coordinates(start["line"], start["character"], end["line"], end["character"])


def search_result_to_results(match: dict[str, Any]) -> list[SearchResult]:
    """Flatten one ``FileMatch`` into symbol and line-match results.

    Symbols without a range are skipped. Every ``(offset, length)`` pair of
    a line match becomes its own single-line result.

    Args:
        match: A ``FileMatch`` object from the search GraphQL response.

    Returns:
        Symbol results first, then text results, in response order.

    """
    repo = match["repository"]["name"]
    file_info = match["file"]
    rev = (file_info.get("commit") or {}).get("oid", "")

    results: list[SearchResult] = []
    for symbol in match.get("symbols") or []:
        location = symbol.get("location") or {}
        if not location.get("range"):
            logger.debug("Skipping symbol %s without a range", symbol.get("name"))
            continue
        results.append(
            SearchResult(
                repo=repo,
                rev=rev,
                file=location["resource"]["path"],
                range=_range_from_payload(location["range"]),
                symbol_name=symbol.get("name"),
                symbol_kind=symbol.get("kind"),
                container_name=symbol.get("containerName"),
                file_local=bool(symbol.get("fileLocal")),
            )
        )

    for line_match in match.get("lineMatches") or []:
        line_number = line_match["lineNumber"]
        for offset, length in line_match.get("offsetAndLengths") or []:
            results.append(
                SearchResult(
                    repo=repo,
                    rev=rev,
                    file=file_info["path"],
                    range=Range.from_coordinates(line_number, offset, line_number, offset + length),
                    preview=line_match.get("preview"),
                )
            )

    return results
