"""Badges marking results as precise, search-based, or partially precise."""

from __future__ import annotations

from basic_code_intel.search.types import Badge

__all__ = [
    "BASIC_CODE_INTEL_LINK_URL",
    "IMPRECISE_BADGE",
    "LINK_URL",
    "PARTIAL_DEFINITION_NO_HOVER_BADGE",
    "PARTIAL_HOVER_NO_DEFINITION_BADGE",
    "SEARCH_BASED_BADGE",
    "SEMANTIC_BADGE",
]

LINK_URL = "https://docs.sourcegraph.com/code_intelligence/explanations/precise_code_intelligence"
BASIC_CODE_INTEL_LINK_URL = (
    "https://docs.sourcegraph.com/code_intelligence/explanations/basic_code_intelligence"
)

_PARTIAL_PREFIX = (
    "It looks like this symbol is defined in another repository that does not "
    "have a pre-computed semantic index."
)

SEMANTIC_BADGE = Badge(
    kind="semantic",
    hover_message="This data comes from a pre-computed semantic index of this project's source.",
    link_url=LINK_URL,
)

SEARCH_BASED_BADGE = Badge(
    kind="search-based",
    hover_message="This data is generated by a heuristic text-based search.",
    link_url=LINK_URL,
)

PARTIAL_HOVER_NO_DEFINITION_BADGE = Badge(
    kind="partial semantic",
    hover_message=f"{_PARTIAL_PREFIX} Go to definition may be imprecise.",
    link_url=LINK_URL,
)

PARTIAL_DEFINITION_NO_HOVER_BADGE = Badge(
    kind="partial semantic",
    hover_message=f"{_PARTIAL_PREFIX} This hover text may be imprecise.",
    link_url=LINK_URL,
)

# Attached to every individual search-based location
IMPRECISE_BADGE = Badge(
    kind="info",
    hover_message=(
        "Search-based results - click to see how these results are calculated "
        "and how to get precise intelligence with LSIF."
    ),
    link_url=BASIC_CODE_INTEL_LINK_URL,
)
