"""Proximity ranking of result locations.

Paths sharing more segments with the querying document rank first. The
similarity is the Jaccard index over the sets of ``/``-separated segments.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Set

from basic_code_intel.search.types import Location
from basic_code_intel.search.uri import parse_git_uri

__all__ = ["jaccard_index", "path_segments", "sort_by_proximity"]


def jaccard_index(a: Set[Hashable], b: Set[Hashable]) -> float:
    """Return |a ∩ b| / |a ∪ b|, or 0.0 when both sets are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def path_segments(path: str) -> frozenset[str]:
    return frozenset(path.split("/"))


def sort_by_proximity(locations: Iterable[Location], current_uri: str) -> list[Location]:
    """Sort locations by descending path similarity to the current document.

    The sort is stable: equally similar locations keep their input order.

    Args:
        locations: Locations to rank.
        current_uri: ``git://`` URI of the querying document.

    Returns:
        A new, sorted list.

    """
    current = path_segments(parse_git_uri(current_uri).path)
    return sorted(
        locations,
        key=lambda location: -jaccard_index(path_segments(parse_git_uri(location.uri).path), current),
    )
