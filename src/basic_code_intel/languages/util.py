"""Helpers shared by the per-language definition filters."""

from __future__ import annotations

import posixpath
import re
from collections.abc import Callable, Iterable

from basic_code_intel.search.types import SearchResult

__all__ = [
    "dirname",
    "dot_to_slash",
    "extract_from_lines",
    "filter_results",
    "filter_results_by_imports",
    "join_path",
    "remove_extension",
    "slash_to_dot",
    "split_lines",
]

_LINE_BREAK = re.compile(r"\r?\n|\r")
_EXTENSION = re.compile(r"\.[^/.]+$")


def split_lines(text: str) -> list[str]:
    """Split text on any line ending, keeping empty trailing lines."""
    return _LINE_BREAK.split(text)


def extract_from_lines(file_content: str, *patterns: re.Pattern[str]) -> list[str]:
    """Extract the first capture group of the first matching pattern per line.

    Args:
        file_content: Source text to scan.
        *patterns: Patterns with exactly one capture group, tried in order.

    Returns:
        One captured string per line that matched any pattern.

    """
    extracted: list[str] = []
    for line in split_lines(file_content):
        for pattern in patterns:
            match = pattern.search(line)
            if match:
                extracted.append(match.group(1))
                break
    return extracted


def filter_results(
    results: list[SearchResult],
    predicate: Callable[[SearchResult], bool],
) -> list[SearchResult]:
    """Keep results passing the predicate, or all of them if none pass.

    A fuzzy answer beats no answer, so an empty filter outcome falls back
    to the unfiltered input.
    """
    filtered = [result for result in results if predicate(result)]
    return filtered if filtered else results


def filter_results_by_imports(
    results: list[SearchResult],
    import_paths: Iterable[str],
    predicate: Callable[[SearchResult, str], bool],
) -> list[SearchResult]:
    """Keep results matching at least one import path (see filter_results)."""
    paths = list(import_paths)
    return filter_results(
        results, lambda result: any(predicate(result, path) for path in paths)
    )


def remove_extension(file_path: str) -> str:
    """Strip the last extension from the final path component."""
    return _EXTENSION.sub("", file_path, count=1)


def slash_to_dot(value: str) -> str:
    return value.replace("/", ".")


def dot_to_slash(value: str) -> str:
    return value.replace(".", "/")


def dirname(file_path: str) -> str:
    """Return the directory of a path, ``.`` for a bare file name."""
    return posixpath.dirname(file_path) or "."


def join_path(*parts: str) -> str:
    """Join and normalize POSIX path segments, ignoring empty ones."""
    kept = [part for part in parts if part]
    if not kept:
        return "."
    return posixpath.normpath(posixpath.join(*kept))
