"""Markdown rendering of docstrings for hover content."""

from __future__ import annotations

import re
from typing import Literal

__all__ = ["wrap_indentation_in_code_blocks"]

LineKind = Literal["prose", "code"]

# Fenced blocks, HTML, numbered and bulleted lists would be mangled
_ALREADY_FORMATTED = (
    re.compile(r"```"),
    re.compile(r"</"),
    re.compile(r"^(1\.|- |\* )", re.MULTILINE),
)
_CODE_LINE = re.compile(r"^(  |>).*[^\s]")
_PROSE_LINE = re.compile(r"^[^\s]")


def _kind_of(line: str) -> LineKind | None:
    if _CODE_LINE.search(line):
        return "code"
    if _PROSE_LINE.search(line):
        return "prose"
    return None


def _propagate_prose(kinds: list[LineKind | None], order: range) -> None:
    """Mark undecided lines as prose when the previous line (in order) is prose."""
    state: LineKind | None = "prose"
    for index in order:
        if kinds[index] is None and state == "prose":
            kinds[index] = "prose"
        state = kinds[index]


def wrap_indentation_in_code_blocks(language_id: str, docstring: str) -> str:
    """Fence indented runs of a docstring as code blocks.

    Lines indented by two spaces (or quoted with ``>``) are code, lines
    starting with a non-space are prose. Blank and whitespace-only lines
    take the kind of their prose neighbours, otherwise they are code.

    Args:
        language_id: Language used to label the opened code fences.
        docstring: Plain docstring text.

    Returns:
        The docstring with fences inserted, or unchanged if it already looks
        like Markdown.

    """
    if any(pattern.search(docstring) for pattern in _ALREADY_FORMATTED):
        return docstring

    lines = docstring.split("\n")
    kinds: list[LineKind | None] = [_kind_of(line) for line in lines]
    _propagate_prose(kinds, range(len(lines)))
    _propagate_prose(kinds, range(len(lines) - 1, -1, -1))
    known: list[LineKind] = [kind or "code" for kind in kinds]

    result: list[str] = []
    if known and known[0] == "code":
        result.append(f"```{language_id}")
    for index, line in enumerate(lines):
        result.append(line)
        current = known[index]
        if index + 1 < len(lines):
            following = known[index + 1]
            if current == "prose" and following == "code":
                result.append(f"```{language_id}")
            elif current == "code" and following == "prose":
                result.append("```")
        elif current == "code":
            result.append("```")
    return "\n".join(result)
