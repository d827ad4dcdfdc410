"""Data types describing a language to the search engine.

A LanguageProfile bundles everything the token extractor, docstring
extractor, query builder and result filter need to know about one language.
Comment syntax is modelled as a tagged union of three style variants so
consumers branch on the variant instead of probing optional fields.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from basic_code_intel.search.types import SearchResult

__all__ = [
    "DEFAULT_IDENTIFIER_PATTERN",
    "BlockComment",
    "BlockCommentStyle",
    "CommentStyle",
    "DocPlacement",
    "FilterContext",
    "FilterFunction",
    "LanguageProfile",
    "LineAndBlockCommentStyle",
    "LineCommentStyle",
    "line_patterns",
]

DEFAULT_IDENTIFIER_PATTERN = re.compile(r"[A-Za-z0-9_]")


class DocPlacement(str, Enum):
    """Where documentation sits relative to the definition it describes."""

    ABOVE = "above"
    BELOW = "below"


@dataclass(frozen=True, slots=True)
class BlockComment:
    """Delimiters of a block comment.

    Attributes:
        start: Opening delimiter (e.g. ``/**``).
        end: Closing delimiter (e.g. ``*/``).
        line_noise: Per-line decoration to strip (e.g. a leading ``*``).

    """

    start: re.Pattern[str]
    end: re.Pattern[str]
    line_noise: re.Pattern[str] | None = None


@dataclass(frozen=True, slots=True)
class LineCommentStyle:
    """Line comments only; ``line`` matches the comment prefix."""

    line: re.Pattern[str]
    placement: DocPlacement = DocPlacement.ABOVE


@dataclass(frozen=True, slots=True)
class BlockCommentStyle:
    """Block comments only."""

    block: BlockComment
    placement: DocPlacement = DocPlacement.ABOVE


@dataclass(frozen=True, slots=True)
class LineAndBlockCommentStyle:
    """Both line and block comments; line comments are tried first."""

    line: re.Pattern[str]
    block: BlockComment
    placement: DocPlacement = DocPlacement.ABOVE


CommentStyle: TypeAlias = LineCommentStyle | BlockCommentStyle | LineAndBlockCommentStyle


@dataclass(frozen=True, slots=True)
class FilterContext:
    """What a definition filter knows about the querying document.

    Attributes:
        repo: Repository of the querying document.
        rev: Revision of the querying document.
        file_path: Path of the querying document inside the repository.
        file_content: Full text of the querying document.

    """

    repo: str
    rev: str
    file_path: str
    file_content: str


FilterFunction: TypeAlias = Callable[[list[SearchResult], FilterContext], list[SearchResult]]


def _identity_filter(results: list[SearchResult], context: FilterContext) -> list[SearchResult]:
    return results


@dataclass(frozen=True, slots=True)
class LanguageProfile:
    """Everything the engine needs to know about one language.

    Attributes:
        language_id: Identifier used by editors (e.g. ``typescript``).
        display_name: Human-readable name.
        file_extensions: Extensions without the leading dot, in declaration
            order (also the order of the query file filter).
        comment_styles: Ordered comment styles; the first that yields a match wins.
        identifier_pattern: Single-character pattern of identifier characters.
        docstring_ignore: Lines to skip between a definition and its docs.
        filter_definitions: Import-aware pruning of definition candidates.

    """

    language_id: str
    display_name: str
    file_extensions: tuple[str, ...]
    comment_styles: tuple[CommentStyle, ...] = ()
    identifier_pattern: re.Pattern[str] = DEFAULT_IDENTIFIER_PATTERN
    docstring_ignore: re.Pattern[str] | None = None
    filter_definitions: FilterFunction = field(default=_identity_filter, compare=False)

    @property
    def has_filter(self) -> bool:
        """Return True if the profile prunes definitions by imports."""
        return self.filter_definitions is not _identity_filter


def line_patterns(styles: Sequence[CommentStyle]) -> list[re.Pattern[str]]:
    """Return the line-comment patterns of the given styles, in order."""
    return [
        style.line
        for style in styles
        if isinstance(style, (LineCommentStyle, LineAndBlockCommentStyle))
    ]
