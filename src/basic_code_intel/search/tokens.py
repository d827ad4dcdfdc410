"""Token extraction at a cursor position.

Finds the identifier under the cursor and decides whether it sits inside a
line comment. Code-shaped text inside a comment (a call, a member access,
a quoted name) is not treated as a comment, so usage examples in doc
comments stay navigable.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from basic_code_intel.languages.types import DEFAULT_IDENTIFIER_PATTERN
from basic_code_intel.languages.util import split_lines
from basic_code_intel.search.types import Position

__all__ = ["SearchToken", "find_search_token"]


@dataclass(frozen=True, slots=True)
class SearchToken:
    """The identifier under the cursor.

    Attributes:
        token: The identifier text.
        is_comment: True if the identifier is inside a line comment.
        start: Column of the first identifier character.
        end: Column after the last identifier character.

    """

    token: str
    is_comment: bool
    start: int = 0
    end: int = 0


def _is_identifier(line: str, index: int, pattern: re.Pattern[str]) -> bool:
    return 0 <= index < len(line) and pattern.fullmatch(line[index]) is not None


def _looks_like_code(line: str, token: str) -> bool:
    escaped = re.escape(token)
    blessed = (
        rf"{escaped}\(",  # a call
        rf"\.{escaped}",  # a member access
        rf"('|\"|`){escaped}('|\"|`)",  # exactly a string literal
    )
    return any(re.search(pattern, line) for pattern in blessed)


def find_search_token(
    text: str,
    position: Position,
    line_comment_patterns: Sequence[re.Pattern[str]] = (),
    identifier_pattern: re.Pattern[str] = DEFAULT_IDENTIFIER_PATTERN,
) -> SearchToken | None:
    """Return the identifier at a position, or None if there is none.

    Args:
        text: Full document text.
        position: Cursor position.
        line_comment_patterns: Patterns matching a line-comment prefix.
        identifier_pattern: Pattern matching a single identifier character.

    Returns:
        The token and whether it is inside a comment, or None when the
        cursor is not on an identifier character.

    """
    lines = split_lines(text)
    if not 0 <= position.line < len(lines):
        return None
    line = lines[position.line]

    end = len(line)
    for column in range(position.character, len(line)):
        if not _is_identifier(line, column, identifier_pattern):
            end = column
            break

    start = 0
    for column in range(position.character, -1, -1):
        if not _is_identifier(line, column, identifier_pattern):
            start = column + 1
            break

    if start >= end:
        return None
    token = line[start:end]

    inside_comment = False
    for pattern in line_comment_patterns:
        match = pattern.search(line)
        if match is not None and match.start() < start:
            inside_comment = True
            break

    if inside_comment and _looks_like_code(line, token):
        inside_comment = False

    return SearchToken(token=token, is_comment=inside_comment, start=start, end=end)
