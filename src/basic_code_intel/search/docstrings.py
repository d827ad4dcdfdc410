"""Docstring extraction next to a definition line.

Handles three shapes of documentation:
- a comment on the definition line itself,
- a run of line comments above or below the definition,
- a block comment above or below the definition.

Lines above the definition are scanned in reverse, with the block
delimiters swapped, and restored to source order at the end.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from basic_code_intel.languages.types import (
    BlockComment,
    BlockCommentStyle,
    CommentStyle,
    DocPlacement,
    LineAndBlockCommentStyle,
    LineCommentStyle,
)
from basic_code_intel.languages.util import split_lines

logger = logging.getLogger(__name__)

__all__ = ["find_docstring"]


def _parts(style: CommentStyle) -> tuple[re.Pattern[str] | None, BlockComment | None]:
    if isinstance(style, LineCommentStyle):
        return style.line, None
    if isinstance(style, BlockCommentStyle):
        return None, style.block
    if isinstance(style, LineAndBlockCommentStyle):
        return style.line, style.block
    raise TypeError(f"Unsupported comment style: {type(style).__name__}")


def _same_line_docstring(
    line: str, line_pattern: re.Pattern[str] | None, block: BlockComment | None
) -> str | None:
    """Return the text of a comment on the definition line itself."""
    if line_pattern is not None:
        # A comment must start the line or follow whitespace or a closing
        # token, so "http://" in a string literal is not a comment
        match = re.search(rf"(?:^|(?<=[\s;)}}]))(?:{line_pattern.pattern})", line)
        if match and line[match.end() :]:
            return line[match.end() :]

    if block is not None:
        block_pattern = re.compile(
            rf"(?:{block.start.pattern})(?P<body>(?:(?!{block.end.pattern}).)*)"
            rf"(?:{block.end.pattern})"
        )
        match = block_pattern.search(line)
        if match and match.group("body"):
            return match.group("body")

    return None


def _candidate_lines(lines: list[str], placement: DocPlacement, definition_line: int) -> list[str]:
    if placement is DocPlacement.BELOW:
        return lines[definition_line + 1 :]
    return list(reversed(lines[:definition_line]))


def _restore_order(lines: list[str], placement: DocPlacement) -> list[str]:
    return lines if placement is DocPlacement.BELOW else list(reversed(lines))


def _drop_ignored(lines: list[str], ignore: re.Pattern[str] | None) -> list[str]:
    if ignore is None:
        return lines
    index = 0
    while index < len(lines) and ignore.search(lines[index]):
        index += 1
    return lines[index:]


def _line_comment_docstring(
    line_pattern: re.Pattern[str], lines: list[str], ignore: re.Pattern[str] | None
) -> list[str] | None:
    prefix = re.compile(rf"^\s*(?:{line_pattern.pattern})")
    doc_lines: list[str] = []
    for line in _drop_ignored(lines, ignore):
        if not prefix.search(line):
            break
        doc_lines.append(prefix.sub("", line, count=1))
    return doc_lines or None


def _block_comment_docstring(
    block: BlockComment, lines: list[str], ignore: re.Pattern[str] | None
) -> list[str] | None:
    clean = _drop_ignored(lines, ignore)
    if not clean or not block.start.search(clean[0]):
        return None

    # The opening delimiter goes first, so that identical delimiters (""")
    # do not close the block on its own first line
    clean = [block.start.sub("", clean[0], count=1), *clean[1:]]

    doc_lines: list[str] = []
    for line in clean:
        doc_lines.append(line)
        if block.end.search(line):
            break

    first = doc_lines[0]
    indentation = re.compile(rf"^\s{{0,{len(first) - len(first.lstrip())}}}")

    result: list[str] = []
    for line in doc_lines:
        line = block.end.sub("", line, count=1)
        line = indentation.sub("", line, count=1)
        if block.line_noise is not None:
            line = block.line_noise.sub("", line, count=1)
        result.append(line)
    return result


def _find_with_style(
    style: CommentStyle,
    lines: list[str],
    definition_line: int,
    ignore: re.Pattern[str] | None,
) -> str | None:
    line_pattern, block = _parts(style)
    placement = style.placement

    if 0 <= definition_line < len(lines):
        same_line = _same_line_docstring(lines[definition_line], line_pattern, block)
        if same_line:
            return same_line

    if line_pattern is not None:
        found = _line_comment_docstring(
            line_pattern, _candidate_lines(lines, placement, definition_line), ignore
        )
        if found:
            return "\n".join(_restore_order(found, placement))

    if block is not None:
        # Scanning upwards meets the closing delimiter first
        if placement is not DocPlacement.BELOW:
            block = BlockComment(start=block.end, end=block.start, line_noise=block.line_noise)
        found = _block_comment_docstring(
            block, _candidate_lines(lines, placement, definition_line), ignore
        )
        if found:
            return "\n".join(_restore_order(found, placement))

    return None


def find_docstring(
    definition_line: int,
    file_text: str,
    comment_styles: Sequence[CommentStyle],
    docstring_ignore: re.Pattern[str] | None = None,
) -> str | None:
    """Extract the documentation attached to a definition.

    Args:
        definition_line: Zero-based index of the definition line.
        file_text: Full text of the file holding the definition.
        comment_styles: Comment styles of the language, tried in order.
        docstring_ignore: Lines to skip between definition and docs
            (e.g. Java annotations).

    Returns:
        The docstring with comment syntax removed, or None if the language
        has no comment style or no documentation was found.

    """
    if not comment_styles:
        return None

    lines = split_lines(file_text)
    for style in comment_styles:
        docstring = _find_with_style(style, lines, definition_line, docstring_ignore)
        if docstring:
            return docstring

    logger.debug("No docstring found for definition at line %d", definition_line)
    return None
