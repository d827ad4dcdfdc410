"""Comment syntax fragments shared by several language profiles."""

from __future__ import annotations

import re

from basic_code_intel.languages.types import (
    BlockComment,
    BlockCommentStyle,
    DocPlacement,
    LineAndBlockCommentStyle,
    LineCommentStyle,
)

# Two or more slashes followed by one optional space
SLASH_PATTERN = re.compile(r"///*\s?")

# Exactly three slashes followed by one optional space
TRIPLE_SLASH_PATTERN = re.compile(r"///\s?")

# Two slashes, an optional third, one optional space
DOC_SLASH_PATTERN = re.compile(r"///?\s?")

HASH_PATTERN = re.compile(r"#\s?")

# Whitespace followed by an asterisk at the beginning of a line
LEADING_ASTERISK_PATTERN = re.compile(r"(^\s*\*\s?)?")

# Whitespace followed by an at-symbol at the beginning of a line
LEADING_AT_SYMBOL_PATTERN = re.compile(r"^\s*@")

C_STYLE_BLOCK = BlockComment(
    start=re.compile(r"/\*\*?"),
    end=re.compile(r"\*/"),
    line_noise=LEADING_ASTERISK_PATTERN,
)

C_STYLE = LineAndBlockCommentStyle(line=SLASH_PATTERN, block=C_STYLE_BLOCK)

SHELL_STYLE = LineCommentStyle(line=HASH_PATTERN)

PYTHON_STYLE = LineAndBlockCommentStyle(
    line=HASH_PATTERN,
    block=BlockComment(start=re.compile(r'"""'), end=re.compile(r'"""')),
    placement=DocPlacement.BELOW,
)

LISP_STYLE = BlockCommentStyle(
    block=BlockComment(start=re.compile(r'"'), end=re.compile(r'"')),
    placement=DocPlacement.BELOW,
)


def c_style_with_line(line: re.Pattern[str]) -> LineAndBlockCommentStyle:
    """Return the C block style paired with a different line-comment prefix."""
    return LineAndBlockCommentStyle(line=line, block=C_STYLE_BLOCK)
