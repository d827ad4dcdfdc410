"""Language profiles: comment syntax, identifier characters, import filters."""

from basic_code_intel.languages.registry import LanguageRegistry
from basic_code_intel.languages.types import (
    BlockComment,
    BlockCommentStyle,
    CommentStyle,
    DocPlacement,
    FilterContext,
    LanguageProfile,
    LineAndBlockCommentStyle,
    LineCommentStyle,
)

__all__ = [
    "BlockComment",
    "BlockCommentStyle",
    "CommentStyle",
    "DocPlacement",
    "FilterContext",
    "LanguageProfile",
    "LanguageRegistry",
    "LineAndBlockCommentStyle",
    "LineCommentStyle",
]
