"""Python definition filter.

Relative imports (``from ..pkg import x``) are resolved against the
querying file's directory and must name the candidate module exactly.
Absolute imports match any candidate whose path contains the dotted
module path rewritten with slashes.
"""

from __future__ import annotations

import re

from basic_code_intel.languages.types import FilterContext
from basic_code_intel.languages.util import (
    dirname,
    dot_to_slash,
    extract_from_lines,
    filter_results_by_imports,
    join_path,
    remove_extension,
)
from basic_code_intel.search.types import SearchResult

_IMPORT = re.compile(r"^import ([.\w]*)")
_FROM_IMPORT = re.compile(r"^from ([.\w]*)")
_RELATIVE = re.compile(r"^\.(\.*)(.*)")


def relative_import_path(source_path: str, import_path: str) -> str | None:
    """Resolve a relative Python import to a path without extension.

    Args:
        source_path: Path of the importing file.
        import_path: Dotted import path, possibly with leading dots.

    Returns:
        The resolved path, or None if ``import_path`` is absolute.

    """
    match = _RELATIVE.match(import_path)
    if match is None:
        return None
    parent_dots, rest = match.groups()
    return join_path(dirname(source_path), "../" * len(parent_dots), dot_to_slash(rest))


def _matches_import(result: SearchResult, import_path: str, source_path: str) -> bool:
    relative = relative_import_path(source_path, import_path)
    if relative is not None:
        return relative == remove_extension(result.file)
    return dot_to_slash(import_path) in result.file


def filter_python_definitions(
    results: list[SearchResult], context: FilterContext
) -> list[SearchResult]:
    import_paths = extract_from_lines(context.file_content, _IMPORT, _FROM_IMPORT)
    return filter_results_by_imports(
        results,
        import_paths,
        lambda result, import_path: _matches_import(result, import_path, context.file_path),
    )
