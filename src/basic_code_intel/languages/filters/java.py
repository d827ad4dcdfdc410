"""Java definition filter.

Candidates survive when their directory, read as a dotted package, ends
with an imported package, a statically imported class, or the querying
file's own package.
"""

from __future__ import annotations

import re

from basic_code_intel.languages.types import FilterContext
from basic_code_intel.languages.util import (
    dirname,
    extract_from_lines,
    filter_results_by_imports,
    slash_to_dot,
)
from basic_code_intel.search.types import SearchResult

# TODO: wildcard static imports (import static a.b.C.*;) are not captured
_STATIC_IMPORT = re.compile(r"^import static ([a-z_0-9.]+)\.[A-Z][\w.]+;$")
_IMPORT = re.compile(r"^import ([\w.]+);$")
_PACKAGE = re.compile(r"^package ([\w.]+);$")


def filter_java_definitions(
    results: list[SearchResult], context: FilterContext
) -> list[SearchResult]:
    import_paths = extract_from_lines(context.file_content, _STATIC_IMPORT, _IMPORT)
    import_paths.extend(extract_from_lines(context.file_content, _PACKAGE))

    return filter_results_by_imports(
        results,
        import_paths,
        lambda result, import_path: slash_to_dot(dirname(result.file)).endswith(import_path),
    )
