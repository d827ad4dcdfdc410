"""Go definition filter.

Candidates survive when they live in the querying file's package, or in a
package whose import path contains one of the querying file's imports.
"""

from __future__ import annotations

import re

from basic_code_intel.languages.types import FilterContext
from basic_code_intel.languages.util import dirname, extract_from_lines, filter_results
from basic_code_intel.search.types import SearchResult

# Single-line imports and entries of a grouped import block (tab indented)
_IMPORT = re.compile(r'^(?:import |\t)(?:\w+ |\. )?"(.*)"$')


def package_import_path(repo: str, file_path: str) -> str:
    """Return the Go import path of the package containing a file."""
    return f"{repo}/{dirname(file_path)}"


def filter_go_definitions(
    results: list[SearchResult], context: FilterContext
) -> list[SearchResult]:
    import_paths = extract_from_lines(context.file_content, _IMPORT)
    current_package = package_import_path(context.repo, context.file_path)

    def _visible(result: SearchResult) -> bool:
        candidate = package_import_path(result.repo, result.file)
        return candidate == current_package or any(path in candidate for path in import_paths)

    return filter_results(results, _visible)
