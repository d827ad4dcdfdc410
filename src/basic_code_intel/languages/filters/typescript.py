"""TypeScript and JavaScript definition filter.

Only relative module specifiers can match: the specifier is joined onto
the querying file's directory and compared with the candidate's path
minus its extension.
"""

from __future__ import annotations

import re

from basic_code_intel.languages.types import FilterContext
from basic_code_intel.languages.util import (
    dirname,
    extract_from_lines,
    filter_results_by_imports,
    join_path,
    remove_extension,
)
from basic_code_intel.search.types import SearchResult

_ES_IMPORT = re.compile(r"""\bfrom ['"](.*)['"];?$""")
_REQUIRE = re.compile(r"""\brequire\(['"](.*)['"]\)""")


def filter_typescript_definitions(
    results: list[SearchResult], context: FilterContext
) -> list[SearchResult]:
    import_paths = extract_from_lines(context.file_content, _ES_IMPORT, _REQUIRE)
    directory = dirname(context.file_path)
    return filter_results_by_imports(
        results,
        import_paths,
        lambda result, import_path: join_path(directory, import_path)
        == remove_extension(result.file),
    )
