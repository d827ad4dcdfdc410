"""C, C++, Objective-C and CUDA definition filter.

Candidates survive when their path, minus extension, ends with the path of
a user ``#include``/``#import`` or an Objective-C ``@import`` module.
System includes (``<stdio.h>``) are not considered.
"""

from __future__ import annotations

import re

from basic_code_intel.languages.types import FilterContext
from basic_code_intel.languages.util import (
    dot_to_slash,
    extract_from_lines,
    filter_results_by_imports,
    remove_extension,
)
from basic_code_intel.search.types import SearchResult

_USER_INCLUDE = re.compile(r'^#(?:include|import) "(.*)"$')
_OBJC_IMPORT = re.compile(r"^@import (.+);$")


def filter_cpp_definitions(
    results: list[SearchResult], context: FilterContext
) -> list[SearchResult]:
    """Keep candidates located in an included file.

    Args:
        results: Candidate definitions.
        context: The querying document.

    Returns:
        Matching candidates, or ``results`` unchanged if none match.

    """
    import_paths = extract_from_lines(context.file_content, _USER_INCLUDE)
    # @import x.y.z; becomes x/y/z to line up with include paths
    import_paths.extend(
        dot_to_slash(module) for module in extract_from_lines(context.file_content, _OBJC_IMPORT)
    )

    return filter_results_by_imports(
        results,
        import_paths,
        lambda result, import_path: remove_extension(result.file).endswith(
            remove_extension(import_path)
        ),
    )
