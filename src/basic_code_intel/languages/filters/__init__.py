"""Import-aware definition filters, one module per language family."""

from basic_code_intel.languages.filters.cpp import filter_cpp_definitions
from basic_code_intel.languages.filters.go import filter_go_definitions
from basic_code_intel.languages.filters.java import filter_java_definitions
from basic_code_intel.languages.filters.python import filter_python_definitions
from basic_code_intel.languages.filters.typescript import filter_typescript_definitions

__all__ = [
    "filter_cpp_definitions",
    "filter_go_definitions",
    "filter_java_definitions",
    "filter_python_definitions",
    "filter_typescript_definitions",
]
