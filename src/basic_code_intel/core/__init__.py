"""Core infrastructure shared by all basic-code-intel modules."""

from basic_code_intel.core.exceptions import (
    AggregateGraphQLError,
    BasicCodeIntelError,
    ConfigError,
    ConfigValidationError,
    GraphQLError,
    LanguageNotFoundError,
    SearchError,
)

__all__ = [
    "AggregateGraphQLError",
    "BasicCodeIntelError",
    "ConfigError",
    "ConfigValidationError",
    "GraphQLError",
    "LanguageNotFoundError",
    "SearchError",
]
