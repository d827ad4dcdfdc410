"""Custom exception hierarchy for basic-code-intel.

All custom exceptions inherit from BasicCodeIntelError to enable:
- Unified exception handling at the provider boundary
- Clear distinction between "no result" and a failed lookup
"""

from typing import Any

__all__ = [
    "BasicCodeIntelError",
    "ConfigError",
    "ConfigValidationError",
    "LanguageNotFoundError",
    "SearchError",
    "GraphQLError",
    "AggregateGraphQLError",
]


class BasicCodeIntelError(Exception):
    """Base exception for all basic-code-intel errors."""

    pass


class ConfigError(BasicCodeIntelError):
    """Configuration loading or validation error.

    Raised when:
    - The settings file does not exist or cannot be read
    - The settings file is not valid YAML
    - The settings document is not a mapping
    """

    pass


class ConfigValidationError(ConfigError):
    """Validation error with structured Pydantic details.

    Attributes:
        errors: List of error dicts with 'loc', 'msg', and 'type' fields,
            as produced by pydantic's ``ValidationError.errors()``.

    """

    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        """Initialize ConfigValidationError with message and structured errors.

        Args:
            message: Human-readable error message.
            errors: List of error dicts from Pydantic ValidationError.

        """
        super().__init__(message)
        self.errors = errors


class LanguageNotFoundError(BasicCodeIntelError):
    """Raised when a language identifier has no registered profile.

    Attributes:
        language_id: The identifier that was looked up.

    """

    def __init__(self, language_id: str) -> None:
        super().__init__(f"Unknown language: {language_id}")
        self.language_id = language_id


class SearchError(BasicCodeIntelError):
    """Transport-level failure of the search collaborator.

    Raised when:
    - The search backend cannot be reached or times out
    - The backend answers with a non-success HTTP status
    - The response body is not a GraphQL payload

    Attributes:
        query: The search query (or GraphQL document) that failed, if known.

    """

    def __init__(self, message: str, query: str | None = None) -> None:
        super().__init__(message)
        self.query = query


class GraphQLError(BasicCodeIntelError):
    """A single application error returned in a GraphQL ``errors`` array.

    Attributes:
        path: The response path the error refers to, if the server sent one.

    """

    def __init__(self, message: str, path: list[Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class AggregateGraphQLError(BasicCodeIntelError):
    """Several GraphQL application errors combined into one.

    The message is every individual message joined by newlines.

    Attributes:
        errors: The individual errors, in response order.

    """

    def __init__(self, errors: list[GraphQLError]) -> None:
        super().__init__("\n".join(error.message for error in errors))
        self.errors = errors
