"""Settings for search-based code intelligence.

This module provides the Pydantic settings model consumed by the search
orchestrator and the Sourcegraph API client, plus a YAML loader.

Example YAML:
    basic_code_intel:
      sourcegraph_url: https://sourcegraph.example.com
      index_only: false
      unindexed_search_timeout_ms: 5000
      include_forks: true
      trace_search: true

"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from basic_code_intel.core.exceptions import ConfigError, ConfigValidationError

__all__ = [
    "PUBLIC_INSTANCE_URL",
    "BasicCodeIntelSettings",
    "load_settings",
]

# Multi-tenant deployment where global search is prohibitively expensive
PUBLIC_INSTANCE_URL = "https://sourcegraph.com"

MAX_CONFIG_SIZE = 1024 * 1024  # 1MB

_SECTION_KEY = "basic_code_intel"


class BasicCodeIntelSettings(BaseModel):
    """Search behaviour and transport settings.

    Attributes:
        sourcegraph_url: Base URL of the Sourcegraph instance.
        access_token: Optional API token sent as ``Authorization: token ...``.
        index_only: Issue index-only queries only, never racing an un-indexed one.
        unindexed_search_timeout_ms: Delay before the index-only fallback starts.
        trace_search: Log every issued search query at INFO.
        include_forks: Add ``fork:yes`` to every query.
        include_archives: Add ``archived:yes`` to every query.
        request_file_local: Request the ``fileLocal`` field on symbol results.
        search_context: Optional search context prepended as ``context:<name>``.
        disable_mixed_results: Do not add search-based references once precise
            references exist.
        search_current_file_first: Look for definitions in the current file
            before the current repository.
        file_content_cache_size: Capacity of the file content LRU cache.
        request_timeout_seconds: HTTP timeout for GraphQL requests.

    """

    model_config = ConfigDict(frozen=True)

    sourcegraph_url: str = Field(
        PUBLIC_INSTANCE_URL,
        description="Base URL of the Sourcegraph instance",
    )
    access_token: str | None = Field(
        None,
        description="Sourcegraph access token (never logged)",
        repr=False,
    )
    index_only: bool = Field(
        False,
        description="Use only indexed requests to the search API",
    )
    unindexed_search_timeout_ms: int = Field(
        5000,
        ge=0,
        description="Timeout in milliseconds before the index-only fallback is issued",
    )
    trace_search: bool = Field(
        False,
        description="Log every search query",
    )
    include_forks: bool = Field(
        False,
        description="Include forked repositories in search results",
    )
    include_archives: bool = Field(
        False,
        description="Include archived repositories in search results",
    )
    request_file_local: bool = Field(
        True,
        description="Request the fileLocal field (absent on older instances)",
    )
    search_context: str | None = Field(
        None,
        description="Search context every query is restricted to",
    )
    disable_mixed_results: bool = Field(
        False,
        description="Suppress search-based references when precise ones exist",
    )
    search_current_file_first: bool = Field(
        False,
        description="Search the current file before the current repository for definitions",
    )
    file_content_cache_size: int = Field(
        10,
        ge=1,
        description="Number of fetched files kept in memory",
    )
    request_timeout_seconds: float = Field(
        30.0,
        gt=0,
        description="HTTP timeout for GraphQL requests",
    )

    @field_validator("sourcegraph_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"sourcegraph_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @property
    def is_public_instance(self) -> bool:
        """Return True when talking to the public multi-tenant instance."""
        return self.sourcegraph_url == PUBLIC_INSTANCE_URL

    @property
    def unindexed_search_timeout(self) -> float:
        """Return the racing delay in seconds."""
        return self.unindexed_search_timeout_ms / 1000


def load_settings(path: Path) -> BasicCodeIntelSettings:
    """Load and validate settings from a YAML file.

    The document may either hold the settings at the top level or nest them
    under a ``basic_code_intel`` key.

    Args:
        path: Path to the YAML settings file.

    Returns:
        Validated BasicCodeIntelSettings.

    Raises:
        ConfigError: On file or parse errors.
        ConfigValidationError: When the document fails validation.

    """
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")
    if not path.is_file():
        raise ConfigError(f"Settings path is not a file: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigError(f"Settings file {path} exceeds 1MB limit")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings must be a YAML mapping, got {type(data).__name__}")

    section = data.get(_SECTION_KEY, data)
    if not isinstance(section, dict):
        raise ConfigError(
            f"'{_SECTION_KEY}' section must be a mapping, got {type(section).__name__}"
        )

    try:
        return BasicCodeIntelSettings.model_validate(section)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Settings validation failed for {path}: {e}",
            [dict(err) for err in e.errors()],
        ) from e
