"""Provider interfaces, precise/search merging and host-facing streams."""

from basic_code_intel.providers.base import (
    BaseProviders,
    FileContentSource,
    Hover,
    NoopProviders,
    ReferenceContext,
    RepoMeta,
    RepositoryResolver,
    SearchBackend,
    TextDocument,
)

__all__ = [
    "BaseProviders",
    "FileContentSource",
    "Hover",
    "NoopProviders",
    "ReferenceContext",
    "RepoMeta",
    "RepositoryResolver",
    "SearchBackend",
    "TextDocument",
]
