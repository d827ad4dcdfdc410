"""Provider interfaces and the values they exchange with the host.

The engine talks to three kinds of collaborators, all abstract here:
- a search backend (``SearchBackend``),
- a file content source (``FileContentSource``),
- a repository metadata source (``RepositoryResolver``).

Providers themselves (search-based, precise, combined) implement
``BaseProviders``: each operation is an async generator that yields
intermediate results until the lookup is complete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass, field

from basic_code_intel.search.types import Badge, Location, Position, Range, SearchResult

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


@dataclass(frozen=True, slots=True)
class TextDocument:
    """A document open in the host.

    Attributes:
        uri: ``git://{repo}?{revision}#{path}``.
        language_id: Language of the document (e.g. ``go``).
        text: Document content, if the host already has it.

    """

    uri: str
    language_id: str
    text: str | None = None


@dataclass(frozen=True, slots=True)
class ReferenceContext:
    """Host options for a references request."""

    include_declaration: bool = True


@dataclass(frozen=True, slots=True)
class Hover:
    """Hover content in Markdown.

    Attributes:
        contents: Markdown text.
        range: Range the hover applies to, if known.
        aggregable_badges: Badges describing how precise the hover is.

    """

    contents: str
    range: Range | None = None
    aggregable_badges: tuple[Badge, ...] = field(default=(), compare=False)


@dataclass(frozen=True, slots=True)
class RepoMeta:
    """Repository metadata used to widen searches to forks and archives."""

    name: str
    is_fork: bool = False
    is_archived: bool = False


class SearchBackend(ABC):
    """Executes structured text and symbol searches."""

    @abstractmethod
    async def search(self, query: str, file_local: bool = True) -> list[SearchResult]:
        """Run a search query.

        Args:
            query: Space-joined search terms.
            file_local: Request the ``fileLocal`` flag on symbol results.

        Returns:
            Flattened symbol and text results.

        Raises:
            SearchError: On transport failures.
            GraphQLError: On application errors reported by the backend.

        """
        ...


class FileContentSource(ABC):
    """Fetches raw file content."""

    @abstractmethod
    async def get_file_content(self, repo: str, rev: str, path: str) -> str | None:
        """Return the content of a file, or None if the revision or file is unknown."""
        ...


class RepositoryResolver(ABC):
    """Resolves repository metadata."""

    @abstractmethod
    async def resolve_repo(self, name: str) -> RepoMeta:
        ...


class BaseProviders(ABC):
    """Definition, references and hover as incremental result streams."""

    @abstractmethod
    def definition(
        self, document: TextDocument, position: Position
    ) -> AsyncIterator[list[Location] | None]:
        ...

    @abstractmethod
    def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> AsyncIterator[list[Location] | None]:
        ...

    @abstractmethod
    def hover(self, document: TextDocument, position: Position) -> AsyncIterator[Hover | None]:
        ...


class NoopProviders(BaseProviders):
    """Providers that never yield; stands in for an absent precise index."""

    async def definition(
        self, document: TextDocument, position: Position
    ) -> AsyncIterator[list[Location] | None]:
        return
        yield

    async def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> AsyncIterator[list[Location] | None]:
        return
        yield

    async def hover(self, document: TextDocument, position: Position) -> AsyncIterator[Hover | None]:
        return
        yield
