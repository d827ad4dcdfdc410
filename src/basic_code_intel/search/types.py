"""Core value types shared by the search pipeline.

Defines Position, Range, SearchResult and Location. SearchResult is what the
search collaborator returns; Location is what providers hand to the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from basic_code_intel.search.uri import make_git_uri

__all__ = [
    "Badge",
    "Location",
    "Position",
    "Range",
    "SearchResult",
]


@dataclass(frozen=True, slots=True)
class Position:
    """A zero-based line/character pair."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    """A half-open span between two positions."""

    start: Position
    end: Position

    @classmethod
    def from_coordinates(
        cls, start_line: int, start_character: int, end_line: int, end_character: int
    ) -> Range:
        """Build a range from four integers."""
        return cls(Position(start_line, start_character), Position(end_line, end_character))


@dataclass(frozen=True, slots=True)
class Badge:
    """An annotation the host shows next to a result.

    Attributes:
        kind: Short machine-readable label (e.g. ``search-based``).
        hover_message: Text shown when hovering the badge.
        link_url: Documentation link for the badge.

    """

    kind: str
    hover_message: str
    link_url: str


@dataclass(frozen=True, slots=True)
class Location:
    """A range inside a file, addressed by a ``git://`` URI.

    Attributes:
        uri: ``git://{repo}?{revision}#{file}``.
        range: Span of the match, or None when the whole file is meant.
        badge: Indicator of how precise the location is.
        aggregable_badges: Badges the host may collapse across results.

    """

    uri: str
    range: Range | None = None
    badge: Badge | None = field(default=None, compare=False)
    aggregable_badges: tuple[Badge, ...] = field(default=(), compare=False)


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A raw hit returned by the search collaborator.

    Attributes:
        repo: Repository name (e.g. ``github.com/foo/bar``).
        rev: Commit the hit was found at; empty when unknown.
        file: Path of the file inside the repository.
        range: Span of the hit.
        preview: Line text, only for text (non-symbol) matches.
        symbol_name: Symbol name, only for symbol matches.
        symbol_kind: Symbol kind as reported by ctags (e.g. ``FUNCTION``).
        container_name: Enclosing symbol, if any.
        file_local: True if the symbol is only visible inside its file.

    """

    repo: str
    rev: str
    file: str
    range: Range
    preview: str | None = None
    symbol_name: str | None = None
    symbol_kind: str | None = None
    container_name: str | None = None
    file_local: bool = False

    def to_location(self) -> Location:
        """Convert to a Location, defaulting the revision to HEAD."""
        return Location(uri=make_git_uri(self.repo, self.rev or "HEAD", self.file), range=self.range)
