r"""Search query construction for definition and reference lookups.

Queries are built from ordered terms: the token pattern, the result type,
the pattern type, case sensitivity, the file-extension filter and finally
the scope. Extra terms (forks, archives, index-only) follow the scope.

Example:
    A definition lookup for `token` in `git://github.com/foo/bar?rev#file.cpp`
    renders its first tier as::

        ^token$ type:symbol patternType:regexp case:yes file:\.(cpp)$ repo:^github.com/foo/bar$@rev

"""

from __future__ import annotations

import posixpath
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from basic_code_intel.search.uri import GitURI

__all__ = [
    "BLACKLISTED_EXTENSIONS",
    "INDEX_ONLY_TERM",
    "Query",
    "SearchScope",
    "definition_queries",
    "definition_terms",
    "file_extension_term",
    "reference_terms",
    "references_queries",
    "scope_terms",
]

# Interface definition languages whose symbols mostly live in generated
# files with other extensions
BLACKLISTED_EXTENSIONS = frozenset({"thrift", "proto", "graphql"})

INDEX_ONLY_TERM = "index:only"


class SearchScope(str, Enum):
    """Breadth of a query tier, narrowest first."""

    CURRENT_FILE = "current-file"
    CURRENT_REPOSITORY = "current-repository"
    OTHER_REPOSITORIES = "other-repositories"
    ALL_REPOSITORIES = "all-repositories"


@dataclass(frozen=True, slots=True)
class Query:
    """An immutable search query.

    Attributes:
        terms: Ordered terms; empty terms are dropped when rendering.
        scope: The tier this query searches.

    """

    terms: tuple[str, ...]
    scope: SearchScope = field(default=SearchScope.ALL_REPOSITORIES, compare=False)

    def __str__(self) -> str:
        return " ".join(term for term in self.terms if term)

    @property
    def is_index_only(self) -> bool:
        return INDEX_ONLY_TERM in self.terms

    def with_terms(self, *terms: str) -> Query:
        """Return a copy with extra terms appended."""
        return Query(terms=(*self.terms, *terms), scope=self.scope)

    def index_only(self) -> Query:
        """Return the index-only variant of this query."""
        if self.is_index_only:
            return self
        return self.with_terms(INDEX_ONLY_TERM)


def file_extension_term(path: str, extensions: Sequence[str]) -> str:
    """Return a ``file:`` term restricting results to the language's extensions.

    Returns an empty string when the current file has no extension, has a
    blacklisted extension, or has an extension the language does not claim.
    """
    extension = posixpath.splitext(path)[1][1:]
    if not extension or extension in BLACKLISTED_EXTENSIONS or extension not in extensions:
        return ""
    return rf"file:\.({'|'.join(extensions)})$"


def definition_terms(token: str, path: str, extensions: Sequence[str]) -> tuple[str, ...]:
    """Return the scope-less terms of a definition query."""
    return (
        f"^{token}$",
        "type:symbol",
        "patternType:regexp",
        "case:yes",
        file_extension_term(path, extensions),
    )


def reference_terms(token: str, path: str, extensions: Sequence[str]) -> tuple[str, ...]:
    """Return the scope-less terms of a references query."""
    return (
        rf"\b{token}\b",
        "type:file",
        "patternType:regexp",
        "case:yes",
        file_extension_term(path, extensions),
    )


def scope_terms(scope: SearchScope, uri: GitURI) -> tuple[str, ...]:
    """Return the terms restricting a query to a scope around a document."""
    if scope is SearchScope.CURRENT_FILE:
        return (f"repo:^{uri.repo}$@{uri.commit}", f"file:^{uri.path}$")
    if scope is SearchScope.CURRENT_REPOSITORY:
        return (f"repo:^{uri.repo}$@{uri.commit}",)
    if scope is SearchScope.OTHER_REPOSITORIES:
        return (f"-repo:^{uri.repo}$",)
    return ()


def _make_queries(
    base_terms: tuple[str, ...],
    scopes: Sequence[SearchScope],
    uri: GitURI,
    extra_terms: Sequence[str],
) -> list[Query]:
    return [
        Query(terms=(*base_terms, *scope_terms(scope, uri), *extra_terms), scope=scope)
        for scope in scopes
    ]


def definition_queries(
    token: str,
    uri: GitURI,
    extensions: Sequence[str],
    *,
    is_public_instance: bool,
    current_file_first: bool = False,
    extra_terms: Sequence[str] = (),
) -> list[Query]:
    """Build the definition query tiers, narrowest first.

    Args:
        token: The identifier to look up.
        uri: The querying document.
        extensions: File extensions of the document's language.
        is_public_instance: Skip the global tier (too expensive there).
        current_file_first: Prepend a tier scoped to the current file.
        extra_terms: Terms appended to every query (e.g. ``fork:yes``).

    Returns:
        Queries in the order they should be tried.

    """
    scopes: list[SearchScope] = []
    if current_file_first:
        scopes.append(SearchScope.CURRENT_FILE)
    scopes.append(SearchScope.CURRENT_REPOSITORY)
    if not is_public_instance:
        scopes.append(SearchScope.ALL_REPOSITORIES)
    return _make_queries(definition_terms(token, uri.path, extensions), scopes, uri, extra_terms)


def references_queries(
    token: str,
    uri: GitURI,
    extensions: Sequence[str],
    *,
    is_public_instance: bool,
    extra_terms: Sequence[str] = (),
) -> list[Query]:
    """Build the reference query tiers: this repository, then all others."""
    scopes = [SearchScope.CURRENT_REPOSITORY]
    if not is_public_instance:
        scopes.append(SearchScope.OTHER_REPOSITORIES)
    return _make_queries(reference_terms(token, uri.path, extensions), scopes, uri, extra_terms)
