"""Sourcegraph API collaborators: search, file content and repository metadata."""

from __future__ import annotations

import logging
from typing import Any

from basic_code_intel.api.graphql import GraphQLClient
from basic_code_intel.config import BasicCodeIntelSettings
from basic_code_intel.core.exceptions import GraphQLError
from basic_code_intel.providers.base import (
    FileContentSource,
    RepoMeta,
    RepositoryResolver,
    SearchBackend,
)
from basic_code_intel.search.conversion import search_result_to_results
from basic_code_intel.search.types import SearchResult

logger = logging.getLogger(__name__)

__all__ = [
    "FILE_CONTENT_QUERY",
    "INTROSPECTION_QUERY",
    "SourcegraphAPI",
    "search_query",
]

INTROSPECTION_QUERY = """
query RepositoryIntrospection {
    __type(name: "Repository") {
        fields {
            name
        }
    }
}
"""

RESOLVE_REPO_QUERY = """
query ResolveRepo($name: String!) {
    repository(name: $name) {
        id
        name
        isFork
        isArchived
    }
}
"""

RESOLVE_REPO_NAME_ONLY_QUERY = """
query ResolveRepo($name: String!) {
    repository(name: $name) {
        id
        name
    }
}
"""

FILE_CONTENT_QUERY = """
query FileContent($repo: String!, $rev: String!, $path: String!) {
    repository(name: $repo) {
        commit(rev: $rev) {
            file(path: $path) {
                content
            }
        }
    }
}
"""


def search_query(file_local: bool) -> str:
    """Return the search GraphQL document, with ``fileLocal`` if requested."""
    file_local_field = "fileLocal" if file_local else ""
    return f"""
query Search($query: String!) {{
    search(query: $query) {{
        results {{
            __typename
            limitHit
            results {{
                ... on FileMatch {{
                    __typename
                    file {{
                        path
                        commit {{
                            oid
                        }}
                    }}
                    repository {{
                        name
                    }}
                    symbols {{
                        name
                        containerName
                        kind
                        {file_local_field}
                        location {{
                            resource {{
                                path
                            }}
                            range {{
                                start {{
                                    line
                                    character
                                }}
                                end {{
                                    line
                                    character
                                }}
                            }}
                        }}
                    }}
                    lineMatches {{
                        preview
                        lineNumber
                        offsetAndLengths
                    }}
                }}
            }}
        }}
    }}
}}
"""


class SourcegraphAPI(SearchBackend, FileContentSource, RepositoryResolver):
    """Implements the engine's collaborators over the GraphQL API.

    Args:
        client: GraphQL transport.
        settings: Supplies the search context; defaults to the client's.

    """

    def __init__(
        self,
        client: GraphQLClient,
        settings: BasicCodeIntelSettings | None = None,
    ) -> None:
        self.client = client
        self.settings = settings or client.settings
        self._repo_metas: dict[str, RepoMeta] = {}
        self._has_fork_field: bool | None = None

    async def search(self, query: str, file_local: bool = True) -> list[SearchResult]:
        """Run a search and flatten its file matches into results."""
        if self.settings.search_context:
            query = f"context:{self.settings.search_context} {query}"

        data = await self.client.query(search_query(file_local), {"query": query})
        matches = ((data or {}).get("search") or {}).get("results") or {}
        if matches.get("limitHit"):
            logger.debug("Search limit hit for %r", query)

        results: list[SearchResult] = []
        for match in matches.get("results") or []:
            # Non-FileMatch results come back as empty objects
            if not match or match.get("__typename", "FileMatch") != "FileMatch":
                continue
            results.extend(search_result_to_results(match))
        return results

    async def get_file_content(self, repo: str, rev: str, path: str) -> str | None:
        """Return file content, or None if the revision or file is unknown.

        Raises:
            GraphQLError: If the repository is unknown.

        """
        data = await self.client.query(FILE_CONTENT_QUERY, {"repo": repo, "rev": rev, "path": path})
        repository = (data or {}).get("repository")
        if repository is None:
            raise GraphQLError(f"Repository not found: {repo}")
        commit = repository.get("commit")
        if commit is None:
            return None
        file_info = commit.get("file")
        if file_info is None:
            return None
        content: str | None = file_info.get("content")
        return content

    async def has_fork_field(self) -> bool:
        """Return True if the instance's schema exposes ``Repository.isFork``."""
        if self._has_fork_field is None:
            data = await self.client.query(INTROSPECTION_QUERY)
            fields: list[dict[str, Any]] = ((data or {}).get("__type") or {}).get("fields") or []
            self._has_fork_field = any(field.get("name") == "isFork" for field in fields)
        return self._has_fork_field

    async def resolve_repo(self, name: str) -> RepoMeta:
        """Resolve fork/archive status of a repository, memoized per name.

        Older instances without the fields report neither flag.

        Raises:
            GraphQLError: If the repository is unknown.

        """
        cached = self._repo_metas.get(name)
        if cached is not None:
            return cached

        query = RESOLVE_REPO_QUERY if await self.has_fork_field() else RESOLVE_REPO_NAME_ONLY_QUERY
        data = await self.client.query(query, {"name": name})
        repository = (data or {}).get("repository")
        if repository is None:
            raise GraphQLError(f"Repository not found: {name}")

        meta = RepoMeta(
            name=repository.get("name", name),
            is_fork=bool(repository.get("isFork", False)),
            is_archived=bool(repository.get("isArchived", False)),
        )
        self._repo_metas[name] = meta
        return meta
