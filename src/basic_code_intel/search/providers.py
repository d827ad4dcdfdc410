"""Search-based definition, references and hover.

SearchProviders turns an editor position into tiers of search queries,
runs them through the search backend and filters and ranks the answers
with the active language profile.

Each query is raced against its index-only variant: the full query is
preferred, and the index-only one is only issued once
``unindexed_search_timeout_ms`` has elapsed.
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import AsyncIterator

from basic_code_intel.config import BasicCodeIntelSettings
from basic_code_intel.core.exceptions import BasicCodeIntelError
from basic_code_intel.languages.types import FilterContext, LanguageProfile, line_patterns
from basic_code_intel.languages.util import split_lines
from basic_code_intel.providers.base import (
    BaseProviders,
    FileContentSource,
    Hover,
    ReferenceContext,
    RepoMeta,
    RepositoryResolver,
    SearchBackend,
    TextDocument,
)
from basic_code_intel.search.cache import LRUCache
from basic_code_intel.search.docstrings import find_docstring
from basic_code_intel.search.markdown import wrap_indentation_in_code_blocks
from basic_code_intel.search.queries import Query, definition_queries, references_queries
from basic_code_intel.search.racing import race_with_delay_offset
from basic_code_intel.search.ranking import sort_by_proximity
from basic_code_intel.search.tokens import find_search_token
from basic_code_intel.search.types import Location, Position, SearchResult
from basic_code_intel.search.uri import GitURI, parse_git_uri

logger = logging.getLogger(__name__)

__all__ = ["HOVER_SEPARATOR", "SearchProviders"]

HOVER_SEPARATOR = "\n\n---\n\n"

_TRAILING_PUNCTUATION = re.compile(r"[:;=,{(<]+$")
_CODE_FENCE = "```"


class SearchProviders(BaseProviders):
    """Providers backed purely by text and symbol search.

    Args:
        profile: Language profile of the documents served.
        search_backend: Executes search queries.
        file_source: Fetches file content for documents without text and
            for hover definition lines.
        repo_resolver: Optional source of fork/archive metadata.
        settings: Search settings; defaults apply when omitted.

    """

    def __init__(
        self,
        profile: LanguageProfile,
        search_backend: SearchBackend,
        file_source: FileContentSource,
        repo_resolver: RepositoryResolver | None = None,
        settings: BasicCodeIntelSettings | None = None,
    ) -> None:
        self.profile = profile
        self._search_backend = search_backend
        self._file_source = file_source
        self._repo_resolver = repo_resolver
        self.settings = settings or BasicCodeIntelSettings()
        self._line_comment_patterns = line_patterns(profile.comment_styles)
        self._file_cache: LRUCache[tuple[str, str, str], str] = LRUCache(
            self.settings.file_content_cache_size
        )

    # ------------------------------------------------------------------
    # Public streams
    # ------------------------------------------------------------------

    async def definition(
        self, document: TextDocument, position: Position
    ) -> AsyncIterator[list[Location] | None]:
        yield await self.find_definition(document, position)

    async def references(
        self, document: TextDocument, position: Position, context: ReferenceContext
    ) -> AsyncIterator[list[Location] | None]:
        yield await self.find_references(document, position)

    async def hover(self, document: TextDocument, position: Position) -> AsyncIterator[Hover | None]:
        yield await self.find_hover(document, position)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def find_definition(
        self, document: TextDocument, position: Position
    ) -> list[Location] | None:
        """Return definitions of the identifier at a position.

        Query tiers run narrowest first; the first tier with a visible,
        filtered result wins and later tiers are never issued.

        Returns:
            Locations sorted by path proximity, an empty list if no tier
            found anything, or None if there is no searchable token.

        Raises:
            BasicCodeIntelError: If every tier failed.

        """
        found = await self._content_and_token(document, position)
        if found is None:
            return None
        text, token = found

        uri = parse_git_uri(document.uri)
        context = FilterContext(repo=uri.repo, rev=uri.commit, file_path=uri.path, file_content=text)
        queries = definition_queries(
            token,
            uri,
            self.profile.file_extensions,
            is_public_instance=self.settings.is_public_instance,
            current_file_first=self.settings.search_current_file_first,
            extra_terms=await self._extra_terms(uri),
        )

        errors: list[BasicCodeIntelError] = []
        for query in queries:
            try:
                results = await self._search(query)
            except BasicCodeIntelError as e:
                logger.warning("Definition search failed for tier %s: %s", query.scope.value, e)
                errors.append(e)
                continue

            visible = [result for result in results if self._is_visible(result, uri)]
            filtered = self.profile.filter_definitions(visible, context)
            if filtered:
                logger.debug(
                    "Found %d definitions of %r in tier %s",
                    len(filtered),
                    token,
                    query.scope.value,
                )
                return sort_by_proximity(
                    [result.to_location() for result in filtered], document.uri
                )

        if errors and len(errors) == len(queries):
            raise errors[-1]
        return []

    async def find_references(
        self, document: TextDocument, position: Position
    ) -> list[Location]:
        """Return references to the identifier at a position.

        All tiers are searched concurrently and their results merged. A
        failing tier is logged and contributes nothing.

        Raises:
            BasicCodeIntelError: If every tier failed.

        """
        found = await self._content_and_token(document, position)
        if found is None:
            return []
        _, token = found

        uri = parse_git_uri(document.uri)
        queries = references_queries(
            token,
            uri,
            self.profile.file_extensions,
            is_public_instance=self.settings.is_public_instance,
            extra_terms=await self._extra_terms(uri),
        )

        outcomes = await asyncio.gather(
            *(self._search(query) for query in queries), return_exceptions=True
        )

        locations: list[Location] = []
        errors: list[BasicCodeIntelError] = []
        for query, outcome in zip(queries, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, BasicCodeIntelError):
                    raise outcome
                logger.warning("References search failed for tier %s: %s", query.scope.value, outcome)
                errors.append(outcome)
                continue
            locations.extend(result.to_location() for result in outcome)

        if errors and len(errors) == len(queries):
            raise errors[-1]
        return sort_by_proximity(locations, document.uri)

    async def find_hover(self, document: TextDocument, position: Position) -> Hover | None:
        """Return hover text for the identifier at a position.

        The hover shows the trimmed defining line of the first definition
        as a code block, followed by its docstring when one is found.
        """
        definitions = await self.find_definition(document, position)
        if not definitions:
            return None
        definition = definitions[0]
        if definition.range is None:
            return None

        target = parse_git_uri(definition.uri)
        content = await self.get_file_content(target.repo, target.commit, target.path)
        if not content:
            return None

        line_number = definition.range.start.line
        lines = split_lines(content)
        if line_number >= len(lines):
            return None
        line = _TRAILING_PUNCTUATION.sub("", lines[line_number].strip()).rstrip()
        if not line:
            return None
        if _CODE_FENCE in line:
            # Would break out of the surrounding code fence
            return None

        parts = [f"{_CODE_FENCE}{self.profile.language_id}\n{line}\n{_CODE_FENCE}"]
        docstring = find_docstring(
            line_number,
            content,
            self.profile.comment_styles,
            self.profile.docstring_ignore,
        )
        if docstring:
            parts.append(wrap_indentation_in_code_blocks(self.profile.language_id, docstring))

        return Hover(contents=HOVER_SEPARATOR.join(parts))

    # ------------------------------------------------------------------
    # Collaborator access
    # ------------------------------------------------------------------

    async def get_file_content(self, repo: str, rev: str, path: str) -> str | None:
        """Fetch file content through the bounded cache."""
        key = (repo, rev, path)
        cached = self._file_cache.get(key)
        if cached is not None:
            return cached

        content = await self._file_source.get_file_content(repo, rev, path)
        if content is not None:
            self._file_cache.set(key, content)
        return content

    async def _document_text(self, document: TextDocument) -> str | None:
        if document.text:
            return document.text
        uri = parse_git_uri(document.uri)
        return await self.get_file_content(uri.repo, uri.commit, uri.path)

    async def _content_and_token(
        self, document: TextDocument, position: Position
    ) -> tuple[str, str] | None:
        text = await self._document_text(document)
        if not text:
            logger.debug("No content for %s", document.uri)
            return None

        token = find_search_token(
            text,
            position,
            self._line_comment_patterns,
            self.profile.identifier_pattern,
        )
        if token is None or token.is_comment:
            return None
        return text, token.token

    async def _repo_meta(self, name: str) -> RepoMeta:
        if self._repo_resolver is None:
            return RepoMeta(name=name)
        try:
            return await self._repo_resolver.resolve_repo(name)
        except BasicCodeIntelError as e:
            logger.warning("Could not resolve repository %s: %s", name, e)
            return RepoMeta(name=name)

    async def _extra_terms(self, uri: GitURI) -> tuple[str, ...]:
        include_forks = self.settings.include_forks
        include_archives = self.settings.include_archives
        if not (include_forks and include_archives) and self._repo_resolver is not None:
            meta = await self._repo_meta(uri.repo)
            include_forks = include_forks or meta.is_fork
            include_archives = include_archives or meta.is_archived

        terms: list[str] = []
        if include_forks:
            terms.append("fork:yes")
        if include_archives:
            terms.append("archived:yes")
        return tuple(terms)

    def _is_visible(self, result: SearchResult, uri: GitURI) -> bool:
        # ctags marks Java enum members file-local although they are public
        if self.profile.language_id == "java" and result.symbol_kind == "ENUMMEMBER":
            return True
        return not result.file_local or result.file == uri.path

    async def _run_query(self, query: Query) -> list[SearchResult]:
        rendered = str(query)
        if self.settings.trace_search:
            logger.info("Search: %s", rendered)
        else:
            logger.debug("Search: %s", rendered)
        return await self._search_backend.search(rendered, self.settings.request_file_local)

    async def _search(self, query: Query) -> list[SearchResult]:
        if self.settings.index_only or query.is_index_only:
            return await self._run_query(query.index_only())
        return await race_with_delay_offset(
            self._run_query(query),
            lambda: self._run_query(query.index_only()),
            self.settings.unindexed_search_timeout,
            accept=bool,
        )
