"""Tests for search query construction."""

import pytest

from basic_code_intel.search.queries import (
    INDEX_ONLY_TERM,
    Query,
    SearchScope,
    definition_queries,
    definition_terms,
    file_extension_term,
    references_queries,
)
from basic_code_intel.search.uri import parse_git_uri

URI = parse_git_uri("git://github.com/foo/bar?rev#file.cpp")


class TestFileExtensionTerm:
    """The file: filter restricting results to the language."""

    def test_single_extension(self) -> None:
        assert file_extension_term("file.cpp", ["cpp"]) == r"file:\.(cpp)$"

    def test_all_language_extensions_in_order(self) -> None:
        assert file_extension_term("a/b.h", ["cpp", "h", "hpp"]) == r"file:\.(cpp|h|hpp)$"

    def test_no_extension(self) -> None:
        assert file_extension_term("Makefile", ["mk"]) == ""

    @pytest.mark.parametrize("path", ["api.thrift", "api.proto", "schema.graphql"])
    def test_blacklisted_extension(self, path: str) -> None:
        extension = path.rsplit(".", 1)[1]
        assert file_extension_term(path, [extension]) == ""

    def test_extension_not_claimed_by_language(self) -> None:
        assert file_extension_term("file.txt", ["cpp"]) == ""


class TestDefinitionQueries:
    """Definition tiers: current repository, then everywhere."""

    def test_terms(self) -> None:
        assert set(definition_terms("token", "file.cpp", ["cpp"])) == {
            "^token$",
            "type:symbol",
            "patternType:regexp",
            "case:yes",
            r"file:\.(cpp)$",
        }

    def test_private_instance(self) -> None:
        queries = definition_queries("token", URI, ["cpp"], is_public_instance=False)
        assert [str(query) for query in queries] == [
            r"^token$ type:symbol patternType:regexp case:yes file:\.(cpp)$ repo:^github.com/foo/bar$@rev",
            r"^token$ type:symbol patternType:regexp case:yes file:\.(cpp)$",
        ]
        assert [query.scope for query in queries] == [
            SearchScope.CURRENT_REPOSITORY,
            SearchScope.ALL_REPOSITORIES,
        ]

    def test_public_instance_skips_global_tier(self) -> None:
        queries = definition_queries("token", URI, ["cpp"], is_public_instance=True)
        assert [query.scope for query in queries] == [SearchScope.CURRENT_REPOSITORY]

    def test_current_file_first(self) -> None:
        queries = definition_queries(
            "token", URI, ["cpp"], is_public_instance=True, current_file_first=True
        )
        assert str(queries[0]) == (
            r"^token$ type:symbol patternType:regexp case:yes file:\.(cpp)$ "
            r"repo:^github.com/foo/bar$@rev file:^file.cpp$"
        )
        assert queries[0].scope is SearchScope.CURRENT_FILE

    def test_extra_terms_follow_scope(self) -> None:
        queries = definition_queries(
            "token", URI, ["cpp"], is_public_instance=True, extra_terms=("fork:yes",)
        )
        assert str(queries[0]).endswith("repo:^github.com/foo/bar$@rev fork:yes")

    def test_missing_extension_term_is_omitted(self) -> None:
        uri = parse_git_uri("git://github.com/foo/bar?rev#Makefile")
        queries = definition_queries("token", uri, ["mk"], is_public_instance=True)
        assert str(queries[0]) == (
            "^token$ type:symbol patternType:regexp case:yes repo:^github.com/foo/bar$@rev"
        )


class TestReferencesQueries:
    """Reference tiers: current repository and all other repositories."""

    def test_private_instance(self) -> None:
        queries = references_queries("token", URI, ["cpp"], is_public_instance=False)
        assert [str(query) for query in queries] == [
            r"\btoken\b type:file patternType:regexp case:yes file:\.(cpp)$ repo:^github.com/foo/bar$@rev",
            r"\btoken\b type:file patternType:regexp case:yes file:\.(cpp)$ -repo:^github.com/foo/bar$",
        ]

    def test_public_instance(self) -> None:
        queries = references_queries("token", URI, ["cpp"], is_public_instance=True)
        assert len(queries) == 1
        assert queries[0].scope is SearchScope.CURRENT_REPOSITORY


class TestQuery:
    """The immutable query value."""

    def test_index_only_appends_term_once(self) -> None:
        query = Query(terms=("a", "b"))
        indexed = query.index_only()
        assert str(indexed) == f"a b {INDEX_ONLY_TERM}"
        assert indexed.is_index_only
        assert indexed.index_only() is indexed
        assert not query.is_index_only

    def test_with_terms_keeps_scope(self) -> None:
        query = Query(terms=("a",), scope=SearchScope.CURRENT_FILE)
        assert query.with_terms("b").scope is SearchScope.CURRENT_FILE

    def test_empty_terms_are_not_rendered(self) -> None:
        assert str(Query(terms=("a", "", "b"))) == "a b"
