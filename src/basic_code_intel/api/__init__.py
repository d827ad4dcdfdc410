"""Sourcegraph GraphQL API access."""

from basic_code_intel.api.client import SourcegraphAPI
from basic_code_intel.api.graphql import GraphQLClient

__all__ = ["GraphQLClient", "SourcegraphAPI"]
