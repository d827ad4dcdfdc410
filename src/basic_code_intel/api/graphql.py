"""GraphQL transport for the Sourcegraph API.

Queries are POSTed to ``{sourcegraph_url}/.api/graphql``. Transient
failures (network errors, timeouts, 429 and 5xx responses) are retried with
exponential backoff. Application errors in the response body are raised as
GraphQLError, or AggregateGraphQLError when there are several.

Successful responses are kept in a small LRU cache keyed by the query and
its variables; failures are never cached.
"""

from __future__ import annotations

import asyncio
import json
import logging
from types import TracebackType
from typing import Any

import httpx

from basic_code_intel.config import BasicCodeIntelSettings
from basic_code_intel.core.exceptions import AggregateGraphQLError, GraphQLError, SearchError
from basic_code_intel.search.cache import LRUCache

logger = logging.getLogger(__name__)

__all__ = ["GraphQLClient", "raise_for_errors"]


def _is_retryable_error(
    status_code: int | None,
    exception: Exception | None,
) -> bool:
    """Determine if error is retryable.

    Retryable: network errors, timeouts, 429 rate limit, 5xx server errors.
    Not retryable: other 4xx client errors.

    Args:
        status_code: HTTP status code, or None if exception occurred.
        exception: Exception that occurred, or None if status code available.

    Returns:
        True if error is transient and should be retried.

    """
    if exception is not None:
        return isinstance(exception, (httpx.TimeoutException, httpx.RequestError))
    if status_code is not None:
        return status_code == 429 or status_code >= 500
    return False


def raise_for_errors(payload: dict[str, Any]) -> Any:
    """Return the ``data`` member of a GraphQL response or raise its errors.

    Raises:
        GraphQLError: If the response carries exactly one error.
        AggregateGraphQLError: If the response carries several errors.

    """
    errors = payload.get("errors")
    if errors:
        converted = [
            GraphQLError(str(error.get("message", error)), path=error.get("path"))
            if isinstance(error, dict)
            else GraphQLError(str(error))
            for error in errors
        ]
        if len(converted) == 1:
            raise converted[0]
        raise AggregateGraphQLError(converted)
    return payload.get("data")


class GraphQLClient:
    """Async GraphQL client with retries and a response cache.

    Args:
        settings: Supplies the instance URL, access token and timeout.
        http_client: Optional pre-configured client; one is created (and
            owned) otherwise.
        cache_size: Number of successful responses kept.

    """

    ENDPOINT = "/.api/graphql"
    MAX_RETRIES = 2
    BASE_RETRY_DELAY = 0.5  # seconds

    def __init__(
        self,
        settings: BasicCodeIntelSettings,
        http_client: httpx.AsyncClient | None = None,
        cache_size: int = 100,
    ) -> None:
        self.settings = settings
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=settings.request_timeout_seconds)
        self._cache: LRUCache[str, Any] = LRUCache(cache_size)

    @property
    def url(self) -> str:
        return f"{self.settings.sourcegraph_url}{self.ENDPOINT}"

    def __repr__(self) -> str:
        """Return string representation with the access token masked."""
        token = self.settings.access_token
        if token and len(token) > 10:
            masked_token = f"{token[:5]}***"
        else:
            masked_token = "***" if token else "(not configured)"
        return f"GraphQLClient(url={self.url}, access_token={masked_token})"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.settings.access_token:
            headers["Authorization"] = f"token {self.settings.access_token}"
        return headers

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        """Run a query, serving repeated identical queries from the cache."""
        variables = variables or {}
        key = json.dumps({"query": query, "vars": variables}, sort_keys=True)
        if key in self._cache:
            logger.debug("GraphQL cache hit")
            return self._cache.get(key)

        data = await self.raw_query(query, variables)
        self._cache.set(key, data)
        return data

    async def raw_query(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        """Run a query without consulting the cache.

        Args:
            query: GraphQL document.
            variables: Query variables.

        Returns:
            The ``data`` member of the response.

        Raises:
            SearchError: If the request fails after all retries, or the
                response is not valid JSON.
            GraphQLError: If the response reports one error.
            AggregateGraphQLError: If the response reports several errors.

        """
        request_payload = {"query": query, "variables": variables or {}}
        last_error: Exception | None = None

        for attempt in range(self.MAX_RETRIES + 1):
            try:
                response = await self._client.post(
                    self.url, json=request_payload, headers=self._headers()
                )

                if response.status_code == 200:
                    try:
                        payload = response.json()
                    except ValueError as e:
                        raise SearchError(
                            f"Invalid JSON from {self.url}: {e}", query=query
                        ) from e
                    return raise_for_errors(payload)

                if not _is_retryable_error(response.status_code, None):
                    logger.error(
                        "GraphQL API error: status=%s, response=%s",
                        response.status_code,
                        response.text[:500],
                    )
                    raise SearchError(
                        f"GraphQL request failed with HTTP {response.status_code}",
                        query=query,
                    )

                last_error = httpx.HTTPStatusError(
                    f"HTTP {response.status_code}",
                    request=response.request,
                    response=response,
                )

            except (httpx.TimeoutException, httpx.RequestError) as e:
                last_error = e

            if attempt < self.MAX_RETRIES:
                delay = self.BASE_RETRY_DELAY * (2**attempt)
                logger.debug(
                    "GraphQL request failed, retrying in %.1fs (attempt %d/%d)",
                    delay,
                    attempt + 1,
                    self.MAX_RETRIES + 1,
                )
                await asyncio.sleep(delay)

        logger.error(
            "GraphQL request failed after %d attempts: %s",
            self.MAX_RETRIES + 1,
            str(last_error),
        )
        raise SearchError(
            f"GraphQL request to {self.url} failed: {last_error}", query=query
        ) from last_error

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> GraphQLClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
