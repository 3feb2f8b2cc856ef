"""Transport client: executes documents through a link chain with a result cache."""

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any

from .config import ClientOptions, FetchPolicy
from .links import GraphQLRequest, LinkChain, raise_for_errors

logger = logging.getLogger(__name__)

CLIENT_NAME_HEADER = "apollographql-client-name"
CLIENT_VERSION_HEADER = "apollographql-client-version"


class QueryCache:
    """In-memory cache of query results keyed by document and variables.

    Entries are copied in and out, so callers never share a stored result.
    """

    def __init__(self):
        self._entries: dict[tuple[str, str], dict[str, Any]] = {}

    @staticmethod
    def _key(query: str, variables: Mapping[str, Any] | None) -> tuple[str, str]:
        return query, json.dumps(variables or {}, sort_keys=True, default=str)

    def read(self, query: str, variables: Mapping[str, Any] | None) -> dict[str, Any] | None:
        data = self._entries.get(self._key(query, variables))
        return copy.deepcopy(data) if data is not None else None

    def write(self, query: str, variables: Mapping[str, Any] | None, data: dict[str, Any]):
        self._entries[self._key(query, variables)] = copy.deepcopy(data)

    def reset(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class TransportClient:
    """Runs queries and mutations through a link chain.

    Queries go through the cache according to the fetch policy; mutations
    always hit the chain. Responses carrying ``errors`` raise
    :class:`~gql_autoclient.core.errors.GraphQLError`.
    """

    def __init__(
        self,
        link: LinkChain,
        cache: QueryCache | None = None,
        options: ClientOptions | None = None,
    ):
        self.link = link
        self.cache = cache if cache is not None else QueryCache()
        self.options = options or ClientOptions()

    async def query(
        self,
        query: str,
        variables: Mapping[str, Any] | None = None,
        *,
        context: Mapping[str, Any] | None = None,
        fetch_policy: FetchPolicy | None = None,
    ) -> dict[str, Any]:
        """Execute a query and return its ``data``."""
        fetch_policy = fetch_policy or self.options.fetch_policy

        if fetch_policy == "cache-first":
            cached = self.cache.read(query, variables)
            if cached is not None:
                return cached

        data = await self._execute(query, variables, context)
        if fetch_policy != "no-cache":
            self.cache.write(query, variables, data)
        return data

    async def mutate(
        self,
        mutation: str,
        variables: Mapping[str, Any] | None = None,
        *,
        context: Mapping[str, Any] | None = None,
        fetch_policy: FetchPolicy | None = None,
    ) -> dict[str, Any]:
        """Execute a mutation and return its ``data``.

        Mutations never touch the cache, so ``fetch_policy`` is accepted and
        ignored.
        """
        return await self._execute(mutation, variables, context)

    async def _execute(
        self,
        query: str,
        variables: Mapping[str, Any] | None,
        context: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        request = GraphQLRequest.from_query(query, variables, self._build_context(context))
        result = await self.link.execute(request)
        raise_for_errors(result)
        return result.get("data") or {}

    def _build_context(self, context: Mapping[str, Any] | None) -> dict[str, Any]:
        merged = {**self.options.default_context, **(context or {})}

        awareness = {}
        if self.options.name:
            awareness[CLIENT_NAME_HEADER] = self.options.name
        if self.options.version:
            awareness[CLIENT_VERSION_HEADER] = self.options.version
        if awareness:
            merged["headers"] = {**awareness, **(merged.get("headers") or {})}
        return merged
