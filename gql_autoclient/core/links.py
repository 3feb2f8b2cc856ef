"""Transport links.

A link is any object with an async ``request(request, forward)`` method.
Links are composed into a :class:`LinkChain`; each one may inspect or
rewrite the request, hand it to ``forward`` (the rest of the chain) and
post-process the response, or answer it directly. The last link in a chain
must answer.

Examples:
    chain = LinkChain([AuthLink(BearerAuth(token)), HttpLink(HttpOptions(url=url))])
    result = await chain.execute(GraphQLRequest.from_query("{ me { id } }"))

    # In-process execution against a local schema
    chain = LinkChain([SchemaLink(schema, root_value=resolvers)])
"""

import hashlib
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import httpx
from graphql import (
    DocumentNode,
    GraphQLSchema,
    OperationType,
    get_operation_ast,
    graphql,
    parse,
)
from pydantic import BaseModel

from .config import HttpOptions
from .errors import GraphQLError, LinkChainError, NetworkError

logger = logging.getLogger(__name__)

PERSISTED_QUERY_VERSION = 1
PERSISTED_QUERY_NOT_FOUND = "PersistedQueryNotFound"
PERSISTED_QUERY_NOT_SUPPORTED = "PersistedQueryNotSupported"

_NOT_FOUND_CODES = {PERSISTED_QUERY_NOT_FOUND, "PERSISTED_QUERY_NOT_FOUND"}
_NOT_SUPPORTED_CODES = {PERSISTED_QUERY_NOT_SUPPORTED, "PERSISTED_QUERY_NOT_SUPPORTED"}
_DISABLING_STATUS_CODES = {400, 500}


@dataclass
class GraphQLRequest:
    """A single GraphQL request travelling down a link chain.

    ``context`` is shared by all links of the chain and is how they talk to
    each other: ``headers`` are merged into the HTTP request, ``http``
    controls what the HTTP link puts in the payload.
    """
    query: str
    document: DocumentNode
    operation_type: str = "query"
    variables: dict[str, Any] = field(default_factory=dict)
    context: dict[str, Any] = field(default_factory=dict)
    extensions: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_query(
        cls,
        query: str,
        variables: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> "GraphQLRequest":
        """Parse ``query`` and build a request for it.

        Raises:
            graphql.GraphQLError: If the text is not a valid document
        """
        document = parse(query)
        operation = get_operation_ast(document)
        operation_type = operation.operation.value if operation else OperationType.QUERY.value
        return cls(
            query=query,
            document=document,
            operation_type=operation_type,
            variables=dict(variables or {}),
            context=dict(context or {}),
        )


NextLink = Callable[[GraphQLRequest], Awaitable[dict[str, Any]]]


@runtime_checkable
class Link(Protocol):
    """Protocol for transport links."""

    async def request(self, request: GraphQLRequest, forward: NextLink) -> dict[str, Any]:
        """Handle ``request``, usually by awaiting ``forward(request)``.

        Returns:
            The raw GraphQL response: a dict with ``data`` and/or ``errors``
        """
        ...


class LinkChain:
    """Runs requests through a list of links, in order."""

    def __init__(self, links: list[Link]):
        self.links = list(links)

    async def execute(self, request: GraphQLRequest) -> dict[str, Any]:
        return await self._dispatch(0, request)

    async def _dispatch(self, index: int, request: GraphQLRequest) -> dict[str, Any]:
        if index >= len(self.links):
            raise LinkChainError("Link chain ended without a terminating link")

        async def forward(next_request: GraphQLRequest) -> dict[str, Any]:
            return await self._dispatch(index + 1, next_request)

        return await self.links[index].request(request, forward)


class HttpLink:
    """Terminating link that POSTs requests to a GraphQL endpoint over HTTP."""

    def __init__(self, options: HttpOptions | None = None):
        self.options = options or HttpOptions()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            headers.update(self.options.headers)

            self._client = httpx.AsyncClient(
                timeout=self.options.timeout,
                headers=headers,
                **self.options.client_kwargs,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def request(self, request: GraphQLRequest, forward: NextLink) -> dict[str, Any]:
        client = await self._get_client()
        http = request.context.get("http") or {}

        payload: dict[str, Any] = {"variables": serialize_variables(request.variables)}
        if http.get("include_query", True):
            payload["query"] = request.query
        if request.extensions and http.get("include_extensions", True):
            payload["extensions"] = request.extensions

        logger.debug("POST %s (%s)", self.options.url, request.operation_type)
        try:
            response = await client.post(
                self.options.url,
                json=payload,
                headers=request.context.get("headers") or {},
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Request failed: {e}") from e

        try:
            result = response.json()
        except ValueError:
            result = None

        if response.status_code >= 300:
            raise NetworkError(
                f"Response not successful: Received status code {response.status_code}",
                status_code=response.status_code,
                result=result,
            )
        if not isinstance(result, dict):
            raise NetworkError(
                "Server response was not a JSON object",
                status_code=response.status_code,
            )
        return result


class PersistedQueryLink:
    """Automatic persisted queries.

    Sends only the SHA-256 hash of the query first. If the server does not
    know the hash, or the request fails at the network level, it is asked
    again with the full text. A server that reports no persisted query
    support, or answers a hash-only request with status 400 or 500, turns
    hashing off for the lifetime of the link.
    """

    def __init__(self):
        self.supports_persisted_queries = True
        self._hashes: dict[str, str] = {}

    def _hash(self, query: str) -> str:
        if query not in self._hashes:
            self._hashes[query] = hashlib.sha256(query.encode("utf-8")).hexdigest()
        return self._hashes[query]

    async def request(self, request: GraphQLRequest, forward: NextLink) -> dict[str, Any]:
        if not self.supports_persisted_queries:
            return await forward(request)

        request.extensions["persistedQuery"] = {
            "version": PERSISTED_QUERY_VERSION,
            "sha256Hash": self._hash(request.query),
        }
        http = request.context.get("http") or {}
        request.context["http"] = {**http, "include_query": False, "include_extensions": True}

        try:
            result = await forward(request)
        except NetworkError as e:
            errors = e.result.get("errors") if isinstance(e.result, dict) else None
            disable = e.status_code in _DISABLING_STATUS_CODES or _not_supported(errors)
            logger.debug("Persisted query request failed (%s); resending with the full query", e)
            return await self._retry(request, forward, disable)

        errors = result.get("errors")
        if any(_error_code(e) in _NOT_FOUND_CODES | _NOT_SUPPORTED_CODES for e in errors or []):
            return await self._retry(request, forward, _not_supported(errors))
        return result

    async def _retry(self, request: GraphQLRequest, forward: NextLink, disable: bool) -> dict[str, Any]:
        if disable:
            logger.debug("Server does not support persisted queries; disabling")
            self.supports_persisted_queries = False
            request.extensions.pop("persistedQuery", None)
        request.context["http"] = {**request.context["http"], "include_query": True}
        return await forward(request)


def _not_supported(errors: list[dict[str, Any]] | None) -> bool:
    return any(_error_code(e) in _NOT_SUPPORTED_CODES for e in errors or [])


def _error_code(error: dict[str, Any]) -> str | None:
    code = (error.get("extensions") or {}).get("code")
    if code in _NOT_FOUND_CODES | _NOT_SUPPORTED_CODES:
        return code
    return error.get("message")


class SchemaLink:
    """Terminating link that executes requests against a local schema."""

    def __init__(self, schema: GraphQLSchema, root_value: Any = None):
        self.schema = schema
        self.root_value = root_value

    async def request(self, request: GraphQLRequest, forward: NextLink) -> dict[str, Any]:
        result = await graphql(
            self.schema,
            request.query,
            root_value=self.root_value,
            context_value=request.context,
            variable_values=request.variables,
        )
        return result.formatted


def serialize_variables(variables: Mapping[str, Any] | None) -> dict[str, Any]:
    """Serialize variables for the GraphQL request.

    Handles Pydantic models by converting them to dicts.
    """
    result = {}
    for key, value in (variables or {}).items():
        if isinstance(value, BaseModel):
            result[key] = value.model_dump(by_alias=True, exclude_none=True)
        elif isinstance(value, list):
            result[key] = [
                v.model_dump(by_alias=True, exclude_none=True) if isinstance(v, BaseModel) else v
                for v in value
            ]
        else:
            result[key] = value
    return result


def raise_for_errors(result: Mapping[str, Any]) -> None:
    """Raise :class:`GraphQLError` if a response carries errors."""
    errors = result.get("errors")
    if errors:
        raise GraphQLError.from_errors(errors)
