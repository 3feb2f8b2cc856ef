"""Dynamic GraphQL client.

The client introspects the remote schema once, on ``connect()``, and
exposes one async method per root query and mutation field.

Examples:
    client = await new_graphql_client({"http_options": {"url": url}})
    user = await client.user({"id": "1"})
    user = await client.user({"id": "1"}, {"id": True, "friends": {"name": True}})

    # Without a bound logger, each call takes one first (None = client default)
    client = await create({"http_options": {"url": url}})
    user = await client.user(None, {"id": "1"})
"""

import functools
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from graphql import GraphQLSchema

from .config import ClientConfig, ClientOptions, HttpOptions, OtherOptions
from .errors import ClientAlreadyConnectedError, ClientNotConnectedError, NetworkError
from .links import HttpLink, Link, LinkChain, PersistedQueryLink
from .logger import FAILED_API_SERVER_ERROR, DefaultLogger, Logger
from .schema import fetch_schema
from .session import TransportSession
from .synthesizer import Operation, synthesize_operations
from .utils import ensure_thunk_call


OperationCall = Callable[..., Awaitable[Any]]


class GraphQLClient:
    """Client exposing the root fields of a schema as async methods.

    Operations are looked up by name, so ``client.user(...)`` and
    ``client.get_operation("user")(...)`` are the same call. Names that clash
    with client attributes (``connect``, ``close``, ...) are only reachable
    through ``get_operation``.
    """

    def __init__(
        self,
        logger: Logger,
        links: list[Link] | None = None,
        client_options: ClientOptions | None = None,
        http_options: HttpOptions | None = None,
        other_options: OtherOptions | None = None,
    ):
        self.logger = logger
        self.other_options = other_options or OtherOptions()

        self.http_link = HttpLink(http_options)
        self.links: list[Link] = list(links or [])
        if self.other_options.persisted_queries:
            self.links.append(PersistedQueryLink())
        self.links.append(self.http_link)

        self.session = TransportSession(
            self.links,
            client_options,
            reset_store_every=self.other_options.reset_store_every,
        )

        self.schema: GraphQLSchema | None = None
        self.operations: dict[str, Operation] = {}
        self._callers: dict[str, OperationCall] = {}

    @property
    def connected(self) -> bool:
        return self.schema is not None

    async def connect(self):
        """Introspect the schema and synthesize all operations."""
        if self.connected:
            raise ClientAlreadyConnectedError("Client is already connected")

        schema = await fetch_schema(LinkChain(self.links), context={"logger": self.logger})
        self.operations = synthesize_operations(schema)
        self._callers = {name: self._make_caller(op) for name, op in self.operations.items()}
        self.schema = schema

    async def close(self):
        """Close the HTTP client."""
        await self.http_link.close()

    async def __aenter__(self):
        if not self.connected:
            await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def get_operation(self, name: str) -> OperationCall:
        if not self.connected:
            raise ClientNotConnectedError(f"Cannot call {name!r}: client is not connected")
        try:
            return self._callers[name]
        except KeyError:
            raise AttributeError(f"Schema has no query or mutation named {name!r}") from None

    def __getattr__(self, name: str) -> OperationCall:
        callers = self.__dict__.get("_callers") or {}
        if name in callers:
            return callers[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute or operation {name!r}")

    def _make_caller(self, operation: Operation) -> OperationCall:
        async def call(
            logger: Logger | None = None,
            variables: Mapping[str, Any] | None = None,
            projection: Mapping[str, Any] | None = None,
            options: Mapping[str, Any] | None = None,
        ) -> Any:
            return await self.execute(operation, logger, variables, projection, options)

        call.__name__ = operation.name
        call.__qualname__ = f"{type(self).__name__}.{operation.name}"
        call.__doc__ = operation.description
        return call

    async def execute(
        self,
        operation: Operation,
        logger: Logger | None = None,
        variables: Mapping[str, Any] | None = None,
        projection: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        """Run one operation and return the value of its root field.

        Args:
            operation: The operation to run
            logger: Logger for this call; defaults to the client's logger
            variables: Operation variables
            projection: Result shape; the operation default when empty
            options: Extra keyword arguments for the transport client
                (e.g. ``fetch_policy``); ``context`` is merged into the
                request context

        Returns:
            The root field value, or None when a server-side failure was
            reported to a logger that did not raise
        """
        logger = logger or self.logger
        options = dict(options or {})
        context = {"logger": logger, **(options.pop("context", None) or {})}

        try:
            transport = self.session.ensure_session()
            document = operation.build(projection)
            if operation.kind == "mutation":
                data = await transport.mutate(document, variables, context=context, **options)
            else:
                data = await transport.query(document, variables, context=context, **options)
            return data.get(operation.name)
        except NetworkError as e:
            if not e.is_server_failure:
                raise
            logger.fail(FAILED_API_SERVER_ERROR, e)
            return None


def bind_logger(operation: OperationCall, logger: Logger) -> OperationCall:
    """Pre-bind ``logger`` as the first argument of an operation."""

    @functools.wraps(operation)
    async def bound(
        variables: Mapping[str, Any] | None = None,
        projection: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> Any:
        return await operation(logger, variables, projection, options)

    return bound


class LoggerBoundClient:
    """A connected client whose operations no longer take a logger."""

    def __init__(self, client: GraphQLClient, logger: Logger):
        self._client = client
        self.logger = logger
        self._callers = {
            name: bind_logger(caller, logger) for name, caller in client._callers.items()
        }

    @property
    def client(self) -> GraphQLClient:
        return self._client

    @property
    def schema(self) -> GraphQLSchema | None:
        return self._client.schema

    @property
    def operations(self) -> dict[str, Operation]:
        return self._client.operations

    def get_operation(self, name: str) -> OperationCall:
        try:
            return self._callers[name]
        except KeyError:
            raise AttributeError(f"Schema has no query or mutation named {name!r}") from None

    async def close(self):
        await self._client.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __getattr__(self, name: str) -> OperationCall:
        callers = self.__dict__.get("_callers") or {}
        if name in callers:
            return callers[name]
        raise AttributeError(f"{type(self).__name__!r} object has no attribute or operation {name!r}")


async def create(
    options: ClientConfig | dict[str, Any] | None = None,
    *,
    logger: Logger | None = None,
) -> GraphQLClient:
    """Create and connect a client.

    Operations of the returned client take a logger as their first
    argument; pass None to use ``logger`` (or a fresh :class:`DefaultLogger`).
    """
    config = ClientConfig.from_options(options)
    logger = logger or DefaultLogger()
    links = await ensure_thunk_call(config.links, logger)

    client = GraphQLClient(
        logger,
        links,
        config.client_options,
        config.http_options,
        config.other_options,
    )
    await client.connect()
    return client


async def new_graphql_client(
    options: ClientConfig | dict[str, Any] | None = None,
    *,
    logger: Logger | None = None,
) -> LoggerBoundClient:
    """Create and connect a client with ``logger`` bound to every operation."""
    client = await create(options, logger=logger)
    return LoggerBoundClient(client, client.logger)
