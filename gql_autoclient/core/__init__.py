"""Core modules for the dynamic GraphQL client."""

from .auth import (
    ApiKeyAuth,
    Auth,
    AuthLink,
    BasicAuth,
    BearerAuth,
    HeaderAuth,
    NoAuth,
)
from .client import (
    GraphQLClient,
    LoggerBoundClient,
    bind_logger,
    create,
    new_graphql_client,
)
from .config import ClientConfig, ClientOptions, HttpOptions, OtherOptions, key
from .errors import (
    ClientAlreadyConnectedError,
    ClientNotConnectedError,
    GraphQLClientError,
    GraphQLError,
    LinkChainError,
    NetworkError,
    OperationFailed,
)
from .links import (
    GraphQLRequest,
    HttpLink,
    Link,
    LinkChain,
    PersistedQueryLink,
    SchemaLink,
)
from .logger import FAILED_API_SERVER_ERROR, DefaultLogger, Logger
from .projection import default_projection
from .query_builder import (
    Projection,
    build_argument_bindings,
    build_document,
    build_selection_set,
    build_variable_declarations,
    render_type,
)
from .schema import SchemaLoader, fetch_schema
from .session import TransportSession
from .synthesizer import Operation, synthesize_operations
from .transport import QueryCache, TransportClient
from .utils import ensure_thunk_call

__all__ = [
    # Auth
    "Auth",
    "AuthLink",
    "ApiKeyAuth",
    "BearerAuth",
    "BasicAuth",
    "HeaderAuth",
    "NoAuth",
    # Client
    "GraphQLClient",
    "LoggerBoundClient",
    "bind_logger",
    "create",
    "new_graphql_client",
    # Config
    "ClientConfig",
    "ClientOptions",
    "HttpOptions",
    "OtherOptions",
    "key",
    # Errors
    "ClientAlreadyConnectedError",
    "ClientNotConnectedError",
    "GraphQLClientError",
    "GraphQLError",
    "LinkChainError",
    "NetworkError",
    "OperationFailed",
    # Links
    "GraphQLRequest",
    "HttpLink",
    "Link",
    "LinkChain",
    "PersistedQueryLink",
    "SchemaLink",
    # Logger
    "FAILED_API_SERVER_ERROR",
    "DefaultLogger",
    "Logger",
    # Query building
    "Projection",
    "build_argument_bindings",
    "build_document",
    "build_selection_set",
    "build_variable_declarations",
    "default_projection",
    "render_type",
    # Schema
    "SchemaLoader",
    "fetch_schema",
    # Operations and transport
    "Operation",
    "synthesize_operations",
    "QueryCache",
    "TransportClient",
    "TransportSession",
    "ensure_thunk_call",
]
