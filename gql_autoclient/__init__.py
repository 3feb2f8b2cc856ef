"""Dynamic GraphQL client built from schema introspection."""

from .core import (
    ClientConfig,
    DefaultLogger,
    GraphQLClient,
    LoggerBoundClient,
    create,
    key,
    new_graphql_client,
)

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "DefaultLogger",
    "GraphQLClient",
    "LoggerBoundClient",
    "create",
    "key",
    "new_graphql_client",
]
