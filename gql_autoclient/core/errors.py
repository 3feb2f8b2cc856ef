"""Exceptions raised by the GraphQL client and its transport links."""

from typing import Any


class GraphQLClientError(Exception):
    """Base class for all client errors."""


class NetworkError(GraphQLClientError):
    """The request did not produce a usable GraphQL response.

    Raised by transport links for connection failures (no status code),
    non-2xx responses and response bodies that are not JSON.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        result: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.result = result
        super().__init__(message)

    @property
    def is_server_failure(self) -> bool:
        """True for failures on the server side or below HTTP (no status)."""
        return self.status_code is None or self.status_code >= 500


class GraphQLError(GraphQLClientError):
    """Exception raised for GraphQL errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)

    @classmethod
    def from_errors(cls, errors: list[dict[str, Any]]) -> "GraphQLError":
        error_messages = "; ".join(e.get("message", str(e)) for e in errors)
        return cls(f"GraphQL errors: {error_messages}", errors)


class OperationFailed(GraphQLClientError):
    """Raised by the default logger when a failure is reported."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"{code}: {message}" if message else code)


class LinkChainError(GraphQLClientError):
    """The link chain ran out of links before a response was produced."""


class ClientNotConnectedError(GraphQLClientError):
    """An operation was requested before ``connect()`` completed."""


class ClientAlreadyConnectedError(GraphQLClientError):
    """``connect()`` was called on a client that is already connected."""
