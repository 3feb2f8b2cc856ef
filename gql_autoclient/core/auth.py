"""Authentication for GraphQL requests.

Auth handlers produce headers; :class:`AuthLink` puts them on every request
passing through a link chain, ahead of the HTTP link.

Example:
    client = await new_graphql_client({
        "links": [AuthLink(BearerAuth(token))],
        "http_options": {"url": "https://api.example.com/graphql"},
    })
"""

import base64
from typing import Any, Protocol, runtime_checkable

from .links import GraphQLRequest, NextLink


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class TenantAuth:
            def __init__(self, token: str, tenant: str):
                self.token = token
                self.tenant = tenant

            def get_headers(self) -> dict[str, str]:
                return {"Authorization": f"Bearer {self.token}", "X-Tenant": self.tenant}
    """

    def get_headers(self) -> dict[str, str]:
        """Return headers to include in requests."""
        ...


class ApiKeyAuth:
    """API key sent in a header (``x-api-key`` unless told otherwise)."""

    def __init__(self, api_key: str, header_name: str = "x-api-key"):
        self.api_key = api_key
        self.header_name = header_name

    def get_headers(self) -> dict[str, str]:
        return {self.header_name: self.api_key}


class BearerAuth:
    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class BasicAuth:
    def __init__(self, username: str, password: str):
        self.username = username
        self.password = password

    def get_headers(self) -> dict[str, str]:
        credentials = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return {"Authorization": f"Basic {credentials}"}


class HeaderAuth:
    """Arbitrary static headers."""

    def __init__(self, headers: dict[str, str]):
        self._headers = headers

    def get_headers(self) -> dict[str, str]:
        return self._headers.copy()


class NoAuth:
    """No authentication (for public APIs or testing)."""

    def get_headers(self) -> dict[str, str]:
        return {}


class AuthLink:
    """Link adding the headers of an auth handler to each request.

    Headers already present in the request context win, so a caller can
    override authentication for a single call through ``options["context"]``.
    """

    def __init__(self, auth: Auth):
        self.auth = auth

    async def request(self, request: GraphQLRequest, forward: NextLink) -> dict[str, Any]:
        request.context["headers"] = {
            **self.auth.get_headers(),
            **(request.context.get("headers") or {}),
        }
        return await forward(request)
