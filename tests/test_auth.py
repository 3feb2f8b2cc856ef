"""Tests for authentication handlers and the auth link."""

import base64

import pytest

from gql_autoclient.core.auth import (
    ApiKeyAuth,
    Auth,
    AuthLink,
    BasicAuth,
    BearerAuth,
    HeaderAuth,
    NoAuth,
)
from gql_autoclient.core.links import GraphQLRequest, LinkChain


class EchoContextLink:
    """Terminating link that records the request it receives."""

    def __init__(self):
        self.requests = []

    async def request(self, request, forward):
        self.requests.append(request)
        return {"data": {"ok": True}}


class TestAuthHandlers:
    """Tests for the built-in handlers."""

    def test_api_key_default_header(self):
        assert ApiKeyAuth("my-secret-key").get_headers() == {"x-api-key": "my-secret-key"}

    def test_api_key_custom_header(self):
        auth = ApiKeyAuth("token123", header_name="x-auth-token")
        assert auth.get_headers() == {"x-auth-token": "token123"}

    def test_bearer_token(self):
        assert BearerAuth("abc.def").get_headers() == {"Authorization": "Bearer abc.def"}

    def test_basic_auth_special_chars(self):
        headers = BasicAuth("user@domain.com", "p@ss:word!").get_headers()
        expected = base64.b64encode(b"user@domain.com:p@ss:word!").decode()
        assert headers == {"Authorization": f"Basic {expected}"}

    def test_header_auth_returns_copy(self):
        auth = HeaderAuth({"X-Key": "value"})
        auth.get_headers()["X-New"] = "new"
        assert auth.get_headers() == {"X-Key": "value"}

    def test_no_auth(self):
        assert NoAuth().get_headers() == {}

    @pytest.mark.parametrize("auth", [
        ApiKeyAuth("key"),
        BearerAuth("token"),
        BasicAuth("user", "pass"),
        HeaderAuth({}),
        NoAuth(),
    ])
    def test_implements_protocol(self, auth):
        assert isinstance(auth, Auth)


class TestAuthLink:
    """Tests for AuthLink."""

    @pytest.mark.asyncio
    async def test_adds_headers_to_context(self):
        terminal = EchoContextLink()
        chain = LinkChain([AuthLink(BearerAuth("token")), terminal])

        result = await chain.execute(GraphQLRequest.from_query("{ ok }"))

        assert result == {"data": {"ok": True}}
        assert terminal.requests[0].context["headers"] == {"Authorization": "Bearer token"}

    @pytest.mark.asyncio
    async def test_context_headers_take_precedence(self):
        terminal = EchoContextLink()
        chain = LinkChain([AuthLink(ApiKeyAuth("default")), terminal])
        request = GraphQLRequest.from_query(
            "{ ok }", context={"headers": {"x-api-key": "override", "X-Trace": "1"}}
        )

        await chain.execute(request)

        assert terminal.requests[0].context["headers"] == {"x-api-key": "override", "X-Trace": "1"}
