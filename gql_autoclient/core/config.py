"""Client configuration models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

FetchPolicy = Literal["cache-first", "network-only", "no-cache"]


class ClientOptions(BaseModel):
    """Options passed through to every :class:`TransportClient`."""
    model_config = ConfigDict(extra="forbid")

    fetch_policy: FetchPolicy = "cache-first"
    name: str | None = None
    version: str | None = None
    default_context: dict[str, Any] = Field(default_factory=dict)


class HttpOptions(BaseModel):
    """Options for the HTTP link.

    Keys other than the declared ones are handed to ``httpx.AsyncClient``
    unchanged (e.g. ``transport``, ``verify``, ``follow_redirects``).
    """
    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    url: str = "/graphql"
    headers: dict[str, str] = Field(default_factory=dict)
    timeout: float = 30.0

    @property
    def client_kwargs(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class OtherOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reset_store_every: PositiveInt = 100
    persisted_queries: bool = True


class ClientConfig(BaseModel):
    """Everything needed to build a client.

    ``links`` is either a list of links or a thunk (sync or async) that
    produces one; it is resolved when the client is created.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    links: Any = Field(default_factory=list)
    client_options: ClientOptions = Field(default_factory=ClientOptions)
    http_options: HttpOptions = Field(default_factory=HttpOptions)
    other_options: OtherOptions = Field(default_factory=OtherOptions)

    @classmethod
    def from_options(cls, options: "ClientConfig | dict[str, Any] | None") -> "ClientConfig":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(options)


def key(options: ClientConfig | dict[str, Any] | None = None) -> dict[str, Any]:
    """Identity of a client configuration, for callers that cache clients."""
    config = ClientConfig.from_options(options)
    return {
        "links": config.links,
        "client_options": config.client_options,
        "http_options": config.http_options,
        "other_options": config.other_options,
    }
