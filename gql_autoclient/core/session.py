"""Transport session management.

The transport client's cache only ever grows, so the session throws the
whole client away every ``reset_store_every`` uses and starts over with an
empty cache.
"""

import logging
import sys

from .config import ClientOptions
from .links import Link, LinkChain
from .transport import QueryCache, TransportClient

logger = logging.getLogger(__name__)


class TransportSession:
    """Owns the current :class:`TransportClient` and its use counter."""

    def __init__(
        self,
        links: list[Link],
        client_options: ClientOptions | None = None,
        reset_store_every: int = 100,
    ):
        self.links = links
        self.client_options = client_options or ClientOptions()
        self.reset_store_every = reset_store_every

        self.client: TransportClient | None = None
        # Forces a client to be created on first use
        self.counter = sys.maxsize

    def ensure_session(self) -> TransportClient:
        """Return a live transport client, recycling it when it is used up."""
        if self.client is None or self.counter >= self.reset_store_every:
            logger.debug("Creating transport client (previous served %s uses)",
                         self.counter if self.client else 0)
            self.client = TransportClient(
                LinkChain(self.links),
                QueryCache(),
                self.client_options,
            )
            self.counter = 0
        self.counter += 1
        return self.client
