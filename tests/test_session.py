"""Tests for transport session recycling."""

import sys

from gql_autoclient.core.config import ClientOptions
from gql_autoclient.core.session import TransportSession


class TestTransportSession:
    """Tests for TransportSession.ensure_session."""

    def test_starts_without_client(self):
        session = TransportSession([])
        assert session.client is None
        assert session.counter == sys.maxsize

    def test_first_call_creates_client(self):
        session = TransportSession([], reset_store_every=100)
        client = session.ensure_session()
        assert client is session.client
        assert session.counter == 1

    def test_reuses_client_until_threshold(self):
        session = TransportSession([], reset_store_every=3)
        clients = [session.ensure_session() for _ in range(3)]
        assert len({id(c) for c in clients}) == 1
        assert session.counter == 3

    def test_recycles_after_threshold(self):
        session = TransportSession([], reset_store_every=3)
        clients = [session.ensure_session() for _ in range(4)]
        assert len({id(c) for c in clients}) == 2
        assert clients[3] is not clients[2]
        # The call that recreates the client counts as its first use
        assert session.counter == 1

    def test_instances_created_per_threshold_crossing(self):
        session = TransportSession([], reset_store_every=5)
        clients = [session.ensure_session() for _ in range(11)]
        assert len({id(c) for c in clients}) == 3

    def test_threshold_of_one_creates_every_time(self):
        session = TransportSession([], reset_store_every=1)
        clients = [session.ensure_session() for _ in range(3)]
        assert len({id(c) for c in clients}) == 3

    def test_new_client_starts_with_empty_cache(self):
        session = TransportSession([], reset_store_every=1)
        first = session.ensure_session()
        first.cache.write("{ a }", None, {"a": 1})
        second = session.ensure_session()
        assert len(first.cache) == 1
        assert len(second.cache) == 0

    def test_new_client_shares_links_and_options(self):
        link = object()
        options = ClientOptions(fetch_policy="no-cache")
        session = TransportSession([link], options, reset_store_every=1)
        first = session.ensure_session()
        second = session.ensure_session()
        assert first.link.links == second.link.links == [link]
        assert second.options is options
