"""Tests for on-demand history extension."""

import pytest
from conftest import make_commit, record

from gitlanes.graph.extender import SessionExtender, at_bottom
from gitlanes.graph.session import GraphSession


@pytest.fixture
def session(surface):
    return GraphSession(surface)


class FetchCounter:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


class TestSessionExtender:
    """Single in-flight request gating."""

    def test_no_request_without_pending_lanes(self, session):
        fetch = FetchCounter()
        extender = SessionExtender(session, fetch)
        session.append([make_commit("root")])

        assert extender.request() is False
        assert fetch.calls == 0

    def test_single_request_in_flight(self, session):
        """A second trigger while one is outstanding is a no-op."""
        fetch = FetchCounter()
        extender = SessionExtender(session, fetch)
        session.append([make_commit("b", "a")])

        assert extender.request() is True
        assert extender.request() is False
        assert fetch.calls == 1
        assert extender.in_flight

    def test_deliver_appends_and_clears_flag(self, session):
        fetch = FetchCounter()
        extender = SessionExtender(session, fetch)
        session.append([make_commit("b", "a")])
        extender.request()

        added = extender.deliver([record("a")])

        assert [c.hash for c in added] == ["a"]
        assert not extender.in_flight
        assert session.pending() == []

    def test_deliver_skips_known_commits(self, session):
        extender = SessionExtender(session, FetchCounter())
        session.append([make_commit("c", "b"), make_commit("b", "a")])

        added = extender.deliver([record("b", "a"), record("a")])

        assert [c.hash for c in added] == ["a"]
        assert len(session) == 3

    def test_empty_page_exhausts(self, session):
        """An empty page means there is no more history to fetch."""
        fetch = FetchCounter()
        extender = SessionExtender(session, fetch)
        session.append([make_commit("b", "a")])
        extender.request()
        extender.deliver([])

        assert extender.exhausted
        assert extender.request() is False
        assert fetch.calls == 1

    def test_producer_reports_exhaustion(self, session):
        extender = SessionExtender(session, FetchCounter())
        session.append([make_commit("c", "b")])
        extender.deliver([record("b", "a")], exhausted=True)

        assert session.pending() == ["a"]
        assert extender.can_extend() is False

    def test_failure_blocks_further_requests(self, session, caplog):
        """A failed fetch is logged and extension stays blocked."""
        fetch = FetchCounter()
        extender = SessionExtender(session, fetch)
        session.append([make_commit("b", "a")])
        extender.request()

        extender.fail("connection lost")

        assert "connection lost" in caplog.text
        assert extender.request() is False
        assert fetch.calls == 1

    def test_reset_unblocks(self, session):
        extender = SessionExtender(session, FetchCounter())
        session.append([make_commit("b", "a")])
        extender.request()
        extender.reset()

        assert extender.can_extend()


class TestAtBottom:
    def test_at_bottom(self):
        assert at_bottom(100, 100)
        assert not at_bottom(99, 100)

    def test_margin(self):
        assert at_bottom(80, 100, margin=20)
        assert not at_bottom(79, 100, margin=20)

    def test_nothing_to_scroll(self):
        assert at_bottom(0, 0)
