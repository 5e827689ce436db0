"""Tests for the append-only commit store."""

import pytest
from conftest import make_commit

from gitlanes.graph.store import CommitStore


class TestCommitStore:
    """Lookup, ordering and child links."""

    def test_append_keeps_arrival_order(self):
        """Commits are kept in the order they were delivered."""
        store = CommitStore()
        store.append([make_commit("c3", "c2"), make_commit("c2", "c1")])
        store.append([make_commit("c1")])

        assert [c.hash for c in store] == ["c3", "c2", "c1"]
        assert store.index_of("c1") == 2
        assert len(store) == 3

    def test_lookup_and_contains(self):
        store = CommitStore()
        commit = make_commit("aaaa1111")
        store.append([commit])

        assert store.lookup("aaaa1111") is commit
        assert "aaaa1111" in store
        assert store.lookup("bbbb") is None
        assert "bbbb" not in store

    def test_children_of_known_parent(self):
        """A parent lists every child naming it."""
        store = CommitStore()
        store.append([make_commit("m", "a", "b"), make_commit("a", "base"), make_commit("b", "base")])
        store.append([make_commit("base")])

        assert store.children("base") == ["a", "b"]
        assert store.children("a") == ["m"]
        assert store.children("m") == []

    def test_children_recorded_before_parent_arrives(self):
        """Children are indexed even while their parent is on a later page."""
        store = CommitStore()
        store.append([make_commit("child", "later")])

        assert store.lookup("later") is None
        assert store.children("later") == ["child"]

    def test_children_returns_copy(self):
        store = CommitStore()
        store.append([make_commit("child", "parent")])

        store.children("parent").append("bogus")
        assert store.children("parent") == ["child"]


class TestFindByPrefix:
    """Hash prefix lookup."""

    def test_short_prefix_rejected(self):
        """Prefixes under four characters raise ValueError."""
        store = CommitStore()
        store.append([make_commit("abcdef0123")])

        with pytest.raises(ValueError):
            store.find_by_prefix("abc")

    def test_four_character_prefix(self):
        store = CommitStore()
        commit = make_commit("abcdef0123")
        store.append([commit])

        assert store.find_by_prefix("abcd") is commit

    def test_first_match_wins(self):
        """With an ambiguous prefix the earliest arrival is returned."""
        store = CommitStore()
        first = make_commit("abcd1111")
        store.append([first, make_commit("abcd2222")])

        assert store.find_by_prefix("abcd") is first

    def test_no_match(self):
        store = CommitStore()
        store.append([make_commit("abcdef0123")])

        assert store.find_by_prefix("ffff") is None

    def test_reset_forgets_everything(self):
        store = CommitStore()
        store.append([make_commit("child", "parent")])
        store.reset()

        assert len(store) == 0
        assert store.lookup("child") is None
        assert store.children("parent") == []
