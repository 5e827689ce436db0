"""Append-only store of the commits known to a graph session."""

from collections.abc import Iterable, Iterator

from gitlanes.constants import MIN_PREFIX_LENGTH
from gitlanes.graph.types import Commit


class CommitStore:
    """Ordered list of commits with hash lookup and a derived child index.

    Commits are kept in arrival order (newest first as delivered by the
    history producer). The child index maps a hash to the hashes of known
    commits that name it as a parent; it is rebuilt incrementally on append
    and does not own the commits.
    """

    def __init__(self) -> None:
        self.commits: list[Commit] = []
        self._by_hash: dict[str, Commit] = {}
        self._index: dict[str, int] = {}
        self._children: dict[str, list[str]] = {}

    def __len__(self) -> int:
        return len(self.commits)

    def __iter__(self) -> Iterator[Commit]:
        return iter(self.commits)

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self._by_hash

    def append(self, batch: Iterable[Commit]) -> list[Commit]:
        """Add commits to the tail and backfill child links.

        The caller must not append a hash twice within a session.
        """
        added = list(batch)
        for commit in added:
            self._index[commit.hash] = len(self.commits)
            self.commits.append(commit)
            self._by_hash[commit.hash] = commit

        # Links are keyed by parent hash whether or not the parent has
        # arrived yet, so a parent delivered in a later batch finds the
        # children that were waiting for it.
        for commit in added:
            for parent_hash in commit.parents:
                self._children.setdefault(parent_hash, []).append(commit.hash)

        return added

    def lookup(self, commit_hash: str) -> Commit | None:
        return self._by_hash.get(commit_hash)

    def index_of(self, commit_hash: str) -> int | None:
        return self._index.get(commit_hash)

    def children(self, commit_hash: str) -> list[str]:
        """Hashes of known commits whose parents include ``commit_hash``."""
        return list(self._children.get(commit_hash, []))

    def find_by_prefix(self, prefix: str) -> Commit | None:
        """Return the first commit whose hash starts with ``prefix``.

        Raises ValueError for prefixes shorter than four characters, which
        are too likely to select the wrong commit.
        """
        if len(prefix) < MIN_PREFIX_LENGTH:
            raise ValueError(
                f"Hash prefix {prefix!r} is shorter than {MIN_PREFIX_LENGTH} characters"
            )
        for commit in self.commits:
            if commit.hash.startswith(prefix):
                return commit
        return None

    def reset(self) -> None:
        self.commits = []
        self._by_hash = {}
        self._index = {}
        self._children = {}
