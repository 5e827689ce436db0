"""
Git repository access using pygit2
"""

import heapq
import itertools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pygit2

from gitlanes.graph.types import DiffStat

logger = logging.getLogger(__name__)

CommitRecord = dict[str, Any]


@dataclass
class EditStamp:
    """Who touched a commit, and when (seconds since the epoch)."""

    name: str | None
    email: str | None
    date: int

    @classmethod
    def from_signature(cls, signature: pygit2.Signature) -> "EditStamp":
        return cls(name=signature.name, email=signature.email, date=signature.time)


@dataclass
class CommitMeta:
    """Details shown when hovering a commit."""

    author: EditStamp
    committer: EditStamp
    message: str


class GraphRepository:
    """Read-only repository access for the history graph"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Open the repository at repo_path, or the one containing the cwd"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except pygit2.GitError as e:
            raise ValueError(f"Not a git repository: {repo_path}") from e
        self.path = repo_path

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def get_commit(self, commit_hash: str) -> pygit2.Commit:
        """Look up a commit by full hash"""
        obj = self.repo.get(commit_hash)
        if not isinstance(obj, pygit2.Commit):
            raise ValueError(f"{commit_hash} is not a commit")
        return obj

    def start_points(self, branch: str | None = None, all_refs: bool = False) -> list[pygit2.Commit]:
        """
        Get the commits the history walk starts from.

        Args:
            branch: Local branch name to start from instead of HEAD
            all_refs: Start from every reference (ignores branch)
        """
        if all_refs:
            seen: set[str] = set()
            heads: list[pygit2.Commit] = []
            for commit in self._peeled_refs().values():
                if str(commit.id) not in seen:
                    seen.add(str(commit.id))
                    heads.append(commit)
            return heads

        if branch is not None:
            if branch not in self.repo.branches:
                raise ValueError(f"Branch '{branch}' does not exist")
            return [self.repo.branches[branch].peel(pygit2.Commit)]

        if self.repo.head_is_unborn:
            return []
        return [self.repo.head.peel(pygit2.Commit)]

    def _peeled_refs(self) -> dict[str, pygit2.Commit]:
        """Map each reference that resolves to a commit onto that commit"""
        peeled: dict[str, pygit2.Commit] = {}
        for name in self.repo.references:
            try:
                peeled[name] = self.repo.references[name].peel(pygit2.Commit)
            except (pygit2.GitError, pygit2.InvalidSpecError, KeyError, ValueError) as e:
                # Symbolic refs to unborn branches, tags of trees, etc.
                logger.debug("Skipping ref %s: %s", name, e)
        return peeled

    def refs(self) -> dict[str, str]:
        """Get mapping of ref name -> commit hash"""
        return {name: str(commit.id) for name, commit in self._peeled_refs().items()}

    def diff_summary(self, parent_hash: str, commit_hash: str) -> DiffStat:
        """Count inserted and deleted lines between two commits"""
        stats = self._diff(parent_hash, commit_hash).stats
        return DiffStat(insertions=stats.insertions, deletions=stats.deletions)

    def diff_stats_text(self, parent_hash: str, commit_hash: str, width: int = 80) -> str:
        """Get `git diff --stat` style text between two commits"""
        stats = self._diff(parent_hash, commit_hash).stats
        return stats.format(pygit2.enums.DiffStatsFormat.FULL, width)

    def _diff(self, parent_hash: str, commit_hash: str) -> pygit2.Diff:
        parent = self.get_commit(parent_hash)
        commit = self.get_commit(commit_hash)
        return self.repo.diff(parent, commit)

    def commit_meta(self, commit_hash: str) -> CommitMeta:
        """Get author, committer and full message of a commit"""
        commit = self.get_commit(commit_hash)
        return CommitMeta(
            author=EditStamp.from_signature(commit.author),
            committer=EditStamp.from_signature(commit.committer),
            message=commit.message,
        )


class HistoryPager:
    """
    Pages through history newest-first.

    Walks from the start commits with a max-heap keyed on commit time. The
    set of checked commits and the remaining frontier are kept between
    pages, so each page continues exactly where the previous one stopped.
    """

    def __init__(self, repo: GraphRepository, heads: list[pygit2.Commit], page_size: int) -> None:
        self.repo = repo
        self.page_size = max(1, page_size)
        self.checked: set[str] = set()
        self.pages_sent = 0
        # Ties on commit time pop in insertion order
        self._counter = itertools.count()
        self._frontier: list[tuple[int, int, str]] = []
        for commit in heads:
            self._push(commit)

    def _push(self, commit: pygit2.Commit) -> None:
        heapq.heappush(self._frontier, (-commit.commit_time, next(self._counter), str(commit.id)))

    @property
    def exhausted(self) -> bool:
        return not self._frontier

    def continue_hashes(self) -> set[str]:
        """Hashes of the commits the next page will start from"""
        return {oid for _, _, oid in self._frontier}

    def next_page(self) -> list[CommitRecord]:
        """Get the next page of commit records (empty once history is exhausted)"""
        page: list[CommitRecord] = []

        while self._frontier and len(page) < self.page_size:
            _, _, oid = heapq.heappop(self._frontier)
            if oid in self.checked:
                continue
            self.checked.add(oid)

            commit = self.repo.get_commit(oid)
            for parent in commit.parents:
                self._push(parent)

            page.append(
                {
                    "hash": oid,
                    "parents": [str(parent_id) for parent_id in commit.parent_ids],
                    "message": summary_line(commit.message),
                }
            )

        self.pages_sent += 1
        logger.info(
            "History page %d: %d commits, continues with %d commits",
            self.pages_sent,
            len(page),
            len(self.continue_hashes()),
        )
        return page


def summary_line(message: str) -> str:
    """First line of a commit message"""
    return message.strip().split("\n")[0]
