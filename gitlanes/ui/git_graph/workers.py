"""
Background workers for the git graph view.

These QObject workers live in their own threads so pygit2 walks and diffs
never block the UI:
- HistoryWorker pages through history and reads the refs snapshot
- EnrichmentWorker computes diff stats and hover details

Each worker opens its own GraphRepository inside its thread; pygit2
repository handles are not shared across threads.
"""

import logging
from dataclasses import asdict

from PySide6.QtCore import QObject, Signal, Slot

from gitlanes.git_backend.repository import GraphRepository, HistoryPager

logger = logging.getLogger(__name__)


class HistoryWorker(QObject):
    """Worker producing pages of commit records, newest first

    Every emission carries the generation passed to load(), so results of a
    load that has since been replaced can be told apart.
    """

    refs_ready = Signal(int, dict)  # (generation, {ref name: commit hash})
    page_ready = Signal(int, list, bool)  # (generation, records, exhausted)
    error = Signal(int, str)  # (generation, message)

    def __init__(
        self,
        repo_path: str,
        page_size: int,
        branch: str | None = None,
        all_refs: bool = False,
    ) -> None:
        super().__init__()
        self.repo_path = repo_path
        self.page_size = page_size
        self.branch = branch
        self.all_refs = all_refs
        self.generation = 0
        self._pager: HistoryPager | None = None

    @Slot(int)
    def load(self, generation: int) -> None:
        """Open the repository, emit the refs snapshot and the first page"""
        self.generation = generation
        self._pager = None
        try:
            repo = GraphRepository(self.repo_path)
            heads = repo.start_points(self.branch, self.all_refs)
            self._pager = HistoryPager(repo, heads, self.page_size)
            self.refs_ready.emit(generation, repo.refs())
        except Exception as e:
            logger.exception("HistoryWorker failed to open %s", self.repo_path)
            self.error.emit(generation, str(e))
            return
        self.fetch_more()

    @Slot()
    def fetch_more(self) -> None:
        """Emit the next page of history"""
        if self._pager is None:
            self.error.emit(self.generation, "History is not loaded")
            return
        try:
            page = self._pager.next_page()
            self.page_ready.emit(self.generation, page, self._pager.exhausted)
        except Exception as e:
            logger.exception("HistoryWorker failed to read a page")
            self.error.emit(self.generation, str(e))


class EnrichmentWorker(QObject):
    """Worker computing diff stats and commit details on request"""

    stat_ready = Signal(str, int, int)  # (commit hash, insertions, deletions)
    details_ready = Signal(str, dict, str)  # (commit hash, meta, diff stat text)
    error = Signal(str)

    def __init__(self, repo_path: str) -> None:
        super().__init__()
        self.repo_path = repo_path
        self._repo: GraphRepository | None = None

    def _open(self) -> GraphRepository:
        if self._repo is None:
            self._repo = GraphRepository(self.repo_path)
        return self._repo

    @Slot(list)
    def compute_stats(self, pairs: list) -> None:
        """Emit stat_ready for each (parent hash, commit hash) pair"""
        for parent_hash, commit_hash in pairs:
            try:
                stat = self._open().diff_summary(parent_hash, commit_hash)
            except Exception as e:
                # One unreadable commit must not stop the rest of the batch
                logger.warning("Diff stat for %s failed: %s", commit_hash, e)
                self.error.emit(str(e))
                continue
            self.stat_ready.emit(commit_hash, stat.insertions, stat.deletions)

    @Slot(str, str)
    def compute_details(self, commit_hash: str, parent_hash: str) -> None:
        """Emit metadata and, for single-parent commits, the diff stat text"""
        try:
            repo = self._open()
            meta = repo.commit_meta(commit_hash)
            stats_text = repo.diff_stats_text(parent_hash, commit_hash) if parent_hash else ""
        except Exception as e:
            logger.warning("Details for %s failed: %s", commit_hash, e)
            self.error.emit(str(e))
            return
        self.details_ready.emit(commit_hash, asdict(meta), stats_text)
