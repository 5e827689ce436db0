"""Graph session - owns the layout state of one rendered history."""

import logging
from collections.abc import Callable, Iterable, Mapping
from functools import partial
from typing import Any

from gitlanes.constants import DARK_ROW_COLOR, LIGHT_ROW_COLOR, ROW_HEIGHT, ROW_OFFSET
from gitlanes.graph.edges import EdgeRouter
from gitlanes.graph.halo import draw_halo, draw_marker
from gitlanes.graph.lanes import LaneAllocator
from gitlanes.graph.refs import ReferenceAnnotator
from gitlanes.graph.store import CommitStore
from gitlanes.graph.surface import RenderSurface
from gitlanes.graph.types import Commit, DiffStat, Edge

logger = logging.getLogger(__name__)

CommitCallback = Callable[[Commit], None]
CommitInput = Commit | Mapping[str, Any]


def _ignore(commit: Commit) -> None:
    pass


class GraphSession:
    """
    Incremental layout of a commit history onto a render surface.

    A session owns the commit store, the lane pool, the edge color counter
    and the label width, and appends pages of history to an already drawn
    graph without touching the rows drawn before. Everything is reset
    together by reset().

    Layout must run on one thread. Diff stats may arrive in any order via
    apply_stat(), which only touches the commit it names.
    """

    def __init__(
        self,
        surface: RenderSurface,
        on_hover: CommitCallback | None = None,
        on_leave: CommitCallback | None = None,
    ) -> None:
        self.surface = surface
        self.on_hover = on_hover or _ignore
        self.on_leave = on_leave or _ignore

        self.store = CommitStore()
        self.lanes = LaneAllocator()
        self.router = EdgeRouter(self.store)
        self.annotator = ReferenceAnnotator()

        self._ref_names: dict[str, list[str]] = {}
        self._markers: dict[str, Any] = {}
        self._halos: set[str] = set()

    # --- Layout ---

    def append(self, batch: Iterable[CommitInput]) -> list[Commit]:
        """Lay out a page of history below the rows already drawn.

        Returns the commits that were added, with lane and row assigned.
        """
        commits = [c if isinstance(c, Commit) else Commit.from_record(c) for c in batch]
        if not commits:
            return []

        first_row = self.lanes.next_row
        self.store.append(commits)
        for commit in commits:
            commit.refs.extend(self._ref_names.get(commit.hash, []))
            self.lanes.place(commit)

        edges: list[Edge] = []
        for commit in commits:
            edges.extend(self._connect_earlier_children(commit, first_row))
            commit_edges, extent = self.router.route(self.surface, commit)
            edges.extend(commit_edges)
            self._draw_marker(commit)
            self.annotator.annotate(self.surface, commit, extent)

        self._draw_stripes(first_row, self.lanes.next_row)
        self._grow_canvas()

        logger.debug(
            "Appended %d commits (%d edges), %d lanes, %d pending",
            len(commits),
            len(edges),
            self.lanes.width(),
            len(self.lanes.pending()),
        )
        return commits

    def _connect_earlier_children(self, parent: Commit, first_row: int) -> list[Edge]:
        """Draw edges from children on earlier pages down to a newly placed parent."""
        edges: list[Edge] = []
        for child_hash in self.store.children(parent.hash):
            child = self.store.lookup(child_hash)
            if child is None or child.row is None or child.row >= first_row:
                continue
            child_edges, _ = self.router.route(self.surface, child, only={parent.hash})
            edges.extend(child_edges)
        return edges

    def _draw_marker(self, commit: Commit) -> None:
        # Drawn after the edges so the marker paints on top of them
        marker = self.surface.group(commit.x, commit.y)
        draw_marker(self.surface, marker, None)
        self.surface.hover(
            marker,
            partial(self.on_hover, commit),
            partial(self.on_leave, commit),
        )
        self._markers[commit.hash] = marker
        if commit.stat is not None:
            draw_halo(self.surface, marker, commit.stat)
            self._halos.add(commit.hash)

    def _draw_stripes(self, start_row: int, end_row: int) -> None:
        for row in range(start_row, end_row):
            fill = LIGHT_ROW_COLOR if row % 2 == 0 else DARK_ROW_COLOR
            self.surface.stripe(row * ROW_HEIGHT - ROW_HEIGHT / 2 + ROW_OFFSET, ROW_HEIGHT, fill)

    def _grow_canvas(self) -> None:
        width = max(self.surface.width(), self.annotator.required_width)
        height = len(self.store) * ROW_HEIGHT + ROW_OFFSET
        self.surface.resize(width, height)

    # --- Enrichment ---

    def merge_refs(self, snapshot: Mapping[str, str]) -> None:
        """Attach a ``{ref name: commit hash}`` snapshot to commits.

        Known commits get the names right away; commits appended later pick
        them up on arrival. Labels are drawn when a commit's row is laid out,
        so refs should be merged before the rows they point at. Merging an
        overlapping snapshot twice repeats its names.
        """
        for ref, commit_hash in snapshot.items():
            self._ref_names.setdefault(commit_hash, []).append(ref)
            commit = self.store.lookup(commit_hash)
            if commit is not None:
                commit.refs.append(ref)

    def apply_stat(self, commit_hash: str, stat: DiffStat) -> Commit | None:
        """Record a commit's diff stat and draw its halo.

        Safe to call repeatedly and in any order relative to append().
        Returns the commit, or None when the hash is unknown.
        """
        commit = self.store.lookup(commit_hash)
        if commit is None:
            logger.debug("Dropping diff stat for unknown commit %s", commit_hash)
            return None

        if commit.stat == stat and commit_hash in self._halos:
            return commit

        commit.stat = stat
        marker = self._markers.get(commit_hash)
        if marker is not None:
            draw_halo(self.surface, marker, stat)
            self._halos.add(commit_hash)
        return commit

    # --- Queries ---

    def find_commit(self, prefix: str) -> Commit | None:
        return self.store.find_by_prefix(prefix)

    def pending(self) -> list[str]:
        return self.lanes.pending()

    def __len__(self) -> int:
        return len(self.store)

    def reset(self) -> None:
        """Forget all commits, lanes, colors and labels and clear the surface."""
        self.store.reset()
        self.lanes.reset()
        self.router.reset()
        self.annotator.reset()
        self._ref_names = {}
        self._markers = {}
        self._halos = set()
        self.surface.clear()
