"""Edge routing between commits - path geometry and colors."""

import logging

from gitlanes.constants import (
    BEND_OFFSET,
    EDGE_COLORS,
    EDGE_WIDTH,
    MARKER_GAP,
    PENDING_RADIUS,
)
from gitlanes.graph.store import CommitStore
from gitlanes.graph.surface import RenderSurface
from gitlanes.graph.types import Commit, Edge, Point

logger = logging.getLogger(__name__)


def edge_points(child: Commit, parent: Commit) -> tuple[Point, ...]:
    """
    Build the polyline from a child marker down to a parent marker.

    Children sit above their parents (smaller y), so paths run downward:
    - Same lane: a straight vertical line, stopping short of both markers.
    - Different lanes: down from the child, turn toward the parent's lane
      BEND_OFFSET above the parent's row, run horizontally, then turn down
      into the parent.
    """
    cx, cy = child.x, child.y
    px, py = parent.x, parent.y

    if cx == px:
        return (Point(cx, cy + MARKER_GAP), Point(px, py - MARKER_GAP))

    bend_y = py - BEND_OFFSET
    return (
        Point(cx, cy + MARKER_GAP),
        Point(cx, bend_y),
        Point(px, bend_y),
        Point(px, py - MARKER_GAP),
    )


class EdgeRouter:
    """Draws child -> parent edges and keeps the rotating edge color.

    The color index persists across routing passes; it is only reset
    together with the session. Edges to a parent from an earlier page are
    drawn when that parent arrives, so their colors follow arrival order.
    """

    def __init__(self, store: CommitStore) -> None:
        self.store = store
        self.color_index = 0

    def next_color(self, child: Commit, parent: Commit, parent_index: int) -> str:
        """Return the color for this edge and advance the counter.

        The counter stays put while history is linear (first parent in the
        same lane) and moves on at every branch or merge.
        """
        color = EDGE_COLORS[self.color_index]
        if parent_index != 0 or parent.lane != child.lane:
            self.color_index = (self.color_index + 1) % len(EDGE_COLORS)
        return color

    def route(
        self,
        surface: RenderSurface,
        child: Commit,
        only: set[str] | None = None,
    ) -> tuple[list[Edge], float]:
        """Draw the edges from ``child`` to its placed parents.

        ``only`` restricts routing to the given parent hashes; it is used to
        connect children of an earlier page to parents that just arrived.
        Returns the drawn edges and the rightmost x they reach, which is at
        least the right edge of the child marker.
        """
        edges: list[Edge] = []
        max_x = child.x + PENDING_RADIUS

        for index, parent_hash in enumerate(child.parents):
            if only is not None and parent_hash not in only:
                continue
            parent = self.store.lookup(parent_hash)
            if parent is None or not parent.placed:
                continue

            assert child.row is not None and parent.row is not None
            if parent.row <= child.row:
                logger.warning(
                    "Commit %s's parent %s is newer (row %d <= %d)",
                    child.hash,
                    parent.hash,
                    parent.row,
                    child.row,
                )

            points = edge_points(child, parent)
            color = self.next_color(child, parent, index)
            surface.polyline(points, stroke=color, stroke_width=EDGE_WIDTH)
            edges.append(Edge(child.hash, parent.hash, color, points))
            max_x = max(max_x, *(point.x for point in points))

        return edges, max_x

    def reset(self) -> None:
        self.color_index = 0
