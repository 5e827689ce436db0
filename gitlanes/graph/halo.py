"""Diff halo - arcs around a commit marker sized by change magnitude."""

import math

from gitlanes.constants import (
    DELETIONS_COLOR,
    HALO_WIDTH,
    INSERTIONS_COLOR,
    LOADED_RADIUS,
    LOADED_STROKE_WIDTH,
    MARKER_FILL,
    MARKER_STROKE,
    PENDING_RADIUS,
    PENDING_STROKE_WIDTH,
)
from gitlanes.graph.surface import RenderSurface
from gitlanes.graph.types import DiffStat


def halo_angle(count: int) -> float:
    """Sweep angle for a line count.

    Logarithmic so a 10-line change and a 10000-line change are both
    readable, capped at half a circle so the two arcs never overlap.
    """
    return min(math.pi, math.log10(count + 1) * math.pi / 5)


def marker_style(stat: DiffStat | None) -> tuple[float, float]:
    """Return (radius, outline width) for a marker in loaded or pending state."""
    if stat is None:
        return PENDING_RADIUS, PENDING_STROKE_WIDTH
    return LOADED_RADIUS, LOADED_STROKE_WIDTH


def draw_marker(surface: RenderSurface, marker: object, stat: DiffStat | None) -> object:
    radius, stroke_width = marker_style(stat)
    return surface.circle(
        0,
        0,
        radius,
        fill=MARKER_FILL,
        stroke=MARKER_STROKE,
        stroke_width=stroke_width,
        parent=marker,
    )


def draw_halo(surface: RenderSurface, marker: object, stat: DiffStat) -> list[object]:
    """Draw the loaded marker and the insertion/deletion arcs on ``marker``.

    Angles are measured from the top of the marker: insertions sweep
    clockwise, deletions the same amount counter-clockwise.
    """
    radius, _ = marker_style(stat)
    items = [draw_marker(surface, marker, stat)]
    items.append(
        surface.arc(
            0,
            0,
            radius,
            0,
            halo_angle(stat.insertions),
            stroke=INSERTIONS_COLOR,
            stroke_width=HALO_WIDTH,
            parent=marker,
        )
    )
    items.append(
        surface.arc(
            0,
            0,
            radius,
            -halo_angle(stat.deletions),
            0,
            stroke=DELETIONS_COLOR,
            stroke_width=HALO_WIDTH,
            parent=marker,
        )
    )
    return items
