"""Rendering capability consumed by the layout core.

The graph core never touches a toolkit directly. It draws through an object
implementing RenderSurface; the Qt front end provides one backed by a
QGraphicsScene, and tests use one that records the emitted geometry.
Item handles returned by a surface are opaque to the core.
"""

import math
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from gitlanes.graph.types import Point

HoverCallback = Callable[[], None]


class RenderSurface(Protocol):
    def group(self, x: float, y: float, parent: Any = None) -> Any:
        """Create an empty group translated to (x, y)."""
        ...

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: str,
        stroke: str = "#000000",
        stroke_width: float = 1,
        parent: Any = None,
    ) -> Any: ...

    def circle(
        self,
        cx: float,
        cy: float,
        r: float,
        fill: str,
        stroke: str,
        stroke_width: float,
        parent: Any = None,
    ) -> Any: ...

    def polyline(
        self,
        points: Sequence[Point],
        stroke: str,
        stroke_width: float,
        parent: Any = None,
    ) -> Any:
        """Open, unfilled path through ``points``. Ignores pointer events."""
        ...

    def arc(
        self,
        cx: float,
        cy: float,
        r: float,
        start: float,
        end: float,
        stroke: str,
        stroke_width: float,
        parent: Any = None,
    ) -> Any:
        """Clockwise arc between two angles; see arc_point for the convention."""
        ...

    def text(self, x: float, y: float, text: str, font_size: float, parent: Any = None) -> Any:
        """Insert a text item whose baseline starts at (x, y)."""
        ...

    def text_width(self, item: Any) -> float:
        """Rendered width of a text item that is already on the surface."""
        ...

    def stack_behind(self, item: Any, sibling: Any) -> None:
        """Paint ``item`` underneath ``sibling`` within their parent."""
        ...

    def stripe(self, y: float, height: float, fill: str) -> Any:
        """Full-width background band behind all other items."""
        ...

    def hover(self, item: Any, on_enter: HoverCallback, on_leave: HoverCallback) -> None: ...

    def resize(self, width: float, height: float) -> None: ...

    def width(self) -> float: ...

    def clear(self) -> None:
        """Remove every item and shrink back to an empty canvas."""
        ...


def arc_point(cx: float, cy: float, r: float, angle: float) -> Point:
    """Point on a circle for an angle in radians from the top, clockwise on screen."""
    return Point(cx + r * math.sin(angle), cy - r * math.cos(angle))
