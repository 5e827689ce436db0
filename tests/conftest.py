"""Shared fixtures: a render surface that records what the graph core draws."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from gitlanes.graph.types import Commit

# Fixed glyph width so label geometry is predictable
CHAR_WIDTH = 7


@dataclass(eq=False)
class Item:
    kind: str
    args: dict[str, Any]
    parent: "Item | None" = None
    children: list["Item"] = field(default_factory=list)
    hover: tuple[Any, Any] | None = None


class RecordingSurface:
    """RenderSurface that keeps every drawn item in a flat list."""

    def __init__(self) -> None:
        self.items: list[Item] = []
        self.size = (0.0, 0.0)
        self.stacked: list[tuple[Item, Item]] = []
        self.clears = 0

    def _add(self, kind: str, parent: Item | None = None, **args: Any) -> Item:
        item = Item(kind, args, parent)
        if parent is not None:
            parent.children.append(item)
        self.items.append(item)
        return item

    def group(self, x, y, parent=None):
        return self._add("group", parent, x=x, y=y)

    def rect(self, x, y, width, height, fill, stroke="#000000", stroke_width=1, parent=None):
        return self._add(
            "rect", parent, x=x, y=y, width=width, height=height, fill=fill, stroke=stroke
        )

    def circle(self, cx, cy, r, fill, stroke, stroke_width, parent=None):
        return self._add(
            "circle", parent, cx=cx, cy=cy, r=r, fill=fill, stroke=stroke, stroke_width=stroke_width
        )

    def polyline(self, points, stroke, stroke_width, parent=None):
        return self._add(
            "polyline", parent, points=tuple(points), stroke=stroke, stroke_width=stroke_width
        )

    def arc(self, cx, cy, r, start, end, stroke, stroke_width, parent=None):
        return self._add("arc", parent, cx=cx, cy=cy, r=r, start=start, end=end, stroke=stroke)

    def text(self, x, y, text, font_size, parent=None):
        return self._add("text", parent, x=x, y=y, text=text, font_size=font_size)

    def text_width(self, item):
        return len(item.args["text"]) * CHAR_WIDTH

    def stack_behind(self, item, sibling):
        self.stacked.append((item, sibling))

    def stripe(self, y, height, fill):
        return self._add("stripe", None, y=y, height=height, fill=fill)

    def hover(self, item, on_enter, on_leave):
        item.hover = (on_enter, on_leave)

    def resize(self, width, height):
        self.size = (width, height)

    def width(self):
        return self.size[0]

    def clear(self):
        self.items = []
        self.stacked = []
        self.size = (0.0, 0.0)
        self.clears += 1

    def of_kind(self, kind: str) -> list[Item]:
        return [item for item in self.items if item.kind == kind]


def make_commit(commit_hash: str, *parents: str, message: str = "") -> Commit:
    return Commit(hash=commit_hash, parents=list(parents), message=message or commit_hash)


def record(commit_hash: str, *parents: str) -> dict[str, Any]:
    return {"hash": commit_hash, "parents": list(parents), "message": f"commit {commit_hash}"}


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()
