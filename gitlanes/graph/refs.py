"""Reference labels drawn to the right of the graph."""

from dataclasses import dataclass

from gitlanes.constants import (
    COLUMN_WIDTH,
    LABEL_FONT_SIZE,
    LABEL_GAP,
    LABEL_PADDING,
    LABEL_TEXT_X,
    LABEL_TEXT_Y,
    OTHER_REF_COLOR,
    REF_CATEGORIES,
    ROW_HEIGHT,
)
from gitlanes.graph.surface import RenderSurface
from gitlanes.graph.types import Commit


@dataclass(frozen=True)
class RefLabel:
    """Display form of a ref name."""

    text: str
    kind: str
    color: str


def classify(ref: str) -> RefLabel:
    """Match a ref against branch, remote, tag (in that order) or other."""
    for prefix, kind, color in REF_CATEGORIES:
        if ref.startswith(prefix):
            return RefLabel(ref[len(prefix) :], kind, color)
    return RefLabel(ref, "other", OTHER_REF_COLOR)


class ReferenceAnnotator:
    """Places ref label boxes and tracks the canvas width they need."""

    def __init__(self) -> None:
        self.required_width = 0.0

    def annotate(self, surface: RenderSurface, commit: Commit, extent: float) -> float:
        """Draw one box per ref of ``commit``, starting right of ``extent``.

        Text can only be measured once it is on the surface, so each label
        is inserted first and its box is added behind it afterwards.
        Returns the x where the next label would start.
        """
        x = extent + COLUMN_WIDTH
        top = commit.y - ROW_HEIGHT / 2

        for ref in commit.refs:
            label = classify(ref)
            group = surface.group(x, top)
            text = surface.text(LABEL_TEXT_X, LABEL_TEXT_Y, label.text, LABEL_FONT_SIZE, group)
            text_width = surface.text_width(text)
            box = surface.rect(0, 0, text_width + LABEL_PADDING, ROW_HEIGHT, label.color, parent=group)
            surface.stack_behind(box, text)
            x += text_width + LABEL_PADDING + LABEL_GAP

        self.required_width = max(self.required_width, x)
        return x

    def reset(self) -> None:
        self.required_width = 0.0
