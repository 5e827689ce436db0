"""QGraphicsScene implementation of the graph render surface."""

import math
from collections.abc import Sequence

from PySide6.QtCore import QObject, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainterPath, QPen
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsItemGroup,
    QGraphicsPathItem,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneHoverEvent,
    QGraphicsSimpleTextItem,
)

from gitlanes.graph.surface import HoverCallback, arc_point
from gitlanes.graph.types import Point

# Stacking of top-level items
STRIPE_Z = -2
EDGE_Z = -1


class HoverGroup(QGraphicsItemGroup):
    """Item group that reports hover enter/leave to plain callbacks."""

    def __init__(self, parent: QGraphicsItem | None = None) -> None:
        super().__init__(parent)
        self._on_enter: HoverCallback | None = None
        self._on_leave: HoverCallback | None = None

    def set_hover_callbacks(self, on_enter: HoverCallback, on_leave: HoverCallback) -> None:
        self._on_enter = on_enter
        self._on_leave = on_leave
        self.setAcceptHoverEvents(True)

    def hoverEnterEvent(self, event: QGraphicsSceneHoverEvent) -> None:  # noqa: N802
        if self._on_enter is not None:
            self._on_enter()
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event: QGraphicsSceneHoverEvent) -> None:  # noqa: N802
        if self._on_leave is not None:
            self._on_leave()
        super().hoverLeaveEvent(event)


class SceneSurface(QObject):
    """
    Draws graph primitives into a QGraphicsScene.

    Angles follow the graph core's convention (radians from the top,
    clockwise on screen) and are converted to Qt's degrees from 3 o'clock,
    counter-clockwise.
    """

    resized = Signal(float, float)  # width, height

    def __init__(self, scene: QGraphicsScene, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.scene = scene
        self.trailing_width = 0.0  # Room reserved right of the graph (commit log)
        self._width = 0.0
        self._height = 0.0
        self._stripes: list[QGraphicsRectItem] = []

    def _add(self, item: QGraphicsItem, parent: QGraphicsItem | None, z: float = 0) -> QGraphicsItem:
        if parent is None:
            item.setZValue(z)
            self.scene.addItem(item)
        else:
            item.setParentItem(parent)
        return item

    def group(self, x: float, y: float, parent: QGraphicsItem | None = None) -> HoverGroup:
        group = HoverGroup()
        group.setPos(x, y)
        self._add(group, parent)
        return group

    def rect(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        fill: str,
        stroke: str = "#000000",
        stroke_width: float = 1,
        parent: QGraphicsItem | None = None,
    ) -> QGraphicsRectItem:
        item = QGraphicsRectItem(x, y, width, height)
        item.setBrush(QBrush(QColor(fill)))
        item.setPen(QPen(QColor(stroke), stroke_width))
        self._add(item, parent)
        return item

    def circle(
        self,
        cx: float,
        cy: float,
        r: float,
        fill: str,
        stroke: str,
        stroke_width: float,
        parent: QGraphicsItem | None = None,
    ) -> QGraphicsEllipseItem:
        item = QGraphicsEllipseItem(cx - r, cy - r, 2 * r, 2 * r)
        item.setBrush(QBrush(QColor(fill)))
        item.setPen(QPen(QColor(stroke), stroke_width))
        self._add(item, parent)
        return item

    def polyline(
        self,
        points: Sequence[Point],
        stroke: str,
        stroke_width: float,
        parent: QGraphicsItem | None = None,
    ) -> QGraphicsPathItem:
        path = QPainterPath()
        path.moveTo(points[0].x, points[0].y)
        for point in points[1:]:
            path.lineTo(point.x, point.y)
        return self._stroke_path(path, stroke, stroke_width, parent, EDGE_Z)

    def arc(
        self,
        cx: float,
        cy: float,
        r: float,
        start: float,
        end: float,
        stroke: str,
        stroke_width: float,
        parent: QGraphicsItem | None = None,
    ) -> QGraphicsPathItem:
        begin = arc_point(cx, cy, r, start)
        path = QPainterPath()
        path.moveTo(begin.x, begin.y)
        path.arcTo(
            QRectF(cx - r, cy - r, 2 * r, 2 * r),
            90 - math.degrees(start),
            -math.degrees(end - start),
        )
        return self._stroke_path(path, stroke, stroke_width, parent)

    def _stroke_path(
        self,
        path: QPainterPath,
        stroke: str,
        stroke_width: float,
        parent: QGraphicsItem | None,
        z: float = 0,
    ) -> QGraphicsPathItem:
        item = QGraphicsPathItem(path)
        pen = QPen(QColor(stroke), stroke_width)
        pen.setCapStyle(Qt.PenCapStyle.FlatCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        item.setPen(pen)
        item.setBrush(Qt.BrushStyle.NoBrush)
        item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        item.setAcceptHoverEvents(False)
        self._add(item, parent, z)
        return item

    def text(
        self,
        x: float,
        y: float,
        text: str,
        font_size: float,
        parent: QGraphicsItem | None = None,
    ) -> QGraphicsSimpleTextItem:
        font = QFont("sans-serif")
        font.setPixelSize(int(font_size))
        item = QGraphicsSimpleTextItem(text)
        item.setFont(font)
        # (x, y) is the baseline origin; Qt positions text by its top-left
        item.setPos(x, y - QFontMetricsF(font).ascent())
        item.setAcceptedMouseButtons(Qt.MouseButton.NoButton)
        self._add(item, parent)
        return item

    def text_width(self, item: QGraphicsSimpleTextItem) -> float:
        return item.boundingRect().width()

    def stack_behind(self, item: QGraphicsItem, sibling: QGraphicsItem) -> None:
        item.stackBefore(sibling)

    def stripe(self, y: float, height: float, fill: str) -> QGraphicsRectItem:
        item = QGraphicsRectItem(0, y, self._scene_width(), height)
        item.setBrush(QBrush(QColor(fill)))
        item.setPen(QPen(Qt.PenStyle.NoPen))
        self._add(item, None, STRIPE_Z)
        self._stripes.append(item)
        return item

    def hover(self, item: HoverGroup, on_enter: HoverCallback, on_leave: HoverCallback) -> None:
        item.set_hover_callbacks(on_enter, on_leave)

    def resize(self, width: float, height: float) -> None:
        self._width = width
        self._height = height
        self._apply_scene_rect()
        self.resized.emit(width, height)

    def set_trailing_width(self, trailing_width: float) -> None:
        if trailing_width != self.trailing_width:
            self.trailing_width = trailing_width
            self._apply_scene_rect()

    def _scene_width(self) -> float:
        return math.ceil(self._width + self.trailing_width)

    def _apply_scene_rect(self) -> None:
        scene_width = self._scene_width()
        self.scene.setSceneRect(0, 0, scene_width, self._height)
        for stripe in self._stripes:
            rect = stripe.rect()
            stripe.setRect(0, rect.y(), scene_width, rect.height())

    def width(self) -> float:
        return self._width

    def clear(self) -> None:
        self.scene.clear()
        self._stripes = []
        self._width = 0.0
        self._height = 0.0
        self.scene.setSceneRect(0, 0, 0, 0)
