"""Tests for the QGraphicsScene render surface (offscreen)."""

import math
import os

import pygit2
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtGui import QColor  # noqa: E402
from PySide6.QtWidgets import QApplication, QGraphicsPathItem, QGraphicsScene  # noqa: E402

from gitlanes.config.settings import Settings  # noqa: E402
from gitlanes.constants import INSERTIONS_COLOR  # noqa: E402
from gitlanes.graph.session import GraphSession  # noqa: E402
from gitlanes.graph.types import Commit, DiffStat, Point  # noqa: E402
from gitlanes.ui.git_graph.surface import EDGE_Z, STRIPE_Z, HoverGroup, SceneSurface  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    return QApplication.instance() or QApplication([])


@pytest.fixture
def scene_surface(qapp):
    scene = QGraphicsScene()
    surface = SceneSurface(scene)
    yield surface
    surface.clear()


class TestSceneSurface:
    """Primitive drawing on a real scene."""

    def test_group_children(self, scene_surface):
        group = scene_surface.group(20, 10)
        circle = scene_surface.circle(0, 0, 7, "#afafaf", "#000000", 1, parent=group)

        assert isinstance(group, HoverGroup)
        assert circle.parentItem() is group
        assert circle.scenePos().x() == 20
        assert circle.rect().width() == 14

    def test_text_measured_after_insertion(self, scene_surface):
        short = scene_surface.text(5, 15, "v1", 12)
        long = scene_surface.text(5, 15, "feature/long-branch", 12)

        assert 0 < scene_surface.text_width(short) < scene_surface.text_width(long)

    def test_box_behind_text(self, scene_surface):
        group = scene_surface.group(0, 0)
        text = scene_surface.text(5, 15, "main", 12, parent=group)
        box = scene_surface.rect(0, 0, 40, 20, "#00ff00", parent=group)
        scene_surface.stack_behind(box, text)

        assert group.childItems().index(box) < group.childItems().index(text)

    def test_edges_and_stripes_stack_under_markers(self, scene_surface):
        line = scene_surface.polyline([Point(20, 17), Point(20, 23)], "#7f0000", 2)
        stripe = scene_surface.stripe(0, 20, "#efefef")

        assert line.zValue() == EDGE_Z
        assert stripe.zValue() == STRIPE_Z

    def test_arc_starts_at_top(self, scene_surface):
        """Angle 0 is the top of the circle; positive angles run clockwise."""
        arc = scene_surface.arc(0, 0, 6, 0, math.pi / 2, "green", 4)
        path = arc.path()

        start = path.pointAtPercent(0)
        end = path.pointAtPercent(1)
        assert (round(start.x()), round(start.y())) == (0, -6)
        assert (round(end.x()), round(end.y())) == (6, 0)

    def test_resize_and_trailing_width(self, scene_surface):
        stripe = scene_surface.stripe(0, 20, "#ffffff")
        scene_surface.resize(100, 50)
        scene_surface.set_trailing_width(40)

        assert scene_surface.width() == 100
        assert scene_surface.scene.sceneRect().width() == 140
        assert stripe.rect().width() == 140

    def test_clear(self, scene_surface):
        scene_surface.circle(0, 0, 7, "#afafaf", "#000000", 1)
        scene_surface.resize(100, 50)
        scene_surface.clear()

        assert scene_surface.scene.items() == []
        assert scene_surface.width() == 0


class TestSessionOnScene:
    def test_layout_and_halo(self, scene_surface):
        """A session draws onto the scene and hover groups accept hover events."""
        session = GraphSession(scene_surface)
        session.merge_refs({"refs/heads/main": "b"})
        session.append([Commit("b", ["a"]), Commit("a", [])])
        session.apply_stat("b", DiffStat(10, 2))

        markers = [
            item
            for item in scene_surface.scene.items()
            if isinstance(item, HoverGroup) and item.acceptHoverEvents()
        ]
        assert len(markers) == 2
        assert scene_surface.width() >= session.annotator.required_width
        assert scene_surface.scene.sceneRect().height() == 50


class TestLogLine:
    """One-line commit log entries next to the graph."""

    def test_without_stat(self):
        from gitlanes.ui.git_graph.widget import log_line_html

        commit = Commit("0123456789abcdef", [], message="Fix <b> handling")

        assert log_line_html(commit) == "012345 Fix &lt;b&gt; handling"

    def test_with_stat(self):
        from gitlanes.ui.git_graph.widget import log_line_html

        commit = Commit("0123456789abcdef", ["p"], message="Add", stat=DiffStat(3, 1))
        line = log_line_html(commit)

        assert ">+3</span>" in line
        assert ">-1</span>" in line
        assert line.endswith(" Add")


@pytest.fixture
def graph_view(qapp, tmp_path):
    from gitlanes.ui.git_graph.widget import GitGraphView

    repo_path = tmp_path / "repo"
    pygit2.init_repository(str(repo_path))
    view = GitGraphView(str(repo_path), Settings(tmp_path / "settings.json"))
    yield view
    view.shutdown()


CHILD = "b" * 40
PARENT = "a" * 40


def history_page():
    return [
        {"hash": CHILD, "parents": [PARENT], "message": "Second"},
        {"hash": PARENT, "parents": [], "message": "First"},
    ]


class TestGitGraphView:
    """Worker results arriving at the view."""

    def test_page_from_replaced_load_is_dropped(self, graph_view):
        """After a reload, pages and refs of the earlier load are ignored."""
        stale = graph_view._generation
        graph_view.reload()

        graph_view._on_refs_ready(stale, {"refs/heads/main": CHILD})
        graph_view._on_page_ready(stale, history_page(), False)

        assert len(graph_view.session) == 0
        assert graph_view._log_items == {}

        graph_view._on_page_ready(graph_view._generation, history_page(), False)

        assert len(graph_view.session) == 2
        assert graph_view.session.store.lookup(CHILD).refs == []

    def test_stat_draws_halo_and_updates_log(self, graph_view):
        graph_view._on_page_ready(graph_view._generation, history_page(), False)
        assert "+3" not in graph_view._log_items[CHILD].toPlainText()

        graph_view._on_stat_ready(CHILD, 3, 1)

        halo_arcs = [
            item
            for item in graph_view.scene().items()
            if isinstance(item, QGraphicsPathItem) and item.pen().color() == QColor(INSERTIONS_COLOR)
        ]
        assert len(halo_arcs) == 1
        assert graph_view.session.store.lookup(CHILD).stat == DiffStat(3, 1)
        assert graph_view._log_items[CHILD].toPlainText() == f"{CHILD[:6]} +3 -1 Second"

    def test_stat_for_unknown_commit_ignored(self, graph_view):
        graph_view._on_page_ready(graph_view._generation, history_page(), False)

        graph_view._on_stat_ready("c" * 40, 1, 1)

        assert graph_view.session.store.lookup(CHILD).stat is None
