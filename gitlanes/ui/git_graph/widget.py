"""Git graph view widget - main entry point for git graph visualization."""

import html
import logging

from PySide6.QtCore import QPoint, QPointF, Qt, QThread, QTimer, Signal
from PySide6.QtGui import QColor, QFont, QPainter, QWheelEvent
from PySide6.QtWidgets import (
    QGraphicsItemGroup,
    QGraphicsScene,
    QGraphicsTextItem,
    QGraphicsView,
    QWidget,
)

from gitlanes.config.settings import Settings
from gitlanes.constants import (
    DELETIONS_COLOR,
    INSERTIONS_COLOR,
    LABEL_FONT_SIZE,
    ROW_HEIGHT,
    SHORT_HASH_LENGTH,
)
from gitlanes.graph.extender import SessionExtender, at_bottom
from gitlanes.graph.session import GraphSession
from gitlanes.graph.types import Commit, DiffStat
from gitlanes.ui.git_graph.surface import SceneSurface
from gitlanes.ui.git_graph.tip import CommitDetailsTip
from gitlanes.ui.git_graph.workers import EnrichmentWorker, HistoryWorker

logger = logging.getLogger(__name__)


def log_line_html(commit: Commit) -> str:
    """One-line log entry: short hash, diff stat once known, summary."""
    parts = [html.escape(commit.hash[:SHORT_HASH_LENGTH])]
    if commit.stat is not None:
        parts.append(f'<span style="color:{INSERTIONS_COLOR}">+{commit.stat.insertions}</span>')
        parts.append(f'<span style="color:{DELETIONS_COLOR}">-{commit.stat.deletions}</span>')
    parts.append(html.escape(commit.message))
    return " ".join(parts)


class GitGraphView(QGraphicsView):
    """Scrollable, zoomable view of a commit history that loads more on demand."""

    commits_loaded = Signal(int)  # total commits in the session
    history_exhausted = Signal()
    error_occurred = Signal(str)

    # Requests to the worker threads (queued connections)
    _load_requested = Signal(int)  # generation
    _fetch_requested = Signal()
    _stats_requested = Signal(list)  # [(parent hash, commit hash)]
    _details_requested = Signal(str, str)  # (commit hash, parent hash or "")

    MIN_ZOOM = 0.2
    MAX_ZOOM = 4.0
    LOG_PADDING = 10
    TIP_OFFSET = QPoint(12, -12)

    def __init__(self, repo_path: str, settings: Settings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.repo_path = repo_path
        self.settings = settings
        self._generation = 0
        self._zoom = 1.0

        self._scene = QGraphicsScene(self)
        self._scene.setBackgroundBrush(QColor("#FFFFFF"))
        self.setScene(self._scene)

        self._surface = SceneSurface(self._scene, self)
        self._surface.resized.connect(self._on_surface_resized)
        self.session = GraphSession(
            self._surface,
            on_hover=self._on_commit_hover,
            on_leave=self._on_commit_leave,
        )
        self.extender = SessionExtender(self.session, self._fetch_requested.emit)

        # Commit log column, right of the graph
        self._log_group: QGraphicsItemGroup | None = None
        self._log_items: dict[str, QGraphicsTextItem] = {}
        self._log_font = QFont("sans-serif")
        self._log_font.setPixelSize(LABEL_FONT_SIZE)

        self._tip = CommitDetailsTip(self.viewport())

        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.ScrollHandDrag)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.verticalScrollBar().valueChanged.connect(self._on_scrolled)

        self._setup_workers()
        self.reload()

    def _setup_workers(self) -> None:
        """Start the history and enrichment workers in their own threads."""
        self._history_thread = QThread(self)
        self._history_worker = HistoryWorker(
            self.repo_path,
            self.settings.get_page_size(),
            branch=self.settings.get_branch(),
            all_refs=self.settings.get_all_refs(),
        )
        self._history_worker.moveToThread(self._history_thread)
        self._history_worker.refs_ready.connect(self._on_refs_ready)
        self._history_worker.page_ready.connect(self._on_page_ready)
        self._history_worker.error.connect(self._on_history_error)
        self._load_requested.connect(self._history_worker.load)
        self._fetch_requested.connect(self._history_worker.fetch_more)
        self._history_thread.finished.connect(self._history_worker.deleteLater)

        self._enrich_thread = QThread(self)
        self._enrich_worker = EnrichmentWorker(self.repo_path)
        self._enrich_worker.moveToThread(self._enrich_thread)
        self._enrich_worker.stat_ready.connect(self._on_stat_ready)
        self._enrich_worker.details_ready.connect(self._tip.show_details)
        self._stats_requested.connect(self._enrich_worker.compute_stats)
        self._details_requested.connect(self._enrich_worker.compute_details)
        self._enrich_thread.finished.connect(self._enrich_worker.deleteLater)

        self._history_thread.start()
        self._enrich_thread.start()

    def reload(self) -> None:
        """Reset the session and load history from the top."""
        self._generation += 1
        self._tip.hide_commit()
        self.session.reset()
        self.extender.reset()
        self._log_group = None
        self._log_items = {}
        self._surface.set_trailing_width(0)
        # The first page counts as the outstanding request
        self.extender.in_flight = True
        self._load_requested.emit(self._generation)

    def shutdown(self) -> None:
        """Stop the worker threads. Call before the view goes away."""
        for thread in (self._history_thread, self._enrich_thread):
            thread.quit()
            thread.wait()

    # --- Worker results ---

    def _on_refs_ready(self, generation: int, refs: dict) -> None:
        if generation != self._generation:
            return
        self.session.merge_refs(refs)

    def _on_page_ready(self, generation: int, records: list, exhausted: bool) -> None:
        if generation != self._generation:
            logger.debug("Dropping page from an earlier session")
            return

        added = self.extender.deliver(records, exhausted)
        self._draw_log(added)

        pairs = [(commit.parents[0], commit.hash) for commit in added if len(commit.parents) == 1]
        if pairs:
            self._stats_requested.emit(pairs)

        self.commits_loaded.emit(len(self.session))
        if self.extender.exhausted:
            self.history_exhausted.emit()
        # Keep going until the viewport is filled
        QTimer.singleShot(0, self._extend_if_at_bottom)

    def _on_history_error(self, generation: int, message: str) -> None:
        if generation != self._generation:
            return
        self.extender.fail(message)
        self.error_occurred.emit(message)

    def _on_stat_ready(self, commit_hash: str, insertions: int, deletions: int) -> None:
        commit = self.session.apply_stat(commit_hash, DiffStat(insertions, deletions))
        if commit is not None and commit_hash in self._log_items:
            self._log_items[commit_hash].setHtml(log_line_html(commit))
            self._update_trailing_width(self._log_items[commit_hash])

    # --- Commit log column ---

    def _draw_log(self, commits: list[Commit]) -> None:
        if self._log_group is None:
            self._log_group = QGraphicsItemGroup()
            self._log_group.setX(self._surface.width() + self.LOG_PADDING)
            self._scene.addItem(self._log_group)

        for commit in commits:
            item = QGraphicsTextItem()
            item.setFont(self._log_font)
            item.document().setDocumentMargin(0)
            item.setHtml(log_line_html(commit))
            item.setParentItem(self._log_group)
            item.setPos(0, commit.y - item.boundingRect().height() / 2)
            self._log_items[commit.hash] = item
            self._update_trailing_width(item)

    def _update_trailing_width(self, item: QGraphicsTextItem) -> None:
        needed = item.boundingRect().width() + 2 * self.LOG_PADDING
        if needed > self._surface.trailing_width:
            self._surface.set_trailing_width(needed)

    def _on_surface_resized(self, width: float, height: float) -> None:
        if self._log_group is not None:
            self._log_group.setX(width + self.LOG_PADDING)

    # --- Interaction ---

    def _on_scrolled(self, value: int) -> None:
        self._extend_if_at_bottom()

    def _extend_if_at_bottom(self) -> None:
        scrollbar = self.verticalScrollBar()
        if at_bottom(scrollbar.value(), scrollbar.maximum(), margin=ROW_HEIGHT):
            self.extender.request()

    def _on_commit_hover(self, commit: Commit) -> None:
        """Show the details tip next to the marker and ask for full details."""
        marker_pos = self.mapFromScene(QPointF(commit.x, commit.y))
        self._tip.move(marker_pos + self.TIP_OFFSET)
        self._tip.show_commit(commit)
        parent_hash = commit.parents[0] if len(commit.parents) == 1 else ""
        self._details_requested.emit(commit.hash, parent_hash)

    def _on_commit_leave(self, commit: Commit) -> None:
        self._tip.hide_commit()

    def find_commit(self, prefix: str) -> Commit | None:
        """Center the view on the commit matching ``prefix`` and return it."""
        commit = self.session.find_commit(prefix)
        if commit is not None:
            self.centerOn(commit.x, commit.y)
        return commit

    def _apply_zoom(self, new_zoom: float) -> None:
        """Apply zoom level, clamped to min/max."""
        new_zoom = max(self.MIN_ZOOM, min(self.MAX_ZOOM, new_zoom))
        if new_zoom != self._zoom:
            factor = new_zoom / self._zoom
            self._zoom = new_zoom
            self.scale(factor, factor)

    def wheelEvent(self, event: QWheelEvent) -> None:  # noqa: N802
        """Handle mouse wheel - Ctrl+wheel zooms, plain wheel scrolls."""
        if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
            delta = event.angleDelta().y()
            if delta > 0:
                self._apply_zoom(self._zoom * 1.1)
            elif delta < 0:
                self._apply_zoom(self._zoom / 1.1)
            event.accept()
        else:
            super().wheelEvent(event)
