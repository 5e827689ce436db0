"""
Main window for Gitlanes
"""

from pathlib import Path
from typing import Any

from PySide6.QtWidgets import QInputDialog, QMainWindow, QMessageBox, QStatusBar

from gitlanes.config.settings import Settings
from gitlanes.git_backend.repository import GraphRepository
from gitlanes.ui.git_graph import GitGraphView


class MainWindow(QMainWindow):
    """Main application window: one commit graph of one repository"""

    def __init__(self, settings: Settings, repo_path: str | None = None) -> None:
        super().__init__()
        self.settings = settings
        self.resize(*settings.get_window_size())

        # Fails early with ValueError when there is no repository
        repo = GraphRepository(repo_path)
        workdir = repo.repo.workdir or repo.repo.path
        self.setWindowTitle(f"Gitlanes — {Path(workdir).name}")

        self.graph_view = GitGraphView(workdir, settings, self)
        self.graph_view.commits_loaded.connect(self._on_commits_loaded)
        self.graph_view.history_exhausted.connect(self._on_history_exhausted)
        self.graph_view.error_occurred.connect(self._on_error)
        self.setCentralWidget(self.graph_view)

        self.setStatusBar(QStatusBar())
        self.statusBar().showMessage("Loading history...")

        self._setup_menus()

    def _setup_menus(self) -> None:
        """Setup menu bar"""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction("E&xit", self.close).setShortcut("Ctrl+Q")

        view_menu = menubar.addMenu("&View")
        view_menu.addAction("&Reload", self._reload).setShortcut("F5")
        view_menu.addAction("&Find Commit...", self._find_commit).setShortcut("Ctrl+F")

    def _reload(self) -> None:
        self.statusBar().showMessage("Reloading history...")
        self.graph_view.reload()

    def _find_commit(self) -> None:
        prefix, ok = QInputDialog.getText(self, "Find Commit", "Hash prefix:")
        if not ok or not prefix.strip():
            return
        try:
            commit = self.graph_view.find_commit(prefix.strip())
        except ValueError as e:
            QMessageBox.warning(self, "Find Commit", str(e))
            return
        if commit is None:
            self.statusBar().showMessage(f"No loaded commit matches {prefix.strip()}")

    def _on_commits_loaded(self, count: int) -> None:
        self.statusBar().showMessage(f"{count} commits")

    def _on_history_exhausted(self) -> None:
        self.statusBar().showMessage(f"{len(self.graph_view.session)} commits (complete)")

    def _on_error(self, message: str) -> None:
        self.statusBar().showMessage(f"Error: {message}")

    def closeEvent(self, event: Any) -> None:  # noqa: N802
        """Handle window close - stop the background workers"""
        self.graph_view.shutdown()
        super().closeEvent(event)
