"""Floating details tip shown while hovering a commit marker."""

import html
from datetime import datetime
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from gitlanes.graph.types import Commit


class CommitDetailsTip(QFrame):
    """Hash, message and diff summary of the hovered commit."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.commit_hash: str | None = None

        self.setStyleSheet("""
            CommitDetailsTip {
                background: #ffff7f;
                border: 2px solid blue;
            }
        """)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)
        layout.setSpacing(2)

        self._hash_label = QLabel()
        self._hash_label.setFont(QFont("monospace", 9))
        layout.addWidget(self._hash_label)

        self._message_label = QLabel()
        self._message_label.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(self._message_label)

        self._diff_label = QLabel()
        self._diff_label.setTextFormat(Qt.TextFormat.RichText)
        layout.addWidget(self._diff_label)

        self.hide()

    def show_commit(self, commit: Commit) -> None:
        """Fill in what is already known; details arrive via show_details()."""
        self.commit_hash = commit.hash
        self._hash_label.setText(commit.hash)
        self._message_label.setText(html.escape(commit.message))
        if commit.stat is not None:
            self._diff_label.setText(
                f'<span style="color:green">+{commit.stat.insertions}</span> '
                f'<span style="color:red">-{commit.stat.deletions}</span>'
            )
        else:
            self._diff_label.setText("")
        self.adjustSize()
        self.show()
        self.raise_()

    def show_details(self, commit_hash: str, meta: dict[str, Any], stats_text: str) -> None:
        """Replace the summary with the full details, if still hovering that commit."""
        if commit_hash != self.commit_hash or not self.isVisible():
            return

        author = meta.get("author") or {}
        date = datetime.fromtimestamp(author.get("date", 0)).strftime("%Y-%m-%d %H:%M:%S")
        self._message_label.setText(
            f"<b>{html.escape(author.get('name') or '')}</b> "
            f"&lt;{html.escape(author.get('email') or '')}&gt; {date}"
            f"<pre>{html.escape(meta.get('message', ''))}</pre>"
        )
        if stats_text:
            self._diff_label.setText(f"<pre>{html.escape(stats_text)}</pre>")
        self.adjustSize()

    def hide_commit(self) -> None:
        self.commit_hash = None
        self.hide()
