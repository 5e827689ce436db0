#!/usr/bin/env python3
"""
Gitlanes - commit history graph viewer
"""

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from gitlanes.config.settings import Settings
from gitlanes.ui.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="gitlanes",
        description="Gitlanes - browse a git history as a lane graph",
    )
    parser.add_argument(
        "repo",
        nargs="?",
        default=None,
        help="Repository to show (default: the one containing the current directory)",
    )
    parser.add_argument("-b", "--branch", help="Start from this branch instead of HEAD")
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        dest="all_refs",
        help="Show history reachable from every reference",
    )
    parser.add_argument(
        "-P",
        "--page-size",
        type=int,
        help="Commits fetched per page",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser.parse_args(argv)


def apply_args(settings: Settings, args: argparse.Namespace) -> None:
    """Override settings with command line flags (not saved)"""
    if args.branch:
        settings.set("history.branch", args.branch)
    if args.all_refs:
        settings.set("history.all", True)
    if args.page_size is not None:
        settings.set("history.page_size", args.page_size)
    if args.verbose:
        settings.set("logging.level", "DEBUG")


def main() -> None:
    args = parse_args()

    settings = Settings()
    apply_args(settings, args)
    logging.basicConfig(
        level=settings.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Gitlanes")
    app.setOrganizationName("Gitlanes")

    try:
        window = MainWindow(settings, args.repo)
    except ValueError as e:
        logger.error("%s", e)
        QMessageBox.critical(None, "Git Repository Required", str(e))
        sys.exit(1)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
