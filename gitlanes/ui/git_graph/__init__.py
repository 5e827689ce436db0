"""Git graph visualization components."""

from gitlanes.ui.git_graph.widget import GitGraphView

__all__ = ["GitGraphView"]
