"""Git backend for reading repository history"""

from gitlanes.git_backend.repository import CommitMeta, EditStamp, GraphRepository, HistoryPager

__all__ = ["CommitMeta", "EditStamp", "GraphRepository", "HistoryPager"]
