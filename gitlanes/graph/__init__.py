"""Headless commit graph layout: lanes, edges, halos and ref labels."""

from gitlanes.graph.extender import SessionExtender
from gitlanes.graph.session import GraphSession
from gitlanes.graph.store import CommitStore
from gitlanes.graph.types import Commit, DiffStat

__all__ = ["Commit", "CommitStore", "DiffStat", "GraphSession", "SessionExtender"]
