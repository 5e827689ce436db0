"""Types for the commit graph layout."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from gitlanes.constants import COLUMN_OFFSET, COLUMN_WIDTH, ROW_HEIGHT, ROW_OFFSET


@dataclass(frozen=True)
class DiffStat:
    """Line counts of a commit's change against its first parent."""

    insertions: int
    deletions: int


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass
class Commit:
    """A commit as known to the graph, with its layout position once placed."""

    hash: str
    parents: list[str]
    message: str = ""
    stat: DiffStat | None = None
    refs: list[str] = field(default_factory=list)
    lane: int | None = None
    row: int | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Commit":
        """Build a commit from a history record ``{hash, parents, message}``."""
        return cls(
            hash=record["hash"],
            parents=list(record.get("parents") or []),
            message=record.get("message", ""),
        )

    @property
    def placed(self) -> bool:
        return self.lane is not None and self.row is not None

    @property
    def x(self) -> float:
        """Horizontal center of the commit's lane."""
        assert self.lane is not None, f"Commit {self.hash} has no lane yet"
        return lane_x(self.lane)

    @property
    def y(self) -> float:
        """Vertical center of the commit's row."""
        assert self.row is not None, f"Commit {self.hash} has no row yet"
        return row_y(self.row)


@dataclass(frozen=True)
class Edge:
    """A drawn child -> parent connection."""

    child: str
    parent: str
    color: str
    points: tuple[Point, ...]


def lane_x(lane: int) -> float:
    return lane * COLUMN_WIDTH + COLUMN_OFFSET


def row_y(row: int) -> float:
    return row * ROW_HEIGHT + ROW_OFFSET
