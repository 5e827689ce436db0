"""Lane assignment for the commit graph."""

from gitlanes.graph.types import Commit


class LaneAllocator:
    """Assigns each commit a column from a shared, reusable lane pool.

    Each lane holds either ``None`` (vacant) or the hash of a parent that a
    placed child is waiting for. Commits must be placed in arrival order,
    newest first; the pool carries over between batches so later pages
    continue the lines of earlier ones.
    """

    def __init__(self) -> None:
        self.lanes: list[str | None] = []
        self.next_row = 0

    def place(self, commit: Commit) -> None:
        """Assign lane and row to ``commit``. Placed commits are left alone."""
        if commit.placed:
            return

        commit.lane = self._claim(commit.hash)
        commit.row = self.next_row
        self.next_row += 1

        for parent_hash in commit.parents:
            self._reserve(parent_hash)

    def _claim(self, commit_hash: str) -> int:
        claimed: int | None = None
        for lane, occupant in enumerate(self.lanes):
            if occupant == commit_hash:
                # Several children may have reserved this commit; all of
                # their lanes converge here.
                self.lanes[lane] = None
                if claimed is None:
                    claimed = lane
        if claimed is not None:
            return claimed
        return self._vacant_lane()

    def _reserve(self, parent_hash: str) -> None:
        for lane, occupant in enumerate(self.lanes):
            if occupant == parent_hash:
                return
        self.lanes[self._vacant_lane()] = parent_hash

    def _vacant_lane(self) -> int:
        for lane, occupant in enumerate(self.lanes):
            if occupant is None:
                return lane
        self.lanes.append(None)
        return len(self.lanes) - 1

    def pending(self) -> list[str]:
        """Parent hashes still awaited, in lane order."""
        return [occupant for occupant in self.lanes if occupant is not None]

    def width(self) -> int:
        return len(self.lanes)

    def reset(self) -> None:
        self.lanes = []
        self.next_row = 0
