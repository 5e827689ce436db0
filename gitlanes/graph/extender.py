"""Session extension - fetch more history when the view reaches the bottom."""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from gitlanes.graph.session import GraphSession
from gitlanes.graph.types import Commit

logger = logging.getLogger(__name__)


class SessionExtender:
    """
    Gatekeeper for "fetch more" requests.

    At most one request is outstanding at a time. ``fetch`` starts the
    request and returns immediately; the caller reports the outcome through
    deliver() or fail(). There is no timeout: a request that never completes
    blocks further extension until the session is reset.
    """

    def __init__(self, session: GraphSession, fetch: Callable[[], None]) -> None:
        self.session = session
        self.fetch = fetch
        self.in_flight = False
        self.exhausted = False

    def can_extend(self) -> bool:
        return not self.in_flight and not self.exhausted and bool(self.session.pending())

    def request(self) -> bool:
        """Start a fetch if none is outstanding. Returns True if one was started."""
        if not self.can_extend():
            return False
        self.in_flight = True
        logger.info("Fetching more history, awaiting %s", self.session.pending()[0])
        self.fetch()
        return True

    def deliver(self, batch: Iterable[Commit | Mapping[str, Any]], exhausted: bool = False) -> list[Commit]:
        """Append a fetched page, skipping commits the session already holds."""
        records = list(batch)
        fresh = [record for record in records if self._hash_of(record) not in self.session.store]
        if len(fresh) != len(records):
            logger.debug("Skipped %d already known commits", len(records) - len(fresh))

        added = self.session.append(fresh)
        self.exhausted = exhausted or not records
        self.in_flight = False
        logger.info("Fetched %d commits, %d pending lanes", len(added), len(self.session.pending()))
        return added

    def fail(self, error: str) -> None:
        """Record a failed fetch. Extension stays blocked; nothing retries."""
        logger.error("History fetch failed: %s", error)

    def reset(self) -> None:
        self.in_flight = False
        self.exhausted = False

    @staticmethod
    def _hash_of(record: Commit | Mapping[str, Any]) -> str:
        if isinstance(record, Commit):
            return record.hash
        return str(record["hash"])


def at_bottom(value: int, maximum: int, margin: int = 0) -> bool:
    """True when a scroll position has reached the end of its range."""
    return value >= maximum - margin
