"""Ordered store of labeled intervals with identity-scoped undo."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

import pandas as pd

from niceevents.utils.logging import get_logger

logger = get_logger(__name__)

INTERVAL_COLUMNS = ["identity", "start", "end"]


@dataclass(frozen=True)
class Interval:
    """A classified time period for one identity.

    start and end are stored as clicked; start <= end is not enforced.
    """

    identity: str
    start: Any
    end: Any

    def to_dict(self) -> dict[str, Any]:
        return {"identity": self.identity, "start": self.start, "end": self.end}


class IntervalStore:
    """Insertion-ordered sequence of Interval.

    Not partitioned by identity: identity is just a field, and list_all()
    returns the whole history across identities.
    """

    def __init__(self) -> None:
        self._intervals: list[Interval] = []

    def __len__(self) -> int:
        return len(self._intervals)

    def __iter__(self) -> Iterator[Interval]:
        return iter(list(self._intervals))

    def append(self, interval: Interval) -> None:
        self._intervals.append(interval)
        logger.debug("append %s (n=%s)", interval, len(self._intervals))

    def undo_last(self, identity: str) -> Optional[Interval]:
        """Remove the most recently appended interval whose identity matches.

        Args:
            identity: Identity to undo for.

        Returns:
            The removed Interval, or None if no interval has that identity.
        """
        for idx in range(len(self._intervals) - 1, -1, -1):
            if self._intervals[idx].identity == identity:
                removed = self._intervals.pop(idx)
                logger.debug("undo %s at index %s (n=%s)", removed, idx, len(self._intervals))
                return removed
        logger.debug("undo for identity=%s: nothing to remove", identity)
        return None

    def list_all(self) -> list[Interval]:
        """Full sequence in insertion order, unfiltered by identity (a copy)."""
        return list(self._intervals)

    def to_dataframe(self) -> pd.DataFrame:
        """Return list_all() as a DataFrame with columns identity, start, end."""
        if not self._intervals:
            return pd.DataFrame(columns=INTERVAL_COLUMNS)
        return pd.DataFrame([iv.to_dict() for iv in self._intervals], columns=INTERVAL_COLUMNS)
