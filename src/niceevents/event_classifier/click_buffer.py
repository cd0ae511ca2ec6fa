"""Two-slot pending-click state machine.

A first click sets a pending start; the second click completes a
(start, end) pair and empties the slot. The transition itself is the pure
function ``advance``; ClickBuffer only holds the current PendingSelection.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from niceevents.utils.logging import get_logger

logger = get_logger(__name__)


class PendingState(Enum):
    """States of the pending selection."""
    EMPTY = "empty"
    START_SET = "start_set"


@dataclass(frozen=True)
class PendingSelection:
    """At most one buffered click awaiting pairing."""

    state: PendingState = PendingState.EMPTY
    start: Any = None

    @classmethod
    def empty(cls) -> "PendingSelection":
        return cls()

    @classmethod
    def started(cls, start: Any) -> "PendingSelection":
        return cls(state=PendingState.START_SET, start=start)

    @property
    def is_empty(self) -> bool:
        return self.state is PendingState.EMPTY


@dataclass(frozen=True)
class ClickOutcome:
    """Result of one click: either still pending, or a completed (start, end) span."""

    pending_start: Any = None
    span: Optional[tuple[Any, Any]] = None

    @property
    def completed(self) -> bool:
        return self.span is not None


def advance(
    pending: PendingSelection, timestamp: Any
) -> tuple[PendingSelection, Optional[tuple[Any, Any]]]:
    """Pure transition: (current pending, click timestamp) -> (next pending, completed span or None)."""
    if pending.is_empty:
        return PendingSelection.started(timestamp), None
    return PendingSelection.empty(), (pending.start, timestamp)


class ClickBuffer:
    """Pairs consecutive clicks into candidate intervals.

    Clicks must be fed in arrival order, one at a time.
    """

    def __init__(self) -> None:
        self._pending = PendingSelection.empty()

    @property
    def pending(self) -> PendingSelection:
        return self._pending

    @property
    def state(self) -> PendingState:
        return self._pending.state

    @property
    def pending_start(self) -> Any:
        return self._pending.start

    def on_click(self, timestamp: Any) -> ClickOutcome:
        """Feed one click timestamp.

        Returns:
            ClickOutcome with pending_start set if this was the first click,
            or with span=(start, end) if it completed a pair.
        """
        self._pending, span = advance(self._pending, timestamp)
        if span is None:
            logger.debug("pending start=%s", timestamp)
            return ClickOutcome(pending_start=timestamp)
        logger.debug("pair completed start=%s end=%s", span[0], span[1])
        return ClickOutcome(span=span)

    def reset(self) -> bool:
        """Discard a pending start. Returns True if something was discarded."""
        if self._pending.is_empty:
            return False
        logger.debug("discarding pending start=%s", self._pending.start)
        self._pending = PendingSelection.empty()
        return True
