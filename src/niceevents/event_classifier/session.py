"""Session controller for interactive event classification.

Composes ClickBuffer, IntervalStore and IdentitySelector for a single
operator session. Create one SessionController per page/client; nothing
here is module-level state.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import pandas as pd

from niceevents.event_classifier.click_buffer import ClickBuffer, PendingState
from niceevents.event_classifier.click_parsing import extract_click_x, parse_click_x
from niceevents.event_classifier.errors import NoIdentitySelected
from niceevents.event_classifier.identity_selector import IdentitySelector
from niceevents.event_classifier.interval_store import Interval, IntervalStore
from niceevents.utils.logging import get_logger

logger = get_logger(__name__)

OnSessionChange = Callable[[], None]


class SessionController:
    """Wires click events and commands to the click buffer and interval store.

    **Commands:**

    - **click_at(x)**: feed a click x-position; the second click of a pair appends an Interval.
    - **click_event(args)**: same, from a plotly_click event payload.
    - **reset()**: discard a pending start click.
    - **undo_last()**: remove the latest interval of the active identity.
    - **select_identity(identity)**: change the active identity; pending clicks are kept.

    Every failing command raises before mutating anything. Listeners added
    with add_listener() are called after each command that changed state.
    """

    def __init__(
        self,
        selector: IdentitySelector,
        *,
        store: Optional[IntervalStore] = None,
        buffer: Optional[ClickBuffer] = None,
    ) -> None:
        self.selector = selector
        self.store = store if store is not None else IntervalStore()
        self.buffer = buffer if buffer is not None else ClickBuffer()
        self._listeners: list[OnSessionChange] = []

    # ------------------------------------------------------------------
    # View notification
    # ------------------------------------------------------------------
    def add_listener(self, callback: OnSessionChange) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        for callback in list(self._listeners):
            callback()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def active_identity(self) -> Optional[str]:
        return self.selector.active_identity

    @property
    def pending_state(self) -> PendingState:
        return self.buffer.state

    @property
    def pending_start(self) -> Any:
        return self.buffer.pending_start

    def list_all(self) -> list[Interval]:
        return self.store.list_all()

    def interval_table(self) -> pd.DataFrame:
        """Current interval table (all identities, insertion order)."""
        return self.store.to_dataframe()

    def active_series(self) -> pd.DataFrame:
        return self.selector.active_series()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def click_at(self, x: Any) -> Optional[Interval]:
        """Handle one click on the time-series plot.

        The completed interval is labeled with the identity active when the
        second click arrives, not when the first one did.

        Args:
            x: Click x-position (number, datetime, or string as sent by Plotly).

        Returns:
            The appended Interval if this click completed a pair, else None.

        Raises:
            MalformedClick: x cannot be read as a timestamp.
            NoIdentitySelected: No identity is active.
        """
        timestamp = parse_click_x(x)
        identity = self.selector.active_identity
        if identity is None:
            raise NoIdentitySelected("Select an identity before marking intervals")

        outcome = self.buffer.on_click(timestamp)
        if not outcome.completed:
            logger.info("identity=%s start=%s (waiting for end click)", identity, timestamp)
            self._notify()
            return None

        start, end = outcome.span
        interval = Interval(identity=identity, start=start, end=end)
        self.store.append(interval)
        logger.info("appended interval %s (total %s)", interval, len(self.store))
        self._notify()
        return interval

    def click_event(self, args: Any) -> Optional[Interval]:
        """Handle a plotly_click payload ({"points": [{"x": ...}, ...]})."""
        return self.click_at(extract_click_x(args))

    def reset(self) -> None:
        """Discard the pending start click, if any. Stored intervals are untouched."""
        if self.buffer.reset():
            logger.info("pending selection reset")
            self._notify()

    def undo_last(self) -> Optional[Interval]:
        """Remove the most recent interval of the active identity.

        Returns:
            The removed Interval, or None when there was nothing to undo
            (including when no identity is selected).
        """
        identity = self.selector.active_identity
        if identity is None:
            return None
        removed = self.store.undo_last(identity)
        if removed is not None:
            logger.info("undo removed %s (total %s)", removed, len(self.store))
            self._notify()
        return removed

    def select_identity(self, identity: str) -> None:
        """Change the active identity. Does not reset a pending start click.

        Raises:
            UnknownIdentity: identity is not in the tracks data.
        """
        previous = self.selector.active_identity
        self.selector.select(identity)
        current = self.selector.active_identity
        if current == previous:
            return
        if self.buffer.state is PendingState.START_SET:
            logger.warning(
                "identity changed %s -> %s with a pending start=%s; the next click labels it %s",
                previous,
                current,
                self.buffer.pending_start,
                current,
            )
        self._notify()
