"""NiceGUI view for a SessionController.

Identity select, Plotly time series (click start, click end), Reset/Undo
buttons, pending status label and an AG Grid table of all intervals.
Uses Plotly dicts only for ui.plotly (never go.Figure).
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from nicegui import ui
from nicegui.events import GenericEventArguments

from niceevents.event_classifier.click_buffer import PendingState
from niceevents.event_classifier.errors import EventClassifierError
from niceevents.event_classifier.figure import INTERVAL_FILL_COLOR, make_series_figure
from niceevents.event_classifier.interval_store import Interval
from niceevents.event_classifier.session import SessionController
from niceevents.utils.logging import get_logger

logger = get_logger(__name__)

OnIdentityChange = Callable[[str], None]


def _format_ts(v: Any) -> str:
    isoformat = getattr(v, "isoformat", None)
    if callable(isoformat):
        return isoformat()
    return str(v)


def interval_rows(intervals: list[Interval]) -> list[dict[str, Any]]:
    """AG Grid rowData for the interval table (insertion order, 1-based row number)."""
    return [
        {"n": i + 1, "identity": iv.identity, "start": _format_ts(iv.start), "end": _format_ts(iv.end)}
        for i, iv in enumerate(intervals)
    ]


def pending_status_text(controller: SessionController) -> str:
    if controller.active_identity is None:
        return "Select an identity"
    if controller.pending_state is PendingState.START_SET:
        return f"{controller.active_identity}: start={_format_ts(controller.pending_start)}, click end"
    return f"{controller.active_identity}: click start"


class EventClassifierWidget:
    """Reusable event classification widget.

    The widget owns no classification state; every user action is forwarded
    to the SessionController, and the view re-renders from it whenever the
    controller reports a change.
    """

    def __init__(
        self,
        controller: SessionController,
        *,
        plot_height_px: int = 400,
        interval_color: str = INTERVAL_FILL_COLOR,
        on_identity_change: Optional[OnIdentityChange] = None,
    ) -> None:
        self.controller = controller
        self._plot_height_px = plot_height_px
        self._interval_color = interval_color
        self._on_identity_change = on_identity_change

        self._identity_select: Optional[ui.select] = None
        self._status_label: Optional[ui.label] = None
        self._count_label: Optional[ui.label] = None
        self._plot: Optional[ui.plotly] = None
        self._grid: Optional[ui.aggrid] = None

        controller.add_listener(self.refresh)

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------
    def render(self) -> None:
        """Create the widget UI inside the current container."""
        selector = self.controller.selector

        with ui.row().classes("w-full gap-4 items-center"):
            self._identity_select = ui.select(
                selector.identities(),
                value=self.controller.active_identity,
                label="Identity",
                on_change=self._on_identity_select,
            ).classes("w-48")
            ui.button("Reset", on_click=self._on_reset_click).tooltip("Discard the pending start click (Esc)")
            ui.button("Undo", on_click=self._on_undo_click).tooltip("Remove the last interval of this identity")
            self._status_label = ui.label(pending_status_text(self.controller))

        self._plot = ui.plotly(self._make_figure_dict()).classes("w-full").style(
            f"height: {self._plot_height_px}px"
        )
        self._plot.on("plotly_click", self._on_plotly_click)

        self._count_label = ui.label(self._count_text())
        self._grid = ui.aggrid({
            "columnDefs": [
                {"headerName": "#", "field": "n", "width": 70},
                {"headerName": "Identity", "field": "identity"},
                {"headerName": "Start", "field": "start"},
                {"headerName": "End", "field": "end"},
            ],
            "rowData": interval_rows(self.controller.list_all()),
        }).classes("w-full h-64")

        ui.keyboard(on_key=self._on_keyboard_key)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------
    def _count_text(self) -> str:
        n = len(self.controller.store)
        return f"{n} interval{'s' if n != 1 else ''}"

    def _make_figure_dict(self) -> dict:
        selector = self.controller.selector
        return make_series_figure(
            self.controller.active_series(),
            time_col=selector.time_col,
            metric_col=selector.metric_col,
            identity=self.controller.active_identity,
            intervals=self.controller.list_all(),
            pending_start=self.controller.pending_start,
            interval_color=self._interval_color,
        )

    def refresh(self) -> None:
        """Re-render plot, status and table from the controller (no-op before render())."""
        if self._status_label is not None:
            self._status_label.text = pending_status_text(self.controller)
        if self._count_label is not None:
            self._count_label.text = self._count_text()
        if self._plot is not None:
            self._plot.update_figure(self._make_figure_dict())
        if self._grid is not None:
            self._grid.options["rowData"] = interval_rows(self.controller.list_all())
            self._grid.update()

    # ------------------------------------------------------------------
    # Event handlers (UI boundary: classifier errors become notifications)
    # ------------------------------------------------------------------
    def _run(self, command: Callable[..., Any], *args: Any) -> Any:
        try:
            return command(*args)
        except EventClassifierError as e:
            logger.warning("%s rejected: %s", getattr(command, "__name__", command), e)
            ui.notify(str(e), type="warning")
            return None

    def _on_plotly_click(self, e: GenericEventArguments) -> None:
        interval = self._run(self.controller.click_event, e.args)
        if interval is not None:
            ui.notify(f"Added {interval.identity}: {_format_ts(interval.start)} to {_format_ts(interval.end)}")

    def _on_reset_click(self) -> None:
        self._run(self.controller.reset)

    def _on_undo_click(self) -> None:
        removed = self._run(self.controller.undo_last)
        if removed is None and self.controller.active_identity is not None:
            ui.notify(f"Nothing to undo for {self.controller.active_identity}")

    def _on_identity_select(self, e: Any) -> None:
        identity = getattr(e, "value", None)
        if identity is None or identity == self.controller.active_identity:
            return
        self._run(self.controller.select_identity, identity)
        if self.controller.active_identity != identity:
            # rejected: show the identity the controller kept
            if self._identity_select is not None:
                self._identity_select.value = self.controller.active_identity
            return
        if self._on_identity_change is not None:
            self._on_identity_change(identity)

    def _on_keyboard_key(self, e: Any) -> None:
        key_name = getattr(getattr(e, "key", None), "name", None) if e else None
        action = getattr(e, "action", None)
        if key_name == "Escape" and action is not None and getattr(action, "keydown", False):
            self._run(self.controller.reset)
