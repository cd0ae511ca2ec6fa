"""Header for the event classifier app: title, live session summary, theme toggle."""

from __future__ import annotations

from typing import Optional

from nicegui import app, ui

from niceevents.event_classifier.session import SessionController

THEME_STORAGE_KEY = "event_classifier_dark_mode"


def session_summary_text(controller: SessionController) -> str:
    """e.g. '3 intervals (R2: 1)' or '0 intervals' when nothing is selected."""
    intervals = controller.list_all()
    total = f"{len(intervals)} interval{'s' if len(intervals) != 1 else ''}"
    identity = controller.active_identity
    if identity is None:
        return total
    mine = sum(1 for iv in intervals if iv.identity == identity)
    return f"{total} ({identity}: {mine})"


class ClassifierHeader:
    """Page header. Build it first, attach() the session once it exists."""

    def __init__(self, *, title: str = "Event Classifier") -> None:
        self.title = title
        self.dark_mode: Optional[ui.dark_mode] = None
        self._summary_label: Optional[ui.label] = None
        self._theme_btn: Optional[ui.button] = None

    def build(self) -> "ClassifierHeader":
        self.dark_mode = ui.dark_mode()
        self.dark_mode.value = app.storage.user.get(THEME_STORAGE_KEY, False)

        with ui.header().classes("items-center justify-between").props("dense").style(
            "min-height: 36px; height: 36px; padding: 0 8px;"
        ):
            with ui.row().classes("items-center gap-4"):
                ui.label(self.title).classes("!text-lg font-bold italic text-white")
                self._summary_label = ui.label("").classes("text-white")

            self._theme_btn = ui.button(
                icon=self._theme_icon(),
                on_click=self._toggle_theme,
            ).props("flat round dense text-color=white").tooltip("Toggle dark / light mode")
        return self

    def attach(self, controller: SessionController) -> None:
        """Show controller's interval counts and keep them current."""

        def _update() -> None:
            if self._summary_label is not None:
                self._summary_label.text = session_summary_text(controller)

        controller.add_listener(_update)
        _update()

    def _theme_icon(self) -> str:
        return "light_mode" if self.dark_mode is not None and self.dark_mode.value else "dark_mode"

    def _toggle_theme(self) -> None:
        if self.dark_mode is None:
            return
        self.dark_mode.value = not self.dark_mode.value
        app.storage.user[THEME_STORAGE_KEY] = self.dark_mode.value
        if self._theme_btn is not None:
            self._theme_btn.props(f"icon={self._theme_icon()}")
