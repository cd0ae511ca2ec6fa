"""Event classifier app: standalone NiceGUI application for EventClassifierWidget.

Runs in web (default) or native mode via env vars. Uses @ui.page("/") so each
browser tab gets its own SessionController; nothing is shared between tabs.

Run:
    uv run python -m niceevents.classifier_app.classifier_app

Env vars (read once into AppSettings):
    EVENT_CLASSIFIER_GUI_NATIVE: 1/0 (default 0)
    EVENT_CLASSIFIER_GUI_RELOAD: 1/0 (default 0)
    EVENT_CLASSIFIER_CSV: tracks CSV filename in data/ (default: synthetic demo tracks)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
import multiprocessing as mp
from dataclasses import dataclass, replace
from multiprocessing import freeze_support
from typing import Any, Mapping, Optional

from nicegui import ui

from niceevents.event_classifier import (
    ClassifierConfig,
    EventClassifierWidget,
    IdentitySelector,
    SessionController,
    UnknownIdentity,
)
from niceevents.utils import setUpGuiDefaults
from niceevents.utils.logging import configure_logging, get_logger
from niceevents.classifier_app import schema
from niceevents.classifier_app.header import ClassifierHeader

logger = get_logger(__name__)

STORAGE_SECRET = "niceevents-event-classifier-session-secret"

NATIVE_ENV = "EVENT_CLASSIFIER_GUI_NATIVE"
RELOAD_ENV = "EVENT_CLASSIFIER_GUI_RELOAD"
CSV_ENV = "EVENT_CLASSIFIER_CSV"

WEB_PORT = 8080

_FLAG_VALUES = {
    "1": True, "true": True, "yes": True, "on": True,
    "0": False, "false": False, "no": False, "off": False,
}


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = _FLAG_VALUES.get(raw.strip().lower())
    if value is None:
        logger.warning("%s=%r is not a 1/0 flag, using %s", name, raw, default)
        return default
    return value


def _port(env: Mapping[str, str]) -> Optional[int]:
    raw = env.get("PORT")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("PORT=%r is not an int, using the default port", raw)
        return None


@dataclass(frozen=True)
class AppSettings:
    """Launch settings for the classifier app. None means 'pick the default'."""
    native: bool = False
    reload: bool = False
    host: Optional[str] = None
    port: Optional[int] = None
    tracks_csv: Optional[str] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppSettings":
        env = os.environ if env is None else env
        return cls(
            native=_flag(env, NATIVE_ENV, False),
            reload=_flag(env, RELOAD_ENV, False),
            host=env.get("HOST") or None,
            port=_port(env),
            tracks_csv=env.get(CSV_ENV) or None,
        )

    def resolved_host(self) -> str:
        if self.host:
            return self.host
        return "127.0.0.1" if self.native else "0.0.0.0"

    def resolved_port(self) -> int:
        if self.port is not None:
            return self.port
        if self.native:
            from nicegui import native as native_module
            return native_module.find_open_port()
        return WEB_PORT

    def run_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ui.run()."""
        kwargs: dict[str, Any] = {
            "host": self.resolved_host(),
            "port": self.resolved_port(),
            "reload": self.reload,
            "native": self.native,
            "storage_secret": STORAGE_SECRET,
            "title": "Event Classifier",
        }
        if self.native:
            kwargs["window_size"] = (1200, 800)
        return kwargs


def build_session(config: ClassifierConfig, settings: Optional[AppSettings] = None) -> SessionController:
    """Load tracks and create a fresh SessionController for one page visit.

    Re-selects the configured last identity when it still exists in the data.
    """
    settings = settings if settings is not None else AppSettings.from_env()
    data = config.data
    df = schema.load_tracks(
        settings.tracks_csv,
        identity_col=data.identity_col,
        time_col=data.time_col,
    )
    selector = IdentitySelector(
        df,
        identity_col=data.identity_col,
        time_col=data.time_col,
        metric_col=data.metric_col,
    )
    controller = SessionController(selector)
    last = config.get_last_identity()
    if last is not None:
        try:
            controller.select_identity(last)
        except UnknownIdentity:
            logger.info("last identity %s not in data, starting with no selection", last)
    return controller


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header + EventClassifierWidget over the configured tracks."""

    setUpGuiDefaults("text-sm")

    ui.page_title("Event Classifier")

    header = ClassifierHeader().build()

    config = ClassifierConfig.load()

    def _remember_identity(identity: str) -> None:
        config.set_last_identity(identity)
        try:
            config.save()
        except OSError:
            logger.exception("Could not save classifier config")

    with ui.column().classes("w-full gap-4 p-4"):
        try:
            controller = build_session(config)
        except FileNotFoundError as e:
            ui.label(str(e)).classes("text-negative")
            return
        except ValueError as e:
            logger.exception("Failed to load tracks: %s", e)
            ui.label(f"Failed to load tracks: {e}").classes("text-negative")
            return

        header.attach(controller)
        widget = EventClassifierWidget(
            controller,
            plot_height_px=config.get_plot_height_px(),
            interval_color=config.data.interval_color,
            on_identity_change=_remember_identity,
        )
        widget.render()


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the event classifier application.

    Arguments override the corresponding env vars.
    """
    configure_logging()

    settings = AppSettings.from_env()
    if native_bool is not None:
        settings = replace(settings, native=native_bool)
    if reload is not None:
        settings = replace(settings, reload=reload)

    run_kwargs = settings.run_kwargs()
    logger.info(
        "Starting Event Classifier app: host=%s port=%s reload=%s native=%s csv=%s",
        run_kwargs["host"],
        run_kwargs["port"],
        settings.reload,
        settings.native,
        settings.tracks_csv,
    )
    ui.run(**run_kwargs)


if __name__ == "__main__":
    freeze_support()
    current_process = mp.current_process()
    if current_process.name == "MainProcess":
        main()
    else:
        logger.debug("Skipping GUI startup in worker process: %s", current_process.name)
