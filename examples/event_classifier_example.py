from nicegui import ui

from niceevents.classifier_app.schema import make_demo_tracks
from niceevents.event_classifier import EventClassifierWidget, IdentitySelector, SessionController
from niceevents.utils.logging import configure_logging

configure_logging(level="DEBUG")


@ui.page("/")
def index() -> None:
    # one controller per page visit: each tab classifies independently
    df = make_demo_tracks(("bird-1", "bird-2"), n_points=120)
    controller = SessionController(IdentitySelector(df))
    controller.select_identity("bird-1")

    with ui.header().classes("py-2 px-4"):
        ui.label("EventClassifierWidget demo")

    EventClassifierWidget(controller, plot_height_px=350).render()

    def print_table() -> None:
        print(controller.interval_table())

    ui.button("Print intervals", on_click=print_table)


ui.run()
