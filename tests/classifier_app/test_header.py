"""Tests for the classifier app header summary."""

from __future__ import annotations

from types import SimpleNamespace

from niceevents.classifier_app.header import ClassifierHeader, session_summary_text
from niceevents.classifier_app.schema import make_demo_tracks
from niceevents.event_classifier import IdentitySelector, SessionController


def _controller() -> SessionController:
    df = make_demo_tracks(("R1", "R2"), n_points=20)
    return SessionController(IdentitySelector(df))


def test_summary_without_identity():
    controller = _controller()
    assert session_summary_text(controller) == "0 intervals"


def test_summary_counts_active_identity():
    controller = _controller()
    controller.select_identity("R1")
    controller.click_at(1)
    controller.click_at(2)
    assert session_summary_text(controller) == "1 interval (R1: 1)"

    controller.select_identity("R2")
    controller.click_at(3)
    controller.click_at(4)
    controller.click_at(5)
    controller.click_at(6)
    assert session_summary_text(controller) == "3 intervals (R2: 2)"


def test_attach_keeps_label_current():
    controller = _controller()
    hdr = ClassifierHeader()
    hdr._summary_label = SimpleNamespace(text="")  # stands in for the rendered ui.label
    hdr.attach(controller)
    assert hdr._summary_label.text == "0 intervals"

    controller.select_identity("R2")
    assert hdr._summary_label.text == "0 intervals (R2: 0)"
    controller.click_at(1)
    controller.click_at(2)
    assert hdr._summary_label.text == "1 interval (R2: 1)"
