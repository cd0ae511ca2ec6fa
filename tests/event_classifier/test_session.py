"""Behavioral tests for SessionController: scenarios, properties and atomic failures."""

import pandas as pd
import pytest

from niceevents.event_classifier.click_buffer import PendingState
from niceevents.event_classifier.errors import MalformedClick, NoIdentitySelected, UnknownIdentity
from niceevents.event_classifier.identity_selector import IdentitySelector
from niceevents.event_classifier.interval_store import Interval
from niceevents.event_classifier.session import SessionController


@pytest.fixture
def controller(tracks_df) -> SessionController:
    return SessionController(IdentitySelector(tracks_df))


@pytest.fixture
def r3_controller(controller) -> SessionController:
    controller.select_identity("R3")
    return controller


def test_scenario_a_two_clicks_make_one_interval(r3_controller):
    assert r3_controller.click_at(10) is None
    assert r3_controller.pending_state is PendingState.START_SET
    assert r3_controller.pending_start == 10
    assert r3_controller.list_all() == []

    interval = r3_controller.click_at(20)
    assert interval == Interval("R3", 10, 20)
    assert r3_controller.list_all() == [Interval("R3", 10, 20)]
    assert r3_controller.pending_state is PendingState.EMPTY


def test_scenario_b_undo_removes_it(r3_controller):
    r3_controller.click_at(10)
    r3_controller.click_at(20)
    assert r3_controller.undo_last() == Interval("R3", 10, 20)
    assert r3_controller.list_all() == []


def test_scenario_c_reset_discards_pending_start(r3_controller):
    r3_controller.click_at(5)
    r3_controller.reset()
    assert r3_controller.pending_state is PendingState.EMPTY
    r3_controller.click_at(7)
    assert r3_controller.pending_start == 7
    assert r3_controller.list_all() == []


def test_scenario_d_identity_bound_at_completion(r3_controller):
    """Switching identity mid-selection labels the interval with the new identity."""
    r3_controller.click_at(1)
    r3_controller.select_identity("R4")
    assert r3_controller.pending_start == 1
    r3_controller.click_at(2)
    assert r3_controller.list_all() == [Interval("R4", 1, 2)]


def test_n_clicks_make_floor_half_intervals_in_order(r3_controller):
    for x in range(7):
        r3_controller.click_at(x)
    assert r3_controller.list_all() == [Interval("R3", 0, 1), Interval("R3", 2, 3), Interval("R3", 4, 5)]
    assert r3_controller.pending_start == 6


def test_reset_idempotent_when_empty(r3_controller):
    r3_controller.click_at(1)
    r3_controller.click_at(2)
    before = r3_controller.list_all()
    r3_controller.reset()
    r3_controller.reset()
    assert r3_controller.pending_state is PendingState.EMPTY
    assert r3_controller.list_all() == before


def test_undo_is_scoped_to_active_identity(controller):
    controller.select_identity("R3")
    controller.click_at(1)
    controller.click_at(2)
    controller.select_identity("R4")
    controller.click_at(3)
    controller.click_at(4)
    controller.select_identity("R3")
    controller.click_at(5)
    controller.click_at(6)

    controller.select_identity("R4")
    assert controller.undo_last() == Interval("R4", 3, 4)
    assert controller.list_all() == [Interval("R3", 1, 2), Interval("R3", 5, 6)]
    assert controller.undo_last() is None


def test_undo_without_identity_is_noop(controller):
    assert controller.undo_last() is None


def test_listing_shows_all_identities(controller):
    controller.select_identity("R3")
    controller.click_at(1)
    controller.click_at(2)
    controller.select_identity("R4")
    table = controller.interval_table()
    assert table["identity"].tolist() == ["R3"]
    assert len(controller.active_series()) == 3


def test_reversed_clicks_are_kept(r3_controller):
    r3_controller.click_at(20)
    assert r3_controller.click_at(10) == Interval("R3", 20, 10)


@pytest.mark.parametrize("bad_x", [None, "nope", float("nan"), float("inf"), True, 10 ** 400])
def test_malformed_click_changes_nothing(r3_controller, bad_x):
    r3_controller.click_at(1)
    with pytest.raises(MalformedClick):
        r3_controller.click_at(bad_x)
    assert r3_controller.pending_start == 1
    assert r3_controller.list_all() == []
    r3_controller.click_at(2)
    assert r3_controller.list_all() == [Interval("R3", 1, 2)]


def test_click_without_identity_raises_and_changes_nothing(controller):
    with pytest.raises(NoIdentitySelected):
        controller.click_at(10)
    assert controller.pending_state is PendingState.EMPTY
    assert controller.list_all() == []


def test_malformed_takes_precedence_over_missing_identity(controller):
    with pytest.raises(MalformedClick):
        controller.click_at("garbage")


def test_select_unknown_identity_changes_nothing(r3_controller):
    r3_controller.click_at(1)
    with pytest.raises(UnknownIdentity):
        r3_controller.select_identity("R9")
    assert r3_controller.active_identity == "R3"
    assert r3_controller.pending_start == 1


def test_click_event_payload(r3_controller):
    r3_controller.click_event({"points": [{"x": 10, "y": 0.3}]})
    interval = r3_controller.click_event({"points": [{"x": 20, "y": 0.1}]})
    assert interval == Interval("R3", 10, 20)


def test_click_event_without_points_is_malformed(r3_controller):
    with pytest.raises(MalformedClick):
        r3_controller.click_event({"points": []})
    assert r3_controller.pending_state is PendingState.EMPTY


def test_datetime_clicks(datetime_tracks_df):
    controller = SessionController(IdentitySelector(datetime_tracks_df))
    controller.select_identity("R1")
    controller.click_at("2024-05-01 00:05:00")
    interval = controller.click_at("2024-05-01 00:10:00")
    assert interval.start == pd.Timestamp("2024-05-01 00:05:00")
    assert interval.end == pd.Timestamp("2024-05-01 00:10:00")


def test_listeners_called_on_state_changes(r3_controller):
    calls = []
    r3_controller.add_listener(lambda: calls.append(len(r3_controller.list_all())))

    r3_controller.click_at(1)   # pending
    r3_controller.click_at(2)   # append
    r3_controller.undo_last()   # removed
    r3_controller.undo_last()   # nothing to undo
    r3_controller.reset()       # nothing pending
    assert calls == [0, 1, 0]


def test_listeners_not_called_on_failure(controller):
    calls = []
    controller.add_listener(lambda: calls.append(True))
    with pytest.raises(NoIdentitySelected):
        controller.click_at(1)
    with pytest.raises(UnknownIdentity):
        controller.select_identity("nobody")
    assert calls == []


def test_sessions_are_independent(tracks_df):
    a = SessionController(IdentitySelector(tracks_df))
    b = SessionController(IdentitySelector(tracks_df))
    a.select_identity("R3")
    b.select_identity("R4")
    a.click_at(1)
    a.click_at(2)
    assert b.list_all() == []
    assert b.pending_state is PendingState.EMPTY


def test_reselecting_same_identity_does_not_notify(r3_controller):
    calls = []
    r3_controller.add_listener(lambda: calls.append(True))
    r3_controller.select_identity("R3")
    assert calls == []
    r3_controller.select_identity("R4")
    assert calls == [True]
