"""Interactive event classification: click pairs on a time series become labeled intervals."""

from niceevents.event_classifier.classifier_config import ClassifierConfig, ClassifierConfigData
from niceevents.event_classifier.classifier_widget import EventClassifierWidget
from niceevents.event_classifier.click_buffer import ClickBuffer, ClickOutcome, PendingSelection, PendingState
from niceevents.event_classifier.errors import (
    EventClassifierError,
    MalformedClick,
    NoIdentitySelected,
    UnknownIdentity,
)
from niceevents.event_classifier.identity_selector import IdentitySelector
from niceevents.event_classifier.interval_store import Interval, IntervalStore
from niceevents.event_classifier.session import SessionController

__all__ = [
    "ClassifierConfig",
    "ClassifierConfigData",
    "ClickBuffer",
    "ClickOutcome",
    "EventClassifierError",
    "EventClassifierWidget",
    "IdentitySelector",
    "Interval",
    "IntervalStore",
    "MalformedClick",
    "NoIdentitySelected",
    "PendingSelection",
    "PendingState",
    "SessionController",
    "UnknownIdentity",
]
