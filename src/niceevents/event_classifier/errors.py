"""Exceptions raised by the event classifier core.

Every command that raises one of these leaves the session untouched.
"""

from __future__ import annotations


class EventClassifierError(Exception):
    """Base class for rejected classifier commands."""


class MalformedClick(EventClassifierError, ValueError):
    """Click x-position is missing, non-finite, or cannot be read as a timestamp."""


class NoIdentitySelected(EventClassifierError):
    """A click arrived before any identity was selected."""


class UnknownIdentity(EventClassifierError, ValueError):
    """Requested identity is not present in the tracks data."""
