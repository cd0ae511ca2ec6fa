"""Turn raw click x-positions and Plotly click payloads into timestamps."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any

import numpy as np
import pandas as pd

from niceevents.event_classifier.errors import MalformedClick


def _finite_float(value: float, raw: Any) -> float:
    if not math.isfinite(value):
        raise MalformedClick(f"Click x is not finite: {raw!r}")
    return value


def _timestamp(value: Any, raw: Any) -> pd.Timestamp:
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError, OverflowError) as e:
        # pd.errors.OutOfBoundsDatetime is a ValueError
        raise MalformedClick(f"Click x is not a timestamp: {raw!r} ({e})") from e
    if pd.isna(ts):
        raise MalformedClick(f"Click x is not a timestamp: {raw!r}")
    return ts


def parse_click_x(x: Any) -> float | pd.Timestamp:
    """Interpret a click x-position as a timestamp.

    Numbers (and numeric strings) become floats; datetimes and date strings
    (as sent by Plotly for date axes, e.g. "2024-05-01 10:23:11.5") become
    pd.Timestamp.

    Raises:
        MalformedClick: None, bool, NaN/inf, integers too large for a float, NaT,
            out-of-bounds or unparseable values.
    """
    if x is None or isinstance(x, (bool, np.bool_)):
        raise MalformedClick(f"Click x is missing or invalid: {x!r}")
    if isinstance(x, (int, float, np.integer, np.floating)):
        try:
            value = float(x)
        except OverflowError as e:
            raise MalformedClick(f"Click x is out of range: {x!r}") from e
        return _finite_float(value, x)
    if isinstance(x, (pd.Timestamp, datetime, date, np.datetime64)):
        return _timestamp(x, x)
    if isinstance(x, str):
        s = x.strip()
        if not s:
            raise MalformedClick("Click x is an empty string")
        try:
            value = float(s)
        except ValueError:
            return _timestamp(s, x)
        return _finite_float(value, x)
    raise MalformedClick(f"Click x has unsupported type {type(x).__name__}: {x!r}")


def extract_click_x(args: Any) -> Any:
    """Pull the raw x value of the first point out of a plotly_click event payload.

    Accepts the payload dict or a single-element list wrapping it.

    Raises:
        MalformedClick: If the payload has no points or the first point has no x.
    """
    if isinstance(args, list) and len(args) == 1 and isinstance(args[0], dict):
        payload = args[0]
    elif isinstance(args, dict):
        payload = args
    else:
        raise MalformedClick(f"Unexpected click payload: {type(args).__name__}")

    points = payload.get("points") or []
    if not points or not isinstance(points[0], dict):
        raise MalformedClick("Plotly click event received but no points found")
    if "x" not in points[0]:
        raise MalformedClick("Plotly click point has no x value")
    return points[0]["x"]
