"""Plotly figure for the active identity's time series.

Returns plain figure dicts for ui.plotly (never go.Figure). Datetime values
are converted to ISO strings so the dict is JSON-serializable as-is.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from niceevents.event_classifier.interval_store import Interval

INTERVAL_FILL_COLOR = "rgba(255, 165, 0, 0.25)"
PENDING_LINE_COLOR = "red"


def _axis_value(v: Any) -> Any:
    if isinstance(v, (pd.Timestamp, np.datetime64)):
        return pd.Timestamp(v).isoformat()
    return v


def _axis_values(s: pd.Series) -> list[Any]:
    if pd.api.types.is_datetime64_any_dtype(s):
        return [pd.Timestamp(v).isoformat() for v in s]
    return s.tolist()


def make_series_figure(
    series: pd.DataFrame,
    *,
    time_col: str = "timestamp",
    metric_col: str = "metric",
    identity: Optional[str] = None,
    intervals: Iterable[Interval] = (),
    pending_start: Any = None,
    interval_color: str = INTERVAL_FILL_COLOR,
) -> dict:
    """Build the classification plot.

    Args:
        series: Rows of the active identity (already filtered and sorted).
        time_col: Column plotted on x.
        metric_col: Column plotted on y.
        identity: Active identity, used for the trace name and title.
        intervals: Intervals to shade; only those matching identity are drawn.
        pending_start: If not None, drawn as a dashed vertical line.
        interval_color: Fill color of interval bands.
    """
    fig = go.Figure()
    if len(series):
        fig.add_trace(go.Scatter(
            x=_axis_values(series[time_col]),
            y=series[metric_col].tolist(),
            mode="lines+markers",
            name=str(identity) if identity is not None else metric_col,
            marker=dict(size=4),
            line=dict(width=1),
            hovertemplate=f"{time_col}=%{{x}}<br>{metric_col}=%{{y}}<extra></extra>",
        ))

    shapes: list[dict[str, Any]] = []
    for iv in intervals:
        if identity is None or iv.identity != identity:
            continue
        shapes.append(dict(
            type="rect",
            xref="x",
            yref="paper",
            x0=_axis_value(iv.start),
            x1=_axis_value(iv.end),
            y0=0,
            y1=1,
            fillcolor=interval_color,
            line=dict(width=0),
            layer="below",
        ))
    if pending_start is not None:
        x = _axis_value(pending_start)
        shapes.append(dict(
            type="line",
            xref="x",
            yref="paper",
            x0=x,
            x1=x,
            y0=0,
            y1=1,
            line=dict(color=PENDING_LINE_COLOR, width=2, dash="dash"),
        ))

    title = f"{identity}: click start, then end" if identity is not None else "Select an identity"
    fig.update_layout(
        title=title,
        margin=dict(l=40, r=20, t=40, b=40),
        xaxis_title=time_col,
        yaxis_title=metric_col,
        showlegend=False,
        shapes=shapes,
        hovermode="closest",
        uirevision="keep",
    )
    return fig.to_dict()
