"""Tracks data for the classifier app.

Loads a long-format tracks CSV (identity, timestamp, metric) from the
project's data/ directory, or generates deterministic synthetic GPS-like
speed tracks when no CSV is configured.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from niceevents.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_IDENTITIES = ("R1", "R2", "R3", "R4")


def get_data_dir() -> Path:
    """Resolve niceevents/data/ directory.

    Package layout: <root>/src/niceevents/classifier_app/schema.py
    Data: <root>/data/
    """
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def load_tracks_csv(
    filename: str,
    *,
    identity_col: str = "identity",
    time_col: str = "timestamp",
    data_dir: Optional[Path] = None,
) -> pd.DataFrame:
    """Load a tracks CSV and parse its time column.

    Numeric time columns are kept as numbers; anything else goes through
    pd.to_datetime.

    Raises:
        FileNotFoundError: If the CSV does not exist.
        ValueError: If identity_col or time_col is missing.
    """
    path = (data_dir or get_data_dir()) / filename
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path}")
    df = pd.read_csv(path)
    for col in (identity_col, time_col):
        if col not in df.columns:
            raise ValueError(f"column '{col}' not found in {path.name}")
    df[identity_col] = df[identity_col].astype(str)
    if not pd.api.types.is_numeric_dtype(df[time_col]):
        df[time_col] = pd.to_datetime(df[time_col])
    logger.info("Loaded %s rows, %s identities from %s", len(df), df[identity_col].nunique(), path)
    return df


def make_demo_tracks(
    identities: Sequence[str] = DEMO_IDENTITIES,
    *,
    n_points: int = 288,
    start: str = "2024-05-01 00:00:00",
    freq: str = "5min",
    seed: int = 0,
) -> pd.DataFrame:
    """Synthetic speed tracks: resting noise with occasional movement bouts.

    Returns:
        DataFrame with columns identity, timestamp, metric (speed in m/s).
    """
    rng = np.random.default_rng(seed)
    timestamps = pd.date_range(start=start, periods=n_points, freq=freq)
    frames = []
    for identity in identities:
        # two-state chain: 0 resting, 1 moving
        moving = np.zeros(n_points, dtype=bool)
        for i in range(1, n_points):
            p_stay = 0.9 if moving[i - 1] else 0.97
            moving[i] = moving[i - 1] if rng.random() < p_stay else not moving[i - 1]
        speed = np.where(moving, rng.normal(1.5, 0.4, n_points), rng.normal(0.05, 0.03, n_points))
        frames.append(pd.DataFrame({
            "identity": identity,
            "timestamp": timestamps,
            "metric": np.clip(speed, 0.0, None),
        }))
    return pd.concat(frames, ignore_index=True)


def load_tracks(
    filename: Optional[str] = None,
    *,
    identity_col: str = "identity",
    time_col: str = "timestamp",
) -> pd.DataFrame:
    """Tracks from data/<filename> if given, else the synthetic demo tracks."""
    if filename:
        return load_tracks_csv(filename, identity_col=identity_col, time_col=time_col)
    logger.info("No tracks CSV configured, using synthetic demo tracks")
    df = make_demo_tracks()
    if identity_col != "identity" or time_col != "timestamp":
        df = df.rename(columns={"identity": identity_col, "timestamp": time_col})
    return df
