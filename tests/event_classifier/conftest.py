# tests/event_classifier/conftest.py
"""Pytest configuration and fixtures for event_classifier tests."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest


def pytest_configure() -> None:
    # Ensure niceevents package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def tracks_df() -> pd.DataFrame:
    """Small long-format tracks with numeric timestamps for R3 and R4 (R4 rows out of order)."""
    return pd.DataFrame({
        "identity": ["R3", "R3", "R3", "R4", "R4", "R4"],
        "timestamp": [0.0, 10.0, 20.0, 20.0, 0.0, 10.0],
        "metric": np.array([0.1, 1.2, 0.3, 2.0, 0.5, 1.0]),
    })


@pytest.fixture
def datetime_tracks_df() -> pd.DataFrame:
    """Tracks with datetime timestamps, as loaded from a GPS CSV."""
    ts = pd.date_range("2024-05-01 00:00:00", periods=4, freq="5min")
    return pd.DataFrame({
        "identity": ["R1"] * 4,
        "timestamp": ts,
        "metric": [0.0, 1.5, 1.7, 0.1],
    })
