"""Unit tests for tracks loading and the synthetic demo provider."""

from __future__ import annotations

import pandas as pd
import pytest

from niceevents.classifier_app import schema


def test_make_demo_tracks_shape_and_columns():
    df = schema.make_demo_tracks(("A", "B"), n_points=50)
    assert list(df.columns) == ["identity", "timestamp", "metric"]
    assert len(df) == 100
    assert sorted(df["identity"].unique()) == ["A", "B"]
    assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])
    assert (df["metric"] >= 0).all()


def test_make_demo_tracks_is_deterministic():
    a = schema.make_demo_tracks(n_points=30, seed=3)
    b = schema.make_demo_tracks(n_points=30, seed=3)
    pd.testing.assert_frame_equal(a, b)


def test_load_tracks_renames_demo_columns():
    df = schema.load_tracks(None, identity_col="animal", time_col="t")
    assert {"animal", "t", "metric"} <= set(df.columns)


def test_load_tracks_csv_parses_datetimes(tmp_path):
    (tmp_path / "tracks.csv").write_text(
        "identity,timestamp,metric\n"
        "7,2024-05-01 00:00:00,0.1\n"
        "7,2024-05-01 00:05:00,1.2\n",
        encoding="utf-8",
    )
    df = schema.load_tracks_csv("tracks.csv", data_dir=tmp_path)
    assert df["identity"].tolist() == ["7", "7"]
    assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])


def test_load_tracks_csv_keeps_numeric_time(tmp_path):
    (tmp_path / "tracks.csv").write_text("identity,timestamp,metric\nR1,0.5,1\nR1,1.5,2\n", encoding="utf-8")
    df = schema.load_tracks_csv("tracks.csv", data_dir=tmp_path)
    assert df["timestamp"].tolist() == [0.5, 1.5]


def test_load_tracks_csv_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        schema.load_tracks_csv("nope.csv", data_dir=tmp_path)


def test_load_tracks_csv_missing_column(tmp_path):
    (tmp_path / "tracks.csv").write_text("id,timestamp,metric\nR1,0,1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        schema.load_tracks_csv("tracks.csv", data_dir=tmp_path)
