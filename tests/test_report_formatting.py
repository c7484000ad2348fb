import sys
import os
from datetime import datetime

import pandas as pd
import numpy as np

sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "src"))

from eco_route.models import RouteRecord
from eco_route.history import (
    format_history_dataframe, records_to_dataframe, summarize_route_history, HISTORY_COLUMNS
)


def sample_records():
    return [
        RouteRecord(
            start="New York", end="Brooklyn", distance_km=15.2, duration_minutes=28,
            eco_score=85, co2_saved_kg=2.1, transport_mode="bicycle",
            date=datetime(2024, 5, 9, 8, 30),
        ),
        RouteRecord(
            start="Manhattan", end="Queens", distance_km=12.8, duration_minutes=24,
            eco_score=82, co2_saved_kg=1.8, transport_mode="public_transport",
            date=datetime(2024, 5, 8, 17, 45),
        ),
    ]


def test_records_to_dataframe_columns():
    df = records_to_dataframe(sample_records())
    assert list(df.columns) == [header for _, header in HISTORY_COLUMNS]
    assert len(df) == 2
    assert df.loc[0, "Start"] == "New York"


def test_history_dataframe_formatting():
    print("Running test_history_dataframe_formatting...")

    # Raw export with API-style headers, gaps and junk values
    data = {
        "start": ["New York", "Manhattan", None],
        "end": ["Brooklyn", "Queens", "Harlem"],
        "distance": [15.2, "12.8", "n/a"],
        "duration": [28, 24, np.nan],
        "ecoScore": [85, 82, -10],
        "Notes": ["commute", None, "weekend"],  # unknown columns are preserved
    }
    df = pd.DataFrame(data)

    formatted = format_history_dataframe(df)
    cols = list(formatted.columns)
    print("Columns:", cols)

    # 1. Order: canonical columns first, extras last
    assert cols[:len(HISTORY_COLUMNS)] == [header for _, header in HISTORY_COLUMNS]
    assert cols[-1] == "Notes"

    # 2. Missing columns are added
    assert (formatted["CO2 Saved (kg)"] == 0.0).all()
    assert (formatted["Transport Mode"] == "").all()

    # 3. Numbers coerced; junk and negatives become 0
    assert formatted.loc[1, "Distance (km)"] == 12.8
    assert formatted.loc[2, "Distance (km)"] == 0.0
    assert formatted.loc[2, "Duration (min)"] == 0.0
    assert formatted.loc[2, "Eco Score"] == 0.0

    # 4. No gaps left
    assert not formatted.isnull().values.any()
    assert formatted.loc[2, "Start"] == ""
    assert formatted.loc[1, "Notes"] == ""
    print("PASS")


def test_history_rounding():
    df = pd.DataFrame({"co2Saved": [1.23456], "distance": [3.14159]})
    formatted = format_history_dataframe(df)
    assert formatted.loc[0, "CO2 Saved (kg)"] == 1.23
    assert formatted.loc[0, "Distance (km)"] == 3.14


def test_alias_and_canonical_headers_together():
    # exports that carry both the API name and the report header
    df = pd.DataFrame({
        "distance": [3.0, 4.0],
        "Distance (km)": [2.5, np.nan],
        "date": ["2024-05-09", "2024-05-10"],
        "Date": ["2024-05-01", None],
        "ecoScore": [90, 70],
        "eco_score": [10, 20],
        "co2Saved": [1.0, 0.5],
    })

    formatted = format_history_dataframe(df)

    assert list(formatted.columns) == [header for _, header in HISTORY_COLUMNS]
    # the report header wins, aliases only fill its gaps
    assert formatted["Distance (km)"].tolist() == [2.5, 4.0]
    assert formatted["Date"].tolist() == ["2024-05-01", "2024-05-10"]
    # between two aliases the first one wins
    assert formatted["Eco Score"].tolist() == [90.0, 70.0]

    summary = summarize_route_history(df)
    assert summary.routes_completed == 2
    assert summary.total_distance_km == 6.5
    assert summary.total_co2_saved_kg == 1.5
    assert summary.average_eco_score == 80


def test_repeated_header_in_frame():
    df = pd.DataFrame([[1.0, 2.0, 0.4]], columns=["Distance (km)", "Distance (km)", "co2Saved"])
    summary = summarize_route_history(df)
    assert summary.total_distance_km == 1.0
    assert summary.total_co2_saved_kg == 0.4


def test_summarize_route_history_records():
    summary = summarize_route_history(sample_records())

    assert summary.routes_completed == 2
    assert abs(summary.total_co2_saved_kg - 3.9) < 1e-9
    assert abs(summary.total_distance_km - 28.0) < 1e-9
    assert summary.total_duration_minutes == 52.0
    assert summary.average_eco_score == 84  # 83.5 rounds up
    assert summary.level.title == "Eco Warrior"
    assert abs(summary.equivalent_trees - 3.9 / 21.0) < 1e-9


def test_summarize_route_history_dataframe():
    df = pd.DataFrame({
        "Distance (km)": [5.0, 5.0],
        "Eco Score": [100, 150],  # out-of-range scores are capped at 100
        "CO2 Saved (kg)": [6.0, "bad"],
    })
    summary = summarize_route_history(df)
    assert summary.routes_completed == 2
    assert summary.total_co2_saved_kg == 6.0
    assert summary.average_eco_score == 100
    assert summary.level.level == 4


def test_summarize_empty_history():
    summary = summarize_route_history([])
    assert summary.routes_completed == 0
    assert summary.total_co2_saved_kg == 0.0
    assert summary.average_eco_score == 0
    assert summary.level.level == 1


if __name__ == "__main__":
    try:
        test_records_to_dataframe_columns()
        test_history_dataframe_formatting()
        test_summarize_route_history_records()
        test_summarize_empty_history()
        print("ALL TESTS PASSED")
        sys.exit(0)
    except AssertionError as e:
        print(f"TEST FAILED: {e}")
        sys.exit(1)
