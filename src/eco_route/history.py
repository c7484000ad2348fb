"""
Dashboard statistics over a user's past routes.
"""
import logging
from dataclasses import asdict
from typing import Iterable, List, Union

import numpy as np
import pandas as pd

from .constants import DECIMALS
from .models import RouteRecord, HistorySummary
from .utils.calculations import equivalent_trees, get_user_level, round_half_up

logger = logging.getLogger(__name__)

# Canonical report columns: (record field, report header)
HISTORY_COLUMNS = [
    ("date", "Date"),
    ("start", "Start"),
    ("end", "End"),
    ("transport_mode", "Transport Mode"),
    ("distance_km", "Distance (km)"),
    ("duration_minutes", "Duration (min)"),
    ("eco_score", "Eco Score"),
    ("co2_saved_kg", "CO2 Saved (kg)"),
]

NUMERIC_COLUMNS = ["Distance (km)", "Duration (min)", "Eco Score", "CO2 Saved (kg)"]
TEXT_COLUMNS = ["Start", "End", "Transport Mode"]

# Alternative headers accepted on input (API payloads, older exports)
COLUMN_ALIASES = {
    "distance": "Distance (km)",
    "distance_km": "Distance (km)",
    "duration": "Duration (min)",
    "duration_minutes": "Duration (min)",
    "ecoScore": "Eco Score",
    "eco_score": "Eco Score",
    "co2Saved": "CO2 Saved (kg)",
    "co2_saved_kg": "CO2 Saved (kg)",
    "transportMode": "Transport Mode",
    "transport_mode": "Transport Mode",
    "start": "Start",
    "end": "End",
    "date": "Date",
}


def _blank_missing(series: pd.Series) -> pd.Series:
    return series.astype(object).where(series.notna(), "")


def _merge_aliases(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename alias headers to the canonical ones. When several columns land on
    the same header the first canonical column wins (else the first alias)
    and the others only fill its gaps.
    """
    merged = {}
    from_canonical = set()
    for pos, col in enumerate(df.columns):
        target = COLUMN_ALIASES.get(col, col)
        series = df.iloc[:, pos]
        if target not in merged:
            merged[target] = series
        else:
            logger.debug(f"Column '{col}' merged into '{target}'")
            if col == target and target not in from_canonical:
                merged[target] = series.combine_first(merged[target])
            else:
                merged[target] = merged[target].combine_first(series)
        if col == target:
            from_canonical.add(target)
    return pd.DataFrame(merged, index=df.index)


def records_to_dataframe(records: Iterable[RouteRecord]) -> pd.DataFrame:
    """
    Build a report-shaped DataFrame from RouteRecord objects.
    """
    rows = [asdict(r) for r in records]
    df = pd.DataFrame(rows, columns=[field for field, _ in HISTORY_COLUMNS])
    return df.rename(columns=dict(HISTORY_COLUMNS))


def format_history_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean a route history table for reporting:
    1. Rename known aliases to the canonical headers, merging duplicates.
    2. Add missing canonical columns (0 for numbers, "" for text).
    3. Coerce numeric columns, treating unreadable and negative values as 0.
    4. Round numbers to DECIMALS.
    5. Order canonical columns first; unknown columns are kept at the end.
    """
    df = _merge_aliases(df.reset_index(drop=True))

    for col in NUMERIC_COLUMNS:
        if col not in df.columns:
            df[col] = 0.0
        values = pd.to_numeric(df[col], errors="coerce").replace([np.inf, -np.inf], np.nan)
        df[col] = values.fillna(0.0).clip(lower=0.0).round(DECIMALS)

    for col in TEXT_COLUMNS:
        if col not in df.columns:
            df[col] = ""
        df[col] = _blank_missing(df[col]).astype(str)

    if "Date" not in df.columns:
        df["Date"] = ""
    df["Date"] = _blank_missing(df["Date"])

    ordered = [header for _, header in HISTORY_COLUMNS]
    extra = [c for c in df.columns if c not in ordered]
    for col in extra:
        df[col] = _blank_missing(df[col])
    return df[ordered + extra].reset_index(drop=True)


def summarize_route_history(
    history: Union[pd.DataFrame, List[RouteRecord]]
) -> HistorySummary:
    """
    Totals for the dashboard: CO2 saved, distance, time, route count,
    average eco score, level and tree equivalent.
    """
    if isinstance(history, pd.DataFrame):
        df = format_history_dataframe(history)
    else:
        df = format_history_dataframe(records_to_dataframe(history))

    routes = int(len(df))
    total_saved = float(df["CO2 Saved (kg)"].sum()) if routes else 0.0
    total_distance = float(df["Distance (km)"].sum()) if routes else 0.0
    total_duration = float(df["Duration (min)"].sum()) if routes else 0.0
    average_score = round_half_up(float(df["Eco Score"].clip(upper=100.0).mean())) if routes else 0

    logger.debug(f"Summarised {routes} route(s): {total_saved:.3f} kg CO2 saved")

    return HistorySummary(
        total_co2_saved_kg=total_saved,
        total_distance_km=total_distance,
        total_duration_minutes=total_duration,
        routes_completed=routes,
        average_eco_score=average_score,
        level=get_user_level(total_saved),
        equivalent_trees=equivalent_trees(total_saved),
    )
