import logging
import os
from typing import Optional

import pandas as pd

from .config import PROJECT_ROOT
from .constants import BASELINE_MODE
from .models import HistorySummary, default_transport_profiles
from .history import format_history_dataframe, summarize_route_history
from .scoring import evaluate_route
from .logging_conf import setup_logging
from .utils.input_helpers import (
    prompt_choice, prompt_place, prompt_trip_distance, prompt_transport_mode,
    print_header, print_eco_report, print_history_summary, style_prompt,
    C_SUCCESS, C_RESET
)

logger = logging.getLogger(__name__)

DEFAULT_REPORTS_DIR = os.path.join(PROJECT_ROOT, "reports")
REPORT_FILENAME = "route_history_report.csv"


def read_route_history(path: str) -> Optional[pd.DataFrame]:
    """
    Load a route history export (.csv or .xlsx). Returns None when it cannot be read.
    """
    if not os.path.exists(path):
        logger.error(f"History file not found at {path}")
        return None
    try:
        if path.lower().endswith((".xlsx", ".xls")):
            return pd.read_excel(path)
        return pd.read_csv(path)
    except Exception as e:
        logger.error(f"Error reading history file {path}: {e}")
        return None


def execute_history_batch(df: pd.DataFrame, reports_dir: str = DEFAULT_REPORTS_DIR) -> HistorySummary:
    """
    Clean a route history table, write it to `reports_dir` and return the dashboard summary.
    """
    formatted = format_history_dataframe(df)
    os.makedirs(reports_dir, exist_ok=True)
    out_path = os.path.join(reports_dir, REPORT_FILENAME)
    formatted.to_csv(out_path, index=False)
    logger.info(f"Report written to {out_path} ({len(formatted)} route(s))")
    return summarize_route_history(formatted)


def run_single_route():
    """
    Interactive analysis of one planned trip.
    """
    profiles = default_transport_profiles()

    print_header("Step 1: Start & Destination")
    origin = prompt_place("starting point")
    destination = prompt_place("destination")

    print_header("Step 2: Trip Details")
    distance_km = prompt_trip_distance(origin, destination)
    candidate = prompt_transport_mode(profiles, default="public_transport")

    report = evaluate_route(distance_km, candidate, profiles)
    print_eco_report(report, candidate)


def run_history_summary():
    """
    Batch mode: summarise an exported route history file.
    """
    print_header("Route History Summary (Batch Mode)")
    path = input(style_prompt("Path to route history (.csv or .xlsx): ")).strip().strip('"')
    df = read_route_history(path)
    if df is None:
        return

    print(f"\n{C_SUCCESS}Loaded {len(df)} routes from {path}.{C_RESET}")
    summary = execute_history_batch(df)
    print_history_summary(summary)


def main():
    setup_logging(console_level=logging.INFO)

    print_header("Eco Route Planner – Start")
    logger.debug(f"Baseline mode for savings: {BASELINE_MODE}")

    mode = prompt_choice(
        "Mode", ["Single Route (Interactive)", "History Summary (Batch)"],
        default="Single Route (Interactive)"
    )
    if mode == "History Summary (Batch)":
        run_history_summary()
    else:
        run_single_route()


if __name__ == "__main__":
    main()
