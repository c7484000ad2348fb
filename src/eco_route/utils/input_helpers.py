import logging
from math import isnan
from typing import List, Optional, Sequence

import colorama
from colorama import Fore, Style, Back

from ..constants import ECO_SCORE_COLORS
from ..models import EcoReport, HistorySummary, Location, TransportProfile
from .calculations import haversine_km, to_float
from .formatting import format_carbon, format_distance, format_duration
from .validation import try_parse_lat_lon, validate_address

colorama.init(autoreset=True)

logger = logging.getLogger(__name__)

# Style Constants
C_HEADER = Fore.CYAN + Style.BRIGHT
C_PROMPT = Fore.YELLOW
C_CHOICE = Fore.MAGENTA
C_SUCCESS = Fore.GREEN
C_RESET = Style.RESET_ALL

# Console colours for the eco score bands
SCORE_STYLES = {
    "green": Fore.GREEN,
    "amber": Fore.YELLOW,
    "red": Fore.RED,
}

IMPACT_ICONS = {"high": "💚", "medium": "💛", "low": "💙"}


def style_prompt(prompt_text: str) -> str:
    """Helper to wrap input prompt in color."""
    return f"{C_PROMPT}{prompt_text}{C_RESET}"


def print_header(text: str):
    """Print a styled header."""
    print(f"\n{C_HEADER}{'='*60}")
    print(f"{text.center(60)}")
    print(f"{'='*60}{C_RESET}")


def prompt_choice(label: str, options: List[str], default: str) -> str:
    """
    Prompt user to pick one value from a list of options; returns the chosen option.
    Supports selecting by index (1-based) or typing the name.
    """
    display_parts = []
    for idx, opt in enumerate(options, 1):
        display_parts.append(f"[{C_SUCCESS}{idx}{C_PROMPT}] {C_CHOICE}{opt}{C_PROMPT}")
    opts_str = " / ".join(display_parts)

    while True:
        print(f"\n{C_PROMPT}{label} options:{C_RESET} {opts_str}")
        s = input(style_prompt(f"Select option (name or number) [default={default}]: ")).strip().lower()

        if not s:
            return default

        if s.isdigit():
            idx = int(s)
            if 1 <= idx <= len(options):
                return options[idx - 1]

        for opt in options:
            if s == opt.lower():
                return opt

        logger.warning(f"Invalid choice '{s}'. Please enter a number 1-{len(options)} or the option name.")


def prompt_yes_no(label: str, default: bool) -> bool:
    """
    Prompt user for yes/no answer, returning True/False.
    """
    d = "y" if default else "n"
    opts = f"{C_CHOICE}y{C_PROMPT}/{C_CHOICE}n{C_PROMPT}"
    while True:
        s = input(style_prompt(f"{label} [{opts}] (default={d}): ")).strip().lower()
        if not s:
            return default
        if s in ("y", "yes"):
            return True
        if s in ("n", "no"):
            return False
        logger.warning("Please answer y or n.")


def prompt_float(label: str, default: Optional[float] = None, minimum: float = 0.0) -> float:
    """
    Prompt for a number >= minimum. Empty input returns `default` when one is set.
    """
    suffix = f" (default={default})" if default is not None else ""
    while True:
        s = input(style_prompt(f"{label}{suffix}: ")).strip()
        if not s and default is not None:
            return default
        value = to_float(s, default=float("nan"))
        if not isnan(value) and value >= minimum:
            return value
        logger.warning(f"Please enter a number >= {minimum}.")


def prompt_place(label: str) -> Optional[Location]:
    """
    Ask for a street address or a 'lat,lon' pair.
    Returns the Location for coordinates, None for a plain address.
    """
    while True:
        s = input(style_prompt(f"Enter {label} address or 'lat,lon': ")).strip()
        loc = try_parse_lat_lon(s)
        if loc is not None:
            logger.info(f"{label} set to {loc.lat:.6f}, {loc.lon:.6f}")
            return loc
        if validate_address(s):
            logger.info(f"{label} set to '{s}'")
            return None
        logger.warning("Please enter a valid address or a 'lat,lon' pair within range.")


def prompt_trip_distance(origin: Optional[Location], destination: Optional[Location]) -> float:
    """
    Straight-line distance when both ends are coordinates, otherwise ask for it.
    """
    if origin is not None and destination is not None:
        straight = haversine_km(origin, destination)
        logger.info(f"Straight-line distance: {format_distance(straight)}")
        if prompt_yes_no("Use straight-line distance for the trip?", default=True):
            return straight
    return prompt_float("Trip distance (km)", minimum=0.0)


def prompt_transport_mode(profiles: Sequence[TransportProfile], default: str) -> TransportProfile:
    """
    Pick the mode the user is planning to travel with.
    """
    names = [p.display_name for p in profiles]
    default_name = next((p.display_name for p in profiles if p.id == default), names[0])
    chosen = prompt_choice("Transport mode", names, default=default_name)
    return profiles[names.index(chosen)]


def print_eco_report(report: EcoReport, candidate: TransportProfile):
    """
    Route analysis panel: score, metrics, savings and recommendations.
    """
    print(f"\n{Back.BLACK}{C_HEADER}{'='*60}")
    print(f"   ROUTE ANALYSIS: {candidate.display_name.upper()}")
    print(f"{'='*60}{Style.RESET_ALL}")

    score_style = SCORE_STYLES.get(report.color, "")
    print(f"\n  {Style.BRIGHT}Eco Score     : {score_style}{report.eco_score}{C_RESET} "
          f"({report.color}, {ECO_SCORE_COLORS[report.color]})")
    print(f"  Distance      : {report.formatted['distance']}")
    print(f"  Duration      : {report.formatted['duration']}")
    print(f"  CO₂ Emissions : {report.formatted['carbon_emissions']}")

    if report.metrics.avoided_emissions_kg > 0:
        print(f"\n  {C_SUCCESS}🌱 You're saving {report.formatted['avoided_emissions']} of CO₂ "
              f"compared to the standard route!{C_RESET}")
        print(f"     (about {report.equivalent_trees:.3f} tree-years of absorption)")

    if report.recommendations:
        print(f"\n{C_HEADER}Eco Recommendations:{C_RESET}")
        for rec in report.recommendations:
            print(f"  {IMPACT_ICONS.get(rec.impact, '')} [{rec.impact.upper():<6}] {rec.message}")
    print(f"{'='*60}\n")


def print_history_summary(summary: HistorySummary):
    """
    Dashboard totals for a route history.
    """
    print_header("My Eco Dashboard")
    print(f"  Total CO₂ Saved   : {C_SUCCESS}{format_carbon(summary.total_co2_saved_kg)}{C_RESET}"
          f" (equivalent to {summary.equivalent_trees:.3f} trees)")
    print(f"  Distance Traveled : {format_distance(summary.total_distance_km)}")
    print(f"  Time Travelled    : {format_duration(summary.total_duration_minutes)}")
    print(f"  Average Eco Score : {summary.average_eco_score}")
    print(f"  Routes Completed  : {summary.routes_completed}")
    print(f"  Carbon Rank       : Level {summary.level.level} - {summary.level.title}")
