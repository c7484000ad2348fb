from math import radians, sin, cos, sqrt, atan2, floor, isfinite
from typing import Optional
from ..constants import (
    KG_CO2_PER_TREE_YEAR,
    LEVEL_5_MIN_KG, LEVEL_4_MIN_KG, LEVEL_3_MIN_KG, LEVEL_2_MIN_KG
)
from ..models import Location, RouteMetrics, TransportProfile, UserLevel
import logging

logger = logging.getLogger(__name__)


def to_float(value, default: float = 0.0) -> float:
    """
    Best-effort float conversion. Anything that is not a finite number
    (None, NaN, inf, unparseable strings) becomes `default`.
    """
    try:
        x = float(value)
    except (TypeError, ValueError):
        return default
    if not isfinite(x):
        return default
    return x


def non_negative(value) -> float:
    """
    Clamp to a finite value >= 0. Negative, NaN and non-numeric inputs give 0.
    """
    return max(0.0, to_float(value))


def round_half_up(x: float) -> int:
    """
    Round to the nearest integer with .5 going up (round() in Python is banker's rounding).
    """
    return int(floor(x + 0.5))


def haversine_km(a: Location, b: Location) -> float:
    """
    Compute great-circle distance in km between two locations (lat/lon in degrees).
    Used as a straight-line distance estimate when no routed distance is available.
    """
    r = 6371.0
    lat1 = radians(a.lat)
    lon1 = radians(a.lon)
    lat2 = radians(b.lat)
    lon2 = radians(b.lon)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    c = 2 * atan2(sqrt(h), sqrt(1 - h))
    return r * c


def calculate_carbon_savings(
    baseline_carbon_per_km: float, candidate_carbon_per_km: float, distance_km: float
) -> float:
    """
    CO2 (kg) avoided by travelling `distance_km` with the candidate mode instead
    of the baseline mode: max(0, (baseline - candidate) * distance).

    Never negative. Zero distance, a candidate at least as dirty as the
    baseline, or any non-finite input all give 0.
    """
    distance = non_negative(distance_km)
    if distance == 0.0:
        return 0.0
    baseline = to_float(baseline_carbon_per_km, default=float("nan"))
    candidate = to_float(candidate_carbon_per_km, default=float("nan"))
    if not (isfinite(baseline) and isfinite(candidate)):
        return 0.0
    savings = (baseline - candidate) * distance
    if not isfinite(savings) or savings <= 0:
        return 0.0
    return savings


def travel_minutes(distance_km: float, speed_kmh: float) -> float:
    """
    Travel time at a constant speed. Unknown or non-positive speeds give 0.
    """
    speed = to_float(speed_kmh)
    if speed <= 0:
        return 0.0
    return non_negative(distance_km) / speed * 60.0


def estimate_route_metrics(
    distance_km: float,
    candidate: TransportProfile,
    baseline: Optional[TransportProfile] = None,
) -> RouteMetrics:
    """
    Estimate RouteMetrics for a trip of `distance_km` using `candidate`.
    Avoided emissions are measured against `baseline` (none -> 0).
    """
    distance = non_negative(distance_km)
    emissions = distance * non_negative(candidate.carbon_per_km)
    avoided = 0.0
    if baseline is not None:
        avoided = calculate_carbon_savings(
            baseline.carbon_per_km, candidate.carbon_per_km, distance
        )
    return RouteMetrics(
        distance_km=distance,
        duration_minutes=travel_minutes(distance, candidate.speed_kmh),
        carbon_emissions_kg=emissions,
        avoided_emissions_kg=avoided,
    )


def equivalent_trees(co2_kg: float) -> float:
    """
    Number of trees absorbing the same CO2 over one year.
    """
    if KG_CO2_PER_TREE_YEAR <= 0:
        return 0.0
    return non_negative(co2_kg) / KG_CO2_PER_TREE_YEAR


def get_user_level(carbon_saved_kg: float) -> UserLevel:
    """
    Map cumulative CO2 saved (kg) to a user level and title.
    """
    saved = non_negative(carbon_saved_kg)
    if saved >= LEVEL_5_MIN_KG:
        return UserLevel(5, "Eco Master")
    if saved >= LEVEL_4_MIN_KG:
        return UserLevel(4, "Green Champion")
    if saved >= LEVEL_3_MIN_KG:
        return UserLevel(3, "Eco Warrior")
    if saved >= LEVEL_2_MIN_KG:
        return UserLevel(2, "Climate Hero")
    return UserLevel(1, "Eco Beginner")
