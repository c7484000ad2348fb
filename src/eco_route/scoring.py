import logging
from math import isfinite
from typing import List, Optional, Sequence

from .constants import (
    IMPACT_HIGH_KG, IMPACT_MEDIUM_KG,
    SCORE_AVOIDED_WEIGHT, SCORE_GREEN_MIN, SCORE_AMBER_MIN,
    BASELINE_MODE, ImpactLevel, ColorToken
)
from .models import (
    RouteMetrics, TransportProfile, Recommendation, EcoReport, EcoScore,
    default_transport_profiles
)
from .utils.calculations import (
    calculate_carbon_savings, estimate_route_metrics, equivalent_trees,
    non_negative, to_float, round_half_up, travel_minutes
)
from .utils.formatting import format_carbon, format_distance, format_duration

logger = logging.getLogger(__name__)


def _clamp_fraction(x: float) -> float:
    return min(1.0, max(0.0, x))


def compute_eco_score(
    metrics: RouteMetrics, baseline_carbon_per_km: float, candidate_carbon_per_km: float
) -> EcoScore:
    """
    Score a route from 0 to 100.

    The reference footprint is the dirtier of the two modes over the route
    distance. The score blends the share of that footprint avoided with the
    share not emitted (weighted by SCORE_AVOIDED_WEIGHT), so it never drops
    when avoided emissions rise and never rises when emissions rise.
    """
    distance = non_negative(metrics.distance_km)
    emitted_kg = non_negative(metrics.carbon_emissions_kg)
    avoided_kg = non_negative(metrics.avoided_emissions_kg)

    reference_rate = max(non_negative(baseline_carbon_per_km), non_negative(candidate_carbon_per_km))
    reference_kg = reference_rate * distance
    if not isfinite(reference_kg) or reference_kg <= 0:
        # Nothing to compare against: a clean trip is perfect, anything else is not.
        return 100 if emitted_kg == 0 else 0

    avoided_share = _clamp_fraction(avoided_kg / reference_kg)
    emitted_share = _clamp_fraction(emitted_kg / reference_kg)
    weight = _clamp_fraction(SCORE_AVOIDED_WEIGHT)

    raw = 100.0 * (weight * avoided_share + (1.0 - weight) * (1.0 - emitted_share))
    return min(100, max(0, round_half_up(raw)))


def get_eco_score_color(score: EcoScore) -> ColorToken:
    """
    Three-band classification: green (>= SCORE_GREEN_MIN), amber (>= SCORE_AMBER_MIN), red.
    """
    value = to_float(score, default=-1.0)
    if value >= SCORE_GREEN_MIN:
        return "green"
    if value >= SCORE_AMBER_MIN:
        return "amber"
    return "red"


def classify_impact(carbon_savings_kg: float) -> ImpactLevel:
    savings = non_negative(carbon_savings_kg)
    if savings >= IMPACT_HIGH_KG:
        return "high"
    if savings >= IMPACT_MEDIUM_KG:
        return "medium"
    return "low"


def _recommendation_message(
    profile: TransportProfile, savings_kg: float, metrics: RouteMetrics
) -> str:
    message = f"Switch to {profile.display_name} to save {format_carbon(savings_kg)} of CO₂ on this trip"
    minutes = travel_minutes(metrics.distance_km, profile.speed_kmh)
    current = non_negative(metrics.duration_minutes)
    if minutes > 0 and current > 0:
        delta = minutes - current
        if round_half_up(abs(delta)) >= 1:
            direction = "longer" if delta > 0 else "shorter"
            message += f" ({format_duration(abs(delta))} {direction})"
    return message


def build_recommendations(
    metrics: RouteMetrics,
    available_profiles: Sequence[TransportProfile],
    candidate_carbon_per_km: Optional[float] = None,
) -> List[Recommendation]:
    """
    One recommendation per profile that emits strictly less per km than the
    current mode, sorted by carbon saved (largest first, ties keep catalogue order).

    The current rate is `candidate_carbon_per_km` when given, otherwise it is
    derived from the metrics (emissions / distance, 0 for a zero-length trip).
    """
    distance = non_negative(metrics.distance_km)
    if candidate_carbon_per_km is not None:
        current_rate = non_negative(candidate_carbon_per_km)
    elif distance > 0:
        current_rate = non_negative(metrics.carbon_emissions_kg) / distance
    else:
        current_rate = 0.0

    recommendations: List[Recommendation] = []
    for profile in available_profiles:
        rate = to_float(profile.carbon_per_km, default=-1.0)
        if rate < 0:
            logger.debug(f"Skipping transport profile '{profile.id}' with unusable rate {profile.carbon_per_km!r}")
            continue
        if rate >= current_rate:
            continue

        savings = calculate_carbon_savings(current_rate, rate, distance)
        recommendations.append(
            Recommendation(
                message=_recommendation_message(profile, savings, metrics),
                impact=classify_impact(savings),
                carbon_savings_kg=savings,
                profile_id=profile.id,
            )
        )

    # sorted() is stable, so equal savings keep catalogue order
    return sorted(recommendations, key=lambda r: -(r.carbon_savings_kg or 0.0))


def find_profile(profiles: Sequence[TransportProfile], profile_id: str) -> Optional[TransportProfile]:
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    return None


def evaluate_route(
    distance_km: float,
    candidate: TransportProfile,
    profiles: Optional[Sequence[TransportProfile]] = None,
    baseline: Optional[TransportProfile] = None,
) -> EcoReport:
    """
    Full route analysis: metrics, score, colour band, recommendations and display strings.
    `baseline` defaults to the BASELINE_MODE profile of the catalogue (private car).
    """
    if profiles is None:
        profiles = default_transport_profiles()
    if baseline is None:
        baseline = find_profile(profiles, BASELINE_MODE) or find_profile(
            default_transport_profiles(), BASELINE_MODE
        )

    metrics = estimate_route_metrics(distance_km, candidate, baseline)
    baseline_rate = baseline.carbon_per_km if baseline is not None else candidate.carbon_per_km
    score = compute_eco_score(metrics, baseline_rate, candidate.carbon_per_km)
    recommendations = build_recommendations(
        metrics, profiles, candidate_carbon_per_km=candidate.carbon_per_km
    )

    logger.debug(
        f"Evaluated {metrics.distance_km:.3f} km by {candidate.id}: score={score}, "
        f"{len(recommendations)} recommendation(s)"
    )

    return EcoReport(
        metrics=metrics,
        eco_score=score,
        color=get_eco_score_color(score),
        recommendations=recommendations,
        equivalent_trees=equivalent_trees(metrics.avoided_emissions_kg),
        formatted={
            "distance": format_distance(metrics.distance_km),
            "duration": format_duration(metrics.duration_minutes),
            "carbon_emissions": format_carbon(metrics.carbon_emissions_kg),
            "avoided_emissions": format_carbon(metrics.avoided_emissions_kg),
        },
    )
