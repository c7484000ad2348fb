import sys
import os

sys.path.append(os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "src"))

from eco_route.models import RouteMetrics, TransportProfile, default_transport_profiles
from eco_route.scoring import (
    compute_eco_score, build_recommendations, get_eco_score_color,
    classify_impact, evaluate_route, find_profile
)


def make_metrics(distance=8.0, emissions=1.0, avoided=3.0, duration=20.0):
    return RouteMetrics(
        distance_km=distance,
        duration_minutes=duration,
        carbon_emissions_kg=emissions,
        avoided_emissions_kg=avoided,
    )


def test_eco_score_reference_cases():
    # 8 km at 0.125 kg/km against a 0.5 kg/km baseline:
    # avoided share 0.75, emitted share 0.25 -> 75
    assert compute_eco_score(make_metrics(), 0.5, 0.125) == 75

    # zero-emission trip against the baseline is perfect
    assert compute_eco_score(make_metrics(emissions=0.0, avoided=4.0), 0.5, 0.0) == 100

    # travelling with the baseline itself scores 0
    assert compute_eco_score(make_metrics(emissions=4.0, avoided=0.0), 0.5, 0.5) == 0


def test_eco_score_is_bounded_and_integer():
    score = compute_eco_score(make_metrics(emissions=-2.0, avoided=99.0), 0.5, 0.125)
    assert isinstance(score, int)
    assert 0 <= score <= 100


def test_eco_score_monotonic_in_avoided_emissions():
    print("Running test_eco_score_monotonic_in_avoided_emissions...")
    previous = -1
    for step in range(0, 41):
        score = compute_eco_score(make_metrics(avoided=step * 0.1), 0.5, 0.125)
        assert score >= previous, f"score dropped at avoided={step * 0.1}"
        previous = score


def test_eco_score_non_increasing_in_emissions():
    previous = 101
    for step in range(0, 41):
        score = compute_eco_score(make_metrics(emissions=step * 0.1), 0.5, 0.125)
        assert score <= previous, f"score rose at emissions={step * 0.1}"
        previous = score


def test_eco_score_zero_distance():
    assert compute_eco_score(make_metrics(distance=0.0, emissions=0.0, avoided=0.0), 0.5, 0.1) == 100
    assert compute_eco_score(make_metrics(distance=0.0, emissions=0.3, avoided=0.0), 0.5, 0.1) == 0


def test_eco_score_is_deterministic():
    m = make_metrics()
    assert compute_eco_score(m, 0.5, 0.125) == compute_eco_score(m, 0.5, 0.125)


def test_eco_score_color_bands():
    assert get_eco_score_color(100) == "green"
    assert get_eco_score_color(80) == "green"
    assert get_eco_score_color(79) == "amber"
    assert get_eco_score_color(60) == "amber"
    assert get_eco_score_color(59) == "red"
    assert get_eco_score_color(0) == "red"
    assert get_eco_score_color(float("nan")) == "red"


def test_impact_tiers():
    assert classify_impact(1.0) == "high"
    assert classify_impact(0.2) == "medium"
    assert classify_impact(0.19) == "low"
    assert classify_impact(0.0) == "low"


def test_recommendations_sorted_and_tiered():
    profiles = [
        TransportProfile("slightly_better", 0.4375, 30.0),
        TransportProfile("much_better", 0.0, 15.0),
        TransportProfile("better", 0.375, 25.0),
        TransportProfile("worse", 0.75, 50.0),
    ]
    # 2 km at 0.5 kg/km
    metrics = make_metrics(distance=2.0, emissions=1.0, avoided=0.0, duration=4.0)

    recs = build_recommendations(metrics, profiles)

    assert [r.profile_id for r in recs] == ["much_better", "better", "slightly_better"]
    assert [r.impact for r in recs] == ["high", "medium", "low"]
    assert [r.carbon_savings_kg for r in recs] == [1.0, 0.25, 0.125]
    savings = [r.carbon_savings_kg for r in recs]
    assert savings == sorted(savings, reverse=True)


def test_recommendations_stable_for_ties():
    profiles = [
        TransportProfile("walking", 0.0, 5.0),
        TransportProfile("bicycle", 0.0, 15.0),
        TransportProfile("scooter", 0.0, 20.0),
    ]
    metrics = make_metrics(distance=4.0, emissions=2.0, avoided=0.0)

    recs = build_recommendations(metrics, profiles)

    assert [r.profile_id for r in recs] == ["walking", "bicycle", "scooter"]


def test_recommendations_explicit_candidate_rate():
    profiles = [TransportProfile("bicycle", 0.0, 15.0)]
    metrics = make_metrics(distance=10.0, emissions=0.0, avoided=0.0)

    assert build_recommendations(metrics, profiles) == []

    recs = build_recommendations(metrics, profiles, candidate_carbon_per_km=0.25)
    assert len(recs) == 1
    assert recs[0].carbon_savings_kg == 2.5
    assert "Bicycle" in recs[0].message


def test_recommendations_skip_broken_profiles():
    profiles = [
        TransportProfile("broken", float("nan"), 10.0),
        TransportProfile("negative", -1.0, 10.0),
        TransportProfile("bicycle", 0.0, 15.0),
    ]
    metrics = make_metrics(distance=2.0, emissions=1.0, avoided=0.0)

    recs = build_recommendations(metrics, profiles)

    assert [r.profile_id for r in recs] == ["bicycle"]


def test_recommendation_message_mentions_time_change():
    profiles = [TransportProfile("walking", 0.0, 5.0, name="Walking")]
    # 5 km in 10 minutes by car; walking takes 60 minutes
    metrics = make_metrics(distance=5.0, emissions=1.25, avoided=0.0, duration=10.0)

    recs = build_recommendations(metrics, profiles)

    assert recs[0].message.startswith("Switch to Walking")
    assert "50m longer" in recs[0].message


def test_evaluate_route_bicycle():
    profiles = default_transport_profiles()
    bike = find_profile(profiles, "bicycle")

    report = evaluate_route(10.0, bike, profiles)

    assert report.eco_score == 100
    assert report.color == "green"
    assert abs(report.metrics.avoided_emissions_kg - 2.5) < 1e-9
    assert report.formatted["distance"] == "10 km"
    assert report.formatted["duration"] == "40m"
    assert report.formatted["carbon_emissions"] == "0 g"
    assert report.formatted["avoided_emissions"] == "2.5 kg"
    # nothing in the catalogue emits strictly less than a bicycle
    assert report.recommendations == []


def test_evaluate_route_car_gets_recommendations():
    profiles = default_transport_profiles()
    car = find_profile(profiles, "car")

    report = evaluate_route(10.0, car, profiles)

    assert report.eco_score == 0
    assert report.color == "red"
    assert report.metrics.avoided_emissions_kg == 0.0
    ids = [r.profile_id for r in report.recommendations]
    assert ids[:2] == ["walking", "bicycle"]
    assert "car" not in ids
    assert all(r.impact == "high" for r in report.recommendations)


def test_evaluate_route_uses_default_catalogue():
    bike = TransportProfile("bicycle", 0.0, 15.0)
    report = evaluate_route(1.0, bike)
    assert report.eco_score == 100


if __name__ == "__main__":
    test_eco_score_reference_cases()
    test_eco_score_monotonic_in_avoided_emissions()
    test_recommendations_sorted_and_tiered()
    test_evaluate_route_bicycle()
    print("ALL TESTS PASSED")
