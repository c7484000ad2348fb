from .models import (
    Location,
    RouteMetrics,
    TransportProfile,
    Recommendation,
    UserLevel,
    EcoReport,
    RouteRecord,
    HistorySummary,
    default_transport_profiles
)
from .constants import (
    MIN_ADDRESS_LENGTH,
    ECO_SCORE_COLORS
)
from .utils.formatting import (
    format_distance,
    format_duration,
    format_carbon,
    format_relative_time
)
from .utils.validation import (
    validate_address,
    validate_coordinates,
    try_parse_lat_lon
)
from .utils.calculations import (
    calculate_carbon_savings,
    estimate_route_metrics,
    equivalent_trees,
    get_user_level,
    haversine_km
)
from .scoring import (
    compute_eco_score,
    build_recommendations,
    get_eco_score_color,
    evaluate_route
)
from .history import summarize_route_history

__all__ = [
    "Location",
    "RouteMetrics",
    "TransportProfile",
    "Recommendation",
    "UserLevel",
    "EcoReport",
    "RouteRecord",
    "HistorySummary",
    "default_transport_profiles",
    "MIN_ADDRESS_LENGTH",
    "ECO_SCORE_COLORS",
    "format_distance",
    "format_duration",
    "format_carbon",
    "format_relative_time",
    "validate_address",
    "validate_coordinates",
    "try_parse_lat_lon",
    "calculate_carbon_savings",
    "estimate_route_metrics",
    "equivalent_trees",
    "get_user_level",
    "haversine_km",
    "compute_eco_score",
    "build_recommendations",
    "get_eco_score_color",
    "evaluate_route",
    "summarize_route_history"
]
