from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Dict
from .constants import (
    CAR_KGCO2_PER_KM, CAR_SPEED_KMH, CAR_COST_PER_KM,
    ELECTRIC_CAR_KGCO2_PER_KM, ELECTRIC_CAR_SPEED_KMH, ELECTRIC_CAR_COST_PER_KM,
    PUBLIC_TRANSPORT_KGCO2_PER_KM, PUBLIC_TRANSPORT_SPEED_KMH, PUBLIC_TRANSPORT_COST_PER_KM,
    BICYCLE_SPEED_KMH, WALKING_SPEED_KMH,
    ImpactLevel, ColorToken
)

# Integer in [0, 100]
EcoScore = int


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float


@dataclass(frozen=True)
class RouteMetrics:
    """
    Measured or estimated figures for one candidate route.
    All fields are expected to be >= 0; consumers clamp anything else to 0.
    """
    distance_km: float
    duration_minutes: float
    carbon_emissions_kg: float
    avoided_emissions_kg: float = 0.0


@dataclass(frozen=True)
class TransportProfile:
    """
    Static per-mode factors:
    - carbon_per_km: kg CO2e per km (>= 0)
    - speed_kmh: average door-to-door speed (> 0)
    - cost_per_km: running cost per km (>= 0)
    """
    id: str
    carbon_per_km: float
    speed_kmh: float
    cost_per_km: float = 0.0
    name: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.id.replace("_", " ").title()


@dataclass(frozen=True)
class Recommendation:
    message: str
    impact: ImpactLevel
    carbon_savings_kg: Optional[float] = None
    profile_id: Optional[str] = None


@dataclass(frozen=True)
class UserLevel:
    level: int
    title: str


@dataclass(frozen=True)
class EcoReport:
    """
    Everything the presentation layer needs for the route analysis panel.
    """
    metrics: RouteMetrics
    eco_score: EcoScore
    color: ColorToken
    recommendations: List[Recommendation]
    equivalent_trees: float
    formatted: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RouteRecord:
    """
    One completed trip from a user's route history.
    """
    start: str
    end: str
    distance_km: float
    duration_minutes: float
    eco_score: float
    co2_saved_kg: float
    transport_mode: str = ""
    date: Optional[datetime] = None


@dataclass(frozen=True)
class HistorySummary:
    """
    Dashboard totals over a route history.
    """
    total_co2_saved_kg: float
    total_distance_km: float
    total_duration_minutes: float
    routes_completed: int
    average_eco_score: EcoScore
    level: UserLevel
    equivalent_trees: float


def default_transport_profiles() -> List[TransportProfile]:
    """
    Built-in transport catalogue, lowest emitters first.
    Factors come from the parameter workbook when present.
    """
    return [
        TransportProfile("walking", 0.0, WALKING_SPEED_KMH, 0.0, "Walking"),
        TransportProfile("bicycle", 0.0, BICYCLE_SPEED_KMH, 0.0, "Bicycle"),
        TransportProfile("electric_car", ELECTRIC_CAR_KGCO2_PER_KM, ELECTRIC_CAR_SPEED_KMH,
                         ELECTRIC_CAR_COST_PER_KM, "Electric Car"),
        TransportProfile("public_transport", PUBLIC_TRANSPORT_KGCO2_PER_KM, PUBLIC_TRANSPORT_SPEED_KMH,
                         PUBLIC_TRANSPORT_COST_PER_KM, "Public Transport"),
        TransportProfile("car", CAR_KGCO2_PER_KM, CAR_SPEED_KMH, CAR_COST_PER_KM, "Car"),
    ]
