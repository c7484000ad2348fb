from typing import Literal
from .config import load_excel_config, coerce_param

# ============================================================================
# SETTINGS & CONSTANTS
# ============================================================================

# Parameters are read once, at import. Every key has a built-in default so the
# library works without a workbook; see format_excel.py for the template.
_config = load_excel_config()


def _get(key, default):
    return coerce_param(_config, key, default)


# Reporting
DECIMALS = _get("DECIMALS", 2)

# Validation
MIN_ADDRESS_LENGTH = _get("MIN_ADDRESS_LENGTH", 5)

# Formatting thresholds
METERS_THRESHOLD_KM = _get("METERS_THRESHOLD_KM", 0.5)
CARBON_GRAMS_THRESHOLD_KG = _get("CARBON_GRAMS_THRESHOLD_KG", 1.0)

# Recommendation impact tiers (kg CO2e saved)
IMPACT_HIGH_KG = _get("IMPACT_HIGH_KG", 1.0)
IMPACT_MEDIUM_KG = _get("IMPACT_MEDIUM_KG", 0.2)

# Eco score
SCORE_AVOIDED_WEIGHT = _get("SCORE_AVOIDED_WEIGHT", 0.5)
SCORE_GREEN_MIN = _get("SCORE_GREEN_MIN", 80)
SCORE_AMBER_MIN = _get("SCORE_AMBER_MIN", 60)

# Equivalences
KG_CO2_PER_TREE_YEAR = _get("KG_CO2_PER_TREE_YEAR", 21.0)

# User levels (cumulative kg CO2e saved)
LEVEL_5_MIN_KG = _get("LEVEL_5_MIN_KG", 10.0)
LEVEL_4_MIN_KG = _get("LEVEL_4_MIN_KG", 5.0)
LEVEL_3_MIN_KG = _get("LEVEL_3_MIN_KG", 2.0)
LEVEL_2_MIN_KG = _get("LEVEL_2_MIN_KG", 0.5)

# Transport catalogue (kg CO2e/km, km/h, currency/km)
BASELINE_MODE = _get("BASELINE_MODE", "car")

CAR_KGCO2_PER_KM = _get("CAR_KGCO2_PER_KM", 0.25)
CAR_SPEED_KMH = _get("CAR_SPEED_KMH", 40.0)
CAR_COST_PER_KM = _get("CAR_COST_PER_KM", 0.45)

ELECTRIC_CAR_KGCO2_PER_KM = _get("ELECTRIC_CAR_KGCO2_PER_KM", 0.05)
ELECTRIC_CAR_SPEED_KMH = _get("ELECTRIC_CAR_SPEED_KMH", 40.0)
ELECTRIC_CAR_COST_PER_KM = _get("ELECTRIC_CAR_COST_PER_KM", 0.15)

PUBLIC_TRANSPORT_KGCO2_PER_KM = _get("PUBLIC_TRANSPORT_KGCO2_PER_KM", 0.08)
PUBLIC_TRANSPORT_SPEED_KMH = _get("PUBLIC_TRANSPORT_SPEED_KMH", 25.0)
PUBLIC_TRANSPORT_COST_PER_KM = _get("PUBLIC_TRANSPORT_COST_PER_KM", 0.10)

BICYCLE_SPEED_KMH = _get("BICYCLE_SPEED_KMH", 15.0)
WALKING_SPEED_KMH = _get("WALKING_SPEED_KMH", 5.0)

# ============================================================================
# TYPES (Code constructs, not excel parameters)
# ============================================================================

ImpactLevel = Literal["low", "medium", "high"]
ColorToken = Literal["green", "amber", "red"]

# Hex colours used by the dashboard badges
ECO_SCORE_COLORS = {
    "green": "#10b981",
    "amber": "#f59e0b",
    "red": "#ef4444",
}
