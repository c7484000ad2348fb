"""
Display strings for distances, durations, CO2 masses and timestamps.

Every formatter is total: negative, NaN or non-numeric inputs are clamped to
zero instead of raising.
"""
from datetime import datetime
from decimal import Decimal, Context, ROUND_HALF_UP
from typing import Optional, Union

from ..constants import METERS_THRESHOLD_KM, CARBON_GRAMS_THRESHOLD_KG
from .calculations import non_negative, round_half_up

# wide enough for any finite float quantized to a few decimals
_DECIMAL_CONTEXT = Context(prec=400)


def _trim(value: float, decimals: int) -> str:
    # half-up on the shortest repr, so 1.005 -> "1.01"; "100.0" -> "100", "2.10" -> "2.1"
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP, context=_DECIMAL_CONTEXT)
    text = format(rounded, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_distance(km: float) -> str:
    """
    Metres below METERS_THRESHOLD_KM (strict), kilometres with one decimal otherwise.

    >>> format_distance(0.4)
    '400 m'
    >>> format_distance(0.5)
    '0.5 km'
    """
    distance = non_negative(km)
    if distance < METERS_THRESHOLD_KM:
        return f"{round_half_up(distance * 1000.0)} m"
    return f"{_trim(distance, 1)} km"


def format_duration(minutes: float) -> str:
    """
    "Xh Ym", with the hours part dropped when it is zero.

    >>> format_duration(90)
    '1h 30m'
    >>> format_duration(45)
    '45m'
    """
    total = round_half_up(non_negative(minutes))
    hours, mins = divmod(total, 60)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h {mins}m"


def format_carbon(kg: float) -> str:
    """
    Grams below CARBON_GRAMS_THRESHOLD_KG, kilograms with up to two decimals otherwise.
    The unit is chosen after rounding to grams, so 0.9996 kg reads "1 kg".
    """
    mass = non_negative(kg)
    grams = round_half_up(mass * 1000.0)
    if grams < CARBON_GRAMS_THRESHOLD_KG * 1000.0:
        return f"{grams} g"
    return f"{_trim(mass, 2)} kg"


def format_relative_time(
    timestamp: Union[datetime, str], now: Optional[datetime] = None
) -> str:
    """
    Coarse age of a timestamp: "3d ago", "2h ago", "5m ago" or "Just now".
    Strings are parsed as ISO 8601. Future or unreadable timestamps give "Just now".
    """
    if isinstance(timestamp, str):
        try:
            timestamp = datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
        except ValueError:
            return "Just now"
    if not isinstance(timestamp, datetime):
        return "Just now"

    if now is None:
        now = datetime.now(timestamp.tzinfo)
    try:
        elapsed = (now - timestamp).total_seconds()
    except TypeError:
        # naive vs aware datetimes
        return "Just now"

    days = int(elapsed // 86400)
    hours = int(elapsed // 3600)
    minutes = int(elapsed // 60)
    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "Just now"
