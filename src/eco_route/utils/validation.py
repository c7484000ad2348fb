from math import isfinite
from numbers import Real
from typing import Optional

from ..constants import MIN_ADDRESS_LENGTH
from ..models import Location


def validate_address(text: str, min_length: int = MIN_ADDRESS_LENGTH) -> bool:
    """
    True when `text` is a string whose stripped length reaches `min_length`.
    """
    if not isinstance(text, str):
        return False
    return len(text.strip()) >= max(1, min_length)


def _is_real(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and isfinite(value)


def validate_coordinates(lat: float, lng: float) -> bool:
    """
    True iff -90 <= lat <= 90 and -180 <= lng <= 180 (bounds inclusive).
    Out-of-range values are reported, not corrected.
    """
    if not (_is_real(lat) and _is_real(lng)):
        return False
    return -90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0


def try_parse_lat_lon(text: str) -> Optional[Location]:
    """
    Try to parse 'lat,lon' text into a Location. Pairs outside the valid
    coordinate range are rejected.
    """
    if not isinstance(text, str):
        return None
    parts = text.split(",")
    if len(parts) != 2:
        return None
    try:
        lat = float(parts[0].strip())
        lon = float(parts[1].strip())
    except ValueError:
        return None
    if not validate_coordinates(lat, lon):
        return None
    return Location(lat=lat, lon=lon)
