import math
from decimal import Decimal, ROUND_HALF_UP

from shopfinder.models import Coordinates

EARTH_RADIUS_KM = 6371


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers between two points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinates, b: Coordinates) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def format_distance(km: float) -> str:
    """
    Render a distance for display: whole meters below 1 km, otherwise
    kilometers with one decimal ("500m", "2.3km").
    """
    if km < 1:
        # Half-up, not banker's rounding
        return f"{int(math.floor(km * 1000 + 0.5))}m"
    # Rounds the exact binary value half-up, so 2.345 stays "2.3" and 1.25 gives "1.3"
    tenths = Decimal(km).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{tenths}km"
