import math

from features.common.models.station_types import Coordinate

EARTH_RADIUS_KM = 6371

def to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * math.pi / 180

def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Calculate the great circle distance between two points.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers
    """
    d_lat = to_radians(b.latitude - a.latitude)
    d_lon = to_radians(b.longitude - a.longitude)

    h = (math.sin(d_lat / 2) * math.sin(d_lat / 2) +
         math.cos(to_radians(a.latitude)) *
         math.cos(to_radians(b.latitude)) *
         math.sin(d_lon / 2) * math.sin(d_lon / 2))

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c
