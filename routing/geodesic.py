#Purpose: Closed-form fallback estimator.
#Great-circle distance between two coordinates plus a constant-speed
#driving time. Used as the last link of the resolver chain, so it must
#never fail and never touch the network.

import math

from routing.models import Coordinate, Provenance, RouteResult, minutes_from_seconds

EARTH_RADIUS_M = 6371000
DEFAULT_SPEED_KMH = 50


def haversine_meters(start: Coordinate, end: Coordinate) -> float:
    """
    Great-circle distance in meters (not rounded).
    """
    d_lat = math.radians(end.lat - start.lat)
    d_lng = math.radians(end.lng - start.lng)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(start.lat)) * math.cos(math.radians(end.lat)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def haversine(start: Coordinate, end: Coordinate, speed_kmh: float = DEFAULT_SPEED_KMH) -> RouteResult:
    """
    Estimate a drive as a straight line at a constant average speed.

    minutes = km / speed_kmh * 60, rounded, never below 1.
    """
    distance_m = haversine_meters(start, end)
    seconds = distance_m / 1000 / speed_kmh * 3600
    return RouteResult(
        time=minutes_from_seconds(seconds),
        distance=int(round(distance_m)),
        source=Provenance.HAVERSINE,
        has_ferry=False,
    )
