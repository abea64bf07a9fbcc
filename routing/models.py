"""
Purpose: Core data models for the routing capability.
What it does:
- Defines the shapes every routing adapter speaks:
- Coordinate (lat, lng)
- RouteRequest (start, end, road_only)
- RouteResult (time in minutes, distance in meters, source, has_ferry)

Defines the Provenance enum (which subsystem produced a result) and the
cache key used to coalesce identical requests.

Rule: No HTTP calls, no provider logic. Models only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

DEFAULT_KEY_PRECISION = 5


class Provenance(str, Enum):
    """
    Tags a RouteResult with the subsystem that produced it.
    Downstream code checks for HAVERSINE to detect degraded quality.
    """
    HERE_ROUTING_V8 = "here_routing_v8"
    GOOGLE_ROUTES_V2 = "google_routes_v2"
    HAVERSINE = "haversine"


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for positive values (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def minutes_from_seconds(seconds: float) -> int:
    """Whole driving minutes, never below 1."""
    return max(1, round_half_up(seconds / 60))


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def __post_init__(self):
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"longitude out of range: {self.lng}")

    @classmethod
    def of(cls, value) -> Coordinate:
        """
        Accepts a Coordinate, a (lat, lng) tuple or a {"lat", "lng"} mapping.
        """
        if isinstance(value, Coordinate):
            return value
        if isinstance(value, dict):
            return cls(lat=float(value["lat"]), lng=float(value["lng"]))
        lat, lng = value
        return cls(lat=float(lat), lng=float(lng))

    def key(self, precision: int = DEFAULT_KEY_PRECISION) -> str:
        return f"{self.lat:.{precision}f},{self.lng:.{precision}f}"


@dataclass(frozen=True)
class RouteRequest:
    """
    road_only=True asks providers to avoid ferries and makes adapters that
    can see the path report whether a ferry slipped through anyway.
    """
    start: Coordinate
    end: Coordinate
    road_only: bool = False

    @classmethod
    def between(cls, start, end, road_only: bool = False) -> RouteRequest:
        return cls(start=Coordinate.of(start), end=Coordinate.of(end), road_only=road_only)


@dataclass(frozen=True)
class RouteResult:
    time: int  # minutes, >= 1
    distance: int  # meters, >= 0
    source: Provenance
    has_ferry: bool = False

    def __post_init__(self):
        if self.time < 1:
            raise ValueError(f"route time must be >= 1 minute, got {self.time}")
        if self.distance < 0:
            raise ValueError(f"route distance must be >= 0, got {self.distance}")

    @property
    def is_degraded(self) -> bool:
        return self.source == Provenance.HAVERSINE

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "distance": self.distance,
            "source": self.source.value,
            "hasFerry": self.has_ferry,
        }


def cache_key(request: RouteRequest, precision: int = DEFAULT_KEY_PRECISION) -> str:
    """
    "lat,lng|lat,lng|road" or "...|any".
    Coordinates closer than the precision (5 dp ~ 1.1 m) share a key.
    """
    flag = "road" if request.road_only else "any"
    return f"{request.start.key(precision)}|{request.end.key(precision)}|{flag}"
