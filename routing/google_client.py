#Purpose: The Google Routes v2 "adapter/client" (computeRoutes).
#Sole responsibility: POST a typed route request to Google and normalize the answer.
#Ferry detection is not attempted here: the field mask only asks for
#duration and distance, so has_ferry is always False.

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from routing.config import GoogleConfig
from routing.errors import HttpStatusError, MalformedResponse, MissingCredentials, NoRoute, ZeroDistance
from routing.http import fetch_with_timeout
from routing.models import Provenance, RouteRequest, RouteResult, minutes_from_seconds

DEFAULT_TIMEOUT_MS = 10000
FIELD_MASK = "routes.duration,routes.distanceMeters"


def parse_duration_seconds(duration: Any) -> float:
    """
    Google sends durations as "123.4s" or as {"seconds": 123}.
    Missing values count as 0.
    """
    if duration is None:
        return 0.0
    try:
        if isinstance(duration, str):
            return float(duration.strip().rstrip("s") or 0)
        if isinstance(duration, dict):
            return float(duration.get("seconds") or 0)
        if isinstance(duration, (int, float)):
            return float(duration)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"Unparseable duration: {duration!r}", Provenance.GOOGLE_ROUTES_V2.value) from e
    raise MalformedResponse(f"Unrecognised duration: {duration!r}", Provenance.GOOGLE_ROUTES_V2.value)


class GoogleRoutesClient:
    """
    Google Routes API v2 adapter (fallback after HERE).
    """
    name = Provenance.GOOGLE_ROUTES_V2.value

    def __init__(self, config: Optional[GoogleConfig] = None, session: Any = None):
        self.config = config or GoogleConfig()
        self.session = session or requests.Session()

    def is_configured(self) -> bool:
        return self.config.is_configured()

    def build_body(self, request: RouteRequest) -> Dict[str, Any]:
        return {
            "origin": {
                "location": {
                    "latLng": {"latitude": request.start.lat, "longitude": request.start.lng}
                }
            },
            "destination": {
                "location": {
                    "latLng": {"latitude": request.end.lat, "longitude": request.end.lng}
                }
            },
            "travelMode": "DRIVE",
            "routingPreference": "TRAFFIC_AWARE_OPTIMAL",
            "computeAlternativeRoutes": False,
            "routeModifiers": {
                "avoidTolls": False,
                "avoidHighways": False,
                "avoidFerries": request.road_only is True,
            },
            "languageCode": "no-NO",
            "units": "METRIC",
        }

    def compute(self, request: RouteRequest, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> RouteResult:
        api_key = self.config.get_api_key()
        if not api_key:
            raise MissingCredentials("Google Maps API key missing", self.name)

        response = fetch_with_timeout(
            self.session, "POST", self.config.routes_url,
            timeout_ms=timeout_ms,
            provider=self.name,
            headers={
                "Content-Type": "application/json",
                "X-Goog-Api-Key": api_key,
                "X-Goog-FieldMask": FIELD_MASK,
            },
            json=self.build_body(request),
        )
        if not response.ok:
            raise HttpStatusError(response.status_code, self.name)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(f"Google response is not JSON: {e}", self.name) from e

        return self.parse_route(data)

    def parse_route(self, data: Dict[str, Any]) -> RouteResult:
        if not isinstance(data, dict):
            raise MalformedResponse("Google response is not an object", self.name)

        routes = data.get("routes") or []
        if not routes:
            raise NoRoute("No routes found in Google response", self.name)

        route = routes[0]
        seconds = parse_duration_seconds(route.get("duration"))
        #proto3 JSON drops zero-valued fields, so a missing distance means 0
        try:
            distance_m = int(route.get("distanceMeters") or 0)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"Google distanceMeters is not a number: {e}", self.name) from e
        if distance_m <= 0:
            raise ZeroDistance("Google returned 0 distance", self.name)

        return RouteResult(
            time=minutes_from_seconds(seconds),
            distance=distance_m,
            source=Provenance.GOOGLE_ROUTES_V2,
            has_ferry=False,
        )
