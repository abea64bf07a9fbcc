#Purpose: The HERE Routing v8 "adapter/client".
#Sole responsibility: talk to HERE via HTTP and return a normalized RouteResult.
#Encapsulates HERE-specific details:
#URL construction (delegated to HereConfig, which owns the key)
#timeouts / error handling
#parsing response JSON (routes[0].sections[*]) into our internal shape
#ferry detection when ferry avoidance was requested
#It should not contain caching or fallback rules, that is the resolver's job.

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from routing.config import HereConfig
from routing.errors import HttpStatusError, MalformedResponse, MissingCredentials, NoRoute, ZeroDistance
from routing.http import fetch_with_timeout
from routing.models import Provenance, RouteRequest, RouteResult, minutes_from_seconds

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 10000


class HereRoutingClient:
    """
    HERE Routing API v8 adapter.

    - GET {base}?origin=..&destination=..&transportMode=car&return=summary
    - first route, first section summary -> duration (s) + length (m)
    - road_only requests are scanned for ferry sections (reported, not rejected)
    """
    name = Provenance.HERE_ROUTING_V8.value

    def __init__(self, config: Optional[HereConfig] = None, session: Any = None):
        self.config = config or HereConfig()
        self.session = session or requests.Session()

    def is_configured(self) -> bool:
        return self.config.is_configured()

    def compute(self, request: RouteRequest, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> RouteResult:
        url = self.config.get_routing_url(
            request.start.lat,
            request.start.lng,
            request.end.lat,
            request.end.lng,
            {"road_only": request.road_only},
        )
        if not url:
            raise MissingCredentials("HERE routing URL missing (no API key)", self.name)

        response = fetch_with_timeout(
            self.session, "GET", url,
            timeout_ms=timeout_ms,
            provider=self.name,
            headers={"Accept": "application/json"},
        )
        if not response.ok:
            raise HttpStatusError(response.status_code, self.name)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponse(f"HERE response is not JSON: {e}", self.name) from e

        return self.parse_route(data, road_only=request.road_only)

    #----------------
    # response parsing
    #----------------
    def parse_route(self, data: Dict[str, Any], road_only: bool = False) -> RouteResult:
        """
        Normalize a HERE v8 payload:
            {"routes": [{"sections": [{"transport": {"mode"}, "summary": {"duration", "length"}}]}]}
        """
        if not isinstance(data, dict):
            raise MalformedResponse("HERE response is not an object", self.name)

        routes = data.get("routes") or []
        if not routes:
            raise NoRoute("No routes found in HERE response", self.name)

        route = routes[0] #take the first route, HERE orders them best first
        sections = route.get("sections") or []

        has_ferry = False
        if road_only:
            ferry_sections = [
                section for section in sections
                if (section.get("transport") or {}).get("mode") == "ferry"
            ]
            if ferry_sections:
                has_ferry = True
                logger.warning(
                    f"HERE returned {len(ferry_sections)} ferry section(s) despite avoid[features]=ferry"
                )

        summary = sections[0].get("summary") if sections else None
        if not summary:
            raise MalformedResponse("No summary found in HERE route", self.name)

        duration_s = summary.get("duration") or 0
        try:
            length_m = int(summary.get("length") or 0)
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"HERE length is not a number: {e}", self.name) from e

        #a route under 1 m is garbage, make the resolver try the next provider
        if length_m <= 0:
            raise ZeroDistance("HERE returned 0 distance", self.name)

        return RouteResult(
            time=minutes_from_seconds(float(duration_s)),
            distance=length_m,
            source=Provenance.HERE_ROUTING_V8,
            has_ferry=has_ferry,
        )
