"""
Purpose: Provider credentials and endpoint URLs.
What it does:
- Reads API keys from the environment (a local .env file is loaded first)
- Tells the resolver which providers are usable (is_configured)
- Builds provider URLs so adapters never assemble credentials themselves

Example .env:
HERE_API_KEY=...
GOOGLE_MAPS_API_KEY=...

Rule: No HTTP here.
"""

from __future__ import annotations

import os
from typing import Optional
from urllib.parse import urlencode

from dotenv import load_dotenv

load_dotenv()

HERE_ROUTING_BASE_URL = "https://router.hereapi.com/v8/routes"
GOOGLE_ROUTES_URL = "https://routes.googleapis.com/directions/v2:computeRoutes"


class HereConfig:
    """
    HERE Routing API v8 configuration.

    An explicit api_key wins; otherwise HERE_API_KEY is read at call time.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self._api_key = api_key
        self._base_url = base_url

    def get_api_key(self) -> Optional[str]:
        return self._api_key or os.getenv("HERE_API_KEY") or None

    def is_configured(self) -> bool:
        return bool(self.get_api_key())

    @property
    def base_url(self) -> str:
        return self._base_url or os.getenv("HERE_ROUTING_BASE_URL") or HERE_ROUTING_BASE_URL

    def get_routing_url(self, from_lat: float, from_lng: float, to_lat: float, to_lng: float,
                        options: Optional[dict] = None) -> Optional[str]:
        """
        Routing URL for a car trip, or None when no key is configured.
        options={"road_only": True} adds avoid[features]=ferry.
        """
        api_key = self.get_api_key()
        if not api_key:
            return None

        options = options or {}
        params = [
            ("origin", f"{from_lat},{from_lng}"),
            ("destination", f"{to_lat},{to_lng}"),
            ("transportMode", "car"),
            ("routingMode", "fast"),
            ("return", "summary"),
        ]
        if options.get("road_only"):
            params.append(("avoid[features]", "ferry"))
        params.append(("apiKey", api_key))

        #keep ',' and '[]' readable, HERE accepts them unescaped
        return f"{self.base_url}?{urlencode(params, safe=',[]')}"


class GoogleConfig:
    """
    Google Routes API v2 configuration.

    An explicit api_key wins; otherwise GOOGLE_MAPS_API_KEY (or the legacy
    GOOGLE_MAPS_API_KEY_WEB) is read at call time.
    """
    routes_url = GOOGLE_ROUTES_URL

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key

    def get_api_key(self) -> Optional[str]:
        return (
            self._api_key
            or os.getenv("GOOGLE_MAPS_API_KEY")
            or os.getenv("GOOGLE_MAPS_API_KEY_WEB")
            or None
        )

    def is_configured(self) -> bool:
        return bool(self.get_api_key())
