"""
Purpose: Central configuration for the routing resolver.
What it does:

Stores all tunable knobs for caching and provider calls:

CACHE_MAX_ENTRIES = 10_000
CACHE_TTL_SECONDS = None (results never expire)
KEY_PRECISION = 5 decimal places (~1.1 m)
HERE / GOOGLE timeouts = 10 000 ms

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from routing.models import Provenance


@dataclass(frozen=True)
class ResolverPolicy:
    """
    Central configuration for the driving-time resolver.
    """

    # --- Result cache ---
    # Least recently used entries are evicted past this size.
    cache_max_entries: int = 10_000

    # Traffic-aware results go stale. None keeps them for the process lifetime.
    cache_ttl_seconds: Optional[float] = None

    # --- Coalescing granularity ---
    # Decimal places kept from each coordinate when building the cache key.
    key_precision: int = 5

    # --- Provider timeouts ---
    here_timeout_ms: int = 10_000
    google_timeout_ms: int = 10_000

    # --- Geodesic fallback ---
    fallback_speed_kmh: float = 50.0

    def timeout_for(self, provider_name: str) -> int:
        if provider_name == Provenance.GOOGLE_ROUTES_V2.value:
            return self.google_timeout_ms
        return self.here_timeout_ms

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if self.cache_max_entries <= 0:
            raise ValueError("cache_max_entries must be > 0")

        if self.cache_ttl_seconds is not None and self.cache_ttl_seconds <= 0:
            raise ValueError("cache_ttl_seconds must be > 0 or None")

        if not 0 <= self.key_precision <= 10:
            raise ValueError("key_precision must be between 0 and 10")

        if self.here_timeout_ms <= 0 or self.google_timeout_ms <= 0:
            raise ValueError("provider timeouts must be > 0")

        if self.fallback_speed_kmh <= 0:
            raise ValueError("fallback_speed_kmh must be > 0")


def default_resolver_policy() -> ResolverPolicy:
    """
    Convenience factory for the default policy.
    """
    p = ResolverPolicy()
    p.validate()
    return p
