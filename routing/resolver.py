"""
Purpose: Driving-time resolver (cache + single-flight + provider fallback).
What it does:
- Looks up a finished result in the route cache (no network)
- Joins an identical request that is already in flight instead of starting a new one
- Otherwise walks the provider chain in priority order (HERE -> Google by default)
- Falls through to the haversine estimate when every provider fails or none is configured

resolve() never raises. RouteResult.source tells callers which link of the
chain answered, so they can detect a degraded (haversine) answer.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from typing import Dict, List, Optional, Protocol, Sequence

from routing.cache import RouteCache
from routing.errors import MissingCredentials
from routing.geodesic import haversine
from routing.models import RouteRequest, RouteResult, cache_key
from routing.policy import ResolverPolicy, default_resolver_policy

logger = logging.getLogger(__name__)


class RouteProvider(Protocol):
    """
    The capability set the resolver needs from an adapter.
    Adding a provider means appending one of these to the chain.
    """
    name: str

    def is_configured(self) -> bool: ...

    def compute(self, request: RouteRequest, timeout_ms: int) -> RouteResult: ...


class Resolver:
    """
    Resolves RouteRequests to RouteResults for the lifetime of the application.

    Thread-safe: a single lock spans the cache lookup, the in-flight lookup
    and the installation of a new pending entry, so concurrent callers with
    the same key share one provider round-trip.
    """

    def __init__(self, providers: Sequence[RouteProvider], policy: Optional[ResolverPolicy] = None):
        self.providers: List[RouteProvider] = list(providers)
        self.policy = policy or default_resolver_policy()
        self.policy.validate()

        self._lock = threading.Lock()
        self._results = RouteCache(
            max_entries=self.policy.cache_max_entries,
            ttl_seconds=self.policy.cache_ttl_seconds,
        )
        self._in_flight: Dict[str, Future] = {}

    # --- Public API ---

    def resolve(self, request: RouteRequest) -> RouteResult:
        key = cache_key(request, self.policy.key_precision)

        with self._lock:
            cached = self._results.get(key)
            if cached is not None:
                logger.debug(f"route cache hit {key}")
                return cached

            pending = self._in_flight.get(key)
            owner = pending is None
            if owner:
                #install before any I/O so later arrivals join this one
                pending = Future()
                self._in_flight[key] = pending

        if not owner:
            logger.debug(f"joining in-flight route request {key}")
            return pending.result()

        result = None
        try:
            try:
                result = self._run_chain(request)
            except Exception:
                #the chain itself blew up (not a provider); waiters still get the floor
                logger.exception(f"route chain failed unexpectedly for {key}")
                result = self._fallback(request)
        finally:
            with self._lock:
                if result is not None:
                    #cache write happens before waiters are released
                    self._results.put(key, result)
                    pending.set_result(result)
                else:
                    pending.set_exception(RuntimeError(f"route resolution aborted for {key}"))
                self._in_flight.pop(key, None)

        return result

    def resolve_between(self, start, end, road_only: bool = False) -> RouteResult:
        """
        Convenience wrapper taking Coordinates, (lat, lng) tuples or mappings.
        """
        return self.resolve(RouteRequest.between(start, end, road_only=road_only))

    def clear_cache(self) -> None:
        with self._lock:
            self._results.clear()

    @property
    def cached_count(self) -> int:
        with self._lock:
            return len(self._results)

    @property
    def in_flight_count(self) -> int:
        with self._lock:
            return len(self._in_flight)

    # --- Internal helpers ---

    def _run_chain(self, request: RouteRequest) -> RouteResult:
        for provider in self.providers:
            if not provider.is_configured():
                logger.debug(f"skipping {provider.name}: not configured")
                continue

            try:
                return provider.compute(request, self.policy.timeout_for(provider.name))
            except MissingCredentials as e:
                logger.debug(f"skipping {provider.name}: {e}")
            except Exception as e:
                logger.warning(f"{provider.name} routing failed, trying next provider: {e}")

        return self._fallback(request)

    def _fallback(self, request: RouteRequest) -> RouteResult:
        logger.info("all routing providers unavailable, using haversine estimate")
        return haversine(request.start, request.end, speed_kmh=self.policy.fallback_speed_kmh)


def build_default_providers(session=None) -> List[RouteProvider]:
    """
    Default chain: HERE first, Google Routes second. Unconfigured
    providers stay in the list and are skipped at resolve time.
    """
    from routing.google_client import GoogleRoutesClient
    from routing.here_client import HereRoutingClient

    return [HereRoutingClient(session=session), GoogleRoutesClient(session=session)]


_default_resolver: Optional[Resolver] = None
_default_lock = threading.Lock()


def get_default_resolver() -> Resolver:
    """
    Process-wide resolver built from environment configuration.
    Prefer constructing and owning a Resolver; this is for the outermost boundary.
    """
    global _default_resolver
    with _default_lock:
        if _default_resolver is None:
            _default_resolver = Resolver(build_default_providers())
        return _default_resolver
