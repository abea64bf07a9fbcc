#Marks routing as a package.
#Re-exports the public API (Resolver, the provider adapters, the models)
#so other modules import from routing without knowing internal file names.
#No business logic.

from .models import Coordinate, RouteRequest, RouteResult, Provenance, cache_key
from .geodesic import haversine, haversine_meters
from .here_client import HereRoutingClient
from .google_client import GoogleRoutesClient
from .policy import ResolverPolicy, default_resolver_policy
from .resolver import Resolver, RouteProvider, build_default_providers, get_default_resolver

__all__ = [
    "Coordinate",
    "RouteRequest",
    "RouteResult",
    "Provenance",
    "cache_key",
    "haversine",
    "haversine_meters",
    "HereRoutingClient",
    "GoogleRoutesClient",
    "ResolverPolicy",
    "default_resolver_policy",
    "Resolver",
    "RouteProvider",
    "build_default_providers",
    "get_default_resolver",
]
