"""
Purpose: Error taxonomy for routing adapters.
Adapters raise these; the resolver catches them, logs and moves on to the
next provider. Nothing here ever reaches the resolver's caller.
"""

from typing import Optional


class RoutingError(Exception):
    """Base error for routing adapter failures."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class MissingCredentials(RoutingError):
    """Provider is not configured (no API key / no URL)."""
    pass


class HttpStatusError(RoutingError):
    """Upstream answered with a non-2xx status."""

    def __init__(self, status_code: int, provider: Optional[str] = None):
        super().__init__(f"HTTP error status {status_code}", provider)
        self.status_code = status_code


class NoRoute(RoutingError):
    """Upstream returned an empty route list."""
    pass


class MalformedResponse(RoutingError):
    """Upstream payload is missing the fields we need."""
    pass


class ZeroDistance(RoutingError):
    """Upstream reported a zero-length route; treated as garbage."""
    pass


class RoutingTimeout(RoutingError):
    """The call did not finish within its timeout."""
    pass


class TransportError(RoutingError):
    """Any other transport failure (refused connection, DNS, TLS...)."""
    pass
