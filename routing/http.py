"""
Purpose: The one place routing adapters touch HTTP.
Wraps a requests call with a per-call timeout and turns transport
failures into routing errors. Status codes are left to the adapters.
"""

from typing import Any, Optional

import requests

from routing.errors import RoutingTimeout, TransportError


def fetch_with_timeout(
    session: Any,
    method: str,
    url: str,
    *,
    timeout_ms: int,
    provider: Optional[str] = None,
    **kwargs: Any,
) -> requests.Response:
    """
    Issue `method` on `url` through `session` and give up after `timeout_ms`.

    requests owns the timer (the `timeout=` argument), so nothing outlives
    the call on either the success or the failure path.

    Raises:
        RoutingTimeout: connect or read took longer than timeout_ms
        TransportError: any other requests failure
    """
    timeout_s = timeout_ms / 1000
    try:
        return session.request(method, url, timeout=timeout_s, **kwargs)
    except requests.Timeout as e:
        raise RoutingTimeout(f"{method} {url.split('?')[0]} timed out after {timeout_ms} ms", provider) from e
    except requests.RequestException as e:
        raise TransportError(f"{method} {url.split('?')[0]} failed: {e}", provider) from e
