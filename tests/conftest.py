import threading

import pytest

from routing.models import Provenance, RouteResult


class FakeResponse:
    """Stands in for requests.Response: status_code, ok, json()."""

    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """
    Records every request and answers from a queue of canned responses.
    A queued exception is raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self._lock = threading.Lock()

    def request(self, method, url, timeout=None, **kwargs):
        with self._lock:
            self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
            response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeProvider:
    """
    Implements the resolver's provider capability without any HTTP.
    `outcome` is a RouteResult to return or an exception to raise.
    """

    def __init__(self, name, outcome, configured=True, gate=None):
        self.name = name
        self.outcome = outcome
        self.configured = configured
        self.gate = gate  # threading.Event the call waits on, if set
        self.entered = threading.Event()
        self.calls = 0
        self._lock = threading.Lock()

    def is_configured(self):
        return self.configured

    def compute(self, request, timeout_ms):
        with self._lock:
            self.calls += 1
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


@pytest.fixture
def here_result():
    return RouteResult(time=15, distance=12000, source=Provenance.HERE_ROUTING_V8, has_ferry=False)


@pytest.fixture
def google_result():
    return RouteResult(time=10, distance=8000, source=Provenance.GOOGLE_ROUTES_V2, has_ferry=False)


@pytest.fixture
def no_provider_keys(monkeypatch):
    for name in ("HERE_API_KEY", "GOOGLE_MAPS_API_KEY", "GOOGLE_MAPS_API_KEY_WEB", "HERE_ROUTING_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
