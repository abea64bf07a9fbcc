import threading
import time

import pytest

from conftest import FakeProvider, FakeResponse, FakeSession
from routing.cache import RouteCache
from routing.config import GoogleConfig, HereConfig
from routing.errors import HttpStatusError, MissingCredentials
from routing.google_client import GoogleRoutesClient
from routing.here_client import HereRoutingClient
from routing.models import Provenance, RouteRequest, RouteResult
from routing.policy import ResolverPolicy
from routing.resolver import Resolver

START = (59.00000, 10.00000)
END = (59.10000, 10.10000)


@pytest.fixture
def request_any():
    return RouteRequest.between(START, END)


def test_first_resolve_hits_here_then_serves_from_cache(request_any):
    session = FakeSession(FakeResponse({"routes": [{"sections": [
        {"transport": {"mode": "car"}, "summary": {"duration": 900, "length": 12000}},
    ]}]}))
    resolver = Resolver([HereRoutingClient(HereConfig(api_key="k"), session=session)])

    first = resolver.resolve(request_any)
    second = resolver.resolve(RouteRequest.between(START, END))

    assert first == RouteResult(time=15, distance=12000, source=Provenance.HERE_ROUTING_V8, has_ferry=False)
    assert second is first
    assert len(session.calls) == 1
    assert resolver.cached_count == 1
    assert resolver.in_flight_count == 0


def test_concurrent_identical_requests_share_one_round_trip(request_any, here_result):
    gate = threading.Event()
    provider = FakeProvider("here_routing_v8", here_result, gate=gate)
    resolver = Resolver([provider])
    results = []

    def worker():
        results.append(resolver.resolve(RouteRequest.between(START, END)))

    first = threading.Thread(target=worker)
    first.start()
    assert provider.entered.wait(timeout=5)
    assert resolver.in_flight_count == 1

    second = threading.Thread(target=worker)
    second.start()
    time.sleep(0.05)
    gate.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert provider.calls == 1
    assert len(results) == 2
    assert results[0] == results[1] == here_result
    assert resolver.in_flight_count == 0


def test_zero_distance_from_here_falls_over_to_google(request_any):
    here = HereRoutingClient(HereConfig(api_key="k"), session=FakeSession(FakeResponse({"routes": [{"sections": [
        {"transport": {"mode": "car"}, "summary": {"duration": 60, "length": 0}},
    ]}]})))
    google = GoogleRoutesClient(GoogleConfig(api_key="g"), session=FakeSession(
        FakeResponse({"routes": [{"duration": "600s", "distanceMeters": 8000}]})
    ))
    resolver = Resolver([here, google])

    result = resolver.resolve(request_any)

    assert result == RouteResult(time=10, distance=8000, source=Provenance.GOOGLE_ROUTES_V2, has_ferry=False)


def test_sub_metre_here_route_never_surfaces_as_zero_distance(request_any, google_result):
    here = HereRoutingClient(HereConfig(api_key="k"), session=FakeSession(FakeResponse({"routes": [{"sections": [
        {"transport": {"mode": "car"}, "summary": {"duration": 30, "length": 0.4}},
    ]}]})))
    resolver = Resolver([here, FakeProvider("google_routes_v2", google_result)])

    result = resolver.resolve(request_any)

    assert result.distance != 0
    assert result == google_result


def test_nothing_configured_means_haversine_and_no_io(no_provider_keys):
    here_session = FakeSession(FakeResponse({}))
    google_session = FakeSession(FakeResponse({}))
    resolver = Resolver([
        HereRoutingClient(HereConfig(), session=here_session),
        GoogleRoutesClient(GoogleConfig(), session=google_session),
    ])

    result = resolver.resolve(RouteRequest.between((59.0, 10.0), (59.009, 10.0)))

    assert result.source == Provenance.HAVERSINE
    assert result.time == 1
    assert result.distance >= 0
    assert here_session.calls == [] and google_session.calls == []


def test_every_provider_failing_caches_the_haversine_floor(request_any, caplog):
    here = FakeProvider("here_routing_v8", HttpStatusError(500, "here_routing_v8"))
    google = FakeProvider("google_routes_v2", RuntimeError("unexpected"))
    resolver = Resolver([here, google])

    with caplog.at_level("WARNING", logger="routing.resolver"):
        result = resolver.resolve(request_any)
        again = resolver.resolve(request_any)

    assert result.source == Provenance.HAVERSINE
    assert again is result
    assert here.calls == 1 and google.calls == 1
    assert "here_routing_v8" in caplog.text
    assert "google_routes_v2" in caplog.text


def test_unconfigured_and_credentialless_providers_are_skipped_quietly(request_any, google_result, caplog):
    skipped = FakeProvider("here_routing_v8", AssertionError("must not be called"), configured=False)
    no_key = FakeProvider("other", MissingCredentials("no key"))
    google = FakeProvider("google_routes_v2", google_result)
    resolver = Resolver([skipped, no_key, google])

    with caplog.at_level("WARNING", logger="routing.resolver"):
        assert resolver.resolve(request_any) == google_result

    assert skipped.calls == 0
    assert caplog.records == []


def test_road_only_ferry_result_is_kept_as_is(request_any):
    ferry = RouteResult(time=42, distance=30000, source=Provenance.HERE_ROUTING_V8, has_ferry=True)
    here = FakeProvider("here_routing_v8", ferry)
    google = FakeProvider("google_routes_v2", AssertionError("no retry expected"))
    resolver = Resolver([here, google])

    road = RouteRequest.between(START, END, road_only=True)
    assert resolver.resolve(road) is ferry
    assert resolver.resolve(road) is ferry
    assert google.calls == 0

    # a different flag is a different key
    here.outcome = RouteResult(time=40, distance=29000, source=Provenance.HERE_ROUTING_V8)
    assert resolver.resolve(request_any).has_ferry is False
    assert here.calls == 2


def test_clear_cache_forces_a_new_round_trip(request_any, here_result):
    provider = FakeProvider("here_routing_v8", here_result)
    resolver = Resolver([provider])

    resolver.resolve(request_any)
    resolver.clear_cache()
    resolver.resolve(request_any)

    assert provider.calls == 2


def test_cache_is_bounded_by_policy(here_result):
    provider = FakeProvider("here_routing_v8", here_result)
    resolver = Resolver([provider], policy=ResolverPolicy(cache_max_entries=1))

    a = RouteRequest.between(START, END)
    b = RouteRequest.between(START, (59.2, 10.2))
    resolver.resolve(a)
    resolver.resolve(b)
    resolver.resolve(a)

    assert provider.calls == 3
    assert resolver.cached_count == 1


def test_route_cache_lru_and_ttl(here_result, google_result):
    now = [100.0]
    cache = RouteCache(max_entries=2, ttl_seconds=60, clock=lambda: now[0])

    cache.put("a", here_result)
    cache.put("b", google_result)
    assert cache.get("a") is here_result  # a is now most recent
    cache.put("c", google_result)
    assert "b" not in cache
    assert "a" in cache

    now[0] += 61
    assert cache.get("a") is None
    assert len(cache) == 1


def test_policy_validation():
    with pytest.raises(ValueError):
        ResolverPolicy(cache_max_entries=0).validate()
    with pytest.raises(ValueError):
        ResolverPolicy(cache_ttl_seconds=0).validate()
    with pytest.raises(ValueError):
        Resolver([], policy=ResolverPolicy(here_timeout_ms=0))

    policy = ResolverPolicy(here_timeout_ms=3000, google_timeout_ms=4000)
    assert policy.timeout_for("here_routing_v8") == 3000
    assert policy.timeout_for("google_routes_v2") == 4000
    assert policy.timeout_for(Provenance.GOOGLE_ROUTES_V2.value) == 4000
    assert policy.timeout_for(GoogleRoutesClient.name) == 4000
    assert policy.timeout_for(HereRoutingClient.name) == 3000


def test_resolver_passes_provider_timeouts(request_any, here_result):
    seen = []

    class RecordingProvider(FakeProvider):
        def compute(self, request, timeout_ms):
            seen.append(timeout_ms)
            return super().compute(request, timeout_ms)

    resolver = Resolver([RecordingProvider("google_routes_v2", here_result)],
                        policy=ResolverPolicy(google_timeout_ms=2500))
    resolver.resolve(request_any)
    assert seen == [2500]

