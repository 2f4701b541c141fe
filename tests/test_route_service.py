import asyncio
import threading

import pytest

from routing import geo
from routing.models import GeoPoint, RouteProfile, RouteSource
from routing.ors_client import (
    MalformedRouteResponse,
    ORSClient,
    RoutingEmptyResult,
    parse_route_response,
)
from routing.route_service import RouteProvider
from routing.transport_modes import TransportMode

from fakes import FakeResponse, FakeSession, FakeTextResponse

BACKEND_PAYLOAD = {
    "routes": [
        {
            "summary": {"distance": 1500.0, "duration": 300.0},
            "geometry": {"coordinates": [[77.5946, 12.9716], [77.6000, 12.9700], [77.6245, 12.9352]]},
            "segments": [
                {
                    "distance": 1500.0,
                    "duration": 300.0,
                    "steps": [
                        {"instruction": "Head south on MG Road", "way_points": [0, 1]},
                        {"instruction": "Arrive at destination", "way_points": [2, 2]},
                    ],
                }
            ],
        }
    ]
}


def make_provider(session, settings):
    return RouteProvider(ORSClient(settings, session=session), settings=settings)


def test_backend_route_cost_includes_hourly_surcharge(settings, bengaluru_start, bengaluru_end):
    session = FakeSession(FakeResponse(BACKEND_PAYLOAD))
    provider = make_provider(session, settings)

    result = asyncio.run(provider.calculate_route(bengaluru_start, bengaluru_end, TransportMode.HEAVY_GOODS_VEHICLE))

    # 1.5km * 25 + (300s / 3600) * 50 = 41.67
    assert result.cost == 42
    assert result.distance_m == 1500.0
    assert result.duration_s == 300.0
    assert result.source is RouteSource.BACKEND
    assert result.failure is None
    assert result.geometry[0] == GeoPoint(12.9716, 77.5946)
    assert result.geometry[-1] == GeoPoint(12.9352, 77.6245)


def test_backend_segments_map_way_points_to_geometry(settings, bengaluru_start, bengaluru_end):
    session = FakeSession(FakeResponse(BACKEND_PAYLOAD))
    result = asyncio.run(make_provider(session, settings).calculate_route(bengaluru_start, bengaluru_end))

    assert len(result.segments) == 1
    segment = result.segments[0]
    assert segment.instructions == ["Head south on MG Road", "Arrive at destination"]
    assert segment.geometry == [
        result.geometry[0],
        result.geometry[1],
        result.geometry[2],
        result.geometry[2],
    ]
    assert result.instructions == segment.instructions


def test_request_uses_backend_profile_and_lng_lat(settings, bengaluru_start, bengaluru_end):
    session = FakeSession(FakeResponse(BACKEND_PAYLOAD))
    provider = make_provider(session, settings)

    asyncio.run(provider.calculate_route(bengaluru_start, bengaluru_end, TransportMode.BICYCLE, RouteProfile.SHORTEST))

    call = session.calls[0]
    assert call["url"].endswith("/cycling-regular")
    assert call["params"]["start"] == "77.5946,12.9716"
    assert call["params"]["end"] == "77.6245,12.9352"
    assert call["params"]["preference"] == "shortest"
    assert call["params"]["format"] == "json"
    assert call["params"]["instructions"] == "true"
    assert call["timeout"] == settings.http_timeout_s


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(FakeResponse({"error": "quota"}, status_code=503)),
        FakeSession(FakeResponse({"routes": []})),
        FakeSession(FakeResponse({"routes": [{"summary": {}}]})),
        FakeSession(FakeResponse(ValueError("not json"))),
    ],
    ids=["http-503", "no-routes", "malformed", "invalid-json"],
)
def test_backend_failures_fall_back_to_straight_line(session, settings, bengaluru_start, bengaluru_end):
    result = asyncio.run(make_provider(session, settings).calculate_route(bengaluru_start, bengaluru_end))

    assert result.source is RouteSource.FALLBACK
    assert result.failure
    assert result.geometry == [bengaluru_start, bengaluru_end]


def test_fallback_route_has_no_surcharge(settings, bengaluru_start, bengaluru_end, connection_error_session):
    provider = make_provider(connection_error_session, settings)

    result = asyncio.run(provider.calculate_route(bengaluru_start, bengaluru_end, TransportMode.LIGHT_COMMERCIAL_VEHICLE))

    expected_m = geo.distance(bengaluru_start, bengaluru_end)
    expected_km = expected_m / 1000
    assert result.distance_m == pytest.approx(expected_m)
    assert result.duration_s == pytest.approx(expected_km / 80 * 3600)
    assert result.cost == geo.round_half_up(expected_km * 15)
    assert result.segments[0].instructions == [f"Travel {expected_km:.1f}km from start to destination"]
    assert result.segments[0].geometry == [bengaluru_start, bengaluru_end]
    assert "connection refused" in result.failure


def test_route_between_distinct_points_is_positive(settings, bengaluru_start, bengaluru_end, connection_error_session):
    provider = make_provider(connection_error_session, settings)

    for mode in TransportMode:
        result = asyncio.run(provider.calculate_route(bengaluru_start, bengaluru_end, mode))
        assert result.distance_m > 0
        assert result.duration_s > 0
        assert result.cost >= 0


def test_route_to_same_point_has_zero_distance(settings, bengaluru_start, connection_error_session):
    provider = make_provider(connection_error_session, settings)

    result = asyncio.run(provider.calculate_route(bengaluru_start, bengaluru_start))

    assert result.distance_m == 0
    assert result.cost == 0


def test_parse_rejects_way_point_outside_geometry():
    payload = {
        "routes": [
            {
                "summary": {"distance": 10, "duration": 2},
                "geometry": {"coordinates": [[77.0, 12.0], [77.1, 12.1]]},
                "segments": [{"distance": 10, "duration": 2, "steps": [{"instruction": "x", "way_points": [0, 5]}]}],
            }
        ]
    }
    with pytest.raises(MalformedRouteResponse):
        parse_route_response(payload)


def test_parse_treats_missing_routes_as_empty_result():
    with pytest.raises(RoutingEmptyResult):
        parse_route_response({"routes": []})
    with pytest.raises(RoutingEmptyResult):
        parse_route_response({})


@pytest.mark.parametrize(
    "summary",
    ['{"distance": NaN, "duration": 300}', '{"distance": 1500, "duration": Infinity}'],
    ids=["nan-distance", "infinite-duration"],
)
def test_non_finite_summary_falls_back(summary, settings, bengaluru_start, bengaluru_end):
    body = (
        '{"routes": [{"summary": ' + summary + ', '
        '"geometry": {"coordinates": [[77.5946, 12.9716], [77.6245, 12.9352]]}, "segments": []}]}'
    )
    provider = make_provider(FakeSession(FakeTextResponse(body)), settings)

    result = asyncio.run(provider.calculate_route(bengaluru_start, bengaluru_end))

    assert result.source is RouteSource.FALLBACK
    assert "not finite" in result.failure
    assert result.cost == geo.round_half_up(geo.distance(bengaluru_start, bengaluru_end) / 1000 * 25)


def test_parse_rejects_non_finite_geometry():
    payload = {
        "routes": [
            {
                "summary": {"distance": 10, "duration": 2},
                "geometry": {"coordinates": [[77.0, 12.0], [float("nan"), 12.1]]},
                "segments": [],
            }
        ]
    }
    with pytest.raises(MalformedRouteResponse):
        parse_route_response(payload)


def test_default_sessions_are_per_thread(settings):
    client = ORSClient(settings)
    sessions = []

    worker = threading.Thread(target=lambda: sessions.append(client.session_for_thread()))
    worker.start()
    worker.join()

    assert client.session_for_thread() is client.session_for_thread()
    assert sessions[0] is not client.session_for_thread()


def test_injected_session_is_shared(settings, connection_error_session):
    client = ORSClient(settings, session=connection_error_session)

    assert client.session_for_thread() is connection_error_session
