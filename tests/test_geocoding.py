import asyncio

import pytest

from geocoding.cache import GeocodeCache
from geocoding.input_parser import parse_input
from geocoding.models import GeocodeOptions, GeocodeResult, InputKind
from geocoding.nominatim_client import GeocodingError, NominatimClient
from geocoding.service import GeocodingService

from fakes import FakeNominatimClient, FakeResponse, FakeSession, FakeTextResponse


@pytest.mark.parametrize(
    "text, kind",
    [
        ("12.9716,77.5946", InputKind.COORDINATES),
        (" 12.9716 77.5946 ", InputKind.COORDINATES),
        ("-33.8688, 151.2093", InputKind.COORDINATES),
        ("560001", InputKind.POSTAL_CODE),
        ("Forum Mall", InputKind.ADDRESS),
        ("91.5,77.59", InputKind.ADDRESS),  # latitude out of range
        ("5600011", InputKind.ADDRESS),
    ],
)
def test_parse_input_classification(text, kind):
    assert parse_input(text).kind is kind


def test_parse_input_values():
    coords = parse_input("12.9716,77.5946")
    assert (coords.lat, coords.lng) == (12.9716, 77.5946)
    assert parse_input("560001").postal_code == "560001"
    assert parse_input("  Forum Mall ").address == "Forum Mall"


def test_is_within_region():
    service = GeocodingService(FakeNominatimClient())

    assert service.is_within_region(12.9716, 77.5946)
    assert service.is_within_region(12.7342, 77.4272)  # corner is inclusive
    assert not service.is_within_region(0, 0)


def test_repeated_geocode_hits_the_cache(forum_mall):
    client = FakeNominatimClient(places=[forum_mall])
    service = GeocodingService(client)
    options = GeocodeOptions(limit=5)

    first = asyncio.run(service.geocode("Forum Mall", options))
    second = asyncio.run(service.geocode("Forum Mall", GeocodeOptions(limit=5)))

    assert first == second == [forum_mall]
    assert len(client.search_calls) == 1


def test_different_options_are_cached_separately(forum_mall):
    client = FakeNominatimClient(places=[forum_mall])
    service = GeocodingService(client)

    asyncio.run(service.geocode("Forum Mall", GeocodeOptions(limit=5)))
    asyncio.run(service.geocode("Forum Mall", GeocodeOptions(limit=8)))

    assert len(client.search_calls) == 2


def test_geocode_defaults_and_region_filter(forum_mall):
    outside = GeocodeResult(lat=19.07, lng=72.87, display_name="Forum Mall, Mumbai")
    client = FakeNominatimClient(places=[outside, forum_mall])
    service = GeocodingService(client)

    results = asyncio.run(service.geocode("Forum Mall"))

    assert results == [forum_mall]
    call = client.search_calls[0]
    assert call["limit"] == 5
    assert call["countrycodes"] == "in"
    assert call["bounded"] is False
    assert call["viewbox"] == "12.7342,77.4272,13.1394,77.7814"


def test_geocode_failure_returns_empty_and_is_not_cached():
    client = FakeNominatimClient(fail=True)
    service = GeocodingService(client)

    assert asyncio.run(service.geocode("Forum Mall")) == []
    assert asyncio.run(service.geocode("Forum Mall")) == []
    assert len(client.search_calls) == 2


def test_reverse_geocode_memoized_on_six_decimals(reverse_brigade_road):
    client = FakeNominatimClient(reverse_result=reverse_brigade_road)
    service = GeocodingService(client)

    first = asyncio.run(service.reverse_geocode(12.97160001, 77.5946))
    second = asyncio.run(service.reverse_geocode(12.9716, 77.59460004))

    assert first is second
    assert len(client.reverse_calls) == 1


def test_reverse_geocode_failure_returns_none():
    service = GeocodingService(FakeNominatimClient(fail=True))

    assert asyncio.run(service.reverse_geocode(12.97, 77.59)) is None


def test_short_input_returns_no_suggestions():
    client = FakeNominatimClient()
    service = GeocodingService(client)

    assert asyncio.run(service.get_suggestions("ab")) == []
    assert client.search_calls == [] and client.reverse_calls == []


def test_suggestions_for_coordinates_wrap_reverse_result(reverse_brigade_road):
    service = GeocodingService(FakeNominatimClient(reverse_result=reverse_brigade_road))

    [suggestion] = asyncio.run(service.get_suggestions("12.9716,77.6094"))

    assert (suggestion.lat, suggestion.lng) == (12.9716, 77.6094)
    assert suggestion.display_name == "Brigade Road, Bengaluru"
    assert suggestion.place_id == "coordinates"
    assert suggestion.importance == 1
    assert suggestion.category == "coordinates"


def test_suggestions_for_unresolvable_coordinates_are_empty():
    service = GeocodingService(FakeNominatimClient())

    assert asyncio.run(service.get_suggestions("12.9716,77.6094")) == []


def test_suggestions_for_postal_code_and_address(forum_mall):
    client = FakeNominatimClient(places=[forum_mall])
    service = GeocodingService(client)

    asyncio.run(service.get_suggestions("560001"))
    asyncio.run(service.get_suggestions("Forum Mall"))

    postal, address = client.search_calls
    assert postal["query"] == "560001 Bengaluru Karnataka"
    assert postal["limit"] == 5
    assert address["query"] == "Forum Mall"
    assert address["limit"] == 8


def test_search_places_expands_category():
    client = FakeNominatimClient()
    service = GeocodingService(client)

    asyncio.run(service.search_places("Peenya", "warehouse"))

    assert client.search_calls[0]["query"] == "Peenya warehouse OR godown OR storage"
    assert client.search_calls[0]["limit"] == 10


def test_validate_road_access():
    service = GeocodingService(FakeNominatimClient())

    inside = service.validate_road_access(12.9716, 77.5946)
    outside = service.validate_road_access(0, 0)

    assert inside.accessible and inside.road_type == "accessible" and inside.restrictions == []
    assert not outside.accessible and outside.road_type == "out_of_bounds"
    assert outside.restrictions


def test_cache_is_write_once_and_bounded():
    cache = GeocodeCache(max_entries=2)
    cache.put("a", 1)
    cache.put("a", 2)
    assert cache.get("a") == 1

    cache.put("b", 2)
    cache.get("a")  # "b" is now least recently used
    cache.put("c", 3)

    assert "b" not in cache
    assert "a" in cache and "c" in cache
    assert len(cache) == 2


def test_unbounded_cache_keeps_everything():
    cache = GeocodeCache(max_entries=0)
    for i in range(1000):
        cache.put(i, i)

    assert len(cache) == 1000


def test_client_search_request_and_parsing(settings):
    payload = [
        {
            "lat": "12.9349",
            "lon": "77.6197",
            "display_name": "Forum Mall",
            "address": {"city": "Bengaluru"},
            "place_id": 1001,
            "importance": 0.6,
            "type": "mall",
        }
    ]
    session = FakeSession(FakeResponse(payload))
    client = NominatimClient(settings, session=session)

    [result] = client.search("Forum Mall", limit=5, countrycodes="in", bounded=True, viewbox="1,2,3,4")

    assert (result.lat, result.lng) == (12.9349, 77.6197)
    assert result.place_id == "1001"
    assert result.category == "mall"
    call = session.calls[0]
    assert call["url"].endswith("/search")
    assert call["params"]["bounded"] == "1"
    assert call["params"]["addressdetails"] == "1"
    assert call["params"]["accept-language"] == "en"
    assert call["headers"]["User-Agent"] == settings.user_agent


def test_client_raises_on_http_error_and_bad_payload(settings, connection_error_session):
    with pytest.raises(GeocodingError):
        NominatimClient(settings, session=FakeSession(FakeResponse([], status_code=500))).reverse(1, 2)
    with pytest.raises(GeocodingError):
        NominatimClient(settings, session=FakeSession(FakeResponse({"error": "Unable to geocode"}))).reverse(1, 2)
    with pytest.raises(GeocodingError):
        NominatimClient(settings, session=FakeSession(FakeResponse([{"lat": "x"}]))).search(
            "q", limit=1, countrycodes="in", bounded=False, viewbox=""
        )
    with pytest.raises(GeocodingError):
        NominatimClient(settings, session=connection_error_session).reverse(1, 2)


@pytest.mark.parametrize("importance", ["high", {"score": 1}, [0.4], True])
def test_unusable_importance_ranks_lowest(importance, settings):
    payload = [{"lat": "12.97", "lon": "77.59", "display_name": "Forum", "importance": importance}]
    client = NominatimClient(settings, session=FakeSession(FakeResponse(payload)))
    service = GeocodingService(client)

    [result] = asyncio.run(service.geocode("forum"))

    assert result.importance == 0.0
    assert result.display_name == "Forum"


def test_non_finite_coordinates_are_dropped(settings):
    body = '[{"lat": NaN, "lon": "77.59", "display_name": "Nowhere"}]'
    service = GeocodingService(NominatimClient(settings, session=FakeSession(FakeTextResponse(body))))

    assert asyncio.run(service.geocode("nowhere")) == []
