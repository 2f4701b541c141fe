import pytest
import requests

from config.settings import default_settings
from geocoding.models import GeocodeResult, ReverseGeocodeResult
from network.models import Edge, Node, NodeType
from routing.models import GeoPoint

from fakes import FakeSession


@pytest.fixture
def settings():
    return default_settings()


@pytest.fixture
def bengaluru_start():
    return GeoPoint(lat=12.9716, lng=77.5946)


@pytest.fixture
def bengaluru_end():
    return GeoPoint(lat=12.9352, lng=77.6245)


@pytest.fixture
def connection_error_session():
    return FakeSession(error=requests.ConnectionError("connection refused"))


@pytest.fixture
def forum_mall():
    return GeocodeResult(
        lat=12.9349,
        lng=77.6197,
        display_name="Forum Mall, Koramangala, Bengaluru",
        address={"suburb": "Koramangala", "city": "Bengaluru"},
        place_id="1001",
        importance=0.6,
        category="mall",
    )


@pytest.fixture
def reverse_brigade_road():
    return ReverseGeocodeResult(
        display_name="Brigade Road, Bengaluru",
        address={"road": "Brigade Road", "city": "Bengaluru"},
    )


@pytest.fixture
def small_network():
    nodes = [
        Node("n1", "Peenya Industrial Area", NodeType.SOURCE, 13.0281, 77.5176, capacity=3000),
        Node("n2", "Hebbal Cold Storage", NodeType.INTERMEDIATE, 13.0358, 77.5972, capacity=1500),
        Node("n3", "Indiranagar Market", NodeType.CUSTOMER, 12.9719, 77.6412, perishability_hours=36),
    ]
    edges = [
        Edge("e1", "Peenya Industrial Area", "Hebbal Cold Storage", 12.3, 0.8, 450),
        Edge("e2", "Hebbal Cold Storage", "Indiranagar Market", 14.7, 0.7, 480),
    ]
    return nodes, edges
