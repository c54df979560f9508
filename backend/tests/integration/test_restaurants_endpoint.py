import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.restaurant_model import Restaurant
from app.routes.restaurants_route import get_restaurants_service
from app.services.Restaurants_service import RestaurantsService


class StubRestaurantsService:
    """Records every SearchQuery and answers with a fixed list."""

    def __init__(self, restaurants=None):
        self.queries = []
        self.restaurants = restaurants or []

    async def find_all(self, query):
        self.queries.append(query)
        return self.restaurants


@pytest.fixture
def stub_service():
    service = StubRestaurantsService([
        Restaurant(
            id="101", name="Joe's Pizza", description="Cuisine: pizza",
            latitude=40.713, longitude=-74.006, rating=4.2, address="7 Carmine Street New York",
        ),
        Restaurant(
            id="102", name="Corner Cafe", description="Food & Drink",
            latitude=40.714, longitude=-74.007, rating=3.8, address="Address not available",
            image_url="https://example.com/cafe.jpg",
        ),
    ])
    app.dependency_overrides[get_restaurants_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_restaurants_endpoint_returns_camel_case_list(client, stub_service):
    r = client.get("/restaurants?lat=40.7128&lng=-74.006&radius=2500")
    assert r.status_code == 200
    body = r.json()
    assert [item["id"] for item in body] == ["101", "102"]
    assert body[0] == {
        "id": "101",
        "name": "Joe's Pizza",
        "description": "Cuisine: pizza",
        "latitude": 40.713,
        "longitude": -74.006,
        "rating": 4.2,
        "address": "7 Carmine Street New York",
    }
    assert body[1]["imageUrl"] == "https://example.com/cafe.jpg"

    [query] = stub_service.queries
    assert (query.latitude, query.longitude, query.radius_in_meters) == (40.7128, -74.006, 2500)


@pytest.mark.parametrize("radius", [None, "", "abc", "0", "-50", "nan"])
def test_missing_or_bad_radius_uses_endpoint_default(client, stub_service, radius):
    params = {"lat": "40.7", "lng": "-74.0"}
    if radius is not None:
        params["radius"] = radius
    r = client.get("/restaurants", params=params)
    assert r.status_code == 200
    assert stub_service.queries[0].radius_in_meters == 1000


@pytest.mark.parametrize("params", [
    {},
    {"lat": "40.7"},
    {"lng": "-74.0"},
    {"lat": "north", "lng": "-74.0"},
    {"lat": "40.7", "lng": "inf"},
])
def test_bad_coordinates_yield_empty_list(client, stub_service, params):
    r = client.get("/restaurants", params=params)
    assert r.status_code == 200
    assert r.json() == []
    assert stub_service.queries == []


def test_upstream_failure_yields_empty_list(client):
    failing = RestaurantsService(
        overpass_url="https://overpass.test/api/interpreter",
        transport=httpx.MockTransport(lambda request: httpx.Response(429, text="Too Many Requests")),
    )
    app.dependency_overrides[get_restaurants_service] = lambda: failing
    try:
        r = client.get("/restaurants?lat=40.7&lng=-74.0&radius=1000")
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 200
    assert r.json() == []


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert body["status"] == "running"
    assert "restaurants" in body["endpoints"]
