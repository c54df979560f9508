"""
Shared fixtures: canned Overpass payloads and a service wired to httpx.MockTransport.
"""
import random
from urllib.parse import parse_qs

import httpx
import pytest

from app.services.Restaurants_service import RestaurantsService


@pytest.fixture
def overpass_payload():
    """A trimmed Overpass response for `out body; >; out skel qt;`."""
    return {
        "version": 0.6,
        "elements": [
            {
                "type": "node",
                "id": 101,
                "lat": 40.7130,
                "lon": -74.0060,
                "tags": {
                    "amenity": "restaurant",
                    "name": "Joe's Pizza",
                    "cuisine": "pizza;italian",
                    "addr:housenumber": "7",
                    "addr:street": "Carmine Street",
                    "addr:city": "New York",
                },
            },
            {
                "type": "node",
                "id": 102,
                "lat": 40.7140,
                "lon": -74.0070,
                "tags": {"amenity": "cafe", "name:en": "Corner Cafe"},
            },
            {
                # No usable name
                "type": "node",
                "id": 103,
                "lat": 40.7150,
                "lon": -74.0080,
                "tags": {"amenity": "fast_food"},
            },
            {
                "type": "way",
                "id": 201,
                "nodes": [901, 902, 903, 901],
                "tags": {"amenity": "restaurant", "name": "Food Hall"},
            },
            # Skeleton nodes of way 201
            {"type": "node", "id": 901, "lat": 40.70, "lon": -74.00},
            {"type": "node", "id": 902, "lat": 40.72, "lon": -74.02},
            {"type": "node", "id": 903, "lat": 40.71, "lon": -74.01},
        ],
    }


@pytest.fixture
def read_query():
    """Extract the Overpass QL sent as the form field `data`."""
    def _read(request: httpx.Request) -> str:
        return parse_qs(request.content.decode())["data"][0]
    return _read


@pytest.fixture
def make_service():
    """Build a RestaurantsService whose HTTP calls go to `handler`."""
    def _make(handler):
        return RestaurantsService(
            overpass_url="https://overpass.test/api/interpreter",
            transport=httpx.MockTransport(handler),
            rng=random.Random(42),
        )
    return _make
