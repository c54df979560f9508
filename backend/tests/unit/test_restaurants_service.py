"""
Unit tests for RestaurantsService.find_all against a mocked Overpass endpoint.
"""
import math

import httpx
import pytest

from app.models.restaurant_model import SearchQuery
from app.services.Restaurants_service import RestaurantsService


def test_overpass_query_template():
    query = RestaurantsService().build_overpass_query(40.7128, -74.006, 1500)

    assert query.startswith("[out:json][timeout:25];")
    for kind in ("node", "way"):
        for amenity in ("restaurant", "fast_food", "cafe"):
            assert f'{kind}["amenity"="{amenity}"](around:1500,40.7128,-74.006);' in query
    assert "out body;" in query
    assert "out skel qt;" in query


def test_fractional_radius_is_kept():
    query = RestaurantsService().build_overpass_query(1.0, 2.0, 1500.5)
    assert "(around:1500.5,1.0,2.0)" in query


@pytest.mark.asyncio
async def test_find_all_posts_query_and_maps_result(make_service, read_query, overpass_payload):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=overpass_payload)

    service = make_service(handler)
    restaurants = await service.find_all(SearchQuery(latitude=40.7128, longitude=-74.006, radius_in_meters=2000))

    assert [r.id for r in restaurants] == ["101", "102", "201"]
    [request] = seen
    assert request.method == "POST"
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"
    assert "(around:2000,40.7128,-74.006)" in read_query(request)


@pytest.mark.asyncio
@pytest.mark.parametrize("radius", [0, -10, math.nan, math.inf])
async def test_unusable_radius_falls_back_to_service_default(make_service, read_query, radius):
    queries = []

    def handler(request):
        queries.append(read_query(request))
        return httpx.Response(200, json={"elements": []})

    service = make_service(handler)
    await service.find_all(SearchQuery(latitude=1.0, longitude=2.0, radius_in_meters=radius))

    assert "(around:5000,1.0,2.0)" in queries[0]


@pytest.mark.asyncio
@pytest.mark.parametrize("lat,lng", [
    (math.nan, 2.0),
    (1.0, math.inf),
    (91.0, 2.0),
    (1.0, -181.0),
])
async def test_invalid_coordinates_skip_upstream(make_service, lat, lng):
    def handler(request):
        raise AssertionError("Overpass must not be called")

    service = make_service(handler)
    assert await service.find_all(SearchQuery(latitude=lat, longitude=lng, radius_in_meters=1000)) == []


@pytest.mark.asyncio
async def test_upstream_error_status_yields_empty_list(make_service):
    service = make_service(lambda request: httpx.Response(504, text="Gateway Timeout"))
    assert await service.find_all(SearchQuery(latitude=1.0, longitude=2.0, radius_in_meters=1000)) == []


@pytest.mark.asyncio
async def test_undecodable_body_yields_empty_list(make_service):
    service = make_service(lambda request: httpx.Response(200, text="<html>rate limited</html>"))
    assert await service.find_all(SearchQuery(latitude=1.0, longitude=2.0, radius_in_meters=1000)) == []


@pytest.mark.asyncio
async def test_connection_failure_yields_empty_list(make_service):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(handler)
    assert await service.find_all(SearchQuery(latitude=1.0, longitude=2.0, radius_in_meters=1000)) == []


@pytest.mark.asyncio
async def test_malformed_upstream_payload_yields_empty_list(make_service):
    service = make_service(lambda request: httpx.Response(200, json={"remark": "runtime error"}))
    assert await service.find_all(SearchQuery(latitude=1.0, longitude=2.0, radius_in_meters=1000)) == []
