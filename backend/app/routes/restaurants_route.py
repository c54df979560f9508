import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.models.restaurant_model import SearchQuery, Restaurant
from app.services.Restaurants_service import RestaurantsService
from app.core.config import settings
from app.core.logger import logs

router = APIRouter()

# --- Dependency Injection ---
def get_restaurants_service() -> RestaurantsService:
    return RestaurantsService()

def parse_coordinate(value: Optional[str]) -> Optional[float]:
    """Parse a query-string number; anything unusable becomes None."""
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None

@router.get(
    "/restaurants",
    response_model=list[Restaurant],
    response_model_by_alias=True,
    response_model_exclude_none=True,
)
async def get_restaurants_endpoint(
    lat: Optional[str] = Query(None),
    lng: Optional[str] = Query(None),
    radius: Optional[str] = Query(None),
    service: RestaurantsService = Depends(get_restaurants_service)
):
    """
    Returns the restaurants around (lat, lng). Bad input yields an empty
    list rather than a validation error.
    """
    latitude = parse_coordinate(lat)
    longitude = parse_coordinate(lng)
    if latitude is None or longitude is None:
        logs.log(logging.WARNING, f"Rejected restaurant search: lat={lat!r}, lng={lng!r}")
        return []

    radius_in_meters = parse_coordinate(radius)
    if radius_in_meters is None or radius_in_meters <= 0:
        radius_in_meters = settings.DEFAULT_RADIUS_M

    query = SearchQuery(
        latitude=latitude,
        longitude=longitude,
        radius_in_meters=radius_in_meters,
    )
    return await service.find_all(query)
