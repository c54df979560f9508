import httpx
import logging
import math
import random
from typing import Optional

from app.models.restaurant_model import SearchQuery, Restaurant
from app.core.config import settings
from app.core.logger import logs

AMENITIES = ("restaurant", "fast_food", "cafe")
ADDRESS_TAGS = ("addr:housenumber", "addr:street", "addr:city")
NO_ADDRESS = "Address not available"
NO_CUISINE = "Food & Drink"

class RestaurantsService:
    def __init__(
        self,
        overpass_url: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None,
        rng: random.Random = None,
    ):
        self.overpass_url = overpass_url or settings.OVERPASS_URL
        self.timeout = timeout or settings.OVERPASS_TIMEOUT
        self.transport = transport
        self.rng = rng or random.Random()

    async def find_all(self, query: SearchQuery) -> list[Restaurant]:
        lat, lng = query.latitude, query.longitude
        if not self._valid_coordinates(lat, lng):
            logs.log(logging.WARNING, f"Skipping search with invalid coordinates: lat={lat}, lng={lng}")
            return []

        radius = query.radius_in_meters
        if not math.isfinite(radius) or radius <= 0:
            radius = settings.SERVICE_DEFAULT_RADIUS_M

        logs.log(logging.INFO, f"Fetching restaurants from Overpass: radius={radius}, lat={lat}, lng={lng}")
        data = await self._fetch_from_overpass(self.build_overpass_query(lat, lng, radius))
        if data is None:
            return []

        restaurants = self.map_overpass_response(data)
        logs.log(logging.INFO, f"Found {len(restaurants)} restaurants around {lat}, {lng}")
        return restaurants

    def build_overpass_query(self, lat: float, lng: float, radius: float) -> str:
        """Overpass QL: named food amenities (nodes and ways) within radius meters."""
        radius = int(radius) if float(radius).is_integer() else radius
        around = f"(around:{radius},{lat},{lng})"
        selectors = "\n".join(
            f'  {kind}["amenity"="{amenity}"]{around};'
            for kind in ("node", "way")
            for amenity in AMENITIES
        )
        # "> ; out skel qt" pulls in the member nodes of ways so a centroid can be derived
        return (
            f"[out:json][timeout:{settings.OVERPASS_QUERY_TIMEOUT}];\n"
            f"(\n{selectors}\n);\n"
            "out body;\n"
            ">;\n"
            "out skel qt;\n"
        )

    async def _fetch_from_overpass(self, overpass_query: str) -> Optional[dict]:
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.overpass_url,
                    data={"data": overpass_query},
                )
                response.raise_for_status()
                return response.json()
            except (httpx.HTTPError, ValueError) as e:
                logs.log(logging.ERROR, f"Error fetching data from Overpass API: {str(e)}")
                return None

    def map_overpass_response(self, data) -> list[Restaurant]:
        """
        Normalize an Overpass JSON payload into Restaurant models.

        Elements without a usable name or without derivable coordinates are
        dropped silently. Ways get the centroid of their member nodes when
        the payload carries them.
        """
        if not isinstance(data, dict) or not isinstance(data.get("elements"), list):
            return []

        elements = [el for el in data["elements"] if isinstance(el, dict)]
        node_coords = self._index_node_coordinates(elements)

        restaurants = []
        seen = set()
        for element in elements:
            tags = element.get("tags")
            if not isinstance(tags, dict):
                continue

            name = self._tag(tags, "name") or self._tag(tags, "name:en")
            if not name:
                continue

            element_id = element.get("id")
            key = (element.get("type"), element_id)
            if element_id is None or key in seen:
                continue

            coords = self._element_coordinates(element, node_coords)
            if coords is None:
                continue

            seen.add(key)
            restaurants.append(Restaurant(
                id=str(element_id),
                name=name,
                description=self._describe(tags),
                latitude=coords[0],
                longitude=coords[1],
                rating=round(self.rng.uniform(3, 5), 1),
                address=self.format_address(tags),
                image_url=self._image_url(tags),
            ))

        return restaurants

    @staticmethod
    def format_address(tags: dict) -> str:
        parts = [RestaurantsService._tag(tags, key) for key in ADDRESS_TAGS]
        parts = [p for p in parts if p]
        return " ".join(parts) if parts else NO_ADDRESS

    def _describe(self, tags: dict) -> str:
        cuisine = self._tag(tags, "cuisine")
        if not cuisine:
            return NO_CUISINE
        # OSM lists multiple cuisines as "italian;pizza"
        kinds = [c.strip().replace("_", " ") for c in cuisine.split(";") if c.strip()]
        return f"Cuisine: {', '.join(kinds)}"

    def _image_url(self, tags: dict) -> Optional[str]:
        image = self._tag(tags, "image")
        if image and image.startswith(("http://", "https://")):
            return image
        return None

    def _element_coordinates(self, element: dict, node_coords: dict) -> Optional[tuple[float, float]]:
        lat, lon = element.get("lat"), element.get("lon")
        if lat is None or lon is None:
            center = element.get("center")
            if isinstance(center, dict):
                lat, lon = center.get("lat"), center.get("lon")
        if lat is None or lon is None:
            return self._way_centroid(element, node_coords)

        try:
            lat, lon = float(lat), float(lon)
        except (TypeError, ValueError):
            return None
        return (lat, lon) if self._valid_coordinates(lat, lon) else None

    def _way_centroid(self, element: dict, node_coords: dict) -> Optional[tuple[float, float]]:
        refs = element.get("nodes")
        if element.get("type") != "way" or not isinstance(refs, list):
            return None

        # Closed ways repeat their first node at the end
        unique_refs = dict.fromkeys(ref for ref in refs if isinstance(ref, int))
        points = [node_coords[ref] for ref in unique_refs if ref in node_coords]
        if not points:
            return None

        lat = sum(p[0] for p in points) / len(points)
        lon = sum(p[1] for p in points) / len(points)
        return lat, lon

    def _index_node_coordinates(self, elements: list[dict]) -> dict:
        coords = {}
        for element in elements:
            if element.get("type") != "node" or not isinstance(element.get("id"), int):
                continue
            try:
                lat, lon = float(element["lat"]), float(element["lon"])
            except (KeyError, TypeError, ValueError):
                continue
            if self._valid_coordinates(lat, lon):
                coords[element["id"]] = (lat, lon)
        return coords

    @staticmethod
    def _tag(tags: dict, key: str) -> Optional[str]:
        value = tags.get(key)
        if not isinstance(value, str):
            return None
        return value.strip() or None

    @staticmethod
    def _valid_coordinates(lat: float, lng: float) -> bool:
        if lat is None or lng is None:
            return False
        if not (math.isfinite(lat) and math.isfinite(lng)):
            return False
        return -90 <= lat <= 90 and -180 <= lng <= 180
