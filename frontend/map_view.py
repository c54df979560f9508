"""Map state and folium rendering for the Proximity Food frontend."""
from dataclasses import dataclass
from html import escape
from typing import Optional

import folium

RADIUS_MIN_M = 1000
RADIUS_MAX_M = 20000
RADIUS_STEP_M = 500
RADIUS_DEFAULT_M = 5000
RADIUS_OPTIONS_M = list(range(RADIUS_MIN_M, RADIUS_MAX_M + RADIUS_STEP_M, RADIUS_STEP_M))

# ~11 m; keeps float noise in the map center from triggering refetches
CENTER_PRECISION = 4

@dataclass(frozen=True)
class ViewState:
    latitude: float
    longitude: float
    zoom: int

@dataclass(frozen=True)
class Point:
    lat: float
    lng: float

DEFAULT_VIEW = ViewState(latitude=40.7128, longitude=-74.006, zoom=12)

@dataclass(frozen=True)
class MapState:
    view: ViewState = DEFAULT_VIEW
    anchor: Optional[Point] = None
    pin_mode: bool = False
    # st_folium keeps reporting the last click on every rerun
    last_click: Optional[Point] = None

def search_center(anchor: Optional[Point], view: ViewState) -> Point:
    """The pinned anchor wins; otherwise search around the map center."""
    if anchor is not None:
        return Point(round(anchor.lat, CENTER_PRECISION), round(anchor.lng, CENTER_PRECISION))
    return Point(round(view.latitude, CENTER_PRECISION), round(view.longitude, CENTER_PRECISION))

def wrap_longitude(lng: float) -> float:
    """Leaflet keeps counting past the antimeridian; fold back into -180..180."""
    return ((lng + 180) % 360) - 180

def _point(value) -> Optional[Point]:
    if not isinstance(value, dict):
        return None
    lat, lng = value.get("lat"), value.get("lng")
    if lat is None or lng is None:
        return None
    return Point(float(lat), wrap_longitude(float(lng)))

def apply_map_event(state: MapState, event: Optional[dict]) -> MapState:
    """
    Fold the dict returned by st_folium into the map state.

    A moved map updates the view. A new click while pin mode is on drops
    the anchor there and leaves pin mode; other clicks are ignored.
    """
    if not event:
        return state

    view = state.view
    center = _point(event.get("center"))
    if center is not None:
        zoom = event.get("zoom")
        view = ViewState(center.lat, center.lng, zoom if zoom is not None else view.zoom)

    anchor, pin_mode = state.anchor, state.pin_mode
    click = _point(event.get("last_clicked"))
    if click is not None and click != state.last_click and pin_mode:
        anchor, pin_mode = click, False

    return MapState(
        view=view,
        anchor=anchor,
        pin_mode=pin_mode,
        last_click=click or state.last_click,
    )

def radius_km(radius_m: float) -> str:
    return f"{radius_m / 1000:g} km"

def radius_label(radius_m: float) -> str:
    return f"Radius: {radius_km(radius_m)}"

def popup_html(restaurant: dict) -> str:
    name = escape(str(restaurant.get("name", "")))
    description = escape(str(restaurant.get("description", "")))
    address = escape(str(restaurant.get("address", "")))
    rating = restaurant.get("rating", "")
    image = ""
    if restaurant.get("imageUrl"):
        image = f'<img src="{escape(restaurant["imageUrl"])}" style="width:100%;border-radius:4px;">'
    return (
        f'<div style="min-width:200px">{image}'
        f"<h4 style='margin:4px 0'>{name}</h4>"
        f"<p style='margin:0;color:#666'>{description}</p>"
        f"<p style='margin:4px 0 0 0;font-size:12px'>⭐ {rating} • {address}</p>"
        "</div>"
    )

def build_map(
    view: ViewState,
    restaurants: list[dict],
    anchor: Optional[Point] = None,
    user_location: Optional[Point] = None,
    radius_m: Optional[float] = None,
) -> folium.Map:
    m = folium.Map(location=[view.latitude, view.longitude], zoom_start=view.zoom)

    if radius_m:
        center = search_center(anchor, view)
        folium.Circle(
            location=[center.lat, center.lng],
            radius=radius_m,
            color="#1E88E5",
            fill=True,
            fill_opacity=0.05,
        ).add_to(m)

    if anchor is not None:
        folium.Marker(
            [anchor.lat, anchor.lng],
            tooltip="Search Location",
            icon=folium.Icon(color="red", icon="map-marker", prefix="fa"),
        ).add_to(m)

    if user_location is not None:
        folium.CircleMarker(
            [user_location.lat, user_location.lng],
            radius=8,
            color="white",
            weight=2,
            fill=True,
            fill_color="#2563EB",
            fill_opacity=1.0,
            tooltip="My Location",
        ).add_to(m)

    for restaurant in restaurants:
        try:
            location = [float(restaurant["latitude"]), float(restaurant["longitude"])]
        except (KeyError, TypeError, ValueError):
            continue
        folium.Marker(
            location,
            tooltip=restaurant.get("name"),
            popup=folium.Popup(popup_html(restaurant), max_width=280),
            icon=folium.Icon(color="orange", icon="cutlery", prefix="fa"),
        ).add_to(m)

    return m
