from html import escape

import streamlit as st
from streamlit_folium import st_folium

from restaurants_api import BACKEND_URL, fetch_restaurants, check_backend_health
from map_view import (
    MapState,
    Point,
    ViewState,
    RADIUS_DEFAULT_M,
    RADIUS_OPTIONS_M,
    apply_map_event,
    build_map,
    radius_km,
    radius_label,
    search_center,
)

# Page configuration
st.set_page_config(
    page_title="Proximity Food",
    page_icon="🍔",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS for the restaurant cards
st.markdown("""
<style>
    .restaurant-card {
        padding: 0.75rem 1rem;
        border-radius: 0.5rem;
        margin: 0.5rem 0;
        border: 1px solid rgba(128, 128, 128, 0.3);
    }
    .restaurant-card:hover {
        background-color: rgba(30, 136, 229, 0.08);
    }
    .restaurant-name {
        font-weight: bold;
    }
    .restaurant-rating {
        float: right;
        font-size: 0.85rem;
        color: #1E88E5;
    }
    .restaurant-description {
        color: #888;
        font-size: 0.85rem;
    }
    .muted-center {
        text-align: center;
        color: #888;
        padding: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)

# Initialize session state
if "map_state" not in st.session_state:
    st.session_state.map_state = MapState()

if "radius" not in st.session_state:
    st.session_state.radius = RADIUS_DEFAULT_M

if "user_location" not in st.session_state:
    st.session_state.user_location = None

class RestaurantFetchError(Exception):
    """Raised inside the memoized loader so failed fetches are never cached."""

@st.cache_data(show_spinner=False, ttl=300)
def load_restaurants(lat: float, lng: float, radius: float):
    """Memoized per (lat, lng, radius), like a client-side query cache."""
    restaurants, error = fetch_restaurants(lat, lng, radius, base_url=BACKEND_URL)
    if error:
        raise RestaurantFetchError(error)
    return restaurants

def toggle_pin_mode():
    state = st.session_state.map_state
    st.session_state.map_state = MapState(
        view=state.view,
        anchor=state.anchor,
        pin_mode=not state.pin_mode,
        last_click=state.last_click,
    )

def clear_pin():
    state = st.session_state.map_state
    st.session_state.map_state = MapState(view=state.view, last_click=state.last_click)

def set_my_location(lat: float, lng: float):
    """Center on the user's position and search around it."""
    location = Point(lat, lng)
    state = st.session_state.map_state
    st.session_state.user_location = location
    st.session_state.map_state = MapState(
        view=ViewState(lat, lng, 14),
        anchor=location,
        pin_mode=False,
        last_click=state.last_click,
    )

def render_restaurant_card(restaurant: dict):
    st.markdown(f"""
    <div class="restaurant-card">
        <span class="restaurant-rating">{escape(str(restaurant.get('rating', '')))} ⭐</span>
        <div class="restaurant-name">{escape(str(restaurant.get('name', '')))}</div>
        <div class="restaurant-description">{escape(str(restaurant.get('description', '')))}</div>
        <small>{escape(str(restaurant.get('address', '')))}</small>
    </div>
    """, unsafe_allow_html=True)

state = st.session_state.map_state
center = search_center(state.anchor, state.view)

# Sidebar
with st.sidebar:
    st.title("🍔 Proximity Food")
    st.caption("Find good food near you")

    if not check_backend_health(BACKEND_URL):
        st.warning(f"⚠️ Backend not reachable at {BACKEND_URL}")

    st.divider()

    # Pin mode toggle
    pin_label = "📍 Click Map to Pin" if state.pin_mode else "📍 Set Pin"
    st.button(pin_label, on_click=toggle_pin_mode, use_container_width=True,
              type="primary" if state.pin_mode else "secondary")

    if state.anchor is not None:
        st.button("✖ Clear Pin", on_click=clear_pin, use_container_width=True)

    # Radius slider in km, bound to st.session_state.radius (meters) through its key
    st.select_slider(
        "Search radius (km)",
        options=RADIUS_OPTIONS_M,
        format_func=radius_km,
        key="radius",
    )
    st.caption(radius_label(st.session_state.radius))

    with st.expander("📡 My Location"):
        my_lat = st.number_input("Latitude", min_value=-90.0, max_value=90.0,
                                 value=center.lat, format="%.5f")
        my_lng = st.number_input("Longitude", min_value=-180.0, max_value=180.0,
                                 value=center.lng, format="%.5f")
        if st.button("Use this location", use_container_width=True):
            set_my_location(my_lat, my_lng)
            st.rerun()

    st.divider()

    list_container = st.container()

# Fetch restaurants for the current search center
with list_container:
    with st.spinner("Finding hidden gems..."):
        try:
            restaurants = load_restaurants(center.lat, center.lng, st.session_state.radius)
        except RestaurantFetchError as e:
            restaurants = []
            st.warning(str(e))

    if not restaurants:
        st.markdown('<p class="muted-center">No restaurants found nearby. Try moving the pin!</p>',
                    unsafe_allow_html=True)
    else:
        st.caption(f"{len(restaurants)} places within {st.session_state.radius / 1000:g} km")
        for restaurant in restaurants:
            render_restaurant_card(restaurant)

# Map
if state.pin_mode:
    st.info("Click anywhere on the map to drop the search pin.")

food_map = build_map(
    state.view,
    restaurants,
    anchor=state.anchor,
    user_location=st.session_state.user_location,
    radius_m=st.session_state.radius,
)
event = st_folium(
    food_map,
    center=[state.view.latitude, state.view.longitude],
    zoom=state.view.zoom,
    key="food_map",
    use_container_width=True,
    height=720,
    returned_objects=["center", "zoom", "last_clicked"],
)

# Refetch when the map moved or a pin was dropped
new_state = apply_map_event(state, event)
if new_state != state:
    st.session_state.map_state = new_state
    if search_center(new_state.anchor, new_state.view) != center or new_state.pin_mode != state.pin_mode:
        st.rerun()
