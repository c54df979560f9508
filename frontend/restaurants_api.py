"""HTTP calls from the Streamlit frontend to the Proximity Food backend."""
import os
import requests

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

def fetch_restaurants(
    lat: float,
    lng: float,
    radius: float,
    base_url: str = BACKEND_URL,
    session=None,
) -> tuple[list[dict], str | None]:
    """
    Fetch restaurants around (lat, lng).

    Returns (restaurants, error). On any failure the list is empty and the
    error holds a message suitable for display.
    """
    http = session or requests
    try:
        response = http.get(
            f"{base_url}/restaurants",
            params={"lat": lat, "lng": lng, "radius": radius},
            timeout=40  # Overpass can be slow for large radii
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.ConnectionError:
        return [], "Cannot connect to backend. Make sure the backend is running on port 8000."
    except requests.exceptions.Timeout:
        return [], "Request timed out. Try a smaller radius."
    except requests.exceptions.RequestException as e:
        return [], f"Failed to fetch restaurants: {str(e)}"
    except ValueError:
        return [], "Backend returned an invalid response."

    if not isinstance(data, list):
        return [], "Backend returned an invalid response."
    return data, None

def check_backend_health(base_url: str = BACKEND_URL, session=None) -> bool:
    """Check if backend is running."""
    http = session or requests
    try:
        response = http.get(f"{base_url}/health", timeout=2)
        return response.status_code == 200
    except requests.exceptions.RequestException:
        return False
