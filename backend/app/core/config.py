from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"  # empty string disables the file handler
    LOG_FILE: str = "app.log"

    # Overpass API (OpenStreetMap data)
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    OVERPASS_TIMEOUT: float = 30.0  # HTTP timeout in seconds
    OVERPASS_QUERY_TIMEOUT: int = 25  # [timeout:N] passed to the Overpass server

    # Search radius defaults (meters)
    DEFAULT_RADIUS_M: float = 1000  # used by the endpoint when radius is missing
    SERVICE_DEFAULT_RADIUS_M: float = 5000  # used by the service when the query has none

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
