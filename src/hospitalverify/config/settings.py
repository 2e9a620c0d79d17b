"""Application settings and configuration management."""

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


class Settings:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    @property
    def places_api_key(self) -> Optional[str]:
        """RapidAPI key for the places-search service."""
        return os.getenv("PLACES_API_KEY")

    @property
    def places_api_host(self) -> str:
        """RapidAPI host header value."""
        return os.getenv("PLACES_API_HOST", "google-map-places-new-v2.p.rapidapi.com")

    @property
    def places_base_url(self) -> str:
        """Places autocomplete endpoint."""
        return os.getenv(
            "PLACES_BASE_URL",
            "https://google-map-places-new-v2.p.rapidapi.com/v1/places:autocomplete",
        )

    @property
    def http_timeout_seconds(self) -> float:
        """HTTP client timeout in seconds."""
        return float(os.getenv("HTTP_TIMEOUT_SECONDS", "20.0"))

    @property
    def search_radius_meters(self) -> float:
        """Radius of the circular location bias."""
        return float(os.getenv("SEARCH_RADIUS_METERS", "50000"))

    @property
    def search_language_code(self) -> str:
        return os.getenv("SEARCH_LANGUAGE_CODE", "en")

    @property
    def search_region_code(self) -> str:
        return os.getenv("SEARCH_REGION_CODE", "IN")

    @property
    def geolocation_url(self) -> str:
        """IP geolocation endpoint used when no coordinates are supplied."""
        return os.getenv("GEOLOCATION_URL", "https://ipapi.co/json/")

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings()
