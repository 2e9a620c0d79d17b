"""Best-effort lookup of the caller's current coordinates."""

import logging
import time
from typing import Any, Optional, Tuple

from httpx import AsyncClient, HTTPError

from ..domain.models import Coordinates

logger = logging.getLogger(__name__)


class LocationProvider:
    """IP-based geolocation with a short-lived cached position.

    A lookup either returns coordinates or None; it never raises, so a
    missing position only drops the location bias from searches.
    """

    DEFAULT_URL = "https://ipapi.co/json/"

    def __init__(
        self,
        http_client: AsyncClient,
        url: Optional[str] = None,
        timeout_seconds: float = 10.0,
        max_age_seconds: float = 600.0,
    ) -> None:
        """Initialize location provider.

        Args:
            http_client: HTTP client for the geolocation request.
            url: Geolocation endpoint returning latitude/longitude JSON.
            timeout_seconds: Timeout of the single lookup request.
            max_age_seconds: How long a previous position may be reused.
        """
        self._client = http_client
        self.url = url or self.DEFAULT_URL
        self.timeout_seconds = timeout_seconds
        self.max_age_seconds = max_age_seconds
        self._cached: Optional[Tuple[float, Coordinates]] = None

    @staticmethod
    def _parse(data: Any) -> Optional[Coordinates]:
        if not isinstance(data, dict):
            return None
        lat = data.get("latitude", data.get("lat"))
        lon = data.get("longitude", data.get("lon"))
        if lat is None or lon is None:
            return None
        try:
            return Coordinates(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError):
            return None

    async def get_current_location(self) -> Optional[Coordinates]:
        """Return the current position, or None if it cannot be determined."""
        if self._cached is not None:
            ts, coords = self._cached
            if time.monotonic() - ts <= self.max_age_seconds:
                return coords

        try:
            resp = await self._client.get(self.url, timeout=self.timeout_seconds)
            resp.raise_for_status()
            coords = self._parse(resp.json())
        except (HTTPError, ValueError) as e:
            logger.warning("Error getting location: %s", str(e))
            return None

        if coords is None:
            logger.warning("Geolocation response carried no usable coordinates")
            return None

        self._cached = (time.monotonic(), coords)
        return coords
