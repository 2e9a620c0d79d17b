"""Places autocomplete client (Google Places via RapidAPI)."""

from __future__ import annotations

import logging
import secrets
from typing import Any, Dict, Optional, Sequence

from httpx import AsyncClient, HTTPError, HTTPStatusError, TransportError

from ...application.classifier import filter_healthcare
from ...domain.models import ConnectivityReport, Coordinates, SearchOutcome
from ...utils.sanitization import sanitize_query
from .normalizer import extract_candidates

logger = logging.getLogger(__name__)


def generate_session_token() -> str:
    """Opaque per-call token; only uniqueness matters."""
    return secrets.token_hex(12)


class PlacesSearchClient:
    """Places autocomplete client that absorbs per-call failures.

    Every call is made once. A failed call is logged and reported as a
    failed ``SearchOutcome`` instead of raising, so one bad query variant
    cannot abort a verification run.

    Usage:
        ```python
        client = PlacesSearchClient(
            api_key="your-key",
            http_client=async_client,
        )
        outcome = await client.search("Apollo Hospital Mumbai")
        ```
    """

    BASE_URL = "https://google-map-places-new-v2.p.rapidapi.com/v1/places:autocomplete"
    API_HOST = "google-map-places-new-v2.p.rapidapi.com"
    PLACE_TYPES = ("hospital", "health")
    TEST_QUERY = "Apollo Hospital Mumbai"

    def __init__(
        self,
        api_key: Optional[str],
        http_client: AsyncClient,
        base_url: Optional[str] = None,
        api_host: Optional[str] = None,
        radius_meters: float = 50000.0,
        language_code: str = "en",
        region_code: str = "IN",
        place_types: Sequence[str] = PLACE_TYPES,
    ) -> None:
        """Initialize places client.

        Args:
            api_key: RapidAPI key. When None, calls fail as unauthenticated
                without reaching the network.
            http_client: HTTP client for making requests.
            base_url: Autocomplete endpoint. Defaults to ``BASE_URL``.
            api_host: Value of the ``x-rapidapi-host`` header.
            radius_meters: Radius of the location bias circle.
            language_code: Language hint sent with every request.
            region_code: Region hint sent with every request.
            place_types: Primary place types to restrict results to.
        """
        self.api_key = api_key
        self._client = http_client
        self.base_url = base_url or self.BASE_URL
        self.api_host = api_host or self.API_HOST
        self.radius_meters = float(radius_meters)
        self.language_code = language_code
        self.region_code = region_code
        self.place_types = list(place_types)

    def _headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-key": self.api_key or "",
            "x-rapidapi-host": self.api_host,
            "Content-Type": "application/json",
        }

    def build_payload(
        self,
        query: str,
        coordinates: Optional[Coordinates] = None,
        place_types: Optional[Sequence[str]] = None,
    ) -> Dict[str, Any]:
        """Build the autocomplete request body for one query."""
        payload: Dict[str, Any] = {
            "input": sanitize_query(query),
            "includedPrimaryTypes": list(place_types or self.place_types),
            "languageCode": self.language_code,
            "regionCode": self.region_code,
            "inputOffset": 0,
            "includeQueryPredictions": True,
            "sessionToken": generate_session_token(),
        }
        if coordinates is not None:
            payload["locationBias"] = {
                "circle": {
                    "center": {
                        "latitude": coordinates.latitude,
                        "longitude": coordinates.longitude,
                    },
                    "radius": self.radius_meters,
                }
            }
        return payload

    async def _post(self, payload: Dict[str, Any]) -> Any:
        resp = await self._client.post(self.base_url, json=payload, headers=self._headers())
        resp.raise_for_status()
        return resp.json()

    async def search(
        self,
        query: str,
        coordinates: Optional[Coordinates] = None,
    ) -> SearchOutcome:
        """Run one autocomplete search.

        Args:
            query: Free-text query variant.
            coordinates: Optional centre of a circular location bias.

        Returns:
            SearchOutcome carrying the decoded response, or the failure.
        """
        if not self.api_key:
            logger.warning("Places API key is not configured; skipping query '%s'", query)
            return SearchOutcome(query=query, status_code=401, error="API key not configured")

        payload = self.build_payload(query, coordinates)
        try:
            data = await self._post(payload)
        except HTTPStatusError as e:
            logger.warning("HTTP error from places search for '%s': %s", query, str(e))
            return SearchOutcome(query=query, status_code=e.response.status_code, error=str(e))
        except HTTPError as e:
            logger.warning("Transport error from places search for '%s': %s", query, str(e))
            return SearchOutcome(
                query=query,
                error=str(e) or type(e).__name__,
                transport_error=isinstance(e, TransportError),
            )
        except ValueError as e:
            logger.warning("Undecodable places response for '%s': %s", query, str(e))
            return SearchOutcome(query=query, error=f"Invalid JSON response: {e}")

        logger.debug("Places response for '%s': %s", query, data)
        return SearchOutcome(query=query, payload=data)

    async def check_connectivity(self) -> ConnectivityReport:
        """Send a single known query to confirm the API is reachable.

        Returns:
            ConnectivityReport with the healthcare result count and a sample
            result on success.
        """
        if not self.api_key:
            return ConnectivityReport(success=False, message="API test failed: API key not configured")

        payload = self.build_payload(self.TEST_QUERY, place_types=["hospital"])
        try:
            data = await self._post(payload)
        except HTTPStatusError as e:
            return ConnectivityReport(
                success=False,
                message=f"API test failed with status: {e.response.status_code}",
            )
        except (HTTPError, ValueError) as e:
            return ConnectivityReport(success=False, message=f"API test failed: {e}")

        candidates = filter_healthcare(extract_candidates(data))
        sample = candidates[0].text if candidates else "No results"
        return ConnectivityReport(
            success=True,
            message=f"API test successful. Found {len(candidates)} results. Sample: {sample}",
        )
