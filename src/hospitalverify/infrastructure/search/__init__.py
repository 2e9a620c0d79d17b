"""Places search infrastructure."""

from .errors import (
    PlacesAPIError,
    PlacesAuthenticationError,
    PlacesRateLimitError,
    PlacesUnavailableError,
)
from .normalizer import extract_candidates
from .places_client import PlacesSearchClient

__all__ = [
    "PlacesAPIError",
    "PlacesAuthenticationError",
    "PlacesRateLimitError",
    "PlacesSearchClient",
    "PlacesUnavailableError",
    "extract_candidates",
]
