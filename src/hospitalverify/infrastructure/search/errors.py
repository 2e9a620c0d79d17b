"""Errors raised for places-search failures that end a verification run."""

from typing import Optional


class PlacesAPIError(Exception):
    """The places-search service rejected every request of a run."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PlacesAuthenticationError(PlacesAPIError):
    """The service answered 401 for every query variant."""

    def __init__(self, message: str = "Places API authentication failed") -> None:
        super().__init__(message, status_code=401)


class PlacesRateLimitError(PlacesAPIError):
    """The service answered 429 for every query variant."""

    def __init__(self, message: str = "Places API rate limit exceeded") -> None:
        super().__init__(message, status_code=429)


class PlacesUnavailableError(PlacesAPIError):
    """No query variant got a response from the service."""


def error_for_status(status_code: Optional[int], message: str) -> PlacesAPIError:
    """Map an HTTP status to the most specific error type."""
    if status_code == 401:
        return PlacesAuthenticationError(message)
    if status_code == 429:
        return PlacesRateLimitError(message)
    if status_code is None:
        return PlacesUnavailableError(message)
    return PlacesAPIError(message, status_code=status_code)
