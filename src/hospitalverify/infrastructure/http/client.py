"""HTTP client factory with sensible defaults."""

from typing import Dict, Optional

from httpx import AsyncClient, Limits, Timeout

DEFAULT_TIMEOUT_SECONDS = 20.0


class HTTPClientFactory:
    """Factory for creating HTTP clients with consistent configuration."""

    @staticmethod
    def create(
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        headers: Optional[Dict[str, str]] = None,
    ) -> AsyncClient:
        """Create a new AsyncClient with sensible defaults.

        The engine defines no timeout of its own, so the value given here
        bounds every places-search call made through the client.

        Args:
            timeout_seconds: Request timeout in seconds.
            headers: Optional default headers sent with every request.

        Returns:
            Configured AsyncClient instance. The caller owns it and should
            close it with ``aclose()`` or use it as an async context manager.
        """
        timeout = Timeout(timeout_seconds)
        limits = Limits(max_keepalive_connections=10, max_connections=50)
        return AsyncClient(timeout=timeout, limits=limits, headers=headers)
