"""Shared pytest fixtures for the hospital verification tests."""

import json
from typing import Any, Callable, Dict, Optional

import httpx
import pytest

from hospitalverify.infrastructure.search.places_client import PlacesSearchClient

Handler = Callable[[httpx.Request], httpx.Response]


def place(text: str) -> Dict[str, Any]:
    """A place prediction item as returned by the autocomplete endpoint."""
    return {
        "placePrediction": {
            "placeId": "place-" + text.lower().replace(" ", "-"),
            "text": {"text": text},
            "structuredFormat": {
                "mainText": {"text": text},
                "secondaryText": {"text": "Maharashtra, India"},
            },
        }
    }


def places_response(*texts: str) -> Dict[str, Any]:
    return {"suggestions": [place(t) for t in texts]}


def request_input(request: httpx.Request) -> str:
    return json.loads(request.content)["input"]


@pytest.fixture
def make_places_client() -> Callable[..., PlacesSearchClient]:
    """Build a PlacesSearchClient whose HTTP calls go to ``handler``."""

    def factory(
        handler: Handler, api_key: Optional[str] = "test-key", **kwargs: Any
    ) -> PlacesSearchClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return PlacesSearchClient(api_key=api_key, http_client=http_client, **kwargs)

    return factory
