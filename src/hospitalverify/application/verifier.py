"""Hospital verification service - Core business logic."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

from httpx import HTTPStatusError, TransportError

from ..domain.models import Coordinates, HospitalClaim, SearchOutcome, VerificationResult
from ..infrastructure.search.errors import (
    PlacesAPIError,
    PlacesUnavailableError,
    error_for_status,
)
from ..infrastructure.search.normalizer import extract_candidates
from .classifier import filter_healthcare
from .matcher import score_match
from .query_generator import generate_location_queries, generate_queries

if TYPE_CHECKING:
    from ..infrastructure.search.places_client import PlacesSearchClient

logger = logging.getLogger(__name__)

# Statuses that, when shared by every query variant, end a run with their own
# message instead of the plain negative result.
ESCALATED_STATUSES = frozenset({400, 401, 429})


def dedupe_preserving_order(texts: Iterable[str]) -> List[str]:
    """Drop exact (case-sensitive) repeats, keeping first-seen order."""
    return list(dict.fromkeys(texts))


class HospitalVerificationService:
    """Service for verifying that a claimed hospital exists.

    Runs every query variant through the places search, keeps the
    healthcare-related candidates and scores them against the claimed name.
    Construct one instance and pass it to whoever needs it; the service
    keeps no state between calls.
    """

    def __init__(self, search_client: PlacesSearchClient, concurrent: bool = False) -> None:
        """Initialize verification service.

        Args:
            search_client: Client for the places-search service.
            concurrent: Run query variants in parallel instead of one after
                another. The merged candidate order is the same either way.
        """
        self.search_client = search_client
        self.concurrent = concurrent

    async def _run_queries(
        self, queries: List[str], coordinates: Optional[Coordinates]
    ) -> List[SearchOutcome]:
        if self.concurrent:
            results = await asyncio.gather(
                *(self.search_client.search(q, coordinates) for q in queries),
                return_exceptions=True,
            )
            # Every search has finished; surface the first unexpected failure.
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            return list(results)
        outcomes = []
        for query in queries:
            outcomes.append(await self.search_client.search(query, coordinates))
        return outcomes

    @staticmethod
    def _run_error(outcomes: List[SearchOutcome]) -> Optional[PlacesAPIError]:
        """Pick the error that ends a run in which every variant failed.

        Only a rejection shared by every variant (401, 429 or 400), or a
        run where no request got a response at all, gets its own message.
        Anything else is reported as a plain negative result.
        """
        if not outcomes or not all(o.failed for o in outcomes):
            return None
        message = outcomes[0].error or "places search failed"
        statuses = {o.status_code for o in outcomes}
        if len(statuses) == 1:
            status = statuses.pop()
            if status in ESCALATED_STATUSES:
                return error_for_status(status, message)
        if all(o.transport_error for o in outcomes):
            return PlacesUnavailableError(message)
        return None

    async def _collect_candidates(
        self, queries: List[str], coordinates: Optional[Coordinates]
    ) -> List[str]:
        """Search every query and merge the healthcare candidates.

        Raises:
            PlacesAPIError: If nothing was found and every variant was
                rejected with the same 401, 429 or 400 status, or none of
                them reached the service.
        """
        outcomes = await self._run_queries(queries, coordinates)

        texts: List[str] = []
        for outcome in outcomes:
            candidates = filter_healthcare(extract_candidates(outcome.payload))
            logger.info("Query '%s' returned %d suggestions", outcome.query, len(candidates))
            texts.extend(c.text for c in candidates)

        unique = dedupe_preserving_order(texts)
        if not unique:
            error = self._run_error(outcomes)
            if error is not None:
                raise error
        return unique

    async def verify_claim(self, claim: HospitalClaim) -> VerificationResult:
        return await self.verify_hospital(claim.name, claim.location, claim.coordinates)

    async def verify_hospital(
        self,
        hospital_name: str,
        location: str,
        coordinates: Optional[Coordinates] = None,
    ) -> VerificationResult:
        """Verify that a hospital of the given name exists in a location.

        Args:
            hospital_name: Name of the hospital to verify.
            location: Where the hospital is supposed to be.
            coordinates: Optional position used to bias the search.

        Returns:
            VerificationResult. Failures are reported in the result, never
            raised.
        """
        try:
            name = hospital_name.strip()
            place = location.strip()
            queries = generate_queries(name, place)
            logger.info("Searching for hospital with %d queries", len(queries))

            suggestions = await self._collect_candidates(queries, coordinates)
            logger.info("All unique suggestions: %s", suggestions)

            if not suggestions:
                return VerificationResult(
                    exists=False,
                    suggestions=[],
                    message=(
                        f'No hospitals found matching "{name}" in {place}. '
                        "Please check the spelling and location."
                    ),
                )

            score = score_match(name, suggestions)
            if score.exists:
                message = f'Hospital "{name}" verified successfully in {place}!'
            else:
                message = (
                    f'Hospital "{name}" not found exactly, but found '
                    f"{len(suggestions)} similar hospitals in {place}:"
                )
            return VerificationResult(
                exists=score.exists,
                suggestions=suggestions,
                confidence=score.confidence,
                message=message,
            )
        except Exception as e:
            logger.exception("Error verifying hospital")
            return self._handle_error(e)

    async def search_hospitals_in_location(
        self,
        location: str,
        coordinates: Optional[Coordinates] = None,
    ) -> List[str]:
        """List healthcare places found for a location, without scoring.

        Returns:
            Deduplicated place strings; empty on any failure.
        """
        try:
            return await self._collect_candidates(generate_location_queries(location), coordinates)
        except Exception:
            logger.exception("Error searching hospitals in %s", location)
            return []

    @staticmethod
    def _status_of(error: Exception) -> Optional[int]:
        if isinstance(error, PlacesAPIError):
            return error.status_code
        if isinstance(error, HTTPStatusError):
            return error.response.status_code
        return None

    def _handle_error(self, error: Exception) -> VerificationResult:
        """Turn an unexpected failure into a negative result."""
        status = self._status_of(error)
        if status == 401:
            message = "API authentication failed. Please check your API key."
        elif status == 429:
            message = "Rate limit exceeded. Please wait a moment and try again."
        elif status == 400:
            message = "Invalid request. Please check your input and try again."
        elif isinstance(error, (TransportError, PlacesUnavailableError)):
            message = "Network error. Please check your internet connection and try again."
        else:
            message = f"Unable to verify hospital: {str(error) or 'Unknown error'}"
        return VerificationResult(exists=False, suggestions=[], message=message)
