import asyncio
import json
from typing import List, Optional

import httpx
import pytest

from conftest import places_response, request_input
from hospitalverify.application.verifier import (
    HospitalVerificationService,
    dedupe_preserving_order,
)
from hospitalverify.domain.models import Coordinates, HospitalClaim, SearchOutcome


def test_dedupe_is_case_sensitive_and_order_preserving() -> None:
    result = dedupe_preserving_order(["Apollo Hospital", "apollo hospital", "Apollo Hospital"])

    assert result == ["Apollo Hospital", "apollo hospital"]


@pytest.mark.asyncio
async def test_apollo_claim_is_verified(make_places_client) -> None:
    seen: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = request_input(request)
        seen.append(query)
        if "hospital Mumbai" in query or query.endswith("Mumbai hospital"):
            return httpx.Response(
                200,
                json=places_response("Gateway of India", "Apollo Hospitals Mumbai", "Lilavati Hospital"),
            )
        return httpx.Response(200, json=places_response("Marine Drive", "Lilavati Hospital"))

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert len(seen) == 6
    assert result.exists is True
    assert result.confidence is not None and result.confidence >= 0.8
    assert "Apollo Hospitals Mumbai" in result.suggestions
    assert "Gateway of India" not in result.suggestions
    assert result.suggestions.count("Lilavati Hospital") == 1
    assert result.message == 'Hospital "Apollo Hospital" verified successfully in Mumbai!'


@pytest.mark.asyncio
async def test_unknown_claim_with_no_candidates(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"suggestions": []})

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("XyzNonexistentClinic999", "Nowhere")

    assert result.exists is False
    assert result.suggestions == []
    assert result.confidence is None
    assert "XyzNonexistentClinic999" in result.message
    assert "Nowhere" in result.message


@pytest.mark.asyncio
async def test_similar_hospitals_reported_when_no_match(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=places_response("Lilavati Hospital", "Breach Candy Hospital"))

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Qwerty Infirmary", "Mumbai")

    assert result.exists is False
    assert result.suggestions == ["Lilavati Hospital", "Breach Candy Hospital"]
    assert result.confidence is not None and result.confidence < 0.6
    assert result.message == (
        'Hospital "Qwerty Infirmary" not found exactly, but found 2 similar hospitals in Mumbai:'
    )


@pytest.mark.asyncio
async def test_dedup_across_variants_is_case_sensitive(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json=places_response("Apollo Hospital", "apollo hospital", "Apollo Hospital")
        )

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.suggestions == ["Apollo Hospital", "apollo hospital"]


@pytest.mark.asyncio
async def test_authentication_failure_on_every_variant(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "You are not subscribed to this API."})

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.suggestions == []
    assert "authentication failed" in result.message


@pytest.mark.asyncio
async def test_missing_api_key_reports_authentication_failure(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    service = HospitalVerificationService(make_places_client(handler, api_key=None))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert "authentication failed" in result.message


@pytest.mark.asyncio
async def test_rate_limit_on_every_variant(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={})

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.message.startswith("Rate limit exceeded")


@pytest.mark.asyncio
async def test_network_failure_on_every_variant(make_places_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.message.startswith("Network error")


@pytest.mark.asyncio
async def test_bad_request_on_every_variant(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": {"message": "Invalid input"}})

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.suggestions == []
    assert result.message == "Invalid request. Please check your input and try again."


@pytest.mark.asyncio
async def test_server_errors_on_every_variant_are_plain_negative(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"message": "Service Unavailable"})

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.confidence is None
    assert result.message == (
        'No hospitals found matching "Apollo Hospital" in Mumbai. '
        "Please check the spelling and location."
    )
    assert "503" not in result.message
    assert "http" not in result.message.lower()


@pytest.mark.asyncio
async def test_undecodable_json_on_every_variant(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>maintenance</html>")

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.message.startswith("No hospitals found")
    assert "Network error" not in result.message


@pytest.mark.asyncio
async def test_timeouts_mixed_with_bad_json_are_plain_negative(make_places_client) -> None:
    calls: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request_input(request))
        if len(calls) % 2:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, content=b"not json")

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.message.startswith("No hospitals found")



@pytest.mark.asyncio
async def test_single_variant_failure_does_not_abort_run(make_places_client) -> None:
    calls: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        query = request_input(request)
        calls.append(query)
        if len(calls) == 1:
            return httpx.Response(500, json={"error": "internal"})
        if len(calls) == 2:
            raise httpx.ReadTimeout("slow", request=request)
        return httpx.Response(200, json=places_response("Apollo Hospitals Mumbai"))

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert len(calls) == 6
    assert result.exists is True
    assert result.suggestions == ["Apollo Hospitals Mumbai"]


@pytest.mark.asyncio
async def test_mixed_failures_without_candidates_is_plain_negative(make_places_client) -> None:
    calls: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request_input(request))
        if len(calls) % 2:
            return httpx.Response(401, json={})
        return httpx.Response(503, json={})

    service = HospitalVerificationService(make_places_client(handler))
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.message.startswith("No hospitals found")


class _ExplodingClient:
    async def search(self, query: str, coordinates: Optional[Coordinates] = None) -> SearchOutcome:
        raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_unexpected_error_becomes_negative_result() -> None:
    service = HospitalVerificationService(_ExplodingClient())  # type: ignore[arg-type]
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert result.exists is False
    assert result.suggestions == []
    assert result.message == "Unable to verify hospital: boom"


class _PartlyExplodingClient:
    def __init__(self) -> None:
        self.finished: List[str] = []

    async def search(self, query: str, coordinates: Optional[Coordinates] = None) -> SearchOutcome:
        if not self.finished:
            self.finished.append(query)
            raise RuntimeError("boom")
        await asyncio.sleep(0)
        self.finished.append(query)
        return SearchOutcome(query=query, payload=places_response("Apollo Hospitals Mumbai"))


@pytest.mark.asyncio
async def test_concurrent_failure_waits_for_every_variant() -> None:
    client = _PartlyExplodingClient()
    service = HospitalVerificationService(client, concurrent=True)  # type: ignore[arg-type]
    result = await service.verify_hospital("Apollo Hospital", "Mumbai")

    assert len(client.finished) == 6
    assert result.exists is False
    assert result.message == "Unable to verify hospital: boom"



@pytest.mark.asyncio
async def test_concurrent_mode_matches_sequential(make_places_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        query = request_input(request)
        return httpx.Response(200, json=places_response(f"{query} Clinic", "Apollo Hospitals Mumbai"))

    sequential = await HospitalVerificationService(make_places_client(handler)).verify_hospital(
        "Apollo Hospital", "Mumbai"
    )
    concurrent = await HospitalVerificationService(
        make_places_client(handler), concurrent=True
    ).verify_hospital("Apollo Hospital", "Mumbai")

    assert concurrent == sequential
    assert len(concurrent.suggestions) == 7


@pytest.mark.asyncio
async def test_verify_claim_passes_coordinates(make_places_client) -> None:
    biases = []

    def handler(request: httpx.Request) -> httpx.Response:
        biases.append(json.loads(request.content).get("locationBias"))
        return httpx.Response(200, json=places_response("Ruby Hall Clinic"))

    claim = HospitalClaim(
        name="Ruby Hall Clinic",
        location="Pune",
        coordinates=Coordinates(latitude=18.53, longitude=73.87),
    )
    result = await HospitalVerificationService(make_places_client(handler)).verify_claim(claim)

    assert result.exists is True
    assert all(b["circle"]["center"]["latitude"] == 18.53 for b in biases)
    assert result.to_application_fields() == {
        "hospital_verification_status": "Verified",
        "hospital_confidence": 0.9,
        "hospital_name_suggestion": "Ruby Hall Clinic",
    }


@pytest.mark.asyncio
async def test_search_hospitals_in_location(make_places_client) -> None:
    seen: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request_input(request))
        return httpx.Response(
            200, json=places_response("Sassoon General Hospital", "Shaniwar Wada", "Ruby Hall Clinic")
        )

    service = HospitalVerificationService(make_places_client(handler))
    hospitals = await service.search_hospitals_in_location("Pune")

    assert seen[0] == "hospitals in Pune"
    assert len(seen) == 6
    assert hospitals == ["Sassoon General Hospital", "Ruby Hall Clinic"]


@pytest.mark.asyncio
async def test_search_hospitals_in_location_swallows_auth_failure(make_places_client) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={})

    service = HospitalVerificationService(make_places_client(handler))

    assert await service.search_hospitals_in_location("Pune") == []
