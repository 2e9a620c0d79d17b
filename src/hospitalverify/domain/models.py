"""Core domain models for hospital verification."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class Coordinates(BaseModel):
    """A geographic position used to bias place searches."""

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class HospitalClaim(BaseModel):
    """A hospital name and location submitted for verification."""

    name: str
    location: str
    coordinates: Optional[Coordinates] = None


class Candidate(BaseModel):
    """A human-readable place string surfaced by the search service."""

    text: str


class ClassifiedCandidate(Candidate):
    """Candidate tagged with the healthcare domain check."""

    is_healthcare_related: bool = False


class MatchScore(BaseModel):
    """Outcome of comparing a claimed name against candidate strings."""

    exists: bool = False
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class SearchOutcome(BaseModel):
    """Result of a single places-search call for one query variant.

    A failed call carries no payload. ``status_code`` is the HTTP status of
    the failure, or None when no status was received. ``transport_error``
    marks a request that never got a response, as opposed to one whose body
    could not be decoded.
    """

    query: str
    payload: Any = None
    status_code: Optional[int] = None
    error: Optional[str] = None
    transport_error: bool = False

    @property
    def failed(self) -> bool:
        return self.error is not None


class ConnectivityReport(BaseModel):
    """Result of a connectivity check against the places-search service."""

    success: bool
    message: str


class VerificationResult(BaseModel):
    """Heuristic verdict on whether a claimed hospital exists."""

    exists: bool
    suggestions: List[str] = Field(default_factory=list)
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    message: str

    @field_validator("suggestions")
    @classmethod
    def suggestions_unique(cls, v: List[str]) -> List[str]:
        """Ensure suggestions contain no exact duplicates."""
        if len(set(v)) != len(v):
            raise ValueError("suggestions must not contain duplicates")
        return v

    @property
    def top_suggestion(self) -> Optional[str]:
        return self.suggestions[0] if self.suggestions else None

    def to_application_fields(self) -> Dict[str, Any]:
        """Fields stored on a loan application for the hospital check."""
        return {
            "hospital_verification_status": "Verified" if self.exists else "Not Verified",
            "hospital_confidence": self.confidence,
            "hospital_name_suggestion": self.top_suggestion,
        }


class EmergencyFundingForm(BaseModel):
    """Emergency funding request as submitted by the applicant."""

    hospital_name: str = ""
    hospital_location: str = ""
    patient_name: str = ""
    emergency_type: str = ""
    medical_reports: List[str] = Field(default_factory=list)
    estimated_amount: float = 0.0
    contact_number: str = ""
    email: str = ""


class FormValidationResult(BaseModel):
    """Outcome of validating an emergency funding form."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
