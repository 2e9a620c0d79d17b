"""Domain layer - Core business entities and models."""

from .models import (
    Candidate,
    ClassifiedCandidate,
    ConnectivityReport,
    Coordinates,
    EmergencyFundingForm,
    FormValidationResult,
    HospitalClaim,
    MatchScore,
    SearchOutcome,
    VerificationResult,
)

__all__ = [
    "Candidate",
    "ClassifiedCandidate",
    "ConnectivityReport",
    "Coordinates",
    "EmergencyFundingForm",
    "FormValidationResult",
    "HospitalClaim",
    "MatchScore",
    "SearchOutcome",
    "VerificationResult",
]
