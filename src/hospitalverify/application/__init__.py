"""Application layer - verification pipeline and form validation."""

from .form_validator import validate_emergency_form
from .verifier import HospitalVerificationService, dedupe_preserving_order

__all__ = ["HospitalVerificationService", "dedupe_preserving_order", "validate_emergency_form"]
