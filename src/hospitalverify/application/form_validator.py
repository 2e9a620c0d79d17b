"""Boundary validation of the emergency funding request form.

Runs before a verification is attempted. It only checks that required
fields are present and well formed; it does not contact any service.
"""

import re
from typing import List

from ..domain.models import EmergencyFundingForm, FormValidationResult

PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]{10,}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _too_short(value: str, minimum: int) -> bool:
    return not value or len(value.strip()) < minimum


def validate_emergency_form(form: EmergencyFundingForm) -> FormValidationResult:
    """Check an emergency funding form for required, well-formed fields.

    Args:
        form: Submitted form data.

    Returns:
        FormValidationResult listing every problem found.
    """
    errors: List[str] = []

    if _too_short(form.hospital_name, 2):
        errors.append("Hospital name is required and must be at least 2 characters long")
    if _too_short(form.hospital_location, 2):
        errors.append("Hospital location is required and must be at least 2 characters long")
    if _too_short(form.patient_name, 2):
        errors.append("Patient name is required and must be at least 2 characters long")
    if _too_short(form.emergency_type, 5):
        errors.append(
            "Emergency type description is required and must be at least 5 characters long"
        )
    if not form.medical_reports:
        errors.append("At least one medical report is required")
    if not form.estimated_amount or form.estimated_amount <= 0:
        errors.append("Estimated amount must be greater than 0")
    if not form.contact_number or not PHONE_PATTERN.match(form.contact_number):
        errors.append("Valid contact number is required")
    if not form.email or not EMAIL_PATTERN.match(form.email):
        errors.append("Valid email address is required")

    return FormValidationResult(is_valid=not errors, errors=errors)
