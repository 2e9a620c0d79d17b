"""Healthcare domain filter for search candidates."""

import logging
from typing import Iterable, List, Tuple

from ..domain.models import Candidate, ClassifiedCandidate

logger = logging.getLogger(__name__)

HEALTHCARE_TERMS: Tuple[str, ...] = (
    "hospital",
    "medical",
    "clinic",
    "health",
    "healthcare",
    "care",
    "emergency",
    "nursing",
    "trauma",
    "surgery",
    "medicare",
    "medical center",
    "medical centre",
    "medical college",
    "general hospital",
    "multispecialty",
    "multi specialty",
    "super specialty",
    "cancer center",
    "heart institute",
    "eye hospital",
    "dental clinic",
    "dispensary",
    "polyclinic",
    "nursing home",
    "maternity",
    "pediatric",
    "psychiatric",
    "rehabilitation",
    "dialysis",
    "diagnostic",
    "pathology",
    "radiology",
    "cardiology",
    "orthopedic",
    "neurology",
    "oncology",
    "icu",
    "ot",
    "operation theater",
    "emergency ward",
    "casualty",
    "ambulance",
    "blood bank",
    "pharmacy",
    "laboratory",
    "scan center",
    "imaging",
)


def is_healthcare_related(text: str) -> bool:
    """Return True if any healthcare term occurs in ``text``.

    Plain case-insensitive substring containment, so short terms such as
    ``ot`` also match inside longer words.
    """
    lowered = text.lower()
    return any(term in lowered for term in HEALTHCARE_TERMS)


def classify(candidate: Candidate) -> ClassifiedCandidate:
    return ClassifiedCandidate(
        text=candidate.text,
        is_healthcare_related=is_healthcare_related(candidate.text),
    )


def filter_healthcare(candidates: Iterable[Candidate]) -> List[Candidate]:
    """Keep only candidates that plausibly name a healthcare facility."""
    kept: List[Candidate] = []
    for candidate in candidates:
        classified = classify(candidate)
        logger.debug(
            "Candidate %r healthcare related: %s",
            classified.text,
            classified.is_healthcare_related,
        )
        if classified.is_healthcare_related:
            kept.append(candidate)
    return kept
