"""Search query variants built from a hospital claim."""

from typing import List, Tuple

CLAIM_TEMPLATES: Tuple[str, ...] = (
    "{name} {location}",
    "{name} hospital {location}",
    "{name} medical center {location}",
    "hospital {name} {location}",
    "{name} {location} hospital",
    "{location} {name}",
)

LOCATION_TEMPLATES: Tuple[str, ...] = (
    "hospitals in {location}",
    "medical centers in {location}",
    "healthcare facilities in {location}",
    "{location} hospitals",
    "{location} medical center",
    "{location} clinic",
)


def generate_queries(name: str, location: str) -> List[str]:
    """Build the ordered query variants for a claimed hospital.

    Variants are not deduplicated. Empty inputs still produce queries;
    validating the claim is the caller's job.

    Args:
        name: Claimed hospital name.
        location: Claimed hospital location.

    Returns:
        One query per template, in template order.
    """
    name = name.strip()
    location = location.strip()
    return [t.format(name=name, location=location) for t in CLAIM_TEMPLATES]


def generate_location_queries(location: str) -> List[str]:
    """Build the query variants for listing hospitals in a location."""
    location = location.strip()
    return [t.format(location=location) for t in LOCATION_TEMPLATES]
