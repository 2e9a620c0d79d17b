"""Input sanitization utilities for outbound search queries."""

import re

MAX_QUERY_LENGTH = 200


def sanitize_query(query: str) -> str:
    """Sanitize search query for the places API.

    Removes control characters and angle brackets while preserving
    useful punctuation for search queries.

    Args:
        query: Raw query string.

    Returns:
        Sanitized query string (max 200 characters).
    """
    if not isinstance(query, str):
        return ""
    q = re.sub(r"[\x00-\x1f<>]", "", query)
    return q[:MAX_QUERY_LENGTH]
