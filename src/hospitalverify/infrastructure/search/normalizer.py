"""Normalization of loosely structured places-search responses.

The autocomplete service does not guarantee a response shape: results may
arrive under ``suggestions``, ``predictions`` or ``results``, and each item may
be a query prediction, a place prediction, a flat record or a bare string.
Text is pulled out of each item by an ordered chain of extractor strategies.
Every strategy returns ``None`` when it has nothing to offer and the first
non-blank string wins.
"""

import logging
from enum import Enum
from typing import Any, Callable, FrozenSet, List, Mapping, NamedTuple, Optional, Tuple

from ...domain.models import Candidate

logger = logging.getLogger(__name__)

RESULT_FIELDS: Tuple[str, ...] = ("suggestions", "predictions", "results")

PREDICTION_KEYS: Tuple[str, ...] = ("queryPrediction", "placePrediction")

TEXT_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("structuredFormat", "mainText", "text"),
    ("structuredFormat", "mainText"),
    ("text", "text"),
    ("text",),
)

GENERIC_FIELDS: Tuple[str, ...] = ("description", "displayName", "name", "title", "text")

# Nested containers below an item are searched this many levels deep.
MAX_SCAN_DEPTH = 1


class ItemShape(str, Enum):
    """Tag for the shape of a single result item."""

    TEXT = "text"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    OTHER = "other"


def shape_of(item: Any) -> ItemShape:
    """Classify a raw result item."""
    if isinstance(item, str):
        return ItemShape.TEXT
    if isinstance(item, Mapping):
        return ItemShape.MAPPING
    if isinstance(item, list):
        return ItemShape.SEQUENCE
    return ItemShape.OTHER


def _clean(value: Any) -> Optional[str]:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return None


def _resolve(item: Any, path: Tuple[str, ...]) -> Any:
    """Walk ``path`` through nested mappings, returning None on a miss."""
    node = item
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _structured_paths() -> List[Tuple[str, ...]]:
    paths: List[Tuple[str, ...]] = []
    for prefix in PREDICTION_KEYS:
        paths.extend((prefix,) + path for path in TEXT_PATHS)
        paths.append((prefix,))
    # Flat items use the same layout without a prediction wrapper. A bare
    # ``text`` is left to the generic fields so it ranks after ``title``.
    paths.extend(path for path in TEXT_PATHS if path != ("text",))
    return paths


STRUCTURED_PATHS: Tuple[Tuple[str, ...], ...] = tuple(_structured_paths())


def _from_structured_text(item: Any, depth: int) -> Optional[str]:
    for path in STRUCTURED_PATHS:
        text = _clean(_resolve(item, path))
        if text:
            return text
    return None


def _from_generic_fields(item: Any, depth: int) -> Optional[str]:
    for field in GENERIC_FIELDS:
        text = _clean(item.get(field))
        if text:
            return text
    return None


def _from_raw_text(item: Any, depth: int) -> Optional[str]:
    return _clean(item)


def _from_field_scan(item: Any, depth: int) -> Optional[str]:
    """Take the first string found among the item's own fields.

    A list item is scanned element by element, like a mapping's values.
    Nested mappings and lists are searched with the full extractor chain, but
    only down to ``MAX_SCAN_DEPTH``.
    """
    values = item.values() if isinstance(item, Mapping) else item
    for value in values:
        text = _clean(value)
        if text:
            return text
        if depth >= MAX_SCAN_DEPTH:
            continue
        if isinstance(value, Mapping):
            text = extract_text(value, depth + 1)
        elif isinstance(value, list):
            text = next(
                (t for t in (extract_text(v, depth + 1) for v in value) if t),
                None,
            )
        if text:
            return text
    return None


class ExtractorStrategy(NamedTuple):
    """One step of the extraction chain and the shapes it accepts."""

    name: str
    shapes: FrozenSet[ItemShape]
    extract: Callable[[Any, int], Optional[str]]


EXTRACTOR_CHAIN: Tuple[ExtractorStrategy, ...] = (
    ExtractorStrategy("structured_text", frozenset({ItemShape.MAPPING}), _from_structured_text),
    ExtractorStrategy("generic_fields", frozenset({ItemShape.MAPPING}), _from_generic_fields),
    ExtractorStrategy("raw_text", frozenset({ItemShape.TEXT}), _from_raw_text),
    ExtractorStrategy(
        "field_scan", frozenset({ItemShape.MAPPING, ItemShape.SEQUENCE}), _from_field_scan
    ),
)


def extract_text(item: Any, depth: int = 0) -> Optional[str]:
    """Run the extractor chain over a single item.

    Args:
        item: One element of the located result array.
        depth: Current nesting depth below the result array element.

    Returns:
        Trimmed text, or None when no strategy produced any.
    """
    shape = shape_of(item)
    for strategy in EXTRACTOR_CHAIN:
        if shape not in strategy.shapes:
            continue
        text = strategy.extract(item, depth)
        if text:
            logger.debug("Extracted %r via %s", text, strategy.name)
            return text
    return None


def locate_items(data: Any) -> List[Any]:
    """Find the array of result items inside a response document.

    Args:
        data: Decoded JSON response of unknown shape.

    Returns:
        The result items, or an empty list when no array is present.
    """
    if isinstance(data, list):
        return data
    if not isinstance(data, Mapping):
        return []

    for field in RESULT_FIELDS:
        value = data.get(field)
        if isinstance(value, list):
            return value

    for key, value in data.items():
        if isinstance(value, list):
            logger.debug("Using array at unrecognised key %r", key)
            return value

    logger.debug("No result array in response; keys=%s", list(data.keys()))
    return []


def extract_candidates(data: Any) -> List[Candidate]:
    """Convert an arbitrary response document into candidate strings.

    Items that yield no text are dropped. Malformed input yields an empty
    list; this function does not raise.

    Args:
        data: Decoded JSON response of unknown shape.

    Returns:
        Candidates in response order, duplicates included.
    """
    try:
        candidates: List[Candidate] = []
        for item in locate_items(data):
            text = extract_text(item)
            if text:
                candidates.append(Candidate(text=text))
        return candidates
    except Exception:
        logger.warning("Could not normalize places response", exc_info=True)
        return []
