"""Scoring a claimed hospital name against candidate place strings.

Three independent heuristics are applied per candidate, all on lower-cased
text:

1. Containment: either string contains the other. Confidence 0.9.
2. Token overlap: share of claim tokens (longer than two characters) found
   inside, or containing, some candidate token. Above 0.5 counts as a match
   with confidence ``ratio * 0.8``.
3. Edit similarity: ``(max_len - levenshtein) / max_len``. Above 0.6 counts
   as a match; the raw similarity always competes for the final confidence.

The final confidence is the maximum value any heuristic produced for any
candidate. The three scales are not reconciled with each other.
"""

import logging
from typing import Iterable, List

from ..domain.models import MatchScore

logger = logging.getLogger(__name__)

CONTAINMENT_CONFIDENCE = 0.9
TOKEN_RATIO_THRESHOLD = 0.5
TOKEN_CONFIDENCE_WEIGHT = 0.8
SIMILARITY_THRESHOLD = 0.6
MIN_TOKEN_LENGTH = 3


def levenshtein_distance(a: str, b: str) -> int:
    """Classical edit distance with unit cost insert, delete and substitute."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Edit similarity in [0, 1]; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest


def _tokens(text: str) -> List[str]:
    return [t for t in text.split() if len(t) >= MIN_TOKEN_LENGTH]


def token_overlap_ratio(claim: str, candidate: str) -> float:
    """Fraction of claim tokens that overlap some candidate token.

    Returns 0.0 when the claim has no tokens long enough to compare.
    """
    claim_tokens = _tokens(claim)
    if not claim_tokens:
        return 0.0
    candidate_tokens = _tokens(candidate)
    matched = sum(
        1
        for ct in claim_tokens
        if any(ct in st or st in ct for st in candidate_tokens)
    )
    return matched / len(claim_tokens)


def score_match(claim_name: str, candidates: Iterable[str]) -> MatchScore:
    """Decide whether any candidate matches the claimed name.

    Args:
        claim_name: Hospital name as submitted.
        candidates: Deduplicated, healthcare-filtered candidate strings.

    Returns:
        MatchScore with the OR of all existence triggers and the maximum
        confidence produced. Confidence is 0.0 when there are no candidates.
    """
    claim = claim_name.lower()
    exists = False
    confidence = 0.0

    for candidate in candidates:
        text = candidate.lower()

        if claim in text or text in claim:
            exists = True
            confidence = max(confidence, CONTAINMENT_CONFIDENCE)
            logger.debug("Containment match for %r", candidate)
            continue

        ratio = token_overlap_ratio(claim, text)
        if ratio > TOKEN_RATIO_THRESHOLD:
            exists = True
            confidence = max(confidence, ratio * TOKEN_CONFIDENCE_WEIGHT)

        sim = similarity(claim, text)
        confidence = max(confidence, sim)
        if sim > SIMILARITY_THRESHOLD:
            exists = True
        logger.debug("Candidate %r: token ratio %.2f, similarity %.2f", candidate, ratio, sim)

    logger.info("Match result for %r: exists=%s confidence=%.2f", claim_name, exists, confidence)
    return MatchScore(exists=exists, confidence=confidence)
