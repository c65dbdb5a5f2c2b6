"""Score normalization and duration-weighted aggregation.

One numeric contract holds at every level: a score is an int percentage in
[0, 100], or None when nothing was measured. None is not 0: 0 means
"measured and bad".
"""

import logging
import math
from typing import Iterable, Sequence

import numpy as np

from phonochunk.types import CanonicalPhoneme, Word

logger = logging.getLogger(__name__)

NO_SCORE = "—"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def normalize_score(raw) -> int | None:
    """Map a 0-1 or 0-100 score to an int percentage.

    Values <= 1 are treated as fractions and scaled by 100, larger values are
    taken as percentages. The result is clamped to [0, 100]. Missing, empty,
    boolean and non-finite inputs give None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().rstrip("%")
        if not raw:
            return None
    try:
        v = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(v):
        return None
    if v <= 1:
        v *= 100
    return _round_half_up(min(100.0, max(0.0, v)))


def format_score(score: int | None) -> str:
    """Render a score for display; a missing score is not shown as 0%."""
    if score is None:
        return NO_SCORE
    return f"{score}%"


def phoneme_weight(phoneme: CanonicalPhoneme) -> float:
    """Weight of a phoneme in an average: its duration, or 1 without a span."""
    duration = phoneme.duration
    if duration is None or duration <= 0:
        return 1.0
    return duration


def weighted_average(items: Iterable[tuple[int | None, float | None]]) -> int | None:
    """Weighted mean of (score, weight) pairs, ignoring missing scores.

    A missing or non-positive weight counts as 1. Returns None when no item
    carries a score.
    """
    scores = []
    weights = []
    for score, weight in items:
        if score is None:
            continue
        if weight is None or not math.isfinite(weight) or weight <= 0:
            weight = 1.0
        scores.append(float(score))
        weights.append(float(weight))

    if not scores:
        return None
    return _round_half_up(float(np.average(scores, weights=weights)))


def chunk_score(phonemes: Sequence[CanonicalPhoneme]) -> int | None:
    """Duration-weighted score of a run of phonemes."""
    return weighted_average((p.score, phoneme_weight(p)) for p in phonemes)


def word_score(phonemes: Sequence[CanonicalPhoneme], fallback=None) -> int | None:
    """Duration-weighted score of a word's phonemes.

    Falls back to the provider's own word score when no phoneme is scored.
    """
    score = chunk_score(phonemes)
    if score is None and fallback is not None:
        score = normalize_score(fallback)
        if score is not None:
            logger.debug("No phoneme scores, using provider word score")
    return score


def sentence_score(words: Iterable[Word]) -> int | None:
    """Score of a sentence, weighting each word by its spoken duration."""
    items = []
    for word in words:
        span = word.span
        items.append((word.score, span.duration if span else 1.0))
    return weighted_average(items)
