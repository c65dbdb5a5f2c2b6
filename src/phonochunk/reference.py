"""Reference ("coach") recording tokens.

A reference recording of the target text is scored by the same provider to
locate its phonemes in time. Its token list may draw phoneme boundaries
differently from the learner's, so the two are lined up by phoneme index,
never by symbol text.
"""

import logging
from typing import Any, Sequence

from phonochunk import fields
from phonochunk.payload import read_words
from phonochunk.phonemes import canonicalize
from phonochunk.spans import PROVIDER_UNIT_SECONDS, resolve_span
from phonochunk.types import CoachToken, Span

logger = logging.getLogger(__name__)


def extract_reference_tokens(
    payload: Any,
    unit_to_seconds: float = PROVIDER_UNIT_SECONDS,
) -> list[list[CoachToken]]:
    """Return the reference phonemes of each word, with spans in seconds.

    Tokens keep their phoneme index even when their span is unusable, in
    which case ``span`` is None.
    """
    words = read_words(payload, symbol_keys=fields.REFERENCE_SYMBOL_KEYS)
    result = []
    for word in words:
        tokens = []
        for i, ph in enumerate(word.phonemes):
            span = resolve_span(*ph.span, unit_to_seconds) if ph.span else None
            tokens.append(CoachToken(index=i, symbol=canonicalize(ph.symbol), span=span))
        result.append(tokens)

    n_spans = sum(1 for w in result for t in w if t.span is not None)
    logger.debug(f"Reference: {len(result)} words, {n_spans} phoneme spans")
    return result


def coach_spans_for(tokens: Sequence[CoachToken] | None, n: int) -> list[Span | None]:
    """Reference span for each of *n* phoneme indices (None where missing)."""
    spans: list[Span | None] = [None] * n
    for token in tokens or ():
        if 0 <= token.index < n:
            spans[token.index] = token.span
    return spans
