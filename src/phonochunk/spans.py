"""Time spans: provider units to seconds, padding for playback."""

import math
from typing import Iterable

from phonochunk.types import Span

# Scoring providers report spans in hundredths of a second
PROVIDER_UNIT_SECONDS = 0.01

# Playback padding around a chunk (seconds)
PAD_BEFORE_S = 0.03
PAD_AFTER_S = 0.05


def _as_number(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        n = float(value)
    except (TypeError, ValueError):
        return None
    return n if math.isfinite(n) else None


def resolve_span(
    raw_start,
    raw_end,
    unit_to_seconds: float = PROVIDER_UNIT_SECONDS,
) -> Span | None:
    """Convert a provider span to seconds.

    Returns None unless both bounds are numeric and end > start, so callers
    never see a zero or negative length span. A start of 0 is valid.
    """
    start = _as_number(raw_start)
    end = _as_number(raw_end)
    if start is None or end is None or end <= start:
        return None
    return Span(start * unit_to_seconds, end * unit_to_seconds)


def pad_span(
    span: Span | None,
    before: float = PAD_BEFORE_S,
    after: float = PAD_AFTER_S,
    duration: float | None = None,
) -> Span | None:
    """Widen a span for audio playback, clamped to [0, duration]."""
    if span is None:
        return None
    start = max(0.0, span.start - before)
    end = span.end + after
    if duration is not None:
        end = min(duration, end)
    if end <= start:
        return span
    return Span(start, end)


def union_spans(spans: Iterable[Span | None]) -> Span | None:
    """Smallest span covering every non-null span, or None if there are none."""
    present = [s for s in spans if s is not None]
    if not present:
        return None
    return Span(min(s.start for s in present), max(s.end for s in present))
