"""Assemble chunk ranges, letters, scores and spans into chunk rows."""

import logging
from dataclasses import dataclass
from typing import Sequence

from phonochunk.chunking.graphemes import even_split
from phonochunk.scoring import weighted_average
from phonochunk.spans import union_spans
from phonochunk.types import Chunk, Span

logger = logging.getLogger(__name__)


@dataclass
class _Draft:
    """A chunk under construction, before indices are renumbered."""
    indices: list[int]
    letters: str
    score: int | None
    user_span: Span | None
    coach_span: Span | None = None

    @property
    def is_empty(self) -> bool:
        return not self.letters.strip()


def _merge(keep: _Draft, other: _Draft) -> _Draft:
    """Fold *other* into *keep*; indices stay sorted and contiguous."""
    if other.indices and keep.indices and other.indices[0] < keep.indices[0]:
        indices = other.indices + keep.indices
        letters = other.letters + keep.letters
    else:
        indices = keep.indices + other.indices
        letters = keep.letters + other.letters
    score = weighted_average([
        (keep.score, len(keep.indices)),
        (other.score, len(other.indices)),
    ])
    return _Draft(
        indices=indices,
        letters=letters,
        score=score,
        user_span=union_spans([keep.user_span, other.user_span]),
        coach_span=union_spans([keep.coach_span, other.coach_span]),
    )


def _drafts(
    ranges: Sequence[tuple[int, int]],
    letters: Sequence[str],
    scores: Sequence[int | None],
    spans: Sequence[Span | None],
    weights: Sequence[float] | None,
    coach_spans: Sequence[Span | None] | None,
) -> list[_Draft]:
    drafts = []
    for start, end in ranges:
        idx = list(range(start, end))
        drafts.append(_Draft(
            indices=idx,
            letters="".join(letters[i] for i in idx),
            score=weighted_average(
                (scores[i], weights[i] if weights is not None else 1.0)
                for i in idx
            ),
            user_span=union_spans(spans[i] for i in idx),
            coach_span=(
                union_spans(coach_spans[i] for i in idx if i < len(coach_spans))
                if coach_spans is not None else None
            ),
        ))
    return drafts


def merge_empty_chunks(drafts: list[_Draft]) -> list[_Draft]:
    """Fold chunks with no visible letters into a neighbour.

    Scans left to right: an empty chunk joins the preceding non-empty chunk,
    and empty chunks at the start of the word join the first non-empty chunk
    after them. If no chunk has letters, nothing is merged.
    """
    merged: list[_Draft] = []
    leading: list[_Draft] = []
    for draft in drafts:
        if draft.is_empty:
            if merged:
                merged[-1] = _merge(merged[-1], draft)
            else:
                leading.append(draft)
            continue
        for lead in reversed(leading):
            draft = _merge(draft, lead)
        leading = []
        merged.append(draft)

    if not merged:
        return leading
    return merged


def assemble(
    ranges: Sequence[tuple[int, int]],
    letters: Sequence[str],
    scores: Sequence[int | None],
    spans: Sequence[Span | None],
    weights: Sequence[float] | None = None,
    coach_spans: Sequence[Span | None] | None = None,
    word_text: str = "",
) -> tuple[Chunk, ...]:
    """Build the final chunk rows for one word.

    Args:
        ranges: Chunk ranges from :func:`chunk_phonemes` (exclusive end).
        letters: Letters per phoneme index.
        scores: Normalized score per phoneme index.
        spans: User-recording span per phoneme index.
        weights: Averaging weight per phoneme index (default 1 each).
        coach_spans: Reference-recording span per phoneme index.
        word_text: Bare word text, used if letter alignment failed entirely.

    Returns:
        Chunks in order with dense ``chunk_index`` values.
    """
    drafts = _drafts(ranges, letters, scores, spans, weights, coach_spans)
    drafts = merge_empty_chunks(drafts)

    if drafts and all(d.is_empty for d in drafts):
        logger.debug(f"No letters aligned for {word_text!r}; re-splitting word text")
        pieces = even_split(word_text.strip(), len(drafts))
        for draft, piece in zip(drafts, pieces):
            draft.letters = piece

    return tuple(
        Chunk(
            chunk_index=i,
            phoneme_indices=tuple(d.indices),
            letters=d.letters,
            score=d.score,
            user_span=d.user_span,
            coach_span=d.coach_span,
        )
        for i, d in enumerate(drafts)
    )
