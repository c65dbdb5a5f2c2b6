"""Chunking pipeline: raw provider words → canonical, chunked, playable words."""

import logging
from dataclasses import replace
from typing import Any, Sequence

from phonochunk.chunking.assembler import assemble
from phonochunk.chunking.graphemes import align_letters
from phonochunk.chunking.syllabify import chunk_phonemes
from phonochunk.payload import read_words
from phonochunk.phonemes import canonicalize
from phonochunk.reference import coach_spans_for
from phonochunk.scoring import normalize_score, phoneme_weight, word_score
from phonochunk.spans import PROVIDER_UNIT_SECONDS, pad_span, resolve_span
from phonochunk.types import (
    CanonicalPhoneme,
    Chunk,
    CoachToken,
    EngineConfig,
    LetterGroup,
    RawWord,
    Word,
)

logger = logging.getLogger(__name__)


def canonical_phonemes(
    raw_word: RawWord,
    unit_to_seconds: float = PROVIDER_UNIT_SECONDS,
) -> tuple[CanonicalPhoneme, ...]:
    """Canonicalize symbols, scores and spans of a word's phonemes."""
    phonemes = []
    for i, raw in enumerate(raw_word.phonemes):
        span = resolve_span(*raw.span, unit_to_seconds) if raw.span else None
        phonemes.append(CanonicalPhoneme(
            index=i,
            symbol=canonicalize(raw.symbol),
            score=normalize_score(raw.raw_score),
            start=span.start if span else None,
            end=span.end if span else None,
        ))
    return tuple(phonemes)


def _letter_groups(raw_word: RawWord) -> Sequence[LetterGroup] | None:
    """Provider letter groups, or one-phoneme groups from per-phoneme letters."""
    if raw_word.letter_groups:
        return raw_word.letter_groups
    if not any(p.letter_group for p in raw_word.phonemes):
        return None
    return [
        LetterGroup(letters=p.letter_group or "", symbols=(p.symbol,))
        for p in raw_word.phonemes
    ]


def _pad_chunks(chunks: Sequence[Chunk], config: EngineConfig) -> tuple[Chunk, ...]:
    return tuple(
        replace(
            c,
            user_span=pad_span(
                c.user_span, config.pad_before, config.pad_after, config.clip_duration,
            ),
            coach_span=pad_span(c.coach_span, config.pad_before, config.pad_after),
        )
        for c in chunks
    )


def analyze_word(
    raw_word: RawWord,
    coach_tokens: Sequence[CoachToken] | None = None,
    config: EngineConfig | None = None,
) -> Word:
    """Turn one raw provider word into a scored, chunked word.

    Args:
        raw_word: Word as read from the scoring response.
        coach_tokens: Reference-recording tokens for the same word, matched
            to the learner's phonemes by index.
        config: Span units and playback padding.

    Returns:
        A Word whose chunks partition its phoneme indices. A word with no
        phonemes has no chunks and no score.
    """
    config = config or EngineConfig()
    phonemes = canonical_phonemes(raw_word, config.unit_to_seconds)
    if not phonemes:
        return Word(text=raw_word.text)

    letters = align_letters(raw_word.text, phonemes, _letter_groups(raw_word))
    ranges = chunk_phonemes([p.symbol for p in phonemes])
    chunks = assemble(
        ranges,
        letters,
        scores=[p.score for p in phonemes],
        spans=[p.span for p in phonemes],
        weights=[phoneme_weight(p) for p in phonemes],
        coach_spans=(
            coach_spans_for(coach_tokens, len(phonemes))
            if coach_tokens is not None else None
        ),
        word_text=raw_word.text,
    )
    if config.pad_spans:
        chunks = _pad_chunks(chunks, config)

    score = word_score(phonemes, fallback=raw_word.raw_score)
    logger.debug(
        f"{raw_word.text!r}: {len(phonemes)} phonemes, {len(chunks)} chunks, "
        f"score={score}"
    )
    return Word(text=raw_word.text, phonemes=phonemes, chunks=chunks, score=score)


def analyze_result(
    payload: Any,
    text: str | None = None,
    coach_tokens: Sequence[Sequence[CoachToken]] | None = None,
    config: EngineConfig | None = None,
) -> list[Word]:
    """Analyze every word of a scoring response.

    Args:
        payload: Deserialized scoring-provider response.
        text: Reference text, shown word by word when the response is empty.
        coach_tokens: Per-word reference tokens (see
            :func:`phonochunk.reference.extract_reference_tokens`), matched
            to the response's words by position.
        config: Span units and playback padding.
    """
    raw_words = read_words(payload, fallback_text=text)
    words = []
    for i, raw_word in enumerate(raw_words):
        tokens = None
        if coach_tokens is not None and i < len(coach_tokens):
            tokens = coach_tokens[i]
        words.append(analyze_word(raw_word, tokens, config))
    return words
