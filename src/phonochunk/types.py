"""Core data types for phonochunk."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Span:
    """A time range within a recording."""
    start: float     # seconds
    end: float       # seconds

    @property
    def duration(self) -> float:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {"start": round(self.start, 4), "end": round(self.end, 4)}


@dataclass(frozen=True)
class LetterGroup:
    """A spelling fragment and the phoneme symbols it produced."""
    letters: str
    symbols: tuple[str, ...]


@dataclass(frozen=True)
class RawPhoneme:
    """One phoneme entry as the scoring provider reported it."""
    symbol: str
    raw_score: Any = None
    span: tuple[Any, Any] | None = None     # provider units, not seconds
    letter_group: str | None = None


@dataclass(frozen=True)
class RawWord:
    """One word of a scoring response, already read out of the payload."""
    text: str
    phonemes: tuple[RawPhoneme, ...] = ()
    letter_groups: tuple[LetterGroup, ...] | None = None
    raw_score: Any = None


@dataclass(frozen=True)
class CanonicalPhoneme:
    """A phoneme mapped into the canonical inventory."""
    index: int                  # position in the word's phoneme sequence
    symbol: str
    score: int | None = None    # 0-100
    start: float | None = None  # seconds
    end: float | None = None    # seconds

    @property
    def span(self) -> Span | None:
        if self.start is None or self.end is None:
            return None
        return Span(self.start, self.end)

    @property
    def duration(self) -> float | None:
        span = self.span
        return span.duration if span is not None else None

    def to_dict(self) -> dict:
        span = self.span
        return {
            "index": self.index,
            "symbol": self.symbol,
            "score": self.score,
            "span": span.to_dict() if span else None,
        }


@dataclass(frozen=True)
class Chunk:
    """A contiguous run of phonemes shown as one pronounceable unit."""
    chunk_index: int
    phoneme_indices: tuple[int, ...]
    letters: str
    score: int | None = None
    user_span: Span | None = None
    coach_span: Span | None = None

    def to_dict(self) -> dict:
        return {
            "chunk_index": self.chunk_index,
            "phoneme_indices": list(self.phoneme_indices),
            "letters": self.letters,
            "score": self.score,
            "user_span": self.user_span.to_dict() if self.user_span else None,
            "coach_span": self.coach_span.to_dict() if self.coach_span else None,
        }


@dataclass(frozen=True)
class Word:
    """A scored word with its canonical phonemes and chunks."""
    text: str
    phonemes: tuple[CanonicalPhoneme, ...] = ()
    chunks: tuple[Chunk, ...] = ()
    score: int | None = None

    def chunk_phonemes(self, chunk: Chunk) -> list[CanonicalPhoneme]:
        """Return the phoneme detail rows behind a chunk."""
        return [self.phonemes[i] for i in chunk.phoneme_indices]

    @property
    def span(self) -> Span | None:
        """Extent of all resolvable phoneme spans in the word."""
        spans = [p.span for p in self.phonemes if p.span is not None]
        if not spans:
            return None
        return Span(min(s.start for s in spans), max(s.end for s in spans))

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "score": self.score,
            "phonemes": [p.to_dict() for p in self.phonemes],
            "chunks": [c.to_dict() for c in self.chunks],
        }


@dataclass(frozen=True)
class CoachToken:
    """A phoneme of the reference recording, located by index."""
    index: int
    symbol: str
    span: Span | None = None

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "symbol": self.symbol,
            "span": self.span.to_dict() if self.span else None,
        }


@dataclass
class EngineConfig:
    """Settings for turning provider payloads into words."""
    unit_to_seconds: float = 0.01     # provider spans are in 10 ms units
    pad_spans: bool = False           # widen chunk spans for playback
    pad_before: float = 0.03          # seconds
    pad_after: float = 0.05           # seconds
    clip_duration: float | None = None
