"""Read scoring-provider responses into raw words.

The response has already been deserialized (a dict from JSON). Field names
vary by provider and version; see :mod:`phonochunk.fields`. Anything missing
degrades to None rather than failing the word.
"""

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from phonochunk import fields
from phonochunk.fields import first_list, first_present, first_text
from phonochunk.types import LetterGroup, RawPhoneme, RawWord

logger = logging.getLogger(__name__)


def response_root(payload: Any) -> Any:
    """Return the object holding the word list (the payload, ``result`` etc.)."""
    if first_list(payload, fields.WORD_LIST_KEYS):
        return payload
    root = first_present(payload, fields.ROOT_KEYS)
    return root if isinstance(root, Mapping) else payload


def read_span(entry: Any) -> tuple[Any, Any] | None:
    """Return raw (start, end) provider units for a phoneme entry, if any."""
    container = first_present(entry, fields.SPAN_KEYS)
    if not isinstance(container, Mapping):
        return None
    start = first_present(container, fields.SPAN_START_KEYS)
    end = first_present(container, fields.SPAN_END_KEYS)
    if start is None and end is None:
        return None
    return (start, end)


def read_phoneme(
    entry: Any,
    symbol_keys: Iterable[str] = fields.SYMBOL_KEYS,
) -> RawPhoneme:
    """Read one phoneme entry. Bare strings are taken as the symbol."""
    if isinstance(entry, str):
        return RawPhoneme(symbol=entry)
    symbol = first_present(entry, symbol_keys, "")
    return RawPhoneme(
        symbol=str(symbol).strip(),
        raw_score=first_present(entry, fields.SCORE_KEYS),
        span=read_span(entry),
        letter_group=first_text(entry, fields.PHONEME_LETTER_KEYS),
    )


def read_letter_group(entry: Any) -> LetterGroup:
    """Read one spelling group (fragment + phoneme symbols it spans)."""
    letters = first_text(entry, fields.GROUP_LETTER_KEYS) or ""
    symbols = first_present(entry, fields.GROUP_SYMBOL_KEYS)
    if isinstance(symbols, (list, tuple)):
        symbols = tuple(str(s) for s in symbols)
    elif symbols is not None and str(symbols).strip():
        symbols = (str(symbols).strip(),)
    else:
        symbols = ()
    return LetterGroup(letters=letters, symbols=symbols)


def _word_score(entry: Any) -> Any:
    score = first_present(entry, fields.SCORE_KEYS)
    if score is None and isinstance(entry, Mapping):
        # Some providers nest word scores under "scores"
        score = first_present(entry.get("scores"), fields.SCORE_KEYS)
    return score


def read_word(
    entry: Any,
    symbol_keys: Iterable[str] = fields.SYMBOL_KEYS,
) -> RawWord:
    """Read one word entry with its phonemes and optional letter groups."""
    symbol_keys = tuple(symbol_keys)
    phonemes = tuple(
        read_phoneme(p, symbol_keys)
        for p in first_list(entry, fields.PHONEME_LIST_KEYS)
    )
    groups = first_list(entry, fields.LETTER_GROUP_KEYS)
    return RawWord(
        text=first_text(entry, fields.WORD_TEXT_KEYS) or "",
        phonemes=phonemes,
        letter_groups=tuple(read_letter_group(g) for g in groups) if groups else None,
        raw_score=_word_score(entry),
    )


def read_words(
    payload: Any,
    fallback_text: str | None = None,
    symbol_keys: Iterable[str] = fields.SYMBOL_KEYS,
) -> list[RawWord]:
    """Read every word of a scoring response.

    Args:
        payload: Deserialized provider response, or a bare list of words.
        fallback_text: Reference text to show when the response has no
            words; each whitespace-separated word comes back without phonemes.
        symbol_keys: Aliases to try for the phoneme symbol.

    Returns:
        Raw words in spoken order.
    """
    symbol_keys = tuple(symbol_keys)
    if isinstance(payload, (list, tuple)):
        entries = list(payload)
    else:
        entries = first_list(response_root(payload), fields.WORD_LIST_KEYS)

    if entries:
        return [read_word(e, symbol_keys) for e in entries]

    text = (fallback_text or "").strip()
    if not text:
        logger.debug("Response has no words and no fallback text")
        return []
    logger.debug("Response has no words; using fallback text")
    return [RawWord(text=w) for w in text.split()]
