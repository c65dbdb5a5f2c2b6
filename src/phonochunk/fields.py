"""Field-name aliases used by scoring providers.

Providers (and provider versions) disagree on what to call things: a phoneme
symbol may arrive as ``phoneme``, ``ph`` or ``ipa``, a score as
``accuracyScore`` or ``pronunciation``. Every accepted alias lives here, in
priority order, so the set can be audited in one place.
"""

from typing import Any, Iterable, Mapping

# Phoneme symbol
SYMBOL_KEYS = ("phoneme", "ph", "phone", "sound", "ipa", "symbol")

# Reference recordings sometimes only carry what the recognizer heard
REFERENCE_SYMBOL_KEYS = ("ph", "phoneme", "phone", "sound_like")

# Accuracy score, 0-1 or 0-100
SCORE_KEYS = (
    "accuracyScore",
    "overallAccuracy",
    "accuracy",
    "pronunciation",
    "score",
    "overall",
    "pronunciationAccuracy",
    "accuracy_score",
    "pronunciation_score",
)

# Time span container and its bounds (hundredths of a second)
SPAN_KEYS = ("span", "time", "times")
SPAN_START_KEYS = ("start", "s", "begin")
SPAN_END_KEYS = ("end", "e", "finish")

# Letters a single phoneme came from
PHONEME_LETTER_KEYS = (
    "spelling", "letters", "grapheme", "graphemes", "text", "chunk", "segment", "display",
)

# Letter groups: container, spelling fragment, phonemes spanned
LETTER_GROUP_KEYS = ("phonics", "letter_groups", "graphemes")
GROUP_LETTER_KEYS = ("spell", "spelling", "letters", "grapheme", "text")
GROUP_SYMBOL_KEYS = ("phoneme", "phonemes", "phones", "ph")

# Response structure
ROOT_KEYS = ("result", "text_score", "data")
WORD_LIST_KEYS = ("words", "word_score_list", "wordList", "word_scores")
WORD_TEXT_KEYS = ("word", "text", "refText")
PHONEME_LIST_KEYS = ("phonemes", "phoneme", "phone_score_list", "phones")


def first_present(obj: Any, keys: Iterable[str], default: Any = None) -> Any:
    """Return the value of the first key in *keys* that is present on *obj*.

    A key counts as present when it maps to something other than None.
    Non-mapping objects have no keys, so *default* comes back.
    """
    if not isinstance(obj, Mapping):
        return default
    for key in keys:
        value = obj.get(key)
        if value is not None:
            return value
    return default


def first_list(obj: Any, keys: Iterable[str]) -> list:
    """Like :func:`first_present` but only accepts list values.

    Returns an empty list when no key holds a list.
    """
    if not isinstance(obj, Mapping):
        return []
    for key in keys:
        value = obj.get(key)
        if isinstance(value, (list, tuple)):
            return list(value)
    return []


def first_text(obj: Any, keys: Iterable[str]) -> str | None:
    """Return the first present value as a stripped string, or None if blank."""
    value = first_present(obj, keys)
    if value is None or isinstance(value, (dict, list, tuple)):
        return None
    text = str(value).strip()
    return text or None
