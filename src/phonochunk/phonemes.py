"""Canonical phoneme inventory and symbol canonicalization.

Scoring providers report phonemes in CMU/ARPABET codes on one day and IPA on
the next. Everything is mapped into one closed ARPABET-style inventory before
chunking, since vowel membership drives chunk boundaries.
"""

import re
from types import MappingProxyType

VOWELS = frozenset({
    "AA", "AE", "AH", "AO", "AW", "AY", "EH", "ER", "EY",
    "IH", "IY", "OW", "OY", "UH", "UW",
    # Reduced and dialect vowels
    "AX", "IX", "UX", "AXR", "OH",
})

CONSONANTS = frozenset({
    "B", "CH", "D", "DH", "F", "G", "HH", "JH", "K", "L", "M", "N", "NG",
    "P", "R", "S", "SH", "T", "TH", "V", "W", "Y", "Z", "ZH",
    # Flap, syllabic consonants, glottal stop
    "DX", "EL", "EM", "EN", "NX", "Q",
})

INVENTORY = VOWELS | CONSONANTS

# IPA (and IPA-ish) symbols to canonical codes. Keys are cleaned tokens:
# no slashes, stress marks, length marks or tie bars.
IPA_TO_CANONICAL = MappingProxyType({
    # Diphthongs
    "aɪ": "AY",
    "ai": "AY",
    "aʊ": "AW",
    "au": "AW",
    "eɪ": "EY",
    "ei": "EY",
    "oʊ": "OW",
    "əʊ": "OW",
    "ou": "OW",
    "ɔɪ": "OY",
    "oɪ": "OY",
    # Centering diphthongs (non-rhotic accents)
    "ɪə": "IH",
    "eə": "EH",
    "ɛə": "EH",
    "ʊə": "UH",
    # R-coloured vowels
    "ɚ": "ER",
    "ɝ": "ER",
    "ɜ": "ER",
    "ɜr": "ER",
    "ɜɹ": "ER",
    "əɹ": "AXR",
    "ər": "AXR",
    # Monophthongs
    "i": "IY",
    "ɪ": "IH",
    "ᵻ": "IX",
    "ɨ": "IX",
    "e": "EY",
    "ɛ": "EH",
    "æ": "AE",
    "a": "AA",
    "ɑ": "AA",
    "ɒ": "OH",
    "ɔ": "AO",
    "o": "OW",
    "ʊ": "UH",
    "u": "UW",
    "ʉ": "UX",
    "ə": "AX",
    "ɐ": "AH",
    "ʌ": "AH",
    # Stops
    "p": "P",
    "b": "B",
    "t": "T",
    "d": "D",
    "k": "K",
    "g": "G",
    "ɡ": "G",
    "ʔ": "Q",
    "ɾ": "DX",
    # Affricates
    "tʃ": "CH",
    "ʧ": "CH",
    "dʒ": "JH",
    "ʤ": "JH",
    # Fricatives
    "f": "F",
    "v": "V",
    "θ": "TH",
    "ð": "DH",
    "s": "S",
    "z": "Z",
    "ʃ": "SH",
    "ʒ": "ZH",
    "h": "HH",
    "ɦ": "HH",
    # Nasals
    "m": "M",
    "n": "N",
    "ŋ": "NG",
    "m̩": "EM",
    "n̩": "EN",
    # Liquids
    "l": "L",
    "ɫ": "L",
    "l̩": "EL",
    "ɫ̩": "EL",
    "r": "R",
    "ɹ": "R",
    "ɻ": "R",
    "ʁ": "R",
    # Glides
    "j": "Y",
    "w": "W",
})

# Already canonical: a bare ASCII letter code such as "AH" or "axr"
_CANONICAL_RE = re.compile(r"^[A-Za-z]{1,3}$")

# Slashes, brackets, IPA stress marks, ARPABET stress digits, length marks,
# tie bars
_STRIP_RE = re.compile("[/\\[\\]ˈˌ'0-9ːˑ͜͡]")
_SPACE_RE = re.compile(r"\s+")


def _clean(raw: str) -> str:
    """Strip delimiters and prosodic marks, collapse whitespace."""
    cleaned = _STRIP_RE.sub("", raw)
    return _SPACE_RE.sub(" ", cleaned).strip()


def canonicalize(raw) -> str:
    """Map a phoneme symbol from any provider alphabet to a canonical code.

    Bare ASCII codes (``"ah"``, ``"TH"``) are uppercased and returned.
    Anything else is cleaned and looked up in :data:`IPA_TO_CANONICAL`;
    symbols with no entry come back uppercased rather than dropped so they
    stay visible downstream. Never raises, and applying it twice gives the
    same result as applying it once.
    """
    if raw is None:
        return ""
    text = str(raw).strip()
    if _CANONICAL_RE.match(text):
        return text.upper()

    cleaned = _clean(text)
    if cleaned in IPA_TO_CANONICAL:
        return IPA_TO_CANONICAL[cleaned]
    lowered = cleaned.lower()
    if lowered in IPA_TO_CANONICAL:
        return IPA_TO_CANONICAL[lowered]
    return cleaned.upper()


def is_vowel(symbol: str) -> bool:
    """True if *symbol* is a canonical vowel (a chunk nucleus)."""
    return symbol in VOWELS


def is_known(symbol: str) -> bool:
    """True if *symbol* belongs to the canonical inventory."""
    return symbol in INVENTORY
