"""Rule-based coaching feedback for individual phonemes."""

from dataclasses import dataclass
from typing import Iterable

from phonochunk.phonemes import canonicalize, is_vowel
from phonochunk.types import Word

# Targeted tips by canonical consonant
CONSONANT_TIPS = {
    "TH": "For /th/: rest the tongue tip lightly between your teeth and push air through, voice off.",
    "DH": "For voiced /th/: tongue lightly between the teeth, voice on (as in \"this\").",
    "R": "For /r/: draw the tongue slightly back and up without touching the teeth; lips may round a little.",
    "L": "For /l/: touch the tongue tip to the ridge behind the top teeth and keep it light.",
    "V": "For /v/: top teeth rest on the bottom lip while the voice buzzes.",
    "W": "For /w/: round the lips forward and glide quickly into the next vowel.",
    "S": "For /s/: tongue close to the ridge with a narrow stream of air, voice off.",
    "Z": "For /z/: the /s/ position with the voice switched on.",
    "SH": "For /sh/: lips slightly rounded, tongue a little further back than for /s/.",
    "ZH": "For /zh/: the /sh/ position with voice, like the middle of \"measure\".",
    "CH": "For /ch/: a stop, a burst, then friction, as in \"chip\". Keep it crisp.",
    "JH": "For /j/: like /ch/ with the voice on, as in \"job\".",
    "T": "For /t/: a quick tap on the ridge and a clean release. No extra vowel after it.",
    "D": "For /d/: like /t/ with voice. Short and clean.",
    "K": "For /k/: the back of the tongue meets the soft palate, then releases sharply.",
    "G": "For /g/: like /k/ with the voice on.",
    "F": "For /f/: top teeth on the bottom lip, blow air, voice off.",
    "P": "For /p/: close the lips and release with a small puff of air.",
    "B": "For /b/: close the lips and release with voice, without a strong puff.",
    "N": "For /n/: tongue on the ridge behind the top teeth, air through the nose.",
    "NG": "For /ng/: back of the tongue raised, air through the nose, like the end of \"sing\".",
    "HH": "For /h/: a soft breath from the throat straight into the vowel.",
    "Y": "For /y/: a quick glide as in \"yes\". Don't hold it.",
}

# Mouth-shape cues for vowels, several symbols share a cue
_VOWEL_CUES = {
    ("IY",): "For /ee/: lips slightly spread, tongue high and forward. Keep it long and steady.",
    ("IH", "IX"): "For /ih/: relaxed tongue, a little lower than /ee/. A shorter sound.",
    ("AE",): "For /ae/: open the mouth wide as in \"cat\"; the jaw drops more than you expect.",
    ("AA", "AO", "OH"): "For /ah/: open jaw, tongue low. Don't let it drift to \"uh\".",
    ("UH", "UW", "UX"): "For /oo/: lips rounded forward, tongue high and back. Keep it smooth.",
    ("ER", "AXR"): "For /er/: tongue pulled back, lips relaxed. No extra vowel before or after.",
    ("OW",): "For /oh/: start rounded and glide slightly; don't keep it flat.",
    ("AY",): "For /ai/: start open on \"ah\" and glide to \"ee\". Make the glide clear.",
    ("AW",): "For /au/: start open and round towards \"oo\". Don't rush the glide.",
    ("OY",): "For /oy/: start on \"oh\" and glide to \"ee\". Keep both parts distinct.",
}
VOWEL_TIPS = {symbol: tip for symbols, tip in _VOWEL_CUES.items() for symbol in symbols}

_DEFAULT_VOWEL_TIP = "Focus on the mouth shape and hold the vowel steady without changing it mid-sound."


def general_tip(score: int | None) -> str:
    """A tip that depends only on how well the sound scored."""
    if score is None:
        return "Try again and focus on a clean, steady sound."
    if score >= 90:
        return "Excellent. Keep it consistent at normal speed."
    if score >= 75:
        return "Good. Now try a slightly slower, clearer pronunciation."
    if score >= 60:
        return "Close. Exaggerate the mouth shape and slow down a bit."
    return "Needs work. Go slower and isolate the sound before saying the whole word."


def coach_tip(symbol, score: int | None = None, word: str = "") -> str:
    """Return a short coaching tip for one phoneme.

    Args:
        symbol: Phoneme in any provider alphabet.
        score: Normalized 0-100 score, if measured.
        word: The word the phoneme was spoken in.
    """
    ph = canonicalize(symbol)
    word = (word or "").strip()

    if not ph:
        tip = general_tip(score)
        return f"Try again on “{word}”. {tip}" if word else tip

    if score is not None and score >= 90:
        where = f"In “{word}”, your" if word else "Your"
        return f"Nice! {where} /{ph.lower()}/ is strong. Try it at normal speed now."

    tip = CONSONANT_TIPS.get(ph)
    if tip is None and is_vowel(ph):
        tip = VOWEL_TIPS.get(ph, _DEFAULT_VOWEL_TIP)
    if tip is None:
        tip = general_tip(score)

    if score is not None and score < 60:
        tip = f"{tip} Go slower and repeat this sound on its own 3-5 times before the full word."
    elif score is not None and score < 85:
        tip = f"{tip} Now repeat the word slowly, then speed up."

    return f"In “{word}”: {tip}" if word else tip


@dataclass(frozen=True)
class WeakPhoneme:
    """The worst-scoring instance of one phoneme across a sentence."""
    symbol: str
    score: int | None
    letters: str
    word: str

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "score": self.score,
            "letters": self.letters,
            "word": self.word,
        }


def _is_worse(candidate: int | None, current: int | None) -> bool:
    # An unmeasured phoneme counts as the worst possible result
    if candidate is None:
        return current is not None
    if current is None:
        return False
    return candidate < current


def weakest_phonemes(words: Iterable[Word], threshold: int = 85) -> list[WeakPhoneme]:
    """List each phoneme that scored below *threshold* (or not at all).

    One entry per symbol, in order of first appearance, holding the worst
    instance seen.
    """
    found: dict[str, WeakPhoneme] = {}
    for word in words:
        letters_by_index = {}
        for chunk in word.chunks:
            for i in chunk.phoneme_indices:
                letters_by_index[i] = chunk.letters

        for ph in word.phonemes:
            if not ph.symbol:
                continue
            if ph.score is not None and ph.score >= threshold:
                continue
            candidate = WeakPhoneme(
                symbol=ph.symbol,
                score=ph.score,
                letters=letters_by_index.get(ph.index, "") or ph.symbol,
                word=word.text,
            )
            existing = found.get(ph.symbol)
            if existing is None:
                found[ph.symbol] = candidate
            elif _is_worse(candidate.score, existing.score):
                # dict keeps the first-appearance position
                found[ph.symbol] = candidate
    return list(found.values())
