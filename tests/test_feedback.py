"""Tests for coaching tips and weak-phoneme summaries."""

from phonochunk.feedback import (
    CONSONANT_TIPS,
    VOWEL_TIPS,
    WeakPhoneme,
    coach_tip,
    general_tip,
    weakest_phonemes,
)
from phonochunk.types import CanonicalPhoneme, Chunk, Word


class TestGeneralTip:
    def test_bands(self):
        assert general_tip(95).startswith("Excellent")
        assert general_tip(80).startswith("Good")
        assert general_tip(65).startswith("Close")
        assert general_tip(20).startswith("Needs work")
        assert general_tip(None).startswith("Try again")


class TestCoachTip:
    def test_consonant_tip(self):
        tip = coach_tip("θ", 70)
        assert tip.startswith(CONSONANT_TIPS["TH"])
        assert tip.endswith("Now repeat the word slowly, then speed up.")

    def test_vowel_tip_from_ipa(self):
        assert coach_tip("ɪ") == VOWEL_TIPS["IH"]

    def test_shared_vowel_cue(self):
        assert VOWEL_TIPS["AA"] == VOWEL_TIPS["OH"]
        assert coach_tip("ɒ") == VOWEL_TIPS["AA"]

    def test_low_score_adds_drill(self):
        tip = coach_tip("R", 40)
        assert "3-5 times" in tip

    def test_high_score_is_praise(self):
        tip = coach_tip("r", 92, word="red")
        assert tip == "Nice! In “red”, your /r/ is strong. Try it at normal speed now."

    def test_word_prefix(self):
        assert coach_tip("TH", word="think").startswith("In “think”: For /th/")

    def test_unknown_symbol_gets_general_tip(self):
        assert coach_tip("ʘ", 65) == general_tip(65) + " Now repeat the word slowly, then speed up."

    def test_reduced_vowel_without_cue(self):
        assert coach_tip("ə").startswith("Focus on the mouth shape")

    def test_empty_symbol(self):
        assert coach_tip("", 50, word="cat") == f"Try again on “cat”. {general_tip(50)}"
        assert coach_tip(None) == general_tip(None)


def _word(text: str, symbols_scores: list[tuple[str, int | None]], chunks: tuple[Chunk, ...]) -> Word:
    phonemes = tuple(
        CanonicalPhoneme(i, s, score) for i, (s, score) in enumerate(symbols_scores)
    )
    return Word(text=text, phonemes=phonemes, chunks=chunks)


class TestWeakestPhonemes:
    def test_worst_instance_in_first_appearance_order(self):
        better = _word(
            "better",
            [("B", 90), ("EH", 80), ("T", 60), ("ER", 50)],
            (Chunk(0, (0, 1), "be"), Chunk(1, (2, 3), "tter")),
        )
        ten = _word("ten", [("T", 40), ("EH", 95), ("N", 88)], (Chunk(0, (0, 1, 2), "ten"),))
        weak = weakest_phonemes([better, ten])
        assert [w.symbol for w in weak] == ["EH", "T", "ER"]
        assert weak[1] == WeakPhoneme("T", 40, "ten", "ten")
        assert weak[0] == WeakPhoneme("EH", 80, "be", "better")

    def test_unscored_counts_as_worst(self):
        a = _word("at", [("AE", 30)], ())
        b = _word("apple", [("AE", None)], ())
        weak = weakest_phonemes([a, b])
        assert weak == [WeakPhoneme("AE", None, "AE", "apple")]

    def test_threshold(self):
        word = _word("go", [("G", 70), ("OW", 72)], ())
        assert [w.symbol for w in weakest_phonemes([word], threshold=71)] == ["G"]

    def test_to_dict(self):
        assert WeakPhoneme("T", 40, "t", "ten").to_dict() == {
            "symbol": "T", "score": 40, "letters": "t", "word": "ten",
        }
