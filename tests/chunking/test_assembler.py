"""Tests for chunk assembly and the empty-chunk merge pass."""

import pytest

from phonochunk.chunking.assembler import assemble
from phonochunk.types import Span


def _each(n: int) -> list[tuple[int, int]]:
    """One chunk range per phoneme."""
    return [(i, i + 1) for i in range(n)]


class TestAssemble:
    def test_one_chunk_per_range(self):
        chunks = assemble(
            [(0, 2), (2, 4)],
            ["b", "e", "tt", "er"],
            scores=[90, 80, 70, 60],
            spans=[None] * 4,
        )
        assert [c.letters for c in chunks] == ["be", "tter"]
        assert [c.phoneme_indices for c in chunks] == [(0, 1), (2, 3)]
        assert [c.score for c in chunks] == [85, 65]
        assert [c.chunk_index for c in chunks] == [0, 1]

    def test_duration_weights(self):
        chunks = assemble([(0, 2)], ["a", "b"], [100, 50], [None, None], weights=[3.0, 1.0])
        assert chunks[0].score == 88

    def test_unscored_chunk_has_no_score(self):
        chunks = assemble([(0, 1), (1, 2)], ["a", "b"], [None, 40], [None, None])
        assert chunks[0].score is None
        assert chunks[1].score == 40

    def test_user_span_covers_phoneme_spans(self):
        spans = [Span(0.1, 0.2), None, Span(0.25, 0.4)]
        chunks = assemble([(0, 3)], ["a", "b", "c"], [50, 50, 50], spans)
        assert chunks[0].user_span == Span(0.1, 0.4)

    def test_no_spans_gives_no_user_span(self):
        chunks = assemble([(0, 1)], ["a"], [50], [None])
        assert chunks[0].user_span is None
        assert chunks[0].coach_span is None

    def test_coach_spans_by_index(self):
        chunks = assemble(
            [(0, 1), (1, 2)], ["a", "b"], [50, 50], [None, None],
            coach_spans=[Span(1.0, 1.1)],
        )
        assert chunks[0].coach_span == Span(1.0, 1.1)
        assert chunks[1].coach_span is None


class TestMergeEmptyChunks:
    def test_empty_chunk_absorbed_backward(self):
        chunks = assemble(_each(3), ["b", "", "tter"], [80, 60, 90], [None] * 3)
        assert len(chunks) == 2
        assert chunks[0].phoneme_indices == (0, 1)
        assert chunks[0].letters == "b"
        assert chunks[0].score == 70
        assert chunks[1].phoneme_indices == (2,)
        assert chunks[1].letters == "tter"
        assert [c.chunk_index for c in chunks] == [0, 1]

    def test_whitespace_counts_as_empty(self):
        chunks = assemble(_each(2), ["a", " "], [50, 50], [None, None])
        assert len(chunks) == 1
        assert chunks[0].phoneme_indices == (0, 1)

    def test_leading_empty_chunk_merges_forward(self):
        chunks = assemble(_each(3), ["", "b", "x"], [None, 50, 50], [None] * 3)
        assert [c.phoneme_indices for c in chunks] == [(0, 1), (2,)]
        assert chunks[0].letters == "b"
        assert chunks[0].score == 50

    def test_several_leading_empty_chunks_stay_ordered(self):
        chunks = assemble(_each(3), ["", "", "ab"], [10, 20, 30], [None] * 3)
        assert len(chunks) == 1
        assert chunks[0].phoneme_indices == (0, 1, 2)

    def test_merge_blends_by_phoneme_count(self):
        chunks = assemble([(0, 3), (3, 4)], ["a", "b", "c", ""], [90, 90, 90, 10], [None] * 4)
        assert len(chunks) == 1
        assert chunks[0].score == 70

    def test_merge_unions_spans(self):
        spans = [Span(0.1, 0.2), Span(0.2, 0.35)]
        chunks = assemble(_each(2), ["a", ""], [50, 50], spans)
        assert chunks[0].user_span == Span(0.1, 0.35)

    def test_merge_keeps_score_when_other_is_unscored(self):
        chunks = assemble(_each(2), ["a", ""], [64, None], [None, None])
        assert chunks[0].score == 64

    def test_all_empty_resplits_word(self):
        chunks = assemble([(0, 2), (2, 3)], ["", "", ""], [50, 50, 50], [None] * 3, word_text="hi")
        assert [c.letters for c in chunks] == ["h", "i"]
        assert [c.phoneme_indices for c in chunks] == [(0, 1), (2,)]

    @pytest.mark.parametrize("letters", [
        ["", "a", "", "", "b", ""],
        ["a", "", "", "", "", ""],
        ["", "", "", "", "", "z"],
        ["a", "b", "c", "d", "e", "f"],
    ])
    def test_merged_chunks_still_partition(self, letters):
        chunks = assemble(_each(6), letters, [50] * 6, [None] * 6, word_text="abcdef")
        covered = [i for c in chunks for i in c.phoneme_indices]
        assert covered == list(range(6))
        assert all(c.letters.strip() for c in chunks)
        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
