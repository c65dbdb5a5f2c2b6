"""Grapheme alignment: which letters of a word produced each phoneme."""

import logging
from typing import Sequence

import numpy as np

from phonochunk.types import CanonicalPhoneme, LetterGroup

logger = logging.getLogger(__name__)


def even_split(text: str, n: int) -> list[str]:
    """Split *text* into *n* consecutive pieces of near-equal length.

    When the length does not divide evenly, the earlier pieces get the extra
    letters. Pieces come back empty when *text* is shorter than *n*.
    """
    if n <= 0:
        return []
    bounds = np.array_split(np.arange(len(text)), n)
    pieces = []
    for idx in bounds:
        if len(idx) == 0:
            pieces.append("")
        else:
            pieces.append(text[int(idx[0]):int(idx[-1]) + 1])
    return pieces


def expand_letter_groups(groups: Sequence[LetterGroup]) -> list[str]:
    """Expand letter groups to one letters string per phoneme.

    Each group's fragment is split evenly over the phonemes it spans. A group
    spanning no phonemes (a silent letter) is glued onto the previous
    expansion, or onto the next one when it comes first.
    """
    expanded: list[str] = []
    pending = ""
    for group in groups:
        count = len(group.symbols)
        if count == 0:
            if expanded:
                expanded[-1] += group.letters
            else:
                pending += group.letters
            continue
        pieces = even_split(group.letters, count)
        if pending:
            pieces[0] = pending + pieces[0]
            pending = ""
        expanded.extend(pieces)
    if pending and expanded:
        expanded[-1] += pending
    return expanded


def _match_case(word: str, letters: list[str]) -> list[str]:
    """Recapitalize the first non-empty piece when the word is capitalized."""
    if not word or not word[0].isupper():
        return letters
    out = list(letters)
    for i, piece in enumerate(out):
        if piece:
            out[i] = piece[0].upper() + piece[1:]
            break
    return out


def align_letters(
    word: str,
    phonemes: Sequence[CanonicalPhoneme],
    letter_groups: Sequence[LetterGroup] | None = None,
) -> list[str]:
    """Return the letters behind each phoneme of *word*.

    Provider letter groups are used when they expand to exactly one entry per
    phoneme; otherwise the bare word is split evenly across the phonemes.
    Entries may be empty; the assembler folds those into a neighbouring chunk.

    Args:
        word: Word text as displayed.
        phonemes: Canonical phonemes of the word.
        letter_groups: Optional provider spelling groups.

    Returns:
        One letters string per phoneme index.
    """
    n = len(phonemes)
    if n == 0:
        return []

    letters = None
    if letter_groups:
        expanded = expand_letter_groups(letter_groups)
        if len(expanded) == n:
            letters = expanded
        else:
            logger.debug(
                f"Letter groups for {word!r} cover {len(expanded)} phonemes, "
                f"expected {n}; splitting evenly"
            )

    if letters is None:
        letters = even_split(word.strip(), n)

    return _match_case(word.strip(), letters)
