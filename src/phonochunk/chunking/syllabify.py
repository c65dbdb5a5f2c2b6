"""Vowel-nucleus chunking: canonical phonemes → pronounceable units.

Each chunk is anchored on one vowel nucleus. Consonants between two nuclei
are split so a single consonant becomes the onset of the following chunk
("better" → "be" + "tter"), while a cluster keeps all but its last consonant
as the coda of the preceding chunk.
"""

from typing import Sequence

from phonochunk.phonemes import is_vowel


def vowel_indices(symbols: Sequence[str]) -> list[int]:
    """Indices of the vowel nuclei in a canonical symbol sequence."""
    return [i for i, s in enumerate(symbols) if is_vowel(s)]


def chunk_phonemes(symbols: Sequence[str]) -> list[tuple[int, int]]:
    """Partition a phoneme sequence into chunk ranges.

    Args:
        symbols: Canonical phoneme symbols of one word, in spoken order.

    Returns:
        List of (start_idx, end_idx) tuples (exclusive end). The ranges are
        contiguous, ordered and cover every index exactly once. Empty input
        gives an empty list.
    """
    n = len(symbols)
    if n == 0:
        return []

    nuclei = vowel_indices(symbols)

    # No vowels: consonant-only fragment is a single chunk
    if not nuclei:
        return [(0, n)]

    ranges: list[tuple[int, int]] = []
    start = 0
    for nuc, next_nuc in zip(nuclei, nuclei[1:]):
        split = _split_cluster(nuc, next_nuc)
        ranges.append((start, split))
        start = split

    # Last chunk takes any trailing consonants
    ranges.append((start, n))
    return ranges


def _split_cluster(nuc_a: int, nuc_b: int) -> int:
    """Return the index where the chunk after nucleus *nuc_a* ends.

    The consonant run between the nuclei is ``nuc_a+1 .. nuc_b-1``.
    """
    run_len = nuc_b - nuc_a - 1

    if run_len == 0:
        # Adjacent vowels: the second one starts a new chunk
        return nuc_b

    if run_len == 1:
        # Single consonant is the onset of the next chunk
        return nuc_a + 1

    # Cluster: last consonant is the onset, the rest stay as coda
    return nuc_b - 1
