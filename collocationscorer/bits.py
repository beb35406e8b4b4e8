"""
Positional match patterns between token sequences.

Bit i of a pattern is set when both sequences carry the same token at
position i. Bit 0 is the first position.
"""

from typing import Sequence

import numpy as np

PAD = -1  # fills short rows of a candidate matrix; never equal to a token


def match_bits(seq1: Sequence[int], seq2: Sequence[int]) -> int:
    bit = 0
    for i, (a, b) in enumerate(zip(seq1, seq2)):
        if a == b:
            bit |= 1 << i
    return bit


def pad_sequences(seqs: Sequence[Sequence[int]], width: int = 0) -> np.ndarray:
    """
    Stack sequences into a (k, width) int64 matrix, right-padded with PAD.

    width defaults to the longest sequence.
    """
    width = max([width] + [len(s) for s in seqs])
    mat = np.full((len(seqs), width), PAD, dtype=np.int64)
    for row, s in enumerate(seqs):
        mat[row, : len(s)] = s
    return mat


def match_bits_matrix(seq: Sequence[int], matrix: np.ndarray) -> np.ndarray:
    """
    match_bits(seq, row) for every row of a padded candidate matrix.

    Padded cells never match, so rows shorter than seq contribute no
    bits past their end.
    """
    n = min(len(seq), matrix.shape[1])
    eq = matrix[:, :n] == np.asarray(seq[:n], dtype=np.int64)
    weights = np.left_shift(1, np.arange(n, dtype=np.int64))
    return eq.astype(np.int64) @ weights
