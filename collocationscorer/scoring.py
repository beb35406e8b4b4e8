"""
Candidate estimation: contingency vectors and (lambda, sigma) per sequence.

For candidate i of length n the contingency vector has 2**n cells. Every
other candidate j adds its count to the cell of match_bits(seq_i, seq_j);
the all-match cell also receives count_i - 1 for the other occurrences
of i itself, and every cell starts at the 0.5 smoothing prior.
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .bits import match_bits_matrix, pad_sequences
from .counting import make_executor, partition
from .estimators import SMOOTHING, Method, get_estimator
from .exceptions import DegenerateSmoothingError

Estimate = Tuple[Optional[float], Optional[float], Optional[str]]


def contingency(
    i: int, matrix: np.ndarray, counts: np.ndarray, length: int
) -> np.ndarray:
    """Smoothed contingency vector of candidate i against all others."""
    assert counts[i] >= 1, f"candidate {i} has count {counts[i]}"
    bits = match_bits_matrix(matrix[i, :length], matrix)
    size = 1 << length
    cells = np.bincount(bits, weights=counts, minlength=size).astype(np.float64)
    # row i landed in the all-match cell with weight counts[i]; keep count - 1
    cells[size - 1] -= 1.0
    return cells + SMOOTHING


def _estimate_range(
    start: int,
    stop: int,
    matrix: np.ndarray,
    counts: np.ndarray,
    lengths: np.ndarray,
    method: Method,
    count_min: int,
) -> List[Estimate]:
    estimator = get_estimator(method)
    out: List[Estimate] = []
    for i in range(start, stop):
        n = int(lengths[i])
        if n < 2 or counts[i] < count_min:
            out.append((None, None, None))
            continue
        try:
            lam, sigma = estimator(contingency(i, matrix, counts, n), n)
        except DegenerateSmoothingError as exc:
            out.append((None, None, str(exc)))
            continue
        out.append((lam, sigma, None))
    return out


def estimate_candidates(
    seqs: Sequence[Sequence[int]],
    counts: Sequence[int],
    method: Union[str, Method] = Method.UNIGRAM,
    count_min: int = 1,
    workers: int = 1,
    executor: str = "thread",
) -> List[Estimate]:
    """
    (lambda, sigma, fault) for every candidate, in input order.

    Candidates shorter than 2 tokens or rarer than count_min get
    (None, None, None). A candidate whose contingency vector is
    degenerate gets (None, None, message) without stopping the others.
    """
    method = Method.parse(method)
    k = len(seqs)
    if k == 0:
        return []
    matrix = pad_sequences(seqs)
    counts_arr = np.asarray(counts, dtype=np.int64)
    lengths = np.array([len(s) for s in seqs], dtype=np.int64)

    if workers <= 1 or k <= 1:
        return _estimate_range(0, k, matrix, counts_arr, lengths, method, count_min)

    with make_executor(executor, workers) as pool:
        futures = [
            pool.submit(
                _estimate_range, start, stop, matrix, counts_arr, lengths, method, count_min
            )
            for start, stop in partition(k, workers)
        ]
        chunks = [f.result() for f in futures]
    return [est for chunk in chunks for est in chunk]
