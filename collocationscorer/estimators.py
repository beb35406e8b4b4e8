"""
Blaheta & Johnson collocation-strength estimators.

Both estimators take a contingency vector C of length 2**n, where
C[b] holds the (smoothed) weight of candidates whose positional match
pattern with the scored sequence is b, and return (lambda, sigma):
a log-linear association strength and its standard error.

  unigram        lambda = (n-1) ln C[0] - sum_b ln C[2**b] + ln C[2**n - 1]
  all_subtuples  lambda = sum_b (-1)**(n - popcount(b)) ln C[b]
"""

from enum import Enum
from typing import Callable, Dict, Tuple, Union

import numpy as np

from .exceptions import DegenerateSmoothingError, UnknownMethodError

SMOOTHING = 0.5


class Method(str, Enum):
    UNIGRAM = "unigram"
    ALL_SUBTUPLES = "all_subtuples"

    @classmethod
    def parse(cls, tag: Union[str, "Method"]) -> "Method":
        try:
            return cls(tag)
        except ValueError:
            valid = ", ".join(repr(m.value) for m in cls)
            raise UnknownMethodError(
                f"Unknown method {tag!r}; expected one of {valid}."
            ) from None


def _check(counts: np.ndarray, n: int) -> np.ndarray:
    counts = np.asarray(counts, dtype=np.float64)
    if counts.shape != (1 << n,):
        raise ValueError(
            f"Contingency vector has shape {counts.shape}, expected ({1 << n},)."
        )
    if not np.all(np.isfinite(counts)) or counts.min() <= 0.0:
        raise DegenerateSmoothingError(
            f"Contingency entries must be positive, got min={counts.min()!r}."
        )
    return counts


def popcounts(n: int) -> np.ndarray:
    """Number of set bits of every mask 0 .. 2**n - 1."""
    masks = np.arange(1 << n, dtype=np.int64)
    bits = (masks[:, None] >> np.arange(n, dtype=np.int64)) & 1
    return bits.sum(axis=1)


def unigram(counts: np.ndarray, n: int) -> Tuple[float, float]:
    """Estimate restricted to the single-position match marginals."""
    c = _check(counts, n)
    singles = c[np.left_shift(1, np.arange(n, dtype=np.int64))]
    full = c[(1 << n) - 1]
    sigma = np.sqrt((n - 1) ** 2 / c[0] + np.sum(1.0 / singles) + 1.0 / full)
    lam = (n - 1) * np.log(c[0]) - np.sum(np.log(singles)) + np.log(full)
    return float(lam), float(sigma)


def all_subtuples(counts: np.ndarray, n: int) -> Tuple[float, float]:
    """Estimate from the full inclusion-exclusion over all 2**n patterns."""
    c = _check(counts, n)
    signs = np.where((n - popcounts(n)) % 2 == 0, 1.0, -1.0)
    sigma = np.sqrt(np.sum(1.0 / c))
    lam = np.sum(signs * np.log(c))
    return float(lam), float(sigma)


ESTIMATORS: Dict[Method, Callable[[np.ndarray, int], Tuple[float, float]]] = {
    Method.UNIGRAM: unigram,
    Method.ALL_SUBTUPLES: all_subtuples,
}


def get_estimator(method: Union[str, Method]) -> Callable[[np.ndarray, int], Tuple[float, float]]:
    return ESTIMATORS[Method.parse(method)]
