"""
Tests for match patterns, estimators and contingency vectors.

Run with:  pytest tests/
"""

import math

import numpy as np
import pytest
import sys
sys.path.insert(0, "..")

from collocationscorer import DegenerateSmoothingError, Method, UnknownMethodError
from collocationscorer.bits import match_bits, match_bits_matrix, pad_sequences
from collocationscorer.estimators import (
    all_subtuples,
    get_estimator,
    popcounts,
    unigram,
)
from collocationscorer import scoring
from collocationscorer.scoring import contingency, estimate_candidates


# ---------------------------------------------------------------------------
# Bit comparator
# ---------------------------------------------------------------------------

def test_match_bits_positions():
    assert match_bits([1, 2, 3], [1, 5, 3]) == 0b101
    assert match_bits([1, 2, 3], [1, 2, 3]) == 0b111
    assert match_bits([1, 2, 3], [3, 2, 1]) == 0b010
    assert match_bits([1, 2, 3], [4, 5, 6]) == 0


def test_match_bits_stops_at_shorter():
    assert match_bits([1, 2], [1, 2, 3]) == 0b11
    assert match_bits([1, 2, 3], [1]) == 0b1
    assert match_bits([], [1, 2]) == 0


def test_match_bits_matrix_agrees_with_scalar():
    seqs = [(1, 2), (1, 2, 3), (2, 2, 3), (1,), (4, 2, 3, 1)]
    mat = pad_sequences(seqs)
    assert mat.shape == (5, 4)
    for s in seqs:
        expected = [match_bits(s, other) for other in seqs]
        assert match_bits_matrix(s, mat).tolist() == expected


def test_pad_sequences_never_matches_tokens():
    mat = pad_sequences([(1,), (0, 2)])
    assert mat.tolist() == [[1, -1], [0, 2]]


# ---------------------------------------------------------------------------
# Estimators
# ---------------------------------------------------------------------------

def test_popcounts():
    assert popcounts(3).tolist() == [0, 1, 1, 2, 1, 2, 2, 3]


def test_unigram_hand_computed():
    c = np.arange(1, 9, dtype=float)  # C[b] = b + 1
    lam, sigma = unigram(c, 3)
    assert lam == pytest.approx(math.log(8 / 30))
    assert sigma == pytest.approx(math.sqrt(4 + 1 / 2 + 1 / 3 + 1 / 5 + 1 / 8))


def test_all_subtuples_hand_computed():
    c = np.arange(1, 9, dtype=float)
    lam, sigma = all_subtuples(c, 3)
    assert lam == pytest.approx(math.log(10 / 7))
    assert sigma == pytest.approx(math.sqrt(sum(1 / k for k in range(1, 9))))


def test_estimators_coincide_for_pairs():
    c = np.array([1.5, 0.5, 0.5, 1.5])
    assert unigram(c, 2) == pytest.approx(all_subtuples(c, 2))
    lam, sigma = unigram(c, 2)
    assert lam == pytest.approx(2 * math.log(3))
    assert sigma == pytest.approx(math.sqrt(16 / 3))


def test_estimators_finite_on_positive_vectors():
    rng = np.random.default_rng(0)
    for n in range(2, 7):
        c = rng.uniform(0.5, 50.0, size=1 << n)
        for est in (unigram, all_subtuples):
            lam, sigma = est(c, n)
            assert np.isfinite(lam) and np.isfinite(sigma)
            assert sigma > 0


@pytest.mark.parametrize("est", [unigram, all_subtuples])
def test_estimators_reject_degenerate(est):
    with pytest.raises(DegenerateSmoothingError):
        est(np.array([0.5, 0.0, 0.5, 0.5]), 2)
    with pytest.raises(DegenerateSmoothingError):
        est(np.array([0.5, -1.0, 0.5, 0.5]), 2)


def test_estimators_reject_wrong_size():
    with pytest.raises(ValueError):
        unigram(np.ones(4), 3)


def test_method_parse():
    assert Method.parse("unigram") is Method.UNIGRAM
    assert Method.parse(Method.ALL_SUBTUPLES) is Method.ALL_SUBTUPLES
    assert get_estimator("all_subtuples") is all_subtuples
    with pytest.raises(UnknownMethodError):
        Method.parse("bigram")
    with pytest.raises(ValueError):
        get_estimator("")


# ---------------------------------------------------------------------------
# Contingency vectors and candidate estimation
# ---------------------------------------------------------------------------

def hand_contingency(i, seqs, counts):
    n = len(seqs[i])
    cells = [0.5] * (1 << n)
    for j, other in enumerate(seqs):
        if j != i:
            cells[match_bits(seqs[i], other)] += counts[j]
    cells[-1] += counts[i] - 1
    return cells


def test_contingency_matches_pairwise_loop():
    seqs = [(1, 2), (1, 3), (2, 2), (1, 2, 4), (5,), (3, 2), (1, 2, 3)]
    counts = [4, 2, 1, 3, 7, 2, 1]
    mat = pad_sequences(seqs)
    arr = np.array(counts)
    for i, s in enumerate(seqs):
        got = contingency(i, mat, arr, len(s))
        assert got.tolist() == pytest.approx(hand_contingency(i, seqs, counts))


def test_contingency_asserts_positive_count():
    mat = pad_sequences([(1, 2), (2, 3)])
    with pytest.raises(AssertionError):
        contingency(0, mat, np.array([0, 1]), 2)


def test_estimate_candidates_scenario():
    est = estimate_candidates([(1, 2), (2, 3)], [2, 1], method="unigram", count_min=1)
    (lam0, sig0, f0), (lam1, sig1, f1) = est
    assert lam0 == pytest.approx(2 * math.log(3))
    assert sig0 == pytest.approx(math.sqrt(16 / 3))
    assert lam1 == pytest.approx(math.log(5))
    assert sig1 == pytest.approx(math.sqrt(6.4))
    assert f0 is None and f1 is None


def test_estimate_candidates_filters():
    seqs = [(1, 2), (3,), (3, 4), (1, 2, 3)]
    counts = [3, 5, 1, 2]
    est = estimate_candidates(seqs, counts, count_min=2)
    assert est[0][0] is not None
    assert est[1] == (None, None, None)  # single token
    assert est[2] == (None, None, None)  # below count_min
    assert est[3][0] is not None


def test_estimate_candidates_empty():
    assert estimate_candidates([], [], count_min=1) == []


def test_estimate_candidates_unknown_method():
    with pytest.raises(UnknownMethodError):
        estimate_candidates([(1, 2)], [1], method="trigram")


def test_degenerate_candidate_does_not_stop_others(monkeypatch):
    real = scoring.contingency

    def broken_for_first(i, matrix, counts, length):
        cells = real(i, matrix, counts, length)
        if i == 0:
            cells[0] = 0.0
        return cells

    monkeypatch.setattr(scoring, "contingency", broken_for_first)
    est = estimate_candidates([(1, 2), (2, 3), (3, 4)], [2, 2, 2], count_min=1)
    assert est[0][0] is None and est[0][1] is None
    assert "positive" in est[0][2]
    assert all(lam is not None and fault is None for lam, _, fault in est[1:])


@pytest.mark.parametrize("method", ["unigram", "all_subtuples"])
@pytest.mark.parametrize("executor", ["thread", "process"])
def test_estimate_candidates_parallel_matches_sequential(method, executor):
    rng = np.random.default_rng(5)
    seqs = list({tuple(rng.integers(1, 4, size=rng.integers(1, 5))) for _ in range(60)})
    seqs = [tuple(int(t) for t in s) for s in sorted(seqs)]
    counts = [int(c) for c in rng.integers(1, 6, size=len(seqs))]
    seq = estimate_candidates(seqs, counts, method=method, count_min=2)
    par = estimate_candidates(
        seqs, counts, method=method, count_min=2, workers=4, executor=executor
    )
    assert par == seq
