"""
CollocationScorer: corpus in, scored candidate table out
"""

import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .counting import check_range, count_corpus, flatten
from .estimators import Method
from .scoring import estimate_candidates

EXECUTORS = ("thread", "process")


@dataclass
class CandidateRecord:
    sequence: Tuple[int, ...]
    count: int
    length: int
    lambda_: Optional[float] = None
    sigma: Optional[float] = None
    fault: Optional[str] = None

    @property
    def scored(self) -> bool:
        return self.lambda_ is not None and self.sigma is not None

    @property
    def z(self) -> Optional[float]:
        if not self.scored or self.sigma == 0.0:
            return None
        return self.lambda_ / self.sigma

    def as_dict(self) -> Dict:
        return {
            "sequence": self.sequence,
            "count": self.count,
            "length": self.length,
            "lambda": self.lambda_,
            "sigma": self.sigma,
            "z": self.z,
        }


class CollocationScorer:
    """
    Finds multi-token sequences in a tokenized corpus and scores how
    strongly their tokens attract each other.

    Texts are sequences of non-negative token ids; id 0 marks a boundary
    (sentence end, removed word) that no sequence may cross. Every
    distinct window of len_min .. len_max tokens is counted, then each
    sequence of 2+ tokens seen at least count_min times is compared
    position by position with every other counted sequence to fill a
    2**n contingency vector, from which the Blaheta & Johnson estimator
    yields lambda (association strength) and sigma (its standard error).

    Parameters
    ----------
    count_min : int
        Sequences seen fewer times are counted but not scored.
    len_min, len_max : int
        Window length bounds, 1 <= len_min <= len_max.
    method : str
        "unigram" (single-position marginals) or "all_subtuples"
        (full inclusion-exclusion over all match patterns).
    nested : bool
        Count every window inside a run of tokens (True), or only the
        windows not contained in a longer one (False).
    workers : int
        Parallel workers for counting and estimation. 1 = inline.
    executor : str
        "thread" or "process" pool when workers > 1.

    Example
    -------
    >>> s = CollocationScorer(count_min=2, method="unigram")
    >>> records = s.score([[4, 7, 9, 0, 4, 7], [2, 4, 7]], verbose=False)
    >>> for rec in s.top(5):
    ...     print(rec.sequence, rec.count, f"{rec.z:.2f}")
    """

    def __init__(
        self,
        count_min: int = 2,
        len_min: int = 2,
        len_max: int = 2,
        method: Union[str, Method] = "unigram",
        nested: bool = True,
        workers: int = 1,
        executor: str = "thread",
    ) -> None:
        check_range(len_min, len_max)
        if count_min < 0:
            raise ValueError(f"count_min must be >= 0, got {count_min}.")
        if executor not in EXECUTORS:
            raise ValueError(f"executor must be 'thread' or 'process', got {executor!r}.")
        self.count_min = count_min
        self.len_min = len_min
        self.len_max = len_max
        self.method = Method.parse(method)
        self.nested = nested
        self.workers = workers
        self.executor = executor

        self.records: Optional[List[CandidateRecord]] = None
        self.n_texts: int = 0
        self.count_time: float = 0.0
        self.estimate_time: float = 0.0

    def score(
        self,
        corpus: Sequence[Sequence[int]],
        verbose: bool = True,
    ) -> List[CandidateRecord]:
        """
        Count and score every candidate sequence in corpus.

        Returns one record per distinct counted sequence, in first-seen
        order; unscored records have lambda_ and sigma set to None.
        """
        corpus = list(corpus)
        self.n_texts = len(corpus)
        if verbose:
            print(f"  Counting {self.n_texts:,} texts (workers={self.workers})...")

        t0 = time.perf_counter()
        table = count_corpus(
            corpus,
            len_min=self.len_min,
            len_max=self.len_max,
            nested=self.nested,
            workers=self.workers,
            executor=self.executor,
        )
        seqs, counts, lengths = flatten(table)
        self.count_time = time.perf_counter() - t0
        if verbose:
            print(f"  Sequences: {len(seqs):,} in {self.count_time * 1000:.1f}ms")

        t0 = time.perf_counter()
        estimates = estimate_candidates(
            seqs,
            counts,
            method=self.method,
            count_min=self.count_min,
            workers=self.workers,
            executor=self.executor,
        )
        self.estimate_time = time.perf_counter() - t0

        self.records = [
            CandidateRecord(seq, count, length, lam, sigma, fault)
            for seq, count, length, (lam, sigma, fault) in zip(
                seqs, counts, lengths, estimates
            )
        ]
        if verbose:
            s = self.summary()
            print(
                f"  Scored {s['n_scored']:,} ({self.method.value}) "
                f"in {self.estimate_time * 1000:.1f}ms"
            )
            if s["n_faults"]:
                print(f"  Faults: {s['n_faults']}")
        return self.records

    def top(self, k: int = 10, by: str = "z") -> List[CandidateRecord]:
        """The k scored records with the largest z, lambda or count."""
        if self.records is None:
            raise RuntimeError("Call score() before top().")
        keys = {
            "z": lambda r: r.z,
            "lambda": lambda r: r.lambda_,
            "count": lambda r: r.count,
        }
        if by not in keys:
            raise ValueError(f"by must be one of {sorted(keys)}, got {by!r}.")
        key = keys[by]
        scored = [r for r in self.records if r.scored and key(r) is not None]
        # sorted() is stable, so ties keep first-seen order
        return sorted(scored, key=key, reverse=True)[:k]

    def summary(self) -> Dict:
        if self.records is None:
            raise RuntimeError("Call score() before summary().")
        return {
            "n_texts": self.n_texts,
            "n_sequences": len(self.records),
            "n_scored": sum(1 for r in self.records if r.scored),
            "n_faults": sum(1 for r in self.records if r.fault is not None),
            "method": self.method.value,
            "count_min": self.count_min,
            "len_min": self.len_min,
            "len_max": self.len_max,
            "nested": self.nested,
            "workers": self.workers,
            "count_time_ms": round(self.count_time * 1000, 1),
            "estimate_time_ms": round(self.estimate_time * 1000, 1),
        }


def run(
    corpus: Sequence[Sequence[int]],
    count_min: int = 2,
    len_min: int = 2,
    len_max: int = 2,
    method: Union[str, Method] = "unigram",
    nested: bool = True,
    workers: int = 1,
    executor: str = "thread",
    verbose: bool = False,
) -> List[CandidateRecord]:
    """Functional form of CollocationScorer(...).score(corpus)."""
    scorer = CollocationScorer(
        count_min=count_min,
        len_min=len_min,
        len_max=len_max,
        method=method,
        nested=nested,
        workers=workers,
        executor=executor,
    )
    return scorer.score(corpus, verbose=verbose)
