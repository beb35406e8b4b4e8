"""
Benchmark: counting and estimation time vs. workers and method
===============================================================
Builds a synthetic Zipf-distributed corpus with boundary gaps and times
both phases of CollocationScorer for 1 and N workers, for both
estimators. Also checks that every configuration returns the same
table.

Run with:
    python benchmark/run_benchmark.py
"""

import os
import sys
import time
import numpy as np

sys.path.insert(0, "..")
from collocationscorer import CollocationScorer


def zipf_corpus(n_texts=400, length=60, vocab=300, gap=0.08, seed=0):
    rng = np.random.default_rng(seed)
    ranks = np.arange(1, vocab + 1)
    p = (1.0 / ranks) / np.sum(1.0 / ranks)
    texts = []
    for _ in range(n_texts):
        ids = rng.choice(ranks, size=length, p=p)
        ids[rng.random(length) < gap] = 0
        texts.append(ids.tolist())
    return texts


def time_config(corpus, method, workers, executor="thread"):
    s = CollocationScorer(
        count_min=2, len_min=2, len_max=3, method=method,
        workers=workers, executor=executor,
    )
    t0 = time.perf_counter()
    records = s.score(corpus, verbose=False)
    total = time.perf_counter() - t0
    return s.summary(), total, [r.as_dict() for r in records]


if __name__ == "__main__":
    corpus = zipf_corpus()
    n_workers = max(2, min(8, os.cpu_count() or 2))
    print(f"Corpus: {len(corpus)} texts, {sum(map(len, corpus)):,} tokens")
    print()
    print(f"  {'method':<14} {'workers':>7} {'exec':>8} {'count ms':>9} "
          f"{'estimate ms':>12} {'total ms':>9} {'scored':>7}")

    for method in ("unigram", "all_subtuples"):
        reference = None
        for workers, executor in ((1, "thread"), (n_workers, "thread"), (n_workers, "process")):
            summ, total, table = time_config(corpus, method, workers, executor)
            if reference is None:
                reference = table
            elif table != reference:
                print(f"  MISMATCH for {method} workers={workers} {executor}")
            print(
                f"  {method:<14} {workers:>7} {executor:>8} "
                f"{summ['count_time_ms']:>9.1f} {summ['estimate_time_ms']:>12.1f} "
                f"{total * 1000:>9.1f} {summ['n_scored']:>7}"
            )
    print()
