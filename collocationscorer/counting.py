"""
Sequence counting: windows of token ids between boundary tokens.

A text is split into runs of non-boundary tokens (BOUNDARY = 0 ends a
run, and so does the end of the text). Each run contributes windows of
length len_min .. len_max:

  nested=True   every window of the run
  nested=False  only windows not contained in a longer window of the
                same run (the run itself if it fits len_max, otherwise
                each of its len_max windows)
"""

from collections import Counter
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Iterator, List, Sequence, Tuple

from .exceptions import InvalidRangeError

BOUNDARY = 0

Ngram = Tuple[int, ...]


def check_range(len_min: int, len_max: int) -> None:
    if len_min < 1 or len_max < 1:
        raise InvalidRangeError(
            f"len_min and len_max must be >= 1, got {len_min} and {len_max}."
        )
    if len_min > len_max:
        raise InvalidRangeError(
            f"len_min ({len_min}) must not exceed len_max ({len_max})."
        )


def split_runs(text: Sequence[int]) -> Iterator[Ngram]:
    run: List[int] = []
    for token in text:
        token = int(token)
        if token < 0:
            raise ValueError(f"Token ids must be non-negative, got {token}.")
        if token == BOUNDARY:
            if run:
                yield tuple(run)
            run = []
        else:
            run.append(token)
    if run:
        yield tuple(run)


def run_windows(run: Ngram, len_min: int, len_max: int, nested: bool) -> Iterator[Ngram]:
    r = len(run)
    if r < len_min:
        return
    if nested:
        for i in range(r):
            for j in range(i + len_min, min(r, i + len_max) + 1):
                yield run[i:j]
    elif r <= len_max:
        yield run
    else:
        for i in range(r - len_max + 1):
            yield run[i : i + len_max]


def count_text(
    text: Sequence[int],
    table: Counter,
    len_min: int,
    len_max: int,
    nested: bool,
) -> Counter:
    """Add every admissible window of one text to table (in place)."""
    for run in split_runs(text):
        table.update(run_windows(run, len_min, len_max, nested))
    return table


def _count_range(
    texts: Sequence[Sequence[int]], len_min: int, len_max: int, nested: bool
) -> Counter:
    table: Counter = Counter()
    for text in texts:
        count_text(text, table, len_min, len_max, nested)
    return table


def partition(n: int, parts: int) -> List[Tuple[int, int]]:
    """Split range(n) into at most `parts` contiguous, non-empty (start, stop) pairs."""
    parts = max(1, min(parts, n))
    step, extra = divmod(n, parts)
    bounds = []
    start = 0
    for p in range(parts):
        stop = start + step + (1 if p < extra else 0)
        if stop > start:
            bounds.append((start, stop))
        start = stop
    return bounds


def make_executor(kind: str, workers: int) -> Executor:
    if kind == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    if kind == "process":
        return ProcessPoolExecutor(max_workers=workers)
    raise ValueError(f"executor must be 'thread' or 'process', got {kind!r}.")


def count_corpus(
    corpus: Sequence[Sequence[int]],
    len_min: int = 2,
    len_max: int = 2,
    nested: bool = True,
    workers: int = 1,
    executor: str = "thread",
) -> Counter:
    """
    Count windows across a whole corpus.

    With workers > 1 each worker counts a contiguous slice of texts into
    a private table; the tables are summed in slice order afterwards, so
    counts and key order match a sequential run exactly.
    """
    check_range(len_min, len_max)
    texts = [list(t) for t in corpus]
    if workers <= 1 or len(texts) <= 1:
        return _count_range(texts, len_min, len_max, nested)

    with make_executor(executor, workers) as pool:
        futures = [
            pool.submit(_count_range, texts[start:stop], len_min, len_max, nested)
            for start, stop in partition(len(texts), workers)
        ]
        partials = [f.result() for f in futures]

    table: Counter = Counter()
    for partial in partials:
        table.update(partial)
    return table


def flatten(table: Counter) -> Tuple[List[Ngram], List[int], List[int]]:
    """Split a frequency table into parallel (sequences, counts, lengths) lists."""
    seqs = list(table.keys())
    counts = [table[s] for s in seqs]
    lengths = [len(s) for s in seqs]
    return seqs, counts, lengths
