"""
collocationscorer
=================
Detects multi-word sequences ("collocations") in a tokenized corpus and
scores how strongly their words attract each other, using the
log-linear collocation-strength model of Blaheta & Johnson (2001).

Input texts are sequences of integer token ids with 0 as a boundary
marker; mapping words to ids and back is left to the caller.

Usage:
    from collocationscorer import CollocationScorer

    s = CollocationScorer(count_min=2, len_min=2, len_max=3)
    s.score(texts)
    for rec in s.top(10):
        print(rec.sequence, rec.count, rec.lambda_, rec.z)
"""

from .estimators import Method
from .exceptions import (
    CollocationError,
    DegenerateSmoothingError,
    InvalidRangeError,
    UnknownMethodError,
)
from .scorer import CandidateRecord, CollocationScorer, run

__version__ = "0.1.0"
__all__ = [
    "CollocationScorer",
    "CandidateRecord",
    "Method",
    "run",
    "CollocationError",
    "InvalidRangeError",
    "UnknownMethodError",
    "DegenerateSmoothingError",
]
