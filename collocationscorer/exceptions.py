"""
Error types raised by collocationscorer.
"""


class CollocationError(Exception):
    """Base class for all collocationscorer errors."""


class InvalidRangeError(CollocationError, ValueError):
    """len_min / len_max are zero or out of order."""


class UnknownMethodError(CollocationError, ValueError):
    """Estimator tag is neither 'unigram' nor 'all_subtuples'."""


class DegenerateSmoothingError(CollocationError, ArithmeticError):
    """A contingency entry is not strictly positive, so its log is undefined."""
