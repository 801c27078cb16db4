"""
Exception hierarchy for regulatory prior construction.

All errors raised by the package derive from MotifPriorError so callers
(and the CLI) can catch one type. File-system errors are not wrapped and
propagate as the usual OSError subclasses.
"""

from __future__ import annotations

__all__ = [
    'MotifPriorError',
    'MalformedInputError',
    'EmptyIntersectionError',
    'DegenerateMatrixError',
]


class MotifPriorError(Exception):
    """Base class for errors raised while building a regulatory prior."""
    pass


class MalformedInputError(MotifPriorError, ValueError):
    """Raised when an input file does not parse into the expected columns or numeric type."""
    pass


class EmptyIntersectionError(MotifPriorError):
    """Raised when no motif edge matches both a known TF and a known gene."""
    pass


class DegenerateMatrixError(MotifPriorError):
    """Raised when mean imputation is requested on a matrix with no cells."""
    pass
