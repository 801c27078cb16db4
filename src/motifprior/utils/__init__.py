"""Utility modules for regulatory prior construction."""

from motifprior.utils.correlation_matrix import compute_coexpression
from motifprior.utils.fileio import atomic_open
from motifprior.utils.indexing import positions_of, unique_in_order

__all__ = [
    # Coexpression
    'compute_coexpression',
    # Atomic file writes
    'atomic_open',
    # Identifier lookup
    'positions_of',
    'unique_in_order',
]
