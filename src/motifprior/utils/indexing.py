"""Identifier lookup helpers shared by loaders and prior stages."""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

__all__ = ['positions_of', 'unique_in_order']


def positions_of(ids: pd.Index, query: Iterable[str]) -> np.ndarray:
    """
    Position of each query identifier in ``ids``, or -1 when absent.

    Duplicated identifiers resolve to their first occurrence, so lookups
    work on indices that are not unique.

    Examples:
        >>> positions_of(pd.Index(["G1", "G2", "G1"]), ["G1", "G9", "G2"])
        array([ 0, -1,  1])
    """
    first = ~ids.duplicated()
    unique_ids = ids[first]
    first_positions = np.flatnonzero(first)

    found = unique_ids.get_indexer(pd.Index(list(query), dtype=object))
    positions = np.full(found.shape, -1, dtype=np.intp)
    hit = found >= 0
    positions[hit] = first_positions[found[hit]]
    return positions


def unique_in_order(values: Iterable[str]) -> pd.Index:
    """Distinct values in order of first occurrence."""
    return pd.Index(pd.unique(np.asarray(list(values), dtype=object)), dtype=object)
