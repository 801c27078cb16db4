"""
Evidence flag system for tracking the provenance of prior matrix cells.

Every cell of a regulatory prior can be touched by several pipeline stages:
a motif scan assigns a p-value, thresholding binarizes it, a ChIP-seq
overlay replaces it and coexpression is blended on top. Recording which
stages touched a cell makes it possible to answer questions such as "how
many edges come only from coexpression?" without re-running the pipeline.

Engineering Design:
    IntFlag enables efficient bitwise operations:
    - Multiple flags per cell: MOTIF | THRESHOLDED
    - Fast bitwise checks: flags & EvidenceFlag.CHIP_TARGET
    - Memory efficient: single int per cell

Flags are bookkeeping only. They never change the numeric weights.

Examples:
    >>> from motifprior.core.evidence import EvidenceFlag
    >>> import numpy as np
    >>>
    >>> flag = EvidenceFlag.MOTIF | EvidenceFlag.THRESHOLDED
    >>> bool(flag & EvidenceFlag.THRESHOLDED)
    True
    >>>
    >>> flags = np.array([0, 1, 3, 16], dtype=int)
    >>> int(np.sum(flags & EvidenceFlag.MOTIF != 0))
    2
"""

from __future__ import annotations

from enum import IntFlag

__all__ = ['EvidenceFlag']


class EvidenceFlag(IntFlag):
    """
    Bitwise flags for per-cell provenance in a TF x gene prior.

    Attributes:
        NONE: No evidence; the cell was zero-initialized (0)
        MOTIF: Weight came from the motif edge list (1)
        THRESHOLDED: Weight was binarized by the p-value threshold (2)
        CHIP_BASELINE: Row was reset by a ChIP-seq overlay (4)
        CHIP_TARGET: Cell is a ChIP-seq validated target (8)
        COEXPRESSION: Coexpression contributed a non-zero weight (16)
    """

    NONE = 0
    MOTIF = 1
    THRESHOLDED = 2
    CHIP_BASELINE = 4
    CHIP_TARGET = 8
    COEXPRESSION = 16
