"""
Binary thresholding of motif p-values.

When the motif prior holds raw FIMO p-values, a small p-value means strong
binding evidence. Thresholding turns the p-values into a binary prior:

    0 < p <= thresh   ->  1   (binding assigned)
    thresh < p < 1    ->  0   (no binding)
    p == 0 or p >= 1  ->  unchanged

Zero is the "no edge" sentinel and values of 1 or more are already
full-confidence edges, so both pass through. Because every changed value
lands in {0, 1}, applying the threshold twice gives the same matrix as
applying it once.
"""

from __future__ import annotations

import logging

import numpy as np

from motifprior.core.evidence import EvidenceFlag
from motifprior.core.regnet import RegNet
from motifprior.core.transform import Transform

__all__ = ['BinaryThreshold', 'thresholding_enabled']

logger = logging.getLogger(__name__)


def thresholding_enabled(old_motif: int, inc_coverage: int, qpval: int) -> bool:
    """Only uncorrected p-value priors with full TF coverage are binarized."""
    return old_motif == 0 and inc_coverage == 1 and qpval == 0


class BinaryThreshold(Transform):
    """
    Map motif p-values onto {0, 1} at a fixed threshold.

    Args:
        thresh: p-value threshold in [0, 1]

    Examples:
        >>> BinaryThreshold(thresh=0.05).apply(regnet).data
    """

    def __init__(self, thresh: float) -> None:
        if not 0.0 <= thresh <= 1.0:
            raise ValueError(f"thresh must be in [0, 1], got {thresh}")
        super().__init__(name="BinaryThreshold", params={"thresh": thresh})
        self.thresh = thresh

    def apply(self, regnet: RegNet) -> RegNet:
        data = regnet.data
        bind = (data > 0) & (data <= self.thresh)
        unbind = (data > self.thresh) & (data < 1)

        result = data.copy()
        result[bind] = 1.0
        result[unbind] = 0.0

        flags = regnet.evidence_flags.copy()
        changed = (bind | unbind) & (result != data)
        flags[changed] |= EvidenceFlag.THRESHOLDED

        logger.info(
            "Thresholded motif p-values at %s: %d bound, %d unbound",
            self.thresh, int(np.count_nonzero(bind)), int(np.count_nonzero(unbind)),
        )
        return regnet.with_data(result, evidence_flags=flags)
