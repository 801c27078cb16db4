"""
ChIP-seq ground-truth overlay.

Experimentally validated bindings override computed motif evidence for every
TF that has a ChIP-seq entry. The overlay replaces the TF's row; it does not
blend with it.

Modes:
    0: no overlay
    1: row reset to 0, validated targets set to 1
    2: row reset to -1 ("assayed, not bound"), validated targets set to 1

Mode 2 distinguishes genes a ChIP experiment looked at and found unbound
(-1) from genes nobody measured (0). A TF with a ChIP entry but no target in
the gene set ends up with a row of baseline values only.

Examples:
    >>> from motifprior.prior.chip import ChipOverlay
    >>> overlay = ChipOverlay({"TF1": ["G1", "G3"]}, mode=2)
    >>> overlaid = overlay.apply(regnet)
"""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

import numpy as np

from motifprior.core.evidence import EvidenceFlag
from motifprior.core.regnet import RegNet
from motifprior.core.transform import Transform
from motifprior.utils.indexing import positions_of

__all__ = ['ChipOverlay', 'CHIP_BASELINES']

logger = logging.getLogger(__name__)

# Row value written before targets are set, per overlay mode
CHIP_BASELINES = {1: 0.0, 2: -1.0}


class ChipOverlay(Transform):
    """
    Replace rows of ChIP-assayed TFs with their validated targets.

    Args:
        ground_truth: Mapping TF -> target genes
        mode: Overlay mode, 0 (off), 1 or 2
    """

    def __init__(self, ground_truth: Mapping[str, Sequence[str]], mode: int) -> None:
        if mode not in (0, 1, 2):
            raise ValueError(f"ChIP overlay mode must be 0, 1 or 2, got {mode}")
        super().__init__(
            name="ChipOverlay",
            params={"mode": mode, "n_chip_tfs": len(ground_truth)},
        )
        self.ground_truth = ground_truth
        self.mode = mode

    def apply(self, regnet: RegNet) -> RegNet:
        if self.mode == 0:
            return regnet.copy()

        baseline = CHIP_BASELINES[self.mode]
        result = regnet.data.copy()
        flags = regnet.evidence_flags.copy()

        chip_tfs = list(self.ground_truth)
        rows = positions_of(regnet.tf_ids, chip_tfs)
        n_overlaid = 0
        n_targets = 0

        for tf, row in zip(chip_tfs, rows):
            if row < 0:
                continue
            cols = positions_of(regnet.gene_ids, self.ground_truth[tf])
            cols = np.unique(cols[cols >= 0])

            result[row, :] = baseline
            flags[row, :] |= EvidenceFlag.CHIP_BASELINE
            result[row, cols] = 1.0
            flags[row, cols] |= EvidenceFlag.CHIP_TARGET

            n_overlaid += 1
            n_targets += len(cols)

        logger.info(
            "ChIP-seq overlay (mode %d): %d of %d ChIP TFs in the TF set, %d target edges",
            self.mode, n_overlaid, len(chip_tfs), n_targets,
        )
        return regnet.with_data(result, evidence_flags=flags)
