"""
Coexpression fusion.

A TF that is itself a measured gene has an expression profile, so its
coexpression with every other gene is indirect evidence that it regulates
them. Fusion projects gene-gene coexpression onto the TF rows and blends it
into the motif prior:

    1. Optionally zero the coexpression diagonal, so a TF's correlation with
       its own transcript does not leak into its row
    2. addMotif[i, :] = coexpression[gene == TF_i, :], zero for TFs that are
       not in the gene set
    3. Take |addMotif|; only correlation strength matters
    4. Replace exact zeros with the global mean of addMotif
    5. Zero cells below motif_cutoff
    6. RegNet = (1 - motif_weight) * RegNet + motif_weight * addMotif

Variants (``add_corr``):
    0: no fusion
    1, 3: zero the diagonal
    2, 4: keep the diagonal

Degenerate input:
    An all-zero addMotif (no TF in the gene set, or coexpression all zero)
    has mean 0, so imputation leaves it unchanged. A matrix with no cells
    (no TFs or no genes) raises DegenerateMatrixError.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from motifprior.core.evidence import EvidenceFlag
from motifprior.core.exceptions import DegenerateMatrixError
from motifprior.core.regnet import RegNet
from motifprior.core.transform import Identity, Transform
from motifprior.utils.indexing import positions_of

__all__ = [
    'ZERO_DIAGONAL_VARIANTS',
    'project_tf_rows',
    'impute_zeros_with_mean',
    'CoexpressionFusion',
    'fusion_for_variant',
]

logger = logging.getLogger(__name__)

ZERO_DIAGONAL_VARIANTS = {1: True, 2: False, 3: True, 4: False}


def project_tf_rows(
    coexpression: np.ndarray,
    tf_ids: pd.Index,
    gene_ids: pd.Index,
) -> np.ndarray:
    """
    Coexpression rows of the genes named like each TF (n_tfs x n_genes).

    Rows for TFs without a matching gene identifier are zero. Matching is
    exact string equality.
    """
    rows = positions_of(gene_ids, tf_ids)
    projected = np.zeros((len(tf_ids), len(gene_ids)))
    hit = rows >= 0
    projected[hit] = coexpression[rows[hit]]
    return projected


def impute_zeros_with_mean(matrix: np.ndarray) -> np.ndarray:
    """
    Replace exact-zero cells with the mean of the whole matrix.

    The mean is taken before replacement and includes the zero cells. NaN
    anywhere in the matrix makes the mean NaN.

    Raises:
        DegenerateMatrixError: If the matrix has no cells
    """
    if matrix.size == 0:
        raise DegenerateMatrixError(
            f"Cannot impute the mean of an empty matrix (shape {matrix.shape})"
        )
    result = matrix.copy()
    result[result == 0] = matrix.mean()
    return result


class CoexpressionFusion(Transform):
    """
    Blend TF-projected coexpression into the prior.

    Args:
        coexpression: Gene x gene correlation matrix aligned to the prior's genes
        motif_weight: Weight of coexpression in the convex blend [0, 1]
        motif_cutoff: Projected values below this are set to zero [0, 1]
        zero_diagonal: Zero the coexpression diagonal before projection

    Notes:
        motif_weight == 0 returns the input weights exactly; motif_weight == 1
        returns the processed addMotif exactly.
    """

    def __init__(
        self,
        coexpression: np.ndarray,
        motif_weight: float,
        motif_cutoff: float,
        zero_diagonal: bool,
    ) -> None:
        if not 0.0 <= motif_weight <= 1.0:
            raise ValueError(f"motif_weight must be in [0, 1], got {motif_weight}")
        if not 0.0 <= motif_cutoff <= 1.0:
            raise ValueError(f"motif_cutoff must be in [0, 1], got {motif_cutoff}")
        super().__init__(
            name="CoexpressionFusion",
            params={
                "motif_weight": motif_weight,
                "motif_cutoff": motif_cutoff,
                "zero_diagonal": zero_diagonal,
            },
        )
        self.coexpression = coexpression
        self.motif_weight = motif_weight
        self.motif_cutoff = motif_cutoff
        self.zero_diagonal = zero_diagonal

    def validate(self, regnet: RegNet) -> list[str]:
        errors = super().validate(regnet)
        expected = (regnet.n_genes, regnet.n_genes)
        if self.coexpression.shape != expected:
            errors.append(
                f"coexpression shape {self.coexpression.shape} does not match "
                f"{regnet.n_genes} genes"
            )
        return errors

    def tf_coexpression(self, regnet: RegNet) -> np.ndarray:
        """Processed |addMotif| for this prior's TFs and genes (steps 1-5)."""
        coexpression = self.coexpression
        if self.zero_diagonal:
            coexpression = coexpression.copy()
            np.fill_diagonal(coexpression, 0.0)

        add_motif = np.abs(project_tf_rows(coexpression, regnet.tf_ids, regnet.gene_ids))
        add_motif = impute_zeros_with_mean(add_motif)
        add_motif[add_motif < self.motif_cutoff] = 0.0
        return add_motif

    def apply(self, regnet: RegNet) -> RegNet:
        add_motif = self.tf_coexpression(regnet)

        n_projected = int(np.count_nonzero(positions_of(regnet.gene_ids, regnet.tf_ids) >= 0))
        logger.info(
            "Coexpression fusion: %d of %d TFs found among genes, %d cells above cutoff %s, weight %s",
            n_projected, regnet.n_tfs, int(np.count_nonzero(add_motif)),
            self.motif_cutoff, self.motif_weight,
        )

        if self.motif_weight == 0:
            return regnet.copy()

        fused = (1 - self.motif_weight) * regnet.data + self.motif_weight * add_motif
        flags = regnet.evidence_flags.copy()
        flags[add_motif != 0] |= EvidenceFlag.COEXPRESSION
        return regnet.with_data(fused, evidence_flags=flags)


def fusion_for_variant(
    add_corr: int,
    coexpression: np.ndarray | None,
    motif_weight: float,
    motif_cutoff: float,
) -> Transform:
    """
    Stage for an ``add_corr`` variant.

    Variant 0 is a pass-through and needs no coexpression matrix.

    Raises:
        ValueError: If add_corr is not in 0..4, or coexpression is missing
            for a fusing variant
    """
    if add_corr == 0:
        return Identity(reason="add_corr=0")
    if add_corr not in ZERO_DIAGONAL_VARIANTS:
        raise ValueError(f"add_corr must be one of 0, 1, 2, 3, 4, got {add_corr}")
    if coexpression is None:
        raise ValueError(f"add_corr={add_corr} requires a coexpression matrix")
    return CoexpressionFusion(
        coexpression=coexpression,
        motif_weight=motif_weight,
        motif_cutoff=motif_cutoff,
        zero_diagonal=ZERO_DIAGONAL_VARIANTS[add_corr],
    )
