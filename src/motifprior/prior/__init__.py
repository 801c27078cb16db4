"""
Prior construction stages.

    - BinaryThreshold: p-value thresholding of motif weights
    - ChipOverlay: ChIP-seq ground-truth overlay
    - CoexpressionFusion: blend TF-projected coexpression into the prior
    - create_ppi_motif_prior: full load -> normalize -> fuse -> write pipeline
"""

from motifprior.prior.threshold import BinaryThreshold, thresholding_enabled
from motifprior.prior.chip import ChipOverlay
from motifprior.prior.coexpression import (
    CoexpressionFusion,
    fusion_for_variant,
    impute_zeros_with_mean,
    project_tf_rows,
)
from motifprior.prior.pipeline import PriorResult, create_ppi_motif_prior

__all__ = [
    'BinaryThreshold',
    'thresholding_enabled',
    'ChipOverlay',
    'CoexpressionFusion',
    'fusion_for_variant',
    'impute_zeros_with_mean',
    'project_tf_rows',
    'PriorResult',
    'create_ppi_motif_prior',
]
