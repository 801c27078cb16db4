"""
End-to-end construction of a PPI/motif regulatory prior.

Stages run strictly forward; each returns a new RegNet:

    load expression, TFs, motif  ->  BinaryThreshold  ->  ChipOverlay
        ->  CoexpressionFusion  ->  write edge list

Examples:
    >>> from motifprior import PriorParameters, create_ppi_motif_prior
    >>>
    >>> params = PriorParameters(motif_weight=0.3, add_corr=1, thresh=0.05, inc_coverage=1)
    >>> result = create_ppi_motif_prior("expression.txt", "motif.txt", "ppi.txt", params)
    >>> print(result.path)
    expression_motif_MW0.3_MC0_AC1_ABS0_THR0.05_OM0_IC1_QP0_BR0_CHIP0_PE0.txt
    >>>
    >>> # Rebuild with new parameters without re-parsing the motif file
    >>> again = create_ppi_motif_prior(
    ...     "expression.txt", result.as_prebuilt(), "ppi.txt", params
    ... )
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from motifprior.core.params import PriorParameters
from motifprior.core.regnet import RegNet
from motifprior.core.transform import Identity, Transform
from motifprior.io.formats import DEFAULT_CHIP_FILE, MotifSource, PrebuiltMotif
from motifprior.io.loaders import (
    load_expression,
    load_ground_truth,
    load_motif_prior,
    load_tf_names,
)
from motifprior.io.writers import prior_filename, write_edge_list
from motifprior.prior.chip import ChipOverlay
from motifprior.prior.coexpression import fusion_for_variant
from motifprior.prior.threshold import BinaryThreshold, thresholding_enabled
from motifprior.utils.correlation_matrix import compute_coexpression

__all__ = ['PriorResult', 'create_ppi_motif_prior']

logger = logging.getLogger(__name__)


@dataclass
class PriorResult:
    """
    Outcome of one prior build.

    Attributes:
        regnet: Final fused prior
        motif_regnet: Motif prior as loaded, before thresholding; reusable as
            a PrebuiltMotif for later builds
        label: Motif label used in the output name
        filename: Deterministic output file name
        path: Written file, or None when writing was skipped
        params: Parameters of this build
        stages: Stages applied, in order
    """
    regnet: RegNet
    motif_regnet: RegNet
    label: str
    filename: str
    path: Optional[Path]
    params: PriorParameters
    stages: list[Transform] = field(default_factory=list)

    def as_prebuilt(self) -> PrebuiltMotif:
        """Motif evidence of this build, for re-entry without re-parsing."""
        return PrebuiltMotif(regnet=self.motif_regnet, label=self.label)


def create_ppi_motif_prior(
    expression_path: str | os.PathLike,
    motif: MotifSource | str | os.PathLike,
    ppi_path: str | os.PathLike,
    params: PriorParameters,
    output_dir: str | os.PathLike = ".",
    chip_path: str | os.PathLike | None = None,
    order: str = 'tf',
    allow_empty_motif: bool = False,
    write: bool = True,
    chunk_size: int = 500,
    verbose: bool = False,
) -> PriorResult:
    """
    Build a TF x gene regulatory prior and write it as an edge list.

    Args:
        expression_path: Genes x conditions expression table
        motif: Motif edge list path, MotifFile or PrebuiltMotif
        ppi_path: PPI edge list; its first column defines the TF set
        params: Thresholding, ChIP-seq and fusion settings
        output_dir: Directory for the output file
        chip_path: ChIP-seq ground-truth table, read only when
            params.add_chip != 0 (default: CHIP_SEQ_REMAP_ALL.txt)
        order: Edge order of the output, 'tf' or 'gene'
        allow_empty_motif: Continue with an all-zero motif prior when no
            motif edge matches
        write: Write the edge list; when False only the matrix is built
        chunk_size: Genes per coexpression chunk
        verbose: Show a progress bar for coexpression

    Returns:
        PriorResult with the fused prior and the output path

    Raises:
        FileNotFoundError: If an input file is missing
        MalformedInputError: If an input file cannot be parsed
        EmptyIntersectionError: If no motif edge matches (see allow_empty_motif)
        DegenerateMatrixError: If fusion is requested with no TFs or no genes
    """
    logger.info("Creating a new motif prior")

    expression = load_expression(expression_path)
    tf_ids = load_tf_names(ppi_path)
    motif_prior = load_motif_prior(
        motif, tf_ids, expression.gene_ids, allow_empty=allow_empty_motif
    )

    stages: list[Transform] = []

    if thresholding_enabled(params.old_motif, params.inc_coverage, params.qpval):
        stages.append(BinaryThreshold(params.thresh))
    else:
        stages.append(Identity(reason="raw motif weights"))

    if params.add_chip != 0:
        ground_truth = load_ground_truth(chip_path or DEFAULT_CHIP_FILE)
        stages.append(ChipOverlay(ground_truth, mode=params.add_chip))

    coexpression = None
    if params.add_corr != 0:
        coexpression = compute_coexpression(
            expression.data, chunk_size=chunk_size, verbose=verbose
        )
    stages.append(
        fusion_for_variant(
            params.add_corr, coexpression, params.motif_weight, params.motif_cutoff
        )
    )

    regnet = motif_prior.regnet
    for stage in stages:
        logger.debug("Applying %r", stage)
        regnet = stage(regnet)

    filename = prior_filename(expression_path, motif_prior.label, params)
    path = None
    if write:
        path = write_edge_list(regnet, Path(output_dir) / filename, order=order)

    return PriorResult(
        regnet=regnet,
        motif_regnet=motif_prior.regnet,
        label=motif_prior.label,
        filename=filename,
        path=path,
        params=params,
        stages=stages,
    )
