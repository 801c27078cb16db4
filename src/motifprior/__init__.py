"""
motifprior - TF x gene regulatory priors for network inference

Builds the motif prior consumed by PANDA-style regulatory network inference
by fusing motif-binding p-values, the TF set of a protein-protein
interaction network, ChIP-seq ground truth and gene coexpression into one
weighted TF x gene matrix, written as a tab-separated edge list.
"""

__version__ = "0.1.0"

from motifprior.core.regnet import RegNet
from motifprior.core.params import PriorParameters
from motifprior.core.evidence import EvidenceFlag
from motifprior.core.exceptions import (
    MotifPriorError,
    MalformedInputError,
    EmptyIntersectionError,
    DegenerateMatrixError,
)
from motifprior.io.formats import MotifFile, PrebuiltMotif
from motifprior.prior.pipeline import PriorResult, create_ppi_motif_prior

__all__ = [
    "RegNet",
    "PriorParameters",
    "EvidenceFlag",
    "MotifPriorError",
    "MalformedInputError",
    "EmptyIntersectionError",
    "DegenerateMatrixError",
    "MotifFile",
    "PrebuiltMotif",
    "PriorResult",
    "create_ppi_motif_prior",
]
