"""
Core data structures for regulatory prior construction.

1. RegNet: TF x gene prior matrix with identifiers and evidence flags
2. EvidenceFlag: Bitwise flags recording which stages touched a cell
3. Transform: Abstract base class for value-returning pipeline stages
4. PriorParameters: Validated parameter set
5. Exceptions raised by loaders and stages

Examples:
    >>> from motifprior.core import RegNet, EvidenceFlag, Transform
    >>>
    >>> n_motif = regnet.count_flag(EvidenceFlag.MOTIF)
"""

from motifprior.core.evidence import EvidenceFlag
from motifprior.core.exceptions import (
    MotifPriorError,
    MalformedInputError,
    EmptyIntersectionError,
    DegenerateMatrixError,
)
from motifprior.core.params import PriorParameters
from motifprior.core.regnet import RegNet
from motifprior.core.transform import Transform, Identity

__all__ = [
    'RegNet',
    'EvidenceFlag',
    'Transform',
    'Identity',
    'PriorParameters',
    'MotifPriorError',
    'MalformedInputError',
    'EmptyIntersectionError',
    'DegenerateMatrixError',
]
