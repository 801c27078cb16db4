"""
Input format definitions for prior construction.

Motif evidence reaches the loader in one of two shapes:

    - MotifFile: a raw three-column ``TF gene weight`` edge list on disk
    - PrebuiltMotif: a prior matrix already built by a previous call, handed
      back in together with the label it was built from

Callers in an optimisation loop rebuild the prior many times from the same
motif evidence; passing a PrebuiltMotif skips re-parsing the edge list while
keeping the original label so output names stay stable.

Examples:
    >>> from motifprior.io.formats import MotifFile, PrebuiltMotif, as_motif_source
    >>>
    >>> source = as_motif_source("motif.txt")
    >>> isinstance(source, MotifFile)
    True
    >>> reentry = PrebuiltMotif(regnet=result.regnet, label="motif.txt")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from motifprior.core.regnet import RegNet

__all__ = [
    'WHITESPACE',
    'MISSING_VALUES',
    'DEFAULT_CHIP_FILE',
    'MotifFile',
    'PrebuiltMotif',
    'MotifSource',
    'as_motif_source',
]

# Inputs are whitespace or tab delimited, without a header row.
WHITESPACE = r'\s+'

# Tokens read as NaN in numeric columns. Identifier columns are never
# NA-parsed, so genes named NA or None stay distinct identifiers.
MISSING_VALUES = ('NA', 'NaN', 'nan', '-NaN', '-nan', 'N/A', 'n/a', '#N/A', 'NULL', 'null', 'None', '<NA>')

# Name of the ChIP-seq ground-truth table used when none is given.
DEFAULT_CHIP_FILE = 'CHIP_SEQ_REMAP_ALL.txt'


@dataclass(frozen=True)
class MotifFile:
    """Raw motif edge list on disk."""
    path: Path

    @property
    def label(self) -> str:
        return Path(self.path).name


@dataclass(frozen=True)
class PrebuiltMotif:
    """
    Prior matrix carried forward from an earlier build.

    Attributes:
        regnet: Matrix aligned to the current TF and gene sets
        label: Motif file name the matrix was originally built from
    """
    regnet: RegNet
    label: str


MotifSource = Union[MotifFile, PrebuiltMotif]


def as_motif_source(motif: MotifSource | str | os.PathLike) -> MotifSource:
    """Wrap a bare path as MotifFile; pass tagged sources through."""
    if isinstance(motif, (MotifFile, PrebuiltMotif)):
        return motif
    if isinstance(motif, (str, os.PathLike)):
        return MotifFile(Path(motif))
    raise TypeError(
        f"motif must be a path, MotifFile or PrebuiltMotif, got {type(motif)}"
    )
