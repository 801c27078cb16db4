"""
Edge-list writer for regulatory priors.

The prior is written as a flat three-column tab-separated file, one line per
(TF, gene) pair including zero-weight pairs, which is the ``.pairs`` layout
PANDA-style inference reads:

```
TF1	G1	0.000000
TF1	G2	1.000000
TF1	G3	0.250000
TF2	G1	...
```

That is the default TF-major order. MATLAB writes priors by flattening the
matrix column-major (every TF for gene 1, then gene 2, ...); pass
``order='gene'`` to reproduce those files byte for byte.

File names encode every parameter that can change the prior, so that two
parameterizations never share a file and a rerun with the same settings
reproduces the same name and bytes.

Examples:
    >>> from motifprior.io.writers import prior_filename, write_edge_list
    >>>
    >>> name = prior_filename("data/expression.txt", "motif.txt", params)
    >>> write_edge_list(regnet, Path("results") / name)
"""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path

import numpy as np

from motifprior.core.params import PriorParameters
from motifprior.core.regnet import RegNet
from motifprior.utils.fileio import atomic_open

__all__ = ['EDGE_ORDERS', 'format_number', 'prior_filename', 'write_edge_list']

logger = logging.getLogger(__name__)

# "tf": all genes of TF 1, then TF 2, ...  "gene": all TFs of gene 1, then gene 2, ...
EDGE_ORDERS = ('tf', 'gene')


def format_number(value: float) -> str:
    """
    Render a parameter value for a file name.

    Integers print without a decimal point; other values keep
    ``max(floor(log10|x|) + 5, 5)`` significant digits (capped at 16), which
    reproduces the names produced by earlier MATLAB runs.

    Examples:
        >>> format_number(1)
        '1'
        >>> format_number(0.05)
        '0.05'
        >>> format_number(0.123456)
        '0.12346'
    """
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    if value.is_integer():
        return str(int(value))
    digits = min(max(math.floor(math.log10(abs(value))) + 5, 5), 16)
    return f"{value:.{digits}g}"


def prior_filename(
    expression_path: str | os.PathLike,
    motif_label: str,
    params: PriorParameters,
) -> str:
    """
    Deterministic output file name for a prior.

    Format:
        ``{expression}_{motif}_MW{..}_MC{..}_AC{..}_ABS{..}_THR{..}_OM{..}_IC{..}_QP{..}_BR{..}_CHIP{..}_PE{..}.txt``
        where ``expression`` and ``motif`` are the file names without
        extension.

    Examples:
        >>> prior_filename("data/expression.txt", "motif.txt", PriorParameters(motif_weight=0.5))
        'expression_motif_MW0.5_MC0_AC0_ABS0_THR0_OM0_IC0_QP0_BR0_CHIP0_PE0.txt'
    """
    expression_stem = Path(expression_path).stem
    motif_stem = Path(motif_label).stem
    tags = [
        ('MW', params.motif_weight),
        ('MC', params.motif_cutoff),
        ('AC', params.add_corr),
        ('ABS', params.abs_coex),
        ('THR', params.thresh),
        ('OM', params.old_motif),
        ('IC', params.inc_coverage),
        ('QP', params.qpval),
        ('BR', params.bridging_proteins),
        ('CHIP', params.add_chip),
        ('PE', params.ctrl),
    ]
    suffix = "_".join(f"{tag}{format_number(value)}" for tag, value in tags)
    return f"{expression_stem}_{motif_stem}_{suffix}.txt"


def write_edge_list(
    regnet: RegNet,
    path: str | os.PathLike,
    order: str = 'tf',
    precision: int = 6,
) -> Path:
    """
    Write a prior as ``TF\\tgene\\tweight`` lines.

    Args:
        regnet: Prior to write
        path: Destination file. Parent directories are created.
        order: 'tf' writes every gene for the first TF, then the second TF,
            and so on. 'gene' writes every TF for the first gene first, which
            is the column-major layout of MATLAB-produced priors. The default
            is 'tf'; byte-for-byte comparison against MATLAB output files
            needs order='gene'.
        precision: Decimal places of the fixed-point weight (default 6, as
            ``%f``)

    Returns:
        Path of the written file

    Raises:
        TypeError: If regnet is not a RegNet
        ValueError: If order is unknown
        OSError: If the file cannot be written. No partial file is left.
    """
    if not isinstance(regnet, RegNet):
        raise TypeError(f"regnet must be RegNet, got {type(regnet)}")
    if order not in EDGE_ORDERS:
        raise ValueError(f"order must be one of {EDGE_ORDERS}, got {order!r}")

    path = Path(path)
    if path.parent != Path('.') and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    tf_ids = np.asarray(regnet.tf_ids, dtype=object)
    gene_ids = np.asarray(regnet.gene_ids, dtype=object)
    n_tfs, n_genes = regnet.shape

    if order == 'tf':
        tf_column = np.repeat(tf_ids, n_genes)
        gene_column = np.tile(gene_ids, n_tfs)
        weights = regnet.data.ravel(order='C')
    else:
        tf_column = np.tile(tf_ids, n_genes)
        gene_column = np.repeat(gene_ids, n_tfs)
        weights = regnet.data.ravel(order='F')

    fmt = f"{{}}\t{{}}\t{{:.{precision}f}}\n"
    with atomic_open(path) as f:
        for tf, gene, weight in zip(tf_column, gene_column, weights):
            f.write(fmt.format(tf, gene, weight))

    logger.info("Wrote %d edges (%d TFs × %d genes) to %s", weights.size, n_tfs, n_genes, path)
    return path
