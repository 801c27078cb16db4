"""
I/O module for prior construction inputs and outputs.

Key Functions:
    - load_expression: Expression matrix (genes x conditions file)
    - load_tf_names: TF set from the PPI edge list
    - load_motif_prior: Motif edge list (or prebuilt matrix) aligned to TFs and genes
    - load_ground_truth: ChIP-seq TF -> targets table
    - load_edge_list: Read a written prior back into a dense matrix
    - prior_filename / write_edge_list: Deterministic output naming and writing

Examples:
    >>> from motifprior.io import load_expression, load_tf_names, load_motif_prior
    >>>
    >>> expression = load_expression("expression.txt")
    >>> tf_ids = load_tf_names("ppi.txt")
    >>> motif = load_motif_prior("motif.txt", tf_ids, expression.gene_ids)
"""

from motifprior.io.formats import MotifFile, PrebuiltMotif, MotifSource, as_motif_source
from motifprior.io.loaders import (
    ExpressionData,
    MotifPrior,
    load_expression,
    load_tf_names,
    load_motif_prior,
    load_ground_truth,
    load_edge_list,
)
from motifprior.io.writers import prior_filename, write_edge_list, format_number

__all__ = [
    'MotifFile',
    'PrebuiltMotif',
    'MotifSource',
    'as_motif_source',
    'ExpressionData',
    'MotifPrior',
    'load_expression',
    'load_tf_names',
    'load_motif_prior',
    'load_ground_truth',
    'load_edge_list',
    'prior_filename',
    'write_edge_list',
    'format_number',
]
