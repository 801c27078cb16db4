"""
Gene-gene coexpression for prior fusion.

Computes the Pearson correlation of every gene pair across conditions. The
computation is chunked over standardized data so peak memory stays at one
chunk of correlations plus the output matrix.

Algorithm:
    1. Standardize each gene across conditions: Z = (X - mean) / std
    2. For each chunk of genes, corr(chunk, all) = Z_chunk @ Z.T / n_conditions
    3. Set the diagonal to 1.0 (self-correlation)

Notes:
    - Constant genes (std == 0) correlate 0 with every other gene
    - NaN in the expression matrix propagates into every correlation that
      involves the affected gene
    - Output is float64 so repeated runs give identical bytes downstream

USAGE:
    >>> from motifprior.utils.correlation_matrix import compute_coexpression
    >>> coexpression = compute_coexpression(expression.data)   # conditions x genes
    >>> coexpression.shape
    (n_genes, n_genes)
"""

from __future__ import annotations

import logging

import numpy as np
from tqdm import tqdm

__all__ = ['compute_coexpression']

logger = logging.getLogger(__name__)


def compute_coexpression(
    expression: np.ndarray,
    chunk_size: int = 500,
    verbose: bool = False,
) -> np.ndarray:
    """
    Pearson coexpression of genes from a conditions x genes matrix.

    Args:
        expression: Expression values (n_conditions x n_genes)
        chunk_size: Number of genes to correlate at once
        verbose: Show a progress bar

    Returns:
        Symmetric correlation matrix (n_genes x n_genes, float64)

    Raises:
        ValueError: If expression is not 2D or chunk_size is not positive
    """
    if expression.ndim != 2:
        raise ValueError(f"expression must be 2D, got shape {expression.shape}")
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    n_conditions, n_genes = expression.shape
    logger.debug(
        "Coexpression over %d genes and %d conditions (chunk size %d)",
        n_genes, n_conditions, chunk_size,
    )

    data = np.asarray(expression, dtype=np.float64).T
    correlation_matrix = np.zeros((n_genes, n_genes), dtype=np.float64)
    if n_genes == 0:
        return correlation_matrix

    data_mean = data.mean(axis=1, keepdims=True)
    data_std = data.std(axis=1, keepdims=True)
    data_std[data_std == 0] = 1.0  # constant genes: centered values are all zero
    data_standardized = (data - data_mean) / data_std

    n_chunks = (n_genes + chunk_size - 1) // chunk_size
    chunk_iter = range(n_chunks)
    if verbose:
        chunk_iter = tqdm(chunk_iter, desc="Computing coexpression", unit="chunk")

    for chunk_idx in chunk_iter:
        start_idx = chunk_idx * chunk_size
        end_idx = min(start_idx + chunk_size, n_genes)
        chunk_standardized = data_standardized[start_idx:end_idx, :]
        correlation_matrix[start_idx:end_idx, :] = (
            chunk_standardized @ data_standardized.T
        ) / n_conditions

    # Chunks see different BLAS blocking; average to make the result exactly symmetric
    correlation_matrix = 0.5 * (correlation_matrix + correlation_matrix.T)
    np.clip(correlation_matrix, -1.0, 1.0, out=correlation_matrix)
    np.fill_diagonal(correlation_matrix, 1.0)

    return correlation_matrix
