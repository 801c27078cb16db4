"""
Loaders for expression, PPI, motif and ChIP-seq inputs.

All inputs are header-free, whitespace or tab delimited text tables. The
loaders turn them into aligned identifier spaces:

    - Gene set: first column of the expression file, in file order
    - TF set: first column of the PPI file, deduplicated in order of first
      occurrence
    - Motif prior: a dense TF x gene matrix built from the motif edge list,
      keeping only edges whose TF and gene are both known

Example input files:
```
expression.txt          ppi.txt              motif.txt
G1  1.2  0.4  3.1       TF1  TF2  1          TF1  G2  0.003
G2  0.9  1.8  2.2       TF1  TF3  1          TF2  G1  0.2
```

Examples:
    >>> from motifprior.io.loaders import load_expression, load_tf_names, load_motif_prior
    >>>
    >>> expression = load_expression("expression.txt")
    >>> tf_ids = load_tf_names("ppi.txt")
    >>> motif = load_motif_prior("motif.txt", tf_ids, expression.gene_ids)
    >>> print(motif.regnet.shape)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from motifprior.core.evidence import EvidenceFlag
from motifprior.core.exceptions import EmptyIntersectionError, MalformedInputError
from motifprior.core.regnet import RegNet
from motifprior.io.formats import (
    MISSING_VALUES,
    WHITESPACE,
    MotifFile,
    MotifSource,
    PrebuiltMotif,
    as_motif_source,
)
from motifprior.utils.indexing import positions_of, unique_in_order

__all__ = [
    'ExpressionData',
    'MotifPrior',
    'load_expression',
    'load_tf_names',
    'load_motif_prior',
    'load_ground_truth',
    'load_edge_list',
]

logger = logging.getLogger(__name__)


@dataclass
class ExpressionData:
    """
    Expression matrix oriented for coexpression.

    Attributes:
        gene_ids: Gene identifiers in file order
        data: Expression values (n_conditions x n_genes), transposed from the
            genes x conditions layout of the file
    """
    gene_ids: pd.Index
    data: np.ndarray

    @property
    def n_genes(self) -> int:
        return self.data.shape[1]

    @property
    def n_conditions(self) -> int:
        return self.data.shape[0]


@dataclass
class MotifPrior:
    """
    Motif evidence aligned to the TF and gene sets.

    Attributes:
        regnet: Dense TF x gene matrix, zero where no edge was given
        label: Motif file name, carried into the output file name
        n_kept: Edges matching a known TF and gene (0 for prebuilt input)
        n_dropped: Edges discarded because the TF or gene was unknown
    """
    regnet: RegNet
    label: str
    n_kept: int = 0
    n_dropped: int = 0


def _check_file(path: Path, what: str) -> Path:
    if not isinstance(path, Path):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{what} file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")
    return path


def _read_table(path: Path, what: str, allow_empty: bool = False) -> pd.DataFrame:
    """
    Read a header-free table with every field as a string.

    NA detection is off so identifiers such as ``NA`` or ``None`` survive;
    numeric columns are converted afterwards with _to_numeric.
    """
    try:
        return pd.read_csv(
            path,
            sep=WHITESPACE,
            header=None,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
        )
    except pd.errors.EmptyDataError as e:
        if allow_empty:
            return pd.DataFrame(columns=range(3), dtype=object)
        raise MalformedInputError(f"{what} file is empty: {path}") from e
    except (pd.errors.ParserError, ValueError) as e:
        raise MalformedInputError(f"Failed to parse {what} file {path}: {e}") from e


def _to_numeric(frame: pd.DataFrame, path: Path, what: str) -> np.ndarray:
    """Parse string columns as float64, mapping MISSING_VALUES tokens to NaN."""
    values = frame.replace(list(MISSING_VALUES), np.nan)
    try:
        values = values.apply(pd.to_numeric)
    except (ValueError, TypeError) as e:
        raise MalformedInputError(f"{what} file {path} has non-numeric values: {e}") from e
    return values.to_numpy(dtype=np.float64)


def _identifiers(column: pd.Series) -> pd.Index:
    return pd.Index(column.astype(str).to_numpy(), dtype=object)


def load_expression(path: str | os.PathLike) -> ExpressionData:
    """
    Load a genes x conditions expression table.

    Expected format: first column gene identifiers, remaining columns numeric
    expression values, no header. Missing values (``NaN``, ``NA``) are kept
    as NaN and propagate into coexpression.

    Args:
        path: Expression file

    Returns:
        ExpressionData with the matrix transposed to conditions x genes

    Raises:
        FileNotFoundError: If path does not exist
        MalformedInputError: If the file is empty, has no value columns or
            contains non-numeric values
    """
    path = _check_file(Path(path), "Expression")
    df = _read_table(path, "expression")

    if df.shape[1] < 2:
        raise MalformedInputError(
            f"Expression file {path} needs a gene column and at least one "
            f"condition column, found {df.shape[1]} column(s)"
        )

    data = _to_numeric(df.iloc[:, 1:], path, "Expression")

    gene_ids = _identifiers(df[0])
    if gene_ids.has_duplicates:
        dups = gene_ids[gene_ids.duplicated()].unique().tolist()
        logger.warning(
            "Expression file %s repeats %d gene id(s), first occurrence is used for lookups: %s",
            path, len(dups), dups[:5],
        )

    n_genes, n_conditions = data.shape
    logger.info("%d genes and %d conditions", n_genes, n_conditions)

    return ExpressionData(gene_ids=gene_ids, data=data.T.copy())


def load_tf_names(path: str | os.PathLike) -> pd.Index:
    """
    Load the TF set from the first column of a PPI edge list.

    Only the first column is used. Repeated TFs are collapsed in order of
    first occurrence, which fixes the row order of every prior built from
    this file.

    Raises:
        FileNotFoundError: If path does not exist
        MalformedInputError: If the file is empty or cannot be parsed
    """
    path = _check_file(Path(path), "PPI")
    df = _read_table(path, "PPI")

    tf_ids = unique_in_order(_identifiers(df[0]))
    logger.info("%d TFs in PPI network %s", len(tf_ids), path.name)
    return tf_ids


def _load_motif_edges(path: Path) -> pd.DataFrame:
    path = _check_file(path, "Motif")
    df = _read_table(path, "motif", allow_empty=True)
    if df.empty:
        return pd.DataFrame({
            'tf': pd.Index([], dtype=object),
            'gene': pd.Index([], dtype=object),
            'weight': np.zeros(0),
        })

    if df.shape[1] != 3:
        raise MalformedInputError(
            f"Motif file {path} must have 3 columns (TF gene weight), found {df.shape[1]}"
        )
    return pd.DataFrame({
        'tf': _identifiers(df[0]),
        'gene': _identifiers(df[1]),
        'weight': _to_numeric(df[[2]], path, "Motif")[:, 0],
    })


def _build_from_file(
    source: MotifFile,
    tf_ids: pd.Index,
    gene_ids: pd.Index,
    allow_empty: bool,
) -> MotifPrior:
    edges = _load_motif_edges(source.path)

    tf_pos = positions_of(tf_ids, edges['tf'])
    gene_pos = positions_of(gene_ids, edges['gene'])
    keep = (tf_pos >= 0) & (gene_pos >= 0)

    kept = pd.DataFrame({
        'tf': tf_pos[keep],
        'gene': gene_pos[keep],
        'weight': edges['weight'].to_numpy(dtype=np.float64)[keep],
    })
    # Later rows overwrite earlier ones for the same pair
    kept = kept.drop_duplicates(subset=['tf', 'gene'], keep='last')

    n_kept = int(keep.sum())
    n_dropped = int((~keep).sum())

    data = np.zeros((len(tf_ids), len(gene_ids)))
    flags = np.full(data.shape, EvidenceFlag.NONE, dtype=int)
    rows = kept['tf'].to_numpy()
    cols = kept['gene'].to_numpy()
    data[rows, cols] = kept['weight'].to_numpy()
    flags[rows, cols] |= EvidenceFlag.MOTIF

    if n_dropped:
        logger.warning(
            "Dropped %d of %d motif edges with a TF or gene outside the PPI/expression sets",
            n_dropped, len(edges),
        )
    if n_kept == 0:
        message = (
            f"No motif edge in {source.path} matches a known TF and gene "
            f"({len(tf_ids)} TFs, {len(gene_ids)} genes)"
        )
        if not allow_empty:
            raise EmptyIntersectionError(message)
        logger.warning("%s; continuing with an all-zero prior", message)

    logger.info("%d TFs and %d edges", len(tf_ids), n_kept)

    return MotifPrior(
        regnet=RegNet(data, tf_ids, gene_ids, evidence_flags=flags),
        label=source.label,
        n_kept=n_kept,
        n_dropped=n_dropped,
    )


def _reuse_prebuilt(source: PrebuiltMotif, tf_ids: pd.Index, gene_ids: pd.Index) -> MotifPrior:
    regnet = source.regnet
    expected = (len(tf_ids), len(gene_ids))
    if regnet.shape != expected:
        raise MalformedInputError(
            f"Prebuilt prior has shape {regnet.shape}, expected {expected} "
            f"(TFs x genes)"
        )
    if not (regnet.tf_ids.equals(tf_ids) and regnet.gene_ids.equals(gene_ids)):
        raise MalformedInputError(
            "Prebuilt prior identifiers do not match the PPI TF set and expression gene set"
        )
    logger.info("Reusing prebuilt prior %s (%d non-zero cells)", source.label, regnet.n_edges)
    return MotifPrior(regnet=regnet.copy(), label=source.label)


def load_motif_prior(
    motif: MotifSource | str | os.PathLike,
    tf_ids: pd.Index,
    gene_ids: pd.Index,
    allow_empty: bool = False,
) -> MotifPrior:
    """
    Build (or reuse) the motif prior aligned to the TF and gene sets.

    Args:
        motif: Motif edge list path, MotifFile, or PrebuiltMotif
        tf_ids: Row identifiers (TF set)
        gene_ids: Column identifiers (gene set)
        allow_empty: Log a warning instead of raising when no edge matches

    Returns:
        MotifPrior with the dense matrix and the label for output naming

    Raises:
        MalformedInputError: If the edge list is not three columns with
            numeric weights, or a prebuilt matrix is misaligned
        EmptyIntersectionError: If no edge matches and allow_empty is False
    """
    source = as_motif_source(motif)
    if isinstance(source, PrebuiltMotif):
        return _reuse_prebuilt(source, tf_ids, gene_ids)
    return _build_from_file(source, tf_ids, gene_ids, allow_empty)


def load_ground_truth(path: str | os.PathLike) -> dict[str, list[str]]:
    """
    Load a ChIP-seq ground-truth table.

    Each non-blank line holds a TF identifier followed by its validated
    target genes; lines may have different lengths. When a TF appears on
    several lines, the first line is used.

    Returns:
        Mapping TF -> target genes, in file order

    Raises:
        FileNotFoundError: If path does not exist
    """
    path = _check_file(Path(path), "ChIP-seq")
    ground_truth: dict[str, list[str]] = {}
    with open(path, 'r') as f:
        for line in f:
            tokens = line.split()
            if not tokens:
                continue
            tf, targets = tokens[0], tokens[1:]
            if tf in ground_truth:
                continue
            ground_truth[tf] = targets

    logger.info("Loaded ChIP-seq targets for %d TFs from %s", len(ground_truth), path.name)
    return ground_truth


def load_edge_list(path: str | os.PathLike) -> RegNet:
    """
    Parse a written prior (``TF\\tgene\\tweight`` lines) back into a dense matrix.

    TF and gene order follow first appearance in the file, so a file written
    in either TF-major or gene-major order restores the original layout.
    Pairs absent from the file are zero.

    Raises:
        MalformedInputError: If lines are not three tab-separated fields with
            a numeric weight
    """
    path = _check_file(Path(path), "Edge list")
    df = _read_table(path, "edge list")
    if df.shape[1] != 3:
        raise MalformedInputError(
            f"Edge list {path} must have 3 tab-separated columns (TF gene weight)"
        )

    tfs = _identifiers(df[0])
    genes = _identifiers(df[1])
    weights = _to_numeric(df[[2]], path, "Edge list")[:, 0]

    tf_ids = unique_in_order(tfs)
    gene_ids = unique_in_order(genes)
    data = np.zeros((len(tf_ids), len(gene_ids)))
    data[positions_of(tf_ids, tfs), positions_of(gene_ids, genes)] = weights
    return RegNet(data, tf_ids, gene_ids)
