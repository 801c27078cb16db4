"""
Pytest configuration and shared fixtures.

Provides writers for the whitespace-delimited input tables and generators for
small, realistic expression / PPI / motif inputs.
"""

import numpy as np
import pandas as pd
import pytest
from pathlib import Path

from motifprior.core.regnet import RegNet


def write_rows(path: Path, rows) -> Path:
    """Write rows of tokens as a tab-separated, header-free table."""
    with open(path, 'w') as f:
        for row in rows:
            f.write("\t".join(str(token) for token in row) + "\n")
    return path


def make_regnet(data, tf_ids, gene_ids) -> RegNet:
    """RegNet from nested lists and identifier lists."""
    return RegNet(
        np.asarray(data, dtype=float),
        pd.Index(list(tf_ids), dtype=object),
        pd.Index(list(gene_ids), dtype=object),
    )


@pytest.fixture
def example_inputs(tmp_path):
    """
    Three genes x two conditions, TFs {G1, G2} named like genes, one motif edge.

    Expression profiles are chosen so that coexpression is exactly
    +1 between G1 and G2 and -1 between G3 and both others.
    """
    expression = write_rows(tmp_path / "expression.txt", [
        ("G1", 1.0, 2.0),
        ("G2", 2.0, 4.0),
        ("G3", 3.0, 1.0),
    ])
    ppi = write_rows(tmp_path / "ppi.txt", [
        ("G1", "G2", 1),
        ("G2", "G1", 1),
        ("G1", "G3", 1),
    ])
    motif = write_rows(tmp_path / "motif.txt", [
        ("G1", "G2", 0.5),
    ])
    return {
        'expression': expression,
        'ppi': ppi,
        'motif': motif,
        'dir': tmp_path,
    }


def generate_synthetic_inputs(
    directory: Path,
    n_genes: int = 40,
    n_conditions: int = 12,
    n_gene_tfs: int = 6,
    n_orphan_tfs: int = 2,
    n_edges: int = 80,
    seed: int = 42,
) -> dict:
    """
    Generate expression, PPI, motif and ChIP-seq files with realistic structure.

    Args:
        directory: Where to write the files
        n_genes: Genes in the expression table
        n_conditions: Expression conditions
        n_gene_tfs: TFs that are also measured genes
        n_orphan_tfs: TFs absent from the expression table
        n_edges: Motif edges (p-values), some pointing to unknown genes
        seed: Random seed for reproducibility

    Design:
        - Log-normal expression with two correlated gene modules
        - PPI lists each TF several times, in shuffled order
        - Motif p-values spread over (0, 1) with a few exact 1.0 edges
    """
    rng = np.random.RandomState(seed)

    gene_ids = [f"GENE{i:03d}" for i in range(n_genes)]
    data = rng.lognormal(mean=3, sigma=1, size=(n_genes, n_conditions))
    for start in (0, n_genes // 2):
        pattern = rng.randn(n_conditions)
        for g in range(start, start + 5):
            data[g] = data[g] * 0.3 + np.exp(pattern) * 10

    tf_ids = gene_ids[:n_gene_tfs] + [f"ORPHAN{i}" for i in range(n_orphan_tfs)]

    expression = write_rows(
        directory / "expression.txt",
        ([gene] + [f"{v:.4f}" for v in row] for gene, row in zip(gene_ids, data)),
    )

    ppi_rows = []
    for _ in range(3):
        for tf in rng.permutation(tf_ids):
            ppi_rows.append((tf, tf_ids[rng.randint(len(tf_ids))], 1))
    ppi = write_rows(directory / "ppi.txt", ppi_rows)

    motif_rows = []
    for _ in range(n_edges):
        tf = tf_ids[rng.randint(len(tf_ids))]
        gene = gene_ids[rng.randint(n_genes)] if rng.rand() > 0.1 else "UNKNOWN"
        motif_rows.append((tf, gene, f"{rng.uniform(0.001, 0.999):.4f}"))
    motif_rows.append((tf_ids[0], gene_ids[-1], "1.0"))
    motif = write_rows(directory / "motif.txt", motif_rows)

    chip = write_rows(directory / "chip.txt", [
        (tf_ids[0], gene_ids[1], gene_ids[2], "NOTAGENE"),
        (tf_ids[1],),
        ("UNLISTED_TF", gene_ids[3]),
    ])

    return {
        'expression': expression,
        'ppi': ppi,
        'motif': motif,
        'chip': chip,
        'gene_ids': gene_ids,
        'tf_ids': tf_ids,
        'dir': directory,
    }


@pytest.fixture
def synthetic_inputs(tmp_path):
    """Synthetic inputs (40 genes, 8 TFs) for pipeline tests."""
    return generate_synthetic_inputs(tmp_path)
