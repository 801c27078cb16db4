"""
Core data structure for TF x gene regulatory prior matrices.

RegNet couples the numerical prior weights with the TF and gene identifiers
that index them and with per-cell evidence flags.

Biological Context:
    A regulatory prior is a bipartite adjacency matrix:
    - Rows = transcription factors (defined by the PPI network)
    - Columns = target genes (defined by the expression matrix)
    - Values = prior belief that the TF regulates the gene

    Row and column order are significant: the inference step that consumes
    the prior aligns it against the PPI and expression matrices by position.

Engineering Design:
    - Immutable by convention: stages return new instances
    - NumPy arrays for data and flags, pandas Index for identifiers
    - Validated: constructor checks shape consistency

Examples:
    >>> import numpy as np
    >>> import pandas as pd
    >>> from motifprior.core.regnet import RegNet
    >>>
    >>> regnet = RegNet.zeros(pd.Index(["TF1", "TF2"]), pd.Index(["G1", "G2", "G3"]))
    >>> regnet.shape
    (2, 3)
"""

from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from motifprior.core.evidence import EvidenceFlag

__all__ = ['RegNet']


class RegNet:
    """
    Immutable container for a TF x gene prior plus evidence flags.

    Attributes:
        data: Prior weights (n_tfs x n_genes, float64)
        tf_ids: Row identifiers (transcription factors)
        gene_ids: Column identifiers (target genes)
        evidence_flags: Per-cell EvidenceFlag bits (same shape as data)

    Shape Invariants:
        - data.shape == (len(tf_ids), len(gene_ids))
        - evidence_flags.shape == data.shape
    """

    def __init__(
        self,
        data: np.ndarray,
        tf_ids: pd.Index,
        gene_ids: pd.Index,
        evidence_flags: Optional[np.ndarray] = None,
    ):
        """
        Initialize RegNet with validation.

        Args:
            data: Prior weights (n_tfs x n_genes)
            tf_ids: Row identifiers
            gene_ids: Column identifiers
            evidence_flags: Provenance bits. Defaults to EvidenceFlag.NONE everywhere.

        Raises:
            TypeError: If data or identifiers have the wrong type
            ValueError: If shapes are inconsistent
        """
        if not isinstance(data, np.ndarray):
            raise TypeError(f"data must be np.ndarray, got {type(data)}")
        if not isinstance(tf_ids, pd.Index):
            raise TypeError(f"tf_ids must be pd.Index, got {type(tf_ids)}")
        if not isinstance(gene_ids, pd.Index):
            raise TypeError(f"gene_ids must be pd.Index, got {type(gene_ids)}")

        if data.ndim != 2:
            raise ValueError(f"data must be 2D, got shape {data.shape}")

        n_tfs, n_genes = data.shape
        if len(tf_ids) != n_tfs:
            raise ValueError(
                f"tf_ids length ({len(tf_ids)}) must match data rows ({n_tfs})"
            )
        if len(gene_ids) != n_genes:
            raise ValueError(
                f"gene_ids length ({len(gene_ids)}) must match data columns ({n_genes})"
            )

        if evidence_flags is None:
            evidence_flags = np.full(data.shape, EvidenceFlag.NONE, dtype=int)
        if evidence_flags.shape != data.shape:
            raise ValueError(
                f"evidence_flags shape {evidence_flags.shape} must match data shape {data.shape}"
            )

        self._data = data.astype(np.float64, copy=False)
        self._tf_ids = tf_ids
        self._gene_ids = gene_ids
        self._evidence_flags = evidence_flags

    @classmethod
    def zeros(cls, tf_ids: pd.Index, gene_ids: pd.Index) -> RegNet:
        """All-zero prior with no evidence."""
        return cls(np.zeros((len(tf_ids), len(gene_ids))), tf_ids, gene_ids)

    @property
    def data(self) -> np.ndarray:
        """Prior weights (n_tfs x n_genes)."""
        return self._data

    @property
    def tf_ids(self) -> pd.Index:
        """Row identifiers (transcription factors)."""
        return self._tf_ids

    @property
    def gene_ids(self) -> pd.Index:
        """Column identifiers (target genes)."""
        return self._gene_ids

    @property
    def evidence_flags(self) -> np.ndarray:
        """Per-cell provenance bits (same shape as data)."""
        return self._evidence_flags

    @property
    def shape(self) -> tuple[int, int]:
        """Matrix dimensions (n_tfs, n_genes)."""
        return self._data.shape

    @property
    def n_tfs(self) -> int:
        return self._data.shape[0]

    @property
    def n_genes(self) -> int:
        return self._data.shape[1]

    @property
    def n_edges(self) -> int:
        """Number of non-zero cells."""
        return int(np.count_nonzero(self._data))

    def with_data(
        self,
        data: np.ndarray,
        evidence_flags: Optional[np.ndarray] = None,
    ) -> RegNet:
        """
        New RegNet sharing identifiers with this one but holding new weights.

        Flags are copied from this instance unless replacements are given.
        """
        if evidence_flags is None:
            evidence_flags = self._evidence_flags.copy()
        return RegNet(
            data=data,
            tf_ids=self._tf_ids,
            gene_ids=self._gene_ids,
            evidence_flags=evidence_flags,
        )

    def copy(self, deep: bool = True) -> RegNet:
        """
        Create a copy of this prior.

        Args:
            deep: If True, copy all arrays. If False, share arrays.
        """
        if deep:
            return RegNet(
                data=self._data.copy(),
                tf_ids=self._tf_ids.copy(),
                gene_ids=self._gene_ids.copy(),
                evidence_flags=self._evidence_flags.copy(),
            )
        return RegNet(
            data=self._data,
            tf_ids=self._tf_ids,
            gene_ids=self._gene_ids,
            evidence_flags=self._evidence_flags,
        )

    def to_frame(self) -> pd.DataFrame:
        """Weights as a DataFrame indexed by TF with gene columns."""
        return pd.DataFrame(self._data, index=self._tf_ids, columns=self._gene_ids)

    def count_flag(self, flag: EvidenceFlag) -> int:
        """Number of cells carrying ``flag``."""
        return int(np.sum((self._evidence_flags & flag) != 0))

    def __repr__(self) -> str:
        if self.n_tfs == 0 or self.n_genes == 0:
            return f"RegNet({self.n_tfs} TFs × {self.n_genes} genes)"
        return (
            f"RegNet({self.n_tfs} TFs × {self.n_genes} genes, {self.n_edges} non-zero)\n"
            f"  TFs: {self.tf_ids[0]}...{self.tf_ids[-1]}\n"
            f"  Genes: {self.gene_ids[0]}...{self.gene_ids[-1]}"
        )

    def __str__(self) -> str:
        return self.__repr__()
