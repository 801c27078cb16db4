"""
Parameter set for building a regulatory prior.

Every parameter that affects the produced prior, or that the optimisation
loop driving prior construction wants recorded in the output file name, is
collected in PriorParameters. Values are validated on construction so a run
with an out-of-range setting fails before any file is read.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, fields
from numbers import Real
from typing import Any

__all__ = ['PriorParameters']


def _check_unit_interval(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"{name} must be a number, got {type(value).__name__} {value!r}")
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def _check_choice(name: str, value: int, choices: range) -> None:
    if value not in choices:
        raise ValueError(
            f"{name} must be one of {list(choices)}, got {value}"
        )


@dataclass(frozen=True)
class PriorParameters:
    """
    Settings for motif thresholding, ChIP-seq overlay and coexpression fusion.

    Attributes:
        motif_weight: Weight of TF-gene coexpression in the convex blend [0, 1]
        motif_cutoff: Projected coexpression values below this are zeroed [0, 1]
        add_corr: Coexpression fusion variant {0, 1, 2, 3, 4}
            0 = no fusion, 1/3 = zero the coexpression diagonal, 2/4 = keep it
        abs_coex: {0, 1} recorded in the file name; the absolute value of
            coexpression is always taken
        thresh: p-value threshold for binding assignment [0, 1]
        old_motif: {0, 1} use a previously generated (non p-value) motif prior
        inc_coverage: {0, 1} prior includes zero rows for every PPI TF
        qpval: {0, 1} motif weights are corrected p-values
        bridging_proteins: {0..7} higher-order PPI level; interpreted by the
            PPI builder, only recorded here
        add_chip: ChIP-seq overlay mode {0, 1, 2}
        ctrl: {0, 1, 2, 3} null-variable label for the optimiser, file name only
    """

    motif_weight: float = 0.0
    motif_cutoff: float = 0.0
    add_corr: int = 0
    abs_coex: int = 0
    thresh: float = 0.0
    old_motif: int = 0
    inc_coverage: int = 0
    qpval: int = 0
    bridging_proteins: int = 0
    add_chip: int = 0
    ctrl: int = 0

    def __post_init__(self) -> None:
        _check_unit_interval("motif_weight", self.motif_weight)
        _check_unit_interval("motif_cutoff", self.motif_cutoff)
        _check_unit_interval("thresh", self.thresh)
        _check_choice("add_corr", self.add_corr, range(5))
        _check_choice("abs_coex", self.abs_coex, range(2))
        _check_choice("old_motif", self.old_motif, range(2))
        _check_choice("inc_coverage", self.inc_coverage, range(2))
        _check_choice("qpval", self.qpval, range(2))
        _check_choice("bridging_proteins", self.bridging_proteins, range(8))
        _check_choice("add_chip", self.add_chip, range(3))
        _check_choice("ctrl", self.ctrl, range(4))

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> PriorParameters:
        """Build from a dict, ignoring keys that are not parameters."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in names})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
