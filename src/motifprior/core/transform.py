"""
Base transformation framework for prior matrix stages.

Every stage between loading and writing (thresholding, ChIP-seq overlay,
coexpression fusion) is a Transform: it takes a RegNet and returns a new
RegNet. The input is never modified, so intermediate priors can be kept for
inspection or comparison.

Engineering Design:
    Pure Functions:
        - No side effects (don't modify inputs)
        - Deterministic (same input + params -> same output)
        - Composable (chain stages into a pipeline)

Examples:
    >>> from motifprior.core.transform import Transform
    >>> from motifprior.core.regnet import RegNet
    >>>
    >>> class Scale(Transform):
    ...     def __init__(self, factor: float):
    ...         super().__init__(name="Scale", params={"factor": factor})
    ...         self.factor = factor
    ...
    ...     def apply(self, regnet: RegNet) -> RegNet:
    ...         return regnet.with_data(regnet.data * self.factor)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from motifprior.core.regnet import RegNet

__all__ = ['Transform', 'Identity']


class Transform(ABC):
    """
    Abstract base class for all prior transformations.

    Attributes:
        name: Human-readable stage name (e.g., "BinaryThreshold")
        params: Parameters used by this stage, for logging
    """

    def __init__(self, name: str, params: dict[str, Any]) -> None:
        self.name = name
        self.params = params

    @abstractmethod
    def apply(self, regnet: RegNet) -> RegNet:
        """
        Execute the stage and return a new prior.

        Must never modify the input. Implementations copy the weight array
        (or build a new one) before changing cells.

        Raises:
            ValueError: If the stage cannot be applied (see validate())
        """
        pass

    def validate(self, regnet: RegNet) -> list[str]:
        """
        Check preconditions before applying the stage.

        Subclasses override and call super().validate() first.

        Returns:
            List of error messages (empty list = valid)
        """
        errors: list[str] = []
        return errors

    def __call__(self, regnet: RegNet) -> RegNet:
        errors = self.validate(regnet)
        if errors:
            raise ValueError(f"{self.name} cannot be applied: " + "; ".join(errors))
        return self.apply(regnet)

    def __repr__(self) -> str:
        """
        String representation for logging.

        Examples:
            >>> print(BinaryThreshold(thresh=0.05))
            BinaryThreshold(thresh=0.05)
        """
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.name}({params_str})"


class Identity(Transform):
    """Pass-through stage used when a policy is switched off."""

    def __init__(self, reason: str = "disabled") -> None:
        super().__init__(name="Identity", params={"reason": reason})

    def apply(self, regnet: RegNet) -> RegNet:
        return regnet.copy()
