"""
CorrelationDesign: two paired columns reduced to their complete pairs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from statinsight.core.exceptions import ValidationError
from statinsight.core.validation import check_alpha, check_min_samples
from statinsight.correlation._common import DEFAULT_ALPHA, METHODS, MIN_PAIRS
from statinsight.correlation._pairs import paired_values


@dataclass(frozen=True)
class CorrelationDesign:
    """
    Design for a bivariate correlation.

    Do not construct directly; use for_pair().
    """
    method: str
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _alpha: float = DEFAULT_ALPHA

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        return self._y

    @property
    def n(self) -> int:
        return len(self._x)

    @property
    def alpha(self) -> float:
        return self._alpha

    @classmethod
    def for_pair(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        method: str = "pearson",
        alpha: float = DEFAULT_ALPHA,
    ) -> CorrelationDesign:
        """
        Raises
        ------
        ValidationError
            If method is unknown.
        DimensionError
            If x and y differ in length.
        InsufficientDataError
            If fewer than 3 complete pairs remain.
        """
        if method not in METHODS:
            raise ValidationError(
                f"Unknown correlation method: {method!r}. Use one of {METHODS}"
            )
        alpha = check_alpha(alpha)
        xs, ys = paired_values(x, y)
        check_min_samples(xs, MIN_PAIRS, "paired observations")
        return cls(method=method, _x=xs, _y=ys, _alpha=alpha)
