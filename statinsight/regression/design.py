"""
Regression design.

RegressionDesign holds the complete (x, y) pairs of a simple linear
regression and the model matrix X = [1, x].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from statinsight.core.exceptions import DegenerateInputError
from statinsight.core.validation import check_alpha, check_min_samples
from statinsight.correlation._pairs import paired_values
from statinsight.regression._common import DEFAULT_ALPHA, MIN_PAIRS


@dataclass(frozen=True)
class RegressionDesign:
    """
    Simple linear regression design.

    Immutable after construction.

    Construction:
        RegressionDesign.for_pair(x, y)             # drops incomplete pairs
        RegressionDesign.for_pair(x, y, alpha=0.01)
    """
    _x: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _alpha: float = DEFAULT_ALPHA

    @classmethod
    def for_pair(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        alpha: float = DEFAULT_ALPHA,
    ) -> RegressionDesign:
        """
        Build a design from two parallel columns.

        Args:
            x: Predictor column
            y: Response column
            alpha: Significance level for the coefficient and model tests

        Returns:
            RegressionDesign over the pairs where both cells are finite numbers

        Raises:
            DimensionError: If x and y differ in length
            InsufficientDataError: If fewer than 3 complete pairs remain
            DegenerateInputError: If x has zero variance
        """
        alpha = check_alpha(alpha)
        xs, ys = paired_values(x, y)
        check_min_samples(xs, MIN_PAIRS, 'paired observations')
        if float(np.sum((xs - xs.mean()) ** 2)) == 0.0:
            raise DegenerateInputError(
                "Cannot perform regression: x values have zero variance",
                quantity='variance of x',
            )
        return cls(_x=xs, _y=ys, _alpha=alpha)

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Predictor values (n,)."""
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response values (n,)."""
        return self._y

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Model matrix (n x 2): intercept column then x."""
        return np.column_stack([np.ones_like(self._x), self._x])

    @property
    def n(self) -> int:
        return len(self._x)

    @property
    def alpha(self) -> float:
        return self._alpha

    def XtX(self) -> NDArray[np.floating[Any]]:
        """Compute X'X (for standard errors)."""
        X = self.X
        return X.T @ X
