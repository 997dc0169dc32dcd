"""
Solver dispatch for regression.

This module provides linear_regression() (public API) and backend selection.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from statinsight.core.exceptions import ValidationError
from statinsight.regression._common import DEFAULT_ALPHA
from statinsight.regression.design import RegressionDesign
from statinsight.regression.solution import RegressionSolution
from statinsight.regression.backends.cpu import CPUQRBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_qr']


def _get_backend(backend: str = 'auto'):
    if backend in ('auto', 'cpu', 'cpu_qr'):
        return CPUQRBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'auto', 'cpu' or 'cpu_qr'."
    )


def linear_regression(
    x: ArrayLike | RegressionDesign,
    y: ArrayLike | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> RegressionSolution:
    """
    Fit a simple linear regression y = intercept + slope * x.

    Only the pairs where both cells are finite numbers are used.

    Args:
        x: Predictor column, or a prepared RegressionDesign
        y: Response column, same length as x
        alpha: Significance level of the coefficient and model tests
        backend: 'auto', 'cpu' or 'cpu_qr' (all the QR backend)

    Returns:
        RegressionSolution with coefficients, tests, goodness of fit,
        residual diagnostics and summary()

    Raises:
        DimensionError: If x and y differ in length
        InsufficientDataError: If fewer than 3 complete pairs remain
        DegenerateInputError: If x has zero variance

    Example:
        >>> from statinsight.regression import linear_regression
        >>> fit = linear_regression([1, 2, 3, 4, 5], [2.1, 3.9, 6.2, 7.8, 10.1])
        >>> round(fit.slope, 2)
        1.99
    """
    if isinstance(x, RegressionDesign):
        design = x
    else:
        if y is None:
            raise ValidationError("y is required for regression")
        design = RegressionDesign.for_pair(x, y, alpha=alpha)
    result = _get_backend(backend).solve(design)
    return RegressionSolution(_result=result, _design=design)
