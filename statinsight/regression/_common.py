"""
Common types for simple linear regression.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray


DEFAULT_ALPHA = 0.05
MIN_PAIRS = 3
RESIDUAL_OUTLIER_Z = 2.0


@dataclass(frozen=True)
class ResidualAnalysis:
    """
    Residual diagnostics of a fitted line.

    std uses the n - 1 denominator. standardized is residual / std (all zero
    for an exact fit). outliers are (index, standardized residual) pairs
    with |z| > 2. durbin_watson is None when every residual is zero.
    residual_normality is the Jarque-Bera solution on the residuals, None
    below 4 observations.
    """
    mean: float
    std: float
    standardized: NDArray[np.float64]
    outliers: tuple[tuple[int, float], ...]
    durbin_watson: float | None
    residual_normality: Any = None

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            'mean': self.mean,
            'standardDeviation': self.std,
            'standardizedResiduals': self.standardized.tolist(),
            'outliers': [{'index': i, 'value': z} for i, z in self.outliers],
            'durbinWatson': self.durbin_watson,
        }
        if self.residual_normality is not None:
            jb = self.residual_normality
            record['normalityTest'] = {
                'jarqueBeraStatistic': jb.statistic,
                'pValue': jb.p_value,
                'isNormal': jb.is_normal,
            }
        return record


@dataclass(frozen=True)
class RegressionParams:
    """
    Parameter payload for y = intercept + slope * x.

    coefficients is (intercept, slope); standard_errors, t_statistics and
    p_values follow the same order. df_residual is n - 2.
    """
    coefficients: NDArray[np.float64]
    standard_errors: NDArray[np.float64]
    t_statistics: NDArray[np.float64]
    p_values: NDArray[np.float64]
    fitted_values: NDArray[np.float64]
    residuals: NDArray[np.float64]
    rss: float
    tss: float
    f_statistic: float
    p_value_model: float
    df_residual: int
    alpha: float
    residual_analysis: ResidualAnalysis
