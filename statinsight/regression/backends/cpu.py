"""
CPU backend for simple linear regression.

Solves the least squares problem for X = [1, x] through a reduced QR
decomposition, then derives the coefficient and model tests.
"""

from __future__ import annotations

import math
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from statinsight.core.result import Result
from statinsight.core.compute.timing import Timer
from statinsight.distributions import clamp_probability, f_cdf, t_cdf
from statinsight.regression._common import (
    RESIDUAL_OUTLIER_Z,
    RegressionParams,
    ResidualAnalysis,
)
from statinsight.regression.design import RegressionDesign


def _two_sided_p(t: float, df: float) -> float:
    if math.isnan(t):
        return math.nan
    return clamp_probability(2.0 * (1.0 - t_cdf(abs(t), df)))


def _durbin_watson(residuals: NDArray) -> float | None:
    """sum((e_i - e_{i-1})^2) / sum(e_i^2); None when every residual is zero."""
    denom = float(residuals @ residuals)
    if denom == 0.0:
        return None
    return float(np.sum(np.diff(residuals) ** 2)) / denom


def analyze_residuals(residuals: NDArray) -> ResidualAnalysis:
    """Mean, spread, standardized residuals, |z| > 2 outliers and Durbin-Watson."""
    from statinsight.normality import jarque_bera

    mean = float(np.mean(residuals))
    std = float(np.std(residuals, ddof=1))
    if std > 0.0:
        standardized = residuals / std
    else:
        standardized = np.zeros_like(residuals)
    outliers = tuple(
        (int(i), float(z)) for i, z in enumerate(standardized) if abs(z) > RESIDUAL_OUTLIER_Z
    )
    normality = jarque_bera(residuals) if len(residuals) >= 4 else None
    return ResidualAnalysis(
        mean=mean,
        std=std,
        standardized=standardized,
        outliers=outliers,
        durbin_watson=_durbin_watson(residuals),
        residual_normality=normality,
    )


class CPUQRBackend:
    """
    CPU backend using QR decomposition.

    Implements the Backend protocol for RegressionDesign -> RegressionParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: RegressionDesign) -> Result[RegressionParams]:
        """
        Fit y = b0 + b1 x.

        Algorithm:
            1. X = QR (reduced)
            2. beta = R^-1 Q'y
            3. (X'X)^-1 = R^-1 R^-T for the standard errors
        """
        timer = Timer()
        timer.start()
        warnings_list: list[str] = []

        X, y, n, alpha = design.X, design.y, design.n, design.alpha
        df = n - 2

        with timer.section('qr_decomposition'):
            Q, R = np.linalg.qr(X, mode='reduced')

        with timer.section('solve'):
            coefficients = solve_triangular(R, Q.T @ y, lower=False)

        with timer.section('residuals'):
            fitted = X @ coefficients
            residuals = y - fitted

        with timer.section('statistics'):
            rss = float(residuals @ residuals)
            tss = float(np.sum((y - np.mean(y)) ** 2))
            mse = rss / df
            r_inv = solve_triangular(R, np.eye(2), lower=False)
            se = np.sqrt(mse * np.diag(r_inv @ r_inv.T))

            with np.errstate(divide='ignore', invalid='ignore'):
                t_stats = coefficients / se
            if np.any(se == 0.0):
                warnings_list.append("residuals are all zero (perfect fit); t statistics are infinite")
            p_values = np.array([_two_sided_p(float(t), df) for t in t_stats])

            ss_regression = tss - rss
            if rss == 0.0:
                f_stat = math.inf if ss_regression > 0 else math.nan
            else:
                f_stat = ss_regression / (rss / df)
            p_model = math.nan if math.isnan(f_stat) else clamp_probability(1.0 - f_cdf(f_stat, 1, df))

        with timer.section('residual_analysis'):
            residual_analysis = analyze_residuals(residuals)

        timer.stop()

        params = RegressionParams(
            coefficients=coefficients,
            standard_errors=se,
            t_statistics=t_stats,
            p_values=p_values,
            fitted_values=fitted,
            residuals=residuals,
            rss=rss,
            tss=tss,
            f_statistic=float(f_stat),
            p_value_model=float(p_model),
            df_residual=df,
            alpha=alpha,
            residual_analysis=residual_analysis,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'n': n,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
