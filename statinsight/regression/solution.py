"""
Regression solution types.

RegressionSolution wraps Result[RegressionParams] and derives R-squared,
the correlation, error measures and the fitted equation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from statinsight.core.result import Result
from statinsight.regression._common import RegressionParams, ResidualAnalysis

if TYPE_CHECKING:
    from statinsight.regression.design import RegressionDesign


@dataclass
class RegressionSolution:
    """
    User-facing simple linear regression results.

    Wraps the backend Result and provides accessors for the coefficients,
    their tests, goodness of fit and residual diagnostics.
    """
    _result: Result[RegressionParams]
    _design: 'RegressionDesign'

    @property
    def test_type(self) -> str:
        return 'regression'

    @property
    def intercept(self) -> float:
        return float(self._result.params.coefficients[0])

    @property
    def slope(self) -> float:
        return float(self._result.params.coefficients[1])

    @property
    def coefficients(self) -> NDArray[np.float64]:
        """(intercept, slope)."""
        return self._result.params.coefficients

    @property
    def standard_errors(self) -> NDArray[np.float64]:
        return self._result.params.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.float64]:
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.float64]:
        return self._result.params.p_values

    @property
    def se_intercept(self) -> float:
        return float(self._result.params.standard_errors[0])

    @property
    def se_slope(self) -> float:
        return float(self._result.params.standard_errors[1])

    @property
    def t_intercept(self) -> float:
        return float(self._result.params.t_statistics[0])

    @property
    def t_slope(self) -> float:
        return float(self._result.params.t_statistics[1])

    @property
    def p_value_intercept(self) -> float:
        return float(self._result.params.p_values[0])

    @property
    def p_value_slope(self) -> float:
        return float(self._result.params.p_values[1])

    @property
    def rss(self) -> float:
        return self._result.params.rss

    @property
    def tss(self) -> float:
        return self._result.params.tss

    @property
    def r_squared(self) -> float:
        """1 - RSS/TSS; 1 when y is constant."""
        if self.tss == 0:
            return 1.0
        return 1.0 - self.rss / self.tss

    @property
    def adjusted_r_squared(self) -> float:
        n = self._design.n
        if self.tss == 0:
            return self.r_squared
        return 1.0 - (self.rss / (n - 2)) / (self.tss / (n - 1))

    @property
    def correlation(self) -> float:
        """sqrt(R^2) with the sign of the slope."""
        return math.copysign(math.sqrt(max(self.r_squared, 0.0)), self.slope) if self.slope else 0.0

    @property
    def mse(self) -> float:
        return self.rss / self._result.params.df_residual

    @property
    def rmse(self) -> float:
        return math.sqrt(self.mse)

    @property
    def f_statistic(self) -> float:
        return self._result.params.f_statistic

    @property
    def p_value_model(self) -> float:
        return self._result.params.p_value_model

    @property
    def statistic(self) -> float:
        return self.f_statistic

    @property
    def p_value(self) -> float:
        return self.p_value_model

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def significant(self) -> bool:
        return self.p_value_model < self.alpha

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def residuals(self) -> NDArray[np.float64]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.float64]:
        return self._result.params.fitted_values

    @property
    def residual_analysis(self) -> ResidualAnalysis:
        return self._result.params.residual_analysis

    @property
    def equation(self) -> str:
        return f"y = {self.intercept:.4f} + {self.slope:.4f}x"

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def predict(self, x: float | ArrayLike) -> float | NDArray[np.float64]:
        """Fitted line at x (scalar in, scalar out)."""
        if np.ndim(x) == 0:
            return self.intercept + self.slope * float(x)
        return self.intercept + self.slope * np.asarray(x, dtype=np.float64)

    def to_dict(self) -> dict[str, Any]:
        """camelCase record, as consumed by the interpreter."""
        return {
            'type': 'regression',
            'slope': self.slope,
            'intercept': self.intercept,
            'rSquared': self.r_squared,
            'adjustedRSquared': self.adjusted_r_squared,
            'correlation': self.correlation,
            'standardErrorSlope': self.se_slope,
            'standardErrorIntercept': self.se_intercept,
            'tStatSlope': self.t_slope,
            'tStatIntercept': self.t_intercept,
            'pValueSlope': self.p_value_slope,
            'pValueIntercept': self.p_value_intercept,
            'fStatistic': self.f_statistic,
            'pValueModel': self.p_value_model,
            'alpha': self.alpha,
            'significant': self.significant,
            'degreesOfFreedom': self.df_residual,
            'mse': self.mse,
            'rmse': self.rmse,
            'residuals': self.residuals.tolist(),
            'predicted': self.fitted_values.tolist(),
            'sampleSize': self.n,
            'equation': self.equation,
            'residualAnalysis': self.residual_analysis.to_dict(),
        }

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Simple Linear Regression Results",
            "=" * 60,
            f"Observations: {self.n}",
            f"Equation: {self.equation}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Residual Std. Error: {self.rmse:.6f} on {self.df_residual} DF",
            f"F-statistic: {self.f_statistic:.4f} on 1 and {self.df_residual} DF, "
            f"p-value: {self.p_value_model:.4g}",
            "",
            "Coefficients:",
            "-" * 60,
            f"{'':<12} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>10}",
            "-" * 60,
        ]
        for label, coef, se, t, p in zip(
            ("(Intercept)", "x"),
            self.coefficients, self.standard_errors, self.t_statistics, self.p_values,
        ):
            lines.append(f"{label:<12} {coef:14.6f} {se:12.6f} {t:10.3f} {p:10.4g}")
        lines.append("-" * 60)
        dw = self.residual_analysis.durbin_watson
        if dw is not None:
            lines.append(f"Durbin-Watson: {dw:.4f}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"RegressionSolution(n={self.n}, slope={self.slope:.4g}, "
            f"intercept={self.intercept:.4g}, r_squared={self.r_squared:.4f})"
        )
