"""
Correlation solution types.

CorrelationSolution wraps Result[CorrelationParams]. CorrelationMatrix holds
the pairwise results over the numeric columns of a dataset.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from statinsight.core.result import Result
from statinsight.correlation._common import CorrelationParams, correlation_strength

if TYPE_CHECKING:
    from statinsight.correlation.design import CorrelationDesign


@dataclass
class CorrelationSolution:
    """User-facing correlation result."""
    _result: Result[CorrelationParams]
    _design: 'CorrelationDesign | None'

    @property
    def test_type(self) -> str:
        return self._result.params.method

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def correlation(self) -> float:
        return self._result.params.correlation

    @property
    def statistic(self) -> float:
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        return self._result.params.statistic_name

    @property
    def df(self) -> float | None:
        return self._result.params.df

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def significant(self) -> bool:
        return self._result.params.significant

    @property
    def n(self) -> int:
        return self._result.params.n

    @property
    def conf_int(self) -> tuple[float, float] | None:
        return self._result.params.conf_int

    @property
    def strength(self) -> str:
        return correlation_strength(self._result.params.correlation)

    @property
    def extras(self) -> dict[str, Any] | None:
        return self._result.params.extras

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def interpretation(self) -> str:
        p = self._result.params
        direction = "positive" if p.correlation > 0 else "negative"
        significance = "significant" if p.significant else "not significant"
        return (
            f"{p.method.capitalize()} correlation: {self.strength} {direction} relationship "
            f"(r = {p.correlation:.4f}, p = {p.p_value:.4f}, {significance})"
        )

    def to_dict(self) -> dict[str, Any]:
        """camelCase record, as consumed by the interpreter."""
        p = self._result.params
        record: dict[str, Any] = {
            'type': 'correlation',
            'method': p.method,
            'correlation': p.correlation,
            'pValue': p.p_value,
            'alpha': p.alpha,
            'significant': p.significant,
            'sampleSize': p.n,
        }
        if p.statistic_name == "t":
            record['tStatistic'] = p.statistic
            record['degreesOfFreedom'] = p.df
        else:
            record['zStatistic'] = p.statistic
        if p.conf_int is not None:
            record['confidenceInterval'] = {'lower': p.conf_int[0], 'upper': p.conf_int[1]}
        if p.method == "kendall" and p.extras:
            record['concordantPairs'] = p.extras['concordant_pairs']
            record['discordantPairs'] = p.extras['discordant_pairs']
        return record

    def summary(self) -> str:
        p = self._result.params
        lines = [f"\t{p.method.capitalize()} correlation", ""]
        stat = f"{p.statistic_name} = {p.statistic:.5g}"
        if p.df is not None:
            stat += f", df = {p.df:g}"
        lines.append(f"{stat}, p-value = {p.p_value:.4g}, n = {p.n}")
        if p.conf_int is not None:
            pct = round((1.0 - p.alpha) * 100)
            lines.append(f"{pct} percent confidence interval:")
            lines.append(f" {p.conf_int[0]:.7g}  {p.conf_int[1]:.7g}")
        lines.append(f"correlation: {p.correlation:.7g}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"CorrelationSolution(method={p.method!r}, r={p.correlation:.4g}, "
            f"p_value={p.p_value:.4g}, n={p.n})"
        )


@dataclass(frozen=True)
class StrongCorrelation:
    variable1: str
    variable2: str
    correlation: float
    p_value: float

    @property
    def strength(self) -> str:
        return correlation_strength(self.correlation)

    def to_dict(self) -> dict[str, Any]:
        return {
            'variable1': self.variable1,
            'variable2': self.variable2,
            'correlation': self.correlation,
            'pValue': self.p_value,
            'strength': self.strength,
        }


@dataclass(frozen=True)
class CorrelationMatrix:
    """
    Pairwise correlations of the numeric columns of a dataset.

    correlations, p_values and sample_sizes are symmetric (k, k) arrays in
    `columns` order. A pair that could not be computed is NaN with sample
    size 0, and its error message is kept in `failures`.
    """
    columns: tuple[str, ...]
    method: str
    correlations: NDArray[np.float64]
    p_values: NDArray[np.float64]
    sample_sizes: NDArray[np.int64]
    strong: tuple[StrongCorrelation, ...]
    failures: dict[tuple[str, str], str]

    def get(self, col1: str, col2: str) -> float:
        return float(self.correlations[self.columns.index(col1), self.columns.index(col2)])

    def pairs(self) -> list[tuple[str, str, float, float]]:
        """(col1, col2, r, p) for every pair above the diagonal."""
        k = len(self.columns)
        return [
            (self.columns[i], self.columns[j],
             float(self.correlations[i, j]), float(self.p_values[i, j]))
            for i in range(k) for j in range(i + 1, k)
        ]

    @property
    def summary(self) -> dict[str, Any]:
        valid = [(r, p) for _, _, r, p in self.pairs() if not math.isnan(r)]
        rs = [r for r, _ in valid]
        return {
            'totalPairs': len(valid),
            'significantPairs': sum(1 for _, p in valid if p < 0.05),
            'strongPositiveCorrelations': sum(1 for r in rs if r > 0.7),
            'strongNegativeCorrelations': sum(1 for r in rs if r < -0.7),
            'maxCorrelation': max([0.0, *rs]),
            'minCorrelation': min([0.0, *rs]),
            'averageAbsoluteCorrelation': (
                sum(abs(r) for r in rs) / len(rs) if rs else 0.0
            ),
        }

    def to_dict(self) -> dict[str, Any]:
        def as_nested(matrix: NDArray) -> dict[str, dict[str, float]]:
            return {
                a: {b: matrix[i, j].item() for j, b in enumerate(self.columns)}
                for i, a in enumerate(self.columns)
            }

        return {
            'columns': list(self.columns),
            'method': self.method,
            'correlations': as_nested(self.correlations),
            'pValues': as_nested(self.p_values),
            'sampleSizes': as_nested(self.sample_sizes),
            'strongCorrelations': [s.to_dict() for s in self.strong],
            'summary': self.summary,
        }
