"""
Hypothesis test solution types.

HTestSolution wraps Result[HTestParams] and provides an htest-style
summary() plus the camelCase record consumed by the interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from statinsight.core.result import Result
from statinsight.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from statinsight.hypothesis.design import HypothesisDesign


# test_type -> interpreter family
_RECORD_TYPES = {
    "one-sample": "t-test",
    "two-sample": "t-test",
    "paired": "t-test",
    "z-test": "z-test",
    "one-way-anova": "anova",
    "chi-square-independence": "chi-square",
    "mann-whitney-u": "mann-whitney",
}


@dataclass
class HTestSolution:
    """
    User-facing hypothesis test results.

    Wraps Result[HTestParams]. All tests are two-sided and
    significant = p_value < alpha.
    """
    _result: Result[HTestParams]
    _design: 'HypothesisDesign | None'

    # --- Standard fields ---

    @property
    def test_type(self) -> str:
        return self._result.params.test_type

    @property
    def statistic(self) -> float:
        """Test statistic value."""
        return self._result.params.statistic

    @property
    def statistic_name(self) -> str:
        """Name of the test statistic (e.g. 't', 'X-squared')."""
        return self._result.params.statistic_name

    @property
    def parameter(self) -> dict[str, float] | None:
        """Distribution parameters (e.g. {'df': 9})."""
        return self._result.params.parameter

    @property
    def df(self) -> float | None:
        """Degrees of freedom of t and chi-squared tests."""
        p = self._result.params.parameter
        return p.get('df') if p else None

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
    def critical_value(self) -> float | None:
        return self._result.params.critical_value

    @property
    def standard_error(self) -> float | None:
        return self._result.params.standard_error

    @property
    def conf_int(self) -> NDArray[np.floating[Any]] | None:
        """(1 - alpha) confidence interval, shape (2,)."""
        return self._result.params.conf_int

    @property
    def estimate(self) -> dict[str, float] | None:
        return self._result.params.estimate

    @property
    def null_value(self) -> dict[str, float] | None:
        return self._result.params.null_value

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def data_name(self) -> str:
        return self._result.params.data_name

    # --- Test-specific extras ---

    @property
    def extras(self) -> dict[str, Any] | None:
        return self._result.params.extras

    @property
    def observed(self) -> NDArray | None:
        """For chisq_test: observed counts."""
        e = self._result.params.extras
        return e.get('observed') if e else None

    @property
    def expected(self) -> NDArray | None:
        """For chisq_test: expected counts under H0."""
        e = self._result.params.extras
        return e.get('expected') if e else None

    @property
    def cramers_v(self) -> float | None:
        e = self._result.params.extras
        return e.get('cramers_v') if e else None

    @property
    def eta_squared(self) -> float | None:
        e = self._result.params.extras
        return e.get('eta_squared') if e else None

    # --- Metadata ---

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

    # --- Formatting ---

    def to_dict(self) -> dict[str, Any]:
        """camelCase record, as consumed by the interpreter."""
        p = self._result.params
        e = p.extras or {}
        record: dict[str, Any] = {
            'type': _RECORD_TYPES[p.test_type],
            'test': p.test_type,
            'method': p.method,
            'statistic': p.statistic,
            'pValue': p.p_value,
            'alpha': p.alpha,
            'significant': p.significant,
        }
        if p.critical_value is not None:
            record['criticalValue'] = p.critical_value
        if p.standard_error is not None:
            record['standardError'] = p.standard_error
        if p.conf_int is not None:
            record['confidenceInterval'] = {
                'lower': float(p.conf_int[0]),
                'upper': float(p.conf_int[1]),
            }

        if p.test_type in ("one-sample", "paired"):
            record['degreesOfFreedom'] = p.parameter['df']
            record['sampleMean'] = next(iter(p.estimate.values()))
            record['sampleSize'] = e['sample_size']
        elif p.test_type == "two-sample":
            record['degreesOfFreedom'] = p.parameter['df']
            record['sample1Mean'] = p.estimate['mean of x']
            record['sample2Mean'] = p.estimate['mean of y']
            record['meanDifference'] = e['mean_difference']
            record['sampleSize'] = sum(e['sample_sizes'])
        elif p.test_type == "z-test":
            record['sampleMean'] = p.estimate['mean of x']
            record['sampleSize'] = e['sample_size']
        elif p.test_type == "one-way-anova":
            record['fStatistic'] = p.statistic
            record['pValueModel'] = p.p_value
            record['dfBetween'] = p.parameter['df between']
            record['dfWithin'] = p.parameter['df within']
            record['sumOfSquaresBetween'] = e['ss_between']
            record['sumOfSquaresWithin'] = e['ss_within']
            record['sumOfSquaresTotal'] = e['ss_total']
            record['meanSquareBetween'] = e['ms_between']
            record['meanSquareWithin'] = e['ms_within']
            record['groupMeans'] = list(e['group_means'])
            record['grandMean'] = e['grand_mean']
            record['etaSquared'] = e['eta_squared']
            record['sampleSize'] = sum(e['group_sizes'])
        elif p.test_type == "chi-square-independence":
            record['degreesOfFreedom'] = p.parameter['df']
            record['cramersV'] = e['cramers_v']
            record['observed'] = e['observed'].tolist()
            record['expected'] = e['expected'].tolist()
            record['rowLabels'] = list(e['row_labels'])
            record['colLabels'] = list(e['col_labels'])
            record['sampleSize'] = int(e['grand_total'])
        elif p.test_type == "mann-whitney-u":
            record['U1'] = e['u1']
            record['U2'] = e['u2']
            record['zScore'] = e['z']
            record['sampleSize'] = e['n1'] + e['n2']

        if self._result.warnings:
            record['warnings'] = list(self._result.warnings)
        return record

    def summary(self) -> str:
        """
        Format in the style of R's print.htest.

        Produces output like:
            Welch Two Sample t-test

        data:  x and y
        t = 2.2345, df = 17.43, p-value = 0.03891
        95 percent confidence interval:
         0.1234567  4.5678901
        sample estimates:
        mean of x mean of y
         5.123456  2.789012
        """
        p = self._result.params
        lines = [f"\t{p.method}", ""]
        lines.append(f"data:  {p.data_name}")

        parts = [f"{p.statistic_name} = {p.statistic:.5g}"]
        if p.parameter is not None:
            for name, val in p.parameter.items():
                parts.append(f"{name} = {val:.5g}")
        parts.append(f"p-value = {_format_pvalue(p.p_value)}")
        lines.append(", ".join(parts))

        if p.null_value:
            nv_name, nv_val = next(iter(p.null_value.items()))
            lines.append(
                f"alternative hypothesis: true {nv_name} is not equal to {nv_val:g}"
            )

        if p.conf_int is not None:
            pct = round((1.0 - p.alpha) * 100)
            lines.append(f"{pct} percent confidence interval:")
            lo, hi = p.conf_int
            lines.append(f" {lo:.7g}  {hi:.7g}")

        if p.estimate is not None:
            lines.append("sample estimates:")
            names = list(p.estimate.keys())
            vals = list(p.estimate.values())
            lines.append(" ".join(f"{n:>14s}" for n in names))
            lines.append(" ".join(f"{v:14.7g}" for v in vals))

        for w in self._result.warnings:
            lines.append(f"warning: {w}")

        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"HTestSolution(method={p.method!r}, {p.statistic_name}={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g})"
        )


def _format_pvalue(p: float) -> str:
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"
