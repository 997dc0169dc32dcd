"""
Descriptive statistics solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from statinsight.core.result import Result

if TYPE_CHECKING:
    from statinsight.descriptive.design import DescriptiveDesign


@dataclass(frozen=True)
class DescriptiveParams:
    """
    Parameter payload for describe().

    skewness is None when n < 3 and kurtosis is None when n < 4. Both are
    the moment (biased) estimators; kurtosis is excess kurtosis.
    """
    count: int
    mean: float
    median: float
    sd: float
    variance: float
    minimum: float
    maximum: float
    q1: float
    q3: float
    skewness: float | None = None
    kurtosis: float | None = None


@dataclass
class DescriptiveSolution:
    """
    User-facing descriptive statistics of one column.

    Wraps Result[DescriptiveParams] and provides convenient accessors.
    """
    _result: Result[DescriptiveParams]
    _design: 'DescriptiveDesign'

    @property
    def count(self) -> int:
        return self._result.params.count

    @property
    def mean(self) -> float:
        return self._result.params.mean

    @property
    def median(self) -> float:
        return self._result.params.median

    @property
    def sd(self) -> float:
        """Sample standard deviation (n - 1 denominator); NaN when n < 2."""
        return self._result.params.sd

    @property
    def variance(self) -> float:
        return self._result.params.variance

    @property
    def minimum(self) -> float:
        return self._result.params.minimum

    @property
    def maximum(self) -> float:
        return self._result.params.maximum

    @property
    def quartiles(self) -> tuple[float, float, float]:
        """(Q1, median, Q3)."""
        p = self._result.params
        return (p.q1, p.median, p.q3)

    @property
    def skewness(self) -> float | None:
        return self._result.params.skewness

    @property
    def kurtosis(self) -> float | None:
        return self._result.params.kurtosis

    # --- Metadata ---

    @property
    def name(self) -> str | None:
        return self._design.name

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

    def to_dict(self) -> dict[str, Any]:
        """Plain record, as stored by the auto-analyzer."""
        p = self._result.params
        return {
            'count': p.count,
            'mean': p.mean,
            'median': p.median,
            'std': p.sd,
            'min': p.minimum,
            'max': p.maximum,
            'q1': p.q1,
            'q3': p.q3,
            'skewness': p.skewness,
            'kurtosis': p.kurtosis,
        }

    def summary(self) -> str:
        """Summary table, one statistic per line."""
        p = self._result.params
        rows = [
            ("Count", f"{p.count}"),
            ("Mean", f"{p.mean:.6f}"),
            ("Std. Dev.", f"{p.sd:.6f}"),
            ("Min.", f"{p.minimum:.6f}"),
            ("1st Qu.", f"{p.q1:.6f}"),
            ("Median", f"{p.median:.6f}"),
            ("3rd Qu.", f"{p.q3:.6f}"),
            ("Max.", f"{p.maximum:.6f}"),
        ]
        if p.skewness is not None:
            rows.append(("Skewness", f"{p.skewness:.6f}"))
        if p.kurtosis is not None:
            rows.append(("Kurtosis", f"{p.kurtosis:.6f}"))

        label_width = max(len(label) for label, _ in rows)
        value_width = max(len(value) for _, value in rows)
        lines = []
        if self.name:
            lines.append(self.name)
        for label, value in rows:
            lines.append(label.ljust(label_width) + "  " + value.rjust(value_width))
        return "\n".join(lines)

    def __repr__(self) -> str:
        name = f"name={self.name!r}, " if self.name else ""
        return (
            f"DescriptiveSolution({name}n={self.count}, "
            f"mean={self.mean:.4g}, sd={self.sd:.4g})"
        )
