"""
Measures of dispersion.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from statinsight.core.exceptions import DomainError, InsufficientDataError
from statinsight.core.validation import check_min_samples, finite_values
from statinsight.descriptive._position import sorted_quantile


def variance(x: ArrayLike, *, population: bool = False) -> float:
    """
    Variance: sum((x - mean)^2) / (n - 1), or / n when population=True.

    Raises:
        InsufficientDataError: If population=False and fewer than 2 values
    """
    xs = finite_values(x, "x")
    if not population:
        check_min_samples(xs, 2, "x")
    ddof = 0 if population else 1
    return float(np.var(xs, ddof=ddof))


def std(x: ArrayLike, *, population: bool = False) -> float:
    """Standard deviation, sqrt(variance)."""
    return float(np.sqrt(variance(x, population=population)))


def value_range(x: ArrayLike) -> float:
    """max - min."""
    xs = finite_values(x, "x")
    return float(np.max(xs) - np.min(xs))


def iqr(x: ArrayLike) -> float:
    """Interquartile range Q3 - Q1."""
    xs = np.sort(finite_values(x, "x"))
    q1, q3 = sorted_quantile(xs, np.array([0.25, 0.75]))
    return float(q3 - q1)


def coefficient_of_variation(x: ArrayLike, *, percent: bool = False) -> float:
    """
    s / |mean|, optionally as a percentage.

    Raises:
        DomainError: If the mean is 0
    """
    xs = finite_values(x, "x")
    m = float(np.mean(xs))
    if m == 0.0:
        raise DomainError(
            "coefficient_of_variation: undefined when the mean is zero",
            name="x",
            value=0.0,
        )
    cv = std(xs) / abs(m)
    return cv * 100.0 if percent else cv


def mean_absolute_deviation(x: ArrayLike) -> float:
    """mean(|x - mean(x)|)."""
    xs = finite_values(x, "x")
    return float(np.mean(np.abs(xs - np.mean(xs))))


def median_absolute_deviation(x: ArrayLike) -> float:
    """median(|x - median(x)|), unscaled."""
    xs = np.sort(finite_values(x, "x"))
    med = sorted_quantile(xs, 0.5)
    return sorted_quantile(np.sort(np.abs(xs - med)), 0.5)


def standard_error(x: ArrayLike) -> float:
    """Standard error of the mean, s / sqrt(n)."""
    xs = finite_values(x, "x")
    return std(xs) / float(np.sqrt(len(xs)))


def quartile_coefficient(x: ArrayLike) -> float:
    """
    Quartile coefficient of dispersion (Q3 - Q1) / (Q3 + Q1).

    Raises:
        DomainError: If Q1 + Q3 = 0
    """
    xs = np.sort(finite_values(x, "x"))
    q1, q3 = (float(v) for v in sorted_quantile(xs, np.array([0.25, 0.75])))
    if q1 + q3 == 0.0:
        raise DomainError("quartile_coefficient: undefined when Q1 + Q3 = 0", name="x")
    return (q3 - q1) / (q3 + q1)


def percentile_range(x: ArrayLike, lower: float = 10.0, upper: float = 90.0) -> float:
    """
    Distance between two percentiles.

    Raises:
        DomainError: If the percentiles are out of [0, 100] or not ordered
    """
    if lower >= upper:
        raise DomainError(
            f"percentile_range: lower ({lower}) must be less than upper ({upper})"
        )
    if lower < 0.0 or upper > 100.0:
        raise DomainError(
            f"percentile_range: percentiles must be in [0, 100], got {lower}, {upper}"
        )
    xs = np.sort(finite_values(x, "x"))
    lo, hi = sorted_quantile(xs, np.array([lower, upper]) / 100.0)
    return float(hi - lo)


def gini(x: ArrayLike) -> float:
    """
    Gini coefficient sum_ij |x_i - x_j| / (2 n^2 mean); 0 when the mean is 0.

    Only non-negative values take part; negative ones are dropped like
    non-finite cells. Uses the sorted-order identity
    sum_ij |x_i - x_j| = 2 sum_i (2i - n - 1) x_(i).

    Raises:
        InsufficientDataError: If no non-negative value remains
    """
    xs = finite_values(x, "x")
    xs = np.sort(xs[xs >= 0.0])
    n = len(xs)
    if n == 0:
        raise InsufficientDataError(
            "gini: requires at least one non-negative value", required=1, actual=0
        )
    m = float(np.mean(xs))
    if m == 0.0:
        return 0.0
    i = np.arange(1, n + 1, dtype=np.float64)
    abs_diff_sum = 2.0 * np.sum((2.0 * i - n - 1.0) * xs)
    return float(abs_diff_sum / (2.0 * n * n * m))


def robust_scale(x: ArrayLike) -> NDArray[np.float64]:
    """
    (x - median) / IQR for each finite value; all zeros when IQR is 0.
    """
    xs = finite_values(x, "x")
    s = np.sort(xs)
    q1, med, q3 = sorted_quantile(s, np.array([0.25, 0.5, 0.75]))
    spread = q3 - q1
    if spread == 0.0:
        return np.zeros_like(xs)
    return (xs - med) / spread
