"""
Position measures: quantiles, percentiles, ranks and standardized values.

Quantiles use linear interpolation between order statistics at position
(n - 1) q (Hyndman & Fan type 7, R's default). quantile(x, 0) is the
minimum and quantile(x, 1) the maximum.
"""

from __future__ import annotations

from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats as sp_stats

from statinsight.core.exceptions import DomainError, ValidationError
from statinsight.core.validation import finite_values
from statinsight.descriptive._common import BoxplotStats, FiveNumberSummary

IQR_FENCE = 1.5

RankMethod = Literal['average', 'min', 'max', 'first']


def sorted_quantile(xs: NDArray[np.float64], q: float | NDArray[np.float64]) -> Any:
    """
    Linear-interpolation quantile of an already sorted, non-empty array.

    Parameters
    ----------
    xs : NDArray
        Sorted 1D array.
    q : float or NDArray
        Probabilities in [0, 1].
    """
    q_arr = np.asarray(q, dtype=np.float64)
    pos = (len(xs) - 1) * q_arr
    lo = np.floor(pos).astype(np.intp)
    hi = np.ceil(pos).astype(np.intp)
    weight = pos - lo
    value = xs[lo] * (1.0 - weight) + xs[hi] * weight
    # exact order statistic when the position is integral
    value = np.where(lo == hi, xs[lo], value)
    if value.ndim == 0:
        return float(value)
    return value


def _check_probs(q: Any) -> NDArray[np.float64]:
    q_arr = np.asarray(q, dtype=np.float64)
    if np.any(~np.isfinite(q_arr)) or np.any(q_arr < 0.0) or np.any(q_arr > 1.0):
        raise DomainError(f"q: probabilities must be in [0, 1], got {q}", name="q")
    return q_arr


def quantile(x: ArrayLike, q: float | ArrayLike) -> Any:
    """
    Sample quantile(s) of x.

    Parameters
    ----------
    x : array-like
        Values; non-finite and non-numeric cells are ignored.
    q : float or array-like
        Probability (or probabilities) in [0, 1].

    Returns
    -------
    float, or ndarray when q is array-like.
    """
    q_arr = _check_probs(q)
    xs = np.sort(finite_values(x, "x"))
    return sorted_quantile(xs, q_arr)


def percentile(x: ArrayLike, p: float | ArrayLike) -> Any:
    """Percentile(s) of x, p in [0, 100]."""
    p_arr = np.asarray(p, dtype=np.float64)
    if np.any(p_arr < 0.0) or np.any(p_arr > 100.0):
        raise DomainError(f"p: percentiles must be in [0, 100], got {p}", name="p")
    return quantile(x, p_arr / 100.0)


def quartiles(x: ArrayLike) -> tuple[float, float, float]:
    """(Q1, median, Q3)."""
    q1, q2, q3 = quantile(x, [0.25, 0.5, 0.75])
    return float(q1), float(q2), float(q3)


def quintiles(x: ArrayLike) -> tuple[float, ...]:
    """The 20th, 40th, 60th and 80th percentiles."""
    return tuple(float(v) for v in quantile(x, [0.2, 0.4, 0.6, 0.8]))


def deciles(x: ArrayLike) -> tuple[float, ...]:
    """The 10th through 90th percentiles."""
    return tuple(float(v) for v in quantile(x, np.arange(1, 10) / 10.0))


def percentile_rank(x: ArrayLike, value: float) -> float:
    """
    Percentage of observations below ``value``, counting ties as half.
    """
    xs = finite_values(x, "x")
    below = np.sum(xs < value)
    equal = np.sum(xs == value)
    return float((below + 0.5 * equal) / len(xs) * 100.0)


def z_scores(x: ArrayLike) -> NDArray[np.float64]:
    """
    Standardized values (x - mean) / s with the sample standard deviation.

    A constant sample standardizes to zeros.
    """
    xs = finite_values(x, "x")
    if len(xs) < 2:
        return np.zeros_like(xs)
    sd = np.std(xs, ddof=1)
    if sd == 0.0:
        return np.zeros_like(xs)
    return (xs - np.mean(xs)) / sd


def five_number_summary(x: ArrayLike) -> FiveNumberSummary:
    xs = np.sort(finite_values(x, "x"))
    q1, med, q3 = sorted_quantile(xs, np.array([0.25, 0.5, 0.75]))
    return FiveNumberSummary(
        minimum=float(xs[0]),
        q1=float(q1),
        median=float(med),
        q3=float(q3),
        maximum=float(xs[-1]),
    )


def boxplot_stats(x: ArrayLike) -> BoxplotStats:
    """Box plot geometry with Tukey fences at 1.5 IQR."""
    xs = np.sort(finite_values(x, "x"))
    q1, med, q3 = (float(v) for v in sorted_quantile(xs, np.array([0.25, 0.5, 0.75])))
    iqr = q3 - q1
    lower_fence = q1 - IQR_FENCE * iqr
    upper_fence = q3 + IQR_FENCE * iqr
    inside = xs[(xs >= lower_fence) & (xs <= upper_fence)]
    outside = xs[(xs < lower_fence) | (xs > upper_fence)]
    return BoxplotStats(
        q1=q1,
        median=med,
        q3=q3,
        iqr=iqr,
        lower_fence=lower_fence,
        upper_fence=upper_fence,
        lower_whisker=float(inside[0]) if inside.size else q1,
        upper_whisker=float(inside[-1]) if inside.size else q3,
        outliers=tuple(float(v) for v in outside),
    )


def rank(x: ArrayLike, method: RankMethod = 'average') -> NDArray[np.float64]:
    """
    Ranks of x (1 = smallest).

    Parameters
    ----------
    method : str
        Tie handling: 'average' (mean of the tied positions), 'min',
        'max', or 'first' (order of appearance).
    """
    if method not in ('average', 'min', 'max', 'first'):
        raise ValidationError(
            f"method must be one of 'average', 'min', 'max', 'first', got {method!r}"
        )
    xs = finite_values(x, "x")
    scipy_method = 'ordinal' if method == 'first' else method
    return sp_stats.rankdata(xs, method=scipy_method).astype(np.float64)


def normalized_rank(x: ArrayLike) -> NDArray[np.float64]:
    """Average ranks rescaled to [0, 1]: (rank - 1) / (n - 1)."""
    ranks = rank(x)
    n = len(ranks)
    if n == 1:
        return np.zeros(1)
    return (ranks - 1.0) / (n - 1.0)
