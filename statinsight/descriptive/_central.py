"""
Measures of central tendency.

Every function drops non-numeric and non-finite cells first and raises
InsufficientDataError when nothing is left.
"""

from __future__ import annotations

import math
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike

from statinsight.core.exceptions import DomainError, InsufficientDataError
from statinsight.core.validation import check_consistent_length, finite_values, is_numeric
from statinsight.descriptive._common import ModeResult
from statinsight.descriptive._position import sorted_quantile


def mean(x: ArrayLike) -> float:
    """Arithmetic mean."""
    return float(np.mean(finite_values(x, "x")))


def median(x: ArrayLike) -> float:
    """Median (quantile at 0.5; average of the middle pair for even n)."""
    return sorted_quantile(np.sort(finite_values(x, "x")), 0.5)


def mode(values: Iterable[Any]) -> ModeResult:
    """
    Most frequent value(s). Works on any hashable cells, not only numbers.

    Missing cells (None) are counted like any other value.
    """
    counts: dict[Any, int] = {}
    total = 0
    for v in values:
        counts[v] = counts.get(v, 0) + 1
        total += 1
    if total == 0:
        raise InsufficientDataError("mode: column is empty", required=1, actual=0)
    top = max(counts.values())
    modes = tuple(v for v, c in counts.items() if c == top)
    return ModeResult(
        values=modes,
        frequency=top,
        is_multimodal=len(modes) > 1,
        is_uniform=top == 1 and len(counts) == total,
    )


def geometric_mean(x: ArrayLike) -> float:
    """
    Geometric mean of a strictly positive sample.

    Raises:
        DomainError: If any value is <= 0
    """
    xs = finite_values(x, "x")
    if np.any(xs <= 0):
        raise DomainError(
            "geometric_mean: all values must be strictly positive "
            f"(found {int(np.sum(xs <= 0))} non-positive)",
            name="x",
        )
    return float(np.exp(np.mean(np.log(xs))))


def harmonic_mean(x: ArrayLike) -> float:
    """
    Harmonic mean of a strictly positive sample.

    Raises:
        DomainError: If any value is <= 0
    """
    xs = finite_values(x, "x")
    if np.any(xs <= 0):
        raise DomainError(
            "harmonic_mean: all values must be strictly positive "
            f"(found {int(np.sum(xs <= 0))} non-positive)",
            name="x",
        )
    return float(len(xs) / np.sum(1.0 / xs))


def trimmed_mean(x: ArrayLike, percent: float = 10.0) -> float:
    """
    Mean after dropping floor(percent * n / 100) values from each tail.

    Raises:
        DomainError: If percent is outside [0, 50)
        InsufficientDataError: If trimming removes every value
    """
    if not (0.0 <= percent < 50.0):
        raise DomainError(
            f"trimmed_mean: percent must be in [0, 50), got {percent}",
            name="percent",
            value=percent,
        )
    xs = np.sort(finite_values(x, "x"))
    n = len(xs)
    k = int(math.floor(percent * n / 100.0))
    kept = xs[k:n - k]
    if kept.size == 0:
        raise InsufficientDataError(
            f"trimmed_mean: trimming {k} from each tail of {n} values leaves nothing",
            required=2 * k + 1,
            actual=n,
        )
    return float(np.mean(kept))


def weighted_mean(x: Iterable[Any], weights: Iterable[Any]) -> float:
    """
    Weighted mean sum(w x) / sum(w).

    Pairs with a non-finite value, or a negative or non-finite weight, are
    ignored.

    Raises:
        DimensionError: If x and weights differ in length
        DomainError: If the remaining weights sum to 0
    """
    values = list(x)
    ws = list(weights)
    check_consistent_length(values, ws, names=("x", "weights"))

    num = 0.0
    den = 0.0
    for v, w in zip(values, ws):
        if is_numeric(v) and is_numeric(w) and w >= 0:
            num += float(v) * float(w)
            den += float(w)
    if den == 0.0:
        raise DomainError("weighted_mean: total weight is zero", name="weights", value=0.0)
    return num / den


def quadratic_mean(x: ArrayLike) -> float:
    """Root mean square."""
    xs = finite_values(x, "x")
    return float(np.sqrt(np.mean(xs * xs)))


def midrange(x: ArrayLike) -> float:
    """(min + max) / 2."""
    xs = finite_values(x, "x")
    return float((np.min(xs) + np.max(xs)) / 2.0)
