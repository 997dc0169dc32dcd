"""
Shape measures: skewness and kurtosis.

bias=True gives the moment estimators g1 = m3 / m2^(3/2) and
g2 = m4 / m2^2 (population central moments, same as scipy.stats with
bias=True). bias=False gives the adjusted Fisher-Pearson estimators
computed from the sample standard deviation s:

    G1 = n / ((n-1)(n-2)) * sum(((x - mean)/s)^3)
    G2 = n(n+1) / ((n-1)(n-2)(n-3)) * sum(((x - mean)/s)^4)
         - 3 (n-1)^2 / ((n-2)(n-3))

G2 is already an excess kurtosis, so fisher=False adds 3 back rather than
fisher=True subtracting 3 again.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from statinsight.core.validation import check_min_samples, finite_values


def skewness(x: ArrayLike, bias: bool = True) -> float:
    """
    Sample skewness. Requires n >= 3; a constant sample has skewness 0.

    bias=True gives the moment estimator g1 = m3 / m2^1.5 with population
    central moments m_k (scipy's default). bias=False gives the adjusted
    G1 = n / ((n-1)(n-2)) * sum(((x - mean) / s)^3) with s the sample std.
    """
    xs = finite_values(x, "x")
    check_min_samples(xs, 3, "x")
    n = len(xs)
    dev = xs - np.mean(xs)

    if bias:
        m2 = np.mean(dev ** 2)
        if m2 == 0.0:
            return 0.0
        return float(np.mean(dev ** 3) / m2 ** 1.5)

    s = np.std(xs, ddof=1)
    if s == 0.0:
        return 0.0
    return float(n / ((n - 1) * (n - 2)) * np.sum((dev / s) ** 3))


def kurtosis(x: ArrayLike, bias: bool = True, fisher: bool = True) -> float:
    """
    Sample kurtosis; excess (normal = 0) when fisher=True.

    Requires n >= 4. A constant sample has kurtosis -3 (fisher) or 0.

    bias=True gives the moment estimator g2 = m4 / m2^2 with population
    central moments m_k. bias=False gives the adjusted
    G2 = n(n+1) / ((n-1)(n-2)(n-3)) * sum(((x - mean) / s)^4)
    - 3(n-1)^2 / ((n-2)(n-3)) with s the sample std.
    """
    xs = finite_values(x, "x")
    check_min_samples(xs, 4, "x")
    n = len(xs)
    dev = xs - np.mean(xs)

    if bias:
        m2 = np.mean(dev ** 2)
        if m2 == 0.0:
            return -3.0 if fisher else 0.0
        g2 = float(np.mean(dev ** 4) / m2 ** 2)
        return g2 - 3.0 if fisher else g2

    s = np.std(xs, ddof=1)
    if s == 0.0:
        return -3.0 if fisher else 0.0
    excess = (
        n * (n + 1) / ((n - 1) * (n - 2) * (n - 3)) * np.sum((dev / s) ** 4)
        - 3.0 * (n - 1) ** 2 / ((n - 2) * (n - 3))
    )
    return float(excess) if fisher else float(excess) + 3.0


def pearson_skewness(x: ArrayLike) -> float:
    """Pearson's second skewness coefficient 3 (mean - median) / s."""
    xs = finite_values(x, "x")
    check_min_samples(xs, 2, "x")
    s = np.std(xs, ddof=1)
    if s == 0.0:
        return 0.0
    return float(3.0 * (np.mean(xs) - np.median(xs)) / s)
