"""
Shapiro-Wilk W test.

Coefficients: for n <= 10 the leading coefficient a_1 comes from the
published table and the remaining ones are Blom scores rescaled so that
sum(a^2) = 1. For n > 10 all coefficients are normalized Blom scores
m_i = Phi^-1((i - 0.375) / (n + 0.25)), which makes W the Shapiro-Francia
statistic; it differs from the exact W by a few parts in a thousand.

p-value: for n <= 11, z = -(0.459 n - 2.273) ln W. For n >= 12, Royston's
normalizing transform z = (ln(1 - W) - mu) / sigma with mu and sigma
polynomials in ln n. In both cases p = 1 - Phi(z).
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from statinsight.distributions import normal_cdf, normal_inverse
from statinsight.normality._common import IDENTICAL_VALUES, NormalityParams, TEST_NAMES

if TYPE_CHECKING:
    from statinsight.normality.design import NormalityDesign


# Leading coefficient a_1 for n = 2..11
_A1_TABLE = (0.0, 0.7071, 0.7071, 0.6872, 0.6646, 0.6431, 0.6233, 0.6052, 0.5888, 0.5739, 0.5601)


def _blom_scores(n: int) -> NDArray[np.float64]:
    """Positive expected normal order statistics m_{n+1-i}, i = 1..n//2."""
    k = n // 2
    return np.array(
        [-normal_inverse((i - 0.375) / (n + 0.25)) for i in range(1, k + 1)],
        dtype=np.float64,
    )


def shapiro_wilk_coefficients(n: int) -> NDArray[np.float64]:
    """Coefficients a_1..a_{n//2} applied to x_(n+1-i) - x_(i)."""
    m = _blom_scores(n)
    if n > 10:
        return m / math.sqrt(2.0 * float(np.sum(m * m)))

    a1 = _A1_TABLE[n - 1]
    if len(m) == 1:
        return np.array([a1])
    rest = m[1:]
    scale = math.sqrt((1.0 - 2.0 * a1 * a1) / (2.0 * float(np.sum(rest * rest))))
    return np.concatenate(([a1], rest * scale))


def shapiro_wilk_p_value(w: float, n: int) -> float:
    if w >= 1.0:
        return 1.0
    if w <= 0.0:
        return 0.0

    if n <= 11:
        gamma = 0.459 * n - 2.273
        z = -gamma * math.log(w)
    else:
        u = math.log(n)
        mu = -1.5861 - 0.31082 * u - 0.083751 * u ** 2 + 0.0038915 * u ** 3
        sigma = math.exp(-0.4803 - 0.082676 * u + 0.0030302 * u ** 2)
        z = (math.log(1.0 - w) - mu) / sigma

    return 1.0 - normal_cdf(z)


def shapiro_wilk(design: NormalityDesign) -> tuple[NormalityParams, list[str]]:
    """Shapiro-Wilk test of H0: x is normally distributed."""
    warnings_list: list[str] = []
    n = design.n
    alpha = design.alpha

    if design.is_constant:
        return NormalityParams.degenerate(
            "shapiro_wilk", alpha=alpha, n=n, reason=IDENTICAL_VALUES
        ), warnings_list

    xs = design.sorted_x
    ss = float(np.sum((xs - np.mean(xs)) ** 2))

    a = shapiro_wilk_coefficients(n)
    k = len(a)
    b = float(np.sum(a * (xs[::-1][:k] - xs[:k])))
    w = min(1.0, b * b / ss)
    p_value = shapiro_wilk_p_value(w, n)

    return NormalityParams(
        test_type="shapiro_wilk",
        method=TEST_NAMES["shapiro_wilk"],
        statistic=w,
        p_value=p_value,
        alpha=alpha,
        is_normal=p_value > alpha,
        n=n,
    ), warnings_list
