"""
Moment-based normality tests: Jarque-Bera and D'Agostino K^2.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np

from statinsight.descriptive import kurtosis, skewness
from statinsight.distributions import chi_square_cdf, clamp_probability
from statinsight.normality._common import IDENTICAL_VALUES, NormalityParams, TEST_NAMES

if TYPE_CHECKING:
    from statinsight.normality.design import NormalityDesign


SYMMETRIC_SAMPLE = "Third central moment is zero; skewness transform undefined"


def jarque_bera(design: NormalityDesign) -> tuple[NormalityParams, list[str]]:
    """
    JB = n/6 (G1^2 + G2^2 / 4) with the bias-corrected skewness G1 and
    excess kurtosis G2; p = 1 - chi2_cdf(JB, 2).
    """
    warnings_list: list[str] = []
    n = design.n
    alpha = design.alpha

    if design.is_constant:
        return NormalityParams.degenerate(
            "jarque_bera", alpha=alpha, n=n, reason=IDENTICAL_VALUES
        ), warnings_list

    x = design.x
    g1 = skewness(x, bias=False)
    g2 = kurtosis(x, bias=False, fisher=True)
    jb = n / 6.0 * (g1 * g1 + g2 * g2 / 4.0)
    p_value = clamp_probability(1.0 - chi_square_cdf(jb, 2))

    if n < 30:
        warnings_list.append(
            f"Jarque-Bera relies on a large-sample chi-square approximation (n={n})"
        )

    return NormalityParams(
        test_type="jarque_bera",
        method=TEST_NAMES["jarque_bera"],
        statistic=jb,
        p_value=p_value,
        alpha=alpha,
        is_normal=p_value > alpha,
        n=n,
        extras={"skewness": g1, "excess_kurtosis": g2},
    ), warnings_list


def skewness_z(b1: float, n: int) -> float:
    """D'Agostino (1970) transform of the sample skewness sqrt(b1) to N(0, 1)."""
    y = b1 * math.sqrt((n + 1.0) * (n + 3.0) / (6.0 * (n - 2.0)))
    beta2 = (
        3.0 * (n * n + 27.0 * n - 70.0) * (n + 1.0) * (n + 3.0)
        / ((n - 2.0) * (n + 5.0) * (n + 7.0) * (n + 9.0))
    )
    w2 = -1.0 + math.sqrt(2.0 * (beta2 - 1.0))
    delta = 1.0 / math.sqrt(0.5 * math.log(w2))
    alpha = math.sqrt(2.0 / (w2 - 1.0))
    return delta * math.asinh(y / alpha)


def kurtosis_z(b2: float, n: int) -> float:
    """Anscombe and Glynn (1983) transform of the sample kurtosis b2 (not excess) to N(0, 1)."""
    e = 3.0 * (n - 1.0) / (n + 1.0)
    var_b2 = 24.0 * n * (n - 2.0) * (n - 3.0) / ((n + 1.0) ** 2 * (n + 3.0) * (n + 5.0))
    x = (b2 - e) / math.sqrt(var_b2)
    sqrt_beta1 = (
        6.0 * (n * n - 5.0 * n + 2.0) / ((n + 7.0) * (n + 9.0))
        * math.sqrt(6.0 * (n + 3.0) * (n + 5.0) / (n * (n - 2.0) * (n - 3.0)))
    )
    a = 6.0 + 8.0 / sqrt_beta1 * (2.0 / sqrt_beta1 + math.sqrt(1.0 + 4.0 / sqrt_beta1 ** 2))
    term1 = 1.0 - 2.0 / (9.0 * a)
    denom = 1.0 + x * math.sqrt(2.0 / (a - 4.0))
    term2 = math.copysign(abs((1.0 - 2.0 / a) / denom) ** (1.0 / 3.0), denom)
    return (term1 - term2) / math.sqrt(2.0 / (9.0 * a))


def dagostino(design: NormalityDesign) -> tuple[NormalityParams, list[str]]:
    """
    D'Agostino-Pearson omnibus test K^2 = z_skew^2 + z_kurt^2,
    p = 1 - chi2_cdf(K^2, 2).

    Uses the moment estimators b1 = m3 / m2^1.5 and b2 = m4 / m2^2.
    A sample whose third central moment is zero gets the sentinel result.
    """
    warnings_list: list[str] = []
    n = design.n
    alpha = design.alpha

    if design.is_constant:
        return NormalityParams.degenerate(
            "dagostino", alpha=alpha, n=n, reason=IDENTICAL_VALUES
        ), warnings_list

    x = design.x
    dev = x - np.mean(x)
    m2 = float(np.mean(dev ** 2))
    m3 = float(np.mean(dev ** 3))
    if abs(m3) <= 1e-14 * m2 ** 1.5:
        return NormalityParams.degenerate(
            "dagostino", alpha=alpha, n=n, reason=SYMMETRIC_SAMPLE
        ), warnings_list

    b1 = skewness(x, bias=True)
    b2 = kurtosis(x, bias=True, fisher=False)
    z_skew = skewness_z(b1, n)
    z_kurt = kurtosis_z(b2, n)
    k2 = z_skew * z_skew + z_kurt * z_kurt
    p_value = clamp_probability(1.0 - chi_square_cdf(k2, 2))

    return NormalityParams(
        test_type="dagostino",
        method=TEST_NAMES["dagostino"],
        statistic=k2,
        p_value=p_value,
        alpha=alpha,
        is_normal=p_value > alpha,
        n=n,
        extras={
            "skewness": b1,
            "kurtosis": b2,
            "z_skewness": z_skew,
            "z_kurtosis": z_kurt,
        },
    ), warnings_list
