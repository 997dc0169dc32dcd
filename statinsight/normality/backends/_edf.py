"""
EDF normality tests against a normal fitted with the sample mean and the
sample standard deviation: Kolmogorov-Smirnov, Lilliefors and
Anderson-Darling.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from statinsight.core.compute.tolerances import KOLMOGOROV_SERIES, LOG_FLOOR
from statinsight.distributions import clamp_probability, normal_cdf
from statinsight.normality._common import IDENTICAL_VALUES, NormalityParams, TEST_NAMES

if TYPE_CHECKING:
    from statinsight.normality.design import NormalityDesign


# Kolmogorov series is 1 to within 1e-10 below this lambda and converges slowly
_KOLMOGOROV_LAMBDA_MIN = 0.2

# Lilliefors 5% critical values of D by sample size
_LILLIEFORS_CRITICAL = {
    4: 0.381, 5: 0.337, 6: 0.319, 7: 0.300, 8: 0.285,
    9: 0.271, 10: 0.258, 11: 0.249, 12: 0.242, 13: 0.234,
    14: 0.227, 15: 0.220, 16: 0.213, 17: 0.206, 18: 0.200,
    19: 0.195, 20: 0.190, 25: 0.173, 30: 0.161, 40: 0.144,
    50: 0.131, 100: 0.096,
}
_LILLIEFORS_N = np.array(sorted(_LILLIEFORS_CRITICAL), dtype=np.float64)
_LILLIEFORS_D = np.array([_LILLIEFORS_CRITICAL[k] for k in sorted(_LILLIEFORS_CRITICAL)])


def _fitted_cdf(xs: NDArray[np.float64]) -> NDArray[np.float64]:
    """Phi((x - mean) / s) for sorted xs."""
    mean = float(np.mean(xs))
    sd = float(np.std(xs, ddof=1))
    return np.array([normal_cdf((v - mean) / sd) for v in xs], dtype=np.float64)


def ks_distance(xs: NDArray[np.float64]) -> float:
    """
    D = max_i max(|i/n - F_i|, |(i-1)/n - F_i|) over sorted xs.
    """
    n = len(xs)
    f = _fitted_cdf(xs)
    i = np.arange(1, n + 1, dtype=np.float64)
    d_plus = np.abs(i / n - f)
    d_minus = np.abs((i - 1.0) / n - f)
    return float(max(np.max(d_plus), np.max(d_minus)))


def kolmogorov_p_value(lam: float) -> float:
    """
    Asymptotic Kolmogorov tail probability
    sum_{k>=1} 2 (-1)^(k-1) exp(-2 k^2 lambda^2), clamped to [0, 1].
    """
    if lam < _KOLMOGOROV_LAMBDA_MIN:
        return 1.0
    total = 0.0
    for k in range(1, KOLMOGOROV_SERIES.max_iter + 1):
        term = 2.0 * (-1.0) ** (k - 1) * math.exp(-2.0 * k * k * lam * lam)
        total += term
        if abs(term) < KOLMOGOROV_SERIES.eps:
            break
    return clamp_probability(total)


def lilliefors_critical_value(n: int) -> float:
    """5% critical value, linearly interpolated in the table; 0.886/sqrt(n) above 100."""
    if n > 100:
        return 0.886 / math.sqrt(n)
    return float(np.interp(n, _LILLIEFORS_N, _LILLIEFORS_D))


def anderson_darling_p_value(a2_star: float) -> float:
    """D'Agostino and Stephens (1986) approximation for the case of estimated mean and variance."""
    if a2_star < 0.2:
        p = 1.0 - math.exp(-13.436 + 101.14 * a2_star - 223.73 * a2_star ** 2)
    elif a2_star < 0.34:
        p = 1.0 - math.exp(-8.318 + 42.796 * a2_star - 59.938 * a2_star ** 2)
    elif a2_star < 0.6:
        p = math.exp(0.9177 - 4.279 * a2_star - 1.38 * a2_star ** 2)
    elif a2_star < 10.0:
        p = math.exp(1.2937 - 5.709 * a2_star + 0.0186 * a2_star ** 2)
    else:
        p = 0.0
    return clamp_probability(p)


def kolmogorov_smirnov(design: NormalityDesign) -> tuple[NormalityParams, list[str]]:
    """KS distance to the fitted normal with the asymptotic Kolmogorov p-value."""
    warnings_list: list[str] = []
    n = design.n
    alpha = design.alpha

    if design.is_constant:
        return NormalityParams.degenerate(
            "kolmogorov_smirnov", alpha=alpha, n=n, reason=IDENTICAL_VALUES
        ), warnings_list

    d = ks_distance(design.sorted_x)
    lam = d * math.sqrt(n)
    p_value = kolmogorov_p_value(lam)

    return NormalityParams(
        test_type="kolmogorov_smirnov",
        method=TEST_NAMES["kolmogorov_smirnov"],
        statistic=d,
        p_value=p_value,
        alpha=alpha,
        is_normal=p_value > alpha,
        n=n,
        extras={"lambda": lam},
    ), warnings_list


def lilliefors(design: NormalityDesign) -> tuple[NormalityParams, list[str]]:
    """
    Lilliefors test: KS distance with a tabulated critical value.

    The p-value is banded: 0.01 when D exceeds the critical value, 0.20 when
    D is below 80% of it, 0.05 in between.
    """
    warnings_list: list[str] = []
    n = design.n
    alpha = design.alpha

    if design.is_constant:
        return NormalityParams.degenerate(
            "lilliefors", alpha=alpha, n=n, reason=IDENTICAL_VALUES
        ), warnings_list

    d = ks_distance(design.sorted_x)
    critical = lilliefors_critical_value(n)
    if d > critical:
        p_value = 0.01
    elif d < 0.8 * critical:
        p_value = 0.20
    else:
        p_value = 0.05

    return NormalityParams(
        test_type="lilliefors",
        method=TEST_NAMES["lilliefors"],
        statistic=d,
        p_value=p_value,
        alpha=alpha,
        is_normal=p_value > alpha,
        n=n,
        extras={"critical_value": critical},
    ), warnings_list


def anderson_darling(design: NormalityDesign) -> tuple[NormalityParams, list[str]]:
    """
    Anderson-Darling A^2 against the fitted normal.

    A^2 = -n - (1/n) sum (2i - 1) (ln F_i + ln(1 - F_{n+1-i})),
    adjusted A^2* = A^2 (1 + 0.75/n + 2.25/n^2) drives the p-value.
    """
    warnings_list: list[str] = []
    n = design.n
    alpha = design.alpha

    if design.is_constant:
        return NormalityParams.degenerate(
            "anderson_darling", alpha=alpha, n=n, reason=IDENTICAL_VALUES
        ), warnings_list

    f = _fitted_cdf(design.sorted_x)
    lower = np.log(np.clip(f, LOG_FLOOR, None))
    upper = np.log(np.clip(1.0 - f[::-1], LOG_FLOOR, None))
    i = np.arange(1, n + 1, dtype=np.float64)
    a2 = float(-n - np.sum((2.0 * i - 1.0) * (lower + upper)) / n)
    a2_star = a2 * (1.0 + 0.75 / n + 2.25 / (n * n))
    p_value = anderson_darling_p_value(a2_star)

    return NormalityParams(
        test_type="anderson_darling",
        method=TEST_NAMES["anderson_darling"],
        statistic=a2,
        p_value=p_value,
        alpha=alpha,
        is_normal=p_value > alpha,
        n=n,
        extras={"adjusted_statistic": a2_star},
    ), warnings_list
