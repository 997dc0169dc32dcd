"""
Pearson, Spearman and Kendall tau-b coefficients with their tests.

A zero denominator (a constant column) gives correlation 0 and p = 1.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import stats as sp_stats

from statinsight.correlation._common import CorrelationParams
from statinsight.distributions import clamp_probability, normal_cdf, normal_inverse, t_cdf

if TYPE_CHECKING:
    from statinsight.correlation.design import CorrelationDesign


def _r(x: NDArray, y: NDArray) -> float | None:
    """Pearson r, or None when either column is constant."""
    xc = x - x.mean()
    yc = y - y.mean()
    denom = math.sqrt(float(np.sum(xc ** 2)) * float(np.sum(yc ** 2)))
    if denom == 0.0:
        return None
    # rounding can push |r| a hair past 1
    return max(-1.0, min(1.0, float(np.sum(xc * yc)) / denom))


def _t_test(r: float, n: int) -> tuple[float, float, float]:
    """t statistic, df and two-sided p for H0: rho = 0."""
    df = float(n - 2)
    if abs(r) >= 1.0:
        return math.copysign(math.inf, r), df, 0.0
    t = r * math.sqrt(df / (1.0 - r * r))
    return t, df, clamp_probability(2.0 * (1.0 - t_cdf(abs(t), df)))


def fisher_interval(r: float, n: int, alpha: float) -> tuple[float, float] | None:
    """Fisher z-transform interval for Pearson r; None when n < 4."""
    if n < 4:
        return None
    if abs(r) >= 1.0:
        return (r, r)
    z = math.atanh(r)
    margin = normal_inverse(1.0 - alpha / 2.0) / math.sqrt(n - 3)
    return (math.tanh(z - margin), math.tanh(z + margin))


def pearson(design: CorrelationDesign) -> tuple[CorrelationParams, list[str]]:
    x, y, n, alpha = design.x, design.y, design.n, design.alpha
    warnings_list: list[str] = []
    r = _r(x, y)
    if r is None:
        warnings_list.append("a column is constant; correlation set to 0")
        return CorrelationParams(
            method="pearson", correlation=0.0, statistic=0.0, statistic_name="t",
            df=float(n - 2), p_value=1.0, alpha=alpha, n=n, conf_int=(0.0, 0.0),
        ), warnings_list

    t, df, p = _t_test(r, n)
    return CorrelationParams(
        method="pearson", correlation=r, statistic=t, statistic_name="t",
        df=df, p_value=p, alpha=alpha, n=n, conf_int=fisher_interval(r, n, alpha),
    ), warnings_list


def spearman(design: CorrelationDesign) -> tuple[CorrelationParams, list[str]]:
    n, alpha = design.n, design.alpha
    warnings_list: list[str] = []
    rx = sp_stats.rankdata(design.x, method='average')
    ry = sp_stats.rankdata(design.y, method='average')
    extras = {"x_ranks": rx, "y_ranks": ry}

    rho = _r(rx, ry)
    if rho is None:
        warnings_list.append("a column is constant; correlation set to 0")
        return CorrelationParams(
            method="spearman", correlation=0.0, statistic=0.0, statistic_name="t",
            df=float(n - 2), p_value=1.0, alpha=alpha, n=n, extras=extras,
        ), warnings_list

    t, df, p = _t_test(rho, n)
    return CorrelationParams(
        method="spearman", correlation=rho, statistic=t, statistic_name="t",
        df=df, p_value=p, alpha=alpha, n=n, extras=extras,
    ), warnings_list


def kendall(design: CorrelationDesign) -> tuple[CorrelationParams, list[str]]:
    """
    tau-b = (C - D) / sqrt((P - T_x) (P - T_y)) with P = n (n - 1) / 2 and
    T_x, T_y the pairs tied in x and in y. The z test uses the no-ties
    variance 2 (2n + 5) / (9 n (n - 1)).
    """
    x, y, n, alpha = design.x, design.y, design.n, design.alpha
    warnings_list: list[str] = []

    iu = np.triu_indices(n, k=1)
    sx = np.sign(x[:, None] - x[None, :])[iu]
    sy = np.sign(y[:, None] - y[None, :])[iu]
    prod = sx * sy
    concordant = int(np.sum(prod > 0))
    discordant = int(np.sum(prod < 0))
    ties_x = int(np.sum((sx == 0) & (sy != 0)))
    ties_y = int(np.sum((sy == 0) & (sx != 0)))
    ties_xy = int(np.sum((sx == 0) & (sy == 0)))
    extras = {
        "concordant_pairs": concordant,
        "discordant_pairs": discordant,
        "ties_x": ties_x,
        "ties_y": ties_y,
        "ties_xy": ties_xy,
    }

    total = n * (n - 1) / 2.0
    denom = math.sqrt((total - ties_x - ties_xy) * (total - ties_y - ties_xy))
    if denom == 0.0:
        warnings_list.append("a column is constant; correlation set to 0")
        return CorrelationParams(
            method="kendall", correlation=0.0, statistic=0.0, statistic_name="z",
            df=None, p_value=1.0, alpha=alpha, n=n, extras=extras,
        ), warnings_list

    tau = (concordant - discordant) / denom
    z = tau / math.sqrt(2.0 * (2 * n + 5) / (9.0 * n * (n - 1)))
    p = clamp_probability(2.0 * (1.0 - normal_cdf(abs(z))))
    if ties_x or ties_y or ties_xy:
        warnings_list.append("ties present; the z test uses the no-ties variance")
    return CorrelationParams(
        method="kendall", correlation=tau, statistic=z, statistic_name="z",
        df=None, p_value=p, alpha=alpha, n=n, extras=extras,
    ), warnings_list
