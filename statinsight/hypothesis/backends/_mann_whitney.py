"""
Mann-Whitney U test with the normal approximation.

Ties get average ranks; the variance of U is not corrected for ties.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np
from scipy import stats as sp_stats

from statinsight.distributions import clamp_probability, normal_cdf
from statinsight.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from statinsight.hypothesis.design import HypothesisDesign


def mann_whitney(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """U1 = R1 - n1 (n1 + 1) / 2, U2 = n1 n2 - U1, U = min(U1, U2)."""
    x = design.x
    y = design.y
    warnings_list: list[str] = []

    n1, n2 = len(x), len(y)
    ranks = sp_stats.rankdata(np.concatenate([x, y]), method='average')
    r1 = float(np.sum(ranks[:n1]))
    r2 = float(np.sum(ranks[n1:]))

    u1 = r1 - n1 * (n1 + 1) / 2.0
    u2 = n1 * n2 - u1
    u = min(u1, u2)

    mean_u = n1 * n2 / 2.0
    sd_u = math.sqrt(n1 * n2 * (n1 + n2 + 1) / 12.0)
    z = (u - mean_u) / sd_u
    p_value = clamp_probability(2.0 * (1.0 - normal_cdf(abs(z))))

    if n1 < 8 or n2 < 8:
        warnings_list.append(
            f"normal approximation is rough for small samples (n1={n1}, n2={n2})"
        )
    if len(np.unique(ranks)) < n1 + n2:
        warnings_list.append("ties present; no tie correction applied to the variance of U")

    return HTestParams(
        test_type="mann-whitney-u",
        statistic=u,
        statistic_name="U",
        parameter=None,
        p_value=p_value,
        alpha=design.alpha,
        method="Mann-Whitney U test (normal approximation)",
        data_name=design.data_name,
        extras={
            "u1": u1,
            "u2": u2,
            "z": z,
            "n1": n1,
            "n2": n2,
            "rank_sum1": r1,
            "rank_sum2": r2,
        },
    ), warnings_list
