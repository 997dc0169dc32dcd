"""
One-way analysis of variance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np

from statinsight.core.exceptions import ZeroStdError
from statinsight.distributions import clamp_probability, f_cdf
from statinsight.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from statinsight.hypothesis.design import HypothesisDesign


def anova_oneway(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """
    F = MS_between / MS_within with df (k - 1, N - k).

    Raises:
        ZeroStdError: If every group is constant (MS_within = 0)
    """
    groups = design.groups
    alpha = design.alpha
    warnings_list: list[str] = []

    k = len(groups)
    sizes = np.array([len(g) for g in groups], dtype=np.float64)
    means = np.array([float(np.mean(g)) for g in groups])
    total_n = int(sizes.sum())
    grand_mean = float(np.mean(np.concatenate(groups)))

    ss_between = float(np.sum(sizes * (means - grand_mean) ** 2))
    ss_within = float(sum(np.sum((g - m) ** 2) for g, m in zip(groups, means)))
    ss_total = ss_between + ss_within

    df_between = float(k - 1)
    df_within = float(total_n - k)
    ms_between = ss_between / df_between
    ms_within = ss_within / df_within

    if ms_within == 0.0:
        raise ZeroStdError(
            "Cannot perform ANOVA when within-group variance is zero",
            quantity="within-group mean square",
        )

    f_stat = ms_between / ms_within
    p_value = clamp_probability(1.0 - f_cdf(f_stat, df_between, df_within))
    eta_squared = ss_between / ss_total if ss_total > 0 else 0.0

    variances = [float(np.var(g, ddof=1)) for g in groups]
    positive = [v for v in variances if v > 0]
    if positive and max(positive) / min(positive) > 4.0:
        warnings_list.append(
            "largest group variance is more than 4 times the smallest; "
            "equal-variance assumption is doubtful"
        )

    return HTestParams(
        test_type="one-way-anova",
        statistic=f_stat,
        statistic_name="F",
        parameter={"df between": df_between, "df within": df_within},
        p_value=p_value,
        alpha=alpha,
        estimate={f"mean of group {i + 1}": float(m) for i, m in enumerate(means)},
        method="One-way analysis of means",
        data_name=design.data_name,
        extras={
            "ss_between": ss_between,
            "ss_within": ss_within,
            "ss_total": ss_total,
            "ms_between": ms_between,
            "ms_within": ms_within,
            "group_means": tuple(float(m) for m in means),
            "group_sizes": tuple(int(s) for s in sizes),
            "grand_mean": grand_mean,
            "eta_squared": eta_squared,
        },
    ), warnings_list
