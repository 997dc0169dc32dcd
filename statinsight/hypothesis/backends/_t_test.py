"""
t-test and z-test implementations.

Supports one-sample, two-sample (Welch and pooled) and paired t-tests and
the one-sample z-test with known population standard deviation. All tests
are two-sided.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
import numpy as np

from statinsight.core.exceptions import ZeroStdError
from statinsight.distributions import (
    clamp_probability,
    normal_cdf,
    normal_inverse,
    t_cdf,
    t_inverse,
)
from statinsight.hypothesis._common import HTestParams

if TYPE_CHECKING:
    from statinsight.hypothesis.design import HypothesisDesign


def t_one_sample(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """One-sample t-test: H0: mean(x) = mu."""
    x = design.x
    mu = design.mu
    params, warnings_list = _t_single(x, mu, design.alpha)
    return HTestParams(
        test_type="one-sample",
        statistic=params["t"],
        statistic_name="t",
        parameter={"df": params["df"]},
        p_value=params["p"],
        alpha=design.alpha,
        critical_value=params["critical"],
        standard_error=params["se"],
        conf_int=params["ci"],
        estimate={"mean of x": params["mean"]},
        null_value={"mean": mu},
        method="One Sample t-test",
        data_name=design.data_name,
        extras={"sample_size": len(x)},
    ), warnings_list


def t_paired(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """Paired t-test: H0: mean(x - y) = mu.

    Note: design.x already contains the paired differences (invalid pairs removed).
    """
    d = design.x
    mu = design.mu
    params, warnings_list = _t_single(d, mu, design.alpha)
    return HTestParams(
        test_type="paired",
        statistic=params["t"],
        statistic_name="t",
        parameter={"df": params["df"]},
        p_value=params["p"],
        alpha=design.alpha,
        critical_value=params["critical"],
        standard_error=params["se"],
        conf_int=params["ci"],
        estimate={"mean difference": params["mean"]},
        null_value={"mean difference": mu},
        method="Paired t-test",
        data_name=design.data_name,
        extras={"sample_size": len(d)},
    ), warnings_list


def t_two_sample(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """Two-sample t-test: Welch (default) or pooled."""
    x = design.x
    y = design.y
    mu = design.mu
    alpha = design.alpha
    warnings_list: list[str] = []

    n1, n2 = len(x), len(y)
    mean1, mean2 = float(np.mean(x)), float(np.mean(y))
    var1, var2 = float(np.var(x, ddof=1)), float(np.var(y, ddof=1))
    diff = mean1 - mean2

    if design.var_equal:
        # Pooled (Student's) t-test
        df = float(n1 + n2 - 2)
        sp2 = ((n1 - 1) * var1 + (n2 - 1) * var2) / df
        se = math.sqrt(sp2 * (1.0 / n1 + 1.0 / n2))
        method = "Two Sample t-test"
    else:
        v1 = var1 / n1
        v2 = var2 / n2
        se = math.sqrt(v1 + v2)
        # Welch-Satterthwaite degrees of freedom (fractional, not rounded)
        df = (v1 + v2) ** 2 / (v1 ** 2 / (n1 - 1) + v2 ** 2 / (n2 - 1)) if se > 0 else 0.0
        method = "Welch Two Sample t-test"

    if se == 0.0:
        raise ZeroStdError(
            "Cannot perform t-test when standard error is zero "
            "(both samples are constant)",
            quantity="standard error",
        )

    t_stat = (diff - mu) / se
    p_value = _t_pvalue(t_stat, df)
    critical = t_inverse(1.0 - alpha / 2.0, df)

    if min(n1, n2) < 5:
        warnings_list.append(f"very small samples (n1={n1}, n2={n2})")

    return HTestParams(
        test_type="two-sample",
        statistic=t_stat,
        statistic_name="t",
        parameter={"df": df},
        p_value=p_value,
        alpha=alpha,
        critical_value=critical,
        standard_error=se,
        conf_int=np.array([diff - critical * se, diff + critical * se]),
        estimate={"mean of x": mean1, "mean of y": mean2},
        null_value={"difference in means": mu},
        method=method,
        data_name=design.data_name,
        extras={
            "mean_difference": diff,
            "equal_variances": design.var_equal,
            "sample_sizes": (n1, n2),
        },
    ), warnings_list


def z_test(design: HypothesisDesign) -> tuple[HTestParams, list[str]]:
    """One-sample z-test with known population standard deviation."""
    x = design.x
    mu = design.mu
    sigma = design.population_std
    alpha = design.alpha
    warnings_list: list[str] = []

    n = len(x)
    mean = float(np.mean(x))
    se = sigma / math.sqrt(n)
    z = (mean - mu) / se
    p_value = clamp_probability(2.0 * (1.0 - normal_cdf(abs(z))))
    critical = normal_inverse(1.0 - alpha / 2.0)

    return HTestParams(
        test_type="z-test",
        statistic=z,
        statistic_name="z",
        parameter=None,
        p_value=p_value,
        alpha=alpha,
        critical_value=critical,
        standard_error=se,
        conf_int=np.array([mean - critical * se, mean + critical * se]),
        estimate={"mean of x": mean},
        null_value={"mean": mu},
        method="One Sample z-test",
        data_name=design.data_name,
        extras={"population_std": sigma, "sample_size": n},
    ), warnings_list


# --- Helpers ---

def _t_single(x: np.ndarray, mu: float, alpha: float) -> tuple[dict, list[str]]:
    """Shared computation of the one-sample and paired tests."""
    warnings_list: list[str] = []
    n = len(x)
    mean = float(np.mean(x))
    se = math.sqrt(float(np.var(x, ddof=1)) / n)
    df = float(n - 1)

    if se == 0.0:
        raise ZeroStdError(
            "Cannot perform t-test when standard error is zero (data are constant)",
            quantity="standard error",
        )

    t_stat = (mean - mu) / se
    critical = t_inverse(1.0 - alpha / 2.0, df)
    if n < 5:
        warnings_list.append(f"very small sample (n={n})")
    return {
        "t": t_stat,
        "df": df,
        "p": _t_pvalue(t_stat, df),
        "se": se,
        "mean": mean,
        "critical": critical,
        "ci": np.array([mean - critical * se, mean + critical * se]),
    }, warnings_list


def _t_pvalue(t_stat: float, df: float) -> float:
    """Two-sided p-value 2 (1 - F_t(|t|; df))."""
    return clamp_probability(2.0 * (1.0 - t_cdf(abs(t_stat), df)))
