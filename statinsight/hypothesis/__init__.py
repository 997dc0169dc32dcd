"""
Hypothesis testing module.

All tests are two-sided; significant = p_value < alpha.

Public API:
    t_test(x, y)               - one-sample, two-sample (Welch/pooled), paired
    z_test(x, mu, sigma)       - one-sample z-test, known population std
    anova_oneway(*groups)      - one-way ANOVA
    chisq_test(x, y)           - Pearson's chi-squared test of independence
    mann_whitney(x, y)         - Mann-Whitney U test (normal approximation)
    mean_interval(x)           - t-based confidence interval for the mean
    mean_interval_known_std    - z-based confidence interval for the mean
    proportion_interval(k, n)  - Wald and Wilson intervals
    variance_interval(x)       - chi-square interval for the variance
    std_interval(x)            - chi-square interval for the standard deviation
"""

from statinsight.hypothesis.solvers import (
    t_test, z_test, anova_oneway, chisq_test, mann_whitney,
)
from statinsight.hypothesis.intervals import (
    ConfidenceInterval,
    ProportionInterval,
    mean_interval,
    mean_interval_known_std,
    proportion_interval,
    std_interval,
    variance_interval,
)
from statinsight.hypothesis.design import HypothesisDesign
from statinsight.hypothesis._common import DEFAULT_ALPHA, HTestParams, TTestKind
from statinsight.hypothesis.solution import HTestSolution

__all__ = [
    "t_test",
    "z_test",
    "anova_oneway",
    "chisq_test",
    "mann_whitney",
    "ConfidenceInterval",
    "ProportionInterval",
    "mean_interval",
    "mean_interval_known_std",
    "proportion_interval",
    "std_interval",
    "variance_interval",
    "HypothesisDesign",
    "DEFAULT_ALPHA",
    "HTestParams",
    "TTestKind",
    "HTestSolution",
]
