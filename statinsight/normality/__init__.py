"""
Normality tests.

H0 for every test: the sample is drawn from a normal distribution.
is_normal = p_value > alpha. A constant sample yields a sentinel result
(NaN statistic and p-value, is_normal False, `error` set) instead of
raising.

Public API:
    shapiro_wilk(x)        - Shapiro-Wilk W (3 <= n <= 5000)
    jarque_bera(x)         - Jarque-Bera (n >= 4)
    kolmogorov_smirnov(x)  - KS against the fitted normal (n >= 5)
    anderson_darling(x)    - Anderson-Darling A^2 (n >= 8)
    lilliefors(x)          - Lilliefors (4 <= n <= 1000)
    dagostino(x)           - D'Agostino K^2 (n >= 20)
    normality_tests(x)     - batch runner with consensus
"""

from statinsight.normality.solvers import (
    anderson_darling,
    dagostino,
    jarque_bera,
    kolmogorov_smirnov,
    lilliefors,
    normality_tests,
    shapiro_wilk,
)
from statinsight.normality.design import NormalityDesign
from statinsight.normality._common import NormalityParams
from statinsight.normality.solution import NormalityBatch, NormalitySolution

__all__ = [
    "shapiro_wilk",
    "jarque_bera",
    "kolmogorov_smirnov",
    "anderson_darling",
    "lilliefors",
    "dagostino",
    "normality_tests",
    "NormalityDesign",
    "NormalityParams",
    "NormalityBatch",
    "NormalitySolution",
]
