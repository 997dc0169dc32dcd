"""
Special functions and probability distributions.

Self-contained scalar implementations used by every test in statinsight.

Public API:
    erf(x)                                - error function
    log_gamma(x), gamma(x)                - (log-)gamma function
    incomplete_gamma(a, x)                - lower incomplete gamma, unregularized
    regularized_gamma_p(a, x)             - incomplete_gamma(a, x) / gamma(a)
    regularized_incomplete_beta(a, b, x)  - I_x(a, b)
    normal_cdf(z), normal_inverse(p)      - standard normal CDF and quantile
    t_cdf(t, df), t_inverse(p, df)        - Student-t CDF and quantile
    chi_square_cdf(x, df), chi_square_inverse(p, df)
    f_cdf(f, df1, df2)
"""

from statinsight.distributions._special import (
    erf,
    gamma,
    incomplete_gamma,
    log_gamma,
    normal_inverse,
    regularized_gamma_p,
    regularized_incomplete_beta,
)
from statinsight.distributions._cdf import (
    chi_square_cdf,
    chi_square_inverse,
    clamp_probability,
    f_cdf,
    normal_cdf,
    t_cdf,
    t_inverse,
)

__all__ = [
    "erf",
    "gamma",
    "incomplete_gamma",
    "log_gamma",
    "normal_inverse",
    "regularized_gamma_p",
    "regularized_incomplete_beta",
    "chi_square_cdf",
    "chi_square_inverse",
    "clamp_probability",
    "f_cdf",
    "normal_cdf",
    "t_cdf",
    "t_inverse",
]
