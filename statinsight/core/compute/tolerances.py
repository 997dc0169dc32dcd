"""
Stopping rules for the iterative numerical kernels.

Each series, continued fraction and root finder in statinsight stops on
a relative/absolute change threshold or an iteration cap, whichever comes
first. The tiers below are the single source of truth for those numbers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Stopping rule for an iterative computation."""
    eps: float
    max_iter: int
    name: str
    description: str


# Power series of the lower incomplete gamma function
GAMMA_SERIES = ToleranceTier(
    eps=1e-12,
    max_iter=100,
    name='gamma_series',
    description='Stop when |term| < eps or after max_iter terms',
)

# Lentz continued fraction of the regularized incomplete beta function
BETA_CONTINUED_FRACTION = ToleranceTier(
    eps=1e-12,
    max_iter=100,
    name='beta_cf',
    description='Stop when |delta - 1| < eps or after max_iter steps',
)

# Alternating Kolmogorov series for the KS p-value
KOLMOGOROV_SERIES = ToleranceTier(
    eps=1e-12,
    max_iter=100,
    name='kolmogorov_series',
    description='Stop when |term| < eps or after max_iter terms',
)

# Bisection for distribution quantiles without a closed form
QUANTILE_BISECTION = ToleranceTier(
    eps=1e-10,
    max_iter=200,
    name='quantile_bisection',
    description='Stop when the bracket is narrower than eps',
)

# Floor for continued-fraction denominators (Lentz's "tiny")
TINY = 1e-30

# Floor for probabilities passed to log()
LOG_FLOOR = 1e-300
