"""
Common types for normality tests.

Every normality test returns the same NormalityParams payload; test-specific
outputs go in `extras`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_ALPHA = 0.05

# test_type -> human-readable method name
TEST_NAMES = {
    "shapiro_wilk": "Shapiro-Wilk",
    "jarque_bera": "Jarque-Bera",
    "kolmogorov_smirnov": "Kolmogorov-Smirnov",
    "anderson_darling": "Anderson-Darling",
    "lilliefors": "Lilliefors",
    "dagostino": "D'Agostino K-squared",
}

# test_type -> (minimum n, maximum n or None)
SAMPLE_BOUNDS = {
    "shapiro_wilk": (3, 5000),
    "jarque_bera": (4, None),
    "kolmogorov_smirnov": (5, None),
    "anderson_darling": (8, None),
    "lilliefors": (4, 1000),
    "dagostino": (20, None),
}

# Batch runner order; D'Agostino only runs for n >= 20.
BATCH_TESTS = (
    "shapiro_wilk",
    "jarque_bera",
    "anderson_darling",
    "kolmogorov_smirnov",
    "dagostino",
)

IDENTICAL_VALUES = "All values are identical"


@dataclass(frozen=True)
class NormalityParams:
    """
    Parameter payload for normality tests.

    H0 for every test: the sample comes from a normal distribution.

    Attributes
    ----------
    test_type : str
        One of the TEST_NAMES keys.
    method : str
        Human-readable test name.
    statistic : float
        Test statistic (W, JB, D, A^2, K^2); NaN for a degenerate sample.
    p_value : float
        p-value in [0, 1]; NaN for a degenerate sample.
    alpha : float
        Significance level.
    is_normal : bool
        p_value > alpha. Always False when `error` is set.
    n : int
        Number of finite observations used.
    error : str or None
        Reason the test could not produce a statistic.
    extras : dict or None
        Test-specific outputs (adjusted A^2, lambda, critical value,
        skewness and kurtosis z-scores).
    """
    test_type: str
    method: str
    statistic: float
    p_value: float
    alpha: float
    is_normal: bool
    n: int
    error: str | None = None
    extras: dict[str, Any] | None = None

    @classmethod
    def degenerate(
        cls,
        test_type: str,
        *,
        alpha: float,
        n: int,
        reason: str,
    ) -> NormalityParams:
        """Sentinel result: NaN statistic and p-value, not normal, with a reason."""
        return cls(
            test_type=test_type,
            method=TEST_NAMES[test_type],
            statistic=float('nan'),
            p_value=float('nan'),
            alpha=alpha,
            is_normal=False,
            n=n,
            error=reason,
        )
