"""
Common types for correlation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


DEFAULT_ALPHA = 0.05
MIN_PAIRS = 3
STRONG_CORRELATION = 0.7

METHODS = ("pearson", "spearman", "kendall")


@dataclass(frozen=True)
class CorrelationParams:
    """
    Parameter payload for one correlation coefficient.

    Attributes
    ----------
    method : str
        "pearson", "spearman" or "kendall".
    correlation : float
        r, rho or tau-b in [-1, 1]. 0 when a column is constant.
    statistic : float
        t = r sqrt((n - 2) / (1 - r^2)) for Pearson and Spearman,
        z = tau / sqrt(2 (2n + 5) / (9 n (n - 1))) for Kendall.
    statistic_name : str
        "t" or "z".
    df : float or None
        n - 2 for the t statistic, None for Kendall.
    p_value : float
        Two-sided p-value.
    alpha : float
        Significance level.
    n : int
        Number of complete pairs.
    conf_int : tuple or None
        Fisher-z interval at level 1 - alpha (Pearson only, n >= 4).
    extras : dict or None
        Ranks (Spearman), pair counts (Kendall).
    """
    method: str
    correlation: float
    statistic: float
    statistic_name: str
    df: float | None
    p_value: float
    alpha: float
    n: int
    conf_int: tuple[float, float] | None = None
    extras: dict[str, Any] | None = None

    @property
    def significant(self) -> bool:
        return self.p_value < self.alpha


def correlation_strength(r: float) -> str:
    """Verbal strength of |r|."""
    r = abs(r)
    if r >= 0.9:
        return "Very Strong"
    if r >= 0.7:
        return "Strong"
    if r >= 0.5:
        return "Moderate"
    if r >= 0.3:
        return "Weak"
    return "Very Weak"
