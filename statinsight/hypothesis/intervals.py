"""
Confidence intervals for a mean, a proportion and a variance.

Each function returns a frozen ConfidenceInterval. Missing and non-numeric
cells are ignored, as everywhere else in statinsight.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike

from statinsight.core.exceptions import DomainError, ValidationError
from statinsight.core.validation import (
    check_confidence,
    check_min_samples,
    check_positive,
    finite_values,
)
from statinsight.distributions import chi_square_inverse, normal_inverse, t_inverse

# np * p and n * (1 - p) below this make the Wald interval unreliable
MIN_EXPECTED_SUCCESSES = 5


@dataclass(frozen=True)
class ConfidenceInterval:
    """
    Two-sided interval [lower, upper] around `estimate`.

    `standard_error`, `margin_of_error` and `df` are None where the method
    does not define them (the chi-square variance interval is asymmetric).
    """
    estimate: float
    lower: float
    upper: float
    confidence: float
    n: int
    method: str
    standard_error: float | None = None
    margin_of_error: float | None = None
    df: float | None = None

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def to_dict(self) -> dict:
        return {
            'estimate': self.estimate,
            'lowerBound': self.lower,
            'upperBound': self.upper,
            'confidence': self.confidence,
            'sampleSize': self.n,
            'method': self.method,
            'standardError': self.standard_error,
            'marginOfError': self.margin_of_error,
            'degreesOfFreedom': self.df,
        }


@dataclass(frozen=True)
class ProportionInterval:
    """Wald and Wilson intervals for one proportion."""
    wald: ConfidenceInterval
    wilson: ConfidenceInterval
    successes: int
    total: int

    @property
    def proportion(self) -> float:
        return self.successes / self.total

    @property
    def normal_approximation_ok(self) -> bool:
        p = self.proportion
        return (self.total * p >= MIN_EXPECTED_SUCCESSES
                and self.total * (1.0 - p) >= MIN_EXPECTED_SUCCESSES)

    @property
    def recommended(self) -> ConfidenceInterval:
        """Wald when n p and n (1 - p) are both >= 5, otherwise Wilson."""
        return self.wald if self.normal_approximation_ok else self.wilson


def mean_interval(x: ArrayLike, confidence: float = 0.95) -> ConfidenceInterval:
    """
    t-based interval for the mean: mean +/- t_{1 - alpha/2, n - 1} * s / sqrt(n).

    Raises:
        DomainError: If confidence is not in (0, 1)
        InsufficientDataError: If fewer than 2 finite values remain
    """
    confidence = check_confidence(confidence)
    arr = finite_values(x, "x")
    check_min_samples(arr, 2, "x")

    n = len(arr)
    mean = float(np.mean(arr))
    se = math.sqrt(float(np.var(arr, ddof=1)) / n)
    df = float(n - 1)
    margin = t_inverse(1.0 - (1.0 - confidence) / 2.0, df) * se
    return ConfidenceInterval(
        estimate=mean,
        lower=mean - margin,
        upper=mean + margin,
        confidence=confidence,
        n=n,
        method="t",
        standard_error=se,
        margin_of_error=margin,
        df=df,
    )


def mean_interval_known_std(
    x: ArrayLike,
    population_std: float,
    confidence: float = 0.95,
) -> ConfidenceInterval:
    """z-based interval for the mean when sigma is known."""
    confidence = check_confidence(confidence)
    sigma = check_positive(population_std, "population_std")
    arr = finite_values(x, "x")

    n = len(arr)
    mean = float(np.mean(arr))
    se = sigma / math.sqrt(n)
    margin = normal_inverse(1.0 - (1.0 - confidence) / 2.0) * se
    return ConfidenceInterval(
        estimate=mean,
        lower=mean - margin,
        upper=mean + margin,
        confidence=confidence,
        n=n,
        method="z",
        standard_error=se,
        margin_of_error=margin,
    )


def proportion_interval(
    successes: int,
    total: int,
    confidence: float = 0.95,
) -> ProportionInterval:
    """
    Wald and Wilson score intervals for successes / total.

    The Wald interval is clipped to [0, 1]. A UserWarning is issued when
    n p or n (1 - p) is below 5; `recommended` then picks Wilson.

    Raises:
        ValidationError: If successes or total is not an integer
        DomainError: Unless 0 <= successes <= total and total > 0
    """
    for name, value in (("successes", successes), ("total", total)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValidationError(f"{name}: must be an integer, got {value!r}")
    if total <= 0 or successes < 0 or successes > total:
        raise DomainError(
            f"need 0 <= successes <= total and total > 0, "
            f"got successes={successes}, total={total}",
            name="successes",
            value=float(successes),
        )
    confidence = check_confidence(confidence)

    n = int(total)
    p = successes / n
    z = normal_inverse(1.0 - (1.0 - confidence) / 2.0)

    se = math.sqrt(p * (1.0 - p) / n)
    margin = z * se
    wald = ConfidenceInterval(
        estimate=p,
        lower=max(0.0, p - margin),
        upper=min(1.0, p + margin),
        confidence=confidence,
        n=n,
        method="wald",
        standard_error=se,
        margin_of_error=margin,
    )

    z2 = z * z
    denominator = 1.0 + z2 / n
    center = (p + z2 / (2.0 * n)) / denominator
    half_width = z * math.sqrt(p * (1.0 - p) / n + z2 / (4.0 * n * n)) / denominator
    wilson = ConfidenceInterval(
        estimate=center,
        lower=center - half_width,
        upper=center + half_width,
        confidence=confidence,
        n=n,
        method="wilson",
        margin_of_error=half_width,
    )

    result = ProportionInterval(wald=wald, wilson=wilson, successes=int(successes), total=n)
    if not result.normal_approximation_ok:
        warnings.warn(
            f"normal approximation may not be accurate for {successes}/{total}; "
            "use the Wilson score interval",
            UserWarning,
            stacklevel=2,
        )
    return result


def variance_interval(x: ArrayLike, confidence: float = 0.95) -> ConfidenceInterval:
    """
    Chi-square interval for the variance of a normal population:
    [(n-1) s^2 / chi2_{1-alpha/2}, (n-1) s^2 / chi2_{alpha/2}].
    """
    confidence = check_confidence(confidence)
    arr = finite_values(x, "x")
    check_min_samples(arr, 2, "x")

    n = len(arr)
    s2 = float(np.var(arr, ddof=1))
    df = float(n - 1)
    alpha = 1.0 - confidence
    chi_lower = chi_square_inverse(alpha / 2.0, df)
    chi_upper = chi_square_inverse(1.0 - alpha / 2.0, df)
    return ConfidenceInterval(
        estimate=s2,
        lower=df * s2 / chi_upper,
        upper=df * s2 / chi_lower,
        confidence=confidence,
        n=n,
        method="chi-square",
        df=df,
    )


def std_interval(x: ArrayLike, confidence: float = 0.95) -> ConfidenceInterval:
    """Square root of variance_interval()."""
    v = variance_interval(x, confidence)
    return ConfidenceInterval(
        estimate=math.sqrt(v.estimate),
        lower=math.sqrt(v.lower),
        upper=math.sqrt(v.upper),
        confidence=v.confidence,
        n=v.n,
        method=v.method,
        df=v.df,
    )
