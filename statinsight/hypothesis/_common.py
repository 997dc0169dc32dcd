"""
Common types for hypothesis testing.

Defines HTestParams (the payload shared by every test) and TTestKind.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


DEFAULT_ALPHA = 0.05


class TTestKind(str, enum.Enum):
    """Variant of the t-test."""
    ONE_SAMPLE = "one-sample"
    TWO_SAMPLE = "two-sample"
    PAIRED = "paired"


@dataclass(frozen=True)
class HTestParams:
    """
    Parameter payload for hypothesis tests.

    Every hypothesis test returns this same structure; test-specific extras
    go in the `extras` dict. All tests are two-sided.

    Attributes
    ----------
    test_type : str
        "one-sample", "two-sample", "paired", "z-test", "one-way-anova",
        "chi-square-independence" or "mann-whitney-u".
    statistic : float
        Test statistic value.
    statistic_name : str
        Name of the test statistic ("t", "z", "F", "X-squared", "U").
    parameter : dict or None
        Distribution parameters, e.g. {"df": 9} or
        {"df between": 2, "df within": 27}. None for normal approximations.
    p_value : float
        Two-sided p-value in [0, 1].
    alpha : float
        Significance level; significant = p_value < alpha.
    critical_value : float or None
        Two-sided critical value of the reference distribution at alpha.
    standard_error : float or None
        Standard error of the estimate (t and z tests).
    conf_int : ndarray or None
        (1 - alpha) confidence interval for the estimate, shape (2,).
    estimate : dict or None
        Point estimate(s), e.g. {"mean of x": 5.1, "mean of y": 3.2}.
    null_value : dict or None
        Hypothesized value under H0, e.g. {"mean": 5}.
    method : str
        Human-readable method name, e.g. "Welch Two Sample t-test".
    data_name : str
        Description of the data, e.g. "x and y".
    extras : dict or None
        Test-specific additional outputs (observed/expected tables, sums of
        squares, rank sums).
    """
    test_type: str
    statistic: float
    statistic_name: str
    parameter: dict[str, float] | None
    p_value: float
    alpha: float
    method: str
    data_name: str
    critical_value: float | None = None
    standard_error: float | None = None
    conf_int: NDArray[np.floating[Any]] | None = None
    estimate: dict[str, float] | None = None
    null_value: dict[str, float] | None = None
    extras: dict[str, Any] | None = None

    @property
    def significant(self) -> bool:
        return self.p_value < self.alpha
