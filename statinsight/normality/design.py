"""
NormalityDesign: validated input for a single normality test.

The `test_type` field names the test; the factory checks the sample size
bounds for that test. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from statinsight.core.exceptions import ValidationError
from statinsight.core.validation import (
    check_alpha,
    check_max_samples,
    check_min_samples,
    finite_values,
)
from statinsight.normality._common import SAMPLE_BOUNDS, TEST_NAMES


@dataclass(frozen=True)
class NormalityDesign:
    """
    Design for normality tests.

    Do not construct directly; use NormalityDesign.for_test().
    """
    test_type: str
    _x: NDArray[np.floating[Any]]
    _alpha: float = 0.05

    @property
    def x(self) -> NDArray[np.floating[Any]]:
        """Finite observations in original order."""
        return self._x

    @property
    def sorted_x(self) -> NDArray[np.floating[Any]]:
        return np.sort(self._x)

    @property
    def n(self) -> int:
        return len(self._x)

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def is_constant(self) -> bool:
        """True when every observation is the same value."""
        return bool(np.ptp(self._x) == 0.0)

    @classmethod
    def for_test(
        cls,
        test_type: str,
        x: ArrayLike,
        *,
        alpha: float = 0.05,
    ) -> NormalityDesign:
        """
        Build design for one normality test.

        Raises
        ------
        ValidationError
            If test_type is unknown.
        InsufficientDataError
            If there are fewer finite values than the test needs.
        DomainError
            If alpha is outside (0, 1) or the sample exceeds the test's
            maximum size.
        """
        if test_type not in TEST_NAMES:
            raise ValidationError(
                f"Unknown normality test {test_type!r}. "
                f"Expected one of {sorted(TEST_NAMES)}"
            )
        alpha = check_alpha(alpha)
        x_arr = finite_values(x, "x")

        min_n, max_n = SAMPLE_BOUNDS[test_type]
        check_min_samples(x_arr, min_n, TEST_NAMES[test_type])
        if max_n is not None:
            check_max_samples(x_arr, max_n, TEST_NAMES[test_type])

        return cls(test_type=test_type, _x=x_arr, _alpha=alpha)

    def __repr__(self) -> str:
        return f"NormalityDesign(test_type={self.test_type!r}, n={self.n})"
