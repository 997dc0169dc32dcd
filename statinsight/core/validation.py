"""
Input validation utilities for statinsight.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

The one deliberate exception is finite_values(): statistical primitives
operate on dataset columns that legitimately mix numbers, text and
missing cells, so non-numeric and non-finite cells are dropped there.
What remains must still be non-empty.

Design principles:
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

import math
from typing import Any, Iterable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from statinsight.core.exceptions import (
    DimensionError,
    DomainError,
    InsufficientDataError,
    ValidationError,
)


def is_numeric(cell: Any) -> bool:
    """
    True for finite real numbers.

    Booleans are not numbers here even though Python treats them as ints:
    a column of True/False is binary, not quantitative.
    """
    if isinstance(cell, (bool, np.bool_)):
        return False
    if isinstance(cell, (int, np.integer)):
        return True
    if isinstance(cell, (float, np.floating)):
        return math.isfinite(cell)
    return False


def finite_values(values: ArrayLike | Iterable[Any], name: str) -> NDArray[np.float64]:
    """
    Extract the finite numeric cells of a column as a float64 array.

    Args:
        values: Array-like or iterable of cells
        name: Parameter name for error messages

    Returns:
        1D float64 array in original order

    Raises:
        InsufficientDataError: If no finite numeric value remains
    """
    if isinstance(values, np.ndarray) and np.issubdtype(values.dtype, np.number):
        arr = values.astype(np.float64).ravel()
        arr = arr[np.isfinite(arr)]
    else:
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise ValidationError(
                f"{name}: expected a sequence of values, got {type(values).__name__}"
            )
        arr = np.array([float(v) for v in values if is_numeric(v)], dtype=np.float64)
        arr = arr[np.isfinite(arr)]

    if arr.size == 0:
        raise InsufficientDataError(
            f"{name}: contains no finite numeric values",
            required=1,
            actual=0,
        )
    return arr


def check_min_samples(array: NDArray[Any], min_samples: int, name: str) -> None:
    """
    Verify array has at least the minimum number of samples.

    Args:
        array: Array to check
        min_samples: Minimum required samples (first dimension)
        name: Parameter name for error messages

    Raises:
        InsufficientDataError: If array has fewer than min_samples
    """
    n = array.shape[0]
    if n < min_samples:
        raise InsufficientDataError(
            f"{name}: requires at least {min_samples} valid observations, got {n}",
            required=min_samples,
            actual=n,
        )


def check_max_samples(array: NDArray[Any], max_samples: int, name: str) -> None:
    """
    Verify array has at most max_samples observations.

    Raises:
        DomainError: If the sample is larger than the method supports
    """
    n = array.shape[0]
    if n > max_samples:
        raise DomainError(
            f"{name}: supports at most {max_samples} observations, got {n}",
            name=name,
            value=float(n),
        )


def check_consistent_length(*arrays: Any, names: tuple[str, ...]) -> None:
    """
    Verify all sequences have the same length.

    Args:
        *arrays: Sequences to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_open_unit_interval(value: float, name: str) -> float:
    """
    Verify 0 < value < 1 (probabilities, significance and confidence levels).

    Raises:
        DomainError: If value is outside the open interval or not finite
    """
    if not isinstance(value, (int, float, np.integer, np.floating)) or isinstance(value, bool):
        raise DomainError(f"{name}: must be a number in (0, 1), got {value!r}", name=name)
    if not (0.0 < value < 1.0):
        raise DomainError(
            f"{name}: must be in (0, 1), got {value}",
            name=name,
            value=float(value),
        )
    return float(value)


def check_alpha(alpha: float) -> float:
    """Validate a significance level."""
    return check_open_unit_interval(alpha, "alpha")


def check_confidence(confidence: float) -> float:
    """Validate a confidence level."""
    return check_open_unit_interval(confidence, "confidence")


def check_positive(value: float, name: str) -> float:
    """
    Verify value is a finite number > 0.

    Raises:
        DomainError: If value <= 0 or not finite
    """
    if not is_numeric(value) or value <= 0:
        raise DomainError(
            f"{name}: must be a positive finite number, got {value!r}",
            name=name,
            value=float(value) if is_numeric(value) else None,
        )
    return float(value)
