"""
Small result records returned by individual descriptive functions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ModeResult:
    """
    Most frequent value(s) of a column.

    Attributes
    ----------
    values : tuple
        All values reaching the top frequency, in first-seen order.
    frequency : int
        The top frequency.
    is_multimodal : bool
        More than one value shares the top frequency.
    is_uniform : bool
        Every value occurs exactly once.
    """
    values: tuple[Any, ...]
    frequency: int
    is_multimodal: bool
    is_uniform: bool


@dataclass(frozen=True)
class FiveNumberSummary:
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (self.minimum, self.q1, self.median, self.q3, self.maximum)


@dataclass(frozen=True)
class BoxplotStats:
    """
    Tukey box plot geometry.

    Whiskers extend to the most extreme observations inside the
    1.5 * IQR fences; everything outside is listed in ``outliers``.
    """
    q1: float
    median: float
    q3: float
    iqr: float
    lower_fence: float
    upper_fence: float
    lower_whisker: float
    upper_whisker: float
    outliers: tuple[float, ...]
