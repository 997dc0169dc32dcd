"""
Univariate outlier detection.

Three rules over the finite numeric cells of a column:

    iqr               outside [Q1 - 1.5 IQR, Q3 + 1.5 IQR]
    zscore            |x - mean| / s > 3 (sample standard deviation)
    modified_zscore   |0.6745 (x - median) / MAD| > 3.5

Indices refer to positions in the column as given, so they stay valid for
columns that mix numbers with missing or text cells.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

import numpy as np

from statinsight.core.exceptions import InsufficientDataError, ValidationError
from statinsight.core.validation import is_numeric
from statinsight.descriptive._position import IQR_FENCE, sorted_quantile

ZSCORE_THRESHOLD = 3.0
MODIFIED_ZSCORE_THRESHOLD = 3.5
MODIFIED_ZSCORE_SCALE = 0.6745

OutlierMethod = Literal['iqr', 'zscore', 'modified_zscore']


@dataclass(frozen=True)
class OutlierReport:
    """
    Flagged values in column order.

    lower_bound and upper_bound are the value fences of the IQR rule and
    None for the score-based rules.
    """
    method: str
    outliers: tuple[float, ...]
    indices: tuple[int, ...]
    n: int
    lower_bound: float | None = None
    upper_bound: float | None = None

    @property
    def count(self) -> int:
        return len(self.outliers)

    @property
    def percentage(self) -> float:
        """Share of the numeric cells that were flagged, in percent."""
        return self.count / self.n * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            'method': self.method,
            'outliers': list(self.outliers),
            'indices': list(self.indices),
            'count': self.count,
            'percentage': self.percentage,
            'lowerBound': self.lower_bound,
            'upperBound': self.upper_bound,
        }


def detect_outliers(column: Iterable[Any], method: OutlierMethod = 'iqr') -> OutlierReport:
    """
    Flag outliers in a column.

    A zero standard deviation flags nothing under 'zscore'. A zero MAD
    under 'modified_zscore' gives every value off the median an infinite
    score, so all of them are flagged.

    Raises:
        ValidationError: If method is unknown
        InsufficientDataError: If the column holds no finite number
    """
    cells = column.tolist() if hasattr(column, 'tolist') else list(column)
    positions = [i for i, v in enumerate(cells) if is_numeric(v)]
    if not positions:
        raise InsufficientDataError(
            "detect_outliers: column contains no finite numeric values",
            required=1,
            actual=0,
        )
    values = np.array([float(cells[i]) for i in positions], dtype=np.float64)
    lower = upper = None

    if method == 'iqr':
        q1, q3 = sorted_quantile(np.sort(values), np.array([0.25, 0.75]))
        spread = q3 - q1
        lower = float(q1 - IQR_FENCE * spread)
        upper = float(q3 + IQR_FENCE * spread)
        mask = (values < lower) | (values > upper)
    elif method == 'zscore':
        sd = float(np.std(values, ddof=1)) if len(values) > 1 else 0.0
        if sd == 0.0:
            mask = np.zeros(len(values), dtype=bool)
        else:
            mask = np.abs(values - values.mean()) / sd > ZSCORE_THRESHOLD
    elif method == 'modified_zscore':
        med = float(np.median(values))
        mad = float(np.median(np.abs(values - med)))
        if mad == 0.0:
            mask = values != med
        else:
            mask = np.abs(MODIFIED_ZSCORE_SCALE * (values - med) / mad) > MODIFIED_ZSCORE_THRESHOLD
    else:
        raise ValidationError(
            f"Unknown outlier detection method: {method!r}. "
            "Use 'iqr', 'zscore' or 'modified_zscore'."
        )

    flagged = np.flatnonzero(mask)
    return OutlierReport(
        method=method,
        outliers=tuple(float(values[k]) for k in flagged),
        indices=tuple(positions[k] for k in flagged),
        n=len(values),
        lower_bound=lower,
        upper_bound=upper,
    )
