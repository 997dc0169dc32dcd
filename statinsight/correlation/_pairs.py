"""
Pairwise-complete observations for bivariate statistics.

A pair is used only when both of its cells are finite numbers; everything
else (missing, text, booleans, NaN, inf) drops the whole pair.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from statinsight.core.dataset import Dataset
from statinsight.core.validation import check_consistent_length, is_numeric


def _cells(values: Any) -> list[Any]:
    if hasattr(values, 'tolist'):
        return values.tolist()
    return list(values)


def paired_values(
    x: Iterable[Any],
    y: Iterable[Any],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Complete pairs of two parallel columns as two float arrays.

    Raises:
        DimensionError: If the columns differ in length
    """
    xc = _cells(x)
    yc = _cells(y)
    check_consistent_length(xc, yc, names=("x", "y"))
    keep = [i for i, (a, b) in enumerate(zip(xc, yc)) if is_numeric(a) and is_numeric(b)]
    xs = np.array([float(xc[i]) for i in keep], dtype=np.float64)
    ys = np.array([float(yc[i]) for i in keep], dtype=np.float64)
    return xs, ys


def numeric_matrix(dataset: Dataset, columns: Sequence[str]) -> NDArray[np.float64]:
    """(n_rows, n_columns) float matrix with NaN where a cell is not a finite number."""
    data = np.full((len(dataset), len(columns)), np.nan, dtype=np.float64)
    for j, name in enumerate(columns):
        for i, cell in enumerate(dataset.column(name)):
            if is_numeric(cell):
                data[i, j] = float(cell)
    return data


def pairwise_mask(xi: NDArray, xj: NDArray) -> NDArray:
    """True where both xi and xj are non-NaN."""
    return ~(np.isnan(xi) | np.isnan(xj))
