"""
Solver dispatch for correlation.

pearson(), spearman() and kendall() test one pair of columns;
correlation_matrix() runs one of them over every pair of numeric columns
of a dataset.
"""

from __future__ import annotations

import math
from typing import Any, Literal, Mapping

import numpy as np
from numpy.typing import ArrayLike

from statinsight.core.dataset import Dataset, as_dataset
from statinsight.core.exceptions import InsufficientDataError, StatInsightError, ValidationError
from statinsight.core.validation import check_alpha, is_numeric
from statinsight.correlation._common import (
    DEFAULT_ALPHA,
    METHODS,
    STRONG_CORRELATION,
)
from statinsight.correlation._pairs import numeric_matrix, pairwise_mask
from statinsight.correlation.design import CorrelationDesign
from statinsight.correlation.solution import (
    CorrelationMatrix,
    CorrelationSolution,
    StrongCorrelation,
)
from statinsight.correlation.backends.cpu import CPUCorrelationBackend


Method = Literal['pearson', 'spearman', 'kendall']
BackendChoice = Literal['auto', 'cpu']


def _get_backend(backend: str = 'auto'):
    if backend in ('cpu', 'auto'):
        return CPUCorrelationBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'auto' or 'cpu'."
    )


def correlate(
    x: ArrayLike | CorrelationDesign,
    y: ArrayLike | None = None,
    *,
    method: Method = 'pearson',
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> CorrelationSolution:
    """
    Correlation between two paired columns.

    Only pairs where both cells are finite numbers are used; at least 3
    must remain.

    Parameters
    ----------
    x, y : array-like
        Parallel columns of equal length.
    method : {'pearson', 'spearman', 'kendall'}
    alpha : float
        Significance level, also the level of the Pearson interval.

    Returns
    -------
    CorrelationSolution
    """
    if isinstance(x, CorrelationDesign):
        design = x
    else:
        if y is None:
            raise ValidationError("y is required for correlation")
        design = CorrelationDesign.for_pair(x, y, method=method, alpha=alpha)
    result = _get_backend(backend).solve(design)
    return CorrelationSolution(_result=result, _design=design)


def pearson(x: ArrayLike, y: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> CorrelationSolution:
    """Pearson product-moment correlation with a t test and Fisher-z interval."""
    return correlate(x, y, method='pearson', alpha=alpha)


def spearman(x: ArrayLike, y: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> CorrelationSolution:
    """Spearman rank correlation (average ranks for ties) with a t test."""
    return correlate(x, y, method='spearman', alpha=alpha)


def kendall(x: ArrayLike, y: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> CorrelationSolution:
    """Kendall tau-b with a normal-approximation z test."""
    return correlate(x, y, method='kendall', alpha=alpha)


def numeric_columns(dataset: Dataset) -> list[str]:
    """Headers with at least one finite numeric cell, in header order."""
    return [h for h in dataset.headers if any(is_numeric(v) for v in dataset.column(h))]


def correlation_matrix(
    data: Dataset | Mapping[str, Any],
    *,
    method: Method = 'pearson',
    threshold: float = STRONG_CORRELATION,
    alpha: float = DEFAULT_ALPHA,
    columns: list[str] | None = None,
    backend: BackendChoice = 'auto',
) -> CorrelationMatrix:
    """
    Pairwise correlation matrix over the numeric columns of a dataset.

    Each pair uses the rows where both cells are numbers. Pairs that cannot
    be computed (fewer than 3 complete pairs) are NaN and listed in
    `failures`. `strong` holds the pairs with |r| >= threshold and
    p < alpha, sorted by |r| descending.

    Raises
    ------
    ValidationError
        If method is unknown.
    InsufficientDataError
        If fewer than 2 numeric columns are available.
    """
    if method not in METHODS:
        raise ValidationError(f"Unknown correlation method: {method!r}. Use one of {METHODS}")
    alpha = check_alpha(alpha)
    ds = as_dataset(data)
    cols = list(columns) if columns is not None else numeric_columns(ds)
    if len(cols) < 2:
        raise InsufficientDataError(
            f"Need at least 2 numeric columns for a correlation matrix, got {len(cols)}",
            required=2,
            actual=len(cols),
        )

    values = numeric_matrix(ds, cols)
    k = len(cols)
    r_mat = np.eye(k, dtype=np.float64)
    p_mat = np.zeros((k, k), dtype=np.float64)
    n_mat = np.zeros((k, k), dtype=np.int64)
    failures: dict[tuple[str, str], str] = {}
    solver = _get_backend(backend)

    for i in range(k):
        n_mat[i, i] = int(np.sum(~np.isnan(values[:, i])))
        for j in range(i + 1, k):
            mask = pairwise_mask(values[:, i], values[:, j])
            try:
                design = CorrelationDesign.for_pair(
                    values[mask, i], values[mask, j], method=method, alpha=alpha,
                )
                params = solver.solve(design).params
            except StatInsightError as e:
                failures[(cols[i], cols[j])] = str(e)
                r_mat[i, j] = r_mat[j, i] = np.nan
                p_mat[i, j] = p_mat[j, i] = np.nan
                continue
            r_mat[i, j] = r_mat[j, i] = params.correlation
            p_mat[i, j] = p_mat[j, i] = params.p_value
            n_mat[i, j] = n_mat[j, i] = params.n

    strong = [
        StrongCorrelation(cols[i], cols[j], float(r_mat[i, j]), float(p_mat[i, j]))
        for i in range(k) for j in range(i + 1, k)
        if not math.isnan(r_mat[i, j])
        and abs(r_mat[i, j]) >= threshold and p_mat[i, j] < alpha
    ]
    strong.sort(key=lambda s: -abs(s.correlation))

    return CorrelationMatrix(
        columns=tuple(cols),
        method=method,
        correlations=r_mat,
        p_values=p_mat,
        sample_sizes=n_mat,
        strong=tuple(strong),
        failures=failures,
    )
