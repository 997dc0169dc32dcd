"""
Bootstrap resampling and row sampling.

Randomness comes from np.random.default_rng(seed): the same seed gives
the same answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping

import numpy as np
from numpy.typing import ArrayLike, NDArray

from statinsight.core.dataset import Dataset, as_dataset
from statinsight.core.exceptions import ValidationError
from statinsight.core.validation import finite_values
from statinsight.descriptive._position import sorted_quantile

BOOTSTRAP_ITERATIONS = 1000

SampleMethod = Literal['random', 'systematic', 'first', 'last']


def _statistic_mean(v: NDArray) -> float:
    return float(np.mean(v))


def _statistic_median(v: NDArray) -> float:
    return sorted_quantile(np.sort(v), 0.5)


def _statistic_std(v: NDArray) -> float:
    return float(np.std(v, ddof=1))


def _statistic_var(v: NDArray) -> float:
    return float(np.var(v, ddof=1))


STATISTICS: dict[str, Callable[[NDArray], float]] = {
    'mean': _statistic_mean,
    'median': _statistic_median,
    'std': _statistic_std,
    'var': _statistic_var,
}


@dataclass(frozen=True)
class BootstrapResult:
    """
    Bootstrap distribution of a statistic.

    statistics holds the replicates sorted ascending; ci_lower and ci_upper
    are their 2.5 and 97.5 percentiles.
    """
    statistics: NDArray[np.float64]
    original: float
    iterations: int

    @property
    def mean(self) -> float:
        return float(np.mean(self.statistics))

    @property
    def standard_error(self) -> float:
        return float(np.std(self.statistics, ddof=1))

    @property
    def bias(self) -> float:
        return self.mean - self.original

    @property
    def ci_lower(self) -> float:
        return sorted_quantile(self.statistics, 0.025)

    @property
    def ci_upper(self) -> float:
        return sorted_quantile(self.statistics, 0.975)

    def to_dict(self) -> dict[str, Any]:
        return {
            'mean': self.mean,
            'standardError': self.standard_error,
            'bias': self.bias,
            'confidenceInterval': {'lower': self.ci_lower, 'upper': self.ci_upper},
            'iterations': self.iterations,
        }


def bootstrap(
    x: ArrayLike,
    statistic: str | Callable[[NDArray[np.float64]], float] = 'mean',
    iterations: int = BOOTSTRAP_ITERATIONS,
    seed: int | None = None,
) -> BootstrapResult:
    """
    Nonparametric bootstrap of a statistic over the finite values of x.

    Args:
        x: Sample
        statistic: 'mean', 'median', 'std', 'var' or a callable taking a
            float array and returning a number
        iterations: Number of resamples (each of the original size)
        seed: Seed for np.random.default_rng

    Raises:
        ValidationError: If statistic is unknown or iterations < 2
    """
    if callable(statistic):
        func = statistic
    elif statistic in STATISTICS:
        func = STATISTICS[statistic]
    else:
        raise ValidationError(
            f"Unknown statistic: {statistic!r}. Use one of {sorted(STATISTICS)} or a callable"
        )
    if isinstance(iterations, bool) or not isinstance(iterations, (int, np.integer)) or iterations < 2:
        raise ValidationError(f"iterations: must be an integer >= 2, got {iterations!r}")

    data = finite_values(x, "x")
    n = len(data)
    rng = np.random.default_rng(seed)

    replicates = np.empty(iterations, dtype=np.float64)
    for b in range(iterations):
        indices = rng.integers(0, n, size=n)
        replicates[b] = func(data[indices])

    return BootstrapResult(
        statistics=np.sort(replicates),
        original=float(func(data)),
        iterations=int(iterations),
    )


def sample(
    data: Dataset | Mapping[str, Any],
    size: int,
    method: SampleMethod = 'random',
    seed: int | None = None,
) -> Dataset:
    """
    Draw `size` rows from a dataset.

    random      without replacement, rows in draw order
    systematic  every floor(n / size)-th row starting at row 0
    first       the first `size` rows
    last        the last `size` rows

    When size >= the number of rows the dataset is returned unchanged.

    Raises:
        ValidationError: If size is not a positive integer or method is unknown
    """
    ds = as_dataset(data)
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size <= 0:
        raise ValidationError(f"size: must be a positive integer, got {size!r}")
    if method not in ('random', 'systematic', 'first', 'last'):
        raise ValidationError(
            f"Unknown sampling method: {method!r}. Use 'random', 'systematic', 'first' or 'last'."
        )

    n = len(ds)
    if size >= n:
        return ds

    if method == 'random':
        rng = np.random.default_rng(seed)
        indices = rng.permutation(n)[:size]
    elif method == 'systematic':
        step = n // size
        indices = np.arange(size) * step
    elif method == 'first':
        indices = np.arange(size)
    else:
        indices = np.arange(n - size, n)

    return ds.with_rows(ds.rows[int(i)] for i in indices)
