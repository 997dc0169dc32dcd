"""
Solver dispatch for descriptive statistics.

describe() is the one-call summary; the individual aggregates live in the
_central, _dispersion, _position and _shape modules.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from statinsight.core.exceptions import ValidationError
from statinsight.descriptive.design import DescriptiveDesign
from statinsight.descriptive.solution import DescriptiveSolution
from statinsight.descriptive.backends.cpu import CPUDescriptiveBackend


BackendChoice = Literal['auto', 'cpu']


def _ensure_design(data: ArrayLike | DescriptiveDesign, name: str | None) -> DescriptiveDesign:
    """Convert raw cells to DescriptiveDesign if needed."""
    if isinstance(data, DescriptiveDesign):
        return data
    return DescriptiveDesign.from_array(data, name=name)


def _get_backend(backend: BackendChoice):
    if backend in ('auto', 'cpu'):
        return CPUDescriptiveBackend()
    raise ValidationError(f"Unknown backend: {backend!r}")


def describe(
    data: ArrayLike | DescriptiveDesign,
    *,
    name: str | None = None,
    backend: BackendChoice = 'auto',
) -> DescriptiveSolution:
    """
    Summarize one numeric column.

    Computes count, mean, median, standard deviation, min, max, quartiles,
    skewness (n >= 3) and excess kurtosis (n >= 4).

    Parameters
    ----------
    data : array-like or DescriptiveDesign
        Column cells. Missing and non-numeric cells are ignored.
    name : str, optional
        Column name shown in summary().
    backend : str
        'auto' or 'cpu'.

    Returns
    -------
    DescriptiveSolution
    """
    design = _ensure_design(data, name)
    be = _get_backend(backend)
    result = be.solve(design)
    return DescriptiveSolution(_result=result, _design=design)
