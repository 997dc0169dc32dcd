"""
DescriptiveDesign: data wrapper for describe().

Wraps one column of cells, keeps its finite numeric values and records how
many cells were dropped. Follows the statinsight Design pattern.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray

from statinsight.core.dataset import Dataset
from statinsight.core.validation import finite_values


@dataclass(frozen=True)
class DescriptiveDesign:
    """
    Design for descriptive statistics of a single column.

    Immutable after construction.

    Construction:
        DescriptiveDesign.from_array(values, name='price')
        DescriptiveDesign.from_dataset(ds, 'price')
    """
    _data: NDArray[np.floating[Any]]
    _n_total: int
    _name: str | None

    @classmethod
    def from_array(cls, values, *, name: str | None = None) -> DescriptiveDesign:
        """
        Build DescriptiveDesign from array-like cells.

        Parameters
        ----------
        values : array-like
            Cells of one column. Non-numeric and non-finite cells are dropped.
        name : str, optional
            Column name used in summaries.

        Raises
        ------
        InsufficientDataError
            If no finite numeric value remains.
        """
        if hasattr(values, 'tolist') and not isinstance(values, np.ndarray):
            values = values.tolist()
        cells = values if isinstance(values, np.ndarray) else list(values)
        data = finite_values(cells, name or "x")
        return cls(_data=data, _n_total=len(cells), _name=name)

    @classmethod
    def from_dataset(cls, dataset: Dataset, column: str) -> DescriptiveDesign:
        """Build DescriptiveDesign from a Dataset column."""
        return cls.from_array(dataset.column(column), name=column)

    @property
    def data(self) -> NDArray[np.floating[Any]]:
        """Finite values in original order."""
        return self._data

    @property
    def n(self) -> int:
        """Number of finite values."""
        return len(self._data)

    @property
    def n_dropped(self) -> int:
        """Cells ignored because they were missing or not numeric."""
        return self._n_total - len(self._data)

    @property
    def name(self) -> str | None:
        return self._name

    def __repr__(self) -> str:
        dropped = f", dropped={self.n_dropped}" if self.n_dropped else ""
        label = f"name={self._name!r}, " if self._name else ""
        return f"DescriptiveDesign({label}n={self.n}{dropped})"
