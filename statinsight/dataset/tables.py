"""
Frequency tables, contingency tables and group-by summaries.

Categories are kept in first-seen order. Cells are compared by kind as
well as value, so True and 1 (equal in Python) are different categories.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

import numpy as np
from numpy.typing import NDArray

from statinsight.core.dataset import Cell, CellKind, Dataset, as_dataset, category_key
from statinsight.core.exceptions import ValidationError
from statinsight.core.validation import check_consistent_length, is_numeric
from statinsight.descriptive._position import sorted_quantile


def _as_list(values: Iterable[Any]) -> list[Any]:
    if hasattr(values, 'tolist'):
        return values.tolist()
    return list(values)


@dataclass(frozen=True)
class FrequencyRow:
    value: Cell
    frequency: int
    relative_frequency: float

    @property
    def percentage(self) -> float:
        return self.relative_frequency * 100.0

    def to_dict(self) -> dict[str, Any]:
        return {
            'value': self.value,
            'frequency': self.frequency,
            'relativeFrequency': self.relative_frequency,
            'percentage': self.percentage,
        }


def frequency_table(values: Iterable[Any]) -> list[FrequencyRow]:
    """
    Count each distinct cell, missing cells included as None.

    Sorted by descending frequency; ties keep first-seen order.
    """
    cells = _as_list(values)
    total = len(cells)
    counts: dict[tuple[CellKind, Any], int] = {}
    first: dict[tuple[CellKind, Any], Cell] = {}
    for cell in cells:
        key = category_key(cell)
        if key not in counts:
            counts[key] = 0
            first[key] = key[1]
        counts[key] += 1

    rows = [
        FrequencyRow(value=first[key], frequency=n, relative_frequency=n / total)
        for key, n in counts.items()
    ]
    # sorted() is stable: equal frequencies stay in first-seen order
    return sorted(rows, key=lambda r: -r.frequency)


@dataclass(frozen=True)
class ContingencyTable:
    """Dense cross-tabulation; counts[i, j] pairs rows[i] with columns[j]."""
    rows: tuple[Cell, ...]
    columns: tuple[Cell, ...]
    counts: NDArray[np.int64]

    @property
    def row_totals(self) -> NDArray[np.int64]:
        return self.counts.sum(axis=1)

    @property
    def col_totals(self) -> NDArray[np.int64]:
        return self.counts.sum(axis=0)

    @property
    def grand_total(self) -> int:
        return int(self.counts.sum())

    def count(self, row: Cell, column: Cell) -> int:
        return int(self.counts[self.rows.index(row), self.columns.index(column)])

    def to_dict(self) -> dict[str, Any]:
        return {
            'rows': list(self.rows),
            'columns': list(self.columns),
            'table': {
                str(r): {str(c): int(self.counts[i, j]) for j, c in enumerate(self.columns)}
                for i, r in enumerate(self.rows)
            },
            'totals': {
                'row': {str(r): int(t) for r, t in zip(self.rows, self.row_totals)},
                'col': {str(c): int(t) for c, t in zip(self.columns, self.col_totals)},
                'grand': self.grand_total,
            },
        }


def contingency_table(col1: Iterable[Any], col2: Iterable[Any]) -> ContingencyTable:
    """
    Cross-tabulate two parallel columns. Absent combinations are 0.

    Raises:
        DimensionError: If the columns differ in length
    """
    a = _as_list(col1)
    b = _as_list(col2)
    check_consistent_length(a, b, names=("col1", "col2"))

    row_keys = list(dict.fromkeys(category_key(v) for v in a))
    col_keys = list(dict.fromkeys(category_key(v) for v in b))
    row_index = {k: i for i, k in enumerate(row_keys)}
    col_index = {k: j for j, k in enumerate(col_keys)}

    counts = np.zeros((len(row_keys), len(col_keys)), dtype=np.int64)
    for u, v in zip(a, b):
        counts[row_index[category_key(u)], col_index[category_key(v)]] += 1

    return ContingencyTable(
        rows=tuple(k[1] for k in row_keys),
        columns=tuple(k[1] for k in col_keys),
        counts=counts,
    )


# --- group-by ---

def _agg_mean(v: NDArray) -> float:
    return float(np.mean(v))


def _agg_median(v: NDArray) -> float:
    return sorted_quantile(np.sort(v), 0.5)


def _agg_std(v: NDArray) -> float:
    return float(np.std(v, ddof=1)) if len(v) > 1 else float('nan')


def _agg_var(v: NDArray) -> float:
    return float(np.var(v, ddof=1)) if len(v) > 1 else float('nan')


AGGREGATIONS: dict[str, Callable[[NDArray], float]] = {
    'mean': _agg_mean,
    'median': _agg_median,
    'sum': lambda v: float(np.sum(v)),
    'min': lambda v: float(np.min(v)),
    'max': lambda v: float(np.max(v)),
    'std': _agg_std,
    'var': _agg_var,
    'count': lambda v: len(v),
}


@dataclass(frozen=True)
class GroupSummary:
    """
    Rows sharing one value of the grouping column.

    aggregates maps f"{func}_{column}" to its value; an aggregation whose
    target column has no numeric cell in this group is left out.
    """
    key: Cell
    rows: tuple[Mapping[str, Cell], ...]
    aggregates: Mapping[str, float]

    @property
    def count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {'count': self.count, 'data': [dict(r) for r in self.rows]}
        record.update(self.aggregates)
        return record


def group_by(
    data: Dataset | Mapping[str, Any],
    column: str,
    aggregations: Mapping[str, str] | None = None,
) -> dict[Cell, GroupSummary]:
    """
    Partition rows by the value of `column` (first-seen order).

    Args:
        data: Dataset or its dict form
        column: Grouping column
        aggregations: {target_column: function} with function one of
            mean, median, sum, min, max, std, var, count

    Raises:
        KeyError: If a column is unknown
        ValidationError: If an aggregation name is unknown, or if the
            grouping column mixes booleans with the numbers 0 or 1 (the
            groups would share a dict key)
    """
    ds = as_dataset(data)
    aggregations = dict(aggregations or {})
    for target, func in aggregations.items():
        if func not in AGGREGATIONS:
            raise ValidationError(
                f"Unknown aggregation function: {func!r}. "
                f"Use one of {sorted(AGGREGATIONS)}"
            )
        ds.column(target)

    keys = ds.column(column)
    partitions: dict[tuple[CellKind, Any], list[Mapping[str, Cell]]] = {}
    for key, row in zip(keys, ds.rows):
        partitions.setdefault(category_key(key), []).append(row)

    raw_keys: dict[Cell, CellKind] = {}
    for kind, key in partitions:
        if key in raw_keys and raw_keys[key] is not kind:
            raise ValidationError(
                f"group_by: column {column!r} holds both {raw_keys[key].value} and "
                f"{kind.value} cells equal to {key!r}; they cannot be told apart "
                f"as group keys"
            )
        raw_keys[key] = kind

    result: dict[Cell, GroupSummary] = {}
    for (_, key), rows in partitions.items():
        aggregates: dict[str, float] = {}
        for target, func in aggregations.items():
            values = np.array(
                [float(r.get(target)) for r in rows if is_numeric(r.get(target))],
                dtype=np.float64,
            )
            if len(values) > 0:
                aggregates[f"{func}_{target}"] = AGGREGATIONS[func](values)
        result[key] = GroupSummary(key=key, rows=tuple(rows), aggregates=aggregates)
    return result
