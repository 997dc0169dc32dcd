"""
Dataset: the in-memory tabular container every analysis reads from.

A Dataset is an ordered list of header names plus an ordered sequence of
rows, each row a mapping from header to cell. A cell is a finite number,
text, a boolean, or None. Datasets are never mutated by the library.

Usage:
    from statinsight.core.dataset import Dataset

    ds = Dataset.from_dict({"headers": ["a", "b"], "data": [{"a": 1, "b": "x"}]})
    ds = Dataset.from_records([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}])
    ds = Dataset.from_dataframe(df)
    ds = Dataset.from_file("data.csv")

    ds.headers              # ('a', 'b')
    ds.column('a')          # (1, 2)
    ds.numeric_column('a')  # array([1., 2.])
"""

from __future__ import annotations

import enum
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, TYPE_CHECKING, Union

import numpy as np
from numpy.typing import NDArray

from statinsight.core.exceptions import StructuralError, ValidationError
from statinsight.core.validation import is_numeric

if TYPE_CHECKING:
    import pandas as pd


Cell = Union[int, float, str, bool, None]


class CellKind(enum.Enum):
    """Tag of a dataset cell."""
    NUMBER = "number"
    TEXT = "text"
    BOOL = "bool"
    NULL = "null"


def cell_kind(cell: Any) -> CellKind:
    """Classify a single cell. Non-finite floats count as missing."""
    if cell is None:
        return CellKind.NULL
    if isinstance(cell, (bool, np.bool_)):
        return CellKind.BOOL
    if is_numeric(cell):
        return CellKind.NUMBER
    if isinstance(cell, (float, np.floating)):
        return CellKind.NULL
    return CellKind.TEXT


def category_key(cell: Any) -> tuple[CellKind, Any]:
    """
    Hashable identity of a cell used as a category.

    Tagged with the cell kind so that True and 1 (equal and with the same
    hash in Python) stay different categories. Every missing cell maps to
    (NULL, None).
    """
    kind = cell_kind(cell)
    if kind is CellKind.NULL:
        return kind, None
    return kind, cell


def normalize_header(header: str) -> str:
    """Trim, collapse whitespace to '_', drop punctuation, lower-case."""
    normalized = re.sub(r"\s+", "_", str(header).strip())
    normalized = re.sub(r"[^\w]", "", normalized)
    return normalized.lower()


def deduplicate_headers(headers: Iterable[str]) -> list[str]:
    """Suffix repeated names with _2, _3, ... in order of appearance."""
    seen: set[str] = set()
    result = []
    for base in headers:
        name = base
        counter = 2
        while name in seen:
            name = f"{base}_{counter}"
            counter += 1
        seen.add(name)
        result.append(name)
    return result


def _to_cell(value: Any) -> Cell:
    """Convert scalars coming from pandas/numpy into plain Python cells."""
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class Dataset:
    """
    Immutable tabular dataset.

    Rows are stored as read-only mappings; a row may lack some headers or
    carry extra keys (the validator reports both as warnings).

    Construct via the factory classmethods or directly from headers and rows.
    """
    headers: tuple[str, ...]
    rows: tuple[Mapping[str, Cell], ...]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        headers = tuple(self.headers)
        if len(set(headers)) != len(headers):
            dupes = sorted({h for h in headers if headers.count(h) > 1})
            raise StructuralError(
                f"Duplicate column headers found: {dupes}",
                errors=["Duplicate column headers found"],
            )
        rows = tuple(MappingProxyType(dict(row)) for row in self.rows)
        object.__setattr__(self, 'headers', headers)
        object.__setattr__(self, 'rows', rows)
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    # === Access ===

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return len(self.rows)

    def __contains__(self, name: str) -> bool:
        return name in self.headers

    def column(self, name: str) -> tuple[Cell, ...]:
        """
        Project one header across all rows, preserving row order.

        Raises:
            KeyError: If the header is unknown, listing the available ones
        """
        if name not in self.headers:
            raise KeyError(
                f"Dataset has no column '{name}'. Available: {list(self.headers)}"
            )
        return tuple(row.get(name) for row in self.rows)

    def numeric_column(self, name: str) -> NDArray[np.float64]:
        """Finite numeric cells of a column as float64 (may be empty)."""
        return np.array(
            [float(v) for v in self.column(name) if is_numeric(v)],
            dtype=np.float64,
        )

    def to_dict(self) -> dict[str, Any]:
        """The ``{"headers": [...], "data": [...]}`` form."""
        return {
            "headers": list(self.headers),
            "data": [dict(row) for row in self.rows],
        }

    def with_rows(self, rows: Iterable[Mapping[str, Cell]]) -> Dataset:
        """A new dataset with the same headers and the given rows."""
        return Dataset(self.headers, tuple(rows), self.metadata)

    # === Factory Methods ===

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Dataset:
        """
        Construct from ``{"headers": [...], "data": [{...}, ...]}``.

        Raises:
            StructuralError: If either array is missing
        """
        if not isinstance(data, Mapping):
            raise StructuralError(
                f"Dataset must be a mapping, got {type(data).__name__}",
                errors=["Dataset must be an object"],
            )
        errors = []
        headers = data.get("headers")
        rows = data.get("data")
        if not isinstance(rows, (list, tuple)):
            errors.append("Dataset must contain a data array")
        if not isinstance(headers, (list, tuple)):
            errors.append("Dataset must contain a headers array")
        if errors:
            raise StructuralError("; ".join(errors), errors=errors)
        return cls(tuple(headers), tuple(rows), {'source': 'dict'})

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Cell]],
        *,
        headers: Iterable[str] | None = None,
    ) -> Dataset:
        """Construct from row mappings; headers default to first-seen key order."""
        rows = [dict(r) for r in records]
        if headers is None:
            ordered: dict[str, None] = {}
            for row in rows:
                for key in row:
                    ordered.setdefault(key, None)
            headers = list(ordered)
        return cls(tuple(headers), tuple(rows), {'source': 'records'})

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        normalize: bool = False,
        source_path: str | None = None,
    ) -> Dataset:
        """
        Construct from a pandas DataFrame. NaN cells become None.

        Args:
            df: Source frame
            normalize: Normalize header names (lower snake case) and
                de-duplicate them
            source_path: Recorded in metadata when the frame came from a file
        """
        raw_headers = [str(c) for c in df.columns]
        if normalize:
            headers = deduplicate_headers(normalize_header(h) for h in raw_headers)
        else:
            headers = deduplicate_headers(raw_headers)

        frame = df.astype(object).where(df.notna(), None)
        rows = []
        for values in frame.itertuples(index=False, name=None):
            rows.append({h: _to_cell(v) for h, v in zip(headers, values)})

        metadata: dict[str, Any] = {
            'source': 'dataframe',
            'original_headers': raw_headers,
        }
        if source_path:
            metadata['source_path'] = source_path
        return cls(tuple(headers), tuple(rows), metadata)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        normalize: bool = True,
        columns: list[str] | None = None,
    ) -> Dataset:
        """Construct from a CSV/TSV or JSON-records file."""
        import pandas as pd

        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == '.csv':
            df = pd.read_csv(path, usecols=columns)
        elif suffix == '.tsv':
            df = pd.read_csv(path, sep='\t', usecols=columns)
        elif suffix == '.json':
            df = pd.read_json(path, orient='records')
            if columns is not None:
                df = df[columns]
        else:
            raise ValidationError(f"Unknown file format: {suffix}")
        return cls.from_dataframe(df, normalize=normalize, source_path=str(path))


def as_dataset(data: Dataset | Mapping[str, Any]) -> Dataset:
    """Accept either a Dataset or its dict form."""
    if isinstance(data, Dataset):
        return data
    return Dataset.from_dict(data)
