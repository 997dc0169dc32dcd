"""
Variable classifier.

Assigns each column one of the types quantitative, datetime, binary,
ordinal, qualitative or empty. The decision tree is evaluated in this
order, first match wins:

    1. datetime      >= 70% of the first 20 non-missing cells parse as dates
    2. quantitative  > 80% of the cells are finite numbers
    3. binary        exactly 2 distinct values
    4. ordinal       every distinct value matches one ordinal family
    5. qualitative   anything else (nominal_many above 10 categories)

Classification is deterministic: the same column always yields an equal
record.
"""

from __future__ import annotations

import enum
import re
import warnings
from dataclasses import dataclass, field
from typing import Any, Iterable, TYPE_CHECKING

from statinsight.core.dataset import Cell, CellKind, Dataset, as_dataset, cell_kind
from statinsight.core.validation import is_numeric

if TYPE_CHECKING:
    import pandas as pd


DATE_SAMPLE_SIZE = 20
DATE_RATIO = 0.7
NUMERIC_RATIO = 0.8
INTEGER_RATIO = 0.9
MANY_CATEGORIES = 10
MAX_CATEGORIES = 20

ORDINAL_PATTERNS = (
    re.compile(r"^(low|medium|high)$", re.IGNORECASE),
    re.compile(r"^(small|large)$", re.IGNORECASE),
    re.compile(r"^(bad|regular|good|excellent)$", re.IGNORECASE),
    re.compile(r"^[1-5]$"),
    re.compile(r"^(first|second|third)$", re.IGNORECASE),
)

_MONTHS = (
    r"jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec|january|february|march|"
    r"april|june|july|august|september|october|november|december"
)
_DATE_LIKE = re.compile(
    r"\d{1,4}[-/.]\d{1,2}(?:[-/.]\d{1,4})?|\b(?:" + _MONTHS + r")\b",
    re.IGNORECASE,
)


class VariableType(str, enum.Enum):
    QUANTITATIVE = "quantitative"
    QUALITATIVE = "qualitative"
    DATETIME = "datetime"
    BINARY = "binary"
    ORDINAL = "ordinal"
    EMPTY = "empty"


@dataclass(frozen=True)
class VariableClassification:
    """
    Classification record of one column.

    Attributes:
        name: Column name
        type: The assigned VariableType
        subtype: 'discrete' / 'continuous' for quantitative columns,
            'nominal' / 'nominal_many' for qualitative ones, else None
        unique_count: Number of distinct non-missing values
        range: (min, max) of the numeric cells, quantitative only
        categories: Distinct values in first-seen order (binary, ordinal,
            and the first 20 of a qualitative column)
    """
    name: str
    type: VariableType
    subtype: str | None = None
    unique_count: int = 0
    range: tuple[float, float] | None = None
    categories: tuple[Cell, ...] = ()

    @property
    def description(self) -> str:
        if self.type is VariableType.QUANTITATIVE:
            return f"Quantitative variable ({self.subtype})"
        if self.type is VariableType.QUALITATIVE:
            return f"Qualitative nominal variable ({self.unique_count} categories)"
        if self.type is VariableType.BINARY:
            return "Binary variable"
        if self.type is VariableType.ORDINAL:
            return "Ordinal variable"
        if self.type is VariableType.DATETIME:
            return "Temporal variable"
        return "Empty column"

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            'name': self.name,
            'type': self.type.value,
            'uniqueCount': self.unique_count,
            'description': self.description,
        }
        if self.subtype is not None:
            record['subtype'] = self.subtype
        if self.range is not None:
            record['range'] = {'min': self.range[0], 'max': self.range[1]}
        if self.categories:
            record['categories'] = list(self.categories)
        return record


@dataclass(frozen=True)
class VariableTypes:
    """
    Columns of a dataset grouped by type, each list in header order.

    Empty columns are listed with the qualitative ones.
    """
    quantitative: tuple[VariableClassification, ...] = ()
    qualitative: tuple[VariableClassification, ...] = ()
    datetime: tuple[VariableClassification, ...] = ()
    binary: tuple[VariableClassification, ...] = ()
    ordinal: tuple[VariableClassification, ...] = ()
    by_name: dict[str, VariableClassification] = field(default_factory=dict, compare=False)

    def names(self, kind: VariableType) -> list[str]:
        return [v.name for v in self.by_name.values() if v.type is kind]

    def to_dict(self) -> dict[str, Any]:
        return {
            'quantitative': [v.to_dict() for v in self.quantitative],
            'qualitative': [v.to_dict() for v in self.qualitative],
            'datetime': [v.to_dict() for v in self.datetime],
            'binary': [v.to_dict() for v in self.binary],
            'ordinal': [v.to_dict() for v in self.ordinal],
        }


def parse_date(cell: Any) -> 'pd.Timestamp | None':
    """
    Best-effort calendar date parse of a text cell.

    Only strings that look like dates are tried: a digit group with a date
    separator (2024-01-15, 15/01/2024) or a month name. Bare numeric
    strings are never dates. Returns a timezone-naive Timestamp or None.
    """
    if not isinstance(cell, str):
        return None
    text = cell.strip()
    if not text or not _DATE_LIKE.search(text):
        return None
    try:
        float(text)
        return None
    except ValueError:
        pass

    import pandas as pd

    with warnings.catch_warnings():
        # pandas warns when it has to guess the format of a single string
        warnings.simplefilter("ignore", UserWarning)
        ts = pd.to_datetime(text, errors='coerce')
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts


def _distinct(values: Iterable[Cell]) -> list[Cell]:
    seen: set[tuple[CellKind, Any]] = set()
    out: list[Cell] = []
    for v in values:
        key = (cell_kind(v), v)
        if key not in seen:
            seen.add(key)
            out.append(v)
    return out


def _is_datetime_column(values: list[Cell]) -> bool:
    sample = values[:DATE_SAMPLE_SIZE]
    hits = sum(1 for v in sample if parse_date(v) is not None)
    return hits / len(sample) >= DATE_RATIO


def _is_ordinal(distinct: list[Cell]) -> bool:
    return any(
        all(pattern.match(str(v)) for v in distinct)
        for pattern in ORDINAL_PATTERNS
    )


def classify_variable(values: Iterable[Any], name: str) -> VariableClassification:
    """
    Classify one column.

    Args:
        values: Column cells; missing cells (None, NaN) are ignored
        name: Column name carried into the record

    Returns:
        VariableClassification
    """
    cells = [v for v in values if cell_kind(v) is not CellKind.NULL]
    if not cells:
        return VariableClassification(name=name, type=VariableType.EMPTY)

    distinct = _distinct(cells)
    unique_count = len(distinct)

    if _is_datetime_column(cells):
        return VariableClassification(
            name=name, type=VariableType.DATETIME, unique_count=unique_count,
        )

    numeric = [float(v) for v in cells if is_numeric(v)]
    if len(numeric) / len(cells) > NUMERIC_RATIO:
        integers = sum(1 for v in numeric if float(v).is_integer())
        subtype = "discrete" if integers / len(numeric) >= INTEGER_RATIO else "continuous"
        return VariableClassification(
            name=name,
            type=VariableType.QUANTITATIVE,
            subtype=subtype,
            unique_count=unique_count,
            range=(min(numeric), max(numeric)),
        )

    if unique_count == 2:
        return VariableClassification(
            name=name, type=VariableType.BINARY,
            unique_count=unique_count, categories=tuple(distinct),
        )

    if _is_ordinal(distinct):
        return VariableClassification(
            name=name, type=VariableType.ORDINAL,
            unique_count=unique_count, categories=tuple(distinct),
        )

    return VariableClassification(
        name=name,
        type=VariableType.QUALITATIVE,
        subtype="nominal_many" if unique_count > MANY_CATEGORIES else "nominal",
        unique_count=unique_count,
        categories=tuple(distinct[:MAX_CATEGORIES]),
    )


def classify_variables(data: Dataset | Any) -> VariableTypes:
    """Classify every column of a dataset, in header order."""
    ds = as_dataset(data)
    groups: dict[VariableType, list[VariableClassification]] = {t: [] for t in VariableType}
    # empty columns are grouped with the qualitative ones, in header order
    groups[VariableType.EMPTY] = groups[VariableType.QUALITATIVE]
    by_name: dict[str, VariableClassification] = {}
    for header in ds.headers:
        record = classify_variable(ds.column(header), header)
        groups[record.type].append(record)
        by_name[header] = record
    return VariableTypes(
        quantitative=tuple(groups[VariableType.QUANTITATIVE]),
        qualitative=tuple(groups[VariableType.QUALITATIVE]),
        datetime=tuple(groups[VariableType.DATETIME]),
        binary=tuple(groups[VariableType.BINARY]),
        ordinal=tuple(groups[VariableType.ORDINAL]),
        by_name=by_name,
    )
