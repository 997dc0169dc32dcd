"""
Dataset and argument validators.

validate_dataset() reports on the structure of a dataset without raising;
the validate_* guards raise on the precondition they check, in the
"fail fast, fail loud" manner of statinsight.core.validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

import numpy as np
from numpy.typing import NDArray

from statinsight.core.dataset import Dataset
from statinsight.core.exceptions import (
    DegenerateInputError,
    DimensionError,
    InsufficientDataError,
    StructuralError,
    ValidationError,
)
from statinsight.core.validation import (
    check_confidence,
    check_consistent_length,
    check_min_samples,
    finite_values,
)
from statinsight.hypothesis._common import TTestKind
from statinsight.hypothesis.design import MIN_CONTINGENCY_OBSERVATIONS


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validate_dataset(). valid is True iff there are no errors."""
    errors: tuple[str, ...]
    warnings: tuple[str, ...]

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            'valid': self.valid,
            'errors': list(self.errors),
            'warnings': list(self.warnings),
        }


@dataclass(frozen=True)
class NumericColumnCheck:
    """Finite numeric cells of a column and how many cells were dropped."""
    values: NDArray[np.float64]
    valid_count: int
    invalid_count: int


def validate_dataset(data: Dataset | Mapping[str, Any] | Any) -> ValidationReport:
    """
    Check the dataset structure.

    Errors: not a mapping, missing headers array, missing data array,
    duplicate headers. Warnings: no rows, and per row the headers it lacks
    and the keys it carries that are not headers.
    """
    errors: list[str] = []
    warnings_list: list[str] = []

    if isinstance(data, Dataset):
        headers: Sequence[Any] | None = data.headers
        rows: Sequence[Any] | None = data.rows
    elif isinstance(data, Mapping):
        headers = data.get("headers")
        rows = data.get("data")
        if not isinstance(rows, (list, tuple)):
            errors.append("Dataset must contain a data array")
            rows = None
        if not isinstance(headers, (list, tuple)):
            errors.append("Dataset must contain a headers array")
            headers = None
    else:
        return ValidationReport(errors=("Dataset must be an object",), warnings=())

    if rows is not None and len(rows) == 0:
        warnings_list.append("Dataset is empty")

    if rows is not None and headers is not None:
        if len(set(headers)) != len(headers):
            errors.append("Duplicate column headers found")

        header_set = set(headers)
        for index, row in enumerate(rows):
            if not isinstance(row, Mapping):
                errors.append(f"Row {index}: must be an object, got {type(row).__name__}")
                continue
            missing = [h for h in headers if h not in row]
            extra = [k for k in row if k not in header_set]
            if missing:
                warnings_list.append(f"Row {index}: Missing columns: {', '.join(map(str, missing))}")
            if extra:
                warnings_list.append(f"Row {index}: Extra columns: {', '.join(map(str, extra))}")

    return ValidationReport(errors=tuple(errors), warnings=tuple(warnings_list))


def require_valid(data: Dataset | Mapping[str, Any]) -> Dataset:
    """
    Validate and convert to a Dataset.

    Raises:
        StructuralError: If validate_dataset() reports errors
    """
    report = validate_dataset(data)
    if not report.valid:
        raise StructuralError(
            "Invalid dataset: " + "; ".join(report.errors),
            errors=list(report.errors),
        )
    if isinstance(data, Dataset):
        return data
    return Dataset.from_dict(data)


def validate_numeric_column(column: Sequence[Any], name: str = "column") -> NumericColumnCheck:
    """
    Raises:
        InsufficientDataError: If the column holds no finite number
    """
    values = finite_values(column, name)
    return NumericColumnCheck(
        values=values,
        valid_count=len(values),
        invalid_count=len(column) - len(values),
    )


def validate_sample_size(sample: Sequence[Any], min_size: int = 2, name: str = "sample") -> None:
    if len(sample) < min_size:
        raise InsufficientDataError(
            f"{name}: sample size ({len(sample)}) must be at least {min_size}",
            required=min_size,
            actual=len(sample),
        )


def validate_confidence_level(confidence: float) -> float:
    """Raises DomainError unless 0 < confidence < 1."""
    return check_confidence(confidence)


def validate_paired_columns(
    x: Sequence[Any],
    y: Sequence[Any],
    *,
    min_pairs: int = 3,
) -> None:
    """
    Guard for correlation and regression inputs.

    Raises:
        DimensionError: If the columns differ in length
        InsufficientDataError: If either column has no number, or the
            columns are shorter than min_pairs
    """
    validate_numeric_column(x, "x")
    validate_numeric_column(y, "y")
    check_consistent_length(x, y, names=("x", "y"))
    validate_sample_size(x, min_pairs, "paired observations")


def validate_regression_inputs(x: Sequence[Any], y: Sequence[Any]) -> None:
    """validate_paired_columns() plus non-zero variance of x."""
    validate_paired_columns(x, y)
    xs = finite_values(x, "x")
    if len(xs) < 2 or float(np.var(xs, ddof=1)) == 0.0:
        raise DegenerateInputError(
            "X values must have non-zero variance",
            quantity="variance of x",
        )


def validate_anova_groups(groups: Sequence[Sequence[Any]]) -> None:
    """
    Raises:
        StructuralError: If fewer than 2 groups are given
        InsufficientDataError: If a group has fewer than 2 finite values
    """
    if isinstance(groups, (str, bytes)) or len(groups) < 2:
        raise StructuralError(
            "ANOVA requires at least 2 groups",
            errors=["ANOVA requires at least 2 groups"],
        )
    for index, group in enumerate(groups, start=1):
        values = validate_numeric_column(group, f"group {index}").values
        check_min_samples(values, 2, f"group {index}")


def validate_hypothesis_inputs(
    sample1: Sequence[Any],
    sample2: Sequence[Any] | None = None,
    test_type: TTestKind | str = TTestKind.ONE_SAMPLE,
) -> None:
    """
    Guard for t_test() inputs.

    Raises:
        ValidationError: If test_type is unknown
        StructuralError: If a two-sample or paired test lacks sample2
        DimensionError: If paired samples differ in length
        InsufficientDataError: If a sample has fewer than 2 cells or no numbers
    """
    try:
        kind = TTestKind(test_type)
    except ValueError:
        raise ValidationError(
            f"Unknown t-test type {test_type!r}. Use: one-sample, two-sample, or paired"
        ) from None

    validate_sample_size(sample1, 2, "sample1")
    if kind is not TTestKind.ONE_SAMPLE:
        if sample2 is None:
            raise StructuralError(
                f"{kind.value} t-test requires a second sample",
                errors=["missing second sample"],
            )
        validate_sample_size(sample2, 2, "sample2")
        if kind is TTestKind.PAIRED and len(sample1) != len(sample2):
            raise DimensionError(
                f"Paired samples must have the same length, "
                f"got {len(sample1)} and {len(sample2)}"
            )

    validate_numeric_column(sample1, "sample1")
    if sample2 is not None:
        validate_numeric_column(sample2, "sample2")


def validate_contingency_columns(col1: Sequence[Any], col2: Sequence[Any]) -> None:
    """
    Raises:
        DimensionError: If the columns differ in length
        InsufficientDataError: If there are fewer than 5 observations
    """
    check_consistent_length(col1, col2, names=("col1", "col2"))
    validate_sample_size(col1, MIN_CONTINGENCY_OBSERVATIONS, "contingency columns")
