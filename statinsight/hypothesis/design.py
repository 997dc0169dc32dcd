"""
HypothesisDesign: tagged union for hypothesis test inputs.

Uses factory classmethods per test type. The `test_type` field identifies
which fields are populated. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence
import numpy as np
from numpy.typing import NDArray, ArrayLike

from statinsight.core.dataset import CellKind, category_key, cell_kind
from statinsight.core.exceptions import (
    DegenerateInputError,
    DimensionError,
    InsufficientDataError,
    StructuralError,
    ValidationError,
)
from statinsight.core.validation import (
    check_alpha,
    check_consistent_length,
    check_min_samples,
    check_positive,
    finite_values,
    is_numeric,
)
from statinsight.hypothesis._common import TTestKind

MIN_CONTINGENCY_OBSERVATIONS = 5


def _first_seen(values: Iterable[Any]) -> dict[tuple[CellKind, Any], Any]:
    """Distinct categories in order of first appearance, keyed by category_key."""
    seen: dict[tuple[CellKind, Any], Any] = {}
    for v in values:
        seen.setdefault(category_key(v), v)
    return seen


def _cells(values: Any) -> list[Any]:
    if hasattr(values, 'tolist'):
        return values.tolist()
    return list(values)


@dataclass(frozen=True)
class HypothesisDesign:
    """
    Design for hypothesis tests.

    Uses a tagged-union approach: the `test_type` field identifies which
    fields are populated. Factory classmethods validate inputs.

    Do not construct directly; use factory classmethods.
    """
    test_type: str

    # Numeric vectors
    _x: NDArray[np.floating[Any]] | None = None
    _y: NDArray[np.floating[Any]] | None = None
    _groups: tuple[NDArray[np.floating[Any]], ...] | None = None

    # Test configuration
    _mu: float = 0.0
    _var_equal: bool = False
    _population_std: float | None = None
    _alpha: float = 0.05

    # Contingency table
    _table: NDArray[np.floating[Any]] | None = None
    _row_labels: tuple[Any, ...] | None = None
    _col_labels: tuple[Any, ...] | None = None

    # Metadata
    _data_name: str = ""

    # --- Properties ---

    @property
    def x(self) -> NDArray[np.floating[Any]] | None:
        return self._x

    @property
    def y(self) -> NDArray[np.floating[Any]] | None:
        return self._y

    @property
    def groups(self) -> tuple[NDArray[np.floating[Any]], ...] | None:
        return self._groups

    @property
    def mu(self) -> float:
        return self._mu

    @property
    def var_equal(self) -> bool:
        return self._var_equal

    @property
    def population_std(self) -> float | None:
        return self._population_std

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def table(self) -> NDArray[np.floating[Any]] | None:
        return self._table

    @property
    def row_labels(self) -> tuple[Any, ...] | None:
        return self._row_labels

    @property
    def col_labels(self) -> tuple[Any, ...] | None:
        return self._col_labels

    @property
    def data_name(self) -> str:
        return self._data_name

    # --- Factory classmethods ---

    @classmethod
    def for_t_test(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        test_type: TTestKind | str | None = None,
        mu: float = 0.0,
        var_equal: bool = False,
        alpha: float = 0.05,
    ) -> HypothesisDesign:
        """
        Build design for t_test().

        test_type defaults to one-sample without y and two-sample with y.
        For the paired test, x and y must have the same length; pairs with
        a missing or non-numeric side are skipped and design.x holds the
        differences x - y.
        """
        alpha = check_alpha(alpha)
        if test_type is None:
            kind = TTestKind.ONE_SAMPLE if y is None else TTestKind.TWO_SAMPLE
        else:
            try:
                kind = TTestKind(test_type)
            except ValueError:
                raise ValidationError(
                    f"Unknown t-test type {test_type!r}. "
                    "Use: one-sample, two-sample, or paired"
                ) from None

        if not is_numeric(mu):
            raise ValidationError(f"mu: must be a finite number, got {mu!r}")

        if kind is TTestKind.ONE_SAMPLE:
            x_arr = finite_values(x, "x")
            check_min_samples(x_arr, 2, "x")
            return cls(
                test_type=kind.value,
                _x=x_arr,
                _mu=float(mu),
                _alpha=alpha,
                _data_name="x",
            )

        if y is None:
            raise StructuralError(
                f"{kind.value} t-test requires a second sample y",
                errors=["missing second sample"],
            )

        if kind is TTestKind.TWO_SAMPLE:
            x_arr = finite_values(x, "x")
            y_arr = finite_values(y, "y")
            check_min_samples(x_arr, 2, "x")
            check_min_samples(y_arr, 2, "y")
            return cls(
                test_type=kind.value,
                _x=x_arr,
                _y=y_arr,
                _mu=float(mu),
                _var_equal=var_equal,
                _alpha=alpha,
                _data_name="x and y",
            )

        x_cells = _cells(x)
        y_cells = _cells(y)
        check_consistent_length(x_cells, y_cells, names=("x", "y"))
        diffs = np.array(
            [float(a) - float(b) for a, b in zip(x_cells, y_cells)
             if is_numeric(a) and is_numeric(b)],
            dtype=np.float64,
        )
        if len(diffs) < 2:
            raise InsufficientDataError(
                f"paired t-test: need at least 2 valid pairs, got {len(diffs)}",
                required=2,
                actual=len(diffs),
            )
        return cls(
            test_type=kind.value,
            _x=diffs,
            _mu=float(mu),
            _alpha=alpha,
            _data_name="x and y",
        )

    @classmethod
    def for_z_test(
        cls,
        x: ArrayLike,
        *,
        mu: float,
        population_std: float,
        alpha: float = 0.05,
    ) -> HypothesisDesign:
        """Build design for z_test()."""
        alpha = check_alpha(alpha)
        sigma = check_positive(population_std, "population_std")
        if not is_numeric(mu):
            raise ValidationError(f"mu: must be a finite number, got {mu!r}")
        x_arr = finite_values(x, "x")
        return cls(
            test_type="z-test",
            _x=x_arr,
            _mu=float(mu),
            _population_std=sigma,
            _alpha=alpha,
            _data_name="x",
        )

    @classmethod
    def for_anova(
        cls,
        groups: Sequence[ArrayLike],
        *,
        alpha: float = 0.05,
    ) -> HypothesisDesign:
        """
        Build design for anova_oneway().

        Raises
        ------
        StructuralError
            If fewer than 2 groups are given.
        InsufficientDataError
            If any group has fewer than 2 finite values.
        """
        alpha = check_alpha(alpha)
        groups = list(groups)
        if len(groups) < 2:
            raise StructuralError(
                f"ANOVA requires at least 2 groups, got {len(groups)}",
                errors=["ANOVA requires at least 2 groups"],
            )
        arrays = []
        for i, g in enumerate(groups, start=1):
            arr = finite_values(g, f"group {i}")
            check_min_samples(arr, 2, f"group {i}")
            arrays.append(arr)
        return cls(
            test_type="one-way-anova",
            _groups=tuple(arrays),
            _alpha=alpha,
            _data_name=f"{len(arrays)} groups",
        )

    @classmethod
    def for_chisq_test(
        cls,
        x: ArrayLike,
        y: ArrayLike | None = None,
        *,
        alpha: float = 0.05,
    ) -> HypothesisDesign:
        """
        Build design for chisq_test().

        Either two parallel columns of categories (cross-tabulated with
        categories in first-seen order, pairs with a missing side skipped)
        or a 2D table of counts.
        """
        alpha = check_alpha(alpha)

        if y is None:
            table = np.asarray(x, dtype=np.float64)
            if table.ndim != 2:
                raise DimensionError(
                    f"chisq_test: expected a 2D table or two columns, got {table.ndim}D x"
                )
            if table.shape[0] < 2 or table.shape[1] < 2:
                raise DimensionError(
                    "Contingency table must have at least 2 rows and 2 columns, "
                    f"got {table.shape}"
                )
            if not np.all(np.isfinite(table)) or np.any(table < 0):
                raise ValidationError(
                    "All entries in contingency table must be finite and non-negative"
                )
            row_labels = tuple(range(table.shape[0]))
            col_labels = tuple(range(table.shape[1]))
            data_name = "x"
        else:
            x_cells = _cells(x)
            y_cells = _cells(y)
            check_consistent_length(x_cells, y_cells, names=("x", "y"))
            pairs = [(a, b) for a, b in zip(x_cells, y_cells)
                     if cell_kind(a) is not CellKind.NULL and cell_kind(b) is not CellKind.NULL]
            if len(pairs) < MIN_CONTINGENCY_OBSERVATIONS:
                raise InsufficientDataError(
                    f"chisq_test: need at least {MIN_CONTINGENCY_OBSERVATIONS} "
                    f"paired observations, got {len(pairs)}",
                    required=MIN_CONTINGENCY_OBSERVATIONS,
                    actual=len(pairs),
                )
            row_seen = _first_seen(a for a, _ in pairs)
            col_seen = _first_seen(b for _, b in pairs)
            row_labels = tuple(row_seen.values())
            col_labels = tuple(col_seen.values())
            row_index = {k: i for i, k in enumerate(row_seen)}
            col_index = {k: j for j, k in enumerate(col_seen)}
            table = np.zeros((len(row_labels), len(col_labels)), dtype=np.float64)
            for a, b in pairs:
                table[row_index[category_key(a)], col_index[category_key(b)]] += 1.0
            data_name = "x and y"

        if table.shape[0] < 2 or table.shape[1] < 2:
            raise DegenerateInputError(
                "chisq_test: each variable needs at least 2 categories, "
                f"got {table.shape[0]} x {table.shape[1]}",
                quantity="categories",
            )
        if np.any(table.sum(axis=1) == 0) or np.any(table.sum(axis=0) == 0):
            raise DegenerateInputError(
                "chisq_test: contingency table has an empty row or column",
                quantity="marginal total",
            )

        return cls(
            test_type="chi-square-independence",
            _table=table,
            _row_labels=row_labels,
            _col_labels=col_labels,
            _alpha=alpha,
            _data_name=data_name,
        )

    @classmethod
    def for_mann_whitney(
        cls,
        x: ArrayLike,
        y: ArrayLike,
        *,
        alpha: float = 0.05,
    ) -> HypothesisDesign:
        """Build design for mann_whitney()."""
        alpha = check_alpha(alpha)
        x_arr = finite_values(x, "x")
        y_arr = finite_values(y, "y")
        return cls(
            test_type="mann-whitney-u",
            _x=x_arr,
            _y=y_arr,
            _alpha=alpha,
            _data_name="x and y",
        )
