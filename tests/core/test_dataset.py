"""
Tests for the Dataset container.
"""

import math

import numpy as np
import pandas as pd
import pytest
from types import MappingProxyType

from statinsight.core.dataset import (
    CellKind,
    Dataset,
    as_dataset,
    cell_kind,
    deduplicate_headers,
    normalize_header,
)
from statinsight.core.exceptions import StructuralError


class TestCellKind:

    @pytest.mark.parametrize("cell, kind", [
        (None, CellKind.NULL),
        (True, CellKind.BOOL),
        (3, CellKind.NUMBER),
        (2.5, CellKind.NUMBER),
        ("x", CellKind.TEXT),
        (math.nan, CellKind.NULL),
        (math.inf, CellKind.NULL),
    ])
    def test_kinds(self, cell, kind):
        assert cell_kind(cell) is kind


class TestConstruction:

    def test_from_dict(self):
        ds = Dataset.from_dict({
            "headers": ["a", "b"],
            "data": [{"a": 1, "b": "x"}, {"a": 2, "b": "y"}],
        })
        assert ds.headers == ("a", "b")
        assert len(ds) == 2
        assert ds.n_observations == 2
        assert ds.column("a") == (1, 2)

    def test_from_dict_missing_arrays(self):
        with pytest.raises(StructuralError) as info:
            Dataset.from_dict({"rows": []})
        assert "Dataset must contain a data array" in info.value.errors
        assert "Dataset must contain a headers array" in info.value.errors

    def test_not_a_mapping(self):
        with pytest.raises(StructuralError):
            Dataset.from_dict([1, 2, 3])

    def test_duplicate_headers(self):
        with pytest.raises(StructuralError, match="Duplicate"):
            Dataset(("a", "a"), ())

    def test_from_records_header_order(self):
        ds = Dataset.from_records([{"b": 1}, {"a": 2, "b": 3}])
        assert ds.headers == ("b", "a")
        assert ds.column("a") == (None, 2)

    def test_as_dataset_passthrough(self):
        ds = Dataset(("a",), ({"a": 1},))
        assert as_dataset(ds) is ds
        assert as_dataset({"headers": ["a"], "data": [{"a": 1}]}).headers == ("a",)


class TestImmutability:

    def test_rows_are_read_only(self):
        ds = Dataset(("a",), ({"a": 1},))
        assert isinstance(ds.rows[0], MappingProxyType)
        with pytest.raises(TypeError):
            ds.rows[0]["a"] = 5

    def test_source_dict_not_shared(self):
        row = {"a": 1}
        ds = Dataset(("a",), (row,))
        row["a"] = 99
        assert ds.column("a") == (1,)


class TestAccess:

    def test_unknown_column(self):
        ds = Dataset(("a",), ({"a": 1},))
        with pytest.raises(KeyError, match="Available"):
            ds.column("zzz")

    def test_numeric_column_filters(self):
        ds = Dataset(("a",), ({"a": 1}, {"a": "x"}, {"a": None}, {"a": 2.5}, {"a": True}))
        np.testing.assert_array_equal(ds.numeric_column("a"), [1.0, 2.5])

    def test_contains(self):
        ds = Dataset(("a",), ())
        assert "a" in ds
        assert "b" not in ds

    def test_to_dict_round_shape(self):
        ds = Dataset(("a",), ({"a": 1},))
        assert ds.to_dict() == {"headers": ["a"], "data": [{"a": 1}]}


class TestDataFrame:

    def test_nan_becomes_none(self):
        df = pd.DataFrame({"x": [1.0, np.nan, 3.0], "y": ["a", None, "c"]})
        ds = Dataset.from_dataframe(df)
        assert ds.column("x") == (1.0, None, 3.0)
        assert ds.column("y") == ("a", None, "c")
        assert ds.metadata["source"] == "dataframe"

    def test_numpy_scalars_unwrapped(self):
        df = pd.DataFrame({"n": np.array([1, 2], dtype=np.int64)})
        ds = Dataset.from_dataframe(df)
        assert all(type(v) is int for v in ds.column("n"))

    def test_normalize_headers(self):
        df = pd.DataFrame([[1, 2, 3]], columns=["Total Sales", "total sales", "Price ($)"])
        ds = Dataset.from_dataframe(df, normalize=True)
        assert ds.headers == ("total_sales", "total_sales_2", "price_")
        assert ds.metadata["original_headers"] == ["Total Sales", "total sales", "Price ($)"]

    def test_from_file_csv(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("Height,Group\n1.5,a\n1.7,b\n")
        ds = Dataset.from_file(path)
        assert ds.headers == ("height", "group")
        assert ds.column("height") == (1.5, 1.7)


class TestHeaderHelpers:

    def test_normalize_header(self):
        assert normalize_header("  Unit  Price! ") == "unit_price"

    def test_deduplicate(self):
        assert deduplicate_headers(["a", "a", "a", "b"]) == ["a", "a_2", "a_3", "b"]
