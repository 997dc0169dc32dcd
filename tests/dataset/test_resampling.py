"""Tests for bootstrap() and sample()."""

import numpy as np
import pytest

from statinsight.core.dataset import Dataset
from statinsight.core.exceptions import ValidationError
from statinsight.dataset import BOOTSTRAP_ITERATIONS, bootstrap, sample


class TestBootstrap:

    def test_reproducible_with_seed(self, rng):
        x = rng.normal(10, 2, size=40)
        a = bootstrap(x, "mean", iterations=200, seed=7)
        b = bootstrap(x, "mean", iterations=200, seed=7)
        np.testing.assert_array_equal(a.statistics, b.statistics)

    def test_replicates_sorted(self, rng):
        result = bootstrap(rng.normal(size=30), "median", iterations=100, seed=1)
        assert np.all(np.diff(result.statistics) >= 0)
        assert result.iterations == 100
        assert len(result.statistics) == 100

    def test_interval_brackets_estimate(self, rng):
        x = rng.normal(5, 1, size=100)
        result = bootstrap(x, seed=3)
        assert result.iterations == BOOTSTRAP_ITERATIONS
        assert result.original == pytest.approx(np.mean(x))
        assert result.ci_lower < result.original < result.ci_upper
        # standard error of the mean is about 0.1
        assert 0.05 < result.standard_error < 0.2

    def test_constant_sample(self):
        result = bootstrap([3, 3, 3, 3], "mean", iterations=50, seed=0)
        assert result.standard_error == 0.0
        assert result.bias == 0.0
        assert result.ci_lower == result.ci_upper == 3.0

    def test_callable_statistic(self):
        result = bootstrap([1, 2, 3, 4, 5], lambda v: float(v.max()), iterations=50, seed=0)
        assert result.original == 5.0
        assert result.statistics.max() <= 5.0

    def test_unknown_statistic(self):
        with pytest.raises(ValidationError, match="Unknown statistic"):
            bootstrap([1, 2, 3], "mode")

    def test_iterations(self):
        with pytest.raises(ValidationError):
            bootstrap([1, 2, 3], iterations=1)

    def test_to_dict(self):
        record = bootstrap([1, 2, 3, 4], iterations=20, seed=0).to_dict()
        assert set(record) == {"mean", "standardError", "bias", "confidenceInterval", "iterations"}


@pytest.fixture
def ten_rows():
    return Dataset(("i",), tuple({"i": i} for i in range(10)))


class TestSample:

    def test_first_and_last(self, ten_rows):
        assert sample(ten_rows, 3, "first").column("i") == (0, 1, 2)
        assert sample(ten_rows, 3, "last").column("i") == (7, 8, 9)

    def test_systematic(self, ten_rows):
        assert sample(ten_rows, 3, "systematic").column("i") == (0, 3, 6)
        assert sample(ten_rows, 5, "systematic").column("i") == (0, 2, 4, 6, 8)

    def test_random_without_replacement(self, ten_rows):
        drawn = sample(ten_rows, 6, "random", seed=11).column("i")
        assert len(drawn) == 6
        assert len(set(drawn)) == 6
        assert drawn == sample(ten_rows, 6, "random", seed=11).column("i")

    def test_size_at_least_n(self, ten_rows):
        assert sample(ten_rows, 10) is ten_rows
        assert sample(ten_rows, 50, "last") is ten_rows

    def test_headers_kept(self, ten_rows):
        assert sample(ten_rows, 2, "first").headers == ("i",)

    def test_accepts_dict(self):
        data = {"headers": ["a"], "data": [{"a": 1}, {"a": 2}, {"a": 3}]}
        assert sample(data, 1, "last").column("a") == (3,)

    def test_bad_size(self, ten_rows):
        with pytest.raises(ValidationError):
            sample(ten_rows, 0)
        with pytest.raises(ValidationError):
            sample(ten_rows, 2.5)

    def test_bad_method(self, ten_rows):
        with pytest.raises(ValidationError, match="Unknown sampling method"):
            sample(ten_rows, 2, "stratified")
