"""Tests for detect_outliers()."""

import pytest

from statinsight.core.exceptions import InsufficientDataError, ValidationError
from statinsight.dataset import detect_outliers


SCENARIO = [1, 2, 3, 4, 5, 6, 7, 8, 9, 100]


class TestIQR:

    def test_single_extreme_value(self):
        report = detect_outliers(SCENARIO)
        assert report.count == 1
        assert report.outliers == (100.0,)
        assert report.indices == (9,)
        assert report.percentage == pytest.approx(10.0)

    def test_fences(self):
        # Q1 = 3.25, Q3 = 7.75, IQR = 4.5
        report = detect_outliers(SCENARIO, "iqr")
        assert report.lower_bound == pytest.approx(-3.5)
        assert report.upper_bound == pytest.approx(14.5)

    def test_indices_refer_to_original_positions(self):
        column = [1, None, 2, "x", 3, 4, 5, 6, 7, 8, 9, 100]
        report = detect_outliers(column)
        assert report.indices == (11,)
        assert report.n == 10
        assert report.percentage == pytest.approx(10.0)

    def test_low_outlier(self):
        report = detect_outliers([-50, 10, 11, 12, 13, 14, 15, 16])
        assert report.outliers == (-50.0,)

    def test_no_outliers(self):
        report = detect_outliers([1, 2, 3, 4, 5])
        assert report.count == 0
        assert report.percentage == 0.0


class TestZScore:

    def test_flags_far_value(self):
        column = [10, 11, 9, 10, 12, 8, 10, 11, 9, 10] * 3 + [40]
        report = detect_outliers(column, "zscore")
        assert report.indices == (30,)
        assert report.lower_bound is None

    def test_small_sample_cannot_reach_three(self):
        """With n = 10 no z-score can exceed (n - 1) / sqrt(n) < 3."""
        assert detect_outliers(SCENARIO, "zscore").count == 0

    def test_constant_column(self):
        assert detect_outliers([4, 4, 4, 4], "zscore").count == 0


class TestModifiedZScore:

    def test_flags_far_value(self):
        # median 5.5, MAD 2.5: score of 100 is 0.6745 * 94.5 / 2.5
        report = detect_outliers(SCENARIO, "modified_zscore")
        assert report.outliers == (100.0,)

    def test_zero_mad_flags_everything_off_median(self):
        report = detect_outliers([5, 5, 5, 5, 6], "modified_zscore")
        assert report.indices == (4,)


class TestErrors:

    def test_unknown_method(self):
        with pytest.raises(ValidationError, match="Unknown outlier detection method"):
            detect_outliers(SCENARIO, "grubbs")

    def test_no_numbers(self):
        with pytest.raises(InsufficientDataError):
            detect_outliers(["a", None])

    def test_to_dict(self):
        record = detect_outliers(SCENARIO).to_dict()
        assert record == {
            'method': 'iqr',
            'outliers': [100.0],
            'indices': [9],
            'count': 1,
            'percentage': pytest.approx(10.0),
            'lowerBound': pytest.approx(-3.5),
            'upperBound': pytest.approx(14.5),
        }
