"""
Tests for linear_regression().

Tests the complete pipeline: design construction, backend selection and
solution properties. Reference values from scipy.stats.linregress.
"""

import numpy as np
import pytest
from scipy import stats

from statinsight.core.exceptions import (
    DegenerateInputError,
    DimensionError,
    InsufficientDataError,
    ValidationError,
)
from statinsight.regression import RegressionDesign, RegressionSolution, linear_regression


@pytest.fixture
def noisy_line(rng):
    x = rng.uniform(0, 10, size=50)
    y = 1.5 + 0.8 * x + rng.normal(scale=1.0, size=50)
    return x, y


class TestFitBasic:
    """Basic linear_regression() functionality."""

    def test_matches_linregress(self, noisy_line):
        x, y = noisy_line
        fit = linear_regression(x, y)
        expected = stats.linregress(x, y)
        assert isinstance(fit, RegressionSolution)
        assert fit.slope == pytest.approx(expected.slope, rel=1e-10)
        assert fit.intercept == pytest.approx(expected.intercept, rel=1e-10)
        assert fit.correlation == pytest.approx(expected.rvalue, rel=1e-10)
        assert fit.se_slope == pytest.approx(expected.stderr, rel=1e-10)
        assert fit.se_intercept == pytest.approx(expected.intercept_stderr, rel=1e-10)
        assert fit.p_value_slope == pytest.approx(expected.pvalue, abs=1e-8)

    def test_from_design(self, noisy_line):
        x, y = noisy_line
        design = RegressionDesign.for_pair(x, y)
        assert design.X.shape == (50, 2)
        assert linear_regression(design).slope == pytest.approx(linear_regression(x, y).slope)

    def test_exact_line(self):
        fit = linear_regression([1, 2, 3, 4, 5], [3, 5, 7, 9, 11])
        assert fit.slope == pytest.approx(2.0)
        assert fit.intercept == pytest.approx(1.0)
        assert fit.r_squared == pytest.approx(1.0)
        assert fit.predict(10) == pytest.approx(21.0)

    def test_incomplete_pairs_dropped(self):
        fit = linear_regression([1, 2, None, 4, 5], [2.0, 4.1, 5.0, "n/a", 9.8])
        assert fit.n == 3
        assert fit.df_residual == 1

    def test_requires_y(self):
        with pytest.raises(ValidationError, match="y is required"):
            linear_regression([1, 2, 3])

    def test_unknown_backend(self):
        with pytest.raises(ValidationError, match="Unknown backend"):
            linear_regression([1, 2, 3], [1, 2, 4], backend="gpu")


class TestFitProperties:
    """Derived properties of RegressionSolution."""

    def test_residuals_sum_to_zero(self, noisy_line):
        fit = linear_regression(*noisy_line)
        assert abs(fit.residuals.sum()) < 1e-10
        np.testing.assert_allclose(fit.fitted_values + fit.residuals, noisy_line[1])

    def test_goodness_of_fit(self, noisy_line):
        x, y = noisy_line
        fit = linear_regression(x, y)
        assert fit.r_squared == pytest.approx(fit.correlation ** 2)
        assert fit.r_squared == pytest.approx(1 - fit.rss / fit.tss)
        n = 50
        assert fit.adjusted_r_squared == pytest.approx(
            1 - (1 - fit.r_squared) * (n - 1) / (n - 2)
        )
        assert fit.rmse == pytest.approx(np.sqrt(fit.rss / 48))

    def test_f_equals_t_squared(self, noisy_line):
        fit = linear_regression(*noisy_line)
        assert fit.f_statistic == pytest.approx(fit.t_slope ** 2, rel=1e-10)
        assert fit.p_value_model == pytest.approx(fit.p_value_slope, abs=1e-8)
        assert fit.p_value == fit.p_value_model
        assert fit.significant

    def test_p_values_in_zero_one(self, noisy_line):
        pv = linear_regression(*noisy_line).p_values
        assert np.all((pv >= 0.0) & (pv <= 1.0))

    def test_predict_vector(self, noisy_line):
        fit = linear_regression(*noisy_line)
        np.testing.assert_allclose(fit.predict([0.0, 1.0]), [fit.intercept, fit.intercept + fit.slope])

    def test_equation(self):
        fit = linear_regression([1, 2, 3, 4, 5], [3, 5, 7, 9, 11])
        assert fit.equation == "y = 1.0000 + 2.0000x"

    def test_unrelated_not_significant(self):
        fit = linear_regression([1, 2, 3, 4, 5, 6], [2, 5, 1, 6, 3, 4])
        assert not fit.significant


class TestResidualAnalysis:

    def test_single_outlier(self):
        x = list(range(1, 11))
        y = list(range(1, 11))
        y[4] = 20
        analysis = linear_regression(x, y).residual_analysis
        assert [i for i, _ in analysis.outliers] == [4]
        assert analysis.outliers[0][1] > 2.0

    def test_durbin_watson(self, noisy_line):
        fit = linear_regression(*noisy_line)
        e = fit.residuals
        expected = np.sum(np.diff(e) ** 2) / np.sum(e ** 2)
        assert fit.residual_analysis.durbin_watson == pytest.approx(expected)
        assert 0.0 < fit.residual_analysis.durbin_watson < 4.0

    def test_standardized(self, noisy_line):
        analysis = linear_regression(*noisy_line).residual_analysis
        assert np.std(analysis.standardized, ddof=1) == pytest.approx(1.0)
        assert analysis.mean == pytest.approx(0.0, abs=1e-10)

    def test_residual_normality(self, noisy_line):
        analysis = linear_regression(*noisy_line).residual_analysis
        assert analysis.residual_normality is not None
        assert 0.0 <= analysis.residual_normality.p_value <= 1.0

    def test_no_normality_below_four(self):
        analysis = linear_regression([1, 2, 3], [1, 3, 2]).residual_analysis
        assert analysis.residual_normality is None


class TestRecord:

    def test_to_dict(self, noisy_line):
        record = linear_regression(*noisy_line).to_dict()
        assert record["type"] == "regression"
        assert record["sampleSize"] == 50
        assert record["degreesOfFreedom"] == 48
        assert len(record["residuals"]) == 50
        assert "durbinWatson" in record["residualAnalysis"]
        assert "normalityTest" in record["residualAnalysis"]

    def test_summary(self, noisy_line):
        text = linear_regression(*noisy_line).summary()
        assert "Simple Linear Regression Results" in text
        assert "(Intercept)" in text
        assert "Durbin-Watson" in text


class TestErrors:

    def test_constant_x(self):
        with pytest.raises(DegenerateInputError, match="zero variance"):
            linear_regression([3, 3, 3, 3], [1, 2, 3, 4])

    def test_too_few_pairs(self):
        with pytest.raises(InsufficientDataError):
            linear_regression([1, 2], [3, 4])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            linear_regression([1, 2, 3, 4], [1, 2, 3])
