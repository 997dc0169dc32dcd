"""Tests for anova_oneway()."""

import numpy as np
import pytest
from scipy import stats

from statinsight.core.exceptions import InsufficientDataError, StructuralError, ZeroStdError
from statinsight.hypothesis import anova_oneway


class TestAnovaOneway:

    def test_matches_scipy(self, rng):
        groups = [rng.normal(mu, 1.0, size=n) for mu, n in ((0, 10), (0.5, 12), (1.2, 9))]
        result = anova_oneway(*groups)
        expected = stats.f_oneway(*groups)
        assert result.statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-8)
        assert result.parameter == {"df between": 2.0, "df within": 28.0}

    def test_sums_of_squares(self):
        result = anova_oneway([1, 2, 3], [4, 5, 6], [7, 8, 9])
        e = result.extras
        # group means 2, 5, 8; grand mean 5
        assert e["ss_between"] == pytest.approx(54.0)
        assert e["ss_within"] == pytest.approx(6.0)
        assert e["ss_total"] == pytest.approx(60.0)
        assert e["ms_between"] == pytest.approx(27.0)
        assert e["ms_within"] == pytest.approx(1.0)
        assert result.statistic == pytest.approx(27.0)
        assert result.eta_squared == pytest.approx(0.9)
        assert e["grand_mean"] == pytest.approx(5.0)
        assert e["group_means"] == (2.0, 5.0, 8.0)

    def test_identical_groups(self):
        result = anova_oneway([1, 2, 3, 4], [1, 2, 3, 4])
        assert result.statistic == pytest.approx(0.0)
        assert result.p_value == pytest.approx(1.0)
        assert not result.significant

    def test_record(self):
        record = anova_oneway([1, 2, 3], [4, 5, 6], [7, 8, 9]).to_dict()
        assert record["type"] == "anova"
        assert record["fStatistic"] == pytest.approx(27.0)
        assert record["pValueModel"] == record["pValue"]
        assert record["dfBetween"] == 2.0
        assert record["dfWithin"] == 6.0
        assert record["etaSquared"] == pytest.approx(0.9)
        assert record["sampleSize"] == 9

    def test_unequal_variance_warning(self):
        result = anova_oneway([1, 2, 3, 4], [0, 10, 20, 30])
        assert result.has_warning("equal-variance assumption")

    def test_one_group(self):
        with pytest.raises(StructuralError):
            anova_oneway([1, 2, 3])

    def test_group_too_small(self):
        with pytest.raises(InsufficientDataError):
            anova_oneway([1, 2, 3], [4])

    def test_all_groups_constant(self):
        with pytest.raises(ZeroStdError):
            anova_oneway([2, 2, 2], [5, 5, 5])

    def test_missing_cells_ignored(self):
        a = anova_oneway([1, None, 2, 3], [4, 5, "n/a", 6])
        b = anova_oneway([1, 2, 3], [4, 5, 6])
        assert a.statistic == pytest.approx(b.statistic)
        assert np.isfinite(a.p_value)
