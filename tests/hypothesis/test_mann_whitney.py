"""Tests for mann_whitney()."""

import numpy as np
import pytest
from scipy import stats

from statinsight.core.exceptions import ValidationError
from statinsight.hypothesis import mann_whitney


class TestMannWhitney:

    def test_interleaved_samples(self):
        """Ranks of x are 1, 3, 5, 7: R1 = 16, U1 = 6, U2 = 10."""
        result = mann_whitney([1, 3, 5, 7], [2, 4, 6, 8])
        e = result.extras
        assert e["rank_sum1"] == 16.0
        assert e["u1"] == 6.0
        assert e["u2"] == 10.0
        assert result.statistic == 6.0
        assert not result.significant

    def test_u1_plus_u2(self, rng):
        x = rng.normal(size=11)
        y = rng.normal(size=17)
        e = mann_whitney(x, y).extras
        assert e["u1"] + e["u2"] == pytest.approx(11 * 17)

    def test_matches_scipy_asymptotic(self, rng):
        x = rng.normal(0, 1, size=30)
        y = rng.normal(0.7, 1, size=25)
        result = mann_whitney(x, y)
        expected = stats.mannwhitneyu(
            x, y, alternative="two-sided", method="asymptotic", use_continuity=False,
        )
        assert min(expected.statistic, 30 * 25 - expected.statistic) == result.statistic
        assert result.p_value == pytest.approx(expected.pvalue, abs=1e-6)

    def test_complete_separation(self):
        result = mann_whitney(list(range(1, 11)), list(range(11, 21)))
        assert result.statistic == 0.0
        assert result.significant

    def test_record(self):
        record = mann_whitney([1, 3, 5, 7], [2, 4, 6, 8]).to_dict()
        assert record["type"] == "mann-whitney"
        assert record["U1"] == 6.0
        assert record["U2"] == 10.0
        assert record["sampleSize"] == 8

    def test_small_sample_warning(self):
        assert mann_whitney([1, 3, 5, 7], [2, 4, 6, 8]).has_warning("rough for small samples")

    def test_ties_warning(self):
        result = mann_whitney([1, 2, 2, 3, 4, 5, 6, 7], [2, 3, 8, 9, 10, 11, 12, 13])
        assert result.has_warning("ties present")

    def test_requires_y(self):
        with pytest.raises(ValidationError):
            mann_whitney([1, 2, 3])

    def test_p_value_in_unit_interval(self, rng):
        for _ in range(10):
            x = rng.integers(0, 5, size=9)
            y = rng.integers(0, 5, size=7)
            p = mann_whitney(x, y).p_value
            assert 0.0 <= p <= 1.0 and np.isfinite(p)
