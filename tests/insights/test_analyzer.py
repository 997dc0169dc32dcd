"""
Tests for auto_analyze() and its stage helpers.

The fixture dataset is deterministic: a near-perfect line (x, y), an
unrelated column z, a column w with four extreme values, a nominal and a
binary column and a daily date column.
"""

import pytest

from statinsight.core.dataset import Dataset
from statinsight.core.exceptions import StatInsightError, StructuralError, ValidationError
from statinsight.descriptive import DescriptiveSolution
from statinsight.insights import (
    AnalysisConfig,
    AnalysisReport,
    ColumnFailure,
    Insight,
    Priority,
    auto_analyze,
    executive_summary,
)
from statinsight.insights import analyzer
from statinsight.insights.analyzer import (
    classify_distribution,
    correlation_label,
    outlier_severity,
    sampling_frequency,
)
from statinsight.insights.report import QualitativeSummary, sort_by_priority


N = 30


@pytest.fixture(scope="module")
def dataset():
    rows = []
    for i in range(N):
        x = i + 1
        rows.append({
            "x": x,
            "y": 2 * x + ((i * 7) % 5 - 2),
            "z": (i * 13) % 17,
            "w": x if i < 26 else 1000,
            "cat": "abc"[i % 3],
            "flag": ("yes", "no")[i % 2],
            "date": f"2024-01-{i + 1:02d}",
        })
    return Dataset(("x", "y", "z", "w", "cat", "flag", "date"), tuple(rows))


@pytest.fixture(scope="module")
def report(dataset):
    return auto_analyze(dataset)


class TestClassificationAndDescriptive:

    def test_types(self, report):
        types = report.variable_classification
        assert [v.name for v in types.quantitative] == ["x", "y", "z", "w"]
        assert [v.name for v in types.qualitative] == ["cat"]
        assert [v.name for v in types.binary] == ["flag"]
        assert [v.name for v in types.datetime] == ["date"]

    def test_quantitative_summary(self, report):
        x = report.descriptive["x"]
        assert isinstance(x, DescriptiveSolution)
        assert x.mean == pytest.approx(15.5)
        assert x.count == N

    def test_qualitative_summary(self, report):
        cat = report.descriptive["cat"]
        assert isinstance(cat, QualitativeSummary)
        assert cat.count == N
        assert cat.unique_values == 3
        assert cat.mode == "a"
        assert cat.concentration == pytest.approx(100 / 3)

    def test_datetime_not_described(self, report):
        assert "date" not in report.descriptive


class TestCorrelationAndRegression:

    def test_strong_pair_found(self, report):
        pairs = {(s.variable1, s.variable2) for s in report.correlation.strong_correlations}
        assert ("x", "y") in pairs

    def test_correlation_insight_priority(self, report):
        insight = next(
            i for i in report.correlation.insights if i.variables == ("x", "y")
        )
        assert insight.priority is Priority.HIGH
        assert insight.title.startswith("Very strong correlation")

    def test_regression_model(self, report):
        model = next(m for m in report.regression.models if (m.independent, m.dependent) == ("x", "y"))
        assert model.r_squared > 0.95
        assert model.significant
        assert model.quality == "excellent"
        assert model.solution.slope == pytest.approx(2.0, abs=0.1)

    def test_at_most_five_models(self, report):
        assert len(report.regression.models) <= 5


class TestDistributionOutliersTemporal:

    def test_skewed_column(self, report):
        w = report.distribution["w"]
        assert not w.is_normal
        assert w.distribution_type == "skew_right"
        assert w.recommendation == "Consider a logarithmic transformation to normalize"

    def test_outliers(self, report):
        w = report.outliers["w"]
        assert w.count == 4
        assert w.severity == "high"
        assert w.values == (1000.0,) * 4
        assert report.outliers["x"].count == 0

    def test_temporal(self, report):
        profile = report.temporal["date"]
        assert profile.earliest == "2024-01-01"
        assert profile.latest == "2024-01-30"
        assert profile.span_days == 29
        assert profile.data_points == N


class TestInsights:

    def test_sorted_by_priority(self, report):
        ranks = [i.priority.rank for i in report.insights]
        assert ranks == sorted(ranks, reverse=True)

    def test_equal_priority_keeps_emission_order(self, report):
        emitted = ["overview", "correlation", "distribution", "quality", "modeling"]
        for priority in Priority:
            positions = [
                emitted.index(i.category) for i in report.insights if i.priority is priority
            ]
            assert positions == sorted(positions)

    def test_sort_is_stable(self):
        items = [
            Insight("a", Priority.LOW, "low 1", ""),
            Insight("b", Priority.HIGH, "high 1", ""),
            Insight("c", Priority.MEDIUM, "medium 1", ""),
            Insight("d", Priority.HIGH, "high 2", ""),
            Insight("e", Priority.LOW, "low 2", ""),
            Insight("f", Priority.MEDIUM, "medium 2", ""),
        ]
        titles = [i.title for i in sort_by_priority(items)]
        assert titles == ["high 1", "high 2", "medium 1", "medium 2", "low 1", "low 2"]

    def test_composition_first(self, report):
        first = report.insights[0]
        assert first.title == "Dataset composition"
        assert first.description == "Dataset with 30 records, 4 numeric and 2 categorical variables"

    def test_outlier_and_model_insights(self, report):
        categories = {(i.category, i.variables) for i in report.insights}
        assert ("quality", ("w",)) in categories
        assert ("modeling", ("x", "y")) in categories
        assert ("distribution", ("w",)) in categories

    def test_visualizations(self, report):
        kinds = [v.type for v in report.visualizations]
        assert kinds[0] == "scatter"
        assert kinds.count("histogram") == 4
        assert kinds.count("boxplot") == 4
        assert kinds[-1] == "boxplot"
        bars = [v.variables for v in report.visualizations if v.type == "bar"]
        assert bars == [("cat",), ("flag",)]

    def test_summary(self, report):
        high = [i for i in report.insights if i.priority is Priority.HIGH]
        assert report.summary.total_insights == len(report.insights)
        assert report.summary.high_priority_insights == len(high)
        assert report.summary.key_findings[0][0] == "Dataset composition"
        assert len(report.summary.key_findings) == 3

    def test_to_dict(self, report):
        record = report.to_dict()
        assert set(record) == {
            "metadata", "variableClassification", "descriptiveStatistics",
            "correlationAnalysis", "regressionAnalysis", "distributionAnalysis",
            "outlierAnalysis", "temporalAnalysis", "insights",
            "visualizationSuggestions", "summary", "stageErrors",
        }
        assert record["metadata"]["datasetSize"] == N
        assert record["metadata"]["columnsAnalyzed"] == 7
        assert record["stageErrors"] == {}
        assert record["descriptiveStatistics"]["x"]["mean"] == pytest.approx(15.5)


class TestOptions:

    def test_without_advanced_analysis(self, dataset):
        report = auto_analyze(dataset, {"includeAdvancedAnalysis": False})
        assert report.regression is None
        assert report.distribution == {}
        assert not any(i.category == "modeling" for i in report.insights)
        assert report.to_dict()["regressionAnalysis"] == {"models": []}

    def test_without_visualizations(self, dataset):
        report = auto_analyze(dataset, AnalysisConfig(generate_visualizations=False))
        assert report.visualizations == ()

    def test_threshold(self, dataset):
        report = auto_analyze(dataset, {"min_correlation_threshold": 0.99})
        assert all(abs(s.correlation) >= 0.99 for s in report.correlation.strong_correlations)

    def test_unknown_option(self, dataset):
        with pytest.raises(ValidationError):
            auto_analyze(dataset, {"clusters": 3})


class TestEdgeCases:

    def test_invalid_dataset(self):
        with pytest.raises(StructuralError):
            auto_analyze({"headers": ["a"]})

    def test_single_numeric_column(self):
        data = {"headers": ["v", "g"], "data": [{"v": i, "g": "ab"[i % 2]} for i in range(8)]}
        report = auto_analyze(data)
        assert isinstance(report, AnalysisReport)
        assert report.correlation is None
        assert report.regression.models == ()
        assert "message" in report.to_dict()["correlationAnalysis"]

    def test_constant_column_recorded_as_failure(self):
        rows = [{"x": i, "c": 5} for i in range(12)]
        report = auto_analyze(Dataset(("x", "c"), tuple(rows)))
        failure = report.distribution["c"]
        assert isinstance(failure, ColumnFailure)
        assert failure.reason == "All values are identical"
        assert "x" in report.distribution

    def test_small_columns_skip_distribution_and_outliers(self):
        data = {"headers": ["a", "b"], "data": [{"a": i, "b": i * i} for i in range(5)]}
        report = auto_analyze(data)
        assert report.distribution == {}
        assert report.outliers == {}


class TestStageFailures:

    @staticmethod
    def _fail(*args, **kwargs):
        raise StatInsightError("boom")

    def test_failed_correlation_skips_regression(self, dataset, monkeypatch):
        monkeypatch.setattr(analyzer, "_correlation_stage", self._fail)
        with pytest.warns(RuntimeWarning, match="correlation stage failed"):
            report = auto_analyze(dataset)

        assert report.stage_errors == {"correlation": "boom"}
        assert report.correlation is None
        assert report.regression is None
        assert isinstance(report.descriptive["x"], DescriptiveSolution)
        assert "w" in report.distribution
        assert report.outliers["w"].count == 4
        assert "date" in report.temporal
        assert not any(i.category in ("correlation", "modeling") for i in report.insights)
        assert report.to_dict()["stageErrors"] == {"correlation": "boom"}

    def test_failed_independent_stage(self, dataset, monkeypatch):
        monkeypatch.setattr(analyzer, "_temporal_stage", self._fail)
        with pytest.warns(RuntimeWarning, match="temporal stage failed"):
            report = auto_analyze(dataset)

        assert report.stage_errors == {"temporal": "boom"}
        assert report.temporal == {}
        assert report.correlation is not None
        assert report.regression is not None
        assert any(i.category == "modeling" for i in report.insights)


class TestHelpers:

    @pytest.mark.parametrize("r, label", [
        (0.85, "very strong"), (-0.65, "strong"), (0.45, "moderate"),
        (0.25, "weak"), (0.1, "very weak"),
    ])
    def test_correlation_label(self, r, label):
        assert correlation_label(r) == label

    @pytest.mark.parametrize("skew, kurt, normal, kind", [
        (2.0, 0.0, True, "normal"),
        (1.5, 0.0, False, "skew_right"),
        (-1.5, 0.0, False, "skew_left"),
        (0.2, 2.0, False, "leptokurtic"),
        (0.2, -1.5, False, "platykurtic"),
        (0.2, 0.3, False, "approximately_normal"),
    ])
    def test_classify_distribution(self, skew, kurt, normal, kind):
        assert classify_distribution(skew, kurt, normal) == kind

    @pytest.mark.parametrize("pct, severity", [(12.0, "high"), (10.0, "medium"), (5.0, "low")])
    def test_outlier_severity(self, pct, severity):
        assert outlier_severity(pct) == severity

    @pytest.mark.parametrize("days, label", [
        (0.5, "daily"), (1, "weekly"), (6, "weekly"), (7, "monthly"), (45, "annual"),
    ])
    def test_sampling_frequency(self, days, label):
        assert sampling_frequency(days * 86400.0) == label

    def test_executive_summary_recommendations(self):
        insights = (
            Insight("quality", Priority.HIGH, "Outliers", "many"),
            Insight("correlation", Priority.MEDIUM, "r", "moderate"),
        )
        summary = executive_summary(insights)
        assert summary.total_insights == 2
        assert summary.high_priority_insights == 1
        assert summary.categories_covered == ("quality", "correlation")
        assert summary.recommendations == (
            "Explore the identified correlations for possible predictive modeling",
            "Treat the identified outliers before proceeding with further analysis",
        )
