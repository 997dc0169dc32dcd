"""
Automatic exploratory analysis of a dataset.

auto_analyze() runs a fixed sequence of stages:

    validate -> classify -> descriptive -> correlation -> regression ->
    distribution -> outliers -> temporal -> insights -> visualizations

Per-column failures are kept as ColumnFailure in that column's slot and
the stage carries on. A stage that fails as a whole is recorded in
report.stage_errors (and warned about); the stages that depend on it are
skipped. Only an invalid dataset aborts the analysis.
"""

from __future__ import annotations

import math
import warnings
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, TypeVar

from statinsight.core.dataset import CellKind, Dataset, cell_kind
from statinsight.core.exceptions import StatInsightError
from statinsight.correlation import StrongCorrelation, correlation_matrix
from statinsight.dataset.outliers import detect_outliers
from statinsight.dataset.tables import frequency_table
from statinsight.dataset.validator import require_valid
from statinsight.descriptive import describe, kurtosis, skewness
from statinsight.insights.classifier import (
    VariableType,
    VariableTypes,
    classify_variables,
    parse_date,
)
from statinsight.insights.config import REGRESSION_SCREEN_THRESHOLD, AnalysisConfig
from statinsight.insights.report import (
    AnalysisReport,
    ColumnFailure,
    CorrelationAnalysis,
    DistributionProfile,
    ExecutiveSummary,
    Insight,
    OutlierProfile,
    Priority,
    QualitativeSummary,
    RegressionAnalysis,
    RegressionModel,
    TemporalProfile,
    VisualizationSuggestion,
    sort_by_priority,
)
from statinsight.normality import shapiro_wilk
from statinsight.regression import RegressionDesign, linear_regression


T = TypeVar('T')

HIGH_CORRELATION = 0.7
MAX_REGRESSION_MODELS = 5
MIN_REGRESSION_PAIRS = 10
MIN_DISTRIBUTION_SIZE = 10
MIN_OUTLIER_SIZE = 5
TOP_CATEGORIES = 10
MAX_BAR_CATEGORIES = 20
MAX_SCATTER_PLOTS = 3
MAX_OUTLIER_VALUES = 10
SECONDS_PER_DAY = 86400.0


# === Helpers ===

def correlation_label(r: float) -> str:
    """Wording of |r| used in correlation insight titles."""
    a = abs(r)
    if a >= 0.8:
        return "very strong"
    if a >= 0.6:
        return "strong"
    if a >= 0.4:
        return "moderate"
    if a >= 0.2:
        return "weak"
    return "very weak"


def classify_distribution(skew: float, kurt: float, is_normal: bool) -> str:
    if is_normal:
        return "normal"
    if abs(skew) > 1:
        return "skew_right" if skew > 0 else "skew_left"
    if abs(kurt) > 1:
        return "leptokurtic" if kurt > 0 else "platykurtic"
    return "approximately_normal"


def distribution_recommendation(skew: float, kurt: float, is_normal: bool) -> str:
    if is_normal:
        return "Normal distribution - suitable for parametric tests"
    if abs(skew) > 1:
        return "Consider a logarithmic transformation to normalize"
    if abs(kurt) > 1:
        return "Distribution with atypical tails - use robust tests"
    return "Approximately normal distribution"


def outlier_severity(percentage: float) -> str:
    if percentage > 10:
        return "high"
    if percentage > 5:
        return "medium"
    return "low"


def outlier_recommendation(percentage: float) -> str:
    if percentage > 10:
        return "Investigate and possibly remove the outliers"
    if percentage > 5:
        return "Check whether the outliers are legitimate values"
    return "Few outliers - monitor"


def sampling_frequency(mean_interval_seconds: float) -> str:
    days = mean_interval_seconds / SECONDS_PER_DAY
    if days < 1:
        return "daily"
    if days < 7:
        return "weekly"
    if days < 30:
        return "monthly"
    return "annual"


def _run_stage(
    name: str,
    stage: Callable[[], T],
    stage_errors: dict[str, str],
) -> T | None:
    try:
        return stage()
    except StatInsightError as e:
        stage_errors[name] = str(e)
        warnings.warn(
            f"auto_analyze: {name} stage failed and was skipped: {e}",
            RuntimeWarning,
            stacklevel=3,
        )
        return None


# === Stages ===

def _descriptive_stage(ds: Dataset, types: VariableTypes) -> dict[str, Any]:
    results: dict[str, Any] = {}

    for var in types.quantitative:
        try:
            results[var.name] = describe(ds.column(var.name), name=var.name)
        except StatInsightError as e:
            results[var.name] = ColumnFailure("Could not compute descriptive statistics", str(e))

    for var in (*types.qualitative, *types.binary):
        cells = [v for v in ds.column(var.name) if cell_kind(v) is not CellKind.NULL]
        if not cells:
            continue
        table = frequency_table(cells)
        results[var.name] = QualitativeSummary(
            count=len(cells),
            unique_values=var.unique_count,
            frequency_table=tuple(table[:TOP_CATEGORIES]),
            most_frequent=table[0],
        )

    return results


def _correlation_insights(
    strong: tuple[StrongCorrelation, ...],
    config: AnalysisConfig,
) -> tuple[Insight, ...]:
    insights = []
    for corr in strong:
        direction = "positive" if corr.correlation > 0 else "negative"
        label = correlation_label(corr.correlation)
        insights.append(Insight(
            category="correlation",
            priority=Priority.HIGH if abs(corr.correlation) > HIGH_CORRELATION else Priority.MEDIUM,
            title=f"{label.capitalize()} correlation between {corr.variable1} and {corr.variable2}",
            description=f"{direction.capitalize()} correlation of {corr.correlation:.3f}",
            variables=(corr.variable1, corr.variable2),
            metrics={
                'correlation': corr.correlation,
                'significance': corr.p_value < config.significance_level,
            },
        ))
    return tuple(insights)


def _correlation_stage(
    ds: Dataset,
    types: VariableTypes,
    config: AnalysisConfig,
) -> CorrelationAnalysis | None:
    names = [v.name for v in types.quantitative]
    if len(names) < 2:
        return None
    matrix = correlation_matrix(
        ds,
        columns=names,
        threshold=config.min_correlation_threshold,
        alpha=config.significance_level,
    )
    return CorrelationAnalysis(
        matrix=matrix,
        strong_correlations=matrix.strong,
        insights=_correlation_insights(matrix.strong, config),
        threshold=config.min_correlation_threshold,
    )


def _regression_stage(
    ds: Dataset,
    correlation: CorrelationAnalysis | None,
    config: AnalysisConfig,
) -> RegressionAnalysis:
    if correlation is None:
        return RegressionAnalysis(models=())

    models: list[RegressionModel] = []
    failures: dict[str, ColumnFailure] = {}
    candidates = [
        c for c in correlation.strong_correlations
        if abs(c.correlation) > REGRESSION_SCREEN_THRESHOLD
    ][:MAX_REGRESSION_MODELS]

    for corr in candidates:
        key = f"{corr.variable1} -> {corr.variable2}"
        try:
            design = RegressionDesign.for_pair(
                ds.column(corr.variable1),
                ds.column(corr.variable2),
                alpha=config.significance_level,
            )
            if design.n <= MIN_REGRESSION_PAIRS:
                continue
            models.append(RegressionModel(
                independent=corr.variable1,
                dependent=corr.variable2,
                solution=linear_regression(design),
            ))
        except StatInsightError as e:
            failures[key] = ColumnFailure("Could not fit the regression", str(e))

    return RegressionAnalysis(models=tuple(models), failures=failures)


def _distribution_stage(
    ds: Dataset,
    types: VariableTypes,
    config: AnalysisConfig,
) -> dict[str, DistributionProfile | ColumnFailure]:
    results: dict[str, DistributionProfile | ColumnFailure] = {}
    for var in types.quantitative:
        values = ds.numeric_column(var.name)
        if len(values) <= MIN_DISTRIBUTION_SIZE:
            continue
        try:
            test = shapiro_wilk(values, alpha=config.significance_level)
            if test.error is not None:
                results[var.name] = ColumnFailure("Could not analyze the distribution", test.error)
                continue
            skew = skewness(values, bias=False)
            kurt = kurtosis(values, bias=False)
        except StatInsightError as e:
            results[var.name] = ColumnFailure("Could not analyze the distribution", str(e))
            continue
        results[var.name] = DistributionProfile(
            is_normal=test.is_normal,
            normality_p_value=test.p_value,
            skewness=skew,
            kurtosis=kurt,
            distribution_type=classify_distribution(skew, kurt, test.is_normal),
            recommendation=distribution_recommendation(skew, kurt, test.is_normal),
        )
    return results


def _outlier_stage(ds: Dataset, types: VariableTypes) -> dict[str, OutlierProfile | ColumnFailure]:
    results: dict[str, OutlierProfile | ColumnFailure] = {}
    for var in types.quantitative:
        column = ds.column(var.name)
        if len(ds.numeric_column(var.name)) <= MIN_OUTLIER_SIZE:
            continue
        try:
            report = detect_outliers(column, 'iqr')
        except StatInsightError as e:
            results[var.name] = ColumnFailure("Could not detect outliers", str(e))
            continue
        results[var.name] = OutlierProfile(
            count=report.count,
            percentage=report.percentage,
            severity=outlier_severity(report.percentage),
            values=tuple(report.outliers[:MAX_OUTLIER_VALUES]),
            recommendation=outlier_recommendation(report.percentage),
        )
    return results


def _temporal_stage(ds: Dataset, types: VariableTypes) -> dict[str, TemporalProfile]:
    results: dict[str, TemporalProfile] = {}
    for var in types.datetime:
        dates = sorted(
            ts for ts in (parse_date(v) for v in ds.column(var.name)) if ts is not None
        )
        if len(dates) <= 2:
            continue
        span_seconds = (dates[-1] - dates[0]).total_seconds()
        results[var.name] = TemporalProfile(
            earliest=dates[0].date().isoformat(),
            latest=dates[-1].date().isoformat(),
            span_days=math.floor(span_seconds / SECONDS_PER_DAY),
            frequency=sampling_frequency(span_seconds / (len(dates) - 1)),
            data_points=len(dates),
        )
    return results


def _insight_stage(
    ds: Dataset,
    types: VariableTypes,
    correlation: CorrelationAnalysis | None,
    regression: RegressionAnalysis | None,
    distribution: Mapping[str, Any],
    outliers: Mapping[str, Any],
) -> tuple[Insight, ...]:
    n_categorical = len(types.qualitative) + len(types.binary) + len(types.ordinal)
    insights: list[Insight] = [Insight(
        category="overview",
        priority=Priority.HIGH,
        title="Dataset composition",
        description=(
            f"Dataset with {len(ds)} records, {len(types.quantitative)} numeric "
            f"and {n_categorical} categorical variables"
        ),
    )]

    if correlation is not None:
        insights.extend(correlation.insights)

    for name, profile in distribution.items():
        if isinstance(profile, DistributionProfile) and profile.distribution_type != "normal":
            insights.append(Insight(
                category="distribution",
                priority=Priority.MEDIUM,
                title=f"Non-normal distribution: {name}",
                description=profile.recommendation,
                variables=(name,),
            ))

    for name, profile in outliers.items():
        if isinstance(profile, OutlierProfile) and profile.severity == "high":
            insights.append(Insight(
                category="quality",
                priority=Priority.HIGH,
                title=f"Significant outliers in {name}",
                description=f"{profile.count} outliers ({profile.percentage:.1f}%) detected",
                variables=(name,),
                metrics={'recommendation': profile.recommendation},
            ))

    if regression is not None:
        for model in regression.models:
            if model.significant and model.r_squared > 0.5:
                insights.append(Insight(
                    category="modeling",
                    priority=Priority.HIGH,
                    title=f"Viable predictive model: {model.dependent}",
                    description=(
                        f"{model.independent} explains {model.r_squared * 100:.1f}% "
                        f"of the variation in {model.dependent}"
                    ),
                    variables=(model.independent, model.dependent),
                    metrics={'rSquared': model.r_squared},
                ))

    return tuple(sort_by_priority(insights))


def _visualization_stage(
    types: VariableTypes,
    correlation: CorrelationAnalysis | None,
) -> tuple[VisualizationSuggestion, ...]:
    suggestions: list[VisualizationSuggestion] = []

    for var in types.quantitative:
        suggestions.append(VisualizationSuggestion(
            type="histogram",
            variables=(var.name,),
            title=f"Distribution of {var.name}",
            description="Histogram showing the distribution of the values",
            priority=Priority.MEDIUM,
        ))

    if correlation is not None:
        scatter = [
            c for c in correlation.strong_correlations
            if abs(c.correlation) > REGRESSION_SCREEN_THRESHOLD
        ][:MAX_SCATTER_PLOTS]
        for corr in scatter:
            direction = "positive" if corr.correlation > 0 else "negative"
            suggestions.append(VisualizationSuggestion(
                type="scatter",
                variables=(corr.variable1, corr.variable2),
                title=f"{corr.variable1} vs {corr.variable2}",
                description=f"Scatter plot showing a {direction} correlation",
                priority=Priority.HIGH,
            ))

    for var in (*types.qualitative, *types.binary):
        if var.type is VariableType.EMPTY or var.unique_count > MAX_BAR_CATEGORIES:
            continue
        suggestions.append(VisualizationSuggestion(
            type="bar",
            variables=(var.name,),
            title=f"Frequency of {var.name}",
            description="Bar chart showing the distribution of the categories",
            priority=Priority.MEDIUM,
        ))

    for var in types.quantitative:
        suggestions.append(VisualizationSuggestion(
            type="boxplot",
            variables=(var.name,),
            title=f"Box plot of {var.name}",
            description="Box plot to identify outliers and quartiles",
            priority=Priority.LOW,
        ))

    return tuple(sort_by_priority(suggestions))


def executive_summary(insights: tuple[Insight, ...]) -> ExecutiveSummary:
    """Counts, covered categories, top 3 high-priority findings and recommendations."""
    high = [i for i in insights if i.priority is Priority.HIGH]
    categories = tuple(dict.fromkeys(i.category for i in insights))

    recommendations = []
    if any(i.category == "correlation" for i in insights):
        recommendations.append(
            "Explore the identified correlations for possible predictive modeling"
        )
    if any(i.category == "quality" and i.priority is Priority.HIGH for i in insights):
        recommendations.append(
            "Treat the identified outliers before proceeding with further analysis"
        )
    if any(i.category == "distribution" for i in insights):
        recommendations.append(
            "Consider transformations to normalize skewed distributions"
        )

    return ExecutiveSummary(
        total_insights=len(insights),
        high_priority_insights=len(high),
        categories_covered=categories,
        key_findings=tuple((i.title, i.description) for i in high[:3]),
        recommendations=tuple(recommendations),
    )


# === Entry point ===

def auto_analyze(
    data: Dataset | Mapping[str, Any],
    options: Mapping[str, Any] | AnalysisConfig | None = None,
) -> AnalysisReport:
    """
    Run the full exploratory analysis of a dataset.

    Args:
        data: Dataset or its ``{"headers": [...], "data": [...]}`` form
        options: AnalysisConfig, or a mapping of option names in snake_case
            or camelCase (minCorrelationThreshold, significanceLevel,
            generateVisualizations, includeAdvancedAnalysis)

    Returns:
        AnalysisReport

    Raises:
        StructuralError: If the dataset is invalid
        ValidationError: If an option is unknown or out of range
    """
    config = AnalysisConfig.from_options(options)
    ds = require_valid(data)
    stage_errors: dict[str, str] = {}

    types = classify_variables(ds)
    descriptive = _run_stage(
        'descriptive', lambda: _descriptive_stage(ds, types), stage_errors,
    ) or {}
    correlation = _run_stage(
        'correlation', lambda: _correlation_stage(ds, types, config), stage_errors,
    )

    regression = None
    distribution: dict[str, Any] = {}
    if config.include_advanced_analysis:
        if 'correlation' not in stage_errors:
            regression = _run_stage(
                'regression', lambda: _regression_stage(ds, correlation, config), stage_errors,
            )
        distribution = _run_stage(
            'distribution', lambda: _distribution_stage(ds, types, config), stage_errors,
        ) or {}

    outliers = _run_stage('outliers', lambda: _outlier_stage(ds, types), stage_errors) or {}
    temporal = _run_stage('temporal', lambda: _temporal_stage(ds, types), stage_errors) or {}

    insights = _insight_stage(ds, types, correlation, regression, distribution, outliers)
    visualizations: tuple[VisualizationSuggestion, ...] = ()
    if config.generate_visualizations:
        visualizations = _visualization_stage(types, correlation)

    return AnalysisReport(
        metadata={
            'analysisDate': datetime.now(timezone.utc).isoformat(),
            'datasetSize': len(ds),
            'columnsAnalyzed': len(ds.headers),
            'configuration': config.to_dict(),
        },
        config=config,
        variable_classification=types,
        descriptive=descriptive,
        correlation=correlation,
        regression=regression,
        distribution=distribution,
        outliers=outliers,
        temporal=temporal,
        insights=insights,
        visualizations=visualizations,
        summary=executive_summary(insights),
        stage_errors=stage_errors,
    )
