"""
Records produced by the auto-analyzer.

Every stage result is a frozen dataclass with a camelCase to_dict().
A column that a stage could not process holds a ColumnFailure in its slot.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping

from statinsight.correlation import CorrelationMatrix, StrongCorrelation
from statinsight.dataset.tables import FrequencyRow
from statinsight.descriptive import DescriptiveSolution
from statinsight.insights.classifier import VariableTypes
from statinsight.insights.config import AnalysisConfig
from statinsight.regression import RegressionSolution


class Priority(str, enum.Enum):
    """Insight urgency, ordered HIGH > MEDIUM > LOW."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


def sort_by_priority(items: list[Any]) -> list[Any]:
    """Priority descending; items of equal priority keep their order."""
    return sorted(items, key=lambda item: -item.priority.rank)


@dataclass(frozen=True)
class ColumnFailure:
    """A column (or column pair) a stage could not process."""
    error: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {'error': self.error, 'reason': self.reason}


def _as_record(value: Any) -> Any:
    return value.to_dict() if hasattr(value, 'to_dict') else value


@dataclass(frozen=True)
class Insight:
    """
    One finding.

    metrics holds the numbers behind it (correlation, rSquared, ...) and
    an optional 'recommendation'.
    """
    category: str
    priority: Priority
    title: str
    description: str
    variables: tuple[str, ...] = ()
    metrics: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            'category': self.category,
            'priority': self.priority.value,
            'title': self.title,
            'description': self.description,
        }
        if self.variables:
            record['variables'] = list(self.variables)
        record.update(self.metrics)
        return record


@dataclass(frozen=True)
class QualitativeSummary:
    count: int
    unique_values: int
    frequency_table: tuple[FrequencyRow, ...]
    most_frequent: FrequencyRow

    @property
    def mode(self) -> Any:
        return self.most_frequent.value

    @property
    def concentration(self) -> float:
        """Percentage of the most frequent category."""
        return self.most_frequent.percentage

    def to_dict(self) -> dict[str, Any]:
        return {
            'type': 'qualitative',
            'count': self.count,
            'uniqueValues': self.unique_values,
            'frequencyTable': [row.to_dict() for row in self.frequency_table],
            'mostFrequent': self.most_frequent.to_dict(),
            'mode': self.mode,
            'concentration': self.concentration,
        }


@dataclass(frozen=True)
class CorrelationAnalysis:
    matrix: CorrelationMatrix
    strong_correlations: tuple[StrongCorrelation, ...]
    insights: tuple[Insight, ...]
    threshold: float

    @property
    def summary(self) -> str:
        return f"Found {len(self.strong_correlations)} correlations >= {self.threshold}"

    def to_dict(self) -> dict[str, Any]:
        return {
            'matrix': self.matrix.to_dict(),
            'strongCorrelations': [s.to_dict() for s in self.strong_correlations],
            'insights': [i.to_dict() for i in self.insights],
            'summary': self.summary,
        }


@dataclass(frozen=True)
class RegressionModel:
    independent: str
    dependent: str
    solution: RegressionSolution

    @property
    def equation(self) -> str:
        return self.solution.equation

    @property
    def r_squared(self) -> float:
        return self.solution.r_squared

    @property
    def significant(self) -> bool:
        return self.solution.significant

    @property
    def quality(self) -> str:
        r2 = self.r_squared
        if r2 > 0.7:
            return "excellent"
        if r2 > 0.5:
            return "good"
        if r2 > 0.3:
            return "moderate"
        return "weak"

    @property
    def explanation(self) -> str:
        return f"The model explains {self.r_squared * 100:.1f}% of the variation"

    def to_dict(self) -> dict[str, Any]:
        return {
            'independent': self.independent,
            'dependent': self.dependent,
            'equation': self.equation,
            'rSquared': self.r_squared,
            'significant': self.significant,
            'interpretation': {
                'quality': self.quality,
                'explanation': self.explanation,
                'isSignificant': self.significant,
            },
            'details': self.solution.to_dict(),
        }


@dataclass(frozen=True)
class RegressionAnalysis:
    models: tuple[RegressionModel, ...]
    failures: Mapping[str, ColumnFailure] = field(default_factory=dict)

    @property
    def summary(self) -> str:
        return f"{len(self.models)} regression models analyzed"

    def to_dict(self) -> dict[str, Any]:
        return {
            'models': [m.to_dict() for m in self.models],
            'failures': {k: f.to_dict() for k, f in self.failures.items()},
            'summary': self.summary,
        }


@dataclass(frozen=True)
class DistributionProfile:
    is_normal: bool
    normality_p_value: float
    skewness: float
    kurtosis: float
    distribution_type: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            'isNormal': self.is_normal,
            'normalityPValue': self.normality_p_value,
            'skewness': self.skewness,
            'kurtosis': self.kurtosis,
            'distributionType': self.distribution_type,
            'recommendation': self.recommendation,
        }


@dataclass(frozen=True)
class OutlierProfile:
    count: int
    percentage: float
    severity: str
    values: tuple[float, ...]
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            'count': self.count,
            'percentage': self.percentage,
            'severity': self.severity,
            'values': list(self.values),
            'recommendation': self.recommendation,
        }


@dataclass(frozen=True)
class TemporalProfile:
    earliest: str
    latest: str
    span_days: int
    frequency: str
    data_points: int

    def to_dict(self) -> dict[str, Any]:
        return {
            'span': f"{self.span_days} days",
            'spanDays': self.span_days,
            'frequency': self.frequency,
            'earliest': self.earliest,
            'latest': self.latest,
            'dataPoints': self.data_points,
        }


@dataclass(frozen=True)
class VisualizationSuggestion:
    type: str
    variables: tuple[str, ...]
    title: str
    description: str
    priority: Priority

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {'type': self.type}
        if len(self.variables) == 1:
            record['variable'] = self.variables[0]
        else:
            record['variables'] = list(self.variables)
        record.update({
            'title': self.title,
            'description': self.description,
            'priority': self.priority.value,
        })
        return record


@dataclass(frozen=True)
class ExecutiveSummary:
    total_insights: int
    high_priority_insights: int
    categories_covered: tuple[str, ...]
    key_findings: tuple[tuple[str, str], ...]
    recommendations: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            'totalInsights': self.total_insights,
            'highPriorityInsights': self.high_priority_insights,
            'categoriesCovered': list(self.categories_covered),
            'keyFindings': [
                {'title': title, 'description': description}
                for title, description in self.key_findings
            ],
            'recommendations': list(self.recommendations),
        }


@dataclass(frozen=True)
class AnalysisReport:
    """
    Output of auto_analyze().

    Stages skipped by configuration or by a failed dependency are None
    (correlation, regression) or empty. stage_errors maps the name of every
    stage that failed as a whole to its error message.
    """
    metadata: Mapping[str, Any]
    config: AnalysisConfig
    variable_classification: VariableTypes
    descriptive: Mapping[str, DescriptiveSolution | QualitativeSummary | ColumnFailure]
    correlation: CorrelationAnalysis | None
    regression: RegressionAnalysis | None
    distribution: Mapping[str, DistributionProfile | ColumnFailure]
    outliers: Mapping[str, OutlierProfile | ColumnFailure]
    temporal: Mapping[str, TemporalProfile | ColumnFailure]
    insights: tuple[Insight, ...]
    visualizations: tuple[VisualizationSuggestion, ...]
    summary: ExecutiveSummary
    stage_errors: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        def slots(mapping: Mapping[str, Any]) -> dict[str, Any]:
            return {k: _as_record(v) for k, v in mapping.items()}

        return {
            'metadata': dict(self.metadata),
            'variableClassification': self.variable_classification.to_dict(),
            'descriptiveStatistics': slots(self.descriptive),
            'correlationAnalysis': (
                self.correlation.to_dict() if self.correlation is not None
                else {'message': 'Not enough quantitative variables for correlation analysis'}
            ),
            'regressionAnalysis': (
                self.regression.to_dict() if self.regression is not None else {'models': []}
            ),
            'distributionAnalysis': slots(self.distribution),
            'outlierAnalysis': slots(self.outliers),
            'temporalAnalysis': slots(self.temporal),
            'insights': [i.to_dict() for i in self.insights],
            'visualizationSuggestions': [v.to_dict() for v in self.visualizations],
            'summary': self.summary.to_dict(),
            'stageErrors': dict(self.stage_errors),
        }
