"""
Insights module.

Public API:
    classify_variable(values, name)  - type of one column
    classify_variables(dataset)      - every column, grouped by type
    auto_analyze(dataset, options)   - full exploratory analysis report
    interpret(result)                - plain-language reading of a test result
    format_for_report, explain_statistic, action_items
"""

from statinsight.insights.classifier import (
    VariableClassification,
    VariableType,
    VariableTypes,
    classify_variable,
    classify_variables,
    parse_date,
)
from statinsight.insights.config import AnalysisConfig
from statinsight.insights.report import (
    AnalysisReport,
    ColumnFailure,
    ExecutiveSummary,
    Insight,
    Priority,
    VisualizationSuggestion,
)
from statinsight.insights.analyzer import auto_analyze, executive_summary
from statinsight.insights.interpreter import (
    Interpretation,
    action_items,
    explain_statistic,
    format_for_report,
    identify_test_type,
    interpret,
)

__all__ = [
    "VariableClassification",
    "VariableType",
    "VariableTypes",
    "classify_variable",
    "classify_variables",
    "parse_date",
    "AnalysisConfig",
    "AnalysisReport",
    "ColumnFailure",
    "ExecutiveSummary",
    "Insight",
    "Priority",
    "VisualizationSuggestion",
    "auto_analyze",
    "executive_summary",
    "Interpretation",
    "action_items",
    "explain_statistic",
    "format_for_report",
    "identify_test_type",
    "interpret",
]
