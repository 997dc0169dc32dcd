"""
Dataset helpers.

Public API:
    validate_dataset(data)           - structural report (errors, warnings)
    require_valid(data)              - Dataset or StructuralError
    validate_*                       - argument guards for the tests
    detect_outliers(x, method)       - IQR, z-score, modified z-score
    frequency_table(values)          - counts, descending, ties first-seen
    contingency_table(a, b)          - dense cross-tabulation with totals
    group_by(data, column, aggs)     - partition and aggregate
    bootstrap(x, statistic)          - bootstrap distribution and 95% CI
    sample(data, size, method)       - random/systematic/first/last rows
"""

from statinsight.dataset.validator import (
    NumericColumnCheck,
    ValidationReport,
    require_valid,
    validate_anova_groups,
    validate_confidence_level,
    validate_contingency_columns,
    validate_dataset,
    validate_hypothesis_inputs,
    validate_numeric_column,
    validate_paired_columns,
    validate_regression_inputs,
    validate_sample_size,
)
from statinsight.dataset.outliers import (
    MODIFIED_ZSCORE_THRESHOLD,
    ZSCORE_THRESHOLD,
    OutlierReport,
    detect_outliers,
)
from statinsight.dataset.tables import (
    AGGREGATIONS,
    ContingencyTable,
    FrequencyRow,
    GroupSummary,
    contingency_table,
    frequency_table,
    group_by,
)
from statinsight.dataset.resampling import (
    BOOTSTRAP_ITERATIONS,
    BootstrapResult,
    bootstrap,
    sample,
)

__all__ = [
    "NumericColumnCheck",
    "ValidationReport",
    "require_valid",
    "validate_anova_groups",
    "validate_confidence_level",
    "validate_contingency_columns",
    "validate_dataset",
    "validate_hypothesis_inputs",
    "validate_numeric_column",
    "validate_paired_columns",
    "validate_regression_inputs",
    "validate_sample_size",
    "MODIFIED_ZSCORE_THRESHOLD",
    "ZSCORE_THRESHOLD",
    "OutlierReport",
    "detect_outliers",
    "AGGREGATIONS",
    "ContingencyTable",
    "FrequencyRow",
    "GroupSummary",
    "contingency_table",
    "frequency_table",
    "group_by",
    "BOOTSTRAP_ITERATIONS",
    "BootstrapResult",
    "bootstrap",
    "sample",
]
