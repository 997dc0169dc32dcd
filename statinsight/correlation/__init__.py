"""
Correlation module.

Public API:
    pearson(x, y)              - Pearson r, t test, Fisher-z interval
    spearman(x, y)             - Spearman rho (average ranks), t test
    kendall(x, y)              - Kendall tau-b, z test
    correlate(x, y, method)    - any of the above by name
    correlation_matrix(data)   - pairwise matrix over numeric columns
"""

from statinsight.correlation.solvers import (
    correlate,
    correlation_matrix,
    kendall,
    numeric_columns,
    pearson,
    spearman,
)
from statinsight.correlation.design import CorrelationDesign
from statinsight.correlation._common import (
    METHODS,
    STRONG_CORRELATION,
    CorrelationParams,
    correlation_strength,
)
from statinsight.correlation.solution import (
    CorrelationMatrix,
    CorrelationSolution,
    StrongCorrelation,
)

__all__ = [
    "correlate",
    "correlation_matrix",
    "kendall",
    "numeric_columns",
    "pearson",
    "spearman",
    "CorrelationDesign",
    "METHODS",
    "STRONG_CORRELATION",
    "CorrelationParams",
    "correlation_strength",
    "CorrelationMatrix",
    "CorrelationSolution",
    "StrongCorrelation",
]
