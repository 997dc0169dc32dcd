"""
statinsight: exploratory statistics with plain-language interpretation.

Submodules:
    distributions: Special functions, CDFs and quantiles
    descriptive: Summary statistics over one column
    normality: Shapiro-Wilk, Jarque-Bera, KS, Anderson-Darling, Lilliefors, D'Agostino
    hypothesis: t, z, ANOVA, chi-square, Mann-Whitney and confidence intervals
    correlation: Pearson, Spearman, Kendall and correlation matrices
    regression: Simple linear regression with residual diagnostics
    dataset: Validation, outliers, frequency tables, grouping, resampling
    insights: Variable classification, auto-analysis and result interpretation
"""

__version__ = "0.1.0"

from statinsight import distributions
from statinsight import descriptive
from statinsight import normality
from statinsight import hypothesis
from statinsight import correlation
from statinsight import regression
from statinsight import dataset
from statinsight import insights

from statinsight.core.dataset import Dataset
from statinsight.insights import auto_analyze, interpret

__all__ = [
    "__version__",
    "distributions",
    "descriptive",
    "normality",
    "hypothesis",
    "correlation",
    "regression",
    "dataset",
    "insights",
    "Dataset",
    "auto_analyze",
    "interpret",
]
