"""
Descriptive statistics module.

Aggregates over one column of cells. Missing, non-numeric and non-finite
cells are ignored; a column with no finite values raises
InsufficientDataError.

Public API:
    describe(x)                      - count/mean/median/sd/min/max/quartiles/shape
    mean, median, mode, geometric_mean, harmonic_mean, trimmed_mean,
    weighted_mean, quadratic_mean, midrange
    variance, std, value_range, iqr, coefficient_of_variation,
    mean_absolute_deviation, median_absolute_deviation, standard_error,
    quartile_coefficient, percentile_range, gini, robust_scale
    quantile, percentile, quartiles, quintiles, deciles, percentile_rank,
    z_scores, five_number_summary, boxplot_stats, rank, normalized_rank
    skewness, kurtosis, pearson_skewness
"""

from statinsight.descriptive.design import DescriptiveDesign
from statinsight.descriptive.solution import DescriptiveParams, DescriptiveSolution
from statinsight.descriptive.solvers import describe
from statinsight.descriptive._common import BoxplotStats, FiveNumberSummary, ModeResult
from statinsight.descriptive._central import (
    geometric_mean,
    harmonic_mean,
    mean,
    median,
    midrange,
    mode,
    quadratic_mean,
    trimmed_mean,
    weighted_mean,
)
from statinsight.descriptive._dispersion import (
    coefficient_of_variation,
    gini,
    iqr,
    mean_absolute_deviation,
    median_absolute_deviation,
    percentile_range,
    quartile_coefficient,
    robust_scale,
    standard_error,
    std,
    value_range,
    variance,
)
from statinsight.descriptive._position import (
    IQR_FENCE,
    boxplot_stats,
    deciles,
    five_number_summary,
    normalized_rank,
    percentile,
    percentile_rank,
    quantile,
    quartiles,
    quintiles,
    rank,
    z_scores,
)
from statinsight.descriptive._shape import kurtosis, pearson_skewness, skewness

__all__ = [
    "describe",
    "DescriptiveDesign",
    "DescriptiveParams",
    "DescriptiveSolution",
    "BoxplotStats",
    "FiveNumberSummary",
    "ModeResult",
    # central tendency
    "mean",
    "median",
    "mode",
    "geometric_mean",
    "harmonic_mean",
    "trimmed_mean",
    "weighted_mean",
    "quadratic_mean",
    "midrange",
    # dispersion
    "variance",
    "std",
    "value_range",
    "iqr",
    "coefficient_of_variation",
    "mean_absolute_deviation",
    "median_absolute_deviation",
    "standard_error",
    "quartile_coefficient",
    "percentile_range",
    "gini",
    "robust_scale",
    # position
    "IQR_FENCE",
    "quantile",
    "percentile",
    "quartiles",
    "quintiles",
    "deciles",
    "percentile_rank",
    "z_scores",
    "five_number_summary",
    "boxplot_stats",
    "rank",
    "normalized_rank",
    # shape
    "skewness",
    "kurtosis",
    "pearson_skewness",
]
