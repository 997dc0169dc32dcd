"""
Regression module.

Public API:
    linear_regression(x, y) - simple least squares line with coefficient
                              tests, F test and residual diagnostics
"""

from statinsight.regression.solvers import linear_regression
from statinsight.regression.design import RegressionDesign
from statinsight.regression.solution import RegressionSolution
from statinsight.regression._common import RegressionParams, ResidualAnalysis

__all__ = [
    "linear_regression",
    "RegressionDesign",
    "RegressionSolution",
    "RegressionParams",
    "ResidualAnalysis",
]
