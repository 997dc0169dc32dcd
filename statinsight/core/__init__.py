"""
Core infrastructure for statinsight.

This module provides shared abstractions and utilities used by all
domain-specific submodules (descriptive, normality, hypothesis, etc.).

Key components:
    protocols: DataSource, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    dataset: In-memory tabular Dataset
    compute: Timing and iteration tolerances
"""

from statinsight.core.protocols import DataSource, Backend
from statinsight.core.result import Result
from statinsight.core.dataset import Dataset, CellKind, cell_kind
from statinsight.core.exceptions import (
    StatInsightError,
    ValidationError,
    StructuralError,
    DimensionError,
    DomainError,
    InsufficientDataError,
    NumericalError,
    DegenerateInputError,
    ZeroStdError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "DataSource",
    "Backend",
    # Result
    "Result",
    # Data
    "Dataset",
    "CellKind",
    "cell_kind",
    # Exceptions
    "StatInsightError",
    "ValidationError",
    "StructuralError",
    "DimensionError",
    "DomainError",
    "InsufficientDataError",
    "NumericalError",
    "DegenerateInputError",
    "ZeroStdError",
    "ConvergenceError",
]
