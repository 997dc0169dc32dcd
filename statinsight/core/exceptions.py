"""
Exception hierarchy for statinsight.

All exceptions inherit from StatInsightError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information

Degenerate samples (constant data, zero variance) are raised as
DegenerateInputError by the hypothesis tests. Normality tests instead
return a sentinel result whose ``error`` field names the reason.
"""


class StatInsightError(Exception):
    """Base exception for all statinsight errors."""
    pass


class ValidationError(StatInsightError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class StructuralError(ValidationError):
    """
    Dataset shape is invalid.

    Raised for missing header or data arrays, duplicate headers, and
    unknown column names.

    Attributes:
        errors: Every structural problem that was found
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors) if errors else []


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when paired inputs have different lengths or a table has
    the wrong shape.
    """
    pass


class DomainError(ValidationError):
    """
    A numeric argument is outside its mathematical domain.

    Examples: a probability outside (0, 1), a geometric mean of a sample
    with non-positive values, a confidence level of 1.

    Attributes:
        name: Parameter name
        value: The offending value, if scalar
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        value: float | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.value = value


class InsufficientDataError(ValidationError):
    """
    Too few valid observations for the requested computation.

    Attributes:
        required: Minimum number of observations needed
        actual: Number of valid observations supplied
    """

    def __init__(
        self,
        message: str,
        required: int | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.required = required
        self.actual = actual


class NumericalError(StatInsightError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateInputError(NumericalError):
    """
    Input has no variability where the computation needs some.

    Attributes:
        quantity: Name of the vanishing quantity (e.g. 'variance of x')
    """

    def __init__(self, message: str, quantity: str | None = None):
        super().__init__(message)
        self.quantity = quantity


class ZeroStdError(DegenerateInputError):
    """Standard error (or within-group variance) of a test is exactly zero."""
    pass


class ConvergenceError(StatInsightError):
    """
    Iterative algorithm failed to converge.

    Raised when an iterative method (bisection, continued fraction) fails to
    meet convergence criteria within the maximum number of iterations.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final parameter or objective change
        reason: Why convergence failed (e.g., 'max_iterations', 'not_bracketed')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
