"""
Generic result container for all statinsight computations.

Every test, aggregate summary and model fit is returned inside a Result
envelope. Domains define their own parameter payloads; the envelope
carries what is common to all of them: metadata, timing, the backend
that produced the numbers, and non-fatal warnings.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (test type, sample sizes, diagnostics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True): a result never changes after it is produced
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (statistic, p-value, estimates, ...)
        info: Structured metadata (test type, sample size, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=HTestParams(test_type='chisq_independence', ...),
        ...     info={'test_type': 'chisq_independence'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_hypothesis',
        ...     warnings=('expected frequency below 5 in 2 cells',),
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
