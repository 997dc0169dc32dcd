"""
Core protocols for statinsight.

These define structural interfaces that domain-specific implementations
must satisfy. We use Protocol (structural typing) rather than ABC (nominal
typing) so that designs and backends stay plain frozen dataclasses and
classes.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Type-safe: use generics to preserve type information through solvers
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

# Type variables for generic payloads
P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class DataSource(Protocol):
    """
    Minimal protocol for any data container used in a computation.

    Dataset and every domain design (HypothesisDesign, NormalityDesign,
    RegressionDesign, ...) satisfy it.
    """

    @property
    def n_observations(self) -> int:
        """Number of statistical units (rows, paired observations, etc.)."""
        ...

    @property
    def metadata(self) -> dict[str, Any]:
        """
        Domain-specific metadata.

        Examples:
            Dataset: {'source': 'dataframe', 'source_path': 'data.csv'}
            HypothesisDesign: {'test_type': 't_two_sample', 'n1': 10, 'n2': 12}
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a domain design and produces a Result holding the
    domain's parameter payload. Backends are stateless: everything they
    need is carried by the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{domain}'
        Examples: 'cpu_hypothesis', 'cpu_normality', 'cpu_regression'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the statistical computation.

        Args:
            design: Domain-specific input container

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            DegenerateInputError: If the data has no usable variability
            ValidationError: If design is invalid for this backend
        """
        ...
