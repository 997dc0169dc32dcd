"""
Shared compute infrastructure for statinsight.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Stopping rules for iterative kernels
"""

from statinsight.core.compute.timing import Timer
from statinsight.core.compute.tolerances import ToleranceTier

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "ToleranceTier",
]
