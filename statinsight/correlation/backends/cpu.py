"""
CPU backend for correlation coefficients.
"""

from __future__ import annotations

from statinsight.core.result import Result
from statinsight.core.compute.timing import Timer
from statinsight.correlation._common import CorrelationParams
from statinsight.correlation.design import CorrelationDesign


class CPUCorrelationBackend:
    """CPU backend for bivariate correlation."""

    @property
    def name(self) -> str:
        return 'cpu_correlation'

    def solve(self, design: CorrelationDesign) -> Result[CorrelationParams]:
        """Dispatch on design.method."""
        timer = Timer()
        timer.start()

        method = design.method

        with timer.section(method):
            if method == "pearson":
                from statinsight.correlation.backends._coefficients import pearson
                params, warnings_list = pearson(design)
            elif method == "spearman":
                from statinsight.correlation.backends._coefficients import spearman
                params, warnings_list = spearman(design)
            elif method == "kendall":
                from statinsight.correlation.backends._coefficients import kendall
                params, warnings_list = kendall(design)
            else:
                raise ValueError(f"Unknown method: {method!r}")

        timer.stop()

        return Result(
            params=params,
            info={'method': method, 'n': design.n},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
