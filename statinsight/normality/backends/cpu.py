"""
CPU backend for normality tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from statinsight.core.result import Result
from statinsight.core.compute.timing import Timer
from statinsight.normality._common import NormalityParams
from statinsight.normality.design import NormalityDesign


class CPUNormalityBackend:
    """CPU backend for normality tests."""

    @property
    def name(self) -> str:
        return 'cpu_normality'

    def solve(self, design: NormalityDesign) -> Result[NormalityParams]:
        """Dispatch to test-specific implementation based on design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "shapiro_wilk":
                from statinsight.normality.backends._shapiro import shapiro_wilk
                params, warnings_list = shapiro_wilk(design)
            elif test_type == "jarque_bera":
                from statinsight.normality.backends._moments import jarque_bera
                params, warnings_list = jarque_bera(design)
            elif test_type == "dagostino":
                from statinsight.normality.backends._moments import dagostino
                params, warnings_list = dagostino(design)
            elif test_type == "kolmogorov_smirnov":
                from statinsight.normality.backends._edf import kolmogorov_smirnov
                params, warnings_list = kolmogorov_smirnov(design)
            elif test_type == "lilliefors":
                from statinsight.normality.backends._edf import lilliefors
                params, warnings_list = lilliefors(design)
            elif test_type == "anderson_darling":
                from statinsight.normality.backends._edf import anderson_darling
                params, warnings_list = anderson_darling(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        return Result(
            params=params,
            info={'test_type': test_type, 'n': design.n},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
