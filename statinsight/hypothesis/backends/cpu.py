"""
CPU backend for hypothesis tests.

Dispatches to test-specific submodules based on design.test_type.
"""

from __future__ import annotations

from statinsight.core.result import Result
from statinsight.core.compute.timing import Timer
from statinsight.hypothesis._common import HTestParams
from statinsight.hypothesis.design import HypothesisDesign


class CPUHypothesisBackend:
    """CPU backend for hypothesis tests."""

    @property
    def name(self) -> str:
        return 'cpu_hypothesis'

    def solve(self, design: HypothesisDesign) -> Result[HTestParams]:
        """Dispatch to test-specific implementation based on design.test_type."""
        timer = Timer()
        timer.start()

        test_type = design.test_type

        with timer.section(test_type):
            if test_type == "one-sample":
                from statinsight.hypothesis.backends._t_test import t_one_sample
                params, warnings_list = t_one_sample(design)
            elif test_type == "two-sample":
                from statinsight.hypothesis.backends._t_test import t_two_sample
                params, warnings_list = t_two_sample(design)
            elif test_type == "paired":
                from statinsight.hypothesis.backends._t_test import t_paired
                params, warnings_list = t_paired(design)
            elif test_type == "z-test":
                from statinsight.hypothesis.backends._t_test import z_test
                params, warnings_list = z_test(design)
            elif test_type == "one-way-anova":
                from statinsight.hypothesis.backends._anova import anova_oneway
                params, warnings_list = anova_oneway(design)
            elif test_type == "chi-square-independence":
                from statinsight.hypothesis.backends._chisq_test import chisq_independence
                params, warnings_list = chisq_independence(design)
            elif test_type == "mann-whitney-u":
                from statinsight.hypothesis.backends._mann_whitney import mann_whitney
                params, warnings_list = mann_whitney(design)
            else:
                raise ValueError(f"Unknown test_type: {test_type!r}")

        timer.stop()

        return Result(
            params=params,
            info={'test_type': test_type},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
