"""
CPU backend for describe().

Validated against numpy/scipy.stats to rtol=1e-10.
"""

from __future__ import annotations

import numpy as np

from statinsight.core.result import Result
from statinsight.core.compute.timing import Timer
from statinsight.descriptive.design import DescriptiveDesign
from statinsight.descriptive.solution import DescriptiveParams
from statinsight.descriptive._position import sorted_quantile
from statinsight.descriptive._shape import kurtosis, skewness


class CPUDescriptiveBackend:
    """CPU backend for single-column descriptive statistics."""

    @property
    def name(self) -> str:
        return 'cpu_descriptive'

    def solve(self, design: DescriptiveDesign) -> Result[DescriptiveParams]:
        """
        Compute the describe() summary of one column.

        Skewness needs n >= 3 and kurtosis n >= 4; below that they are
        None and a warning is recorded.
        """
        timer = Timer()
        timer.start()

        x = design.data
        n = design.n
        warnings_list: list[str] = []

        if design.n_dropped:
            warnings_list.append(
                f"{design.n_dropped} missing or non-numeric cells ignored"
            )

        with timer.section('moments'):
            mean = float(np.mean(x))
            if n >= 2:
                variance = float(np.var(x, ddof=1))
            else:
                variance = float('nan')
                warnings_list.append("standard deviation undefined for n < 2")
            sd = float(np.sqrt(variance))

        with timer.section('quantiles'):
            xs = np.sort(x)
            q1, median, q3 = (
                float(v) for v in sorted_quantile(xs, np.array([0.25, 0.5, 0.75]))
            )

        with timer.section('shape'):
            skew = None
            kurt = None
            if n >= 3:
                skew = skewness(x)
            else:
                warnings_list.append("skewness needs at least 3 values")
            if n >= 4:
                kurt = kurtosis(x)
            else:
                warnings_list.append("kurtosis needs at least 4 values")

        params = DescriptiveParams(
            count=n,
            mean=mean,
            median=median,
            sd=sd,
            variance=variance,
            minimum=float(xs[0]),
            maximum=float(xs[-1]),
            q1=q1,
            q3=q3,
            skewness=skew,
            kurtosis=kurt,
        )

        timer.stop()

        return Result(
            params=params,
            info={'n': n, 'n_dropped': design.n_dropped, 'name': design.name},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
