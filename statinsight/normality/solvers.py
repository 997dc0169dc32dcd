"""
Solver dispatch for normality tests.

One function per test plus normality_tests(), the batch runner.
"""

from __future__ import annotations

from numpy.typing import ArrayLike

from statinsight.core.exceptions import StatInsightError
from statinsight.core.result import Result
from statinsight.core.validation import check_alpha, is_numeric
from statinsight.normality._common import BATCH_TESTS, DEFAULT_ALPHA, NormalityParams
from statinsight.normality.design import NormalityDesign
from statinsight.normality.solution import NormalityBatch, NormalitySolution
from statinsight.normality.backends.cpu import CPUNormalityBackend


def _run(test_type: str, x: ArrayLike | NormalityDesign, alpha: float) -> NormalitySolution:
    if isinstance(x, NormalityDesign):
        design = x
    else:
        design = NormalityDesign.for_test(test_type, x, alpha=alpha)
    result = CPUNormalityBackend().solve(design)
    return NormalitySolution(_result=result, _design=design)


def shapiro_wilk(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalitySolution:
    """
    Shapiro-Wilk test. Requires 3 <= n <= 5000.

    Parameters
    ----------
    x : array-like
        Sample. Missing and non-numeric cells are ignored.
    alpha : float
        Significance level; is_normal = p_value > alpha.

    Returns
    -------
    NormalitySolution
    """
    return _run("shapiro_wilk", x, alpha)


def jarque_bera(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalitySolution:
    """Jarque-Bera test. Requires n >= 4."""
    return _run("jarque_bera", x, alpha)


def kolmogorov_smirnov(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalitySolution:
    """
    Kolmogorov-Smirnov test against a normal with the sample mean and
    standard deviation. Requires n >= 5.

    The asymptotic Kolmogorov p-value ignores that the parameters were
    estimated, so the test is conservative; lilliefors() corrects for this.
    """
    return _run("kolmogorov_smirnov", x, alpha)


def anderson_darling(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalitySolution:
    """Anderson-Darling test. Requires n >= 8."""
    return _run("anderson_darling", x, alpha)


def lilliefors(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalitySolution:
    """Lilliefors test with a banded p-value (0.01, 0.05, 0.20). Requires 4 <= n <= 1000."""
    return _run("lilliefors", x, alpha)


def dagostino(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalitySolution:
    """D'Agostino-Pearson K^2 omnibus test. Requires n >= 20."""
    return _run("dagostino", x, alpha)


def _failed(test_type: str, error: StatInsightError, alpha: float, n: int) -> NormalitySolution:
    params = NormalityParams.degenerate(test_type, alpha=alpha, n=n, reason=str(error))
    result = Result(
        params=params,
        info={'test_type': test_type, 'n': n, 'exception': type(error).__name__},
        timing=None,
        backend_name=CPUNormalityBackend().name,
    )
    return NormalitySolution(_result=result, _design=None)


def normality_tests(x: ArrayLike, *, alpha: float = DEFAULT_ALPHA) -> NormalityBatch:
    """
    Run Shapiro-Wilk, Jarque-Bera, Anderson-Darling, Kolmogorov-Smirnov and,
    when n >= 20, D'Agostino K^2 on the same sample.

    A test that raises (sample too small or too large) is kept with its
    error message and excluded from the consensus.

    Returns
    -------
    NormalityBatch
    """
    alpha = check_alpha(alpha)
    cells = list(x)
    n = sum(1 for v in cells if is_numeric(v))

    runners = {
        "shapiro_wilk": shapiro_wilk,
        "jarque_bera": jarque_bera,
        "anderson_darling": anderson_darling,
        "kolmogorov_smirnov": kolmogorov_smirnov,
        "dagostino": dagostino,
    }

    tests: dict[str, NormalitySolution] = {}
    for test_type in BATCH_TESTS:
        if test_type == "dagostino" and n < 20:
            continue
        try:
            tests[test_type] = runners[test_type](cells, alpha=alpha)
        except StatInsightError as e:
            tests[test_type] = _failed(test_type, e, alpha, n)

    return NormalityBatch(tests=tests, alpha=alpha)
