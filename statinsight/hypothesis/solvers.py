"""
Solver dispatch for hypothesis tests.

Provides t_test(), z_test(), anova_oneway(), chisq_test() and
mann_whitney(). Every test is two-sided.
"""

from __future__ import annotations

from typing import Literal
from numpy.typing import ArrayLike

from statinsight.core.exceptions import ValidationError
from statinsight.hypothesis._common import DEFAULT_ALPHA, TTestKind
from statinsight.hypothesis.design import HypothesisDesign
from statinsight.hypothesis.solution import HTestSolution
from statinsight.hypothesis.backends.cpu import CPUHypothesisBackend


BackendChoice = Literal['auto', 'cpu']


def _get_backend(backend: str = 'auto'):
    if backend in ('cpu', 'auto'):
        return CPUHypothesisBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'auto' or 'cpu'."
    )


def _solve(design: HypothesisDesign, backend: str) -> HTestSolution:
    result = _get_backend(backend).solve(design)
    return HTestSolution(_result=result, _design=design)


def t_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    test_type: TTestKind | str | None = None,
    mu: float = 0.0,
    var_equal: bool = False,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> HTestSolution:
    """
    Student's t-test.

    Parameters
    ----------
    x : array-like or HypothesisDesign
        Sample data. Missing and non-numeric cells are ignored.
    y : array-like or None
        Second sample for the two-sample and paired tests.
    test_type : {'one-sample', 'two-sample', 'paired'} or None
        Defaults to one-sample when y is None and two-sample otherwise.
    mu : float
        Hypothesized mean (one-sample), mean difference (paired) or
        difference in means (two-sample). Default 0.
    var_equal : bool
        If True, use the pooled variance with df = n1 + n2 - 2.
        If False (default), use Welch's approximation with
        Welch-Satterthwaite degrees of freedom.
    alpha : float
        Significance level. Also sets the confidence interval level
        (1 - alpha) and the critical value t_{1 - alpha/2, df}.

    Returns
    -------
    HTestSolution

    Raises
    ------
    ZeroStdError
        If the standard error is zero.
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        design = HypothesisDesign.for_t_test(
            x, y,
            test_type=test_type,
            mu=mu,
            var_equal=var_equal,
            alpha=alpha,
        )
    return _solve(design, backend)


def z_test(
    x: ArrayLike | HypothesisDesign,
    *,
    mu: float = 0.0,
    population_std: float | None = None,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> HTestSolution:
    """
    One-sample z-test with known population standard deviation.

    Parameters
    ----------
    x : array-like or HypothesisDesign
        Sample data.
    mu : float
        Hypothesized population mean.
    population_std : float
        Known population standard deviation; must be > 0.
    alpha : float
        Significance level.

    Returns
    -------
    HTestSolution
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        if population_std is None:
            raise ValidationError("population_std is required for z_test")
        design = HypothesisDesign.for_z_test(
            x, mu=mu, population_std=population_std, alpha=alpha,
        )
    return _solve(design, backend)


def anova_oneway(
    *groups: ArrayLike,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> HTestSolution:
    """
    One-way analysis of variance.

    Parameters
    ----------
    *groups : array-like
        Two or more samples, each with at least 2 finite values. A single
        HypothesisDesign is also accepted.
    alpha : float
        Significance level.

    Returns
    -------
    HTestSolution
        statistic is F; extras hold the sums of squares, mean squares,
        group means, grand mean and eta squared.
    """
    if len(groups) == 1 and isinstance(groups[0], HypothesisDesign):
        design = groups[0]
    else:
        design = HypothesisDesign.for_anova(groups, alpha=alpha)
    return _solve(design, backend)


def chisq_test(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> HTestSolution:
    """
    Pearson's chi-squared test of independence.

    Parameters
    ----------
    x : array-like or HypothesisDesign
        First categorical column, or a 2D table of counts when y is None.
    y : array-like or None
        Second categorical column, same length as x. Pairs with a missing
        side are skipped; at least 5 pairs must remain.
    alpha : float
        Significance level.

    Returns
    -------
    HTestSolution
        Extras hold observed and expected tables, row and column labels
        (first-seen order) and Cramer's V. A warning is recorded when any
        expected count is below 5.
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        design = HypothesisDesign.for_chisq_test(x, y, alpha=alpha)
    return _solve(design, backend)


def mann_whitney(
    x: ArrayLike | HypothesisDesign,
    y: ArrayLike | None = None,
    *,
    alpha: float = DEFAULT_ALPHA,
    backend: BackendChoice = 'auto',
) -> HTestSolution:
    """
    Mann-Whitney U test (normal approximation, no tie correction).

    Returns
    -------
    HTestSolution
        statistic is U = min(U1, U2); extras hold U1, U2, z and rank sums.
    """
    if isinstance(x, HypothesisDesign):
        design = x
    else:
        if y is None:
            raise ValidationError("y is required for mann_whitney")
        design = HypothesisDesign.for_mann_whitney(x, y, alpha=alpha)
    return _solve(design, backend)
