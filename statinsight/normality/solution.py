"""
Normality test solution types.

NormalitySolution wraps Result[NormalityParams]; NormalityBatch collects the
solutions of the batch runner and derives the consensus.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

from statinsight.core.result import Result
from statinsight.normality._common import NormalityParams

if TYPE_CHECKING:
    from statinsight.normality.design import NormalityDesign


@dataclass
class NormalitySolution:
    """
    User-facing normality test result.

    A degenerate sample, or a test that could not run inside the batch
    runner, has NaN statistic and p-value and a non-empty `error`.
    """
    _result: Result[NormalityParams]
    _design: 'NormalityDesign | None'

    @property
    def test_type(self) -> str:
        return self._result.params.test_type

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def statistic(self) -> float:
        return self._result.params.statistic

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def is_normal(self) -> bool:
        """p_value > alpha."""
        return self._result.params.is_normal

    @property
    def significant(self) -> bool:
        """Normality rejected: p_value < alpha."""
        p = self._result.params
        return p.error is None and p.p_value < p.alpha

    @property
    def n(self) -> int:
        return self._result.params.n

    @property
    def error(self) -> str | None:
        return self._result.params.error

    @property
    def is_valid(self) -> bool:
        """The test produced a statistic."""
        return self._result.params.error is None

    @property
    def extras(self) -> dict[str, Any] | None:
        return self._result.params.extras

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    # --- Formatting ---

    @property
    def interpretation(self) -> str:
        p = self._result.params
        if p.error is not None:
            return f"{p.method} test could not be computed: {p.error}"
        if p.is_normal:
            return (
                f"{p.method} test: Fail to reject null hypothesis "
                f"(p-value = {p.p_value:.4f} > alpha = {p.alpha}). "
                "Data appears to be normally distributed."
            )
        return (
            f"{p.method} test: Reject null hypothesis "
            f"(p-value = {p.p_value:.4f} <= alpha = {p.alpha}). "
            "Data appears to be non-normally distributed."
        )

    def to_dict(self) -> dict[str, Any]:
        """camelCase record, as consumed by the interpreter."""
        p = self._result.params
        record: dict[str, Any] = {
            'type': 'normality-test',
            'test': p.test_type,
            'method': p.method,
            'statistic': p.statistic,
            'pValue': p.p_value,
            'isNormal': p.is_normal,
            'alpha': p.alpha,
            'sampleSize': p.n,
        }
        if p.error is not None:
            record['error'] = p.error
        if p.extras:
            record.update(p.extras)
        return record

    def summary(self) -> str:
        p = self._result.params
        lines = [f"\t{p.method} normality test", ""]
        if p.error is not None:
            lines.append(f"error: {p.error}")
        else:
            lines.append(
                f"statistic = {p.statistic:.5g}, p-value = {p.p_value:.4g}, n = {p.n}"
            )
            lines.append(self.interpretation)
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        if p.error is not None:
            return f"NormalitySolution(method={p.method!r}, error={p.error!r})"
        return (
            f"NormalitySolution(method={p.method!r}, statistic={p.statistic:.4g}, "
            f"p_value={p.p_value:.4g}, is_normal={p.is_normal})"
        )


def _recommendation(tests_run: int, tests_passing: int) -> str:
    if tests_run == 0:
        return "Unable to assess normality - insufficient data or all tests failed"
    ratio = tests_passing / tests_run
    if ratio == 1.0:
        return "Strong evidence for normality - all tests indicate normal distribution"
    if ratio >= 0.75:
        return "Good evidence for normality - most tests indicate normal distribution"
    if ratio >= 0.5:
        return "Mixed evidence - consider visual inspection and domain knowledge"
    if ratio > 0:
        return "Evidence against normality - most tests indicate non-normal distribution"
    return "Strong evidence against normality - all tests indicate non-normal distribution"


@dataclass
class NormalityBatch:
    """
    Results of the batch normality runner.

    `tests` maps test_type to its solution in run order. Tests that raised
    keep their error message in the solution's `error` field and do not
    count towards the consensus.
    """
    tests: dict[str, NormalitySolution]
    alpha: float

    @property
    def valid_tests(self) -> tuple[NormalitySolution, ...]:
        return tuple(s for s in self.tests.values() if s.is_valid)

    @property
    def tests_run(self) -> int:
        """Number of tests that produced a statistic."""
        return len(self.valid_tests)

    @property
    def tests_passing(self) -> int:
        """Number of valid tests with is_normal."""
        return sum(1 for s in self.valid_tests if s.is_normal)

    @property
    def consensus_normal(self) -> bool:
        """At least half of the valid tests (rounded up) pass; False when none ran."""
        run = self.tests_run
        return run > 0 and self.tests_passing >= math.ceil(run / 2)

    @property
    def strong_normal_evidence(self) -> bool:
        return self.tests_run > 0 and self.tests_passing == self.tests_run

    @property
    def strong_non_normal_evidence(self) -> bool:
        return self.tests_run > 0 and self.tests_passing == 0

    @property
    def errors(self) -> dict[str, str]:
        return {k: s.error for k, s in self.tests.items() if s.error is not None}

    @property
    def recommendation(self) -> str:
        return _recommendation(self.tests_run, self.tests_passing)

    def __getitem__(self, test_type: str) -> NormalitySolution:
        return self.tests[test_type]

    def __contains__(self, test_type: str) -> bool:
        return test_type in self.tests

    def to_dict(self) -> dict[str, Any]:
        return {
            'individualTests': {k: s.to_dict() for k, s in self.tests.items()},
            'summary': {
                'testsRun': self.tests_run,
                'testsPassingNormality': self.tests_passing,
                'consensusNormal': self.consensus_normal,
                'strongNormalEvidence': self.strong_normal_evidence,
                'strongNonNormalEvidence': self.strong_non_normal_evidence,
            },
            'recommendation': self.recommendation,
        }

    def summary(self) -> str:
        lines = ["Normality tests", ""]
        width = max((len(s.method) for s in self.tests.values()), default=0)
        for s in self.tests.values():
            if s.error is not None:
                lines.append(f"  {s.method.ljust(width)}  error: {s.error}")
            else:
                verdict = "normal" if s.is_normal else "non-normal"
                lines.append(
                    f"  {s.method.ljust(width)}  stat = {s.statistic:10.5g}  "
                    f"p = {s.p_value:8.4g}  {verdict}"
                )
        lines.append("")
        lines.append(f"{self.tests_passing} of {self.tests_run} tests indicate normality")
        lines.append(self.recommendation)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"NormalityBatch(tests_run={self.tests_run}, "
            f"tests_passing={self.tests_passing}, "
            f"consensus_normal={self.consensus_normal})"
        )
