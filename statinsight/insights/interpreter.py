"""
Plain-language interpretation of test results.

interpret() accepts any solution object with a camelCase to_dict()
(HTestSolution, CorrelationSolution, RegressionSolution,
NormalitySolution) or such a mapping directly, and explains it: test type,
one-line summary, reject / fail-to-reject decision, significance band,
effect size, confidence, assumptions and recommendations.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from statinsight.core.exceptions import ValidationError


DEFAULT_ALPHA = 0.05
LARGE_SAMPLE = 100
SMALL_SAMPLE = 30
NARROW_INTERVAL = 0.2

ASSUMPTIONS: dict[str, tuple[str, ...]] = {
    't-test': (
        "Normality: Data should be approximately normally distributed",
        "Independence: Observations should be independent",
        "Equal variances: Groups should have similar variances (for independent samples)",
    ),
    'anova': (
        "Normality: Residuals should be normally distributed",
        "Homogeneity: Groups should have equal variances",
        "Independence: Observations should be independent",
    ),
    'correlation': (
        "Linearity: Relationship should be linear",
        "Normality: Variables should be approximately normal",
        "Homoscedasticity: Constant variance across range",
    ),
    'regression': (
        "Linearity: Linear relationship between variables",
        "Independence: Residuals should be independent",
        "Homoscedasticity: Constant variance of residuals",
        "Normality: Residuals should be normally distributed",
    ),
}

EXPLANATIONS: dict[str, str] = {
    'correlation': "Correlation measures the linear relationship between two variables, ranging from -1 to +1.",
    'regression': "R² shows how much variance in the outcome is explained by the predictors.",
    't-test': "T-test compares means between groups or against a known value.",
    'anova': "ANOVA tests whether there are differences between multiple group means.",
    'z-test': "Z-test compares a sample mean to a population mean when population variance is known.",
    'normality-test': "Tests whether data follows a normal (bell-curve) distribution.",
    'chi-square': "Chi-square tests whether two categorical variables are independent.",
    'mann-whitney': "Mann-Whitney U compares the ranks of two independent samples without assuming normality.",
}


# === Magnitude scales ===

def correlation_strength(r: float) -> str:
    r = abs(r)
    if r >= 0.9:
        return "Very Strong"
    if r >= 0.7:
        return "Strong"
    if r >= 0.5:
        return "Moderate"
    if r >= 0.3:
        return "Weak"
    return "Very Weak"


def cohen_correlation(r: float) -> str:
    r = abs(r)
    if r >= 0.5:
        return "Large effect"
    if r >= 0.3:
        return "Medium effect"
    if r >= 0.1:
        return "Small effect"
    return "Negligible effect"


def r_squared_magnitude(r2: float) -> str:
    if r2 >= 0.7:
        return "Strong"
    if r2 >= 0.5:
        return "Moderate"
    if r2 >= 0.3:
        return "Weak"
    return "Very Weak"


def cohen_d_magnitude(d: float) -> str:
    if d >= 0.8:
        return "Large"
    if d >= 0.5:
        return "Medium"
    if d >= 0.2:
        return "Small"
    return "Negligible"


def eta_squared_magnitude(eta2: float) -> str:
    if eta2 >= 0.14:
        return "Large"
    if eta2 >= 0.06:
        return "Medium"
    if eta2 >= 0.01:
        return "Small"
    return "Negligible"


# === Records ===

@dataclass(frozen=True)
class Conclusion:
    decision: str
    statement: str
    alpha: float | None = None
    p_value: float | None = None
    confidence_level: int | None = None

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {'decision': self.decision, 'statement': self.statement}
        if self.p_value is not None:
            record.update({
                'alpha': self.alpha,
                'pValue': self.p_value,
                'confidenceLevel': self.confidence_level,
            })
        return record


@dataclass(frozen=True)
class Significance:
    level: str
    interpretation: str
    p_value: float | None = None

    @property
    def is_significant(self) -> bool:
        return self.p_value is not None and self.p_value < DEFAULT_ALPHA

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {'level': self.level, 'interpretation': self.interpretation}
        if self.p_value is not None:
            record['pValue'] = self.p_value
            record['isSignificant'] = self.is_significant
        return record


@dataclass(frozen=True)
class EffectSize:
    interpretation: str
    value: float | None = None
    magnitude: str | None = None
    variance_explained: str | None = None
    cohen: str | None = None
    mean_difference: float | None = None

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {'interpretation': self.interpretation}
        for key, value in (
            ('value', self.value),
            ('magnitude', self.magnitude),
            ('varianceExplained', self.variance_explained),
            ('cohen', self.cohen),
            ('meanDifference', self.mean_difference),
        ):
            if value is not None:
                record[key] = value
        return record


@dataclass(frozen=True)
class ConfidenceAssessment:
    level: str
    factors: tuple[str, ...]

    @property
    def recommendation(self) -> str:
        if self.level == "high":
            return "Results appear robust and reliable"
        if self.level == "medium":
            return "Results are reasonably reliable but verify when possible"
        return "Interpret results with caution - consider additional validation"

    def to_dict(self) -> dict[str, Any]:
        return {
            'level': self.level,
            'factors': list(self.factors),
            'recommendation': self.recommendation,
        }


@dataclass(frozen=True)
class AssumptionCheck:
    test_type: str
    assumptions: tuple[str, ...]
    importance: str = "Violating assumptions may invalidate results"

    def to_dict(self) -> dict[str, Any]:
        return {
            'testType': self.test_type,
            'assumptions': list(self.assumptions),
            'importance': self.importance,
        }


@dataclass(frozen=True)
class Interpretation:
    test_type: str
    summary: str
    conclusion: Conclusion
    significance: Significance
    effect_size: EffectSize
    confidence: ConfidenceAssessment
    assumptions: AssumptionCheck
    recommendations: tuple[str, ...]
    plain_language: str
    record: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            'testType': self.test_type,
            'summary': self.summary,
            'conclusion': self.conclusion.to_dict(),
            'significance': self.significance.to_dict(),
            'effectSize': self.effect_size.to_dict(),
            'confidence': self.confidence.to_dict(),
            'assumptions': self.assumptions.to_dict(),
            'recommendations': list(self.recommendations),
            'plainLanguage': self.plain_language,
        }


# === Record access ===

def _as_record(result: Any) -> Mapping[str, Any]:
    if isinstance(result, Mapping):
        return result
    to_dict = getattr(result, 'to_dict', None)
    if callable(to_dict):
        record = to_dict()
        if isinstance(record, Mapping):
            return record
    raise ValidationError(
        f"Invalid test result object: expected a mapping or a solution with to_dict(), "
        f"got {type(result).__name__}"
    )


def _number(record: Mapping[str, Any], key: str) -> float | None:
    value = record.get(key)
    if value is None or isinstance(value, bool):
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(value) else value


def _p_value(record: Mapping[str, Any]) -> float | None:
    p = _number(record, 'pValue')
    return p if p is not None else _number(record, 'pValueModel')


def _significance_word(p: float | None) -> str:
    return "significant" if p is not None and p < DEFAULT_ALPHA else "not significant"


def _fmt(value: float | None, digits: int) -> str:
    return "N/A" if value is None else f"{value:.{digits}f}"


# === Components ===

def identify_test_type(result: Any) -> str:
    """The explicit 'type' field, else inferred from the fields present."""
    record = _as_record(result)
    if record.get('type'):
        return str(record['type'])
    if 'correlation' in record:
        return 'correlation'
    if 'rSquared' in record:
        return 'regression'
    if 'fStatistic' in record:
        return 'anova'
    if 'tStatistic' in record or 'statistic' in record:
        return 't-test' if 'degreesOfFreedom' in record else 'z-test'
    if 'isNormal' in record:
        return 'normality-test'
    if 'clusters' in record:
        return 'clustering'
    return 'general-test'


def _summary(record: Mapping[str, Any], test_type: str) -> str:
    p = _p_value(record)
    if test_type == 'correlation':
        r = _number(record, 'correlation') or 0.0
        direction = "positive" if r > 0 else "negative"
        return (
            f"{correlation_strength(r)} {direction} correlation (r = {r:.3f}) "
            f"that is {_significance_word(_number(record, 'pValue'))}"
        )
    if test_type == 'regression':
        r2 = _number(record, 'rSquared') or 0.0
        return (
            f"{_significance_word(_number(record, 'pValueModel'))} regression model explaining "
            f"{r2 * 100:.1f}% of variance (R² = {r2:.3f})"
        )
    if test_type == 't-test':
        t = _number(record, 'statistic')
        if t is None:
            t = _number(record, 'tStatistic')
        return (
            f"{_significance_word(p)} difference between groups "
            f"(t = {_fmt(t, 3)}, p = {_fmt(p, 4)})"
        )
    if test_type == 'z-test':
        z = _number(record, 'statistic')
        if z is None:
            z = _number(record, 'zStatistic')
        return (
            f"{_significance_word(p)} result compared to population "
            f"(z = {_fmt(z, 3)}, p = {_fmt(p, 4)})"
        )
    if test_type == 'anova':
        p_model = _number(record, 'pValueModel')
        return (
            f"{_significance_word(p_model)} differences between groups "
            f"(F = {_fmt(_number(record, 'fStatistic'), 3)}, p = {_fmt(p_model, 4)})"
        )
    if test_type == 'normality-test':
        conclusion = "normally distributed" if record.get('isNormal') else "not normally distributed"
        test_name = record.get('test') or "normality test"
        return f"Data appears {conclusion} ({test_name}, p = {_fmt(_number(record, 'pValue'), 4)})"
    if p is not None:
        return f"{_significance_word(p)} statistical result (p = {p:.4f})"
    return "Statistical analysis completed"


def _conclusion(record: Mapping[str, Any]) -> Conclusion:
    alpha = _number(record, 'alpha') or DEFAULT_ALPHA
    p = _p_value(record)
    if p is None:
        return Conclusion(
            decision="inconclusive",
            statement="Cannot determine statistical significance - p-value unavailable",
        )
    reject = p < alpha
    level = round((1.0 - alpha) * 100)
    if reject:
        statement = (
            f"At the {level}% confidence level, we reject the null hypothesis "
            f"(p = {p:.4f} < {alpha:g})."
        )
    else:
        statement = (
            f"At the {level}% confidence level, we fail to reject the null hypothesis "
            f"(p = {p:.4f} ≥ {alpha:g})."
        )
    return Conclusion(
        decision="reject_null" if reject else "fail_to_reject_null",
        statement=statement,
        alpha=alpha,
        p_value=p,
        confidence_level=level,
    )


def _significance(record: Mapping[str, Any]) -> Significance:
    p = _p_value(record)
    if p is None:
        return Significance(level="unknown", interpretation="P-value not available")
    if p < 0.001:
        level, text = "very_strong", "Very strong evidence against null hypothesis"
    elif p < 0.01:
        level, text = "strong", "Strong evidence against null hypothesis"
    elif p < 0.05:
        level, text = "moderate", "Moderate evidence against null hypothesis"
    elif p < 0.1:
        level, text = "weak", "Weak evidence against null hypothesis"
    else:
        level, text = "none", "No evidence against null hypothesis"
    return Significance(level=level, interpretation=text, p_value=p)


def _effect_size(record: Mapping[str, Any], test_type: str) -> EffectSize:
    insufficient = EffectSize("Effect size cannot be calculated - insufficient data")

    if test_type == 'correlation':
        r = abs(_number(record, 'correlation') or 0.0)
        strength = correlation_strength(r)
        return EffectSize(
            interpretation=f"{strength.lower()} relationship",
            value=r,
            magnitude=strength,
            variance_explained=f"{r * r * 100:.1f}%",
            cohen=cohen_correlation(r),
        )

    if test_type == 'regression':
        r2 = _number(record, 'rSquared')
        if r2 is None:
            return insufficient
        magnitude = r_squared_magnitude(r2)
        return EffectSize(
            interpretation=f"{magnitude.lower()} explanatory power",
            value=r2,
            magnitude=magnitude,
            variance_explained=f"{r2 * 100:.1f}%",
        )

    if test_type == 't-test':
        m1 = _number(record, 'sample1Mean')
        m2 = _number(record, 'sample2Mean')
        se = _number(record, 'standardError')
        if m1 is None or m2 is None or not se:
            return insufficient
        diff = abs(m1 - m2)
        d = diff / (se * math.sqrt(2.0))
        magnitude = cohen_d_magnitude(d)
        return EffectSize(
            interpretation=f"{magnitude.lower()} effect size",
            value=d,
            magnitude=magnitude,
            mean_difference=diff,
        )

    if test_type == 'anova':
        ssb = _number(record, 'sumOfSquaresBetween')
        ssw = _number(record, 'sumOfSquaresWithin')
        if not ssb or not ssw:
            return insufficient
        eta2 = ssb / (ssb + ssw)
        magnitude = eta_squared_magnitude(eta2)
        return EffectSize(
            interpretation=f"{magnitude.lower()} effect size",
            value=eta2,
            magnitude=magnitude,
            variance_explained=f"{eta2 * 100:.1f}%",
        )

    return EffectSize("Effect size not available for this test type")


def _confidence(record: Mapping[str, Any]) -> ConfidenceAssessment:
    factors: list[str] = []
    level = "medium"

    n = _number(record, 'sampleSize')
    if n:
        if n > LARGE_SAMPLE:
            factors.append("Large sample size increases reliability")
            level = "high"
        elif n < SMALL_SAMPLE:
            factors.append("Small sample size may limit reliability")
            level = "low"

    p = _p_value(record)
    if p is not None:
        if p < 0.001:
            factors.append("Very low p-value strengthens confidence")
            level = "medium" if level == "low" else "high"
        elif p > 0.1:
            factors.append("High p-value suggests weak evidence")
            level = "low"

    ci = record.get('confidenceInterval')
    if isinstance(ci, Mapping) and 'lower' in ci and 'upper' in ci:
        lower, upper = float(ci['lower']), float(ci['upper'])
        width = abs(upper - lower)
        mid = abs((upper + lower) / 2.0)
        if mid > 0 and width / mid < NARROW_INTERVAL:
            factors.append("Narrow confidence interval indicates precision")
        else:
            factors.append("Wide confidence interval indicates uncertainty")
            level = "medium" if level == "high" else "low"

    return ConfidenceAssessment(level=level, factors=tuple(factors))


def _assumptions(test_type: str) -> AssumptionCheck:
    return AssumptionCheck(
        test_type=test_type,
        assumptions=ASSUMPTIONS.get(
            test_type, ("Check test-specific assumptions in documentation",)
        ),
    )


def _recommendations(record: Mapping[str, Any], test_type: str) -> tuple[str, ...]:
    out: list[str] = []
    p = _p_value(record)
    if p is not None:
        if p < 0.001:
            out.append("Very strong result - investigate practical significance and effect size")
        elif 0.05 <= p < 0.1:
            out.append("Marginally significant - consider collecting more data or using different approach")
        elif p >= 0.1:
            out.append("No significant effect found - examine data quality and consider alternative hypotheses")

    n = _number(record, 'sampleSize')
    if test_type == 'correlation' and n and n < SMALL_SAMPLE:
        out.append("Small sample size - correlation may not be reliable")

    r2 = _number(record, 'rSquared')
    if test_type == 'regression' and r2 is not None and r2 < 0.3:
        out.append("Low R² - consider additional predictors or different model")

    assumptions = record.get('assumptions')
    if isinstance(assumptions, Mapping) and assumptions.get('violated'):
        out.append("Assumptions may be violated - consider alternative tests or data transformations")

    out.append("Replicate findings with independent data when possible")
    return tuple(out)


def _plain_language(record: Mapping[str, Any], test_type: str) -> str:
    p = _p_value(record)
    significant = p is not None and p < DEFAULT_ALPHA
    text = "✓ SIGNIFICANT RESULT: " if significant else "✗ NOT SIGNIFICANT: "

    if test_type == 'correlation':
        r = _number(record, 'correlation') or 0.0
        if significant:
            direction = "positive" if r > 0 else "negative"
            text += (
                f"Found a {correlation_strength(r).lower()} {direction} "
                f"relationship between the variables."
            )
        else:
            text += "No meaningful relationship found between the variables."
    elif test_type == 'regression':
        if significant:
            r2 = _number(record, 'rSquared') or 0.0
            text += (
                f"The model successfully predicts the outcome, explaining "
                f"{r2 * 100:.0f}% of the variation."
            )
        else:
            text += "The model does not provide meaningful predictions."
    elif test_type == 't-test':
        text += (
            "Found a meaningful difference between the groups." if significant
            else "No meaningful difference found between the groups."
        )
    elif test_type == 'anova':
        text += (
            "Found meaningful differences between at least some groups." if significant
            else "No meaningful differences found between groups."
        )
    elif test_type == 'normality-test':
        text += (
            "Data follows a normal distribution - suitable for standard statistical tests."
            if record.get('isNormal')
            else "Data does not follow a normal distribution - consider alternative tests."
        )
    else:
        text += (
            "The statistical test shows a significant result." if significant
            else "The statistical test shows no significant result."
        )

    if p is not None:
        text += f" (p-value: {p:.4f})"
    return text


# === Public API ===

def interpret(result: Any) -> Interpretation:
    """
    Interpret a test result.

    Args:
        result: A solution object with to_dict(), or its camelCase mapping

    Returns:
        Interpretation

    Raises:
        ValidationError: If result is neither a mapping nor a solution
    """
    record = _as_record(result)
    test_type = identify_test_type(record)
    return Interpretation(
        test_type=test_type,
        summary=_summary(record, test_type),
        conclusion=_conclusion(record),
        significance=_significance(record),
        effect_size=_effect_size(record, test_type),
        confidence=_confidence(record),
        assumptions=_assumptions(test_type),
        recommendations=_recommendations(record, test_type),
        plain_language=_plain_language(record, test_type),
        record=record,
    )


def format_for_report(interpretation: Interpretation) -> dict[str, Any]:
    """Flatten an Interpretation into report fields."""
    return {
        'title': f"{interpretation.test_type.upper()} Results",
        'summary': interpretation.summary,
        'conclusion': interpretation.conclusion.statement,
        'significance': interpretation.significance.interpretation,
        'effect': interpretation.effect_size.interpretation,
        'confidence': interpretation.confidence.level,
        'recommendations': list(interpretation.recommendations),
        'plainLanguage': interpretation.plain_language,
    }


def explain_statistic(test_type: str) -> str:
    """One-sentence explanation of what a test type measures."""
    return EXPLANATIONS.get(test_type, "Statistical test to evaluate hypotheses about data.")


def action_items(interpretation: Interpretation) -> list[str]:
    """Next steps, depending on significance and test type."""
    actions: list[str] = []
    if interpretation.significance.is_significant:
        actions.append("Examine practical significance of the finding")
        actions.append("Consider replicating with independent data")
        if interpretation.test_type == 'correlation':
            actions.append("Explore potential causal relationships")
        if interpretation.test_type == 'regression':
            actions.append("Validate model with new data")
    else:
        actions.append("Review data collection methods")
        actions.append("Consider if sample size was adequate")
        actions.append("Explore alternative analytical approaches")
    actions.append("Document methodology and assumptions")
    return actions
