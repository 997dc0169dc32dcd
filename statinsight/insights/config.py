"""
Auto-analysis configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from statinsight.core.exceptions import ValidationError
from statinsight.core.validation import check_alpha


MIN_CORRELATION_THRESHOLD = 0.3
REGRESSION_SCREEN_THRESHOLD = 0.5

_CAMEL_NAMES = {
    'minCorrelationThreshold': 'min_correlation_threshold',
    'significanceLevel': 'significance_level',
    'generateVisualizations': 'generate_visualizations',
    'includeAdvancedAnalysis': 'include_advanced_analysis',
}


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Options of auto_analyze().

    Attributes:
        min_correlation_threshold: |r| floor for the strong-correlation list
        significance_level: alpha used by every test in the pipeline
        generate_visualizations: include visualization suggestions
        include_advanced_analysis: run the regression and distribution stages
    """
    min_correlation_threshold: float = MIN_CORRELATION_THRESHOLD
    significance_level: float = 0.05
    generate_visualizations: bool = True
    include_advanced_analysis: bool = True

    def __post_init__(self) -> None:
        t = self.min_correlation_threshold
        if isinstance(t, bool) or not isinstance(t, (int, float)) or not 0.0 <= t <= 1.0:
            raise ValidationError(
                f"min_correlation_threshold: must be in [0, 1], got {t!r}"
            )
        object.__setattr__(self, 'min_correlation_threshold', float(t))
        object.__setattr__(self, 'significance_level', check_alpha(self.significance_level))
        for name in ('generate_visualizations', 'include_advanced_analysis'):
            if not isinstance(getattr(self, name), bool):
                raise ValidationError(
                    f"{name}: must be a bool, got {getattr(self, name)!r}"
                )

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | AnalysisConfig | None = None) -> AnalysisConfig:
        """
        Build from a mapping of snake_case or camelCase option names.

        Raises:
            ValidationError: On an unknown option or an invalid value
        """
        if options is None:
            return cls()
        if isinstance(options, AnalysisConfig):
            return options
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _CAMEL_NAMES.get(key, key)
            if name not in known:
                raise ValidationError(
                    f"Unknown analysis option: {key!r}. "
                    f"Known: {sorted(_CAMEL_NAMES)}"
                )
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {camel: getattr(self, snake) for camel, snake in _CAMEL_NAMES.items()}
