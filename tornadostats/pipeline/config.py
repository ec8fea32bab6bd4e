"""
Pipeline configuration.

PipelineConfig is an immutable bag of options validated once up front.
Overrides produce a new config through dataclasses.replace and are
validated again; nothing derived from a previous config is reused.
"""

from dataclasses import dataclass, fields, replace
from typing import Any

from tornadostats.core.exceptions import ConfigurationError, ValidationError
from tornadostats.core.validation import check_probability
from tornadostats.eras._common import DEFAULT_ERA_BOUNDARIES
from tornadostats.eras.design import EraScheme

VALID_LEVENE_CENTERS = ('median', 'mean')


@dataclass(frozen=True)
class PipelineConfig:
    """
    Options recognized by run_era_pipeline().

    Attributes:
        era_boundaries: Ordered (lower_bound, label) pairs
        end_year: Optional exclusive upper bound on the last era
        significance_threshold: alpha for the omnibus and pairwise decisions
        family_confidence_level: Confidence level of the Tukey intervals
        levene_center: 'median' (Brown-Forsythe) or 'mean'
    """
    era_boundaries: tuple[tuple[int, str], ...] = DEFAULT_ERA_BOUNDARIES
    end_year: int | None = None
    significance_threshold: float = 0.05
    family_confidence_level: float = 0.95
    levene_center: str = 'median'

    @staticmethod
    def create(**options: Any) -> 'PipelineConfig':
        """
        Build and validate a config from keyword options.

        Raises:
            ConfigurationError: unknown option or invalid value
        """
        return PipelineConfig().with_overrides(**options)

    def with_overrides(self, **overrides: Any) -> 'PipelineConfig':
        """Return a validated copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) {unknown}. Available: {sorted(known)}",
                option=unknown[0],
            )
        config = replace(self, **overrides)
        return config.validated()

    def validated(self) -> 'PipelineConfig':
        """
        Validate every field and return a normalized copy.

        era_boundaries is normalized to a tuple of (int, str) pairs.
        """
        scheme = EraScheme.from_boundaries(self.era_boundaries, end_year=self.end_year)

        try:
            alpha = check_probability(self.significance_threshold, "significance_threshold")
        except ValidationError as e:
            raise ConfigurationError(str(e), option='significance_threshold') from e
        try:
            conf = check_probability(self.family_confidence_level, "family_confidence_level")
        except ValidationError as e:
            raise ConfigurationError(str(e), option='family_confidence_level') from e

        if self.levene_center not in VALID_LEVENE_CENTERS:
            raise ConfigurationError(
                f"levene_center must be one of {VALID_LEVENE_CENTERS}, "
                f"got {self.levene_center!r}",
                option='levene_center',
            )

        return PipelineConfig(
            era_boundaries=tuple((r.lower_bound, r.label) for r in scheme.rules),
            end_year=scheme.end_year,
            significance_threshold=alpha,
            family_confidence_level=conf,
            levene_center=self.levene_center,
        )

    def scheme(self) -> EraScheme:
        """Build the EraScheme for this config."""
        return EraScheme.from_boundaries(self.era_boundaries, end_year=self.end_year)

    def to_dict(self) -> dict[str, Any]:
        return {
            'era_boundaries': [[year, label] for year, label in self.era_boundaries],
            'end_year': self.end_year,
            'significance_threshold': self.significance_threshold,
            'family_confidence_level': self.family_confidence_level,
            'levene_center': self.levene_center,
        }
