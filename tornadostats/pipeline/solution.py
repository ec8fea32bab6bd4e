"""
User-facing report for the era-significance pipeline.

EraReport wraps Result[PipelineParams]. to_dict() flattens everything into
plain dicts/lists/numbers so a renderer never depends on these types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np

from tornadostats.core.result import Result

if TYPE_CHECKING:
    from tornadostats.anova.solution import AnovaSolution, LeveneSolution, PostHocSolution
    from tornadostats.eras.design import EraScheme
    from tornadostats.pipeline._common import EraCutoff, EraSummary, PipelineParams
    from tornadostats.pipeline.config import PipelineConfig


@dataclass
class EraReport:
    """
    Combined era-significance report.

    Produced by run_era_pipeline().
    """
    _result: Result['PipelineParams']

    @property
    def omnibus(self) -> AnovaSolution:
        return self._result.params.omnibus

    @property
    def posthoc(self) -> PostHocSolution | None:
        """Tukey comparisons; None when the omnibus null was not rejected."""
        return self._result.params.posthoc

    @property
    def levene(self) -> LeveneSolution:
        return self._result.params.levene

    @property
    def cutoff(self) -> EraCutoff:
        return self._result.params.cutoff

    @property
    def era_summaries(self) -> tuple[EraSummary, ...]:
        return self._result.params.era_summaries

    @property
    def yearly_counts(self) -> dict[tuple[int, str], int]:
        return self._result.params.yearly_counts

    @property
    def era_counts(self) -> dict[str, Any]:
        return self._result.params.era_counts

    @property
    def scheme(self) -> EraScheme:
        return self._result.params.scheme

    @property
    def config(self) -> PipelineConfig:
        return self._result.params.config

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def stages(self) -> tuple[str, ...]:
        return self._result.info['stages']

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Human-readable report: era table, ANOVA, Tukey, cutoff."""
        lines = [
            "Era Significance Report",
            "=" * 72,
            f"Events: {self.n_observations}    Eras: {', '.join(self.scheme.labels)}",
            "",
            f"{'Era':<8} {'Years':<12} {'n':>4} {'Total':>8} {'Mean':>10} {'SD':>10} {'Min':>8} {'Max':>8}",
            "-" * 72,
        ]
        for s in self.era_summaries:
            span = f"{s.first_observed_year}-{s.last_observed_year}"
            lines.append(
                f"{s.label:<8} {span:<12} {s.n_years:>4} {s.total_events:>8} "
                f"{s.mean:>10.2f} {s.sd:>10.2f} {s.min:>8.0f} {s.max:>8.0f}"
            )
        lines.append("")
        lines.append(self.omnibus.summary())
        lines.append("")
        lines.append(self.levene.summary())
        if self.posthoc is not None:
            lines.append("")
            lines.append(self.posthoc.summary())

        c = self.cutoff
        lines.append("")
        lines.append(f"Recommended cutoff: include data from {c.cutoff_year} ({c.first_era})")
        if c.excluded_eras:
            lines.append(f"  Excluded eras: {', '.join(c.excluded_eras)}")
        if c.borderline_pairs:
            pairs = ", ".join(f"{a}-{b}" for a, b in c.borderline_pairs)
            lines.append(f"  Borderline comparisons: {pairs}")
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  - {w}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain nested data for serialization."""
        c = self.cutoff
        return {
            'config': self.config.to_dict(),
            'n_observations': self.n_observations,
            'eras': [_summary_to_dict(s) for s in self.era_summaries],
            'yearly_counts': [
                {'year': year, 'era': era, 'count': count}
                for (year, era), count in sorted(self.yearly_counts.items())
            ],
            'omnibus': self.omnibus.to_dict(),
            'levene': self.levene.to_dict(),
            'posthoc': None if self.posthoc is None else self.posthoc.to_dict(),
            'cutoff': {
                'cutoff_year': c.cutoff_year,
                'first_era': c.first_era,
                'excluded_eras': list(c.excluded_eras),
                'distinguishable_pairs': [list(p) for p in c.distinguishable_pairs],
                'adjacent_breaks': [list(p) for p in c.adjacent_breaks],
                'borderline_pairs': [list(p) for p in c.borderline_pairs],
                'basis': c.basis,
            },
            'stages': list(self.stages),
            'warnings': list(self.warnings),
        }

    def __repr__(self) -> str:
        return (
            f"EraReport(n={self.n_observations}, eras={list(self.scheme.labels)}, "
            f"p={self.omnibus.p_value:.4e}, cutoff={self.cutoff.cutoff_year})"
        )


def _summary_to_dict(s: EraSummary) -> dict[str, Any]:
    return {
        'label': s.label,
        'start_year': s.start_year,
        'end_year': s.end_year,
        'first_observed_year': s.first_observed_year,
        'last_observed_year': s.last_observed_year,
        'n_years': s.n_years,
        'total_events': s.total_events,
        'mean': s.mean,
        'sd': None if np.isnan(s.sd) else s.sd,
        'min': s.min,
        'median': s.median,
        'max': s.max,
    }
