"""
Common data types for the era-significance pipeline.

Frozen payloads that go inside the Result[PipelineParams] envelope.
"""

from dataclasses import dataclass

from tornadostats.anova.solution import AnovaSolution, LeveneSolution, PostHocSolution
from tornadostats.eras._common import EraCounts
from tornadostats.eras.design import EraScheme
from tornadostats.pipeline.config import PipelineConfig

# Stages in execution order. 'tested_pairwise' is skipped when the
# omnibus null is not rejected.
STAGES = (
    'classified',
    'aggregated',
    'tested_omnibus',
    'tested_pairwise',
    'reported',
)


@dataclass(frozen=True)
class EraSummary:
    """Descriptive statistics of the yearly event counts within one era."""
    label: str
    start_year: int
    end_year: int | None          # exclusive; None for an open-ended era
    first_observed_year: int
    last_observed_year: int
    n_years: int
    total_events: int
    mean: float
    sd: float                     # sample sd (ddof=1); nan for a single year
    min: float
    median: float
    max: float


@dataclass(frozen=True)
class EraCutoff:
    """
    Recommended data-inclusion cutoff.

    cutoff_year is the lower bound of the earliest era from which no two
    remaining eras differ significantly.
    """
    cutoff_year: int
    first_era: str
    excluded_eras: tuple[str, ...]
    distinguishable_pairs: tuple[tuple[str, str], ...]
    adjacent_breaks: tuple[tuple[str, str], ...]
    borderline_pairs: tuple[tuple[str, str], ...]
    basis: str                    # 'omnibus' or 'posthoc'


@dataclass(frozen=True)
class PipelineParams:
    """Parameter payload for a full era-significance run."""
    config: PipelineConfig
    scheme: EraScheme
    n_observations: int
    yearly_counts: dict[tuple[int, str], int]
    era_counts: dict[str, EraCounts]
    era_summaries: tuple[EraSummary, ...]
    omnibus: AnovaSolution
    levene: LeveneSolution
    posthoc: PostHocSolution | None
    cutoff: EraCutoff
