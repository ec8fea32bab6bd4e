"""
Era classification and yearly aggregation.

Public API:
    EraScheme.from_boundaries(boundaries, ...) -> EraScheme
    classify_year(year, scheme) -> str
    classify_years(years, scheme) -> NDArray[str]
    aggregate_counts(observations) -> dict[(year, era), int]
    merge_counts(*count_maps) -> dict[(year, era), int]
    counts_by_era(counts, scheme) -> dict[str, EraCounts]
"""

from tornadostats.eras._common import (
    DEFAULT_ERA_BOUNDARIES,
    EraCounts,
    EraRule,
    Observation,
)
from tornadostats.eras.design import EraScheme
from tornadostats.eras.solvers import (
    aggregate_counts,
    classify_year,
    classify_years,
    counts_by_era,
    merge_counts,
)

__all__ = [
    "DEFAULT_ERA_BOUNDARIES",
    "EraCounts",
    "EraRule",
    "EraScheme",
    "Observation",
    "aggregate_counts",
    "classify_year",
    "classify_years",
    "counts_by_era",
    "merge_counts",
]
